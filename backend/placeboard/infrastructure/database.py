"""Database Session Manager — async connection pool with automatic rollback and error mapping.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool is bounded: pool_size + max_overflow concurrent store operations
    - All SQLAlchemy exceptions mapped to DatabaseError; IntegrityError to
      ConstraintViolationError with a store-agnostic kind

Design Decisions:
    - Manager is owned by AppContext (context.py), not a module singleton
    - store_errors() lets a service map errors around one statement and keep using
      the session; session() is the outer net for anything a service did not guard
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.engine import URL
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from placeboard.core.errors import ConstraintViolationError, DatabaseError

logger = logging.getLogger(__name__)

# SQLSTATE class 23 (PostgreSQL), errno (MySQL), message fragments (SQLite)
_SQLSTATE_KINDS = {
    "23505": "unique",
    "23503": "foreign_key",
    "23502": "not_null",
}
_MYSQL_ERRNO_KINDS = {
    1062: "unique",
    1452: "foreign_key",
    1048: "not_null",
}
_MESSAGE_KINDS = (
    ("unique constraint failed", "unique"),
    ("duplicate", "unique"),
    ("foreign key constraint", "foreign_key"),
    ("not null constraint failed", "not_null"),
)


def classify_integrity_error(error: IntegrityError) -> str:
    """Map a driver-specific integrity failure to unique/foreign_key/not_null/unknown."""
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _SQLSTATE_KINDS:
        return _SQLSTATE_KINDS[sqlstate]
    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int) and args[0] in _MYSQL_ERRNO_KINDS:
        return _MYSQL_ERRNO_KINDS[args[0]]
    message = str(orig).lower()
    for fragment, kind in _MESSAGE_KINDS:
        if fragment in message:
            return kind
    return "unknown"


def map_store_error(error: SQLAlchemyError, operation: str) -> DatabaseError:
    """Translate a SQLAlchemy exception into the core error hierarchy."""
    if isinstance(error, IntegrityError):
        kind = classify_integrity_error(error)
        logger.info(
            f"DB constraint violation ({kind}) during {operation}",
            extra={"operation": operation},
        )
        return ConstraintViolationError(kind, operation)
    if isinstance(error, OperationalError):
        logger.error(f"DB operational error: {error}", extra={"operation": operation})
        return DatabaseError("Connection or operational error", operation)
    if isinstance(error, DBAPIError):
        logger.error(f"DB driver error: {error}", extra={"operation": operation})
        return DatabaseError("Database driver error", operation)
    logger.error(f"SQLAlchemy error: {error}", extra={"operation": operation})
    return DatabaseError("Database operation failed", operation)


@asynccontextmanager
async def store_errors(
    session: AsyncSession, operation: str,
) -> AsyncGenerator[None, None]:
    """Roll back and re-raise SQLAlchemy failures as DatabaseError subclasses."""
    try:
        yield
    except SQLAlchemyError as e:
        await session.rollback()
        raise map_store_error(e, operation) from e


class DatabaseSessionManager:
    """Manages async database sessions with pooling and rollback."""

    def __init__(
        self,
        database_url: str | URL,
        pool_size: int = 10,
        max_overflow: int = 0,
    ):
        engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._bind(engine)

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Wrap an already-configured engine (tests, scripts)."""
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise map_store_error(e, "session") from e
        finally:
            await session.close()

    async def dispose(self) -> None:
        await self.engine.dispose()
