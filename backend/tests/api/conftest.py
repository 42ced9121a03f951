"""API test fixtures — in-memory store, tmp upload dir, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app under test gets its AppContext injected directly (lifespan not run)
    - translator fixture is None (pass-through); modules override it to inject a fake upstream

Design Decisions:
    - StaticPool: one shared connection so every session sees the same in-memory DB
    - SQLite does not enforce foreign keys by default; unique constraints are enforced
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import placeboard.models  # noqa: F401
from placeboard.config import Settings
from placeboard.context import AppContext
from placeboard.db.base import Base
from placeboard.infrastructure.database import DatabaseSessionManager
from placeboard.infrastructure.file_store import LocalFileStore
from placeboard.main import create_app


@pytest.fixture
def settings(tmp_path):
    public_dir = tmp_path / "public"
    public_dir.mkdir()
    (public_dir / "sample.html").write_text(
        "<h1>Place Board</h1>", encoding="utf-8",
    )
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        deepl_api_key=None,
        upload_dir=tmp_path / "uploads",
        public_dir=public_dir,
        log_format="text",
    )


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://", poolclass=StaticPool, echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_db(test_engine):
    factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with factory() as session:
        yield session


@pytest.fixture
def translator():
    return None


@pytest.fixture
def context(settings, test_engine, translator):
    file_store = LocalFileStore(settings.upload_dir)
    file_store.ensure_root()
    return AppContext(
        settings=settings,
        db=DatabaseSessionManager.from_engine(test_engine),
        file_store=file_store,
        translator=translator,
    )


@pytest.fixture
async def client(settings, context):
    """FastAPI test client bound to the test AppContext."""
    app = create_app(settings)
    app.state.context = context
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def drop_table(test_engine):
    """Drop one table mid-test to force store failures."""
    async def _drop(table_name: str):
        async with test_engine.begin() as conn:
            await conn.run_sync(
                lambda sync_conn: Base.metadata.tables[table_name].drop(sync_conn),
            )
    return _drop
