"""Application Context — the explicitly constructed bundle of process-wide collaborators.

Invariants:
    - Exactly one AppContext per running app, stored on app.state.context
    - translator is None when no DeepL key is configured (pass-through mode)
    - aclose() releases the connection pool and the upstream HTTP client

Design Decisions:
    - Context object over module-level singletons: tests build their own
      (in-memory store, tmp upload dir, mock transport) without monkeypatching
"""

from dataclasses import dataclass

from placeboard.config import Settings
from placeboard.infrastructure.database import DatabaseSessionManager
from placeboard.infrastructure.file_store import LocalFileStore
from placeboard.infrastructure.translation_client import DeepLClient


@dataclass
class AppContext:
    settings: Settings
    db: DatabaseSessionManager
    file_store: LocalFileStore
    translator: DeepLClient | None = None

    async def aclose(self) -> None:
        if self.translator is not None:
            await self.translator.aclose()
        await self.db.dispose()


def build_context(settings: Settings) -> AppContext:
    """Wire store, file store and translator from settings."""
    db = DatabaseSessionManager(
        settings.sqlalchemy_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    file_store = LocalFileStore(settings.upload_dir)
    file_store.ensure_root()
    translator = None
    if settings.deepl_api_key:
        translator = DeepLClient(
            settings.deepl_api_key,
            settings.deepl_api_url,
            timeout_seconds=settings.translation_timeout_seconds,
        )
    return AppContext(
        settings=settings, db=db, file_store=file_store, translator=translator,
    )
