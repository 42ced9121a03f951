"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - DATABASE_URL, when set, wins over the DB_HOST/DB_USER/... parts

Design Decisions:
    - Store credentials accepted as separate parts (DB_HOST, DB_USER, ...) because
      hosting platforms inject them that way; sqlalchemy URL.create escapes them
    - Empty DEEPL_API_KEY is treated as unset: translation falls back to pass-through
    - UPLOAD_DIR/PUBLIC_DIR default to backend/uploads and backend/public, resolved from
      this file, so the server behaves the same whichever directory it is started from
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

BACKEND_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "placeboard"
    db_password: str = ""
    db_name: str = "placeboard"
    database_url: str | None = None
    database_pool_size: int = 10
    database_max_overflow: int = 0

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v or None

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Translation upstream (DeepL)
    deepl_api_key: str | None = None
    deepl_api_url: str = "https://api-free.deepl.com/v2/translate"
    translation_default_target_lang: str = "JA"
    translation_timeout_seconds: float = 30.0

    @field_validator("deepl_api_key", mode="before")
    @classmethod
    def blank_key_is_unset(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Files (defaults sit beside the package, independent of the working directory)
    upload_dir: Path = BACKEND_DIR / "uploads"
    public_dir: Path = BACKEND_DIR / "public"

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def sqlalchemy_url(self) -> str | URL:
        """Resolved store URL: explicit DATABASE_URL or one built from the parts."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
