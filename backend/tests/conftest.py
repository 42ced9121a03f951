"""Root conftest — shared test configuration."""

import os

# Importing placeboard.main builds a module-level app from the environment;
# keep it pointed at SQLite and away from the real translation upstream.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ["DEEPL_API_KEY"] = ""
