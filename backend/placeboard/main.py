"""Place Board API — FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PlaceBoardError → {"error", "code"} JSON responses
    - CORS configured from settings (not hardcoded)
    - AppContext built on startup, disposed on shutdown, held on app.state.context

Design Decisions:
    - create_app(settings) factory: tests build apps with their own settings/context
    - Static mounts added AFTER API routes so /api/* and /translate take precedence
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from placeboard import __version__
from placeboard.api.error_handlers import register_error_handlers
from placeboard.api.routes import pages, places, questions, translate, uploads
from placeboard.config import Settings, get_settings
from placeboard.context import build_context
from placeboard.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    if getattr(app.state, "context", None) is None:
        app.state.context = build_context(settings)
    logger.info(
        f"Place Board API started (translation "
        f"{'enabled' if app.state.context.translator else 'pass-through'})",
    )
    yield
    await app.state.context.aclose()
    app.state.context = None
    logger.info("Place Board API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Place Board API", version=__version__, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.context = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(uploads.router)
    app.include_router(places.router)
    app.include_router(questions.router)
    app.include_router(translate.router)
    app.include_router(pages.router)

    register_error_handlers(app)

    # Upload dir is created by build_context() before the first request
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )
    if settings.public_dir.is_dir():
        app.mount(
            "/", StaticFiles(directory=settings.public_dir), name="public",
        )
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    settings = get_settings()
    uvicorn.run(
        "placeboard.main:app", host=settings.host, port=settings.port,
    )
