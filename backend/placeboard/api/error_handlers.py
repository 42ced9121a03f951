"""Error Handlers — global exception handlers for the place-board API.

Invariants:
    - PlaceBoardError → its http_status with {"error", "code"}
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → 500, never leaks internal details
    - 5xx responses log the chained cause with traceback; 4xx log one line

Design Decisions:
    - Three-layer handler: domain (PlaceBoardError), validation (Pydantic), catch-all (Exception)
    - Handlers are the single place failures are logged
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from placeboard.core.errors import INTERNAL_ERROR_MESSAGE, PlaceBoardError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PlaceBoardError)
    async def placeboard_error_handler(request: Request, exc: PlaceBoardError):
        extra = {"error_code": exc.code, "path": request.url.path}
        if exc.http_status >= 500:
            cause = exc.__cause__ or exc
            logger.error(
                f"{request.method} {request.url.path} failed: {exc.message} ({cause})",
                extra=extra,
                exc_info=(type(cause), cause, cause.__traceback__),
            )
        else:
            logger.info(
                f"{request.method} {request.url.path} rejected: {exc.message}",
                extra=extra,
            )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": INTERNAL_ERROR_MESSAGE,
                "code": "INTERNAL_ERROR",
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": "Invalid request data",
        "code": "VALIDATION_ERROR",
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
