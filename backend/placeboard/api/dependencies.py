"""FastAPI Dependencies — hand each request the collaborators held by AppContext.

Invariants:
    - Nothing here reads settings or the environment directly; all comes from app.state.context
    - get_db yields one session per request, closed (and rolled back on error) afterwards
    - request_body() accepts JSON and application/x-www-form-urlencoded bodies alike
"""

import json
from typing import Any, AsyncGenerator, Awaitable, Callable, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import FormData

from placeboard.context import AppContext
from placeboard.infrastructure.file_store import LocalFileStore
from placeboard.infrastructure.translation_client import DeepLClient

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_context(request: Request) -> AppContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Application context not initialized")
    return context


async def get_db(
    context: AppContext = Depends(get_context),
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with context.db.session() as session:
        yield session


def get_file_store(context: AppContext = Depends(get_context)) -> LocalFileStore:
    return context.file_store


def get_translator(
    context: AppContext = Depends(get_context),
) -> DeepLClient | None:
    return context.translator


def request_body(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """Dependency factory: read `model` from a JSON or form-encoded body.

    An empty body validates as {}. Form keys that repeat, or end in "[]", become lists.
    Decode and validation failures raise RequestValidationError like FastAPI's own
    body parsing, so the global handler answers 400 VALIDATION_ERROR.
    """
    async def dependency(request: Request) -> ModelT:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(FORM_CONTENT_TYPE):
            data = _form_to_dict(await request.form())
        else:
            data = await _read_json(request)
        try:
            return model.model_validate(data if data is not None else {})
        except ValidationError as e:
            raise RequestValidationError([
                {**error, "loc": ("body", *error["loc"])}
                for error in e.errors(include_url=False)
            ]) from e

    return dependency


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise RequestValidationError([{
            "type": "json_invalid",
            "loc": ("body", e.pos),
            "msg": "JSON decode error",
            "input": {},
            "ctx": {"error": e.msg},
        }]) from e


def _form_to_dict(form: FormData) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key, value in form.multi_items():
        if key.endswith("[]"):
            data.setdefault(key[:-2], []).append(value)
        elif key in data:
            existing = data[key]
            data[key] = (existing if isinstance(existing, list) else [existing]) + [value]
        else:
            data[key] = value
    return data
