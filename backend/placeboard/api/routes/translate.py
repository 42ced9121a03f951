"""Translation Proxy — relays text to DeepL, or echoes it when no key is configured.

Invariants:
    - Body is JSON or form-encoded; missing/blank text → 400
    - Upstream body relayed verbatim with 200; transport failure → 500
"""

from fastapi import APIRouter, Depends

from placeboard.api.dependencies import get_context, request_body
from placeboard.context import AppContext
from placeboard.core.errors import OperationFailedError, TranslationUpstreamError
from placeboard.schemas.translation import TranslateRequest
from placeboard.services import translation as translation_service

router = APIRouter(tags=["translation"])


@router.post("/translate")
async def translate(
    body: TranslateRequest = Depends(request_body(TranslateRequest)),
    context: AppContext = Depends(get_context),
):
    try:
        return await translation_service.translate(
            context.translator,
            body.text,
            body.target_lang,
            context.settings.translation_default_target_lang,
        )
    except TranslationUpstreamError as e:
        raise OperationFailedError("Translation failed") from e
