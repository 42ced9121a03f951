"""Translation Service — pass-through fallback or a single upstream relay.

Invariants:
    - text is required (non-blank); it is forwarded as received, not trimmed
    - Without a translator the response is {"translations": [{"text": text}]}
    - With a translator the upstream body is returned unchanged
"""

import logging
from typing import Any

from placeboard.core.place_fields import require_text
from placeboard.infrastructure.translation_client import DeepLClient

logger = logging.getLogger(__name__)


def passthrough_response(text: str) -> dict:
    """Upstream-shaped body carrying the original text."""
    return {"translations": [{"text": text}]}


async def translate(
    translator: DeepLClient | None,
    text: str | None,
    target_lang: str | None,
    default_target_lang: str,
) -> Any:
    require_text(text, "text")
    if translator is None:
        logger.debug("No translation key configured; returning text unchanged")
        return passthrough_response(text)
    return await translator.translate(text, target_lang or default_target_lang)
