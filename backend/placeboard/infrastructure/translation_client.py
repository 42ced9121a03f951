"""DeepL Translation Client — thin async wrapper over the /v2/translate endpoint.

Invariants:
    - One POST per call, form-encoded text + target_lang, DeepL-Auth-Key header
    - Response body returned verbatim (any JSON shape, any upstream status)
    - Transport failures and non-JSON bodies mapped to TranslationUpstreamError
    - No retries

Design Decisions:
    - Shared httpx.AsyncClient owned by AppContext: connection reuse, closed on shutdown
    - transport injectable so tests can use httpx.MockTransport
"""

import logging
from typing import Any

import httpx

from placeboard.core.errors import TranslationUpstreamError

logger = logging.getLogger(__name__)


class DeepLClient:
    """Relays translation requests to DeepL."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self._client = httpx.AsyncClient(
            headers={"Authorization": f"DeepL-Auth-Key {api_key}"},
            timeout=timeout_seconds,
            transport=transport,
        )

    async def translate(self, text: str, target_lang: str) -> Any:
        """POST text to DeepL and return the decoded JSON body as-is."""
        try:
            response = await self._client.post(
                self.api_url,
                data={"text": text, "target_lang": target_lang},
            )
        except httpx.HTTPError as e:
            raise TranslationUpstreamError(
                f"{type(e).__name__}: {e}",
            ) from e

        if response.is_error:
            logger.warning(
                f"DeepL responded {response.status_code}; relaying body",
                extra={"status_code": response.status_code},
            )
        try:
            return response.json()
        except ValueError as e:
            raise TranslationUpstreamError(
                f"non-JSON body (status {response.status_code})",
            ) from e

    async def aclose(self) -> None:
        await self._client.aclose()
