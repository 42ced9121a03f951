"""Translation Schemas — request body for /translate.

The response is not modelled: the upstream body is relayed verbatim.
"""

from pydantic import BaseModel


class TranslateRequest(BaseModel):
    text: str | None = None
    target_lang: str | None = None
