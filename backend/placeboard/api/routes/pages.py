"""Landing Page — serves public/sample.html at the site root."""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from placeboard.api.dependencies import get_context
from placeboard.context import AppContext
from placeboard.core.errors import ResourceNotFoundError

LANDING_PAGE = "sample.html"

router = APIRouter(tags=["pages"])


@router.get("/", include_in_schema=False)
async def landing_page(context: AppContext = Depends(get_context)):
    page = context.settings.public_dir / LANDING_PAGE
    if not page.is_file():
        raise ResourceNotFoundError("Page", LANDING_PAGE)
    return FileResponse(page)
