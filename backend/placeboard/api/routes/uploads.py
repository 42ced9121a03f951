"""Image Upload — stores one multipart file and returns its public URL.

Invariants:
    - Field name is "image"; missing field or empty filename → 400
    - Returned image_url is served by the /uploads static mount
    - No type or size validation
"""

from fastapi import APIRouter, Depends, File, UploadFile

from placeboard.api.dependencies import get_file_store
from placeboard.core.errors import (
    FileStorageError, MissingFieldError, OperationFailedError,
)
from placeboard.infrastructure.file_store import LocalFileStore
from placeboard.schemas.upload import UploadResponse

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/upload-image", response_model=UploadResponse)
async def upload_image(
    image: UploadFile | None = File(None),
    file_store: LocalFileStore = Depends(get_file_store),
):
    if image is None or not image.filename:
        raise MissingFieldError("image")
    try:
        stored_name = await file_store.save(image.filename, image)
    except FileStorageError as e:
        raise OperationFailedError("Failed to upload image") from e
    return UploadResponse(image_url=file_store.url_for(stored_name))
