"""Upload Schemas — response shape for /api/upload-image."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    success: bool = True
    image_url: str
