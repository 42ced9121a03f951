"""Place Schemas — request/response shapes for /api/places.

Invariants:
    - PlaceCreate accepts tags as a list or a delimited string; normalization
      happens in core/place_fields.py, not here
    - PlaceResponse.tags is always a list, like_count always an int >= 0
    - Blank lat/lng strings are read as "not given"

Design Decisions:
    - title is Optional at the schema level so a missing title yields the fixed
      "title is required" error instead of a generic validation payload
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


class PlaceCreate(BaseModel):
    """Place creation body."""
    title: str | None = None
    description: str | None = None
    tags: list[Any] | str | None = None
    lat: float | None = None
    lng: float | None = None
    image_url: str | None = None

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def blank_coordinate_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PlaceResponse(BaseModel):
    """Listed place with derived like count."""
    id: int
    title: str
    description: str
    lat: float | None = None
    lng: float | None = None
    tags: list[str] = Field(default_factory=list)
    image_url: str | None = None
    created_at: datetime
    like_count: int = Field(0, ge=0)


class SuccessResponse(BaseModel):
    success: bool = True


class LikeResponse(BaseModel):
    success: bool = True
    like_count: int = Field(ge=0)
