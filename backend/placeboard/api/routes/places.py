"""Places — listing, creation and once-per-IP likes.

Invariants:
    - GET returns every place newest-first with like_count and tags as a list
    - POST returns only {"success": true}; callers re-list to see the row
    - Like: 400 for a bad id or a repeat like from the same client IP
    - Store failures surface as 500 with a fixed per-endpoint message
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from placeboard.api.dependencies import get_db, request_body
from placeboard.core.errors import DatabaseError, OperationFailedError
from placeboard.core.place_fields import parse_place_id, resolve_client_ip
from placeboard.schemas.place import (
    LikeResponse, PlaceCreate, PlaceResponse, SuccessResponse,
)
from placeboard.services import places as place_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/places", tags=["places"])


@router.get("", response_model=list[PlaceResponse])
async def list_places(db: AsyncSession = Depends(get_db)):
    """List all places, newest first."""
    try:
        return await place_service.list_places(db)
    except DatabaseError as e:
        raise OperationFailedError("Failed to load places") from e


@router.post("", response_model=SuccessResponse)
async def create_place(
    body: PlaceCreate = Depends(request_body(PlaceCreate)),
    db: AsyncSession = Depends(get_db),
):
    """Create a place from a JSON or form body. Title is required; everything else optional."""
    try:
        await place_service.create_place(db, body)
    except DatabaseError as e:
        raise OperationFailedError("Failed to save place") from e
    return SuccessResponse()


@router.post("/{place_id}/like", response_model=LikeResponse)
async def like_place(
    place_id: str, request: Request, db: AsyncSession = Depends(get_db),
):
    """Like a place once per client IP; returns the updated like count."""
    parsed_id = parse_place_id(place_id)
    client_ip = resolve_client_ip(
        request.headers.get("x-forwarded-for"),
        request.client.host if request.client else None,
    )
    try:
        like_count = await place_service.like_place(db, parsed_id, client_ip)
    except DatabaseError as e:
        raise OperationFailedError("Failed to process like") from e
    logger.info(
        f"Place {parsed_id} liked ({like_count} total)",
        extra={"place_id": parsed_id, "client_ip": client_ip},
    )
    return LikeResponse(like_count=like_count)
