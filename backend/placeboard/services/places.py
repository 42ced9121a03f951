"""Place Service — listing, creation and likes against the relational store.

Invariants:
    - list_places issues one LEFT JOIN + GROUP BY query; like_count = COUNT(DISTINCT ip)
    - create_place stores the normalized title/tags; nothing is echoed back
    - like_place inserts then counts in two statements (no enclosing transaction);
      the returned count is a snapshot, the listing recomputes it
    - Once-per-IP is decided by the store's unique constraint, never by a pre-read

Design Decisions:
    - Errors mapped per statement with store_errors(): the like handler needs the
      ConstraintViolationError kind while the session is still usable
"""

import logging

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from placeboard.core.errors import AlreadyLikedError, ConstraintViolationError
from placeboard.core.place_fields import normalize_tags, require_text, split_tags
from placeboard.infrastructure.database import store_errors
from placeboard.models.place import Place
from placeboard.models.place_like import PlaceLike
from placeboard.schemas.place import PlaceCreate, PlaceResponse

logger = logging.getLogger(__name__)


async def list_places(db: AsyncSession) -> list[PlaceResponse]:
    """All places newest-first, each with its distinct-IP like count."""
    like_count = func.count(distinct(PlaceLike.ip)).label("like_count")
    query = (
        select(Place, like_count)
        .outerjoin(PlaceLike, PlaceLike.place_id == Place.id)
        .group_by(Place.id)
        .order_by(Place.id.desc())
    )
    async with store_errors(db, "list places"):
        rows = (await db.execute(query)).all()

    return [
        PlaceResponse(
            id=place.id,
            title=place.title,
            description=place.description or "",
            lat=place.lat,
            lng=place.lng,
            tags=split_tags(place.tags),
            image_url=place.image_url,
            created_at=place.created_at,
            like_count=count or 0,
        )
        for place, count in rows
    ]


async def create_place(db: AsyncSession, body: PlaceCreate) -> Place:
    """Insert a new place. Raises MissingFieldError for a blank title."""
    place = Place(
        title=require_text(body.title, "title"),
        description=body.description or "",
        lat=body.lat,
        lng=body.lng,
        tags=normalize_tags(body.tags),
        image_url=body.image_url or None,
    )
    db.add(place)
    async with store_errors(db, "insert place"):
        await db.commit()
    logger.info(f"Place {place.id} created", extra={"place_id": place.id})
    return place


async def count_likes(db: AsyncSession, place_id: int) -> int:
    query = select(func.count(distinct(PlaceLike.ip))).where(
        PlaceLike.place_id == place_id,
    )
    async with store_errors(db, "count likes"):
        count = (await db.execute(query)).scalar_one_or_none()
    return count or 0


async def like_place(db: AsyncSession, place_id: int, client_ip: str) -> int:
    """Record one like for (place_id, client_ip) and return the fresh like count.

    Raises AlreadyLikedError when this IP already liked the place. Every other
    store failure, a rejected place reference included, propagates as DatabaseError.
    """
    db.add(PlaceLike(place_id=place_id, ip=client_ip))
    try:
        async with store_errors(db, "insert like"):
            await db.commit()
    except ConstraintViolationError as e:
        if e.kind == "unique":
            raise AlreadyLikedError(place_id, client_ip) from e
        raise

    return await count_likes(db, place_id)
