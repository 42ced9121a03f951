"""PlaceLike ORM — "this client IP has liked this place".

Invariants:
    - At most one row per (place_id, ip): enforced by uq_place_likes_place_ip, not by code
    - Rows are never updated or deleted

Design Decisions:
    - ip is String(45): fits the longest textual IPv6 form
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from placeboard.db.base import Base


class PlaceLike(Base):
    __tablename__ = "place_likes"
    __table_args__ = (
        UniqueConstraint("place_id", "ip", name="uq_place_likes_place_ip"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    place_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("places.id"), nullable=False, index=True,
    )
    ip: Mapped[str] = mapped_column(String(45), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
