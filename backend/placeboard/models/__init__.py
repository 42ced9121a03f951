"""ORM Models — SQLAlchemy declarative models for places, likes and questions.

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from placeboard.models.place import Place  # noqa: F401
from placeboard.models.place_like import PlaceLike  # noqa: F401
from placeboard.models.question import Question  # noqa: F401
