"""Place Field Rules — pure normalization of request fields before they reach the store.

Invariants:
    - Stored tags are comma-joined, each trimmed, no empty entries; empty result is None
    - split_tags(join of tags) preserves order of the non-empty trimmed entries
    - Titles and required texts are never blank after strip()
    - Place ids are positive base-10 integers

Design Decisions:
    - Pure functions, no I/O: routes and services call them, tests need no fixtures
    - Commas inside a tag are not escaped; they split on read (stored format is plain CSV)
"""

from typing import Any

from placeboard.core.errors import InvalidPlaceIdError, MissingFieldError

TAG_SEPARATOR = ","
FALLBACK_CLIENT_IP = "0.0.0.0"


def require_text(value: Any, field: str) -> str:
    """Return value stripped, or raise MissingFieldError if absent/blank/non-string."""
    if not isinstance(value, str) or not value.strip():
        raise MissingFieldError(field)
    return value.strip()


def normalize_tags(tags: Any) -> str | None:
    """Collapse a tag list or a delimited string into the stored representation."""
    if isinstance(tags, (list, tuple)):
        cleaned = [str(t).strip() for t in tags if t is not None]
        joined = TAG_SEPARATOR.join(t for t in cleaned if t)
    elif tags is None:
        joined = ""
    else:
        joined = str(tags).strip()
    return joined or None


def split_tags(stored: str | None) -> list[str]:
    """Expand the stored tag string into an ordered list of non-empty labels."""
    if not stored:
        return []
    return [t.strip() for t in stored.split(TAG_SEPARATOR) if t.strip()]


def parse_place_id(raw: str) -> int:
    """Parse a path segment as a positive integer place id."""
    candidate = raw.strip()
    if not candidate.isascii() or not candidate.isdigit():
        raise InvalidPlaceIdError(raw)
    place_id = int(candidate)
    if place_id <= 0:
        raise InvalidPlaceIdError(raw)
    return place_id


def resolve_client_ip(
    forwarded_for: str | None, remote_addr: str | None,
) -> str:
    """Identify the client: first X-Forwarded-For hop, then peer address, then sentinel."""
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    return remote_addr or FALLBACK_CLIENT_IP
