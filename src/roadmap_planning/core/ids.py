"""Canonical ID and timestamp factories.

All modules import from here instead of calling ``uuid`` / ``datetime``
directly.

ID Categories
-------------
1. Entity IDs: ``<prefix>-<uuid4>`` strings (``roadmap-...``,
   ``timeframe-...``, ``initiative-...``, ``roadmap-item-...``,
   ``roadmap-note-...``).
2. Event / trace IDs: bare UUID v4 strings.

Timestamp Rule
--------------
All timestamps are ``datetime`` with ``tzinfo=timezone.utc``; never naive.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

ROADMAP_PREFIX = "roadmap"
TIMEFRAME_PREFIX = "timeframe"
INITIATIVE_PREFIX = "initiative"
ITEM_PREFIX = "roadmap-item"
NOTE_PREFIX = "roadmap-note"


def new_id() -> str:
    """Generate a new UUID v4 string."""
    return str(uuid.uuid4())


def entity_id(prefix: str) -> str:
    """Generate an entity id such as ``initiative-3f2b...``."""
    return f"{prefix}-{uuid.uuid4()}"


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | datetime | None) -> datetime:
    """Parse a persisted ISO timestamp, defaulting to now when absent.

    Naive values are assumed to be UTC.
    """
    if value is None or value == "":
        return utc_now()
    if isinstance(value, datetime):
        parsed = value
    else:
        # "Z" suffix as written by JavaScript's toISOString()
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    return value.isoformat()
