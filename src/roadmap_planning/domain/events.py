"""Domain events raised by the roadmap aggregate.

Design invariants
-----------------
1.  Every event is **immutable** (``frozen=True``).
2.  ``event_id`` is a UUID4 generated at creation time.
3.  Every event carries the full id path of the entity it describes
    (``roadmap_id`` and, where applicable, ``timeframe_id``,
    ``initiative_id``, ``item_id``).
4.  ``correlation_id`` is stamped by the commit pipeline: all events
    persisted by the same write share it.
5.  Change events carry both the previous and the new value.

Events are buffered on the :class:`~roadmap_planning.domain.entities.roadmap.Roadmap`
aggregate and dispatched only after the aggregate is saved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from roadmap_planning.core.enums import Category, Priority, Status
from roadmap_planning.core.ids import new_id as _uuid
from roadmap_planning.core.ids import utc_now as _now

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DomainEvent:
    """Immutable base for every roadmap domain event.

    Shared fields
    ~~~~~~~~~~~~~
    event_id        Unique identity (UUID4).
    timestamp       UTC creation time.
    correlation_id  Groups events persisted by the same write.
    roadmap_id      Aggregate the event belongs to.
    """

    event_id: str = field(default_factory=_uuid)
    timestamp: datetime = field(default_factory=_now)
    correlation_id: str = ""
    roadmap_id: str = ""

    @property
    def event_type(self) -> str:
        """Routing name, e.g. ``"RoadmapItemAdded"``."""
        return type(self).__name__


# =========================================================================
# Roadmap level
# =========================================================================

@dataclass(frozen=True)
class RoadmapCreated(DomainEvent):
    title: str = ""
    version: str = ""


@dataclass(frozen=True)
class RoadmapTimeframeAdded(DomainEvent):
    timeframe_id: str = ""
    name: str = ""
    order: int = 0


# =========================================================================
# Initiative level
# =========================================================================

@dataclass(frozen=True)
class RoadmapInitiativeAdded(DomainEvent):
    timeframe_id: str = ""
    initiative_id: str = ""
    title: str = ""
    category: Category = Category.OTHER
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True)
class RoadmapInitiativePriorityChanged(DomainEvent):
    timeframe_id: str = ""
    initiative_id: str = ""
    old_priority: Priority = Priority.MEDIUM
    new_priority: Priority = Priority.MEDIUM


@dataclass(frozen=True)
class RoadmapInitiativeCategoryChanged(DomainEvent):
    timeframe_id: str = ""
    initiative_id: str = ""
    old_category: Category = Category.OTHER
    new_category: Category = Category.OTHER


# =========================================================================
# Item level
# =========================================================================

@dataclass(frozen=True)
class RoadmapItemAdded(DomainEvent):
    timeframe_id: str = ""
    initiative_id: str = ""
    item_id: str = ""
    title: str = ""
    status: Status = Status.PLANNED


@dataclass(frozen=True)
class RoadmapItemStatusChanged(DomainEvent):
    timeframe_id: str = ""
    initiative_id: str = ""
    item_id: str = ""
    old_status: Status = Status.PLANNED
    new_status: Status = Status.PLANNED


#: All roadmap event types in a deterministic order.
ALL_DOMAIN_EVENTS: tuple[type[DomainEvent], ...] = (
    RoadmapCreated,
    RoadmapTimeframeAdded,
    RoadmapInitiativeAdded,
    RoadmapInitiativePriorityChanged,
    RoadmapInitiativeCategoryChanged,
    RoadmapItemAdded,
    RoadmapItemStatusChanged,
)
