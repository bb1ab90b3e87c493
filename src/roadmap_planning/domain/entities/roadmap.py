"""Roadmap aggregate root.

The roadmap owns its timeframes, which own their initiatives, which own
their items.  All structural changes go through the methods below, each
of which returns a **new** roadmap: the modified path (timeframe ->
initiative -> item) is rebuilt with fresh id-keyed dicts while untouched
siblings are shared.  The receiver is never modified, except for its
event buffer being drained by :meth:`Roadmap.pull_events`.

Domain events are buffered on the aggregate and carried forward into every
copy, so a chain of mutations accumulates them until the command layer
pulls them after a successful save.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, NamedTuple

from roadmap_planning.core.enums import EntityLevel
from roadmap_planning.core.errors import EntityNotFoundError
from roadmap_planning.core.ids import (
    ROADMAP_PREFIX,
    entity_id,
    format_timestamp,
    parse_timestamp,
    utc_now,
)
from roadmap_planning.domain.events import (
    DomainEvent,
    RoadmapCreated,
    RoadmapInitiativeAdded,
    RoadmapInitiativeCategoryChanged,
    RoadmapInitiativePriorityChanged,
    RoadmapItemAdded,
    RoadmapItemStatusChanged,
    RoadmapTimeframeAdded,
)

from .initiative import RoadmapInitiative
from .item import RoadmapItem
from .timeframe import RoadmapTimeframe


class InitiativeLocation(NamedTuple):
    timeframe_id: str
    initiative: RoadmapInitiative


class ItemLocation(NamedTuple):
    timeframe_id: str
    initiative_id: str
    item: RoadmapItem


@dataclass(frozen=True)
class Roadmap:
    """Product roadmap: strategic initiatives organised by timeframe."""

    id: str
    title: str
    description: str = ""
    version: str = ""
    owner: str = ""
    timeframe_map: dict[str, RoadmapTimeframe] = field(
        default_factory=dict, repr=False
    )
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    _events: list[DomainEvent] = field(
        default_factory=list, repr=False, compare=False
    )

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        title: str,
        description: str = "",
        version: str = "",
        owner: str = "",
        timeframes: Iterable[RoadmapTimeframe] = (),
    ) -> Roadmap:
        now = utc_now()
        roadmap_id = entity_id(ROADMAP_PREFIX)
        return cls(
            id=roadmap_id,
            title=title,
            description=description,
            version=version,
            owner=owner,
            timeframe_map={tf.id: tf for tf in timeframes},
            created_at=now,
            updated_at=now,
            _events=[
                RoadmapCreated(roadmap_id=roadmap_id, title=title, version=version)
            ],
        )

    @classmethod
    def from_persistence(cls, data: dict[str, Any]) -> Roadmap:
        timeframes = (
            RoadmapTimeframe.from_persistence(tf)
            for tf in data.get("timeframes") or ()
        )
        created_at = parse_timestamp(data.get("createdAt"))
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            description=data.get("description") or "",
            version=data.get("version") or "",
            owner=data.get("owner") or "",
            timeframe_map={tf.id: tf for tf in timeframes},
            created_at=created_at,
            updated_at=parse_timestamp(data.get("updatedAt") or created_at),
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    @property
    def domain_events(self) -> list[DomainEvent]:
        """Pending events (copy)."""
        return list(self._events)

    def pull_events(self) -> list[DomainEvent]:
        """Drain and return the pending events."""
        events = list(self._events)
        self._events.clear()
        return events

    def _evolve(self, *new_events: DomainEvent, **changes: Any) -> Roadmap:
        """Copy with *changes*, a fresh ``updated_at`` and appended events."""
        return replace(
            self,
            updated_at=utc_now(),
            _events=[*self._events, *new_events],
            **changes,
        )

    # ------------------------------------------------------------------
    # Root fields
    # ------------------------------------------------------------------

    def update(
        self,
        *,
        title: str | None = None,
        description: str | None = None,
        version: str | None = None,
        owner: str | None = None,
    ) -> Roadmap:
        return self._evolve(
            title=self.title if title is None else title,
            description=self.description if description is None else description,
            version=self.version if version is None else version,
            owner=self.owner if owner is None else owner,
        )

    # ------------------------------------------------------------------
    # Timeframes
    # ------------------------------------------------------------------

    @property
    def timeframes(self) -> list[RoadmapTimeframe]:
        """Timeframes sorted by ``order``; ties keep insertion order."""
        return sorted(self.timeframe_map.values(), key=lambda tf: tf.order)

    def get_timeframe(self, timeframe_id: str) -> RoadmapTimeframe | None:
        return self.timeframe_map.get(timeframe_id)

    def require_timeframe(self, timeframe_id: str) -> RoadmapTimeframe:
        timeframe = self.timeframe_map.get(timeframe_id)
        if timeframe is None:
            raise EntityNotFoundError(EntityLevel.TIMEFRAME, timeframe_id, self.id)
        return timeframe

    def add_timeframe(self, timeframe: RoadmapTimeframe) -> Roadmap:
        """Add *timeframe*; an existing one with the same id is replaced."""
        events: list[DomainEvent] = []
        if timeframe.id not in self.timeframe_map:
            events.append(
                RoadmapTimeframeAdded(
                    roadmap_id=self.id,
                    timeframe_id=timeframe.id,
                    name=timeframe.name,
                    order=timeframe.order,
                )
            )
            for initiative in timeframe.initiatives:
                events.extend(self._initiative_added_events(timeframe.id, initiative))
        return self._evolve(
            *events,
            timeframe_map={**self.timeframe_map, timeframe.id: timeframe},
        )

    def remove_timeframe(self, timeframe_id: str) -> Roadmap:
        self.require_timeframe(timeframe_id)
        timeframes = dict(self.timeframe_map)
        del timeframes[timeframe_id]
        return self._evolve(timeframe_map=timeframes)

    def update_timeframe(
        self,
        timeframe_id: str,
        *,
        name: str | None = None,
        order: int | None = None,
    ) -> Roadmap:
        timeframe = self.require_timeframe(timeframe_id)
        return self._replace_timeframe(timeframe.update(name=name, order=order))

    def _replace_timeframe(
        self, timeframe: RoadmapTimeframe, *events: DomainEvent
    ) -> Roadmap:
        return self._evolve(
            *events,
            timeframe_map={**self.timeframe_map, timeframe.id: timeframe},
        )

    # ------------------------------------------------------------------
    # Initiatives
    # ------------------------------------------------------------------

    def all_initiatives(self) -> list[InitiativeLocation]:
        return [
            InitiativeLocation(tf.id, initiative)
            for tf in self.timeframes
            for initiative in tf.initiatives
        ]

    def locate_initiative(self, initiative_id: str) -> InitiativeLocation | None:
        for tf in self.timeframes:
            initiative = tf.get_initiative(initiative_id)
            if initiative is not None:
                return InitiativeLocation(tf.id, initiative)
        return None

    def add_initiative(
        self, timeframe_id: str, initiative: RoadmapInitiative
    ) -> Roadmap:
        """Add *initiative* to a timeframe; same id replaces (no event)."""
        timeframe = self.require_timeframe(timeframe_id)
        events: list[DomainEvent] = []
        if timeframe.get_initiative(initiative.id) is None:
            events = self._initiative_added_events(timeframe_id, initiative)
        return self._replace_timeframe(timeframe.add_initiative(initiative), *events)

    def update_initiative(
        self,
        timeframe_id: str,
        initiative_id: str,
        **changes: Any,
    ) -> Roadmap:
        """Update initiative fields, raising priority/category change events."""
        timeframe = self.require_timeframe(timeframe_id)
        current = timeframe.require_initiative(initiative_id)
        updated = current.update(**changes)

        events: list[DomainEvent] = []
        if updated.priority is not current.priority:
            events.append(
                RoadmapInitiativePriorityChanged(
                    roadmap_id=self.id,
                    timeframe_id=timeframe_id,
                    initiative_id=initiative_id,
                    old_priority=current.priority,
                    new_priority=updated.priority,
                )
            )
        if updated.category is not current.category:
            events.append(
                RoadmapInitiativeCategoryChanged(
                    roadmap_id=self.id,
                    timeframe_id=timeframe_id,
                    initiative_id=initiative_id,
                    old_category=current.category,
                    new_category=updated.category,
                )
            )
        return self._replace_timeframe(timeframe.add_initiative(updated), *events)

    def remove_initiative(self, timeframe_id: str, initiative_id: str) -> Roadmap:
        timeframe = self.require_timeframe(timeframe_id)
        return self._replace_timeframe(timeframe.remove_initiative(initiative_id))

    def move_initiative(
        self,
        source_timeframe_id: str,
        target_timeframe_id: str,
        initiative_id: str,
    ) -> Roadmap:
        """Move an initiative between timeframes as one structural change.

        All lookups happen before anything is rebuilt, so a missing id
        raises without producing a half-moved copy.
        """
        source = self.require_timeframe(source_timeframe_id)
        target = self.require_timeframe(target_timeframe_id)
        initiative = source.require_initiative(initiative_id)
        if source_timeframe_id == target_timeframe_id:
            return self._evolve()

        return self._evolve(
            timeframe_map={
                **self.timeframe_map,
                source.id: source.remove_initiative(initiative_id),
                target.id: target.add_initiative(initiative),
            }
        )

    def _initiative_added_events(
        self, timeframe_id: str, initiative: RoadmapInitiative
    ) -> list[DomainEvent]:
        events: list[DomainEvent] = [
            RoadmapInitiativeAdded(
                roadmap_id=self.id,
                timeframe_id=timeframe_id,
                initiative_id=initiative.id,
                title=initiative.title,
                category=initiative.category,
                priority=initiative.priority,
            )
        ]
        events.extend(
            self._item_added_event(timeframe_id, initiative.id, item)
            for item in initiative.items
        )
        return events

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def all_items(self) -> list[ItemLocation]:
        return [
            ItemLocation(tf.id, initiative.id, item)
            for tf in self.timeframes
            for initiative in tf.initiatives
            for item in initiative.items
        ]

    def locate_item(self, item_id: str) -> ItemLocation | None:
        for location in self.all_items():
            if location.item.id == item_id:
                return location
        return None

    def _require_initiative(
        self, timeframe_id: str, initiative_id: str
    ) -> tuple[RoadmapTimeframe, RoadmapInitiative]:
        timeframe = self.require_timeframe(timeframe_id)
        return timeframe, timeframe.require_initiative(initiative_id)

    def add_item(
        self, timeframe_id: str, initiative_id: str, item: RoadmapItem
    ) -> Roadmap:
        """Add *item* to an initiative; same id replaces (no event)."""
        timeframe, initiative = self._require_initiative(timeframe_id, initiative_id)
        events: list[DomainEvent] = []
        if initiative.get_item(item.id) is None:
            events.append(self._item_added_event(timeframe_id, initiative_id, item))
        return self._replace_timeframe(
            timeframe.add_initiative(initiative.add_item(item)), *events
        )

    def update_item(
        self,
        timeframe_id: str,
        initiative_id: str,
        item_id: str,
        **changes: Any,
    ) -> Roadmap:
        """Update item fields, raising a status change event if needed."""
        timeframe, initiative = self._require_initiative(timeframe_id, initiative_id)
        current = initiative.require_item(item_id)
        updated = current.update(**changes)

        events: list[DomainEvent] = []
        if updated.status is not current.status:
            events.append(
                RoadmapItemStatusChanged(
                    roadmap_id=self.id,
                    timeframe_id=timeframe_id,
                    initiative_id=initiative_id,
                    item_id=item_id,
                    old_status=current.status,
                    new_status=updated.status,
                )
            )
        return self._replace_timeframe(
            timeframe.add_initiative(initiative.add_item(updated)), *events
        )

    def remove_item(
        self, timeframe_id: str, initiative_id: str, item_id: str
    ) -> Roadmap:
        timeframe, initiative = self._require_initiative(timeframe_id, initiative_id)
        return self._replace_timeframe(
            timeframe.add_initiative(initiative.remove_item(item_id))
        )

    def move_item(
        self,
        source_timeframe_id: str,
        source_initiative_id: str,
        target_timeframe_id: str,
        target_initiative_id: str,
        item_id: str,
    ) -> Roadmap:
        """Move an item between initiatives, possibly across timeframes."""
        _, source_initiative = self._require_initiative(
            source_timeframe_id, source_initiative_id
        )
        self._require_initiative(target_timeframe_id, target_initiative_id)
        item = source_initiative.require_item(item_id)

        moved = self.remove_item(source_timeframe_id, source_initiative_id, item_id)
        # Re-resolve the target: it may share a timeframe with the source.
        target_tf, target_initiative = moved._require_initiative(
            target_timeframe_id, target_initiative_id
        )
        return moved._replace_timeframe(
            target_tf.add_initiative(target_initiative.add_item(item))
        )

    def _item_added_event(
        self, timeframe_id: str, initiative_id: str, item: RoadmapItem
    ) -> RoadmapItemAdded:
        return RoadmapItemAdded(
            roadmap_id=self.id,
            timeframe_id=timeframe_id,
            initiative_id=initiative_id,
            item_id=item.id,
            title=item.title,
            status=item.status,
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "version": self.version,
            "owner": self.owner,
            "timeframes": [tf.to_dict() for tf in self.timeframes],
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }
