"""Roadmap note: a free-form strategic note kept beside the roadmaps.

Notes record direction that is not yet actionable (future features,
architecture decisions).  They form their own flat aggregate and refer to
roadmap entities only by id.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from roadmap_planning.core.ids import (
    NOTE_PREFIX,
    entity_id,
    format_timestamp,
    parse_timestamp,
    utc_now,
)

DEFAULT_NOTE_PRIORITY = "medium"
DEFAULT_NOTE_TIMELINE = "future"


@dataclass(frozen=True)
class RoadmapNote:
    id: str
    title: str
    content: str = ""
    category: str = ""
    priority: str = DEFAULT_NOTE_PRIORITY
    timeline: str = DEFAULT_NOTE_TIMELINE
    related_items: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(
        cls,
        title: str,
        content: str = "",
        category: str = "",
        priority: str = DEFAULT_NOTE_PRIORITY,
        timeline: str = DEFAULT_NOTE_TIMELINE,
        related_items: list[str] | tuple[str, ...] = (),
    ) -> RoadmapNote:
        now = utc_now()
        return cls(
            id=entity_id(NOTE_PREFIX),
            title=title,
            content=content,
            category=category,
            priority=priority,
            timeline=timeline,
            related_items=tuple(related_items),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_persistence(cls, data: dict[str, Any]) -> RoadmapNote:
        created_at = parse_timestamp(data.get("createdAt"))
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            content=data.get("content") or "",
            category=data.get("category") or "",
            priority=data.get("priority") or DEFAULT_NOTE_PRIORITY,
            timeline=data.get("timeline") or DEFAULT_NOTE_TIMELINE,
            related_items=tuple(data.get("relatedItems") or ()),
            created_at=created_at,
            updated_at=parse_timestamp(data.get("updatedAt") or created_at),
        )

    def update(
        self,
        *,
        title: str | None = None,
        content: str | None = None,
        category: str | None = None,
        priority: str | None = None,
        timeline: str | None = None,
        related_items: list[str] | tuple[str, ...] | None = None,
    ) -> RoadmapNote:
        """Return a copy with the given fields replaced and a new ``updated_at``."""
        return replace(
            self,
            title=self.title if title is None else title,
            content=self.content if content is None else content,
            category=self.category if category is None else category,
            priority=self.priority if priority is None else priority,
            timeline=self.timeline if timeline is None else timeline,
            related_items=(
                self.related_items if related_items is None else tuple(related_items)
            ),
            updated_at=utc_now(),
        )

    def link(self, related_id: str) -> RoadmapNote:
        if related_id in self.related_items:
            return self
        return self.update(related_items=(*self.related_items, related_id))

    def unlink(self, related_id: str) -> RoadmapNote:
        if related_id not in self.related_items:
            return self
        return self.update(
            related_items=tuple(r for r in self.related_items if r != related_id)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "priority": self.priority,
            "timeline": self.timeline,
            "relatedItems": list(self.related_items),
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }
