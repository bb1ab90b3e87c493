"""Leaf entity of the roadmap tree."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from roadmap_planning.core.enums import Status
from roadmap_planning.core.ids import ITEM_PREFIX, entity_id


@dataclass(frozen=True)
class RoadmapItem:
    """A unit of planned work inside an initiative.

    ``related_entities`` holds weak references (PRD / story / task ids):
    they are recorded for lookup only and never checked for existence.
    """

    id: str
    title: str
    description: str = ""
    status: Status = Status.PLANNED
    related_entities: tuple[str, ...] = ()
    notes: str = ""

    @classmethod
    def create(
        cls,
        title: str,
        description: str = "",
        status: Status | str = Status.PLANNED,
        related_entities: list[str] | tuple[str, ...] = (),
        notes: str = "",
    ) -> RoadmapItem:
        return cls(
            id=entity_id(ITEM_PREFIX),
            title=title,
            description=description,
            status=Status.from_string(status),
            related_entities=tuple(related_entities),
            notes=notes,
        )

    @classmethod
    def from_persistence(cls, data: dict[str, Any]) -> RoadmapItem:
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            description=data.get("description") or "",
            status=Status.from_string(data.get("status") or Status.PLANNED),
            related_entities=tuple(data.get("relatedEntities") or ()),
            notes=data.get("notes") or "",
        )

    def update(
        self,
        *,
        title: str | None = None,
        description: str | None = None,
        status: Status | str | None = None,
        related_entities: list[str] | tuple[str, ...] | None = None,
        notes: str | None = None,
    ) -> RoadmapItem:
        """Return a copy with the given fields replaced; ``None`` keeps a field."""
        return replace(
            self,
            title=self.title if title is None else title,
            description=self.description if description is None else description,
            status=self.status if status is None else Status.from_string(status),
            related_entities=(
                self.related_entities
                if related_entities is None
                else tuple(related_entities)
            ),
            notes=self.notes if notes is None else notes,
        )

    def add_related_entity(self, related_id: str) -> RoadmapItem:
        if related_id in self.related_entities:
            return self
        return replace(
            self, related_entities=(*self.related_entities, related_id)
        )

    def remove_related_entity(self, related_id: str) -> RoadmapItem:
        if related_id not in self.related_entities:
            return self
        return replace(
            self,
            related_entities=tuple(
                r for r in self.related_entities if r != related_id
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "relatedEntities": list(self.related_entities),
            "notes": self.notes,
        }
