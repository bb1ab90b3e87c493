"""Draft models for bulk roadmap creation.

Drafts describe a timeframe tree that does not exist yet.  They accept
either snake_case or the camelCase wire names, and parse enum literals
case-insensitively.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from roadmap_planning.core.enums import Category, Priority, Status
from roadmap_planning.domain.entities import (
    RoadmapInitiative,
    RoadmapItem,
    RoadmapTimeframe,
)


class _Draft(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ItemDraft(_Draft):
    title: str
    description: str = ""
    status: Status = Status.PLANNED
    related_entities: list[str] = Field(default_factory=list, alias="relatedEntities")
    notes: str = ""

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, v: Any) -> Status:
        return Status.from_string(v) if v else Status.PLANNED

    def to_entity(self) -> RoadmapItem:
        return RoadmapItem.create(
            self.title,
            description=self.description,
            status=self.status,
            related_entities=self.related_entities,
            notes=self.notes,
        )


class InitiativeDraft(_Draft):
    title: str
    description: str = ""
    category: Category = Category.OTHER
    priority: Priority = Priority.MEDIUM
    items: list[ItemDraft] = Field(default_factory=list)

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, v: Any) -> Category:
        return Category.from_string(v) if v else Category.OTHER

    @field_validator("priority", mode="before")
    @classmethod
    def _parse_priority(cls, v: Any) -> Priority:
        return Priority.from_string(v) if v else Priority.MEDIUM

    def to_entity(self) -> RoadmapInitiative:
        return RoadmapInitiative.create(
            self.title,
            description=self.description,
            category=self.category,
            priority=self.priority,
            items=[item.to_entity() for item in self.items],
        )


class TimeframeDraft(_Draft):
    name: str
    order: int = 0
    initiatives: list[InitiativeDraft] = Field(default_factory=list)

    def to_entity(self) -> RoadmapTimeframe:
        return RoadmapTimeframe.create(
            self.name,
            self.order,
            initiatives=[i.to_entity() for i in self.initiatives],
        )
