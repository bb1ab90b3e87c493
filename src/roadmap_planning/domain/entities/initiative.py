"""Initiative entity: a themed group of items within a timeframe."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from roadmap_planning.core.enums import Category, EntityLevel, Priority
from roadmap_planning.core.errors import EntityNotFoundError
from roadmap_planning.core.ids import INITIATIVE_PREFIX, entity_id

from .item import RoadmapItem


@dataclass(frozen=True)
class RoadmapInitiative:
    """Owns its items exclusively, keyed by item id.

    Every mutator returns a new initiative holding a fresh item map;
    the receiver is never modified.
    """

    id: str
    title: str
    description: str = ""
    category: Category = Category.OTHER
    priority: Priority = Priority.MEDIUM
    item_map: dict[str, RoadmapItem] = field(default_factory=dict, repr=False)

    @classmethod
    def create(
        cls,
        title: str,
        description: str = "",
        category: Category | str = Category.OTHER,
        priority: Priority | str = Priority.MEDIUM,
        items: Iterable[RoadmapItem] = (),
    ) -> RoadmapInitiative:
        return cls(
            id=entity_id(INITIATIVE_PREFIX),
            title=title,
            description=description,
            category=Category.from_string(category),
            priority=Priority.from_string(priority),
            item_map={item.id: item for item in items},
        )

    @classmethod
    def from_persistence(cls, data: dict[str, Any]) -> RoadmapInitiative:
        items = (RoadmapItem.from_persistence(i) for i in data.get("items") or ())
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            description=data.get("description") or "",
            category=Category.from_string(data.get("category") or Category.OTHER),
            priority=Priority.from_string(data.get("priority") or Priority.MEDIUM),
            item_map={item.id: item for item in items},
        )

    # -- Items ---------------------------------------------------------------

    @property
    def items(self) -> list[RoadmapItem]:
        return list(self.item_map.values())

    def get_item(self, item_id: str) -> RoadmapItem | None:
        return self.item_map.get(item_id)

    def require_item(self, item_id: str) -> RoadmapItem:
        item = self.item_map.get(item_id)
        if item is None:
            raise EntityNotFoundError(EntityLevel.ITEM, item_id, self.id)
        return item

    def add_item(self, item: RoadmapItem) -> RoadmapInitiative:
        """Add *item*; an existing item with the same id is replaced."""
        return replace(self, item_map={**self.item_map, item.id: item})

    def remove_item(self, item_id: str) -> RoadmapInitiative:
        self.require_item(item_id)
        items = dict(self.item_map)
        del items[item_id]
        return replace(self, item_map=items)

    def update_item(self, item_id: str, **changes: Any) -> RoadmapInitiative:
        item = self.require_item(item_id)
        return self.add_item(item.update(**changes))

    # -- Own fields ----------------------------------------------------------

    def update(
        self,
        *,
        title: str | None = None,
        description: str | None = None,
        category: Category | str | None = None,
        priority: Priority | str | None = None,
    ) -> RoadmapInitiative:
        return replace(
            self,
            title=self.title if title is None else title,
            description=self.description if description is None else description,
            category=self.category if category is None else Category.from_string(category),
            priority=self.priority if priority is None else Priority.from_string(priority),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "priority": self.priority.value,
            "items": [item.to_dict() for item in self.items],
        }
