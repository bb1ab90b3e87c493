"""Timeframe entity: a horizon such as "Q3 2024" or "Later"."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from roadmap_planning.core.enums import EntityLevel
from roadmap_planning.core.errors import EntityNotFoundError
from roadmap_planning.core.ids import TIMEFRAME_PREFIX, entity_id

from .initiative import RoadmapInitiative


@dataclass(frozen=True)
class RoadmapTimeframe:
    """Owns its initiatives exclusively, keyed by initiative id.

    ``order`` is the display sequence.  It need not be unique on input;
    normalization renumbers it.
    """

    id: str
    name: str
    order: int = 0
    initiative_map: dict[str, RoadmapInitiative] = field(
        default_factory=dict, repr=False
    )

    @classmethod
    def create(
        cls,
        name: str,
        order: int,
        initiatives: Iterable[RoadmapInitiative] = (),
    ) -> RoadmapTimeframe:
        return cls(
            id=entity_id(TIMEFRAME_PREFIX),
            name=name,
            order=int(order),
            initiative_map={i.id: i for i in initiatives},
        )

    @classmethod
    def from_persistence(cls, data: dict[str, Any]) -> RoadmapTimeframe:
        initiatives = (
            RoadmapInitiative.from_persistence(i)
            for i in data.get("initiatives") or ()
        )
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            order=int(data.get("order") or 0),
            initiative_map={i.id: i for i in initiatives},
        )

    # -- Initiatives ---------------------------------------------------------

    @property
    def initiatives(self) -> list[RoadmapInitiative]:
        return list(self.initiative_map.values())

    def get_initiative(self, initiative_id: str) -> RoadmapInitiative | None:
        return self.initiative_map.get(initiative_id)

    def require_initiative(self, initiative_id: str) -> RoadmapInitiative:
        initiative = self.initiative_map.get(initiative_id)
        if initiative is None:
            raise EntityNotFoundError(EntityLevel.INITIATIVE, initiative_id, self.id)
        return initiative

    def add_initiative(self, initiative: RoadmapInitiative) -> RoadmapTimeframe:
        """Add *initiative*; an existing one with the same id is replaced."""
        return replace(
            self, initiative_map={**self.initiative_map, initiative.id: initiative}
        )

    def remove_initiative(self, initiative_id: str) -> RoadmapTimeframe:
        self.require_initiative(initiative_id)
        initiatives = dict(self.initiative_map)
        del initiatives[initiative_id]
        return replace(self, initiative_map=initiatives)

    def update_initiative(self, initiative_id: str, **changes: Any) -> RoadmapTimeframe:
        initiative = self.require_initiative(initiative_id)
        return self.add_initiative(initiative.update(**changes))

    # -- Own fields ----------------------------------------------------------

    def update(
        self, *, name: str | None = None, order: int | None = None
    ) -> RoadmapTimeframe:
        return replace(
            self,
            name=self.name if name is None else name,
            order=self.order if order is None else int(order),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "order": self.order,
            "initiatives": [i.to_dict() for i in self.initiatives],
        }
