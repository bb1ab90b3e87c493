"""Read-only projections over roadmaps and notes.

Unknown roadmap ids yield ``None``; unknown nested ids raise
:class:`~roadmap_planning.core.errors.EntityNotFoundError`, as the
command services do.
"""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, Field

from roadmap_planning.core.enums import Category, Priority, Status
from roadmap_planning.domain.entities import (
    InitiativeLocation,
    ItemLocation,
    Roadmap,
    RoadmapInitiative,
    RoadmapNote,
)
from roadmap_planning.domain.repositories import (
    IRoadmapNoteRepository,
    IRoadmapRepository,
)
from roadmap_planning.domain.services import (
    RoadmapTimeframeService,
    TimeframeSuggestion,
)


class RoadmapSummary(BaseModel):
    """Counts across one roadmap."""

    roadmap_id: str
    title: str
    timeframe_count: int = 0
    initiative_count: int = 0
    item_count: int = 0
    initiatives_by_priority: dict[str, int] = Field(default_factory=dict)
    items_by_status: dict[str, int] = Field(default_factory=dict)

    @property
    def completion_ratio(self) -> float:
        """Share of items completed (0.0 when there are none)."""
        if self.item_count == 0:
            return 0.0
        return self.items_by_status.get(Status.COMPLETED.value, 0) / self.item_count


class RoadmapQueryService:
    def __init__(
        self,
        roadmap_repository: IRoadmapRepository,
        note_repository: IRoadmapNoteRepository,
        timeframe_service: RoadmapTimeframeService | None = None,
    ) -> None:
        self._roadmaps = roadmap_repository
        self._notes = note_repository
        self._timeframes = timeframe_service or RoadmapTimeframeService()

    # -- Roadmaps ------------------------------------------------------------

    async def get_roadmap(self, roadmap_id: str) -> Roadmap | None:
        return await self._roadmaps.find_by_id(roadmap_id)

    async def get_all_roadmaps(self) -> list[Roadmap]:
        return await self._roadmaps.find_all()

    async def get_roadmaps_by_owner(self, owner: str) -> list[Roadmap]:
        return await self._roadmaps.find_by_owner(owner)

    async def get_roadmaps_by_version(self, version: str) -> list[Roadmap]:
        return await self._roadmaps.find_by_version(version)

    # -- Projections ---------------------------------------------------------

    async def get_initiatives_by_timeframe(
        self, roadmap_id: str, timeframe_id: str
    ) -> list[RoadmapInitiative] | None:
        roadmap = await self._roadmaps.find_by_id(roadmap_id)
        if roadmap is None:
            return None
        return roadmap.require_timeframe(timeframe_id).initiatives

    async def get_initiatives_by_category(
        self, roadmap_id: str, category: Category | str
    ) -> list[InitiativeLocation] | None:
        wanted = Category.from_string(category)
        roadmap = await self._roadmaps.find_by_id(roadmap_id)
        if roadmap is None:
            return None
        return [
            loc for loc in roadmap.all_initiatives()
            if loc.initiative.category is wanted
        ]

    async def get_initiatives_by_priority(
        self, roadmap_id: str, priority: Priority | str
    ) -> list[InitiativeLocation] | None:
        wanted = Priority.from_string(priority)
        roadmap = await self._roadmaps.find_by_id(roadmap_id)
        if roadmap is None:
            return None
        return [
            loc for loc in roadmap.all_initiatives()
            if loc.initiative.priority is wanted
        ]

    async def get_items_by_status(
        self, roadmap_id: str, status: Status | str
    ) -> list[ItemLocation] | None:
        wanted = Status.from_string(status)
        roadmap = await self._roadmaps.find_by_id(roadmap_id)
        if roadmap is None:
            return None
        return [loc for loc in roadmap.all_items() if loc.item.status is wanted]

    async def get_items_related_to(
        self, roadmap_id: str, entity_id: str
    ) -> list[ItemLocation] | None:
        """Items that hold a weak reference to *entity_id*."""
        roadmap = await self._roadmaps.find_by_id(roadmap_id)
        if roadmap is None:
            return None
        return [
            loc for loc in roadmap.all_items()
            if entity_id in loc.item.related_entities
        ]

    async def get_roadmap_summary(self, roadmap_id: str) -> RoadmapSummary | None:
        roadmap = await self._roadmaps.find_by_id(roadmap_id)
        if roadmap is None:
            return None
        initiatives = roadmap.all_initiatives()
        items = roadmap.all_items()
        return RoadmapSummary(
            roadmap_id=roadmap.id,
            title=roadmap.title,
            timeframe_count=len(roadmap.timeframe_map),
            initiative_count=len(initiatives),
            item_count=len(items),
            initiatives_by_priority=dict(
                Counter(loc.initiative.priority.value for loc in initiatives)
            ),
            items_by_status=dict(Counter(loc.item.status.value for loc in items)),
        )

    async def suggest_timeframe_structure(
        self, roadmap_id: str
    ) -> TimeframeSuggestion | None:
        roadmap = await self._roadmaps.find_by_id(roadmap_id)
        if roadmap is None:
            return None
        return self._timeframes.suggest_timeframe_structure(roadmap)

    # -- Notes ---------------------------------------------------------------

    async def get_roadmap_note(self, note_id: str) -> RoadmapNote | None:
        return await self._notes.find_by_id(note_id)

    async def get_all_roadmap_notes(self) -> list[RoadmapNote]:
        return await self._notes.find_all()

    async def get_roadmap_notes_by_category(self, category: str) -> list[RoadmapNote]:
        return await self._notes.find_by_category(category)

    async def get_roadmap_notes_by_priority(self, priority: str) -> list[RoadmapNote]:
        return await self._notes.find_by_priority(priority)

    async def get_roadmap_notes_by_timeline(self, timeline: str) -> list[RoadmapNote]:
        return await self._notes.find_by_timeline(timeline)

    async def get_notes_for_entity(self, entity_id: str) -> list[RoadmapNote]:
        """Notes linked to a roadmap, timeframe, initiative or item id."""
        return await self._notes.find_by_related_item(entity_id)
