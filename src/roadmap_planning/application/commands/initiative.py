"""Initiative commands, including moves between timeframes."""

from __future__ import annotations

from roadmap_planning.core.enums import Category, Priority
from roadmap_planning.domain.entities import Roadmap, RoadmapInitiative

from .pipeline import RoadmapWriteService


class InitiativeCommandService(RoadmapWriteService):
    async def add_initiative(
        self,
        roadmap_id: str,
        timeframe_id: str,
        title: str,
        description: str = "",
        category: Category | str = Category.OTHER,
        priority: Priority | str = Priority.MEDIUM,
    ) -> Roadmap | None:
        initiative = RoadmapInitiative.create(
            title, description=description, category=category, priority=priority
        )
        return await self._apply(
            roadmap_id,
            lambda roadmap: roadmap.add_initiative(timeframe_id, initiative),
        )

    async def update_initiative(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        category: Category | str | None = None,
        priority: Priority | str | None = None,
    ) -> Roadmap | None:
        return await self._apply(
            roadmap_id,
            lambda roadmap: roadmap.update_initiative(
                timeframe_id,
                initiative_id,
                title=title,
                description=description,
                category=category,
                priority=priority,
            ),
        )

    async def remove_initiative(
        self, roadmap_id: str, timeframe_id: str, initiative_id: str
    ) -> Roadmap | None:
        return await self._apply(
            roadmap_id,
            lambda roadmap: roadmap.remove_initiative(timeframe_id, initiative_id),
        )

    async def move_initiative(
        self,
        roadmap_id: str,
        source_timeframe_id: str,
        target_timeframe_id: str,
        initiative_id: str,
    ) -> Roadmap | None:
        return await self._apply(
            roadmap_id,
            lambda roadmap: roadmap.move_initiative(
                source_timeframe_id, target_timeframe_id, initiative_id
            ),
        )
