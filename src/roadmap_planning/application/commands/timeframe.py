"""Timeframe commands."""

from __future__ import annotations

from roadmap_planning.domain.entities import Roadmap, RoadmapTimeframe

from .pipeline import RoadmapWriteService


class TimeframeCommandService(RoadmapWriteService):
    async def add_timeframe(
        self, roadmap_id: str, name: str, order: int
    ) -> Roadmap | None:
        timeframe = RoadmapTimeframe.create(name, order)
        return await self._apply(
            roadmap_id, lambda roadmap: roadmap.add_timeframe(timeframe)
        )

    async def update_timeframe(
        self,
        roadmap_id: str,
        timeframe_id: str,
        *,
        name: str | None = None,
        order: int | None = None,
    ) -> Roadmap | None:
        return await self._apply(
            roadmap_id,
            lambda roadmap: roadmap.update_timeframe(
                timeframe_id, name=name, order=order
            ),
        )

    async def remove_timeframe(
        self, roadmap_id: str, timeframe_id: str
    ) -> Roadmap | None:
        """Remove a timeframe together with everything it owns."""
        return await self._apply(
            roadmap_id, lambda roadmap: roadmap.remove_timeframe(timeframe_id)
        )
