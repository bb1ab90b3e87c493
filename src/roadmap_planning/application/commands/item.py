"""Item commands, including moves and related-entity links."""

from __future__ import annotations

from collections.abc import Sequence

from roadmap_planning.core.enums import Status
from roadmap_planning.domain.entities import Roadmap, RoadmapItem

from .pipeline import RoadmapWriteService


class ItemCommandService(RoadmapWriteService):
    async def add_item(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        title: str,
        description: str = "",
        status: Status | str = Status.PLANNED,
        related_entities: Sequence[str] = (),
        notes: str = "",
    ) -> Roadmap | None:
        item = RoadmapItem.create(
            title,
            description=description,
            status=status,
            related_entities=tuple(related_entities),
            notes=notes,
        )
        return await self._apply(
            roadmap_id,
            lambda roadmap: roadmap.add_item(timeframe_id, initiative_id, item),
        )

    async def update_item(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        item_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        status: Status | str | None = None,
        related_entities: Sequence[str] | None = None,
        notes: str | None = None,
    ) -> Roadmap | None:
        return await self._apply(
            roadmap_id,
            lambda roadmap: roadmap.update_item(
                timeframe_id,
                initiative_id,
                item_id,
                title=title,
                description=description,
                status=status,
                related_entities=related_entities,
                notes=notes,
            ),
        )

    async def remove_item(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        item_id: str,
    ) -> Roadmap | None:
        return await self._apply(
            roadmap_id,
            lambda roadmap: roadmap.remove_item(timeframe_id, initiative_id, item_id),
        )

    async def move_item(
        self,
        roadmap_id: str,
        source_timeframe_id: str,
        source_initiative_id: str,
        target_timeframe_id: str,
        target_initiative_id: str,
        item_id: str,
    ) -> Roadmap | None:
        return await self._apply(
            roadmap_id,
            lambda roadmap: roadmap.move_item(
                source_timeframe_id,
                source_initiative_id,
                target_timeframe_id,
                target_initiative_id,
                item_id,
            ),
        )

    async def add_related_entity(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        item_id: str,
        related_id: str,
    ) -> Roadmap | None:
        def change(roadmap: Roadmap) -> Roadmap:
            item = (
                roadmap.require_timeframe(timeframe_id)
                .require_initiative(initiative_id)
                .require_item(item_id)
            )
            linked = item.add_related_entity(related_id)
            return roadmap.update_item(
                timeframe_id,
                initiative_id,
                item_id,
                related_entities=linked.related_entities,
            )

        return await self._apply(roadmap_id, change)

    async def remove_related_entity(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        item_id: str,
        related_id: str,
    ) -> Roadmap | None:
        def change(roadmap: Roadmap) -> Roadmap:
            item = (
                roadmap.require_timeframe(timeframe_id)
                .require_initiative(initiative_id)
                .require_item(item_id)
            )
            unlinked = item.remove_related_entity(related_id)
            return roadmap.update_item(
                timeframe_id,
                initiative_id,
                item_id,
                related_entities=unlinked.related_entities,
            )

        return await self._apply(roadmap_id, change)
