"""Single entry point for every roadmap and note command.

``CompositeRoadmapCommandService`` owns one service per level and
delegates to it; all roadmap writes share one commit pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from roadmap_planning.core.enums import Category, Priority, Status
from roadmap_planning.domain.entities import Roadmap, RoadmapNote
from roadmap_planning.domain.entities.note import (
    DEFAULT_NOTE_PRIORITY,
    DEFAULT_NOTE_TIMELINE,
)
from roadmap_planning.domain.repositories import (
    IRoadmapNoteRepository,
    IRoadmapRepository,
)
from roadmap_planning.domain.services import RoadmapValidationService
from roadmap_planning.infrastructure.event_dispatcher import IEventDispatcher

from .initiative import InitiativeCommandService
from .item import ItemCommandService
from .note import RoadmapNoteCommandService
from .payloads import TimeframeDraft
from .pipeline import RoadmapCommitPipeline
from .roadmap import RoadmapEntityCommandService
from .timeframe import TimeframeCommandService

logger = logging.getLogger(__name__)


class CompositeRoadmapCommandService:
    def __init__(
        self,
        roadmap_repository: IRoadmapRepository,
        note_repository: IRoadmapNoteRepository,
        dispatcher: IEventDispatcher,
        validation: RoadmapValidationService | None = None,
    ) -> None:
        self._roadmaps = roadmap_repository
        pipeline = RoadmapCommitPipeline(roadmap_repository, dispatcher, validation)
        self.roadmap_commands = RoadmapEntityCommandService(pipeline)
        self.timeframe_commands = TimeframeCommandService(pipeline)
        self.initiative_commands = InitiativeCommandService(pipeline)
        self.item_commands = ItemCommandService(pipeline)
        self.note_commands = RoadmapNoteCommandService(note_repository)

    # ------------------------------------------------------------------
    # Roadmap
    # ------------------------------------------------------------------

    async def create_roadmap(
        self,
        title: str,
        description: str = "",
        version: str = "",
        owner: str = "",
        initial_timeframes: Iterable[TimeframeDraft | Mapping[str, Any]] | None = None,
    ) -> Roadmap:
        return await self.roadmap_commands.create_roadmap(
            title,
            description=description,
            version=version,
            owner=owner,
            initial_timeframes=initial_timeframes,
        )

    async def update_roadmap(self, roadmap_id: str, **changes: Any) -> Roadmap | None:
        return await self.roadmap_commands.update_roadmap(roadmap_id, **changes)

    async def delete_roadmap(self, roadmap_id: str) -> bool:
        return await self.roadmap_commands.delete_roadmap(roadmap_id)

    # ------------------------------------------------------------------
    # Timeframes
    # ------------------------------------------------------------------

    async def add_timeframe(
        self, roadmap_id: str, name: str, order: int
    ) -> Roadmap | None:
        return await self.timeframe_commands.add_timeframe(roadmap_id, name, order)

    async def update_timeframe(
        self, roadmap_id: str, timeframe_id: str, **changes: Any
    ) -> Roadmap | None:
        return await self.timeframe_commands.update_timeframe(
            roadmap_id, timeframe_id, **changes
        )

    async def remove_timeframe(
        self, roadmap_id: str, timeframe_id: str
    ) -> Roadmap | None:
        return await self.timeframe_commands.remove_timeframe(roadmap_id, timeframe_id)

    # ------------------------------------------------------------------
    # Initiatives
    # ------------------------------------------------------------------

    async def add_initiative(
        self,
        roadmap_id: str,
        timeframe_id: str,
        title: str,
        description: str = "",
        category: Category | str = Category.OTHER,
        priority: Priority | str = Priority.MEDIUM,
    ) -> Roadmap | None:
        return await self.initiative_commands.add_initiative(
            roadmap_id,
            timeframe_id,
            title,
            description=description,
            category=category,
            priority=priority,
        )

    async def update_initiative(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        **changes: Any,
    ) -> Roadmap | None:
        return await self.initiative_commands.update_initiative(
            roadmap_id, timeframe_id, initiative_id, **changes
        )

    async def remove_initiative(
        self, roadmap_id: str, timeframe_id: str, initiative_id: str
    ) -> Roadmap | None:
        return await self.initiative_commands.remove_initiative(
            roadmap_id, timeframe_id, initiative_id
        )

    async def move_initiative(
        self,
        roadmap_id: str,
        source_timeframe_id: str,
        target_timeframe_id: str,
        initiative_id: str,
    ) -> Roadmap | None:
        return await self.initiative_commands.move_initiative(
            roadmap_id, source_timeframe_id, target_timeframe_id, initiative_id
        )

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

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
        return await self.item_commands.add_item(
            roadmap_id,
            timeframe_id,
            initiative_id,
            title,
            description=description,
            status=status,
            related_entities=related_entities,
            notes=notes,
        )

    async def update_item(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        item_id: str,
        **changes: Any,
    ) -> Roadmap | None:
        return await self.item_commands.update_item(
            roadmap_id, timeframe_id, initiative_id, item_id, **changes
        )

    async def remove_item(
        self,
        roadmap_id: str,
        timeframe_id: str,
        initiative_id: str,
        item_id: str,
    ) -> Roadmap | None:
        return await self.item_commands.remove_item(
            roadmap_id, timeframe_id, initiative_id, item_id
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
        return await self.item_commands.move_item(
            roadmap_id,
            source_timeframe_id,
            source_initiative_id,
            target_timeframe_id,
            target_initiative_id,
            item_id,
        )

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    async def create_note(
        self,
        roadmap_id: str,
        title: str,
        content: str = "",
        category: str = "",
    ) -> RoadmapNote | None:
        """Create a note linked to a roadmap, with default priority and timeline.

        Returns ``None`` when the roadmap does not exist.
        """
        if await self._roadmaps.find_by_id(roadmap_id) is None:
            logger.info("Roadmap %s not found; note not created", roadmap_id)
            return None
        return await self.note_commands.create_roadmap_note(
            title,
            content=content,
            category=category,
            priority=DEFAULT_NOTE_PRIORITY,
            timeline=DEFAULT_NOTE_TIMELINE,
            related_items=[roadmap_id],
        )

    async def create_roadmap_note(
        self,
        title: str,
        content: str = "",
        category: str = "",
        priority: str = DEFAULT_NOTE_PRIORITY,
        timeline: str = DEFAULT_NOTE_TIMELINE,
        related_items: Sequence[str] = (),
    ) -> RoadmapNote:
        return await self.note_commands.create_roadmap_note(
            title,
            content=content,
            category=category,
            priority=priority,
            timeline=timeline,
            related_items=related_items,
        )

    async def update_note(self, note_id: str, **changes: Any) -> RoadmapNote | None:
        return await self.note_commands.update_roadmap_note(note_id, **changes)

    async def delete_note(self, note_id: str) -> bool:
        return await self.note_commands.delete_roadmap_note(note_id)

    async def link_note_to_entity(
        self, note_id: str, entity_id: str
    ) -> RoadmapNote | None:
        return await self.note_commands.link_note_to_entity(note_id, entity_id)

    async def unlink_note_from_entity(
        self, note_id: str, entity_id: str
    ) -> RoadmapNote | None:
        return await self.note_commands.unlink_note_from_entity(note_id, entity_id)
