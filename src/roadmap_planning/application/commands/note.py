"""Roadmap note commands.

Notes are a separate aggregate: they are saved directly, without the
roadmap commit pipeline, and carry no domain events.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from roadmap_planning.domain.entities import RoadmapNote
from roadmap_planning.domain.entities.note import (
    DEFAULT_NOTE_PRIORITY,
    DEFAULT_NOTE_TIMELINE,
)
from roadmap_planning.domain.repositories import IRoadmapNoteRepository

logger = logging.getLogger(__name__)


class RoadmapNoteCommandService:
    def __init__(self, note_repository: IRoadmapNoteRepository) -> None:
        self._notes = note_repository

    async def create_roadmap_note(
        self,
        title: str,
        content: str = "",
        category: str = "",
        priority: str = DEFAULT_NOTE_PRIORITY,
        timeline: str = DEFAULT_NOTE_TIMELINE,
        related_items: Sequence[str] = (),
    ) -> RoadmapNote:
        note = RoadmapNote.create(
            title,
            content=content,
            category=category,
            priority=priority,
            timeline=timeline,
            related_items=tuple(related_items),
        )
        await self._notes.save(note)
        logger.info("Created roadmap note %s", note.id)
        return note

    async def update_roadmap_note(
        self,
        note_id: str,
        *,
        title: str | None = None,
        content: str | None = None,
        category: str | None = None,
        priority: str | None = None,
        timeline: str | None = None,
        related_items: Sequence[str] | None = None,
    ) -> RoadmapNote | None:
        return await self._change(
            note_id,
            lambda note: note.update(
                title=title,
                content=content,
                category=category,
                priority=priority,
                timeline=timeline,
                related_items=related_items,
            ),
        )

    async def delete_roadmap_note(self, note_id: str) -> bool:
        return await self._notes.delete(note_id)

    async def link_note_to_entity(
        self, note_id: str, entity_id: str
    ) -> RoadmapNote | None:
        """Record *entity_id* (a timeframe, initiative or item id) on the note."""
        return await self._change(note_id, lambda note: note.link(entity_id))

    async def unlink_note_from_entity(
        self, note_id: str, entity_id: str
    ) -> RoadmapNote | None:
        return await self._change(note_id, lambda note: note.unlink(entity_id))

    async def _change(
        self, note_id: str, change: Callable[[RoadmapNote], RoadmapNote]
    ) -> RoadmapNote | None:
        note = await self._notes.find_by_id(note_id)
        if note is None:
            return None
        updated = change(note)
        if updated is not note:
            await self._notes.save(updated)
        return updated
