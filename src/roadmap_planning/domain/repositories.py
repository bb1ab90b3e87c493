"""Repository ports for the roadmap aggregates.

Implementations can be swapped (JSON document, in-memory) without
changing the command and query services.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .entities import Roadmap, RoadmapNote


# ---------------------------------------------------------------------------
# Roadmaps
# ---------------------------------------------------------------------------

@runtime_checkable
class IRoadmapRepository(Protocol):
    """Whole-aggregate persistence for roadmaps.

    ``save`` is an upsert keyed by ``roadmap.id``.  ``find_by_id`` returns
    ``None`` for an unknown id.
    """

    async def save(self, roadmap: Roadmap) -> None: ...
    async def find_by_id(self, roadmap_id: str) -> Roadmap | None: ...
    async def find_all(self) -> list[Roadmap]: ...
    async def find_by_owner(self, owner: str) -> list[Roadmap]: ...
    async def find_by_version(self, version: str) -> list[Roadmap]: ...
    async def delete(self, roadmap_id: str) -> bool: ...


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

@runtime_checkable
class IRoadmapNoteRepository(Protocol):
    async def save(self, note: RoadmapNote) -> None: ...
    async def find_by_id(self, note_id: str) -> RoadmapNote | None: ...
    async def find_all(self) -> list[RoadmapNote]: ...
    async def find_by_category(self, category: str) -> list[RoadmapNote]: ...
    async def find_by_priority(self, priority: str) -> list[RoadmapNote]: ...
    async def find_by_timeline(self, timeline: str) -> list[RoadmapNote]: ...
    async def find_by_related_item(self, related_id: str) -> list[RoadmapNote]: ...
    async def delete(self, note_id: str) -> bool: ...
