"""Repository adapters for roadmaps and roadmap notes.

*  ``JsonFileRoadmapRepository`` / ``JsonFileRoadmapNoteRepository``:
   backed by one collection of a :class:`JsonDocumentStore`.
*  ``InMemoryRoadmapRepository`` / ``InMemoryRoadmapNoteRepository``:
   dict-backed, for tests and embedding.  They keep serialized records,
   so callers never share instances with the store.

Unreadable records are skipped (with a warning) when reading and left
untouched when writing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from roadmap_planning.core.errors import RoadmapError
from roadmap_planning.domain.entities import Roadmap, RoadmapNote

from .document_store import NOTES_COLLECTION, ROADMAPS_COLLECTION, JsonDocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T", Roadmap, RoadmapNote)

# Errors a malformed record can raise while being parsed.
_RECORD_ERRORS = (KeyError, TypeError, ValueError, AttributeError, RoadmapError)


def _parse_records(
    records: list[dict[str, Any]],
    parse: Callable[[dict[str, Any]], T],
    label: str,
) -> list[T]:
    parsed: list[T] = []
    for record in records:
        try:
            parsed.append(parse(record))
        except _RECORD_ERRORS:
            record_id = record.get("id") if isinstance(record, dict) else None
            logger.warning(
                "Skipping unreadable %s record %s", label, record_id, exc_info=True
            )
    return parsed


def _record_id(record: Any) -> Any:
    return record.get("id") if isinstance(record, dict) else None


# ---------------------------------------------------------------------------
# JSON document implementations
# ---------------------------------------------------------------------------

class _JsonCollectionRepository(Generic[T]):
    collection: str
    label: str

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def _parse(self, record: dict[str, Any]) -> T:
        raise NotImplementedError

    async def _load(self) -> list[T]:
        records = await self._store.read_collection(self.collection)
        return _parse_records(records, self._parse, self.label)

    async def _upsert(self, entity_id: str, record: dict[str, Any]) -> None:
        records = await self._store.read_collection(self.collection)
        for index, existing in enumerate(records):
            if _record_id(existing) == entity_id:
                records[index] = record
                break
        else:
            records.append(record)
        await self._store.write_collection(self.collection, records)

    async def find_by_id(self, entity_id: str) -> T | None:
        for entity in await self._load():
            if entity.id == entity_id:
                return entity
        return None

    async def find_all(self) -> list[T]:
        return await self._load()

    async def delete(self, entity_id: str) -> bool:
        records = await self._store.read_collection(self.collection)
        remaining = [r for r in records if _record_id(r) != entity_id]
        if len(remaining) == len(records):
            return False
        await self._store.write_collection(self.collection, remaining)
        logger.info("Deleted %s %s", self.label, entity_id)
        return True


class JsonFileRoadmapRepository(_JsonCollectionRepository[Roadmap]):
    collection = ROADMAPS_COLLECTION
    label = "roadmap"

    def _parse(self, record: dict[str, Any]) -> Roadmap:
        return Roadmap.from_persistence(record)

    async def save(self, roadmap: Roadmap) -> None:
        await self._upsert(roadmap.id, roadmap.to_dict())

    async def find_by_owner(self, owner: str) -> list[Roadmap]:
        return [r for r in await self._load() if r.owner == owner]

    async def find_by_version(self, version: str) -> list[Roadmap]:
        return [r for r in await self._load() if r.version == version]


class JsonFileRoadmapNoteRepository(_JsonCollectionRepository[RoadmapNote]):
    collection = NOTES_COLLECTION
    label = "roadmap note"

    def _parse(self, record: dict[str, Any]) -> RoadmapNote:
        return RoadmapNote.from_persistence(record)

    async def save(self, note: RoadmapNote) -> None:
        await self._upsert(note.id, note.to_dict())

    async def find_by_category(self, category: str) -> list[RoadmapNote]:
        return [n for n in await self._load() if n.category == category]

    async def find_by_priority(self, priority: str) -> list[RoadmapNote]:
        return [n for n in await self._load() if n.priority == priority]

    async def find_by_timeline(self, timeline: str) -> list[RoadmapNote]:
        return [n for n in await self._load() if n.timeline == timeline]

    async def find_by_related_item(self, related_id: str) -> list[RoadmapNote]:
        return [n for n in await self._load() if related_id in n.related_items]


# ---------------------------------------------------------------------------
# In-memory implementations
# ---------------------------------------------------------------------------

class InMemoryRoadmapRepository:
    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}

    async def save(self, roadmap: Roadmap) -> None:
        self._records[roadmap.id] = roadmap.to_dict()

    async def find_by_id(self, roadmap_id: str) -> Roadmap | None:
        record = self._records.get(roadmap_id)
        return Roadmap.from_persistence(record) if record is not None else None

    async def find_all(self) -> list[Roadmap]:
        return [Roadmap.from_persistence(r) for r in self._records.values()]

    async def find_by_owner(self, owner: str) -> list[Roadmap]:
        return [r for r in await self.find_all() if r.owner == owner]

    async def find_by_version(self, version: str) -> list[Roadmap]:
        return [r for r in await self.find_all() if r.version == version]

    async def delete(self, roadmap_id: str) -> bool:
        return self._records.pop(roadmap_id, None) is not None

    def __len__(self) -> int:
        return len(self._records)


class InMemoryRoadmapNoteRepository:
    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}

    async def save(self, note: RoadmapNote) -> None:
        self._records[note.id] = note.to_dict()

    async def find_by_id(self, note_id: str) -> RoadmapNote | None:
        record = self._records.get(note_id)
        return RoadmapNote.from_persistence(record) if record is not None else None

    async def find_all(self) -> list[RoadmapNote]:
        return [RoadmapNote.from_persistence(r) for r in self._records.values()]

    async def find_by_category(self, category: str) -> list[RoadmapNote]:
        return [n for n in await self.find_all() if n.category == category]

    async def find_by_priority(self, priority: str) -> list[RoadmapNote]:
        return [n for n in await self.find_all() if n.priority == priority]

    async def find_by_timeline(self, timeline: str) -> list[RoadmapNote]:
        return [n for n in await self.find_all() if n.timeline == timeline]

    async def find_by_related_item(self, related_id: str) -> list[RoadmapNote]:
        return [n for n in await self.find_all() if related_id in n.related_items]

    async def delete(self, note_id: str) -> bool:
        return self._records.pop(note_id, None) is not None

    def __len__(self) -> int:
        return len(self._records)
