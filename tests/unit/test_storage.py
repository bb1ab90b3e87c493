"""Tests for file I/O, the JSON document store and the repositories."""

from __future__ import annotations

import json
import threading

import pytest

from roadmap_planning.core.errors import DocumentStoreError
from roadmap_planning.core.file_io import read_text_if_exists, safe_write_text
from roadmap_planning.domain.entities import (
    Roadmap,
    RoadmapInitiative,
    RoadmapNote,
    RoadmapTimeframe,
)
from roadmap_planning.domain.repositories import (
    IRoadmapNoteRepository,
    IRoadmapRepository,
)
from roadmap_planning.infrastructure import document_store as document_store_module
from roadmap_planning.infrastructure.document_store import JsonDocumentStore
from roadmap_planning.infrastructure.repositories import (
    InMemoryRoadmapNoteRepository,
    InMemoryRoadmapRepository,
    JsonFileRoadmapNoteRepository,
    JsonFileRoadmapRepository,
)


def _make_roadmap(**overrides) -> Roadmap:
    defaults = dict(title="Q3 Plan", version="1.0", owner="alice")
    defaults.update(overrides)
    return Roadmap.create(**defaults)


def _make_note(**overrides) -> RoadmapNote:
    defaults = dict(title="Split the monolith", content="Some day", category="architecture")
    defaults.update(overrides)
    return RoadmapNote.create(**defaults)


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------

class TestSafeWrite:
    def test_creates_parents_and_writes(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "doc.json"
        safe_write_text(path, '{"a": 1}')
        assert path.read_text() == '{"a": 1}'

    def test_replaces_and_leaves_no_temp_files(self, tmp_path):
        path = tmp_path / "doc.json"
        safe_write_text(path, "old")
        safe_write_text(path, "new")
        assert path.read_text() == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]

    def test_read_missing_returns_none(self, tmp_path):
        assert read_text_if_exists(tmp_path / "missing.json") is None


# ---------------------------------------------------------------------------
# Document store
# ---------------------------------------------------------------------------

class TestJsonDocumentStore:
    @pytest.mark.asyncio
    async def test_missing_file_reads_empty(self, document_store: JsonDocumentStore):
        assert await document_store.read_document() == {}
        assert await document_store.read_collection("roadmaps") == []

    @pytest.mark.asyncio
    async def test_write_keeps_other_collections(self, document_store: JsonDocumentStore):
        await document_store.write_collection("roadmaps", [{"id": "r1"}])
        await document_store.write_collection("roadmapNotes", [{"id": "n1"}])

        document = json.loads(document_store.path.read_text())
        assert document == {"roadmaps": [{"id": "r1"}], "roadmapNotes": [{"id": "n1"}]}

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self, document_store: JsonDocumentStore):
        document_store.path.write_text("{not json")
        with pytest.raises(DocumentStoreError):
            await document_store.read_document()

    @pytest.mark.asyncio
    async def test_wrong_shape_raises(self, document_store: JsonDocumentStore):
        document_store.path.write_text('{"roadmaps": {"id": 1}}')
        with pytest.raises(DocumentStoreError):
            await document_store.read_collection("roadmaps")

    @pytest.mark.asyncio
    async def test_top_level_list_raises(self, document_store: JsonDocumentStore):
        document_store.path.write_text("[]")
        with pytest.raises(DocumentStoreError, match="must be a JSON object"):
            await document_store.read_document()

    @pytest.mark.asyncio
    async def test_disk_io_runs_off_the_event_loop(
        self, document_store: JsonDocumentStore, monkeypatch
    ):
        threads: dict[str, int] = {}

        def _read(path):
            threads["read"] = threading.get_ident()
            return read_text_if_exists(path)

        def _write(path, text):
            threads["write"] = threading.get_ident()
            safe_write_text(path, text)

        monkeypatch.setattr(document_store_module, "read_text_if_exists", _read)
        monkeypatch.setattr(document_store_module, "safe_write_text", _write)

        await document_store.write_collection("roadmaps", [{"id": "r1"}])

        loop_thread = threading.get_ident()
        assert threads["read"] != loop_thread
        assert threads["write"] != loop_thread
        assert await document_store.read_collection("roadmaps") == [{"id": "r1"}]

    @pytest.mark.asyncio
    async def test_non_utf8_bytes_raise_store_error(self, document_store: JsonDocumentStore):
        document_store.path.write_bytes(b'{"roadmaps": ["\xff\xfe"]}')
        repo = JsonFileRoadmapRepository(document_store)
        with pytest.raises(DocumentStoreError, match="not valid UTF-8"):
            await repo.find_all()


# ---------------------------------------------------------------------------
# Roadmap repositories
# ---------------------------------------------------------------------------

@pytest.fixture(params=["json", "memory"])
def any_roadmap_repo(request, document_store: JsonDocumentStore) -> IRoadmapRepository:
    if request.param == "json":
        return JsonFileRoadmapRepository(document_store)
    return InMemoryRoadmapRepository()


@pytest.fixture(params=["json", "memory"])
def any_note_repo(request, document_store: JsonDocumentStore) -> IRoadmapNoteRepository:
    if request.param == "json":
        return JsonFileRoadmapNoteRepository(document_store)
    return InMemoryRoadmapNoteRepository()


class TestRoadmapRepository:
    def test_satisfies_protocol(self, any_roadmap_repo):
        assert isinstance(any_roadmap_repo, IRoadmapRepository)

    @pytest.mark.asyncio
    async def test_save_and_find(self, any_roadmap_repo):
        timeframe = RoadmapTimeframe.create(
            "Q3", 1, initiatives=[RoadmapInitiative.create("Perf", priority="high")]
        )
        roadmap = _make_roadmap().add_timeframe(timeframe)

        await any_roadmap_repo.save(roadmap)
        found = await any_roadmap_repo.find_by_id(roadmap.id)

        assert found == roadmap
        assert found is not roadmap

    @pytest.mark.asyncio
    async def test_unknown_id_returns_none(self, any_roadmap_repo):
        assert await any_roadmap_repo.find_by_id("roadmap-missing") is None

    @pytest.mark.asyncio
    async def test_save_is_upsert(self, any_roadmap_repo):
        roadmap = _make_roadmap()
        await any_roadmap_repo.save(roadmap)
        await any_roadmap_repo.save(roadmap.update(title="Renamed"))

        all_roadmaps = await any_roadmap_repo.find_all()
        assert len(all_roadmaps) == 1
        assert all_roadmaps[0].title == "Renamed"

    @pytest.mark.asyncio
    async def test_find_by_owner_and_version(self, any_roadmap_repo):
        await any_roadmap_repo.save(_make_roadmap(owner="alice", version="1.0"))
        await any_roadmap_repo.save(_make_roadmap(owner="bob", version="2.0"))

        assert [r.owner for r in await any_roadmap_repo.find_by_owner("bob")] == ["bob"]
        assert [r.version for r in await any_roadmap_repo.find_by_version("1.0")] == ["1.0"]

    @pytest.mark.asyncio
    async def test_delete(self, any_roadmap_repo):
        roadmap = _make_roadmap()
        await any_roadmap_repo.save(roadmap)

        assert await any_roadmap_repo.delete(roadmap.id) is True
        assert await any_roadmap_repo.find_by_id(roadmap.id) is None
        assert await any_roadmap_repo.delete(roadmap.id) is False

    @pytest.mark.asyncio
    async def test_stored_copy_is_not_aliased(self, any_roadmap_repo):
        roadmap = _make_roadmap()
        await any_roadmap_repo.save(roadmap)
        first = await any_roadmap_repo.find_by_id(roadmap.id)
        second = await any_roadmap_repo.find_by_id(roadmap.id)
        assert first == second
        assert first is not second
        assert first.timeframe_map is not second.timeframe_map


class TestJsonRoadmapRepository:
    @pytest.mark.asyncio
    async def test_unreadable_record_skipped_and_preserved(self, document_store):
        repo = JsonFileRoadmapRepository(document_store)
        bad = {"id": "roadmap-bad", "title": "Bad", "timeframes": [{"id": "t", "initiatives": [
            {"id": "i", "title": "I", "category": "not-a-category"}
        ]}]}
        await document_store.write_collection("roadmaps", [bad])

        good = _make_roadmap()
        await repo.save(good)

        assert [r.id for r in await repo.find_all()] == [good.id]
        raw = await document_store.read_collection("roadmaps")
        assert [r["id"] for r in raw] == ["roadmap-bad", good.id]

    @pytest.mark.asyncio
    async def test_record_without_id_is_skipped(self, document_store):
        await document_store.write_collection("roadmaps", [{"title": "no id"}])
        repo = JsonFileRoadmapRepository(document_store)
        assert await repo.find_all() == []

    @pytest.mark.asyncio
    async def test_null_note_fields_read_as_defaults(self, document_store):
        await document_store.write_collection(
            "roadmapNotes",
            [{"id": "roadmap-note-1", "title": None, "priority": None, "relatedItems": None}],
        )
        note = await JsonFileRoadmapNoteRepository(document_store).find_by_id("roadmap-note-1")
        assert note.title == ""
        assert note.priority == "medium"
        assert note.related_items == ()

    @pytest.mark.asyncio
    async def test_notes_and_roadmaps_share_document(self, document_store):
        roadmaps = JsonFileRoadmapRepository(document_store)
        notes = JsonFileRoadmapNoteRepository(document_store)
        roadmap = _make_roadmap()
        note = _make_note()

        await roadmaps.save(roadmap)
        await notes.save(note)

        document = await document_store.read_document()
        assert set(document) == {"roadmaps", "roadmapNotes"}
        assert await roadmaps.find_by_id(roadmap.id) == roadmap

    @pytest.mark.asyncio
    async def test_reads_camel_case_written_elsewhere(self, document_store):
        record = {
            "id": "roadmap-ext",
            "title": "External",
            "version": "1.0",
            "owner": "carol",
            "timeframes": [],
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-02T00:00:00.000Z",
        }
        await document_store.write_collection("roadmaps", [record])
        found = await JsonFileRoadmapRepository(document_store).find_by_id("roadmap-ext")
        assert found is not None
        assert found.owner == "carol"
        assert found.updated_at.year == 2024


# ---------------------------------------------------------------------------
# Note repositories
# ---------------------------------------------------------------------------

class TestNoteRepository:
    def test_satisfies_protocol(self, any_note_repo):
        assert isinstance(any_note_repo, IRoadmapNoteRepository)

    @pytest.mark.asyncio
    async def test_roundtrip(self, any_note_repo):
        note = _make_note(related_items=["roadmap-1"])
        await any_note_repo.save(note)
        assert await any_note_repo.find_by_id(note.id) == note

    @pytest.mark.asyncio
    async def test_filters(self, any_note_repo):
        a = _make_note(category="architecture", priority="high", timeline="Q1", related_items=["x"])
        b = _make_note(category="feature", priority="low", timeline="future")
        await any_note_repo.save(a)
        await any_note_repo.save(b)

        assert [n.id for n in await any_note_repo.find_by_category("feature")] == [b.id]
        assert [n.id for n in await any_note_repo.find_by_priority("high")] == [a.id]
        assert [n.id for n in await any_note_repo.find_by_timeline("future")] == [b.id]
        assert [n.id for n in await any_note_repo.find_by_related_item("x")] == [a.id]

    @pytest.mark.asyncio
    async def test_delete(self, any_note_repo):
        note = _make_note()
        await any_note_repo.save(note)
        assert await any_note_repo.delete(note.id) is True
        assert await any_note_repo.delete(note.id) is False
        assert await any_note_repo.find_all() == []
