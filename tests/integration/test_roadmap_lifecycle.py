"""End-to-end roadmap lifecycle against the JSON document store."""

from __future__ import annotations

import json

import pytest

from roadmap_planning.application.commands import CompositeRoadmapCommandService
from roadmap_planning.application.queries import RoadmapQueryService
from roadmap_planning.core.enums import Category, EntityLevel, Priority, Status
from roadmap_planning.core.errors import EntityNotFoundError, RoadmapValidationError
from roadmap_planning.infrastructure.repositories import (
    JsonFileRoadmapNoteRepository,
    JsonFileRoadmapRepository,
)


@pytest.fixture
def roadmap_repo(document_store) -> JsonFileRoadmapRepository:
    return JsonFileRoadmapRepository(document_store)


@pytest.fixture
def note_repo(document_store) -> JsonFileRoadmapNoteRepository:
    return JsonFileRoadmapNoteRepository(document_store)


@pytest.fixture
def commands(roadmap_repo, note_repo, dispatcher) -> CompositeRoadmapCommandService:
    return CompositeRoadmapCommandService(roadmap_repo, note_repo, dispatcher)


@pytest.fixture
def queries(roadmap_repo, note_repo) -> RoadmapQueryService:
    return RoadmapQueryService(roadmap_repo, note_repo)


async def _plan_with_timeframes(commands, *names: str):
    roadmap = await commands.create_roadmap("Q3 Plan", version="1.0", owner="alice")
    for order, name in enumerate(names, start=1):
        roadmap = await commands.add_timeframe(roadmap.id, name, order)
    return roadmap


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_q3_plan_reloads_one_of_each(self, commands, roadmap_repo):
        roadmap = await _plan_with_timeframes(commands, "Q3")
        timeframe_id = roadmap.timeframes[0].id
        roadmap = await commands.add_initiative(
            roadmap.id, timeframe_id, "Perf", category="enhancement", priority="high"
        )
        initiative_id = roadmap.all_initiatives()[0].initiative.id
        await commands.add_item(
            roadmap.id, timeframe_id, initiative_id, "Profile hotspots", status="planned"
        )

        loaded = await roadmap_repo.find_by_id(roadmap.id)

        assert (loaded.title, loaded.version, loaded.owner) == ("Q3 Plan", "1.0", "alice")
        [timeframe] = loaded.timeframes
        assert (timeframe.name, timeframe.order) == ("Q3", 1)
        [initiative] = timeframe.initiatives
        assert initiative.title == "Perf"
        assert initiative.category is Category.ENHANCEMENT
        assert initiative.priority is Priority.HIGH
        [item] = initiative.items
        assert (item.title, item.status) == ("Profile hotspots", Status.PLANNED)

    @pytest.mark.asyncio
    async def test_build_complete_and_summarize(
        self, commands, queries, document_store, recorded_events
    ):
        roadmap = await _plan_with_timeframes(commands, "Q3")
        timeframe_id = roadmap.timeframes[0].id
        roadmap = await commands.add_initiative(
            roadmap.id, timeframe_id, "Search", category="feature", priority="high"
        )
        initiative_id = roadmap.all_initiatives()[0].initiative.id
        roadmap = await commands.add_item(
            roadmap.id, timeframe_id, initiative_id, "Index", status="in-progress"
        )
        item_id = roadmap.all_items()[0].item.id

        roadmap = await commands.update_item(
            roadmap.id, timeframe_id, initiative_id, item_id, status="completed"
        )

        summary = await queries.get_roadmap_summary(roadmap.id)
        assert (summary.timeframe_count, summary.initiative_count, summary.item_count) == (
            1,
            1,
            1,
        )
        assert summary.completion_ratio == 1.0

        stored = (await queries.get_roadmap(roadmap.id)).all_items()[0]
        assert stored.timeframe_id == timeframe_id
        assert stored.initiative_id == initiative_id
        assert stored.item.status.is_completed

        assert [e.event_type for e in recorded_events] == [
            "RoadmapCreated",
            "RoadmapTimeframeAdded",
            "RoadmapInitiativeAdded",
            "RoadmapItemAdded",
            "RoadmapItemStatusChanged",
        ]
        assert all(e.roadmap_id == roadmap.id for e in recorded_events)
        assert len({e.correlation_id for e in recorded_events}) == 5

        document = json.loads(document_store.path.read_text())
        assert document["roadmaps"][0]["timeframes"][0]["initiatives"][0]["items"][0][
            "status"
        ] == "completed"

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, commands, queries):
        roadmap = await _plan_with_timeframes(commands, "Q3")
        note = await commands.create_note(roadmap.id, "Remember", category="feature")

        assert await commands.delete_roadmap(roadmap.id) is True
        assert await queries.get_roadmap(roadmap.id) is None
        assert await commands.delete_roadmap(roadmap.id) is False
        assert await commands.add_timeframe(roadmap.id, "Q4", 2) is None
        assert (await queries.get_roadmap_note(note.id)).related_items == (roadmap.id,)

    @pytest.mark.asyncio
    async def test_moving_twice_reports_source_timeframe(self, commands, queries):
        roadmap = await _plan_with_timeframes(commands, "Q3", "Q4")
        q3, q4 = (tf.id for tf in roadmap.timeframes)
        roadmap = await commands.add_initiative(roadmap.id, q3, "Search")
        initiative_id = roadmap.all_initiatives()[0].initiative.id

        moved = await commands.move_initiative(roadmap.id, q3, q4, initiative_id)
        assert moved.locate_initiative(initiative_id).timeframe_id == q4

        with pytest.raises(EntityNotFoundError) as excinfo:
            await commands.move_initiative(roadmap.id, q3, q4, initiative_id)
        assert excinfo.value.level is EntityLevel.INITIATIVE
        assert excinfo.value.entity_id == initiative_id
        assert excinfo.value.parent_id == q3

        stored = await queries.get_roadmap(roadmap.id)
        assert stored.locate_initiative(initiative_id).timeframe_id == q4

    @pytest.mark.asyncio
    async def test_near_duplicate_title_rejected_without_saving(self, commands, queries):
        roadmap = await _plan_with_timeframes(commands, "Q3")
        timeframe_id = roadmap.timeframes[0].id
        await commands.add_initiative(roadmap.id, timeframe_id, "Improve Search")

        with pytest.raises(RoadmapValidationError) as excinfo:
            await commands.add_initiative(roadmap.id, timeframe_id, "improve search ")

        assert len(excinfo.value.errors) == 1
        assert "Duplicate initiative title" in excinfo.value.errors[0]
        stored = await queries.get_roadmap(roadmap.id)
        assert [loc.initiative.title for loc in stored.all_initiatives()] == [
            "Improve Search"
        ]

    @pytest.mark.asyncio
    async def test_surplus_high_priority_is_downgraded(self, commands, queries):
        roadmap = await _plan_with_timeframes(commands, "Q3")
        timeframe_id = roadmap.timeframes[0].id
        for n in range(6):
            roadmap = await commands.add_initiative(
                roadmap.id, timeframe_id, f"Initiative {n}", priority="high"
            )

        high = await queries.get_initiatives_by_priority(roadmap.id, Priority.HIGH)
        medium = await queries.get_initiatives_by_priority(roadmap.id, Priority.MEDIUM)
        assert len(high) == 5
        assert len(medium) == 1
