"""Shared fixtures for the roadmap-planning test suite."""

from __future__ import annotations

import pytest

from roadmap_planning.application.commands import CompositeRoadmapCommandService
from roadmap_planning.application.queries import RoadmapQueryService
from roadmap_planning.domain.events import DomainEvent
from roadmap_planning.infrastructure.document_store import JsonDocumentStore
from roadmap_planning.infrastructure.event_dispatcher import EventDispatcher
from roadmap_planning.infrastructure.repositories import (
    InMemoryRoadmapNoteRepository,
    InMemoryRoadmapRepository,
)


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------

@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher()


@pytest.fixture
def recorded_events(dispatcher: EventDispatcher) -> list[DomainEvent]:
    """Every event dispatched through ``dispatcher``."""
    events: list[DomainEvent] = []
    dispatcher.register(DomainEvent, events.append)
    return events


@pytest.fixture
def roadmap_repo() -> InMemoryRoadmapRepository:
    return InMemoryRoadmapRepository()


@pytest.fixture
def note_repo() -> InMemoryRoadmapNoteRepository:
    return InMemoryRoadmapNoteRepository()


@pytest.fixture
def document_store(tmp_path) -> JsonDocumentStore:
    return JsonDocumentStore(tmp_path / "roadmap.json")


@pytest.fixture
def commands(
    roadmap_repo: InMemoryRoadmapRepository,
    note_repo: InMemoryRoadmapNoteRepository,
    dispatcher: EventDispatcher,
) -> CompositeRoadmapCommandService:
    return CompositeRoadmapCommandService(roadmap_repo, note_repo, dispatcher)


@pytest.fixture
def queries(
    roadmap_repo: InMemoryRoadmapRepository,
    note_repo: InMemoryRoadmapNoteRepository,
) -> RoadmapQueryService:
    return RoadmapQueryService(roadmap_repo, note_repo)
