"""Application wiring.

Usage::

    app = create_application(load_settings("roadmap.toml"))
    roadmap = await app.commands.create_roadmap("Q3 Plan", version="1.0", owner="alice")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from roadmap_planning.core.config import Settings
from roadmap_planning.domain.repositories import (
    IRoadmapNoteRepository,
    IRoadmapRepository,
)
from roadmap_planning.domain.services import RoadmapValidationService
from roadmap_planning.infrastructure.document_store import JsonDocumentStore
from roadmap_planning.infrastructure.event_dispatcher import EventDispatcher
from roadmap_planning.infrastructure.repositories import (
    InMemoryRoadmapNoteRepository,
    InMemoryRoadmapRepository,
    JsonFileRoadmapNoteRepository,
    JsonFileRoadmapRepository,
)
from roadmap_planning.observability.logger import setup_logging

from .commands import CompositeRoadmapCommandService
from .event_handlers import RoadmapEventHandlers
from .queries import RoadmapQueryService

logger = logging.getLogger(__name__)


@dataclass
class RoadmapApplication:
    settings: Settings
    roadmap_repository: IRoadmapRepository
    note_repository: IRoadmapNoteRepository
    dispatcher: EventDispatcher
    validation: RoadmapValidationService
    commands: CompositeRoadmapCommandService
    queries: RoadmapQueryService
    event_handlers: RoadmapEventHandlers


def create_application(
    settings: Settings | None = None,
    *,
    in_memory: bool = False,
    configure_logging: bool = False,
) -> RoadmapApplication:
    """Build a fully wired application.

    Args:
        settings: Defaults to ``Settings()`` (env vars applied).
        in_memory: Use in-memory repositories instead of the JSON document.
        configure_logging: Call :func:`setup_logging` from the settings.
    """
    settings = settings or Settings()
    if configure_logging:
        setup_logging(
            level=settings.observability.log_level,
            format=settings.observability.log_format,
        )

    roadmap_repository: IRoadmapRepository
    note_repository: IRoadmapNoteRepository
    if in_memory:
        roadmap_repository = InMemoryRoadmapRepository()
        note_repository = InMemoryRoadmapNoteRepository()
    else:
        store = JsonDocumentStore(settings.storage_path())
        roadmap_repository = JsonFileRoadmapRepository(store)
        note_repository = JsonFileRoadmapNoteRepository(store)
        logger.info("Using roadmap document %s", store.path)

    dispatcher = EventDispatcher()
    validation = RoadmapValidationService(settings.rules)
    handlers = RoadmapEventHandlers(dispatcher)
    handlers.register()

    return RoadmapApplication(
        settings=settings,
        roadmap_repository=roadmap_repository,
        note_repository=note_repository,
        dispatcher=dispatcher,
        validation=validation,
        commands=CompositeRoadmapCommandService(
            roadmap_repository, note_repository, dispatcher, validation
        ),
        queries=RoadmapQueryService(
            roadmap_repository, note_repository, validation.timeframe_service
        ),
        event_handlers=handlers,
    )
