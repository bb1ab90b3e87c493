"""Commit pipeline shared by every roadmap write.

Each write runs the same steps, in order:

1. normalize (renumber timeframes, rebalance priorities);
2. validate the whole aggregate, raising on any violation;
3. save;
4. pull the buffered events, stamp them with the write's trace id as
   ``correlation_id`` and dispatch them.  A ``RoadmapTimeframeAdded``
   event carries the order the timeframe was saved with, after
   renumbering.

Events are dispatched only after ``save`` returns, so a failed write
publishes nothing and a crash after the save loses the events
(at-most-once delivery).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from roadmap_planning.domain.entities import Roadmap
from roadmap_planning.domain.events import DomainEvent, RoadmapTimeframeAdded
from roadmap_planning.domain.repositories import IRoadmapRepository
from roadmap_planning.domain.services import RoadmapValidationService
from roadmap_planning.infrastructure.event_dispatcher import IEventDispatcher
from roadmap_planning.observability.logger import write_trace

logger = logging.getLogger(__name__)


def _as_persisted(event: DomainEvent, roadmap: Roadmap, trace_id: str) -> DomainEvent:
    if isinstance(event, RoadmapTimeframeAdded):
        timeframe = roadmap.get_timeframe(event.timeframe_id)
        if timeframe is not None:
            return replace(event, correlation_id=trace_id, order=timeframe.order)
    return replace(event, correlation_id=trace_id)


class RoadmapCommitPipeline:
    def __init__(
        self,
        repository: IRoadmapRepository,
        dispatcher: IEventDispatcher,
        validation: RoadmapValidationService | None = None,
    ) -> None:
        self._repository = repository
        self._dispatcher = dispatcher
        self._validation = validation or RoadmapValidationService()

    @property
    def repository(self) -> IRoadmapRepository:
        return self._repository

    async def commit(self, roadmap: Roadmap) -> Roadmap:
        """Normalize, validate, persist and publish *roadmap*.

        Returns the persisted aggregate.  Raises
        :class:`~roadmap_planning.core.errors.RoadmapValidationError`
        without saving anything when a rule is violated.
        """
        with write_trace(roadmap.id) as trace_id:
            normalized = self._validation.normalize_roadmap(roadmap)
            self._validation.ensure_valid(normalized)

            await self._repository.save(normalized)

            events = [
                _as_persisted(event, normalized, trace_id)
                for event in normalized.pull_events()
            ]
            logger.info(
                "Saved roadmap %s (%d event(s))", normalized.id, len(events)
            )
            await self._dispatcher.dispatch_all(events)
        return normalized


class RoadmapWriteService:
    """Base for services that load a roadmap, change it and commit it."""

    def __init__(self, pipeline: RoadmapCommitPipeline) -> None:
        self._pipeline = pipeline
        self._repository = pipeline.repository

    async def _apply(
        self,
        roadmap_id: str,
        change: Callable[[Roadmap], Roadmap],
    ) -> Roadmap | None:
        """Load *roadmap_id*, apply *change* and commit the result.

        Returns ``None`` when the roadmap does not exist.  Lookup errors
        raised by *change* propagate and nothing is saved.
        """
        roadmap = await self._repository.find_by_id(roadmap_id)
        if roadmap is None:
            logger.info("Roadmap %s not found", roadmap_id)
            return None
        return await self._pipeline.commit(change(roadmap))
