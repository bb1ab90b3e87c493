"""Audit handlers for roadmap domain events.

Each handler writes one structured log line; completing an item adds a
second, ``roadmap.item_completed`` line.
"""

from __future__ import annotations

from roadmap_planning.domain.events import (
    RoadmapCreated,
    RoadmapInitiativeCategoryChanged,
    RoadmapInitiativePriorityChanged,
    RoadmapItemStatusChanged,
)
from roadmap_planning.infrastructure.event_dispatcher import IEventDispatcher
from roadmap_planning.observability.logger import get_logger

log = get_logger(__name__)


class RoadmapEventHandlers:
    def __init__(self, dispatcher: IEventDispatcher) -> None:
        self._dispatcher = dispatcher

    def register(self) -> None:
        self._dispatcher.register(RoadmapCreated, self.on_roadmap_created)
        self._dispatcher.register(RoadmapItemStatusChanged, self.on_item_status_changed)
        self._dispatcher.register(
            RoadmapInitiativePriorityChanged, self.on_priority_changed
        )
        self._dispatcher.register(
            RoadmapInitiativeCategoryChanged, self.on_category_changed
        )

    def on_roadmap_created(self, event: RoadmapCreated) -> None:
        log.info(
            "roadmap.created",
            roadmap_id=event.roadmap_id,
            title=event.title,
            version=event.version,
            correlation_id=event.correlation_id,
        )

    def on_item_status_changed(self, event: RoadmapItemStatusChanged) -> None:
        log.info(
            "roadmap.item_status_changed",
            roadmap_id=event.roadmap_id,
            item_id=event.item_id,
            old_status=event.old_status.value,
            new_status=event.new_status.value,
            correlation_id=event.correlation_id,
        )
        if event.new_status.is_completed:
            log.info(
                "roadmap.item_completed",
                roadmap_id=event.roadmap_id,
                timeframe_id=event.timeframe_id,
                initiative_id=event.initiative_id,
                item_id=event.item_id,
            )

    def on_priority_changed(self, event: RoadmapInitiativePriorityChanged) -> None:
        log.info(
            "roadmap.initiative_priority_changed",
            roadmap_id=event.roadmap_id,
            initiative_id=event.initiative_id,
            old_priority=event.old_priority.value,
            new_priority=event.new_priority.value,
            correlation_id=event.correlation_id,
        )

    def on_category_changed(self, event: RoadmapInitiativeCategoryChanged) -> None:
        log.info(
            "roadmap.initiative_category_changed",
            roadmap_id=event.roadmap_id,
            initiative_id=event.initiative_id,
            old_category=event.old_category.value,
            new_category=event.new_category.value,
            correlation_id=event.correlation_id,
        )
