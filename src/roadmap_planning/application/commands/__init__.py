"""Roadmap command services."""

from .composite import CompositeRoadmapCommandService
from .initiative import InitiativeCommandService
from .item import ItemCommandService
from .note import RoadmapNoteCommandService
from .payloads import InitiativeDraft, ItemDraft, TimeframeDraft
from .pipeline import RoadmapCommitPipeline, RoadmapWriteService
from .roadmap import RoadmapEntityCommandService
from .timeframe import TimeframeCommandService

__all__ = [
    "CompositeRoadmapCommandService",
    "InitiativeCommandService",
    "InitiativeDraft",
    "ItemCommandService",
    "ItemDraft",
    "RoadmapCommitPipeline",
    "RoadmapEntityCommandService",
    "RoadmapNoteCommandService",
    "RoadmapWriteService",
    "TimeframeCommandService",
    "TimeframeDraft",
]
