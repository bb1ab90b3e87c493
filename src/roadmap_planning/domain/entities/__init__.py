"""Roadmap entities."""

from .initiative import RoadmapInitiative
from .item import RoadmapItem
from .note import RoadmapNote
from .roadmap import InitiativeLocation, ItemLocation, Roadmap
from .timeframe import RoadmapTimeframe

__all__ = [
    "InitiativeLocation",
    "ItemLocation",
    "Roadmap",
    "RoadmapInitiative",
    "RoadmapItem",
    "RoadmapNote",
    "RoadmapTimeframe",
]
