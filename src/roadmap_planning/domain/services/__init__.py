"""Domain services: rules that span the whole roadmap aggregate."""

from .priority import RoadmapPriorityService, RuleCheck
from .timeframes import RoadmapTimeframeService, TimeframeSuggestion
from .validation import RoadmapValidationService, ValidationReport

__all__ = [
    "RoadmapPriorityService",
    "RoadmapTimeframeService",
    "RoadmapValidationService",
    "RuleCheck",
    "TimeframeSuggestion",
    "ValidationReport",
]
