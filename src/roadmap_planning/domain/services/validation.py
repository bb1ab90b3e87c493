"""Whole-aggregate validation and normalization.

Validation never stops at the first problem: every violated rule is
reported so callers can fix them all at once.  Normalization always
succeeds and never removes entities.
"""

from __future__ import annotations

import logging
from collections import Counter

from pydantic import BaseModel, Field

from roadmap_planning.core.config import RuleConfig
from roadmap_planning.core.errors import RoadmapValidationError
from roadmap_planning.domain.entities import Roadmap

from .priority import RoadmapPriorityService
from .timeframes import RoadmapTimeframeService

logger = logging.getLogger(__name__)


class ValidationReport(BaseModel):
    valid: bool = True
    errors: list[str] = Field(default_factory=list)


def _normalize_title(title: str) -> str:
    return title.strip().casefold()


class RoadmapValidationService:
    """Checks every roadmap rule and applies the automatic fixes.

    Args:
        rules: Rule limits; defaults to :class:`RuleConfig` defaults.
        priority_service: Overrides the service built from *rules*.
        timeframe_service: Overrides the service built from *rules*.
    """

    def __init__(
        self,
        rules: RuleConfig | None = None,
        priority_service: RoadmapPriorityService | None = None,
        timeframe_service: RoadmapTimeframeService | None = None,
    ) -> None:
        rules = rules or RuleConfig()
        self._priority = priority_service or RoadmapPriorityService(
            max_high=rules.max_high_priority_initiatives
        )
        self._timeframes = timeframe_service or RoadmapTimeframeService(
            max_timeframes=rules.max_timeframes,
            order_start=rules.timeframe_order_start,
        )

    @property
    def priority_service(self) -> RoadmapPriorityService:
        return self._priority

    @property
    def timeframe_service(self) -> RoadmapTimeframeService:
        return self._timeframes

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_roadmap(self, roadmap: Roadmap) -> ValidationReport:
        errors: list[str] = []

        if not roadmap.title.strip():
            errors.append("Roadmap must have a title")
        if not roadmap.version.strip():
            errors.append("Roadmap must have a version")
        if not roadmap.owner.strip():
            errors.append("Roadmap must have an owner")

        errors.extend(self._duplicate_title_errors(roadmap))
        errors.extend(self._ownership_errors(roadmap))

        priority_check = self._priority.validate_priorities(roadmap)
        if not priority_check.valid:
            errors.append(priority_check.message)

        errors.extend(
            check.message for check in self._timeframes.validate_timeframes(roadmap)
        )

        return ValidationReport(valid=not errors, errors=errors)

    def ensure_valid(self, roadmap: Roadmap) -> None:
        """Raise :class:`RoadmapValidationError` listing every violation."""
        report = self.validate_roadmap(roadmap)
        if not report.valid:
            logger.warning(
                "Roadmap %s failed validation: %s", roadmap.id, report.errors
            )
            raise RoadmapValidationError(report.errors)

    @staticmethod
    def _duplicate_title_errors(roadmap: Roadmap) -> list[str]:
        errors: list[str] = []
        for timeframe in roadmap.timeframes:
            seen: set[str] = set()
            for initiative in timeframe.initiatives:
                key = _normalize_title(initiative.title)
                if key in seen:
                    errors.append(
                        f'Duplicate initiative title "{initiative.title}" '
                        f'in timeframe "{timeframe.name}"'
                    )
                else:
                    seen.add(key)
        return errors

    @staticmethod
    def _ownership_errors(roadmap: Roadmap) -> list[str]:
        """Every initiative and item must have exactly one parent."""
        initiative_ids = Counter(
            location.initiative.id for location in roadmap.all_initiatives()
        )
        item_ids = Counter(location.item.id for location in roadmap.all_items())

        errors = [
            f"Initiative {initiative_id} appears in {count} timeframes"
            for initiative_id, count in initiative_ids.items()
            if count > 1
        ]
        errors.extend(
            f"Item {item_id} appears in {count} initiatives"
            for item_id, count in item_ids.items()
            if count > 1
        )
        return errors

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def normalize_roadmap(self, roadmap: Roadmap) -> Roadmap:
        """Renumber timeframe orders, then rebalance priorities."""
        normalized = self._timeframes.normalize_timeframe_ordering(roadmap)
        return self._priority.rebalance_priorities(normalized)
