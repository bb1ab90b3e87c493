"""Timeframe rules: count limit, order uniqueness and renumbering."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from roadmap_planning.domain.entities import Roadmap

from .priority import RuleCheck

logger = logging.getLogger(__name__)


class TimeframeSuggestion(BaseModel):
    """Initiative titles grouped into horizons by priority."""

    short_term: list[str] = Field(default_factory=list)
    medium_term: list[str] = Field(default_factory=list)
    long_term: list[str] = Field(default_factory=list)


class RoadmapTimeframeService:
    def __init__(self, max_timeframes: int = 10, order_start: int = 1) -> None:
        self._max_timeframes = max_timeframes
        self._order_start = order_start

    def validate_timeframes(self, roadmap: Roadmap) -> list[RuleCheck]:
        """Check the count limit and order uniqueness.

        Returns one failed check per violated rule (empty when valid).
        """
        failures: list[RuleCheck] = []
        count = len(roadmap.timeframe_map)
        if count > self._max_timeframes:
            failures.append(
                RuleCheck(
                    valid=False,
                    message=(
                        f"Too many timeframes ({count}). "
                        f"Maximum allowed is {self._max_timeframes}."
                    ),
                )
            )

        seen: set[int] = set()
        duplicates: list[int] = []
        for timeframe in roadmap.timeframes:
            if timeframe.order in seen:
                duplicates.append(timeframe.order)
            else:
                seen.add(timeframe.order)
        if duplicates:
            failures.append(
                RuleCheck(
                    valid=False,
                    message="Duplicate timeframe orders detected: "
                    + ", ".join(str(o) for o in duplicates),
                )
            )
        return failures

    def normalize_timeframe_ordering(self, roadmap: Roadmap) -> Roadmap:
        """Renumber ``order`` sequentially from ``order_start``.

        The current sort (by order, ties in insertion order) is kept.
        Returns *roadmap* itself when nothing needs renumbering.
        """
        normalized = roadmap
        for position, timeframe in enumerate(roadmap.timeframes):
            target = self._order_start + position
            if timeframe.order != target:
                normalized = normalized.update_timeframe(timeframe.id, order=target)

        if normalized is not roadmap:
            logger.debug("Renumbered timeframes of roadmap %s", roadmap.id)
        return normalized

    @staticmethod
    def suggest_timeframe_structure(roadmap: Roadmap) -> TimeframeSuggestion:
        suggestion = TimeframeSuggestion()
        for location in roadmap.all_initiatives():
            initiative = location.initiative
            if initiative.priority.is_high:
                suggestion.short_term.append(initiative.title)
            elif initiative.priority.is_medium:
                suggestion.medium_term.append(initiative.title)
            else:
                suggestion.long_term.append(initiative.title)
        return suggestion
