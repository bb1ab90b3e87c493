"""High-priority budget for a roadmap.

A roadmap may hold at most ``max_high`` high-priority initiatives across
all of its timeframes.  :meth:`RoadmapPriorityService.rebalance_priorities`
brings an over-budget roadmap back within the limit by downgrading the
initiatives that matter least right now: those in later timeframes and
those with fewer items.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from roadmap_planning.core.enums import Priority
from roadmap_planning.domain.entities import Roadmap

logger = logging.getLogger(__name__)


class RuleCheck(BaseModel):
    """Outcome of a single roadmap-wide rule."""

    valid: bool = True
    message: str = ""


class RoadmapPriorityService:
    def __init__(self, max_high: int = 5) -> None:
        self._max_high = max_high

    @property
    def max_high(self) -> int:
        return self._max_high

    @staticmethod
    def count_high_priority(roadmap: Roadmap) -> int:
        return sum(
            1
            for location in roadmap.all_initiatives()
            if location.initiative.priority.is_high
        )

    def validate_priorities(self, roadmap: Roadmap) -> RuleCheck:
        count = self.count_high_priority(roadmap)
        if count > self._max_high:
            return RuleCheck(
                valid=False,
                message=(
                    f"Too many high-priority initiatives ({count}). "
                    f"Maximum allowed is {self._max_high}."
                ),
            )
        return RuleCheck()

    def rebalance_priorities(self, roadmap: Roadmap) -> Roadmap:
        """Downgrade surplus high-priority initiatives to medium.

        Candidates are scored ``order * 10 - item_count`` and the highest
        scores are downgraded first; ties keep timeframe/initiative order.
        Returns *roadmap* itself when it is already within budget.
        """
        scored: list[tuple[int, str, str]] = []
        for timeframe in roadmap.timeframes:
            for initiative in timeframe.initiatives:
                if initiative.priority.is_high:
                    score = timeframe.order * 10 - len(initiative.item_map)
                    scored.append((score, timeframe.id, initiative.id))

        surplus = len(scored) - self._max_high
        if surplus <= 0:
            return roadmap

        scored.sort(key=lambda entry: entry[0], reverse=True)
        for _, timeframe_id, initiative_id in scored[:surplus]:
            roadmap = roadmap.update_initiative(
                timeframe_id, initiative_id, priority=Priority.MEDIUM
            )

        logger.info(
            "Downgraded %d high-priority initiative(s) on roadmap %s",
            surplus,
            roadmap.id,
        )
        return roadmap
