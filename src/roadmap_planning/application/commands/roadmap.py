"""Root-level roadmap commands: create, update, delete."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from roadmap_planning.core.errors import InvalidValueError
from roadmap_planning.domain.entities import Roadmap

from .payloads import TimeframeDraft
from .pipeline import RoadmapWriteService

logger = logging.getLogger(__name__)


def _parse_drafts(
    drafts: Iterable[TimeframeDraft | Mapping[str, Any]],
) -> list[TimeframeDraft]:
    parsed: list[TimeframeDraft] = []
    for draft in drafts:
        if isinstance(draft, TimeframeDraft):
            parsed.append(draft)
            continue
        try:
            parsed.append(TimeframeDraft.model_validate(draft))
        except ValidationError as exc:
            raise InvalidValueError(f"Invalid initial timeframe: {exc}") from exc
    return parsed


class RoadmapEntityCommandService(RoadmapWriteService):
    async def create_roadmap(
        self,
        title: str,
        description: str = "",
        version: str = "",
        owner: str = "",
        initial_timeframes: Iterable[TimeframeDraft | Mapping[str, Any]] | None = None,
    ) -> Roadmap:
        """Create a roadmap, optionally with a full timeframe tree.

        The whole tree is built in memory and committed in one write, so
        an invalid tree saves nothing.
        """
        drafts = _parse_drafts(initial_timeframes or ())
        roadmap = Roadmap.create(
            title, description=description, version=version, owner=owner
        )
        for draft in drafts:
            roadmap = roadmap.add_timeframe(draft.to_entity())

        created = await self._pipeline.commit(roadmap)
        logger.info(
            "Created roadmap %s with %d timeframe(s)", created.id, len(drafts)
        )
        return created

    async def update_roadmap(
        self,
        roadmap_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        version: str | None = None,
        owner: str | None = None,
    ) -> Roadmap | None:
        return await self._apply(
            roadmap_id,
            lambda roadmap: roadmap.update(
                title=title, description=description, version=version, owner=owner
            ),
        )

    async def delete_roadmap(self, roadmap_id: str) -> bool:
        return await self._repository.delete(roadmap_id)
