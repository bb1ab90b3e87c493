"""Custom exception hierarchy for the roadmap subsystem.

A roadmap id that is unknown at the root is *not* an error: command
services return ``None`` for it.  Everything below the root that cannot be
resolved raises :class:`EntityNotFoundError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import EntityLevel


class RoadmapError(Exception):
    """Base exception for all roadmap errors."""


# --- Configuration ---
class ConfigError(RoadmapError):
    """Invalid or unreadable configuration."""


# --- Input ---
class InvalidValueError(RoadmapError, ValueError):
    """A value could not be parsed (e.g. unknown category literal)."""


# --- Lookup ---
class EntityNotFoundError(RoadmapError, LookupError):
    """A nested entity id could not be resolved below a loaded root."""

    def __init__(
        self,
        level: EntityLevel,
        entity_id: str,
        parent_id: str | None = None,
    ) -> None:
        self.level = level
        self.entity_id = entity_id
        self.parent_id = parent_id
        message = f"{level.value.capitalize()} with ID {entity_id} not found"
        if parent_id is not None:
            message += f" in {_PARENT_LEVEL.get(level.value, 'parent')} {parent_id}"
        super().__init__(message)


_PARENT_LEVEL = {
    "timeframe": "roadmap",
    "initiative": "timeframe",
    "item": "initiative",
}


# --- Validation ---
class RoadmapValidationError(RoadmapError):
    """The aggregate violates one or more domain rules.

    ``errors`` holds every violated rule, not just the first.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            "Roadmap validation failed: " + "; ".join(self.errors)
        )


# --- Storage ---
class DocumentStoreError(RoadmapError):
    """Backing document is unreadable (bad JSON or unexpected shape)."""
