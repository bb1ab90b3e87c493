"""Enumerations used across the roadmap model.

The ``value`` of each member is the wire format written to storage.
"""

from __future__ import annotations

from enum import Enum

from .errors import InvalidValueError


class _ParseableEnum(str, Enum):
    """``str`` enum with a case-insensitive parser."""

    @classmethod
    def from_string(cls, value: str | _ParseableEnum):
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidValueError(
                f"Invalid {cls._label()} value: {value!r}"
            )
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise InvalidValueError(f"Invalid {cls._label()} value: {value}")

    @classmethod
    def _label(cls) -> str:
        return cls.__name__.lower()

    def __str__(self) -> str:
        return self.value


class Category(_ParseableEnum):
    FEATURE = "feature"
    ENHANCEMENT = "enhancement"
    BUG = "bug"
    ARCHITECTURE = "architecture"
    TECH_DEBT = "tech-debt"
    RESEARCH = "research"
    DOCUMENTATION = "documentation"
    OTHER = "other"

    @property
    def is_feature(self) -> bool:
        return self is Category.FEATURE

    @property
    def is_enhancement(self) -> bool:
        return self is Category.ENHANCEMENT

    @property
    def is_bug(self) -> bool:
        return self is Category.BUG

    @property
    def is_architecture(self) -> bool:
        return self is Category.ARCHITECTURE

    @property
    def is_tech_debt(self) -> bool:
        return self is Category.TECH_DEBT

    @property
    def is_research(self) -> bool:
        return self is Category.RESEARCH

    @property
    def is_documentation(self) -> bool:
        return self is Category.DOCUMENTATION


class Priority(_ParseableEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def is_high(self) -> bool:
        return self is Priority.HIGH

    @property
    def is_medium(self) -> bool:
        return self is Priority.MEDIUM

    @property
    def is_low(self) -> bool:
        return self is Priority.LOW


class Status(_ParseableEnum):
    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELED = "canceled"

    @property
    def is_active(self) -> bool:
        """Planned or in progress."""
        return self in (Status.PLANNED, Status.IN_PROGRESS)

    @property
    def is_completed(self) -> bool:
        return self is Status.COMPLETED

    @property
    def is_canceled(self) -> bool:
        return self is Status.CANCELED


class EntityLevel(str, Enum):
    """Nesting level of an entity, used in not-found errors."""

    TIMEFRAME = "timeframe"
    INITIATIVE = "initiative"
    ITEM = "item"
