"""Severity levels, ordered by numeric weight."""
from __future__ import annotations

from enum import IntEnum
from typing import Optional

from logweave.core.exceptions import ConfigurationError

_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}


class Level(IntEnum):
    """ALL < TRACE < DEBUG < INFO < WARN < ERROR < FATAL < OFF."""

    ALL = 0
    TRACE = 100
    DEBUG = 200
    INFO = 300
    WARN = 400
    ERROR = 500
    FATAL = 600
    OFF = 700

    @classmethod
    def from_string(cls, value: Optional[str]) -> "Level":
        """Resolve a level name (case-insensitive). Raises ConfigurationError if unknown."""
        level = cls.try_from_string(value)
        if level is None:
            valid = [lvl.name for lvl in cls]
            raise ConfigurationError(
                f"Unknown level: {value!r}. Valid levels: {', '.join(valid)}",
                details={"field": "level", "value": value, "valid": valid},
            )
        return level

    @classmethod
    def try_from_string(cls, value: Optional[str]) -> Optional["Level"]:
        if value is None:
            return None
        key = value.strip().upper()
        key = _ALIASES.get(key, key)
        return cls.__members__.get(key)

    def __str__(self) -> str:
        return self.name
