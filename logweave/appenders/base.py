"""Appender interface: level gate, per-appender lock, template rendering."""
from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from logweave.config.schemas import DEFAULT_APPENDER_DATE_FORMAT, DEFAULT_APPENDER_FORMAT
from logweave.context import LogContext
from logweave.formatting.template import render
from logweave.level import Level
from logweave.record import LogEvent

logger = logging.getLogger(__name__)


class AppenderType(str, Enum):
    """Core appender kinds. Other kinds plug in through the AppenderRegistry."""

    CONSOLE = "CONSOLE"
    FILE = "FILE"


class Appender(ABC):
    """A log destination with its own level, format pattern and date pattern.

    append() is the only entry point for events. It applies the level gate and
    then runs the subclass _append() inside this appender's lock, so one
    appender never interleaves two writes (or a rotation and a write).
    Failures are reported on the diagnostics logger and never reach the caller.
    """

    def __init__(
        self,
        *,
        level: Union[Level, str] = Level.INFO,
        format: str = DEFAULT_APPENDER_FORMAT,
        date_format: str = DEFAULT_APPENDER_DATE_FORMAT,
        enabled: bool = True,
        context: Optional[LogContext] = None,
        created: Optional[datetime] = None,
    ) -> None:
        self.level = Level.from_string(level) if isinstance(level, str) else Level(level)
        self.format = format
        self.date_format = date_format
        self.initial_format = format
        self.initial_date_format = date_format
        self.enabled = enabled
        self.context = context
        self.created = created or datetime.now()
        self._lock = threading.Lock()

    @property
    @abstractmethod
    def type_name(self) -> str:
        """Type tag, also used as the logger name when an event has none."""

    @abstractmethod
    def _append(self, event: LogEvent) -> None:
        """Write one event. Called with the appender lock held."""

    def is_enabled_for(self, level: Level) -> bool:
        return self.enabled and self.level is not Level.OFF and level >= self.level

    def append(self, event: LogEvent) -> None:
        if not self.is_enabled_for(event.level):
            return
        with self._lock:
            try:
                self._append(event)
            except Exception:
                logger.error(
                    "Appender %s failed to write an event",
                    self.type_name,
                    exc_info=True,
                    extra={"appender": self.type_name},
                )

    def render(self, event: LogEvent) -> str:
        """The formatted line for *event* (without error or stack trace lines)."""
        return render(
            event,
            self.format,
            self.date_format,
            context=self.context,
            fallback_logger_name=self.type_name,
        )

    def format_event(self, event: LogEvent) -> str:
        """Rendered line followed by tab-indented error and stack trace lines."""
        lines: List[str] = [self.render(event)]
        tabs = "\t"
        if event.error is not None:
            lines.append(f"{tabs}{event.error}")
            tabs += tabs
        if event.stack_trace:
            lines.append(f"{tabs}{event.stack_trace}")
        return "\n".join(lines)

    def flush(self) -> None:
        """Push buffered output to the destination."""

    def dispose(self) -> None:
        """Release resources held by this appender."""

    def copy(self) -> "Appender":
        """Independent copy with the same configuration and a fresh lock."""
        clone = copy.copy(self)
        clone._lock = threading.Lock()
        clone._after_copy()
        return clone

    def _after_copy(self) -> None:
        pass

    def get_config(self) -> Dict[str, Any]:
        return {
            "type": self.type_name,
            "level": self.level.name,
            "format": self.format,
            "dateFormat": self.date_format,
            "enabled": self.enabled,
            "created": self.created.isoformat(),
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(level={self.level.name}, format={self.format!r}, "
            f"date_format={self.date_format!r}, enabled={self.enabled})"
        )
