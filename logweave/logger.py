"""Logger: the caller-facing API that fans one event out to its appenders."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from logweave.appenders.base import Appender, AppenderType
from logweave.level import Level
from logweave.record import LogEvent, register_internal_file

logger = logging.getLogger(__name__)

register_internal_file(__file__)

ROOT_LOGGER_NAME = "ROOT_LOGGER"


class Logger:
    """Named logger owning a list of appenders.

    An event is only built (call site captured, deferred message kept
    unevaluated) when at least one appender accepts its level. Logging calls
    never raise.
    """

    def __init__(
        self,
        name: str = ROOT_LOGGER_NAME,
        appenders: Optional[Iterable[Appender]] = None,
        *,
        tag: Optional[str] = None,
        depth_offset: int = 0,
        enabled: bool = True,
    ) -> None:
        self.name = name
        self.appenders: List[Appender] = list(appenders or [])
        self.tag = tag
        self.depth_offset = depth_offset
        self.enabled = enabled

    # ── Logging ────────────────────────────────────────────────────

    def is_enabled_for(self, level: Level) -> bool:
        return self.enabled and any(a.is_enabled_for(level) for a in self.appenders)

    def log(
        self,
        level: Level,
        message: Any,
        *,
        tag: Optional[str] = None,
        error: Optional[object] = None,
        stack_trace: Optional[str] = None,
        depth_offset: int = 0,
    ) -> None:
        """Log *message* (str, zero-arg callable or any object) at *level*."""
        if not self.enabled:
            return
        targets = [a for a in self.appenders if a.is_enabled_for(level)]
        if not targets:
            return
        try:
            event = LogEvent.create(
                level,
                message,
                tag=tag if tag is not None else self.tag,
                logger_name=self.name,
                error=error,
                stack_trace=stack_trace,
                depth_offset=self.depth_offset + depth_offset,
            )
        except Exception:
            logger.error("Could not build log event for logger %s", self.name, exc_info=True)
            return
        for appender in targets:
            appender.append(event)

    def trace(self, message: Any, *, tag: Optional[str] = None,
              error: Optional[object] = None, stack_trace: Optional[str] = None) -> None:
        self.log(Level.TRACE, message, tag=tag, error=error, stack_trace=stack_trace)

    def debug(self, message: Any, *, tag: Optional[str] = None,
              error: Optional[object] = None, stack_trace: Optional[str] = None) -> None:
        self.log(Level.DEBUG, message, tag=tag, error=error, stack_trace=stack_trace)

    def info(self, message: Any, *, tag: Optional[str] = None,
             error: Optional[object] = None, stack_trace: Optional[str] = None) -> None:
        self.log(Level.INFO, message, tag=tag, error=error, stack_trace=stack_trace)

    def warn(self, message: Any, *, tag: Optional[str] = None,
             error: Optional[object] = None, stack_trace: Optional[str] = None) -> None:
        self.log(Level.WARN, message, tag=tag, error=error, stack_trace=stack_trace)

    def error(self, message: Any, *, tag: Optional[str] = None,
              error: Optional[object] = None, stack_trace: Optional[str] = None) -> None:
        self.log(Level.ERROR, message, tag=tag, error=error, stack_trace=stack_trace)

    def fatal(self, message: Any, *, tag: Optional[str] = None,
              error: Optional[object] = None, stack_trace: Optional[str] = None) -> None:
        self.log(Level.FATAL, message, tag=tag, error=error, stack_trace=stack_trace)

    # ── Appender management ────────────────────────────────────────

    def add_appender(self, appender: Appender) -> None:
        logger.info("Adding %s appender to logger %s", appender.type_name, self.name)
        self.appenders.append(appender)

    def appenders_of(self, appender_type: Union[AppenderType, str]) -> List[Appender]:
        key = appender_type.value if isinstance(appender_type, AppenderType) else appender_type.upper()
        return [a for a in self.appenders if a.type_name == key]

    def set_level_all(self, level: Union[Level, str]) -> None:
        for appender in self.appenders:
            appender.level = _level(level)

    def set_level(self, appender_type: Union[AppenderType, str], level: Union[Level, str]) -> None:
        for appender in self.appenders_of(appender_type):
            appender.level = _level(level)

    def set_format_all(self, format: str) -> None:
        for appender in self.appenders:
            appender.format = format

    def set_format(self, appender_type: Union[AppenderType, str], format: str) -> None:
        for appender in self.appenders_of(appender_type):
            appender.format = format

    def reset_format_to_initial_config(self) -> None:
        for appender in self.appenders:
            appender.format = appender.initial_format

    def set_date_format_all(self, date_format: str) -> None:
        for appender in self.appenders:
            appender.date_format = date_format

    def set_date_format(self, appender_type: Union[AppenderType, str], date_format: str) -> None:
        for appender in self.appenders_of(appender_type):
            appender.date_format = date_format

    def reset_date_format_to_initial_config(self) -> None:
        for appender in self.appenders:
            appender.date_format = appender.initial_date_format

    def flush(self) -> None:
        for appender in self.appenders:
            try:
                appender.flush()
            except Exception:
                logger.error("Error flushing appender %s", appender.type_name, exc_info=True)

    def dispose(self) -> None:
        logger.debug("Disposing logger %s", self.name)
        for appender in self.appenders:
            try:
                appender.dispose()
            except Exception:
                logger.error("Error disposing appender %s", appender.type_name, exc_info=True)
        self.appenders.clear()

    def derive(self, name: str) -> "Logger":
        """A new logger named *name* with copies of this logger's appenders."""
        return Logger(
            name,
            [a.copy() for a in self.appenders],
            tag=self.tag,
            depth_offset=self.depth_offset,
            enabled=self.enabled,
        )

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "enabled": self.enabled,
            "tag": self.tag,
            "depthOffset": self.depth_offset,
            "appenders": [a.get_config() for a in self.appenders],
        }

    def __repr__(self) -> str:
        types = [a.type_name for a in self.appenders]
        return f"Logger(name={self.name!r}, appenders={types}, depth_offset={self.depth_offset})"


def _level(level: Union[Level, str]) -> Level:
    return Level.from_string(level) if isinstance(level, str) else Level(level)
