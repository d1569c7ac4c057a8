"""
File appender with time-bucketed rotation.

Each write runs {rotation check, reopen, append} inside the appender lock.
A failed write is reported, the directory and file are recreated and the
write is retried once; if that fails too the event is dropped and the next
event tries again from the same state.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Union

from logweave.appenders.base import Appender, AppenderType
from logweave.config.loader import validate_config
from logweave.config.schemas import FileAppenderConfigSchema
from logweave.core.exceptions import AppenderIOError, ConfigurationError
from logweave.record import LogEvent
from logweave.rotation.cycle import RotationCycle, file_name_for

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def ensure_exists(path: str) -> None:
    """Create the parent directory and an empty file at *path* if missing."""
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(path):
            with open(path, "a", encoding="utf-8"):
                pass
    except OSError as exc:
        raise AppenderIOError(
            f"Cannot create log file {path}: {exc}",
            details={"path": path},
            cause=exc,
        ) from exc


def append_line(path: str, text: str) -> None:
    """Append *text* plus a newline to *path*."""
    try:
        with open(path, "a", encoding="utf-8") as fh:
            fh.write(text + "\n")
    except OSError as exc:
        raise AppenderIOError(
            f"Cannot write to log file {path}: {exc}",
            details={"path": path},
            cause=exc,
        ) from exc


@dataclass
class FileSinkState:
    """Bucket currently written to. Only mutated under the appender lock."""

    opened_at: datetime
    resolved_path: str


class FileAppender(Appender):
    """Writes to ``<path>/<file_pattern><suffix>.<file_extension>``."""

    def __init__(
        self,
        file_pattern: str,
        *,
        path: str = "logs/",
        file_extension: str = "log",
        rotation_cycle: Union[RotationCycle, str] = RotationCycle.NEVER,
        clock: Optional[Clock] = None,
        **kwargs: Any,
    ) -> None:
        if not file_pattern or not str(file_pattern).strip():
            raise ConfigurationError(
                "Missing filePattern for file appender",
                details={"field": "filePattern"},
            )
        self.file_pattern = file_pattern
        self.path = path
        self.file_extension = file_extension
        self.rotation_cycle = (
            RotationCycle.from_string(rotation_cycle)
            if isinstance(rotation_cycle, str) and not isinstance(rotation_cycle, RotationCycle)
            else rotation_cycle
        )
        self._clock: Clock = clock or datetime.now
        kwargs.setdefault("created", self._clock())
        super().__init__(**kwargs)
        self.state = FileSinkState(
            opened_at=self.created,
            resolved_path=self.file_name_at(self.created),
        )
        self._open_current()

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        *,
        created: Optional[datetime] = None,
        clock: Optional[Clock] = None,
        **_: Any,
    ) -> "FileAppender":
        schema = validate_config(FileAppenderConfigSchema, config, "file appender")
        kwargs: Dict[str, Any] = {}
        if created is not None:
            kwargs["created"] = created
        return cls(
            schema.file_pattern,
            path=schema.path,
            file_extension=schema.file_extension,
            rotation_cycle=schema.rotation_cycle,
            clock=clock,
            level=schema.level,
            format=schema.format,
            date_format=schema.date_format,
            enabled=schema.enabled,
            **kwargs,
        )

    @property
    def type_name(self) -> str:
        return AppenderType.FILE.value

    @property
    def resolved_path(self) -> str:
        return self.state.resolved_path

    def file_name_at(self, timestamp: datetime) -> str:
        return os.path.abspath(
            file_name_for(
                self.path,
                self.file_pattern,
                self.file_extension,
                self.rotation_cycle,
                timestamp,
            )
        )

    def _open_current(self) -> None:
        try:
            ensure_exists(self.state.resolved_path)
        except AppenderIOError as exc:
            logger.error("%s; will retry on next write", exc, extra={"appender": self.type_name})

    def check_rotation(self) -> bool:
        """Move to a new bucket's file if the current one is stale. Lock must be held."""
        now = self._clock()
        if not self.rotation_cycle.should_rotate(self.state.opened_at, now):
            return False
        previous = self.state.resolved_path
        self.state.opened_at = now
        self.state.resolved_path = self.file_name_at(now)
        self._open_current()
        logger.info(
            "Rotated log file for pattern %s: %s -> %s",
            self.file_pattern,
            previous,
            self.state.resolved_path,
        )
        return True

    def _append(self, event: LogEvent) -> None:
        self.check_rotation()
        text = self.format_event(event)
        target = self.state.resolved_path
        try:
            append_line(target, text)
        except AppenderIOError as exc:
            logger.warning("%s; recreating file and retrying once", exc)
            try:
                ensure_exists(target)
                append_line(target, text)
            except AppenderIOError as retry_exc:
                logger.error("Dropping log event after retry: %s", retry_exc)

    def _after_copy(self) -> None:
        self.state = FileSinkState(
            opened_at=self.state.opened_at,
            resolved_path=self.state.resolved_path,
        )

    def get_config(self) -> Dict[str, Any]:
        config = super().get_config()
        config.update(
            {
                "filePattern": self.file_pattern,
                "fileExtension": self.file_extension,
                "path": self.path,
                "rotationCycle": self.rotation_cycle.value,
                "fullFilePath": self.state.resolved_path,
                "fileExists": os.path.exists(self.state.resolved_path),
            }
        )
        return config

    def __repr__(self) -> str:
        return (
            f"FileAppender(file_pattern={self.file_pattern!r}, path={self.path!r}, "
            f"file_extension={self.file_extension!r}, rotation_cycle={self.rotation_cycle.value}, "
            f"level={self.level.name}, resolved_path={self.state.resolved_path!r})"
        )
