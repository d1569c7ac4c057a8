"""Console appender: one formatted line per event on stdout or stderr."""
from __future__ import annotations

import sys
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, TextIO, Union

from logweave.appenders.base import Appender, AppenderType
from logweave.config.loader import validate_config
from logweave.config.schemas import ConsoleAppenderConfigSchema
from logweave.core.exceptions import ConfigurationError
from logweave.record import LogEvent


class ConsoleMode(str, Enum):
    STDOUT = "stdout"
    STDERR = "stderr"

    @classmethod
    def from_string(cls, value: Union["ConsoleMode", str]) -> "ConsoleMode":
        """Resolve a mode name (case-insensitive). Raises ConfigurationError if unknown."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for mode in cls:
            if mode.value == key:
                return mode
        valid = [m.value for m in cls]
        raise ConfigurationError(
            f"Unknown console mode: {value!r}. Valid modes: {', '.join(valid)}",
            details={"field": "mode", "value": value, "valid": valid},
        )


class ConsoleAppender(Appender):
    """Writes to sys.stdout / sys.stderr (resolved at write time) or an explicit stream."""

    def __init__(
        self,
        *,
        mode: Union[ConsoleMode, str] = ConsoleMode.STDOUT,
        stream: Optional[TextIO] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.mode = ConsoleMode.from_string(mode)
        self._stream = stream

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        *,
        created: Optional[datetime] = None,
        **_: Any,
    ) -> "ConsoleAppender":
        schema = validate_config(ConsoleAppenderConfigSchema, config, "console appender")
        return cls(
            mode=schema.mode,
            level=schema.level,
            format=schema.format,
            date_format=schema.date_format,
            enabled=schema.enabled,
            created=created,
        )

    @property
    def type_name(self) -> str:
        return AppenderType.CONSOLE.value

    @property
    def stream(self) -> TextIO:
        if self._stream is not None:
            return self._stream
        return sys.stderr if self.mode is ConsoleMode.STDERR else sys.stdout

    def _append(self, event: LogEvent) -> None:
        stream = self.stream
        stream.write(self.format_event(event) + "\n")

    def flush(self) -> None:
        with self._lock:
            self.stream.flush()

    def get_config(self) -> Dict[str, Any]:
        config = super().get_config()
        config["mode"] = self.mode.value
        return config
