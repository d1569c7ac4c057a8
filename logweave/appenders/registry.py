"""
Appender registry: map a type tag (``CONSOLE``, ``FILE``, ...) to a builder
that turns a config dict into an Appender.

Register extra appender kinds, then reference them by type in config:

    default_registry.register("MEMORY", lambda config, **options: MemoryAppender(...))
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from logweave.appenders.base import Appender, AppenderType
from logweave.appenders.console import ConsoleAppender
from logweave.appenders.file import FileAppender
from logweave.core.exceptions import ConfigurationError, UnknownAppenderTypeError

logger = logging.getLogger(__name__)

# builder(config_dict, *, created=None, clock=None, ...) -> Appender
AppenderBuilder = Callable[..., Appender]


class AppenderRegistry:
    """Maps an upper-cased type tag to an appender builder.

    Core types (CONSOLE, FILE) are registered on first use and again after
    clear().
    """

    def __init__(self) -> None:
        self._builders: Dict[str, AppenderBuilder] = {}
        self._core_registered = False
        self._lock = threading.RLock()

    def _ensure_core(self) -> None:
        with self._lock:
            if self._core_registered:
                return
            self._core_registered = True
            self._builders.setdefault(AppenderType.CONSOLE.value, ConsoleAppender.from_config)
            self._builders.setdefault(AppenderType.FILE.value, FileAppender.from_config)

    def register(self, appender_type: str, builder: AppenderBuilder) -> None:
        """Register (or replace) the builder for *appender_type*."""
        key = appender_type.strip().upper()
        with self._lock:
            self._ensure_core()
            if key in self._builders:
                logger.warning("Overwriting appender builder for type %s", key)
            self._builders[key] = builder

    def unregister(self, appender_type: str) -> None:
        with self._lock:
            self._builders.pop(appender_type.strip().upper(), None)

    def clear(self) -> None:
        """Remove every builder; core types come back on next access."""
        with self._lock:
            self._builders.clear()
            self._core_registered = False

    def is_registered(self, appender_type: str) -> bool:
        self._ensure_core()
        return appender_type.strip().upper() in self._builders

    def registered_types(self) -> List[str]:
        self._ensure_core()
        with self._lock:
            return sorted(self._builders)

    def get(self, appender_type: str) -> Optional[AppenderBuilder]:
        self._ensure_core()
        return self._builders.get(appender_type.strip().upper())

    def create(self, config: Mapping[str, Any], **options: Any) -> Appender:
        """Build an appender from *config* using its ``type`` key.

        Raises ConfigurationError when ``type`` is missing and
        UnknownAppenderTypeError when no builder is registered for it.
        """
        raw_type = config.get("type")
        if raw_type is None or not str(raw_type).strip():
            raise ConfigurationError(
                "Appender configuration must contain a 'type' key.",
                details={"field": "type"},
            )
        key = str(raw_type).strip().upper()
        builder = self.get(key)
        if builder is None:
            available = self.registered_types()
            raise UnknownAppenderTypeError(
                f"No appender registered for type {key!r}. Available types: {', '.join(available)}",
                details={"field": "type", "value": raw_type, "valid": available},
            )
        appender = builder(config, **options)
        logger.debug("Created %s appender: %r", key, appender)
        return appender


# Default registry with the core appenders.
default_registry = AppenderRegistry()
