"""
Logger factory: builds the root logger from configuration and hands out
named loggers derived from it.

Usage:
    import logweave

    logweave.init({"appenders": [{"type": "CONSOLE", "format": "[%l] %i: %m"}]})
    log = logweave.get_logger("payments")
    log.info("charge accepted")
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from logweave.appenders.base import Appender
from logweave.appenders.registry import AppenderRegistry, default_registry
from logweave.config.loader import ConfigSource, load_logging_config
from logweave.config.schemas import DEFAULT_APPENDER_DATE_FORMAT, LoggingConfigSchema
from logweave.context import LogContext, default_context
from logweave.core.logger import configure as configure_diagnostics
from logweave.core.logger import current_config as diagnostics_config
from logweave.core.logger import DiagnosticsConfig
from logweave.logger import ROOT_LOGGER_NAME, Logger

logger = logging.getLogger(__name__)

CONSOLE_PRESET_FORMAT = "[%d][%l][%c] %m"


class LoggerFactory:
    """Owns the root logger and the cache of named loggers."""

    def __init__(
        self,
        registry: Optional[AppenderRegistry] = None,
        context: Optional[LogContext] = None,
    ) -> None:
        self._registry = registry or default_registry
        self._context = context
        self._lock = threading.RLock()
        self._loggers: Dict[str, Logger] = {}
        self._root: Optional[Logger] = None

    @property
    def context(self) -> LogContext:
        return self._context if self._context is not None else default_context()

    @property
    def registry(self) -> AppenderRegistry:
        return self._registry

    def init(
        self,
        config: ConfigSource = None,
        *,
        self_debug: Optional[bool] = None,
        clock: Any = None,
    ) -> Logger:
        """(Re)build the root logger from *config*; previous loggers are disposed.

        *config* may be a dict, a JSON file path, a LoggingConfigSchema, or
        None to read the path from LOGWEAVE_CONFIG. Configuration errors raise
        ConfigurationError before anything is replaced.
        """
        schema = load_logging_config(config)
        debug = schema.self_debug if self_debug is None else self_debug
        if debug:
            base = diagnostics_config() or DiagnosticsConfig.from_env()
            configure_diagnostics(base.with_overrides(level=schema.self_log_level))

        appenders: List[Appender] = [
            self._registry.create(entry, clock=clock) for entry in schema.appenders
        ]
        if self._context is not None:
            for appender in appenders:
                appender.context = self._context
        self._apply_context(schema)

        with self._lock:
            self._dispose_all()
            self._root = Logger(ROOT_LOGGER_NAME, appenders, depth_offset=schema.depth_offset)
            self._loggers[ROOT_LOGGER_NAME] = self._root
        logger.info("Logging initialized with %d appender(s)", len(appenders))
        return self._root

    def init_from_file(self, path: Union[str, Path], **kwargs: Any) -> Logger:
        return self.init(path, **kwargs)

    def init_console(
        self,
        *,
        level: str = "INFO",
        format: str = CONSOLE_PRESET_FORMAT,
        date_format: str = DEFAULT_APPENDER_DATE_FORMAT,
        mode: str = "stdout",
    ) -> Logger:
        """Preset: a single console appender."""
        return self.init(
            {
                "appenders": [
                    {
                        "type": "CONSOLE",
                        "level": level,
                        "format": format,
                        "dateFormat": date_format,
                        "mode": mode,
                    }
                ]
            }
        )

    def _apply_context(self, schema: LoggingConfigSchema) -> None:
        ctx = self.context
        if schema.app_version is not None:
            ctx.app_version = schema.app_version
        if schema.device_id is not None:
            ctx.device_id = schema.device_id
        if schema.session_id is not None:
            ctx.session_id = schema.session_id
        for key, value in schema.mdc.items():
            ctx.put(key, value)

    def get_root_logger(self) -> Logger:
        """The root logger; an appender-less logger until init() is called."""
        with self._lock:
            if self._root is None:
                self._root = Logger(ROOT_LOGGER_NAME)
                self._loggers[ROOT_LOGGER_NAME] = self._root
            return self._root

    def get_logger(self, name: str) -> Logger:
        """Named logger with its own copies of the root logger's appenders (cached)."""
        with self._lock:
            existing = self._loggers.get(name)
            if existing is not None:
                return existing
            created = self.get_root_logger().derive(name)
            self._loggers[name] = created
            logger.debug("Created logger %s", name)
            return created

    def logger_names(self) -> List[str]:
        with self._lock:
            return sorted(self._loggers)

    def flush(self) -> None:
        with self._lock:
            loggers = list(self._loggers.values())
        for item in loggers:
            item.flush()

    def reset(self) -> None:
        """Dispose every logger and forget the root."""
        with self._lock:
            self._dispose_all()
            self._root = None

    def _dispose_all(self) -> None:
        for item in self._loggers.values():
            item.dispose()
        self._loggers.clear()


default_factory = LoggerFactory()


def init(config: ConfigSource = None, **kwargs: Any) -> Logger:
    return default_factory.init(config, **kwargs)


def init_from_file(path: Union[str, Path], **kwargs: Any) -> Logger:
    return default_factory.init_from_file(path, **kwargs)


def init_console(**kwargs: Any) -> Logger:
    return default_factory.init_console(**kwargs)


def get_logger(name: str) -> Logger:
    return default_factory.get_logger(name)


def get_root_logger() -> Logger:
    return default_factory.get_root_logger()


def reset() -> None:
    default_factory.reset()
