"""
Diagnostics setup: attach stderr console and optional rotating JSON file handlers.

Library modules log through ``logging.getLogger(__name__)``; everything lands
under the ``logweave`` logger configured here. When configure() was never
called, WARNING and above still reach stderr through logging's last-resort
handler, which is the fallback channel for appender I/O failures.
"""
from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from logweave.core.logger.config import DIAGNOSTICS_LOGGER, DiagnosticsConfig
from logweave.core.logger.formatters import JsonFormatter, PlainConsoleFormatter


_default_config: Optional[DiagnosticsConfig] = None


def configure(config: Optional[DiagnosticsConfig] = None) -> None:
    """
    Configure the ``logweave`` diagnostics logger with the given config.
    If config is None, uses DiagnosticsConfig.from_env().
    """
    global _default_config
    if config is None:
        config = DiagnosticsConfig.from_env()
    _default_config = config

    root = logging.getLogger(DIAGNOSTICS_LOGGER)
    level = _level(config.level)
    root.setLevel(level)

    # Reconfiguring replaces the previous handlers
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if config.console:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(PlainConsoleFormatter())
        root.addHandler(console)

    path = config.file_path
    if path:
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
        except OSError:
            root.warning("Could not create diagnostics dir %s, skipping file handler", config.log_dir)
        else:
            file_handler = RotatingFileHandler(
                path,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(JsonFormatter())
            root.addHandler(file_handler)

    root.propagate = config.propagate


def set_level(level: str) -> None:
    """Change the diagnostics level, keeping the rest of the current config."""
    configure((_default_config or DiagnosticsConfig.from_env()).with_overrides(level=level))


def current_config() -> Optional[DiagnosticsConfig]:
    return _default_config


def get_logger(name: str, config: Optional[DiagnosticsConfig] = None) -> logging.Logger:
    """
    Return a diagnostics logger. If configure() was never called,
    calls configure(config or from_env()) first.
    """
    if _default_config is None:
        configure(config)
    return logging.getLogger(name)


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.WARNING)
