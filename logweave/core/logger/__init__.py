"""
Diagnostics logger: logweave reports its own activity (appender setup, file
rotation, I/O failures, degraded renders) through the standard library
``logging`` module under the ``logweave`` hierarchy.

Usage:
    from logweave.core.logger import configure, DiagnosticsConfig

    # Verbose self-diagnostics to stderr and a JSON Lines file
    configure(DiagnosticsConfig(level="DEBUG", log_dir="/tmp/logweave-diag"))

    # Or from env: LOGWEAVE_SELF_LEVEL, LOGWEAVE_SELF_LOG_DIR, ...
    configure()
"""
from logweave.core.logger.config import DIAGNOSTICS_LOGGER, DiagnosticsConfig
from logweave.core.logger.formatters import JsonFormatter, PlainConsoleFormatter
from logweave.core.logger.setup import (
    configure,
    current_config,
    get_logger,
    set_level,
)

__all__ = [
    "DIAGNOSTICS_LOGGER",
    "DiagnosticsConfig",
    "JsonFormatter",
    "PlainConsoleFormatter",
    "configure",
    "current_config",
    "get_logger",
    "set_level",
]
