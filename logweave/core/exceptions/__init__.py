"""
logweave exception system.

Usage:
    from logweave.core.exceptions import ConfigurationError, InvalidRotationCycleError

    raise ConfigurationError("Missing filePattern", details={"field": "filePattern"})

Only configuration-time misuse raises to callers. I/O errors (AppenderIOError)
are caught inside the appenders and reported on the diagnostics logger.
"""
from logweave.core.exceptions.base import LogweaveError
from logweave.core.exceptions.errors import (
    AppenderIOError,
    ConfigurationError,
    InvalidRotationCycleError,
    UnknownAppenderTypeError,
)

__all__ = [
    "LogweaveError",
    "ConfigurationError",
    "InvalidRotationCycleError",
    "UnknownAppenderTypeError",
    "AppenderIOError",
]
