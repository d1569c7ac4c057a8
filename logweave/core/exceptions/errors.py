"""
Built-in exception types.
"""
from __future__ import annotations

from logweave.core.exceptions.base import LogweaveError


class ConfigurationError(LogweaveError):
    """Invalid or missing configuration (raised at construction time)."""

    default_code = "CONFIGURATION_ERROR"


class InvalidRotationCycleError(ConfigurationError):
    """Rotation cycle string matches no canonical name, enum name or alias."""

    default_code = "INVALID_ROTATION_CYCLE"


class UnknownAppenderTypeError(ConfigurationError):
    """No appender builder registered for the requested type."""

    default_code = "UNKNOWN_APPENDER_TYPE"


class AppenderIOError(LogweaveError):
    """Creating or writing an appender destination failed."""

    default_code = "APPENDER_IO_ERROR"
