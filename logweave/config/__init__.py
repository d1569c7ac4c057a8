"""
Logging configuration: pydantic schemas plus a loader for dicts and JSON files.

Load: load_logging_config({...}), load_logging_config("logging.json"), or
load_logging_config() to read the path from LOGWEAVE_CONFIG.
"""
from logweave.config.loader import (
    CONFIG_ENV_VAR,
    load_logging_config,
    read_config_file,
    validate_config,
)
from logweave.config.schemas import (
    DEFAULT_APPENDER_DATE_FORMAT,
    DEFAULT_APPENDER_FORMAT,
    AppenderConfigSchema,
    ConsoleAppenderConfigSchema,
    FileAppenderConfigSchema,
    LoggingConfigSchema,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_APPENDER_DATE_FORMAT",
    "DEFAULT_APPENDER_FORMAT",
    "AppenderConfigSchema",
    "ConsoleAppenderConfigSchema",
    "FileAppenderConfigSchema",
    "LoggingConfigSchema",
    "load_logging_config",
    "read_config_file",
    "validate_config",
]
