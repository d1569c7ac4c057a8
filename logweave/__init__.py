"""
logweave: a logging facade that fans each event out to several appenders
(console, rotating files, custom kinds), each with its own level, format
pattern and date pattern.

Usage:
    import logweave

    logweave.init("logging.json")            # or a dict, or LOGWEAVE_CONFIG
    log = logweave.get_logger("checkout")
    log.info("order placed")
    log.debug(lambda: expensive_dump())      # only built if some appender wants DEBUG
"""
from logweave.appenders import (
    Appender,
    AppenderRegistry,
    AppenderType,
    ConsoleAppender,
    FileAppender,
    default_registry,
)
from logweave.context import LogContext, default_context
from logweave.core.exceptions import (
    AppenderIOError,
    ConfigurationError,
    InvalidRotationCycleError,
    LogweaveError,
    UnknownAppenderTypeError,
)
from logweave.factory import (
    LoggerFactory,
    default_factory,
    get_logger,
    get_root_logger,
    init,
    init_console,
    init_from_file,
    reset,
)
from logweave.level import Level
from logweave.logger import Logger
from logweave.record import LogEvent
from logweave.rotation import RotationCycle

__version__ = "0.1.0"

__all__ = [
    "Appender",
    "AppenderIOError",
    "AppenderRegistry",
    "AppenderType",
    "ConfigurationError",
    "ConsoleAppender",
    "FileAppender",
    "InvalidRotationCycleError",
    "Level",
    "LogContext",
    "LogEvent",
    "Logger",
    "LoggerFactory",
    "LogweaveError",
    "RotationCycle",
    "UnknownAppenderTypeError",
    "default_context",
    "default_factory",
    "default_registry",
    "get_logger",
    "get_root_logger",
    "init",
    "init_console",
    "init_from_file",
    "reset",
]
