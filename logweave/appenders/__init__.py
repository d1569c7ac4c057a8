"""
Appenders (log destinations).

    ConsoleAppender  stdout / stderr
    FileAppender     time-bucketed rotating files

Custom kinds subclass Appender and register a builder on default_registry.
"""
from logweave.appenders.base import Appender, AppenderType
from logweave.appenders.console import ConsoleAppender, ConsoleMode
from logweave.appenders.file import FileAppender, FileSinkState, append_line, ensure_exists
from logweave.appenders.registry import AppenderBuilder, AppenderRegistry, default_registry

__all__ = [
    "Appender",
    "AppenderBuilder",
    "AppenderRegistry",
    "AppenderType",
    "ConsoleAppender",
    "ConsoleMode",
    "FileAppender",
    "FileSinkState",
    "append_line",
    "default_registry",
    "ensure_exists",
]
