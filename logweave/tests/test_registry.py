"""Unit tests for AppenderRegistry."""
from __future__ import annotations

import io
import unittest
from typing import Any, Mapping

from logweave.appenders.base import Appender
from logweave.appenders.console import ConsoleAppender
from logweave.appenders.registry import AppenderRegistry
from logweave.core.exceptions import ConfigurationError, UnknownAppenderTypeError
from logweave.record import LogEvent


class MemoryAppender(Appender):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.lines: list[str] = []

    @property
    def type_name(self) -> str:
        return "MEMORY"

    def _append(self, event: LogEvent) -> None:
        self.lines.append(self.format_event(event))


def build_memory(config: Mapping[str, Any], **_: Any) -> MemoryAppender:
    return MemoryAppender(level=config.get("level", "INFO"), format=config.get("format", "%m"))


class TestAppenderRegistry(unittest.TestCase):
    def test_core_types_registered(self) -> None:
        registry = AppenderRegistry()
        self.assertEqual(registry.registered_types(), ["CONSOLE", "FILE"])
        self.assertTrue(registry.is_registered("console"))

    def test_create_console(self) -> None:
        appender = AppenderRegistry().create({"type": "console", "level": "WARN"})
        self.assertIsInstance(appender, ConsoleAppender)

    def test_register_custom_type_case_insensitive(self) -> None:
        registry = AppenderRegistry()
        registry.register("memory", build_memory)
        self.assertTrue(registry.is_registered("MEMORY"))
        appender = registry.create({"type": "Memory", "format": "<%m>"})
        self.assertIsInstance(appender, MemoryAppender)
        self.assertEqual(appender.format, "<%m>")

    def test_overwrite_warns(self) -> None:
        registry = AppenderRegistry()
        registry.register("MEMORY", build_memory)
        with self.assertLogs("logweave.appenders.registry", level="WARNING"):
            registry.register("MEMORY", build_memory)

    def test_unregister(self) -> None:
        registry = AppenderRegistry()
        registry.register("MEMORY", build_memory)
        registry.unregister("memory")
        self.assertFalse(registry.is_registered("MEMORY"))
        self.assertIsNone(registry.get("MEMORY"))

    def test_clear_keeps_core_types(self) -> None:
        registry = AppenderRegistry()
        registry.register("MEMORY", build_memory)
        registry.clear()
        self.assertEqual(registry.registered_types(), ["CONSOLE", "FILE"])

    def test_unknown_type(self) -> None:
        with self.assertRaises(UnknownAppenderTypeError) as ctx:
            AppenderRegistry().create({"type": "kafka"})
        err = ctx.exception
        self.assertIsInstance(err, ConfigurationError)
        self.assertEqual(err.details["valid"], ["CONSOLE", "FILE"])
        self.assertIn("KAFKA", str(err))

    def test_missing_type(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            AppenderRegistry().create({"level": "INFO"})
        self.assertEqual(ctx.exception.details["field"], "type")

    def test_custom_appender_receives_events(self) -> None:
        registry = AppenderRegistry()
        registry.register("MEMORY", build_memory)
        appender = registry.create({"type": "MEMORY"})
        appender.append(LogEvent.create(appender.level, "stored"))
        self.assertEqual(appender.lines, ["stored"])  # type: ignore[attr-defined]

    def test_builder_options_forwarded(self) -> None:
        seen: dict[str, Any] = {}

        def builder(config: Mapping[str, Any], **options: Any) -> Appender:
            seen.update(options)
            return ConsoleAppender(stream=io.StringIO())

        registry = AppenderRegistry()
        registry.register("SPY", builder)
        registry.create({"type": "SPY"}, clock="marker")
        self.assertEqual(seen, {"clock": "marker"})


if __name__ == "__main__":
    unittest.main()
