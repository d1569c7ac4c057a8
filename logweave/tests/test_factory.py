"""Unit tests for LoggerFactory and the module-level convenience functions."""
from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from datetime import datetime
from unittest.mock import patch

import logweave
from logweave.appenders.console import ConsoleAppender, ConsoleMode
from logweave.appenders.file import FileAppender
from logweave.appenders.registry import AppenderRegistry
from logweave.context import LogContext
from logweave.core.exceptions import (
    ConfigurationError,
    InvalidRotationCycleError,
    UnknownAppenderTypeError,
)
from logweave.factory import LoggerFactory
from logweave.level import Level
from logweave.logger import ROOT_LOGGER_NAME


def _read(path: str) -> str:
    with open(path, encoding="utf-8") as fh:
        return fh.read()


class TestLoggerFactory(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        self.context = LogContext()
        self.factory = LoggerFactory(registry=AppenderRegistry(), context=self.context)

    def tearDown(self) -> None:
        self.factory.reset()
        self._tmp.cleanup()

    def _file_config(self, **overrides: object) -> dict:
        appender = {
            "type": "FILE",
            "filePattern": "app",
            "path": self.tmp,
            "rotationCycle": "daily",
            "format": "%i: %m",
            "level": "DEBUG",
        }
        appender.update(overrides)
        return {"appenders": [appender]}

    def test_root_logger_before_init(self) -> None:
        root = self.factory.get_root_logger()
        self.assertEqual(root.name, ROOT_LOGGER_NAME)
        self.assertEqual(root.appenders, [])
        root.info("goes nowhere")

    def test_init_from_dict_writes_file(self) -> None:
        clock = lambda: datetime(2024, 3, 15, 10, 0)  # noqa: E731
        self.factory.init(self._file_config(), clock=clock)
        log = self.factory.get_logger("svc")
        log.debug("hello")
        path = os.path.join(self.tmp, "app_2024-03-15.log")
        self.assertEqual(_read(path), "svc: hello\n")

    def test_init_console_from_dict(self) -> None:
        root = self.factory.init(
            {"appenders": [{"type": "console", "format": "[%l] %i: %m", "level": "info"}]}
        )
        self.assertIsInstance(root.appenders[0], ConsoleAppender)
        out = io.StringIO()
        with patch("sys.stdout", new=out):
            self.factory.get_logger("TestLogger").info("Test message")
            self.factory.get_logger("TestLogger").debug("filtered")
        self.assertEqual(out.getvalue(), "[INFO] TestLogger: Test message\n")

    def test_named_loggers_are_cached(self) -> None:
        self.factory.init(self._file_config())
        first = self.factory.get_logger("a")
        self.assertIs(self.factory.get_logger("a"), first)
        self.assertIsNot(self.factory.get_logger("b"), first)
        self.assertEqual(self.factory.logger_names(), [ROOT_LOGGER_NAME, "a", "b"])

    def test_named_loggers_copy_root_appenders(self) -> None:
        root = self.factory.init(self._file_config())
        child = self.factory.get_logger("child")
        self.assertIsNot(child.appenders[0], root.appenders[0])
        child.set_level_all("ERROR")
        self.assertIs(root.appenders[0].level, Level.DEBUG)

    def test_context_values_applied(self) -> None:
        config = self._file_config(format="%app|%did|%sid|%X{env}|%m")
        config.update({"appVersion": "1.2.0", "deviceId": "dev-9", "mdc": {"env": "prod"}})
        clock = lambda: datetime(2024, 3, 15, 10, 0)  # noqa: E731
        self.factory.init(config, clock=clock)
        self.assertEqual(self.context.app_version, "1.2.0")
        self.factory.get_root_logger().info("ready")
        path = os.path.join(self.tmp, "app_2024-03-15.log")
        self.assertEqual(_read(path), "1.2.0|dev-9|unknown|prod|ready\n")

    def test_init_from_file(self) -> None:
        config_path = os.path.join(self.tmp, "logging.json")
        with open(config_path, "w", encoding="utf-8") as fh:
            json.dump(self._file_config(rotationCycle="never"), fh)
        root = self.factory.init_from_file(config_path)
        self.assertIsInstance(root.appenders[0], FileAppender)
        self.assertTrue(os.path.exists(os.path.join(self.tmp, "app.log")))

    def test_init_from_env_var(self) -> None:
        config_path = os.path.join(self.tmp, "env.json")
        with open(config_path, "w", encoding="utf-8") as fh:
            json.dump({"appenders": [{"type": "CONSOLE", "mode": "stderr"}]}, fh)
        with patch.dict(os.environ, {"LOGWEAVE_CONFIG": config_path}):
            root = self.factory.init()
        self.assertIs(root.appenders[0].mode, ConsoleMode.STDERR)  # type: ignore[attr-defined]

    def test_init_without_config_has_no_appenders(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            root = self.factory.init()
        self.assertEqual(root.appenders, [])

    def test_configuration_errors(self) -> None:
        with self.assertRaises(UnknownAppenderTypeError):
            self.factory.init({"appenders": [{"type": "SYSLOG"}]})
        with self.assertRaises(InvalidRotationCycleError):
            self.factory.init(self._file_config(rotationCycle="sometimes"))
        with self.assertRaises(ConfigurationError):
            self.factory.init(self._file_config(level="CHATTY"))
        with self.assertRaises(ConfigurationError):
            self.factory.init({"appenders": [{"level": "INFO"}]})
        with self.assertRaises(ConfigurationError):
            self.factory.init({"depthOffset": -1})

    def test_unreadable_config_file(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.factory.init_from_file(os.path.join(self.tmp, "missing.json"))
        bad = os.path.join(self.tmp, "bad.json")
        with open(bad, "w", encoding="utf-8") as fh:
            fh.write("{not json")
        with self.assertRaises(ConfigurationError) as ctx:
            self.factory.init_from_file(bad)
        self.assertEqual(ctx.exception.details["path"], bad)

    def test_failed_init_keeps_previous_loggers(self) -> None:
        root = self.factory.init(self._file_config())
        with self.assertRaises(ConfigurationError):
            self.factory.init({"appenders": [{"type": "NOPE"}]})
        self.assertIs(self.factory.get_root_logger(), root)

    def test_reinit_replaces_named_loggers(self) -> None:
        self.factory.init(self._file_config())
        old = self.factory.get_logger("svc")
        self.factory.init(self._file_config(format="%m"))
        self.assertEqual(old.appenders, [])
        self.assertIsNot(self.factory.get_logger("svc"), old)

    def test_reset(self) -> None:
        self.factory.init(self._file_config())
        self.factory.get_logger("svc")
        self.factory.reset()
        self.assertEqual(self.factory.logger_names(), [])
        self.assertEqual(self.factory.get_root_logger().appenders, [])

    def test_init_console_preset(self) -> None:
        root = self.factory.init_console(level="WARN", format="%l:%m", mode="stderr")
        err = io.StringIO()
        with patch("sys.stderr", new=err):
            root.info("quiet")
            root.warn("loud")
        self.assertEqual(err.getvalue(), "WARN:loud\n")

    def test_self_debug_raises_diagnostics_level(self) -> None:
        with patch("logweave.factory.configure_diagnostics") as configure:
            self.factory.init({"selfDebug": True, "selfLogLevel": "INFO"})
        configure.assert_called_once()
        self.assertEqual(configure.call_args.args[0].level, "INFO")

    def test_self_debug_off_by_default(self) -> None:
        with patch("logweave.factory.configure_diagnostics") as configure:
            self.factory.init({})
        configure.assert_not_called()


class TestModuleFunctions(unittest.TestCase):
    def tearDown(self) -> None:
        logweave.reset()

    def test_default_factory_round_trip(self) -> None:
        logweave.init({"appenders": [{"type": "CONSOLE", "format": "%i %m"}]})
        log = logweave.get_logger("mod")
        self.assertIs(logweave.default_factory.get_logger("mod"), log)
        out = io.StringIO()
        with patch("sys.stdout", new=out):
            log.info("hi")
        self.assertEqual(out.getvalue(), "mod hi\n")
        self.assertEqual(logweave.get_root_logger().name, ROOT_LOGGER_NAME)


if __name__ == "__main__":
    unittest.main()
