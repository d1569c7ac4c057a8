"""
Formatters for diagnostics records. Records may carry an ``appender`` extra
naming the destination that produced them; logweave errors attached as
exc_info are reported by code and details.
"""
from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any

from logweave.core.exceptions import LogweaveError


class JsonFormatter(logging.Formatter):
    """One JSON object per record (JSON Lines)."""

    def format(self, record: logging.LogRecord) -> str:
        out: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.funcName}:{record.lineno}",
        }
        appender = getattr(record, "appender", None)
        if appender:
            out["appender"] = appender
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            if isinstance(exc, LogweaveError):
                out["error"] = {"code": exc.code, "details": exc.details}
            out["exception"] = "".join(traceback.format_exception(*record.exc_info)).strip()
        return json.dumps(out, default=str, ensure_ascii=False)


class PlainConsoleFormatter(logging.Formatter):
    """``time logweave LEVEL name [APPENDER]: message`` for stderr."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s logweave %(levelname)s %(name)s%(appender_tag)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        appender = getattr(record, "appender", None)
        record.appender_tag = f" [{appender}]" if appender else ""
        return super().format(record)
