"""Log events: message variants, call-site capture and the immutable LogEvent."""
from __future__ import annotations

import inspect
import os
import sys
import threading
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from types import FrameType
from typing import Any, Callable, Optional, Union

from logweave.level import Level


# ── Messages ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class LiteralMessage:
    """A message whose text is known up front."""

    value: str

    def text(self) -> str:
        return self.value


class DeferredMessage:
    """A message built by a zero-argument supplier, evaluated at most once.

    The supplier only runs when an appender actually renders the event, so
    expensive message construction is skipped for filtered levels.
    """

    __slots__ = ("_supplier", "_lock", "_done", "_value", "_error")

    def __init__(self, supplier: Callable[[], Any]) -> None:
        self._supplier = supplier
        self._lock = threading.Lock()
        self._done = False
        self._value = ""
        self._error: Optional[BaseException] = None

    @property
    def evaluated(self) -> bool:
        return self._done

    def text(self) -> str:
        with self._lock:
            if not self._done:
                try:
                    self._value = str(self._supplier())
                except Exception as exc:
                    self._error = exc
                finally:
                    self._done = True
        if self._error is not None:
            raise self._error
        return self._value

    def __repr__(self) -> str:
        state = repr(self._value) if self._done else "<pending>"
        return f"DeferredMessage({state})"


Message = Union[LiteralMessage, DeferredMessage]


def as_message(value: Any) -> Message:
    """Coerce a str, zero-arg callable or arbitrary object into a Message."""
    if isinstance(value, (LiteralMessage, DeferredMessage)):
        return value
    if isinstance(value, str):
        return LiteralMessage(value)
    if callable(value):
        return DeferredMessage(value)
    return LiteralMessage(str(value))


# ── Call site ──────────────────────────────────────────────────────

_internal_files: set[str] = set()


def register_internal_file(path: str) -> None:
    """Frames from this source file are skipped when capturing call sites."""
    _internal_files.add(os.path.normcase(os.path.abspath(path)))


register_internal_file(__file__)


@dataclass(frozen=True)
class CallSite:
    """Where a log call came from, parsed once from the Python frame stack."""

    class_name: str = ""
    method_name: str = ""
    file_location: str = ""
    line_number: int = 0
    column_number: int = 0

    @classmethod
    def from_frame(cls, frame: FrameType) -> "CallSite":
        code = frame.f_code
        return cls(
            class_name=_owner_class(frame),
            method_name=code.co_name,
            file_location=code.co_filename,
            line_number=frame.f_lineno or 0,
            column_number=_column(frame),
        )

    def function_and_line(self) -> str:
        """``Class.method:line``, or ``method:line`` outside a class."""
        if not self.method_name:
            return ""
        name = f"{self.class_name}.{self.method_name}" if self.class_name else self.method_name
        return f"{name}:{self.line_number}"

    def in_file_location(self) -> str:
        """``path(line:column)``."""
        if not self.file_location:
            return ""
        return f"{self.file_location}({self.line_number}:{self.column_number})"


def capture_call_site(depth_offset: int = 0) -> CallSite:
    """Return the first frame outside logweave's logging path.

    *depth_offset* skips that many additional frames, for callers that wrap
    the logger in their own helper functions.
    """
    frame: Optional[FrameType] = sys._getframe(1)
    while frame is not None and _is_internal(frame):
        frame = frame.f_back
    for _ in range(max(depth_offset, 0)):
        if frame is None or frame.f_back is None:
            break
        frame = frame.f_back
    if frame is None:
        return CallSite()
    return CallSite.from_frame(frame)


def _is_internal(frame: FrameType) -> bool:
    return os.path.normcase(os.path.abspath(frame.f_code.co_filename)) in _internal_files


def _owner_class(frame: FrameType) -> str:
    qualname = getattr(frame.f_code, "co_qualname", None)
    if qualname is not None:
        if "." not in qualname:
            return ""
        owner = qualname.rsplit(".", 1)[0]
        if owner.endswith("<locals>"):
            return ""
        return owner
    local_vars = frame.f_locals
    if "self" in local_vars:
        return type(local_vars["self"]).__name__
    if "cls" in local_vars and isinstance(local_vars["cls"], type):
        return local_vars["cls"].__name__
    return ""


def _column(frame: FrameType) -> int:
    try:
        positions = inspect.getframeinfo(frame, context=0).positions  # type: ignore[attr-defined]
    except (AttributeError, ValueError):
        return 0
    if positions is None or positions.col_offset is None:
        return 0
    return positions.col_offset + 1


# ── Event ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LogEvent:
    """One log call. Immutable; shared read-only by every appender it reaches."""

    level: Level
    message: Message
    timestamp: datetime = field(default_factory=datetime.now)
    tag: Optional[str] = None
    logger_name: Optional[str] = None
    call_site: CallSite = field(default_factory=CallSite)
    error: Optional[object] = None
    stack_trace: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.message, (LiteralMessage, DeferredMessage)):
            object.__setattr__(self, "message", as_message(self.message))

    @classmethod
    def create(
        cls,
        level: Level,
        message: Any,
        *,
        tag: Optional[str] = None,
        logger_name: Optional[str] = None,
        error: Optional[object] = None,
        stack_trace: Optional[str] = None,
        timestamp: Optional[datetime] = None,
        depth_offset: int = 0,
    ) -> "LogEvent":
        """Build an event stamped with the current time and the caller's call site."""
        if stack_trace is None and isinstance(error, BaseException) and error.__traceback__:
            stack_trace = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ).rstrip()
        return cls(
            level=level,
            message=as_message(message),
            timestamp=timestamp or datetime.now(),
            tag=tag,
            logger_name=logger_name,
            call_site=capture_call_site(depth_offset),
            error=error,
            stack_trace=stack_trace,
        )

    def message_text(self) -> str:
        return self.message.text()

    def __str__(self) -> str:
        return f"[{self.level.name}] {self.tag or ''}: {self.message_text()}"
