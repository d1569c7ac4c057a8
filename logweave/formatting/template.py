"""
Format-pattern engine: parse a format string into literal and placeholder
parts once, cache the result, then fill the parts for each event.

Placeholders:

    %d        timestamp, formatted with the appender's date pattern
    %did      device id ("unknown" if unset)
    %sid      session id ("unknown" if unset)
    %app      app version ("" if unset)
    %t        tag
    %i        logger name
    %l        level name
    %m        message
    %c        Class.method:line
    %f        path(line:column)
    %X{key}   diagnostic-context value ("" if missing)
    %%        a literal percent sign

Rendering is a single pass over the parsed parts, so text produced by one
placeholder (most importantly the message body) is never scanned for further
placeholders. Unknown or malformed tokens are kept as literal text.
"""
from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

from logweave.context import LogContext, default_context
from logweave.formatting.date_format import DEFAULT_DATE_FORMAT, get_date_format
from logweave.record import LogEvent

logger = logging.getLogger(__name__)


class PlaceholderKind(str, Enum):
    TIMESTAMP = "timestamp"
    DEVICE_ID = "device_id"
    SESSION_ID = "session_id"
    APP_VERSION = "app_version"
    TAG = "tag"
    LOGGER_NAME = "logger_name"
    LEVEL = "level"
    MESSAGE = "message"
    CALL_SITE = "call_site"
    FILE_LOCATION = "file_location"
    CONTEXT = "context"


# Longest tokens first: "%did" must win over "%d".
_TOKENS: Tuple[Tuple[str, PlaceholderKind], ...] = (
    ("did", PlaceholderKind.DEVICE_ID),
    ("sid", PlaceholderKind.SESSION_ID),
    ("app", PlaceholderKind.APP_VERSION),
    ("d", PlaceholderKind.TIMESTAMP),
    ("t", PlaceholderKind.TAG),
    ("i", PlaceholderKind.LOGGER_NAME),
    ("l", PlaceholderKind.LEVEL),
    ("m", PlaceholderKind.MESSAGE),
    ("c", PlaceholderKind.CALL_SITE),
    ("f", PlaceholderKind.FILE_LOCATION),
)

_CONTEXT_OPEN = "X{"


@dataclass(frozen=True)
class LiteralPart:
    text: str


@dataclass(frozen=True)
class PlaceholderPart:
    kind: PlaceholderKind
    key: Optional[str] = None


TemplatePart = Union[LiteralPart, PlaceholderPart]


@dataclass(frozen=True)
class _RenderInput:
    event: LogEvent
    date_format: str
    context: LogContext
    fallback_logger_name: Optional[str]


_RESOLVERS: Dict[PlaceholderKind, Callable[[_RenderInput, Optional[str]], str]] = {
    PlaceholderKind.TIMESTAMP: lambda r, _: get_date_format(r.date_format).format(r.event.timestamp),
    PlaceholderKind.DEVICE_ID: lambda r, _: r.context.device_id_or_unknown(),
    PlaceholderKind.SESSION_ID: lambda r, _: r.context.session_id_or_unknown(),
    PlaceholderKind.APP_VERSION: lambda r, _: r.context.app_version_or_empty(),
    PlaceholderKind.TAG: lambda r, _: r.event.tag or "",
    PlaceholderKind.LOGGER_NAME: lambda r, _: r.event.logger_name or r.fallback_logger_name or "",
    PlaceholderKind.LEVEL: lambda r, _: r.event.level.name,
    PlaceholderKind.MESSAGE: lambda r, _: r.event.message_text(),
    PlaceholderKind.CALL_SITE: lambda r, _: r.event.call_site.function_and_line(),
    PlaceholderKind.FILE_LOCATION: lambda r, _: r.event.call_site.in_file_location(),
    PlaceholderKind.CONTEXT: lambda r, key: r.context.lookup(key or ""),
}


@dataclass(frozen=True)
class FormatTemplate:
    """A parsed format pattern. Read-only and safe to share between threads."""

    source_pattern: str
    parts: Tuple[TemplatePart, ...]

    def render(
        self,
        event: LogEvent,
        *,
        date_format: str = DEFAULT_DATE_FORMAT,
        context: Optional[LogContext] = None,
        fallback_logger_name: Optional[str] = None,
    ) -> str:
        """Fill every part for *event*. A placeholder that fails renders as ''."""
        inputs = _RenderInput(
            event=event,
            date_format=date_format,
            context=context if context is not None else default_context(),
            fallback_logger_name=fallback_logger_name,
        )
        out: list[str] = []
        for part in self.parts:
            if isinstance(part, LiteralPart):
                out.append(part.text)
                continue
            try:
                out.append(_RESOLVERS[part.kind](inputs, part.key))
            except Exception:
                logger.warning(
                    "Placeholder %s could not be rendered for pattern %r",
                    part.kind.value,
                    self.source_pattern,
                    exc_info=True,
                )
        return "".join(out)


def parse_pattern(pattern: str) -> FormatTemplate:
    """Split *pattern* into literal and placeholder parts. Pure and deterministic."""
    parts: list[TemplatePart] = []
    literal: list[str] = []

    def flush() -> None:
        text = "".join(literal)
        literal.clear()
        if text:
            parts.append(LiteralPart(text))

    i, n = 0, len(pattern)
    while i < n:
        pct = pattern.find("%", i)
        if pct == -1:
            literal.append(pattern[i:])
            break
        literal.append(pattern[i:pct])
        start = pct + 1

        if pattern.startswith("%", start):
            literal.append("%")
            i = start + 1
            continue

        if pattern.startswith(_CONTEXT_OPEN, start):
            close = pattern.find("}", start + len(_CONTEXT_OPEN))
            if close != -1:
                flush()
                key = pattern[start + len(_CONTEXT_OPEN):close]
                parts.append(PlaceholderPart(PlaceholderKind.CONTEXT, key))
                i = close + 1
                continue

        for token, kind in _TOKENS:
            if pattern.startswith(token, start):
                flush()
                parts.append(PlaceholderPart(kind))
                i = start + len(token)
                break
        else:
            literal.append("%")
            i = start
    flush()
    return FormatTemplate(source_pattern=pattern, parts=tuple(parts))


class TemplateCache:
    """LRU cache of parsed templates keyed by the raw pattern string.

    Parsing happens outside the lock; two threads missing on the same pattern
    both parse it and the later insert wins, which is harmless because
    parsing is deterministic.
    """

    def __init__(self, max_size: int = 256) -> None:
        self._max_size = max_size
        self._lock = threading.Lock()
        self._store: OrderedDict[str, FormatTemplate] = OrderedDict()

    def get(self, pattern: str) -> FormatTemplate:
        with self._lock:
            template = self._store.get(pattern)
            if template is not None:
                self._store.move_to_end(pattern)
                return template
        template = parse_pattern(pattern)
        with self._lock:
            self._store[pattern] = template
            self._store.move_to_end(pattern)
            while len(self._store) > self._max_size:
                self._store.popitem(last=False)
        return template

    def __contains__(self, pattern: object) -> bool:
        with self._lock:
            return pattern in self._store

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    @property
    def size(self) -> int:
        return len(self._store)


_cache = TemplateCache()


def get_template(pattern: str) -> FormatTemplate:
    return _cache.get(pattern)


def template_cache() -> TemplateCache:
    return _cache


def clear_template_cache() -> None:
    """Drop every cached template (used by tests)."""
    _cache.clear()


def render(
    event: LogEvent,
    pattern: str,
    date_format: str = DEFAULT_DATE_FORMAT,
    *,
    context: Optional[LogContext] = None,
    fallback_logger_name: Optional[str] = None,
) -> str:
    """Render *event* with *pattern*. Never raises."""
    try:
        return get_template(pattern).render(
            event,
            date_format=date_format,
            context=context,
            fallback_logger_name=fallback_logger_name,
        )
    except Exception:
        logger.warning("Rendering failed for pattern %r", pattern, exc_info=True)
        return ""
