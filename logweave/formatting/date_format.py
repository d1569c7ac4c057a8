"""
Minimal pattern-based date formatter (``yyyy-MM-dd HH:mm:ss.SSS`` style).

Patterns are compiled once into field and literal tokens, so a formatted value
is never re-scanned: ``MMM`` always means "abbreviated month" and never
"MM followed by M". Letters outside the supported set pass through literally;
text between single quotes is copied verbatim (``''`` is a literal quote).
"""
from __future__ import annotations

import functools
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Tuple, Union

DEFAULT_DATE_FORMAT = "yyyy-MM-dd HH:mm:ss.SSS"

_FIELD_LETTERS = frozenset("yMdHhmsSaEZ")

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class _Field:
    letter: str
    width: int


_Token = Union[str, _Field]


def _tokenize(pattern: str) -> Tuple[_Token, ...]:
    tokens: list[_Token] = []
    literal: list[str] = []
    i, n = 0, len(pattern)

    def flush() -> None:
        text = "".join(literal)
        literal.clear()
        if text:
            tokens.append(text)

    while i < n:
        ch = pattern[i]
        if ch == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                literal.append("'")
                i += 2
                continue
            i += 1
            while i < n:
                if pattern[i] == "'":
                    if i + 1 < n and pattern[i + 1] == "'":
                        literal.append("'")
                        i += 2
                        continue
                    i += 1
                    break
                literal.append(pattern[i])
                i += 1
            continue
        if ch in _FIELD_LETTERS:
            j = i
            while j < n and pattern[j] == ch:
                j += 1
            flush()
            tokens.append(_Field(ch, j - i))
            i = j
            continue
        literal.append(ch)
        i += 1
    flush()
    return tuple(tokens)


def _offset(dt: datetime) -> str:
    offset = dt.utcoffset()
    if offset is None:
        return ""
    if offset == timedelta(0) and dt.tzname() in ("UTC", "Z"):
        return "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _field(dt: datetime, field: _Field) -> str:
    letter, width = field.letter, field.width
    if letter == "y":
        if width == 2:
            return f"{dt.year % 100:02d}"
        return str(dt.year).zfill(width)
    if letter == "M":
        if width >= 4:
            return _MONTHS[dt.month - 1]
        if width == 3:
            return _MONTHS[dt.month - 1][:3]
        return str(dt.month).zfill(width)
    if letter == "d":
        return str(dt.day).zfill(width)
    if letter == "H":
        return str(dt.hour).zfill(width)
    if letter == "h":
        hour12 = dt.hour % 12 or 12
        return str(hour12).zfill(width)
    if letter == "m":
        return str(dt.minute).zfill(width)
    if letter == "s":
        return str(dt.second).zfill(width)
    if letter == "S":
        return str(dt.microsecond // 1000).zfill(width)
    if letter == "a":
        return "AM" if dt.hour < 12 else "PM"
    if letter == "E":
        name = _WEEKDAYS[dt.weekday()]
        return name if width >= 4 else name[:3]
    if letter == "Z":
        return _offset(dt)
    return letter * width


class SimpleDateFormat:
    """A compiled date pattern."""

    __slots__ = ("pattern", "_tokens")

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._tokens = _tokenize(pattern)

    def format(self, dt: datetime) -> str:
        return "".join(
            token if isinstance(token, str) else _field(dt, token)
            for token in self._tokens
        )

    def __repr__(self) -> str:
        return f"SimpleDateFormat({self.pattern!r})"


@functools.lru_cache(maxsize=64)
def get_date_format(pattern: str) -> SimpleDateFormat:
    """Compiled formatter for *pattern*, shared across appenders."""
    return SimpleDateFormat(pattern)


def format_date(dt: datetime, pattern: str = DEFAULT_DATE_FORMAT) -> str:
    return get_date_format(pattern).format(dt)


def clear_date_format_cache() -> None:
    get_date_format.cache_clear()
