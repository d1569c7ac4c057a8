"""
Rotation cycles: file-name suffix per time bucket and the staleness check
that decides when an open log file must be replaced.

    NEVER             ""                 (one stable file)
    10min ... 12hour  "_YYYYMMDD_HHmm"   (bucket start, buckets aligned to midnight)
    DAILY             "_YYYY-MM-DD"
    WEEKLY            "_YYYY-CW<n>"      (ISO week-numbering year and week)
    MONTHLY           "_YYYY-MM"
"""
from __future__ import annotations

import os
import re
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Optional

from logweave.core.exceptions import InvalidRotationCycleError
from logweave.rotation.calendar import (
    bucket_start,
    day_key,
    in_zone_of,
    iso_week,
    month_key,
    now_like,
)


class RotationCycle(str, Enum):
    """Rotation cycles; the value is the canonical configuration name."""

    NEVER = "never"
    TEN_MINUTES = "10min"
    THIRTY_MINUTES = "30min"
    HOURLY = "hour"
    TWO_HOURS = "2hour"
    THREE_HOURS = "3hour"
    FOUR_HOURS = "4hour"
    SIX_HOURS = "6hour"
    TWELVE_HOURS = "12hour"
    DAILY = "day"
    WEEKLY = "week"
    MONTHLY = "month"

    @property
    def canonical_name(self) -> str:
        return self.value

    @property
    def duration(self) -> Optional[timedelta]:
        """Fixed bucket length for sub-day cycles, None otherwise."""
        return _FIXED_DURATIONS.get(self)

    @property
    def is_fixed_duration(self) -> bool:
        return self in _FIXED_DURATIONS

    @classmethod
    def from_string(cls, value: Optional[str]) -> "RotationCycle":
        """Resolve a canonical name, enum name or alias (case/whitespace-insensitive).

        Raises InvalidRotationCycleError naming the value and the valid names.
        """
        cycle = cls.try_from_string(value)
        if cycle is None:
            valid = [c.value for c in cls]
            names = [c.name for c in cls]
            raise InvalidRotationCycleError(
                f"Unknown rotation cycle: {value!r}. "
                f"Valid values are: {', '.join(valid)} "
                f"or enum names: {', '.join(names)}",
                details={
                    "field": "rotationCycle",
                    "value": value,
                    "valid": valid,
                    "aliases": sorted(ALIASES),
                },
            )
        return cycle

    @classmethod
    def try_from_string(cls, value: Optional[str]) -> Optional["RotationCycle"]:
        if value is None:
            return None
        key = _normalize(value)
        if not key:
            return None
        for cycle in cls:
            if key == cycle.value or key == cycle.name.lower():
                return cycle
        return ALIASES.get(key)

    def suffix_for(self, timestamp: datetime) -> str:
        return suffix_for(self, timestamp)

    def should_rotate(self, opened_at: datetime, now: Optional[datetime] = None) -> bool:
        return should_rotate(self, opened_at, now)


_FIXED_DURATIONS: Dict[RotationCycle, timedelta] = {
    RotationCycle.TEN_MINUTES: timedelta(minutes=10),
    RotationCycle.THIRTY_MINUTES: timedelta(minutes=30),
    RotationCycle.HOURLY: timedelta(hours=1),
    RotationCycle.TWO_HOURS: timedelta(hours=2),
    RotationCycle.THREE_HOURS: timedelta(hours=3),
    RotationCycle.FOUR_HOURS: timedelta(hours=4),
    RotationCycle.SIX_HOURS: timedelta(hours=6),
    RotationCycle.TWELVE_HOURS: timedelta(hours=12),
}

ALIASES: Dict[str, RotationCycle] = {
    **dict.fromkeys(("none", "off", "disabled"), RotationCycle.NEVER),
    **dict.fromkeys(
        ("10m", "10mins", "10minutes", "10_minutes", "ten_minutes"),
        RotationCycle.TEN_MINUTES,
    ),
    **dict.fromkeys(
        ("30m", "30mins", "30minutes", "30_minutes", "thirty_minutes", "halfhour", "half_hour"),
        RotationCycle.THIRTY_MINUTES,
    ),
    **dict.fromkeys(
        ("1h", "1hour", "60min", "60mins", "hourly", "every_hour"),
        RotationCycle.HOURLY,
    ),
    **dict.fromkeys(
        ("2h", "2hrs", "2hours", "2_hours", "two_hours", "120min"),
        RotationCycle.TWO_HOURS,
    ),
    **dict.fromkeys(
        ("3h", "3hrs", "3hours", "3_hours", "three_hours"),
        RotationCycle.THREE_HOURS,
    ),
    **dict.fromkeys(
        ("4h", "4hrs", "4hours", "4_hours", "four_hours"),
        RotationCycle.FOUR_HOURS,
    ),
    **dict.fromkeys(
        ("6h", "6hrs", "6hours", "6_hours", "six_hours"),
        RotationCycle.SIX_HOURS,
    ),
    **dict.fromkeys(
        ("12h", "12hrs", "12hours", "12_hours", "twelve_hours", "halfday", "half_day"),
        RotationCycle.TWELVE_HOURS,
    ),
    **dict.fromkeys(
        ("1d", "1day", "24h", "24hours", "daily", "every_day"),
        RotationCycle.DAILY,
    ),
    **dict.fromkeys(
        ("1w", "7d", "7days", "weekly", "every_week"),
        RotationCycle.WEEKLY,
    ),
    # "1m" is one month, not one minute.
    **dict.fromkeys(
        ("1m", "30d", "30days", "monthly", "every_month"),
        RotationCycle.MONTHLY,
    ),
}

_SEPARATORS = re.compile(r"[\s\-]+")


def _normalize(value: str) -> str:
    return _SEPARATORS.sub("_", value.strip().lower())


def suffix_for(cycle: RotationCycle, timestamp: datetime) -> str:
    """File-name suffix of the bucket holding *timestamp*."""
    if cycle is RotationCycle.NEVER:
        return ""
    if cycle is RotationCycle.DAILY:
        return f"_{timestamp.year:04d}-{timestamp.month:02d}-{timestamp.day:02d}"
    if cycle is RotationCycle.WEEKLY:
        week = iso_week(timestamp)
        return f"_{week.year:04d}-CW{week.week}"
    if cycle is RotationCycle.MONTHLY:
        return f"_{timestamp.year:04d}-{timestamp.month:02d}"
    start = bucket_start(timestamp, _FIXED_DURATIONS[cycle])
    return (
        f"_{start.year:04d}{start.month:02d}{start.day:02d}"
        f"_{start.hour:02d}{start.minute:02d}"
    )


def should_rotate(
    cycle: RotationCycle,
    opened_at: datetime,
    now: Optional[datetime] = None,
) -> bool:
    """True once *now* lies in a different bucket than *opened_at*.

    *now* defaults to the wall clock and is compared in *opened_at*'s zone.
    """
    if cycle is RotationCycle.NEVER:
        return False
    now = in_zone_of(now, opened_at) if now is not None else now_like(opened_at)
    if cycle is RotationCycle.DAILY:
        return day_key(now) != day_key(opened_at)
    if cycle is RotationCycle.WEEKLY:
        return iso_week(now) != iso_week(opened_at)
    if cycle is RotationCycle.MONTHLY:
        return month_key(now) != month_key(opened_at)
    duration = _FIXED_DURATIONS[cycle]
    return now - bucket_start(opened_at, duration) >= duration


def file_name_for(
    base_path: str,
    file_pattern: str,
    extension: str,
    cycle: RotationCycle,
    timestamp: datetime,
) -> str:
    """``<base_path>/<file_pattern><suffix>.<extension>``."""
    name = f"{file_pattern}{suffix_for(cycle, timestamp)}"
    if extension:
        name = f"{name}.{extension.lstrip('.')}"
    return os.path.join(base_path, name) if base_path else name
