"""Calendar arithmetic for rotation buckets: ISO weeks, bucket alignment, zones."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Union


@dataclass(frozen=True, order=True)
class IsoWeek:
    """ISO-8601 week: the week-numbering year and the 1-based week number."""

    year: int
    week: int

    def __str__(self) -> str:
        return f"{self.year}-W{self.week:02d}"


def iso_week(value: Union[date, datetime]) -> IsoWeek:
    """ISO-8601 week of *value* (weeks start Monday; week 1 holds the year's first Thursday).

    The Thursday of the same Monday-based week decides both the week-numbering
    year and the week number, so 2023-01-01 (a Sunday) is week 52 of 2022 and
    2024-12-30 (a Monday) is week 1 of 2025.
    """
    day = value.date() if isinstance(value, datetime) else value
    thursday = day + timedelta(days=3 - day.weekday())
    week = (thursday.timetuple().tm_yday - 1) // 7 + 1
    return IsoWeek(year=thursday.year, week=week)


def day_key(value: datetime) -> tuple[int, int, int]:
    return (value.year, value.month, value.day)


def month_key(value: datetime) -> tuple[int, int]:
    return (value.year, value.month)


def bucket_start(value: datetime, duration: timedelta) -> datetime:
    """Start of the fixed-size bucket holding *value*, aligned to local midnight.

    Every supported duration divides 24 hours, so buckets never straddle a day.
    """
    midnight = value.replace(hour=0, minute=0, second=0, microsecond=0)
    elapsed = value - midnight
    return midnight + (elapsed - elapsed % duration)


def in_zone_of(value: datetime, reference: datetime) -> datetime:
    """Express *value* in *reference*'s time zone (naive means local time)."""
    if reference.tzinfo is None:
        if value.tzinfo is None:
            return value
        return value.astimezone().replace(tzinfo=None)
    return value.astimezone(reference.tzinfo)


def now_like(reference: datetime) -> datetime:
    """Current wall-clock time in *reference*'s time zone."""
    if reference.tzinfo is None:
        return datetime.now()
    return datetime.now(reference.tzinfo)
