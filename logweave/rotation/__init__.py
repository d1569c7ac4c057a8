"""
Rotation engine: pure decisions about log file names and rollover.

Usage:
    from logweave.rotation import RotationCycle, file_name_for

    cycle = RotationCycle.from_string("daily")
    path = file_name_for("logs", "app", "log", cycle, datetime.now())   # logs/app_2024-03-15.log
    if cycle.should_rotate(opened_at):
        ...  # reopen under the new name
"""
from logweave.rotation.calendar import IsoWeek, bucket_start, iso_week
from logweave.rotation.cycle import (
    ALIASES,
    RotationCycle,
    file_name_for,
    should_rotate,
    suffix_for,
)

__all__ = [
    "ALIASES",
    "IsoWeek",
    "RotationCycle",
    "bucket_start",
    "file_name_for",
    "iso_week",
    "should_rotate",
    "suffix_for",
]
