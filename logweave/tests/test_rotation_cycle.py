"""Unit tests for rotation cycles: parsing, suffixes and the staleness check."""
from __future__ import annotations

import os
import unittest
from datetime import datetime, timedelta, timezone

from logweave.core.exceptions import ConfigurationError, InvalidRotationCycleError
from logweave.rotation.cycle import ALIASES, RotationCycle, file_name_for, should_rotate, suffix_for


class TestParsing(unittest.TestCase):
    def test_canonical_names_round_trip(self) -> None:
        for cycle in RotationCycle:
            self.assertIs(RotationCycle.from_string(cycle.canonical_name), cycle)

    def test_enum_names(self) -> None:
        self.assertIs(RotationCycle.from_string("HOURLY"), RotationCycle.HOURLY)
        self.assertIs(RotationCycle.from_string("twelve_hours"), RotationCycle.TWELVE_HOURS)

    def test_every_alias_resolves(self) -> None:
        for alias, cycle in ALIASES.items():
            self.assertIs(RotationCycle.from_string(alias), cycle, alias)

    def test_normalization(self) -> None:
        self.assertIs(RotationCycle.from_string("  Daily "), RotationCycle.DAILY)
        self.assertIs(RotationCycle.from_string("every day"), RotationCycle.DAILY)
        self.assertIs(RotationCycle.from_string("Ten-Minutes"), RotationCycle.TEN_MINUTES)

    def test_one_m_means_month(self) -> None:
        self.assertIs(RotationCycle.from_string("1m"), RotationCycle.MONTHLY)
        self.assertIs(RotationCycle.from_string("10m"), RotationCycle.TEN_MINUTES)

    def test_invalid_value_raises(self) -> None:
        with self.assertRaises(InvalidRotationCycleError) as ctx:
            RotationCycle.from_string("fortnight")
        err = ctx.exception
        self.assertIsInstance(err, ConfigurationError)
        self.assertEqual(err.code, "INVALID_ROTATION_CYCLE")
        self.assertEqual(err.details["value"], "fortnight")
        self.assertIn("day", err.details["valid"])
        self.assertIn("fortnight", str(err))

    def test_try_from_string_returns_none(self) -> None:
        self.assertIsNone(RotationCycle.try_from_string(""))
        self.assertIsNone(RotationCycle.try_from_string(None))
        self.assertIsNone(RotationCycle.try_from_string("bogus"))

    def test_durations(self) -> None:
        self.assertEqual(RotationCycle.SIX_HOURS.duration, timedelta(hours=6))
        self.assertTrue(RotationCycle.TEN_MINUTES.is_fixed_duration)
        self.assertFalse(RotationCycle.DAILY.is_fixed_duration)
        self.assertIsNone(RotationCycle.MONTHLY.duration)


class TestSuffix(unittest.TestCase):
    def test_never(self) -> None:
        self.assertEqual(suffix_for(RotationCycle.NEVER, datetime(2024, 3, 15)), "")

    def test_calendar_cycles(self) -> None:
        ts = datetime(2024, 3, 15, 17, 42)
        self.assertEqual(RotationCycle.DAILY.suffix_for(ts), "_2024-03-15")
        self.assertEqual(RotationCycle.MONTHLY.suffix_for(ts), "_2024-03")
        self.assertEqual(RotationCycle.WEEKLY.suffix_for(ts), "_2024-CW11")

    def test_weekly_uses_iso_week_year(self) -> None:
        self.assertEqual(RotationCycle.WEEKLY.suffix_for(datetime(2024, 12, 30)), "_2025-CW1")
        self.assertEqual(RotationCycle.WEEKLY.suffix_for(datetime(2023, 1, 1)), "_2022-CW52")

    def test_fixed_buckets_use_bucket_start(self) -> None:
        ts = datetime(2024, 3, 15, 13, 17, 45)
        self.assertEqual(RotationCycle.TEN_MINUTES.suffix_for(ts), "_20240315_1310")
        self.assertEqual(RotationCycle.THIRTY_MINUTES.suffix_for(ts), "_20240315_1300")
        self.assertEqual(RotationCycle.HOURLY.suffix_for(ts), "_20240315_1300")
        self.assertEqual(RotationCycle.FOUR_HOURS.suffix_for(ts), "_20240315_1200")
        self.assertEqual(RotationCycle.TWELVE_HOURS.suffix_for(ts), "_20240315_1200")
        self.assertEqual(RotationCycle.THREE_HOURS.suffix_for(datetime(2024, 3, 15, 2, 59)), "_20240315_0000")

    def test_file_name_for(self) -> None:
        ts = datetime(2024, 3, 15)
        self.assertEqual(
            file_name_for("logs", "app", "log", RotationCycle.DAILY, ts),
            os.path.join("logs", "app_2024-03-15.log"),
        )
        self.assertEqual(file_name_for("", "app", ".txt", RotationCycle.NEVER, ts), "app.txt")
        self.assertEqual(file_name_for("", "app", "", RotationCycle.NEVER, ts), "app")


class TestShouldRotate(unittest.TestCase):
    def test_never_rotates(self) -> None:
        self.assertFalse(should_rotate(RotationCycle.NEVER, datetime(2000, 1, 1), datetime(2030, 1, 1)))

    def test_daily_crosses_midnight(self) -> None:
        opened = datetime(2024, 3, 15, 23, 59)
        now = datetime(2024, 3, 16, 0, 0, 1)
        self.assertTrue(RotationCycle.DAILY.should_rotate(opened, now))
        self.assertEqual(RotationCycle.DAILY.suffix_for(now), "_2024-03-16")

    def test_daily_same_day(self) -> None:
        self.assertFalse(
            RotationCycle.DAILY.should_rotate(datetime(2024, 3, 15, 0, 0), datetime(2024, 3, 15, 23, 59, 59))
        )

    def test_daily_same_date_different_year(self) -> None:
        self.assertTrue(
            RotationCycle.DAILY.should_rotate(datetime(2023, 3, 16), datetime(2024, 3, 16))
        )

    def test_monthly(self) -> None:
        self.assertTrue(RotationCycle.MONTHLY.should_rotate(datetime(2024, 1, 31), datetime(2024, 2, 1)))
        self.assertTrue(RotationCycle.MONTHLY.should_rotate(datetime(2023, 3, 10), datetime(2024, 3, 10)))
        self.assertFalse(RotationCycle.MONTHLY.should_rotate(datetime(2024, 3, 1), datetime(2024, 3, 31)))

    def test_weekly(self) -> None:
        self.assertTrue(RotationCycle.WEEKLY.should_rotate(datetime(2024, 12, 29), datetime(2024, 12, 30)))
        self.assertFalse(RotationCycle.WEEKLY.should_rotate(datetime(2024, 12, 30), datetime(2025, 1, 5)))
        self.assertTrue(RotationCycle.WEEKLY.should_rotate(datetime(2024, 3, 11), datetime(2025, 3, 10)))

    def test_fixed_duration_bucket_boundary(self) -> None:
        opened = datetime(2024, 3, 15, 10, 15)
        self.assertFalse(RotationCycle.HOURLY.should_rotate(opened, datetime(2024, 3, 15, 10, 59, 59)))
        self.assertTrue(RotationCycle.HOURLY.should_rotate(opened, datetime(2024, 3, 15, 11, 0)))
        self.assertTrue(RotationCycle.TEN_MINUTES.should_rotate(opened, datetime(2024, 3, 15, 10, 20)))
        self.assertFalse(RotationCycle.TEN_MINUTES.should_rotate(opened, datetime(2024, 3, 15, 10, 19)))

    def test_now_compared_in_opened_zone(self) -> None:
        opened = datetime(2024, 3, 15, 21, 0, tzinfo=timezone.utc)
        plus_two = timezone(timedelta(hours=2))
        now = datetime(2024, 3, 16, 0, 30, tzinfo=plus_two)
        self.assertFalse(RotationCycle.DAILY.should_rotate(opened, now))


if __name__ == "__main__":
    unittest.main()
