from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from islamkit.calc import PrayerTimes, PrayerTimesCalculator
from islamkit.render import (
    MISSING_TIME,
    build_table,
    format_countdown,
    format_prayer_times,
    format_time,
    format_time_remaining,
    get_time_remaining,
)

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "instant, time_format, expected",
    [
        (datetime(2024, 1, 15, 5, 7, tzinfo=timezone.utc), "24h", "05:07"),
        (datetime(2024, 1, 15, 5, 7, tzinfo=timezone.utc), "12h", "5:07 AM"),
        (datetime(2024, 1, 15, 17, 30, tzinfo=timezone.utc), "12h", "5:30 PM"),
        (datetime(2024, 1, 15, 0, 0, tzinfo=timezone.utc), "24h", "00:00"),
    ],
)
def test_format_time(instant: datetime, time_format: str, expected: str) -> None:
    assert format_time(instant, time_format) == expected


def test_format_time_with_seconds_and_zone() -> None:
    instant = datetime(2024, 1, 15, 17, 5, 9, tzinfo=timezone.utc)
    riyadh = timezone(timedelta(hours=3))
    assert format_time(instant, include_seconds=True) == "17:05:09"
    assert format_time(instant, tz=riyadh) == "20:05"


def test_format_time_with_zone_name() -> None:
    instant = datetime(2024, 1, 15, 17, 5, tzinfo=timezone.utc)
    assert format_time(instant, tz="America/New_York") == "12:05"


def test_missing_instant_renders_placeholder() -> None:
    assert format_time(None) == MISSING_TIME


def test_format_prayer_times() -> None:
    times = PrayerTimesCalculator((40.7128, -74.006)).get_times(date(2024, 1, 15))
    formatted = format_prayer_times(times, "12h")
    assert formatted.date == "2024-01-15"
    assert formatted.dhuhr == format_time(times.dhuhr, "12h")
    assert formatted.dhuhr.endswith("PM")
    assert len(formatted) == 7


def test_time_remaining_future_and_past() -> None:
    ahead = get_time_remaining(NOW + timedelta(hours=2, minutes=15, seconds=30), NOW)
    assert ahead == (2, 15, 30, 8130, False)
    behind = get_time_remaining(NOW - timedelta(minutes=5), NOW)
    assert behind.is_past
    assert behind.total_seconds == 300


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(hours=2, minutes=15), "2h 15m"),
        (timedelta(minutes=45, seconds=59), "45m"),
        (timedelta(hours=-1), "1h 0m ago"),
        (timedelta(minutes=-20), "20m ago"),
    ],
)
def test_format_time_remaining(delta: timedelta, expected: str) -> None:
    assert format_time_remaining(NOW + delta, NOW) == expected


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(hours=2, minutes=5), "2h05"),
        (timedelta(minutes=45), "45m"),
        (timedelta(minutes=-3), "0m"),
    ],
)
def test_format_countdown(delta: timedelta, expected: str) -> None:
    assert format_countdown(delta) == expected


def test_build_table_lists_every_prayer() -> None:
    stamp = datetime(2024, 1, 15, 4, 0, tzinfo=timezone.utc)
    times = PrayerTimes(date(2024, 1, 15), None, stamp, stamp, stamp, stamp, None)
    table = build_table(times, timezone.utc, title="Somewhere")
    lines = table.splitlines()
    assert lines[0] == "Somewhere"
    assert lines[1] == f"Fajr     {MISSING_TIME}"
    assert lines[2] == "Sunrise  04:00"
    assert len(lines) == 7
