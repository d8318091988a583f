"""One-shot helpers for callers that do not keep a calculator around.

    times = get_prayer_times(date(2024, 1, 15), 40.7128, -74.006, method="ISNA")
    upcoming = get_next_prayer(times)

Navigation here recomputes neighbouring days from the coordinates and options
stored on ``times``.
"""

from . import navigation
from .calc import PrayerTimesCalculator
from .geo import Coordinates

__all__ = [
    "get_prayer_times",
    "get_prayer_times_for_range",
    "get_next_prayer",
    "get_current_prayer",
]


def _calculator(latitude, longitude, elevation, options):
    return PrayerTimesCalculator(Coordinates(latitude, longitude, elevation), **options)


def _recompute(times):
    def get_times(day):
        if times.coordinates is None:
            raise ValueError("PrayerTimes carries no coordinates; use a calculator")
        return PrayerTimesCalculator(times.coordinates, times.options).get_times(day)
    return get_times


def get_prayer_times(day, latitude, longitude, elevation=None, **options):
    return _calculator(latitude, longitude, elevation, options).get_times(day)


def get_prayer_times_for_range(start, end, latitude, longitude, elevation=None, **options):
    return _calculator(latitude, longitude, elevation, options).get_times_for_range(start, end)


def get_next_prayer(times, now=None):
    return navigation.get_next_prayer(times, now, _recompute(times))


def get_current_prayer(times, now=None):
    return navigation.get_current_prayer(times, now, _recompute(times))
