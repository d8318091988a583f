from datetime import datetime, timedelta, timezone
from typing import NamedTuple


class NextPrayer(NamedTuple):
    name: str
    time: datetime


class CurrentPrayer(NamedTuple):
    name: str
    start_time: datetime


def as_utc(now=None):
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _present(items):
    return [(name, instant) for name, instant in items if instant is not None]


def get_next_prayer(times, now=None, get_times=None):
    """First prayer starting strictly after ``now``.

    After Isha this is the following day's first present prayer, normally
    Fajr. ``get_times`` computes a neighbouring day's ``PrayerTimes``.
    """
    now = as_utc(now)
    for name, instant in _present(times.items()):
        if instant > now:
            return NextPrayer(name, instant)

    if get_times is None:
        raise ValueError("Next prayer falls on the following day; pass get_times")
    tomorrow = get_times(times.date + timedelta(days=1))
    return NextPrayer(*_present(tomorrow.items())[0])


def get_current_prayer(times, now=None, get_times=None):
    """Latest prayer that started at or before ``now``.

    Before Fajr the current period is the previous day's last present prayer,
    normally Isha.
    """
    now = as_utc(now)
    for name, instant in reversed(_present(times.items())):
        if instant <= now:
            return CurrentPrayer(name, instant)

    if get_times is None:
        raise ValueError("Current prayer started on the previous day; pass get_times")
    yesterday = get_times(times.date - timedelta(days=1))
    return CurrentPrayer(*_present(yesterday.items())[-1])
