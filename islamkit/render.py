import math
from datetime import datetime
from typing import NamedTuple
from zoneinfo import ZoneInfo

from .methods import PRAYER_LABELS, PRAYER_NAMES
from .navigation import as_utc

MISSING_TIME = "--:--"


class FormattedPrayerTimes(NamedTuple):
    date: str
    fajr: str
    sunrise: str
    dhuhr: str
    asr: str
    maghrib: str
    isha: str


class TimeRemaining(NamedTuple):
    hours: int
    minutes: int
    seconds: int
    total_seconds: int
    is_past: bool


def get_timezone(tz_name):
    if tz_name:
        return ZoneInfo(tz_name)
    return datetime.now().astimezone().tzinfo


def format_time(instant, time_format="24h", tz=None, include_seconds=False):
    if instant is None:
        return MISSING_TIME
    if tz is not None:
        if isinstance(tz, str):
            tz = get_timezone(tz)
        instant = instant.astimezone(tz)
    if time_format == "24h":
        return instant.strftime("%H:%M:%S" if include_seconds else "%H:%M")
    return instant.strftime("%I:%M:%S %p" if include_seconds else "%I:%M %p").lstrip("0")


def format_prayer_times(times, time_format="24h", tz=None, include_seconds=False):
    return FormattedPrayerTimes(
        times.date.isoformat(),
        *(format_time(instant, time_format, tz, include_seconds) for _, instant in times.items())
    )


def get_time_remaining(target, now=None):
    diff = (target - as_utc(now)).total_seconds()
    total_seconds = int(math.floor(abs(diff)))
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return TimeRemaining(hours, minutes, seconds, total_seconds, diff < 0)


def format_time_remaining(target, now=None):
    remaining = get_time_remaining(target, now)
    if remaining.hours > 0:
        text = f"{remaining.hours}h {remaining.minutes}m"
    else:
        text = f"{remaining.minutes}m"
    return f"{text} ago" if remaining.is_past else text


def format_countdown(delta):
    total_minutes = int(delta.total_seconds() // 60)
    if total_minutes < 0:
        total_minutes = 0
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h{minutes:02d}"
    return f"{minutes}m"


def build_table(times, tz=None, time_format="24h", title=None):
    lines = [title] if title else []
    for key in PRAYER_NAMES:
        label = PRAYER_LABELS[key]
        lines.append(f"{label:<8} {format_time(getattr(times, key), time_format, tz)}")
    return "\n".join(lines)
