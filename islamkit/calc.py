import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from .geo import Coordinates, as_coordinates
from .methods import (
    DEFAULT_ISHA_ANGLE,
    DEFAULT_METHOD,
    PRAYER_NAMES,
    CalculationMethodId,
    get_method,
    method_id,
)
from .navigation import get_current_prayer, get_next_prayer
from .solar import SUNRISE_SUNSET_ANGLE, asr_time, julian_date, mid_day, time_for_angle

logger = logging.getLogger(__name__)


class AsrMethod(str, Enum):
    STANDARD = "STANDARD"
    HANAFI = "HANAFI"

    @property
    def shadow_factor(self):
        return 2 if self is AsrMethod.HANAFI else 1


# madhab names accepted wherever an Asr method is read from text
_ASR_ALIASES = {"SHAFI": "STANDARD", "MALIKI": "STANDARD", "HANBALI": "STANDARD"}


class HighLatitudeMethod(str, Enum):
    NONE = "NONE"
    ANGLE_BASED = "ANGLE_BASED"
    MIDDLE_OF_NIGHT = "MIDDLE_OF_NIGHT"
    ONE_SEVENTH = "ONE_SEVENTH"


def asr_method(value):
    if isinstance(value, AsrMethod):
        return value
    key = str(value).strip().upper()
    try:
        return AsrMethod(_ASR_ALIASES.get(key, key))
    except ValueError:
        raise ValueError(f"Unknown Asr method: {value}") from None


def high_latitude_method(value):
    if isinstance(value, HighLatitudeMethod):
        return value
    try:
        return HighLatitudeMethod(str(value).strip().upper().replace("-", "_"))
    except ValueError:
        raise ValueError(f"Unknown high latitude method: {value}") from None


@dataclass(frozen=True)
class PrayerAdjustments:
    """Per-prayer offsets in minutes, added after every angle-based step."""

    fajr: Optional[int] = None
    sunrise: Optional[int] = None
    dhuhr: Optional[int] = None
    asr: Optional[int] = None
    maghrib: Optional[int] = None
    isha: Optional[int] = None

    @classmethod
    def from_mapping(cls, values):
        unknown = set(values) - set(PRAYER_NAMES)
        if unknown:
            raise ValueError(f"Unknown prayer for offset: {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in values.items() if v is not None})

    def merged(self, other):
        if isinstance(other, Mapping):
            other = PrayerAdjustments.from_mapping(other)
        changes = {f.name: getattr(other, f.name) for f in fields(other) if getattr(other, f.name) is not None}
        return replace(self, **changes)

    def minutes(self, prayer):
        return getattr(self, prayer) or 0


@dataclass(frozen=True)
class PrayerTimesOptions:
    method: CalculationMethodId = DEFAULT_METHOD
    asr_method: AsrMethod = AsrMethod.STANDARD
    high_latitude_method: HighLatitudeMethod = HighLatitudeMethod.ANGLE_BASED
    adjustments: PrayerAdjustments = field(default_factory=PrayerAdjustments)

    def __post_init__(self):
        method = DEFAULT_METHOD if self.method is None else self.method
        asr = AsrMethod.STANDARD if self.asr_method is None else self.asr_method
        rule = HighLatitudeMethod.ANGLE_BASED if self.high_latitude_method is None else self.high_latitude_method
        object.__setattr__(self, "method", method_id(method))
        object.__setattr__(self, "asr_method", asr_method(asr))
        object.__setattr__(self, "high_latitude_method", high_latitude_method(rule))
        adjustments = self.adjustments
        if adjustments is None:
            adjustments = PrayerAdjustments()
        elif isinstance(adjustments, Mapping):
            adjustments = PrayerAdjustments.from_mapping(adjustments)
        object.__setattr__(self, "adjustments", adjustments)


@dataclass(frozen=True)
class PrayerTimes:
    """Prayer instants for one calendar day at one place.

    Instants are aware UTC datetimes; a field is ``None`` when the sun never
    reaches the angle that defines it and no high latitude rule repaired it.
    """

    date: date
    fajr: Optional[datetime]
    sunrise: Optional[datetime]
    dhuhr: Optional[datetime]
    asr: Optional[datetime]
    maghrib: Optional[datetime]
    isha: Optional[datetime]
    coordinates: Optional[Coordinates] = field(default=None, repr=False, compare=False)
    options: Optional[PrayerTimesOptions] = field(default=None, repr=False, compare=False)

    def items(self):
        return [(name, getattr(self, name)) for name in PRAYER_NAMES]

    def as_dict(self):
        return dict(self.items())


def as_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value


def _to_instant(day, hours):
    if hours is None:
        return None
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return midnight + timedelta(minutes=math.floor(hours * 60 + 0.5))


class PrayerTimesCalculator:
    def __init__(self, coordinates, options=None, **kwargs):
        self._coordinates = as_coordinates(coordinates)
        if options is None:
            options = PrayerTimesOptions(**kwargs)
        elif isinstance(options, Mapping):
            options = PrayerTimesOptions(**{**options, **kwargs})
        elif kwargs:
            options = replace(options, **kwargs)
        self._options = options

    @property
    def coordinates(self):
        return self._coordinates

    @property
    def options(self):
        return self._options

    @property
    def method(self):
        return get_method(self._options.method)

    def set_method(self, method):
        self._options = replace(self._options, method=method_id(method))

    def set_asr_method(self, value):
        self._options = replace(self._options, asr_method=asr_method(value))

    def set_high_latitude_method(self, value):
        self._options = replace(self._options, high_latitude_method=high_latitude_method(value))

    def set_adjustments(self, adjustments):
        self._options = replace(self._options, adjustments=self._options.adjustments.merged(adjustments))

    def get_times(self, day):
        day = as_date(day)
        lat = self._coordinates.latitude
        lng = self._coordinates.longitude
        params = self.method.params
        jd = julian_date(day)

        times = {
            "fajr": time_for_angle(jd, params.fajr_angle, lat, lng, "ccw"),
            "sunrise": time_for_angle(jd, SUNRISE_SUNSET_ANGLE, lat, lng, "ccw"),
            "dhuhr": mid_day(jd, lng),
            "asr": asr_time(jd, self._options.asr_method.shadow_factor, lat, lng),
            "maghrib": time_for_angle(jd, SUNRISE_SUNSET_ANGLE, lat, lng, "cw"),
        }
        times["isha"] = self._isha_time(jd, times["maghrib"])

        if params.maghrib_angle is not None:
            times["maghrib"] = time_for_angle(jd, params.maghrib_angle, lat, lng, "cw")

        # keep noon within 12 h of local mean noon so the day stays local
        shift = 24 * math.floor((12 - lng / 15.0 - times["dhuhr"]) / 24 + 0.5)
        if shift:
            times = {k: v if v is None else v + shift for k, v in times.items()}

        if self._options.high_latitude_method is not HighLatitudeMethod.NONE:
            times = self._adjust_high_latitude(day, times)

        times = self._apply_adjustments(times)

        missing = [name for name in PRAYER_NAMES if times[name] is None]
        if missing:
            logger.warning(
                "Sun does not reach the angle for %s on %s at (%s, %s)",
                ", ".join(missing), day.isoformat(), lat, lng
            )

        return PrayerTimes(
            date=day,
            coordinates=self._coordinates,
            options=self._options,
            **{name: _to_instant(day, times[name]) for name in PRAYER_NAMES}
        )

    def get_times_for_range(self, start, end):
        current = as_date(start)
        end = as_date(end)
        results = []
        while current <= end:
            results.append(self.get_times(current))
            current += timedelta(days=1)
        return results

    def get_next_prayer(self, times, now=None):
        return get_next_prayer(times, now, self.get_times)

    def get_current_prayer(self, times, now=None):
        return get_current_prayer(times, now, self.get_times)

    def _isha_time(self, jd, maghrib):
        params = self.method.params
        lat = self._coordinates.latitude
        lng = self._coordinates.longitude
        if params.isha_interval is not None:
            if maghrib is None:
                return None
            return maghrib + params.isha_interval / 60.0
        angle = params.isha_angle if params.isha_angle is not None else DEFAULT_ISHA_ANGLE
        return time_for_angle(jd, angle, lat, lng, "cw")

    def _adjust_high_latitude(self, day, times):
        sunrise = times["sunrise"]
        maghrib = times["maghrib"]
        if sunrise is None or maghrib is None:
            return times
        night = sunrise + 24 - maghrib

        fajr = times["fajr"]
        if fajr is None or fajr > sunrise:
            times["fajr"] = sunrise - self._night_portion("fajr") * night
            logger.debug("High latitude fajr on %s: %s -> %.4f", day, fajr, times["fajr"])

        isha = times["isha"]
        if isha is None or isha < maghrib:
            times["isha"] = maghrib + self._night_portion("isha") * night
            logger.debug("High latitude isha on %s: %s -> %.4f", day, isha, times["isha"])

        return times

    def _night_portion(self, prayer):
        params = self.method.params
        if prayer == "fajr":
            angle = params.fajr_angle
        else:
            angle = params.isha_angle if params.isha_angle is not None else DEFAULT_ISHA_ANGLE

        rule = self._options.high_latitude_method
        if rule is HighLatitudeMethod.ANGLE_BASED:
            return angle / 60.0
        if rule is HighLatitudeMethod.MIDDLE_OF_NIGHT:
            return 0.5
        if rule is HighLatitudeMethod.ONE_SEVENTH:
            return 1 / 7.0
        return 0.0

    def _apply_adjustments(self, times):
        adjustments = self._options.adjustments
        adjusted = dict(times)
        for key in PRAYER_NAMES:
            minutes = adjustments.minutes(key)
            if minutes and adjusted[key] is not None:
                adjusted[key] += minutes / 60.0
        return adjusted
