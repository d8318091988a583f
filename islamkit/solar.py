"""Sun position and hour-angle solving.

Hour values returned here are Universal Time counted from 0h of the date the
Julian date was built for. Angles the sun never reaches come back as ``None``.
"""

import math
from datetime import datetime

SUNRISE_SUNSET_ANGLE = 0.833


def dtr(d):
    return (d * math.pi) / 180.0


def rtd(r):
    return (r * 180.0) / math.pi


def fix_angle(a):
    return a - 360.0 * math.floor(a / 360.0)


def fix_hour(h):
    return h - 24.0 * math.floor(h / 24.0)


def julian_date(day):
    if isinstance(day, datetime):
        day = day.date()
    y, m = day.year, day.month
    if m <= 2:
        y -= 1
        m += 12
    a = math.floor(y / 100)
    b = 2 - a + math.floor(a / 4)
    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + day.day + b - 1524.5


def sun_position(jd):
    """Return ``(declination, equation_of_time)`` in degrees and minutes."""
    d = jd - 2451545.0
    g = fix_angle(357.529 + 0.98560028 * d)
    q = fix_angle(280.459 + 0.98564736 * d)
    L = fix_angle(q + 1.915 * math.sin(dtr(g)) + 0.020 * math.sin(dtr(2 * g)))
    e = 23.439 - 0.00000036 * d
    decl = rtd(math.asin(math.sin(dtr(e)) * math.sin(dtr(L))))
    ra = rtd(math.atan2(math.cos(dtr(e)) * math.sin(dtr(L)), math.cos(dtr(L)))) / 15.0
    # q and ra wrap at different moments near the March equinox
    eqt = fix_hour(q / 15.0 - fix_hour(ra) + 12.0) - 12.0
    return decl, eqt * 60.0


def sun_angle_time(angle, latitude, declination, direction):
    """Hour angle (hours) at which the sun is ``angle`` degrees below the horizon.

    ``direction`` is ``"ccw"`` before noon and ``"cw"`` after it.
    """
    numerator = -math.sin(dtr(angle)) - math.sin(dtr(latitude)) * math.sin(dtr(declination))
    denominator = math.cos(dtr(latitude)) * math.cos(dtr(declination))
    if denominator == 0:
        return None
    x = numerator / denominator
    if x > 1 or x < -1:
        return None
    t = rtd(math.acos(x)) / 15.0
    return -t if direction == "ccw" else t


def mid_day(jd, longitude):
    _, eqt = sun_position(jd)
    return fix_hour(12 - eqt / 60.0 - longitude / 15.0)


def time_for_angle(jd, angle, latitude, longitude, direction):
    decl, _ = sun_position(jd)
    t = sun_angle_time(angle, latitude, decl, direction)
    if t is None:
        return None
    return mid_day(jd, longitude) + t


def asr_time(jd, shadow_factor, latitude, longitude):
    decl, _ = sun_position(jd)
    # shadow length = factor + shadow at noon
    base = shadow_factor + math.tan(abs(dtr(latitude - decl)))
    angle = -rtd(math.atan(1.0 / base)) if base else -90.0
    t = sun_angle_time(angle, latitude, decl, "cw")
    if t is None:
        return None
    return mid_day(jd, longitude) + t
