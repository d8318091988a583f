from __future__ import annotations

from datetime import date, datetime

import pytest

from islamkit.solar import (
    asr_time,
    fix_angle,
    fix_hour,
    julian_date,
    mid_day,
    sun_angle_time,
    sun_position,
    time_for_angle,
)


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2000, 1, 1), 2451544.5),
        (date(2024, 1, 15), 2460324.5),
        (date(2024, 3, 1), 2460370.5),
    ],
)
def test_julian_date_at_midnight(day: date, expected: float) -> None:
    assert julian_date(day) == expected


def test_julian_date_ignores_time_of_day() -> None:
    assert julian_date(datetime(2000, 1, 1, 15, 30)) == julian_date(date(2000, 1, 1))


@pytest.mark.parametrize(
    "value, expected",
    [(370.0, 10.0), (-10.0, 350.0), (720.0, 0.0), (0.0, 0.0)],
)
def test_fix_angle_wraps_into_full_turn(value: float, expected: float) -> None:
    assert fix_angle(value) == pytest.approx(expected)


@pytest.mark.parametrize(
    "value, expected",
    [(25.5, 1.5), (-1.0, 23.0), (24.0, 0.0), (12.25, 12.25)],
)
def test_fix_hour_wraps_into_day(value: float, expected: float) -> None:
    assert fix_hour(value) == pytest.approx(expected)


def test_declination_at_solstices_and_equinox() -> None:
    june, _ = sun_position(julian_date(date(2024, 6, 21)))
    december, _ = sun_position(julian_date(date(2024, 12, 21)))
    march, _ = sun_position(julian_date(date(2024, 3, 20)))
    assert june == pytest.approx(23.44, abs=0.05)
    assert december == pytest.approx(-23.44, abs=0.05)
    assert march == pytest.approx(0.0, abs=0.5)


@pytest.mark.parametrize(
    "day, minutes",
    [
        (date(2024, 2, 11), -14.2),
        (date(2024, 11, 3), 16.4),
    ],
)
def test_equation_of_time_extremes(day: date, minutes: float) -> None:
    _, eqt = sun_position(julian_date(day))
    assert eqt == pytest.approx(minutes, abs=0.5)


def test_equation_of_time_stays_small_across_the_year() -> None:
    jd = julian_date(date(2024, 1, 1))
    for offset in range(366):
        _, eqt = sun_position(jd + offset)
        assert -17.0 < eqt < 17.0


def test_sun_angle_time_at_equator_on_equinox() -> None:
    assert sun_angle_time(0.0, 0.0, 0.0, "ccw") == pytest.approx(-6.0)
    assert sun_angle_time(0.0, 0.0, 0.0, "cw") == pytest.approx(6.0)


@pytest.mark.parametrize(
    "angle, latitude, declination",
    [
        (18.0, 70.0, 23.4),  # twilight never ends in summer
        (0.833, 80.0, -23.4),  # sun never rises in winter
        (0.833, 90.0, 10.0),
        (0.833, -90.0, 10.0),
    ],
)
def test_sun_angle_time_unreachable_is_none(angle: float, latitude: float, declination: float) -> None:
    assert sun_angle_time(angle, latitude, declination, "cw") is None


def test_mid_day_follows_equation_of_time_and_longitude() -> None:
    jd = julian_date(date(2024, 11, 3))
    noon = mid_day(jd, 0.0)
    assert noon == pytest.approx(12 - 16.4 / 60, abs=0.01)
    assert mid_day(jd, 15.0) == pytest.approx(noon - 1.0)
    assert mid_day(jd, -30.0) == pytest.approx(noon + 2.0)


def test_time_for_angle_brackets_noon() -> None:
    jd = julian_date(date(2024, 6, 15))
    noon = mid_day(jd, -74.006)
    morning = time_for_angle(jd, 0.833, 40.7128, -74.006, "ccw")
    evening = time_for_angle(jd, 0.833, 40.7128, -74.006, "cw")
    assert morning < noon < evening
    assert noon - morning == pytest.approx(evening - noon)


def test_time_for_angle_propagates_unreachable() -> None:
    jd = julian_date(date(2024, 6, 15))
    assert time_for_angle(jd, 18.0, 69.65, 18.96, "ccw") is None


def test_hanafi_shadow_gives_later_asr() -> None:
    jd = julian_date(date(2024, 4, 10))
    standard = asr_time(jd, 1, 30.0444, 31.2357)
    hanafi = asr_time(jd, 2, 30.0444, 31.2357)
    assert mid_day(jd, 31.2357) < standard < hanafi


def test_asr_time_at_pole_does_not_raise() -> None:
    jd = julian_date(date(2024, 1, 15))
    assert asr_time(jd, 1, 90.0, 0.0) is None
