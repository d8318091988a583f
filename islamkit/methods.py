from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional


class CalculationMethodId(str, Enum):
    MWL = "MWL"
    ISNA = "ISNA"
    EGYPT = "EGYPT"
    MAKKAH = "MAKKAH"
    KARACHI = "KARACHI"
    TEHRAN = "TEHRAN"
    JAFARI = "JAFARI"
    GULF = "GULF"
    KUWAIT = "KUWAIT"
    QATAR = "QATAR"
    SINGAPORE = "SINGAPORE"
    TURKEY = "TURKEY"
    DUBAI = "DUBAI"
    MOONSIGHTING = "MOONSIGHTING"


@dataclass(frozen=True)
class MethodParams:
    fajr_angle: float
    isha_angle: Optional[float] = None
    # minutes after maghrib
    isha_interval: Optional[float] = None
    maghrib_angle: Optional[float] = None


@dataclass(frozen=True)
class CalculationMethod:
    id: CalculationMethodId
    name: str
    params: MethodParams


def _method(method_id, name, **params):
    return method_id, CalculationMethod(method_id, name, MethodParams(**params))


_M = CalculationMethodId

CALCULATION_METHODS = MappingProxyType(dict([
    _method(_M.MWL, "Muslim World League", fajr_angle=18, isha_angle=17),
    _method(_M.ISNA, "Islamic Society of North America", fajr_angle=15, isha_angle=15),
    _method(_M.EGYPT, "Egyptian General Authority of Survey", fajr_angle=19.5, isha_angle=17.5),
    _method(_M.MAKKAH, "Umm Al-Qura University, Makkah", fajr_angle=18.5, isha_interval=90),
    _method(_M.KARACHI, "University of Islamic Sciences, Karachi", fajr_angle=18, isha_angle=18),
    _method(_M.TEHRAN, "Institute of Geophysics, Tehran", fajr_angle=17.7, isha_angle=14, maghrib_angle=4.5),
    _method(_M.JAFARI, "Shia Ithna-Ashari, Leva Institute, Qum", fajr_angle=16, isha_angle=14, maghrib_angle=4),
    _method(_M.GULF, "Gulf Region", fajr_angle=19.5, isha_interval=90),
    _method(_M.KUWAIT, "Kuwait", fajr_angle=18, isha_angle=17.5),
    _method(_M.QATAR, "Qatar", fajr_angle=18, isha_interval=90),
    _method(_M.SINGAPORE, "Majlis Ugama Islam Singapura, Singapore", fajr_angle=20, isha_angle=18),
    _method(_M.TURKEY, "Diyanet Isleri Baskanligi, Turkey", fajr_angle=18, isha_angle=17),
    _method(_M.DUBAI, "Dubai", fajr_angle=18.2, isha_angle=18.2),
    _method(_M.MOONSIGHTING, "Moonsighting Committee Worldwide", fajr_angle=18, isha_angle=18),
]))

DEFAULT_METHOD = CalculationMethodId.MWL

# fallback when a method sets neither an isha angle nor an interval
DEFAULT_ISHA_ANGLE = 17.0

PRAYER_NAMES = ("fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha")

PRAYER_LABELS = {
    "fajr": "Fajr",
    "sunrise": "Sunrise",
    "dhuhr": "Dhuhr",
    "asr": "Asr",
    "maghrib": "Maghrib",
    "isha": "Isha"
}


def method_id(value):
    if isinstance(value, CalculationMethodId):
        return value
    try:
        return CalculationMethodId(str(value).strip().upper())
    except ValueError:
        raise ValueError(f"Unknown method: {value}") from None


def get_method(value):
    return CALCULATION_METHODS[method_id(value)]
