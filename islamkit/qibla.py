"""Qibla bearing and distance from any point to the Kaaba.

Bearing is the great-circle initial course (forward azimuth), distance uses the
haversine formula on a spherical Earth.
"""

import math
from typing import NamedTuple

from .geo import Coordinates, as_coordinates
from .solar import dtr, fix_angle, rtd

KAABA_COORDINATES = Coordinates(latitude=21.4225, longitude=39.8262)

# mean Earth radius, km
EARTH_RADIUS_KM = 6371.0088

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW"
)


class QiblaResult(NamedTuple):
    direction: float
    distance: float
    compass: str


def bearing_to_compass(bearing):
    index = math.floor(fix_angle(bearing) / 22.5 + 0.5) % 16
    return COMPASS_POINTS[index]


def get_qibla_direction(coordinates):
    """Degrees clockwise from true north, in ``[0, 360)``."""
    coords = as_coordinates(coordinates)
    lat1 = dtr(coords.latitude)
    lat2 = dtr(KAABA_COORDINATES.latitude)
    delta_lon = dtr(KAABA_COORDINATES.longitude - coords.longitude)

    x = math.sin(delta_lon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(delta_lon)
    bearing = fix_angle(rtd(math.atan2(x, y)))
    return 0.0 if bearing >= 360.0 else bearing


def get_distance_to_kaaba(coordinates):
    coords = as_coordinates(coordinates)
    lat1 = dtr(coords.latitude)
    lat2 = dtr(KAABA_COORDINATES.latitude)
    delta_lat = lat2 - lat1
    delta_lon = dtr(KAABA_COORDINATES.longitude - coords.longitude)

    a = math.sin(delta_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def get_qibla_compass(coordinates):
    return bearing_to_compass(get_qibla_direction(coordinates))


def calculate_qibla(coordinates):
    coords = as_coordinates(coordinates)
    direction = get_qibla_direction(coords)
    distance = get_distance_to_kaaba(coords)
    return QiblaResult(
        direction=round(direction, 2) % 360,
        distance=round(distance, 2),
        compass=bearing_to_compass(direction)
    )
