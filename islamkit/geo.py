from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float
    # metres; accepted but not used by any calculation
    elevation: Optional[float] = None


def as_coordinates(value):
    """Build :class:`Coordinates` from a dataclass, mapping or ``(lat, lng[, elev])``.

    Mappings may use ``latitude``/``longitude`` or the short ``lat``/``lng`` keys
    stored in the config file.
    """
    if isinstance(value, Coordinates):
        return value
    if isinstance(value, Mapping):
        lat = value.get("latitude", value.get("lat"))
        lng = value.get("longitude", value.get("lng"))
        if lat is None or lng is None:
            raise ValueError(f"Location has no coordinates: {dict(value)}")
        elevation = value.get("elevation")
        return Coordinates(float(lat), float(lng), None if elevation is None else float(elevation))
    if isinstance(value, (tuple, list)) and len(value) in (2, 3):
        return Coordinates(*(float(v) for v in value))
    raise ValueError(f"Cannot read coordinates from {value!r}")


def format_coordinates(coords):
    ns = "N" if coords.latitude >= 0 else "S"
    ew = "E" if coords.longitude >= 0 else "W"
    return f"{abs(coords.latitude):.4f}{ns}, {abs(coords.longitude):.4f}{ew}"
