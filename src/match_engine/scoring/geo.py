"""Coordinate coercion and great-circle distance for the ``_geo`` operator."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from match_engine.config.constants import EARTH_RADIUS_M

_LAT_KEYS = ("lat", "latitude")
_LON_KEYS = ("lon", "lng", "long", "longitude")


def _coerce_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _first_present(location: Mapping, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in location:
            return location[key]
    return None


def coerce_location(value: Any) -> tuple[float, float] | None:
    """Turn a loosely-shaped location into a ``(lat, lon)`` pair.

    Accepts ``{"lat": .., "lon": ..}`` mappings (``lng``/``latitude``/
    ``longitude`` spellings too), ``[lat, lon]`` pairs and ``"lat,lon"``
    strings. Returns None when the value cannot be read as a valid
    coordinate.
    """
    if isinstance(value, Mapping):
        lat = _coerce_number(_first_present(value, _LAT_KEYS))
        lon = _coerce_number(_first_present(value, _LON_KEYS))
    elif isinstance(value, str):
        parts = value.split(",")
        if len(parts) != 2:
            return None
        lat, lon = _coerce_number(parts[0]), _coerce_number(parts[1])
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        lat, lon = _coerce_number(value[0]), _coerce_number(value[1])
    else:
        return None

    if lat is None or lon is None:
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None
    return lat, lon


def distance(a: tuple[float, float], b: tuple[float, float]) -> float:
    """Haversine great-circle distance in meters."""
    lat1, lon1 = map(math.radians, a)
    lat2, lon2 = map(math.radians, b)
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))
