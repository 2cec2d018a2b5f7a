"""Great-circle distance between coordinates."""

import math
from collections.abc import Mapping
from typing import Any

EARTH_RADIUS_KM = 6371.0


def distance_km(a: Any, b: Any) -> float | None:
    """Haversine distance in kilometres, or None if either point is missing.

    Points may be LatLng models or {"lat", "lng"} mappings.
    """
    if a is None or b is None:
        return None
    lat1, lng1 = _coords(a)
    lat2, lng2 = _coords(b)

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _coords(point: Any) -> tuple[float, float]:
    if isinstance(point, Mapping):
        return float(point["lat"]), float(point["lng"])
    return float(point.lat), float(point.lng)
