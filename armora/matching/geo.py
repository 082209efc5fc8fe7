"""Great-circle distance helpers."""

from __future__ import annotations

import math

from armora.matching.models import Location

EARTH_RADIUS_KM = 6371.0

# Distance assumed for officers with no reported position
UNKNOWN_DISTANCE_KM = 100.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(origin: Location, position: Location | None) -> float:
    """Distance in km from ``origin`` to ``position``.

    Returns :data:`UNKNOWN_DISTANCE_KM` when the position is unknown.
    """
    if position is None:
        return UNKNOWN_DISTANCE_KM
    return haversine_km(
        origin.latitude,
        origin.longitude,
        position.latitude,
        position.longitude,
    )
