"""Spherical geometry helpers.

Points are anything with ``latitude`` and ``longitude`` attributes in decimal
degrees. Direction vectors are ``(lon_delta, lat_delta)`` tuples in degrees.
"""

from __future__ import annotations

import math
from typing import Protocol

from balloontrack.exceptions import DegenerateVectorError

EARTH_RADIUS_KM = 6371.0


class LatLon(Protocol):
    @property
    def latitude(self) -> float: ...

    @property
    def longitude(self) -> float: ...


def great_circle_distance_km(p1: LatLon, p2: LatLon) -> float:
    """Haversine distance in kilometres."""
    lat1 = math.radians(p1.latitude)
    lat2 = math.radians(p2.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(p2.longitude - p1.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, max(0.0, math.sqrt(h))))


def wrapped_longitude_delta(lon1: float, lon2: float) -> float:
    """Return ``lon2 - lon1`` normalised into (-180, 180]."""
    delta = lon2 - lon1
    while delta > 180.0:
        delta -= 360.0
    while delta <= -180.0:
        delta += 360.0
    return delta


def direction_vector(a: LatLon, b: LatLon) -> tuple[float, float]:
    """Vector from ``a`` to ``b`` taking the short way across the antimeridian."""
    return wrapped_longitude_delta(a.longitude, b.longitude), b.latitude - a.latitude


def _rescaled(v: tuple[float, float]) -> tuple[float, float]:
    # scale by the larger component so squares stay in [1, 2]
    m = max(abs(v[0]), abs(v[1]))
    if m == 0.0:
        raise DegenerateVectorError(f"zero-length vector {v}")
    return v[0] / m, v[1] / m


def angle_between_deg(v1: tuple[float, float], v2: tuple[float, float]) -> float:
    """Unsigned angle between two 2-D vectors in degrees, in [0, 180].

    Raises:
        DegenerateVectorError: if either vector has zero length.
    """
    x1, y1 = _rescaled(v1)
    x2, y2 = _rescaled(v2)
    sq1 = x1 * x1 + y1 * y1
    sq2 = x2 * x2 + y2 * y2
    cos_theta = (x1 * x2 + y1 * y2) / math.sqrt(sq1 * sq2)
    return math.degrees(math.acos(max(-1.0, min(1.0, cos_theta))))
