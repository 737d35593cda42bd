"""
Purpose: Great-circle distance between two points.
What it does:
- Defines the internal Coordinate value type (lat, lng) with range validation
- Computes Haversine distance in kilometres on a 6371 km sphere

Rule: haversine_distance_km does not validate. Build a Coordinate first;
that is where bad input gets rejected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from .rounding import round_half_up

EARTH_RADIUS_KM = 6371.0


class InvalidCoordinateError(ValueError):
    """Latitude/longitude outside the valid range or not a finite number."""
    pass


@dataclass(frozen=True)
class Coordinate:
    """
    Immutable (lat, lng) pair in decimal degrees.
    lat must be in [-90, 90] and lng in [-180, 180].
    """

    lat: float
    lng: float

    def __post_init__(self) -> None:
        for name in ("lat", "lng"):
            value = getattr(self, name)
            # bool is an int subclass, but True is not a latitude
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidCoordinateError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidCoordinateError(f"{name} must be finite, got {value!r}")

        if not -90 <= self.lat <= 90:
            raise InvalidCoordinateError(f"lat must be within [-90, 90], got {self.lat}")
        if not -180 <= self.lng <= 180:
            raise InvalidCoordinateError(f"lng must be within [-180, 180], got {self.lng}")

    @classmethod
    def parse(cls, raw: Any) -> Optional[Coordinate]:
        """
        Lenient constructor for directory data: accepts a mapping with
        lat/lng (or lat/lon) keys and returns None instead of raising.
        """
        if isinstance(raw, Coordinate):
            return raw
        if not isinstance(raw, dict):
            return None

        lat = raw.get("lat")
        lng = raw.get("lng", raw.get("lon"))
        try:
            return cls(lat=lat, lng=lng)
        except InvalidCoordinateError:
            return None

    def as_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}


def haversine_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Great-circle distance between two points, in kilometres.

    Uses the Haversine formula:
        a = sin²(Δlat/2) + cos(lat1)·cos(lat2)·sin²(Δlng/2)
        d = 2·R·atan2(√a, √(1−a))

    The result is rounded half up to 4 decimals (0.1 m), so d(A, B) == d(B, A)
    exactly and d(A, A) == 0.

    Example:
        >>> haversine_distance_km(28.6139, 77.2090, 28.7041, 77.1025)
        14.44...  # Connaught Place -> north-west Delhi, roughly 14.4 km
    """
    delta_lat = math.radians(lat2 - lat1)
    delta_lng = math.radians(lng2 - lng1)

    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return round_half_up(EARTH_RADIUS_KM * c, 4)


def distance_between(origin: Coordinate, destination: Coordinate) -> float:
    """Coordinate-typed wrapper around haversine_distance_km."""
    return haversine_distance_km(origin.lat, origin.lng, destination.lat, destination.lng)
