"""
Purpose: Core data models for the drivers (riders) domain.
What it does:
Defines the structure of a Rider, their availability, and the result of
assigning one to a shop's order, without relying on Django ORM constraints.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from routing.distance import Coordinate


@dataclass(frozen=True)
class Rider:
    """
    A purely stateless snapshot of a rider at a specific point in time.
    `updated_at` is the last location ping; a fresher ping suggests a less busy rider.
    """
    id: str
    name: str
    location: Coordinate
    is_online: bool = False
    is_busy: bool = False
    phone: str = ""
    updated_at: datetime | None = None

    @classmethod
    def new(
        cls,
        rider_id: str,
        lat: float,
        lng: float,
        name: str = "",
        is_online: bool = True,
        is_busy: bool = False,
        updated_at: datetime | None = None,
    ) -> Rider:
        return cls(
            id=rider_id,
            name=name or rider_id,
            location=Coordinate(lat=lat, lng=lng),
            is_online=is_online,
            is_busy=is_busy,
            updated_at=updated_at or datetime.now(timezone.utc),
        )


@dataclass(frozen=True)
class RiderAssignment:
    rider_id: str
    rider_name: str
    distance_to_vendor_km: float   # rounded to 2 decimals
    estimated_pickup_minutes: int
