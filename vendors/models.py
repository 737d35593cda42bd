"""
Purpose: Core data models for the vendors domain.
What it does:
Defines a Vendor (a shop as the directory returns it) and the
VendorWithEta annotation produced per request, without relying on
Django ORM or any particular backend's document shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from routing.distance import Coordinate
from routing.eta_service import EtaResult
from routing.rounding import round_half_up

#display fields copied through to the storefront untouched
DISPLAY_FIELDS = ("description", "logo_url", "rating", "total_orders", "is_active")


@dataclass(frozen=True)
class Vendor:
    """
    A read-only snapshot of a shop from the vendor directory.
    `coordinates` is None when the shopkeeper has not set a location yet.
    """
    id: str
    name: str
    coordinates: Optional[Coordinate] = None
    details: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> Vendor:
        """
        Parse a shop document. Coordinates are looked up at
        `address.coordinates` first, then a top-level `coordinates`/`location`.
        Anything unusable becomes None rather than an error.
        """
        vendor_id = document.get("_id", document.get("id"))
        if vendor_id is None:
            raise ValueError("vendor document has no id")

        address = document.get("address")
        raw_coordinates = address.get("coordinates") if isinstance(address, dict) else None
        if raw_coordinates is None:
            raw_coordinates = document.get("coordinates", document.get("location"))

        return cls(
            id=str(vendor_id),
            name=str(document.get("name", "")),
            coordinates=Coordinate.parse(raw_coordinates),
            details={key: document.get(key) for key in DISPLAY_FIELDS},
        )


@dataclass(frozen=True)
class VendorWithEta:
    """
    A nearby vendor annotated for one request. Never stored.
    distance_km is rounded to 2 decimals.
    """
    vendor: Vendor
    distance_km: float
    eta: EtaResult

    @classmethod
    def build(cls, vendor: Vendor, distance_km: float, eta: EtaResult) -> VendorWithEta:
        return cls(vendor=vendor, distance_km=round_half_up(distance_km, 2), eta=eta)

    def to_dict(self) -> Dict[str, Any]:
        coordinates = self.vendor.coordinates
        payload: Dict[str, Any] = {
            "id": self.vendor.id,
            "name": self.vendor.name,
            "distanceKm": self.distance_km,
            "eta": self.eta.as_window(),
            "location": coordinates.as_dict() if coordinates else None,
        }
        for key in DISPLAY_FIELDS:
            payload[key] = self.vendor.details.get(key)
        return payload
