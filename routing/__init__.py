#Marks routing as a package.
#Re-exports the public API (distance, geofence, ETA, peak hours) so other
#modules import from routing without knowing internal file names.
#No business logic.

from .distance import Coordinate, InvalidCoordinateError, haversine_distance_km
from .eta_service import (
    DEFAULT_DELIVERY_PROFILE,
    EtaInput,
    EtaResult,
    VendorDeliveryProfile,
    calculate_eta_minutes,
)
from .geofence import GeofenceMatch, find_nearby_vendors
from .peak_hours import is_peak_hour
from .rounding import round_half_up

__all__ = [
           "Coordinate",
           "InvalidCoordinateError",
           "haversine_distance_km",
           "GeofenceMatch",
           "find_nearby_vendors",
           "VendorDeliveryProfile",
           "DEFAULT_DELIVERY_PROFILE",
           "EtaInput",
           "EtaResult",
           "calculate_eta_minutes",
           "is_peak_hour",
           "round_half_up",
             ]
