#Purpose: Straight-line geofencing for the storefront.
#Builds the "nearby" set of shops for a customer location.
#Typical responsibilities:
#Given an origin + shops with (optional) coordinates -> compute Haversine distance
#Skip shops we cannot place on the map
#Apply the radius threshold (distance_km <= radius_km)
#Sort matches closest first, keeping directory order for ties
#Output: a list of "geo-qualified" matches with their distance.

from dataclasses import dataclass #for simple data structures
from typing import Generic, Iterable, List, Optional, TypeVar #for type annotations

from routing.distance import Coordinate, distance_between

T = TypeVar("T")


@dataclass(frozen=True) #immutable data structure for geofence matches
class GeofenceMatch(Generic[T]):
    """
    A shop (or anything with `.coordinates`) that passed the radius check,
    together with its unrounded distance from the origin.
    This is what the ETA layer consumes as input.
    """

    item: T
    distance_km: float


def find_nearby_vendors(
        vendors: Iterable[T],
        origin: Coordinate,
        radius_km: float,
) -> List[GeofenceMatch[T]]:
    """
    Filter vendors to those within `radius_km` of `origin`.

    Args:
        vendors: objects exposing `.coordinates` (Coordinate or None)
        origin: validated customer coordinate
        radius_km: inclusive radius in kilometres

    Returns:
        List[GeofenceMatch], sorted by distance ascending. The sort is stable,
        so vendors at the same distance keep their input order.
    """
    matches: List[GeofenceMatch[T]] = []

    for vendor in vendors:
        coordinates: Optional[Coordinate] = getattr(vendor, "coordinates", None)

        #fail closed: a shop without a usable location is never "nearby"
        if not isinstance(coordinates, Coordinate):
            continue

        distance_km = distance_between(origin, coordinates)
        if distance_km > radius_km:
            continue

        matches.append(GeofenceMatch(item=vendor, distance_km=distance_km))

    #closest first; list.sort is stable so ties keep directory order
    matches.sort(key=lambda match: match.distance_km)
    return matches
