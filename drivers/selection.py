"""
Purpose: Business rules and distance math for choosing the best rider for a shop.
What it does:
Accepts a shop location and a pool of riders, filters out ineligible riders,
ranks the remaining ones (closest first, freshest ping on near-ties) and
returns the winner with a pickup ETA.
"""

import logging
from functools import cmp_to_key
from typing import Dict, List, Optional

from routing.distance import Coordinate, distance_between
from routing.rounding import round_half_up

from .models import Rider, RiderAssignment
from .policy import AssignmentPolicy, default_assignment_policy

logger = logging.getLogger(__name__)


def filter_eligible_riders(
    vendor_location: Coordinate,
    riders: List[Rider],
    policy: Optional[AssignmentPolicy] = None,
) -> Dict[str, float]:
    """
    Returns {rider_id: distance_km} for riders who are online, not busy,
    and within the pickup radius of the shop. Input order is preserved.
    """
    policy = policy or default_assignment_policy()
    eligible: Dict[str, float] = {}

    for rider in riders:
        if not rider.is_online or rider.is_busy:
            continue

        distance_km = distance_between(rider.location, vendor_location)
        if distance_km > policy.max_pickup_radius_km:
            continue

        eligible[rider.id] = distance_km

    return eligible


def assign_rider(
    vendor_location: Coordinate,
    riders: List[Rider],
    policy: Optional[AssignmentPolicy] = None,
) -> Optional[RiderAssignment]:
    """
    Pick one rider for an order at `vendor_location`, or None if nobody qualifies.
    """
    policy = policy or default_assignment_policy()

    distances = filter_eligible_riders(vendor_location, riders, policy)
    candidates = [rider for rider in riders if rider.id in distances]

    if not candidates:
        logger.info("No eligible rider within %.1f km of (%s, %s)",
                    policy.max_pickup_radius_km, vendor_location.lat, vendor_location.lng)
        return None

    def compare(a: Rider, b: Rider) -> float:
        gap = distances[a.id] - distances[b.id]
        # Primary: distance, unless the two are within the tie threshold
        if abs(gap) > policy.distance_tie_km:
            return gap
        # Secondary: most recently updated first
        return _ping_timestamp(b) - _ping_timestamp(a)

    candidates.sort(key=cmp_to_key(compare))
    best = candidates[0]
    distance_km = distances[best.id]

    return RiderAssignment(
        rider_id=best.id,
        rider_name=best.name,
        distance_to_vendor_km=round_half_up(distance_km, 2),
        estimated_pickup_minutes=round_half_up((distance_km / policy.avg_rider_speed_kmph) * 60),
    )


def _ping_timestamp(rider: Rider) -> float:
    if rider.updated_at is None:
        return 0.0
    return rider.updated_at.timestamp()


