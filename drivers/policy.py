"""
Purpose: Central configuration for rider assignment.
What it does:

Stores all tunable thresholds for matching a rider to a shop's order:

MAX_PICKUP_RADIUS_KM = 3
DISTANCE_TIE_KM = 0.1
AVG_RIDER_SPEED_KMPH = 20

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class AssignmentPolicy:
    """
    Central configuration for rider assignment thresholds.
    """

    # --- Geofence ---
    # Riders further than this (straight line) from the shop are never offered the order.
    max_pickup_radius_km: float = 3.0

    # --- Tie-break ---
    # Riders whose distances differ by no more than this are "equally close";
    # the one with the freshest location ping wins.
    distance_tie_km: float = 0.1

    # --- Pickup ETA ---
    avg_rider_speed_kmph: float = 20.0

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.max_pickup_radius_km <= 0:
            raise ValueError("max_pickup_radius_km must be > 0")

        if self.distance_tie_km < 0:
            raise ValueError("distance_tie_km must be >= 0")

        if self.avg_rider_speed_kmph <= 0:
            raise ValueError("avg_rider_speed_kmph must be > 0")


def default_assignment_policy() -> AssignmentPolicy:
    """
    Convenience factory for the default policy.
    """
    p = AssignmentPolicy()
    p.validate()
    return p
