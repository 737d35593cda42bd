"""
Purpose: Central configuration for the nearby-vendor query.
What it does:

Stores all tunable knobs for finding shops and estimating ETAs:

DEFAULT_RADIUS_KM = 2
BUSINESS_TIMEZONE = "Asia/Kolkata"
MAX_LOOKUP_WORKERS = 8

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from routing.eta_service import DEFAULT_DELIVERY_PROFILE, VendorDeliveryProfile
from routing.peak_hours import DEFAULT_BUSINESS_TIMEZONE


@dataclass(frozen=True)
class NearbyPolicy:
    """
    Central configuration for nearby-vendor matching.
    """

    # --- Search radius ---
    # Used by the HTTP layer when the customer does not send radiusKm.
    default_radius_km: float = 2.0

    # --- Peak hours ---
    # Peak windows are read in this timezone, never the host's.
    business_timezone: str = DEFAULT_BUSINESS_TIMEZONE

    # --- Fan-out ---
    # Thread pool width for per-shop profile / pending-order lookups.
    max_lookup_workers: int = 8

    # --- Fallback ---
    # Used for any shop without a usable delivery profile.
    default_profile: VendorDeliveryProfile = DEFAULT_DELIVERY_PROFILE

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup.
        """
        if self.default_radius_km <= 0:
            raise ValueError("default_radius_km must be > 0")

        if self.max_lookup_workers < 1:
            raise ValueError("max_lookup_workers must be >= 1")

        try:
            ZoneInfo(self.business_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown business_timezone {self.business_timezone!r}") from exc

        self.default_profile.validate()


def default_nearby_policy() -> NearbyPolicy:
    """
    Convenience factory for the default policy.
    """
    p = NearbyPolicy()
    p.validate()
    return p


def policy_from_env() -> NearbyPolicy:
    """
    Build a policy from environment variables (.env is loaded first).
    Unset variables keep their defaults.
    """
    load_dotenv()
    defaults = NearbyPolicy()
    p = NearbyPolicy(
        default_radius_km=float(os.getenv("NEARBY_DEFAULT_RADIUS_KM", defaults.default_radius_km)),
        business_timezone=os.getenv("BUSINESS_TIMEZONE", defaults.business_timezone),
        max_lookup_workers=int(os.getenv("NEARBY_LOOKUP_WORKERS", defaults.max_lookup_workers)),
    )
    p.validate()
    return p
