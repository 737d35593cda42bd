"""
Purpose: Orchestrator / decision pipeline (the "glue") for nearby shops.
What it does:
Accepts a customer location and radius, pulls every active shop from the
vendor directory, keeps the ones inside the radius (closest first), looks
up each shop's delivery profile and backlog in parallel, and attaches an
ETA window to each.

Failure policy:
- directory listing fails -> DirectoryUnavailableError, whole request fails
- one shop's profile / pending-count lookup fails -> that shop falls back
  to the default profile / 0 pending orders, logged, request continues
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from routing.distance import Coordinate
from routing.eta_service import EtaInput, VendorDeliveryProfile, calculate_eta_minutes
from routing.geofence import GeofenceMatch, find_nearby_vendors
from routing.peak_hours import is_peak_hour

from .directory import DirectoryUnavailableError, LookupResult, VendorDirectory, safe_lookup
from .models import Vendor, VendorWithEta
from .policy import NearbyPolicy, default_nearby_policy

logger = logging.getLogger(__name__)


class InvalidRadiusError(ValueError):
    """Search radius is not a positive, finite number of kilometres."""
    pass


@dataclass(frozen=True)
class NearbyVendorsResult:
    """
    Output of one nearby-vendor query.
    """
    vendors: List[VendorWithEta]
    origin: Coordinate
    radius_km: float
    peak_hour: bool

    @property
    def count(self) -> int:
        return len(self.vendors)


def _validate_radius(radius_km: float) -> float:
    if isinstance(radius_km, bool) or not isinstance(radius_km, (int, float)):
        raise InvalidRadiusError(f"radius_km must be a number, got {radius_km!r}")
    if not math.isfinite(radius_km) or radius_km <= 0:
        raise InvalidRadiusError(f"radius_km must be > 0, got {radius_km}")
    return float(radius_km)


def _lookup_profile(
        directory: VendorDirectory,
        vendor_id: str,
        default_profile: VendorDeliveryProfile,
) -> VendorDeliveryProfile:
    result = safe_lookup(lambda: directory.get_delivery_profile(vendor_id), default_profile)
    if not result.ok:
        logger.warning("Delivery profile lookup failed for shop %s, using default: %s", vendor_id, result.error)
        return default_profile

    profile = result.value
    if profile is None:
        return default_profile

    #a misconfigured shop (e.g. zero or NaN rider speed) is treated like a failed lookup
    checked = safe_lookup(lambda: _checked_profile(profile), default_profile)
    if not checked.ok:
        logger.warning("Invalid delivery profile for shop %s, using default: %s", vendor_id, checked.error)
        return default_profile
    return checked.value


def _checked_profile(profile) -> VendorDeliveryProfile:
    if not isinstance(profile, VendorDeliveryProfile):
        raise TypeError(f"expected a VendorDeliveryProfile, got {type(profile).__name__}")
    profile.validate()
    return profile


def _lookup_pending_orders(directory: VendorDirectory, vendor_id: str) -> int:
    result: LookupResult[int] = safe_lookup(lambda: directory.count_pending_orders(vendor_id), 0)
    if not result.ok:
        logger.warning("Pending order count failed for shop %s, assuming 0: %s", vendor_id, result.error)
        return 0

    count = result.value
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        logger.warning("Pending order count for shop %s is not a count (%r), assuming 0", vendor_id, count)
        return 0
    return count


def _vendor_inputs(
        directory: VendorDirectory,
        vendor: Vendor,
        default_profile: VendorDeliveryProfile,
) -> Tuple[VendorDeliveryProfile, int]:
    #both lookups are isolated; neither can raise
    profile = _lookup_profile(directory, vendor.id, default_profile)
    pending_orders = _lookup_pending_orders(directory, vendor.id)
    return profile, pending_orders


def get_nearby_vendors_with_eta(
        directory: VendorDirectory,
        customer_location: Coordinate,
        radius_km: float,
        *,
        policy: Optional[NearbyPolicy] = None,
        now: Optional[datetime] = None,
) -> NearbyVendorsResult:
    """
    Find shops within `radius_km` of the customer and estimate delivery windows.

    Args:
        directory: read-only vendor directory collaborator
        customer_location: validated Coordinate (see Coordinate for the ranges)
        radius_km: inclusive search radius, must be > 0
        policy: timezone / fan-out / default profile; defaults to default_nearby_policy()
        now: clock override for peak-hour detection; defaults to the current time

    Returns:
        NearbyVendorsResult with vendors in ascending distance order.

    Raises:
        InvalidRadiusError, InvalidCoordinateError: bad input
        DirectoryUnavailableError: the shop list itself could not be fetched
    """
    policy = policy or default_nearby_policy()
    radius_km = _validate_radius(radius_km)

    if not isinstance(customer_location, Coordinate):
        #Coordinate(...) raises InvalidCoordinateError on bad values
        customer_location = Coordinate(*customer_location)

    # 1. Full active-vendor set (fatal on failure)
    try:
        all_vendors = directory.list_active_vendors()
    except DirectoryUnavailableError:
        logger.error("Vendor directory unavailable", exc_info=True)
        raise
    except Exception as exc:
        logger.error("Vendor directory failed: %s", exc, exc_info=True)
        raise DirectoryUnavailableError(str(exc)) from exc

    # 2. Geofence (sorted, closest first)
    matches: List[GeofenceMatch[Vendor]] = find_nearby_vendors(all_vendors, customer_location, radius_km)

    # 3. One peak-hour decision for the whole response
    peak_hour = is_peak_hour(now, tz=policy.business_timezone)

    logger.debug(
        "%d of %d shops within %.2f km of (%s, %s), peak_hour=%s",
        len(matches), len(all_vendors), radius_km, customer_location.lat, customer_location.lng, peak_hour,
    )

    if not matches:
        return NearbyVendorsResult(vendors=[], origin=customer_location, radius_km=radius_km, peak_hour=peak_hour)

    # 4. Scatter-gather per-shop lookups. map() yields in submission order,
    #    so the distance order from the geofence is kept.
    workers = min(policy.max_lookup_workers, len(matches))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        inputs = list(pool.map(
            lambda match: _vendor_inputs(directory, match.item, policy.default_profile),
            matches,
        ))

    # 5. ETA per shop
    vendors: List[VendorWithEta] = []
    for match, (profile, pending_orders) in zip(matches, inputs):
        eta = calculate_eta_minutes(
            EtaInput(
                profile=profile,
                distance_km=match.distance_km,
                current_pending_orders=pending_orders,
                is_peak_hour=peak_hour,
            )
        )
        vendors.append(VendorWithEta.build(match.item, match.distance_km, eta))

    return NearbyVendorsResult(vendors=vendors, origin=customer_location, radius_km=radius_km, peak_hour=peak_hour)
