"""
Purpose: ETA estimation policy.
What it does:
Converts a shop's fulfilment profile, its current backlog and the
shop -> customer distance into the "arrives in X-Y min" window shown
on the storefront.

    prep   = base_prep + 2 min for every pending order beyond capacity
    travel = distance / rider speed (x1.25 during peak hours)
    raw    = prep + travel + buffer
    window = [max(5, round(raw - 5)), round(raw + 5)]

Rule: pure functions only. No lookups, no clocks. Peak-hour status is
passed in by the caller so one request uses one value for every shop.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .rounding import round_half_up

#each pending order beyond a shop's parallel capacity waits this long
QUEUE_DELAY_MINUTES_PER_ORDER = 2

#flat congestion penalty, travel time only
PEAK_TRAVEL_MULTIPLIER = 1.25

#half-width of the window shown to customers
ETA_BAND_MINUTES = 5

#lower bound never shows below this
MIN_ETA_FLOOR_MINUTES = 5


@dataclass(frozen=True)
class VendorDeliveryProfile:
    """
    How fast a shop can turn an order around.
    """

    #fixed picking/packing time
    base_prep_minutes: float = 5

    #orders the shop can pack at once before a queue forms
    max_parallel_orders: int = 3

    #safety margin added to every estimate
    buffer_minutes: float = 5

    #assumed rider speed in urban traffic
    avg_rider_speed_kmph: float = 20

    def validate(self) -> None:
        """
        Basic sanity checks. A zero rider speed would divide by zero.
        """
        for name in ("base_prep_minutes", "max_parallel_orders", "buffer_minutes", "avg_rider_speed_kmph"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value!r}")

        if self.base_prep_minutes < 0:
            raise ValueError("base_prep_minutes must be >= 0")

        if self.max_parallel_orders < 1:
            raise ValueError("max_parallel_orders must be >= 1")

        if self.buffer_minutes < 0:
            raise ValueError("buffer_minutes must be >= 0")

        if self.avg_rider_speed_kmph <= 0:
            raise ValueError("avg_rider_speed_kmph must be > 0")

    @classmethod
    def from_dict(cls, data: dict) -> VendorDeliveryProfile:
        """
        Build a profile from a directory document. Accepts snake_case and the
        camelCase keys used by the storefront backend. Missing keys keep
        their defaults; the result is validated.
        """
        def pick(snake: str, camel: str, default):
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        profile = cls(
            base_prep_minutes=float(pick("base_prep_minutes", "basePrepMinutes", cls.base_prep_minutes)),
            max_parallel_orders=int(pick("max_parallel_orders", "maxParallelOrders", cls.max_parallel_orders)),
            buffer_minutes=float(pick("buffer_minutes", "bufferMinutes", cls.buffer_minutes)),
            avg_rider_speed_kmph=float(pick("avg_rider_speed_kmph", "avgRiderSpeedKmph", cls.avg_rider_speed_kmph)),
        )
        profile.validate()
        return profile


DEFAULT_DELIVERY_PROFILE = VendorDeliveryProfile()


@dataclass(frozen=True)
class EtaInput:
    profile: VendorDeliveryProfile
    distance_km: float
    current_pending_orders: int
    is_peak_hour: bool


@dataclass(frozen=True)
class EtaResult:
    """
    raw_eta is kept for diagnostics; customers only ever see the window.
    """

    raw_eta: float
    min_eta: int
    max_eta: int

    def as_window(self) -> dict:
        return {"minEta": self.min_eta, "maxEta": self.max_eta}


def calculate_eta_minutes(eta_input: EtaInput) -> EtaResult:
    """
    Estimate a delivery window in minutes from order placement.

    The backlog model is linear and uncapped: every order beyond
    `max_parallel_orders` adds QUEUE_DELAY_MINUTES_PER_ORDER of prep time.
    Peak hours stretch travel time only, never prep time.

    Requires profile.avg_rider_speed_kmph > 0; callers validate profiles.
    """
    profile = eta_input.profile

    # 1. Preparation / packing time
    excess_orders = max(0, eta_input.current_pending_orders - profile.max_parallel_orders)
    prep_time = profile.base_prep_minutes + excess_orders * QUEUE_DELAY_MINUTES_PER_ORDER

    # 2. Travel time (km -> minutes)
    travel_time = (eta_input.distance_km / profile.avg_rider_speed_kmph) * 60

    # 3. Peak-hour congestion
    if eta_input.is_peak_hour:
        travel_time *= PEAK_TRAVEL_MULTIPLIER

    # 4. Raw ETA
    raw_eta = prep_time + travel_time + profile.buffer_minutes

    # 5. Customer-facing window
    min_eta = max(MIN_ETA_FLOOR_MINUTES, round_half_up(raw_eta - ETA_BAND_MINUTES))
    max_eta = round_half_up(raw_eta + ETA_BAND_MINUTES)

    return EtaResult(raw_eta=raw_eta, min_eta=min_eta, max_eta=max_eta)
