"""
Purpose: Time-of-day predicate for the peak-hour congestion penalty.
What it does:
Peak hours are 07:00-10:59 and 18:00-22:59 business-local time (hour ranges
are inclusive on both ends). The hour is always read in an explicit
timezone so results do not depend on the host's clock settings.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional, Sequence, Tuple, Union
from zoneinfo import ZoneInfo

#(first_hour, last_hour), both inclusive
PEAK_WINDOWS: Tuple[Tuple[int, int], ...] = ((7, 10), (18, 22))

DEFAULT_BUSINESS_TIMEZONE = "Asia/Kolkata"


def resolve_timezone(tz: Union[str, tzinfo, None]) -> tzinfo:
    if tz is None:
        return ZoneInfo(DEFAULT_BUSINESS_TIMEZONE)
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def is_peak_hour(
        now: Optional[datetime] = None,
        tz: Union[str, tzinfo, None] = None,
        windows: Sequence[Tuple[int, int]] = PEAK_WINDOWS,
) -> bool:
    """
    True when the business-local hour of `now` falls inside a peak window.

    - now omitted: the current time in `tz`
    - aware `now`: converted to `tz` first
    - naive `now`: taken as business-local already
    """
    zone = resolve_timezone(tz)

    if now is None:
        now = datetime.now(zone)
    elif now.tzinfo is not None:
        now = now.astimezone(zone)

    hour = now.hour
    return any(first <= hour <= last for first, last in windows)
