"""
Purpose: One rounding rule for everything customer-facing.
What it does:
Rounds half up (12.5 -> 13, 22.5 -> 23), the way the storefront has always
displayed ETAs and distances. Python's built-in round() is half-to-even and
would show 12 and 22 for the same inputs.
"""

from __future__ import annotations

import math
from typing import Union


def round_half_up(value: float, ndigits: int = 0) -> Union[int, float]:
    """
    Round `value` to `ndigits` decimals, ties going towards +infinity.

    Returns an int when ndigits is 0, otherwise a float.
    """
    if ndigits == 0:
        return int(math.floor(value + 0.5))

    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale
