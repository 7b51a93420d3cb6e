"""Small numeric helpers shared by the math modules."""

from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity.

    Python's ``round`` uses banker's rounding, which would turn a "3-6" rep
    range (mean 4.5) into 4 rather than 5.
    """
    return int(math.floor(value + 0.5))
