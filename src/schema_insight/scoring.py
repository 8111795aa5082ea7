"""Small numeric helpers shared by the scoring passes."""

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def round_half_up_to(value: float, digits: int = 3) -> float:
    """Round to *digits* decimals with exact halves going up (0.0625 -> 0.063).

    Works on the exact binary value of *value*, so only true ties round up;
    ``round()`` would send them to the even neighbour instead.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def capped_score(value: float, cap: int = 100) -> int:
    """Round half-up and cap at *cap* (scores are never negative here)."""
    return min(cap, round_half_up(value))
