"""Project maturity score: 100 minus a severity-weighted penalty per open suggestion."""

from typing import Iterable

from ..scoring import clamp, round_half_up
from .models import Severity, Suggestion

SEVERITY_WEIGHTS: dict[Severity, int] = {"high": 8, "medium": 4, "low": 2}


def calculate_maturity_score(suggestions: Iterable[Suggestion]) -> int:
    """Score in [0, 100]; each suggestion costs 8 (high), 4 (medium) or 2 (low)."""
    score = 100 - sum(SEVERITY_WEIGHTS.get(s.severity, 0) for s in suggestions)
    return int(clamp(round_half_up(score)))
