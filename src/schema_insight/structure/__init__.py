"""Per-schema structure: complexity metrics and inline-duplication mining."""

from .complexity import analyze_schema_complexity, calculate_complexity_metrics
from .inline import collect_inline_duplication, find_inline_candidates
from .models import ComplexityMetrics, InlineCandidate

__all__ = [
    "analyze_schema_complexity",
    "calculate_complexity_metrics",
    "collect_inline_duplication",
    "find_inline_candidates",
    "ComplexityMetrics",
    "InlineCandidate",
]
