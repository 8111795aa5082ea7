"""Suggestions, maturity scoring and project-level metrics."""

from .generator import SuggestionContext, generate_suggestions
from .maturity import SEVERITY_WEIGHTS, calculate_maturity_score
from .models import PerformanceStats, ProjectMetrics, Suggestion
from .project import calculate_project_metrics, find_orphaned_schemas

__all__ = [
    "SuggestionContext",
    "generate_suggestions",
    "SEVERITY_WEIGHTS",
    "calculate_maturity_score",
    "PerformanceStats",
    "ProjectMetrics",
    "Suggestion",
    "calculate_project_metrics",
    "find_orphaned_schemas",
]
