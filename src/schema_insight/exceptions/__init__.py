"""Exception hierarchy for Schema Insight."""

from .analysis import AnalysisError, AnalysisInProgressError, SchemaLoadError
from .base import SchemaInsightError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "SchemaInsightError",
    "AnalysisError",
    "AnalysisInProgressError",
    "SchemaLoadError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidPathError",
]
