"""
Schema Insight - analytics for JSON Schema projects

Finds circular references, structural duplicates, inconsistent fields and
overly complex schemas across a collection of JSON Schema documents, and
turns them into ranked, actionable suggestions with a 0-100 maturity score.
"""

__version__ = "0.1.0"

from .api import analyze_directory
from .cache import ResultCache, compute_cache_key
from .config import AnalysisConfig, ThresholdConfig, load_config
from .engine import AnalyticsResult, AnalyticsService
from .loader import load_schemas
from .models import Schema, SchemaMetadata, SchemaReference
from .serializers import result_to_dict

__all__ = [
    "analyze_directory",  # Main entry point
    "AnalyticsService",  # Direct engine access
    "AnalyticsResult",
    "AnalysisConfig",
    "ThresholdConfig",
    "load_config",
    "load_schemas",
    "ResultCache",
    "compute_cache_key",
    "Schema",
    "SchemaMetadata",
    "SchemaReference",
    "result_to_dict",
]
