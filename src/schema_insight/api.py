"""Public API for Schema Insight.

Example:
    >>> from schema_insight import analyze_directory
    >>>
    >>> result = analyze_directory("./schemas")
    >>> result.maturity_score
    84
    >>>
    >>> # With threshold overrides
    >>> result = analyze_directory("./schemas", near_duplicate_threshold=0.9)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .config import load_config
from .engine import AnalyticsResult, AnalyticsService
from .loader import load_schemas
from .logging_config import get_logger

logger = get_logger(__name__)


def analyze_directory(
    path: Union[str, Path] = ".",
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalyticsResult:
    """Load every schema under *path* and analyze the collection.

    Args:
        path: Directory holding the JSON Schema files (default: current directory)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., centrality_threshold=5)

    Returns:
        The AnalyticsResult for the loaded collection

    Raises:
        SchemaInsightError: If the path or configuration is invalid
    """
    config = load_config(config_file=config_file, **overrides)
    schemas = load_schemas(path)
    logger.debug(f"Analyzing {len(schemas)} schemas from {path}")
    return AnalyticsService(config).analyze(schemas)
