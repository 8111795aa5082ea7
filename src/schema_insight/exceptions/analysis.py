"""Analysis-related exceptions: orchestration conflicts and schema loading."""

from pathlib import Path
from typing import Optional

from .base import SchemaInsightError


class AnalysisError(SchemaInsightError):
    """Base class for analysis-related errors."""
    pass


class AnalysisInProgressError(AnalysisError):
    """Raised when a full analysis is requested while another one is running."""

    def __init__(self, schema_count: Optional[int] = None):
        details = {}
        if schema_count is not None:
            details["schema_count"] = str(schema_count)
        super().__init__("Analysis already in progress", details=details)
        self.schema_count = schema_count


class SchemaLoadError(AnalysisError):
    """Raised when a schema file cannot be read or parsed."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot load schema file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason
