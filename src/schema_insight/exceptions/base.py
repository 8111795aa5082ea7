"""Root of the Schema Insight exception hierarchy."""

from typing import Any, Dict, Optional


class SchemaInsightError(Exception):
    """Base exception for all Schema Insight errors.

    ``details`` carries string-valued context (paths, keys, reasons) that
    is appended to the message and exposed to machine-readable output.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form used by ``--json`` error output."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "details": dict(self.details),
        }
