"""Errors raised before any analysis runs: bad settings or a bad project root."""

from pathlib import Path
from typing import Any, Optional

from .base import SchemaInsightError


class ConfigurationError(SchemaInsightError):
    """Settings or the schema project location cannot be used."""


class InvalidPathError(ConfigurationError):
    """The schema directory is missing or is not a directory."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Schema directory unusable: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """A setting is unknown or fails validation.

    ``source`` names where the value came from (a config file path or
    ``environment``) when that is known.
    """

    def __init__(self, key: str, value: Any, reason: str, source: Optional[str] = None):
        details = {"key": key, "value": str(value), "reason": reason}
        if source is not None:
            details["source"] = source
        super().__init__(f"Invalid setting '{key}' = {value!r}", details=details)
        self.key = key
        self.value = value
        self.reason = reason
        self.source = source
