"""Data models for suggestions and project-level summaries."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

Severity = Literal["low", "medium", "high"]
SuggestionCategory = Literal["naming", "reuse", "field-consistency", "references", "complexity"]


@dataclass
class Suggestion:
    """One actionable improvement, ranked by impact_score (0-100)."""

    id: str  # stable identifier, e.g. "naming:address", "field:status"
    category: SuggestionCategory
    title: str
    description: str
    severity: Severity
    impact_score: int
    affected_schemas: list[str] = field(default_factory=list)  # schema names
    data: dict[str, Any] = field(default_factory=dict)  # supporting evidence


@dataclass
class ProjectMetrics:
    total_schemas: int = 0
    average_complexity: float = 0.0
    most_complex_schema: str = ""
    most_referenced_schema: str = ""
    orphaned_schemas: list[str] = field(default_factory=list)
    circular_schemas: list[str] = field(default_factory=list)


@dataclass
class PerformanceStats:
    duration_ms: float = 0.0
    memory_usage: int = 0  # rough byte estimate of the analyzed input
    timestamp: datetime = field(default_factory=datetime.now)
