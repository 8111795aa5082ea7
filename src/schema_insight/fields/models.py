"""Data models for project-wide field consistency analysis."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class FieldConflicts:
    type_conflict: bool = False  # more than one distinct `type`
    format_conflict: bool = False  # more than one distinct `format`
    enum_conflict: bool = False  # more than one distinct enum value set
    required_conflict: bool = False  # required somewhere, optional elsewhere
    description_divergence: bool = False  # more than one normalized description

    @property
    def any(self) -> bool:
        return (
            self.type_conflict
            or self.format_conflict
            or self.enum_conflict
            or self.required_conflict
            or self.description_divergence
        )

    def names(self) -> list[str]:
        """Short labels of the conflicts present, in fixed order."""
        labels = [
            ("type", self.type_conflict),
            ("format", self.format_conflict),
            ("enum", self.enum_conflict),
            ("required", self.required_conflict),
            ("description", self.description_divergence),
        ]
        return [label for label, present in labels if present]


@dataclass
class FieldInsightItem:
    """Everything observed about one property name across all schemas."""

    name: str
    types: list[str] = field(default_factory=list)
    formats: list[str] = field(default_factory=list)
    enum_values: Optional[list[str]] = None  # union of observed enum values
    required_in: list[str] = field(default_factory=list)  # schema names
    optional_in: list[str] = field(default_factory=list)  # schema names
    descriptions: list[str] = field(default_factory=list)  # normalized
    occurrences: int = 0
    conflicts: FieldConflicts = field(default_factory=FieldConflicts)


@dataclass
class ConflictCounts:
    type_conflicts: int = 0
    format_conflicts: int = 0
    enum_conflicts: int = 0
    required_conflicts: int = 0
    description_conflicts: int = 0


@dataclass
class FieldInsights:
    items: list[FieldInsightItem] = field(default_factory=list)
    conflict_counts: ConflictCounts = field(default_factory=ConflictCounts)

    def conflicting(self) -> list[FieldInsightItem]:
        return [item for item in self.items if item.conflicts.any]
