"""Data models for per-schema structural measurements."""

from dataclasses import dataclass


@dataclass
class ComplexityMetrics:
    """Structural size and shape of one schema document."""

    property_count: int = 0  # properties at any depth
    max_depth: int = 0  # deepest properties/items nesting
    required_properties: int = 0  # sum of `required` lengths at every level
    optional_properties: int = 0
    reference_count: int = 0  # outgoing $refs (resolved or not)
    size_bytes: int = 0  # UTF-8 size of the serialized content
    complexity_score: int = 0  # 0-100


@dataclass
class InlineCandidate:
    """An inline sub-structure repeated across several parent schemas."""

    signature: str
    parents: list[str]  # parent schema names, sorted
