"""Per-schema complexity metrics.

The composite score is a weighted sum capped at 100:

    score = min(100, round(properties * 0.3 + depth * 5 + references * 2 + kB * 0.1))

The weights are heuristics (see ThresholdConfig); what matters is that
the score is bounded and never decreases when any input grows.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..models import Schema
from ..nodes import MAX_WALK_DEPTH, child_schemas, is_node, items_of, properties_of, required_of
from ..scoring import capped_score
from .models import ComplexityMetrics


def count_properties(node: Any) -> int:
    """Count every property entry reachable via properties/items/additionalProperties."""
    visited: set[int] = set()

    def walk(n: Any, depth: int) -> int:
        if not is_node(n) or id(n) in visited or depth > MAX_WALK_DEPTH:
            return 0
        visited.add(id(n))
        count = len(properties_of(n))
        for child in child_schemas(n):
            count += walk(child, depth + 1)
        return count

    return walk(node, 0)


def calculate_max_depth(node: Any) -> int:
    """Deepest nesting level through properties and items (root object = 0)."""
    visited: set[int] = set()

    def walk(n: Any, depth: int) -> int:
        if not is_node(n) or id(n) in visited or depth > MAX_WALK_DEPTH:
            return depth
        visited.add(id(n))
        deepest = depth
        for child in list(properties_of(n).values()) + items_of(n):
            deepest = max(deepest, walk(child, depth + 1))
        return deepest

    return min(walk(node, 0), MAX_WALK_DEPTH)


def count_required_properties(node: Any) -> int:
    """Sum of `required` array lengths at every nested level."""
    visited: set[int] = set()

    def walk(n: Any, depth: int) -> int:
        if not is_node(n) or id(n) in visited or depth > MAX_WALK_DEPTH:
            return 0
        visited.add(id(n))
        count = len(required_of(n))
        for child in child_schemas(n):
            count += walk(child, depth + 1)
        return count

    return walk(node, 0)


def content_size_bytes(content: Any) -> int:
    return len(json.dumps(content, ensure_ascii=False, default=str).encode("utf-8"))


def complexity_score(
    property_count: int,
    max_depth: int,
    reference_count: int,
    size_bytes: int,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> int:
    raw = (
        property_count * thresholds.complexity_property_weight
        + max_depth * thresholds.complexity_depth_weight
        + reference_count * thresholds.complexity_reference_weight
        + (size_bytes / 1000) * thresholds.complexity_size_weight
    )
    return capped_score(raw)


def analyze_schema_complexity(
    schema: Schema, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> ComplexityMetrics:
    """Measure a single schema."""
    content = schema.content
    property_count = count_properties(content)
    max_depth = calculate_max_depth(content)
    required = count_required_properties(content)
    reference_count = len(schema.references)
    size_bytes = content_size_bytes(content)

    return ComplexityMetrics(
        property_count=property_count,
        max_depth=max_depth,
        required_properties=required,
        # `required` may name properties that are not declared
        optional_properties=max(0, property_count - required),
        reference_count=reference_count,
        size_bytes=size_bytes,
        complexity_score=complexity_score(
            property_count, max_depth, reference_count, size_bytes, thresholds
        ),
    )


def calculate_complexity_metrics(
    schemas: Sequence[Schema], thresholds: Optional[ThresholdConfig] = None
) -> dict[str, ComplexityMetrics]:
    """Complexity metrics keyed by schema id, in collection order."""
    thresholds = thresholds or DEFAULT_THRESHOLDS
    return {schema.id: analyze_schema_complexity(schema, thresholds) for schema in schemas}
