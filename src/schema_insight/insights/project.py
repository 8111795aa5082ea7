"""Project-level summary metrics."""

from __future__ import annotations

from collections import Counter
from typing import Mapping, Optional, Sequence

from ..graph.builder import SchemaIndex
from ..graph.models import CircularReference
from ..models import Schema
from ..scoring import round_half_up
from ..structure.models import ComplexityMetrics
from .models import ProjectMetrics


def find_orphaned_schemas(schemas: Sequence[Schema]) -> list[str]:
    """Schemas with no outgoing references that no schema references by name."""
    referenced_names = {ref.schema_name for schema in schemas for ref in schema.references}
    return [
        schema.name
        for schema in schemas
        if not schema.references and schema.name not in referenced_names
    ]


def calculate_project_metrics(
    schemas: Sequence[Schema],
    complexity_metrics: Mapping[str, ComplexityMetrics],
    circular_references: Sequence[CircularReference],
    index: Optional[SchemaIndex] = None,
) -> ProjectMetrics:
    index = index or SchemaIndex(schemas)

    scores = [m.complexity_score for m in complexity_metrics.values()]
    average = sum(scores) / len(scores) if scores else 0.0

    most_complex = ""
    highest = 0
    for schema_id, metrics in complexity_metrics.items():
        if metrics.complexity_score > highest:
            highest = metrics.complexity_score
            schema = index.by_id.get(schema_id)
            most_complex = schema.name if schema else ""

    reference_counts: Counter[str] = Counter()
    for schema in schemas:
        for _ref, target in index.resolved_references(schema):
            reference_counts[target.name] += 1

    most_referenced = ""
    most_references = 0
    for name, count in reference_counts.items():
        if count > most_references:
            most_references = count
            most_referenced = name

    circular = list(dict.fromkeys(name for cycle in circular_references for name in cycle.path if name))

    return ProjectMetrics(
        total_schemas=len(schemas),
        average_complexity=round_half_up(average * 100) / 100,
        most_complex_schema=most_complex,
        most_referenced_schema=most_referenced,
        orphaned_schemas=find_orphaned_schemas(schemas),
        circular_schemas=circular,
    )
