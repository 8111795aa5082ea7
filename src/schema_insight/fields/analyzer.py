"""Field consistency analysis across all schemas of a project.

Properties are aggregated by *name* over the whole project (not per
schema): every occurrence of ``status`` anywhere contributes to one
record. A field is inconsistent when its occurrences disagree on type,
format, enum values, required-ness or description.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from ..models import Schema
from ..nodes import (
    MAX_WALK_DEPTH,
    additional_of,
    description_of,
    enum_of,
    format_of,
    is_node,
    items_of,
    properties_of,
    required_of,
    type_of,
)
from ..signatures import canonical_json, stringify_value
from .models import ConflictCounts, FieldConflicts, FieldInsightItem, FieldInsights

_WHITESPACE = re.compile(r"\s+")


def normalize_description(text: str) -> str:
    """Trim, lowercase and collapse whitespace."""
    return _WHITESPACE.sub(" ", text.strip().lower())


def canonical_enum(values: list[Any]) -> str:
    """Order-independent key of an enum value set."""
    return canonical_json(sorted(stringify_value(v) for v in values))


@dataclass
class _FieldAccumulator:
    types: set[str] = field(default_factory=set)
    formats: set[str] = field(default_factory=set)
    enum_sets: set[str] = field(default_factory=set)
    required_in: set[str] = field(default_factory=set)
    optional_in: set[str] = field(default_factory=set)
    descriptions: set[str] = field(default_factory=set)
    occurrences: int = 0

    def observe(self, prop: Any, required: bool, schema_name: str) -> None:
        self.occurrences += 1
        type_value = type_of(prop)
        if type_value:
            self.types.add(type_value)
        format_value = format_of(prop)
        if format_value:
            self.formats.add(format_value)
        enum_values = enum_of(prop)
        if enum_values is not None:
            self.enum_sets.add(canonical_enum(enum_values))
        description = description_of(prop)
        if description:
            self.descriptions.add(normalize_description(description))
        if required:
            self.required_in.add(schema_name)
        else:
            self.optional_in.add(schema_name)

    def to_item(self, name: str) -> FieldInsightItem:
        conflicts = FieldConflicts(
            type_conflict=len(self.types) > 1,
            format_conflict=len(self.formats) > 1,
            enum_conflict=len(self.enum_sets) > 1,
            required_conflict=bool(self.required_in) and bool(self.optional_in),
            description_divergence=len(self.descriptions) > 1,
        )
        enum_values = None
        if self.enum_sets:
            union: set[str] = set()
            for encoded in self.enum_sets:
                union.update(json.loads(encoded))
            enum_values = sorted(union)
        return FieldInsightItem(
            name=name,
            types=sorted(self.types),
            formats=sorted(self.formats),
            enum_values=enum_values,
            required_in=sorted(self.required_in),
            optional_in=sorted(self.optional_in),
            descriptions=sorted(self.descriptions),
            occurrences=self.occurrences,
            conflicts=conflicts,
        )


def analyze_fields(schemas: Sequence[Schema]) -> FieldInsights:
    """Aggregate every property occurrence by name and flag conflicts.

    Items with any conflict come first, then by occurrence count.
    """
    accumulators: dict[str, _FieldAccumulator] = {}

    for schema in schemas:
        visited: set[int] = set()
        stack: list[tuple[Any, int]] = [(schema.content, 0)]
        while stack:
            node, depth = stack.pop()
            if not is_node(node) or id(node) in visited or depth > MAX_WALK_DEPTH:
                continue
            visited.add(id(node))

            required = set(required_of(node))
            children: list[Any] = []
            for prop_name, prop in properties_of(node).items():
                acc = accumulators.get(prop_name)
                if acc is None:
                    acc = accumulators[prop_name] = _FieldAccumulator()
                acc.observe(prop, prop_name in required, schema.name)
                children.append(prop)
            children.extend(items_of(node))
            extra = additional_of(node)
            if extra is not None:
                children.append(extra)
            # reversed so the stack visits children in document order
            stack.extend((child, depth + 1) for child in reversed(children))

    items = [acc.to_item(name) for name, acc in accumulators.items()]
    counts = ConflictCounts(
        type_conflicts=sum(1 for i in items if i.conflicts.type_conflict),
        format_conflicts=sum(1 for i in items if i.conflicts.format_conflict),
        enum_conflicts=sum(1 for i in items if i.conflicts.enum_conflict),
        required_conflicts=sum(1 for i in items if i.conflicts.required_conflict),
        description_conflicts=sum(1 for i in items if i.conflicts.description_divergence),
    )

    items.sort(key=lambda i: (not i.conflicts.any, -i.occurrences))
    return FieldInsights(items=items, conflict_counts=counts)
