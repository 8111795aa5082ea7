"""Turn analysis outputs into ranked, human-readable suggestions.

Each rule family contributes zero or more suggestions:

    naming             one per name-similarity group
    reuse              exact duplicates, near-duplicates, inline duplication
    field-consistency  one per conflicting field, with a canonical proposal
    references         one aggregate suggestion when cycles exist
    complexity         one aggregate suggestion for the most complex schemas

The final list is ordered by impact_score, highest first (ties keep the
order above).
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..fields.conventions import propose_field_canonical
from ..fields.models import FieldInsights
from ..graph.builder import SchemaIndex, in_degree_by_name
from ..graph.models import CircularReference, ReferenceGraph
from ..models import Schema
from ..scoring import capped_score, round_half_up
from ..similarity.models import DuplicateGroup, NameSimilarGroup, NearDuplicatePair
from ..structure.inline import find_inline_candidates
from ..structure.models import ComplexityMetrics
from .models import ProjectMetrics, Severity, Suggestion

FIELD_IMPACT_WEIGHTS: dict[Severity, int] = {"high": 8, "medium": 5, "low": 3}


@dataclass
class SuggestionContext:
    """Everything the suggestion rules read."""

    schemas: Sequence[Schema]
    duplicates: Sequence[DuplicateGroup] = ()
    near_duplicates: Sequence[NearDuplicatePair] = ()
    name_similar_groups: Sequence[NameSimilarGroup] = ()
    field_insights: FieldInsights = field(default_factory=FieldInsights)
    circular_references: Sequence[CircularReference] = ()
    complexity_metrics: Mapping[str, ComplexityMetrics] = field(default_factory=dict)
    project_metrics: ProjectMetrics = field(default_factory=ProjectMetrics)
    reference_graph: Optional[ReferenceGraph] = None
    inline_map: Optional[dict[str, set[str]]] = None


def _similarity_severity(similarity: float, high: float, medium: float) -> Severity:
    if similarity >= high:
        return "high"
    if similarity >= medium:
        return "medium"
    return "low"


def naming_suggestions(groups: Sequence[NameSimilarGroup]) -> list[Suggestion]:
    suggestions = []
    for group in groups:
        if len(group.schemas) < 2:
            continue
        size = len(group.schemas)
        suggestions.append(
            Suggestion(
                id=f"naming:{group.token}",
                category="naming",
                title=f"Consolidate “{group.token}” schemas → {group.suggested_canonical_name}",
                description=(
                    f"Found {size} schemas sharing token “{group.token}”. Consider "
                    f"consolidating to a single schema named {group.suggested_canonical_name}."
                ),
                severity=_similarity_severity(group.average_similarity, 0.5, 0.25),
                impact_score=capped_score(size * (group.average_similarity * 60 + 20)),
                affected_schemas=[s.name for s in group.schemas],
                data={"group": group},
            )
        )
    return suggestions


def duplicate_suggestions(groups: Sequence[DuplicateGroup]) -> list[Suggestion]:
    return [
        Suggestion(
            id=f"reuse:dup:{group.signature[:16]}",
            category="reuse",
            title=f"Extract shared schema for {len(group.schemas)} duplicates",
            description=(
                "These schemas are structurally identical. Extract a single shared "
                "schema and reference it to reduce duplication."
            ),
            severity="high",
            impact_score=min(100, len(group.schemas) * 20),
            affected_schemas=[s.name for s in group.schemas],
            data={"group": group},
        )
        for group in groups
    ]


def near_duplicate_suggestions(
    pairs: Sequence[NearDuplicatePair],
    in_degree: Mapping[str, int],
    centrality_threshold: int,
) -> list[Suggestion]:
    """One suggestion per unordered schema-name pair, centrality-aware."""
    by_names: dict[tuple[str, str], list[NearDuplicatePair]] = defaultdict(list)
    for pair in pairs:
        a_name, b_name = sorted((pair.a_name, pair.b_name))
        by_names[(a_name, b_name)].append(pair)

    suggestions = []
    for (a_name, b_name), grouped in by_names.items():
        average = sum(p.similarity for p in grouped) / len(grouped)
        a_central = in_degree.get(a_name, 0) >= centrality_threshold
        b_central = in_degree.get(b_name, 0) >= centrality_threshold

        if a_central and not b_central:
            title = f"Align {b_name} to central {a_name}"
            description = (
                f"{a_name} is widely reused. Prefer aligning {b_name} to {a_name} "
                "rather than introducing a new base."
            )
        elif b_central and not a_central:
            title = f"Align {a_name} to central {b_name}"
            description = (
                f"{b_name} is widely reused. Prefer aligning {a_name} to {b_name} "
                "rather than introducing a new base."
            )
        else:
            title = f"Normalize {a_name} and {b_name} (similar structures)"
            description = (
                f"Schemas appear similar (avg similarity {round_half_up(average * 100)}%). "
                "Consider refactoring into a shared base or extracting common parts."
            )

        suggestions.append(
            Suggestion(
                id=f"reuse:near:{a_name}::{b_name}",
                category="reuse",
                title=title,
                description=description,
                severity=_similarity_severity(average, 0.85, 0.7),
                impact_score=capped_score(average * 100),
                affected_schemas=[a_name, b_name],
                data={"pairs": list(grouped)},
            )
        )
    return suggestions


def inline_suggestions(
    schemas: Sequence[Schema],
    graph: Optional[ReferenceGraph],
    thresholds: ThresholdConfig,
    inline_map: Optional[dict[str, set[str]]] = None,
) -> list[Suggestion]:
    suggestions = []
    for candidate in find_inline_candidates(schemas, graph, thresholds, inline_map):
        count = len(candidate.parents)
        suggestions.append(
            Suggestion(
                id=f"reuse:inline:{candidate.signature[:16]}",
                category="reuse",
                title=f"Extract shared sub-schema used in {count} places",
                description=(
                    "A repeating inline structure was found across multiple schemas. "
                    "Extract it into a shared definition and reference it."
                ),
                severity="medium",
                impact_score=min(100, count * 15),
                affected_schemas=list(candidate.parents),
                data={
                    "kind": "inline-dup",
                    "signature": candidate.signature,
                    "parents": list(candidate.parents),
                },
            )
        )
    return suggestions


def field_suggestions(insights: FieldInsights) -> list[Suggestion]:
    suggestions = []
    for item in insights.items:
        conflicts = item.conflicts
        if not conflicts.any:
            continue

        if conflicts.type_conflict or conflicts.enum_conflict:
            severity: Severity = "high"
        elif conflicts.format_conflict or conflicts.required_conflict:
            severity = "medium"
        else:
            severity = "low"

        proposal = propose_field_canonical(item)
        description = f"Conflicts detected: {', '.join(conflicts.names())}."
        if proposal:
            description += f" Proposed: {proposal}"

        suggestions.append(
            Suggestion(
                id=f"field:{item.name}",
                category="field-consistency",
                title=f"Unify field “{item.name}” across schemas",
                description=description,
                severity=severity,
                impact_score=min(100, item.occurrences * FIELD_IMPACT_WEIGHTS[severity]),
                affected_schemas=sorted(set(item.required_in) | set(item.optional_in)),
                data={"field": item, "proposal": proposal},
            )
        )
    return suggestions


def circular_suggestions(
    cycles: Sequence[CircularReference], project_metrics: ProjectMetrics
) -> list[Suggestion]:
    if not cycles:
        return []
    return [
        Suggestion(
            id="refs:circular",
            category="references",
            title=f"Resolve {len(cycles)} circular reference(s)",
            description=(
                "Circular references complicate validation and tooling. Break cycles "
                "by introducing interfaces or indirection."
            ),
            severity="high",
            impact_score=min(100, len(cycles) * 10),
            affected_schemas=list(project_metrics.circular_schemas),
            data={"circular": list(cycles)},
        )
    ]


def complexity_suggestions(
    complexity_metrics: Mapping[str, ComplexityMetrics],
    index: SchemaIndex,
    top_count: int,
) -> list[Suggestion]:
    ranked = sorted(complexity_metrics.items(), key=lambda kv: -kv[1].complexity_score)[:top_count]
    if not ranked:
        return []

    worst = ranked[0][1].complexity_score
    if worst >= 75:
        severity: Severity = "high"
    elif worst >= 50:
        severity = "medium"
    else:
        severity = "low"

    top = [
        {"id": schema_id, "name": index.name_of(schema_id), "complexity_score": m.complexity_score}
        for schema_id, m in ranked
    ]
    return [
        Suggestion(
            id="complexity:top",
            category="complexity",
            title="Reduce complexity in top schemas",
            description=(
                f"Most complex schema score: {worst}. Consider splitting or simplifying "
                "deeply nested structures."
            ),
            severity=severity,
            impact_score=min(100, worst),
            affected_schemas=[entry["name"] for entry in top],
            data={"top_complex": top},
        )
    ]


def generate_suggestions(
    context: SuggestionContext, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> list[Suggestion]:
    """Run every rule family and rank the result by impact (descending, stable)."""
    index = SchemaIndex(context.schemas)
    in_degree = in_degree_by_name(context.reference_graph) if context.reference_graph else {}

    suggestions: list[Suggestion] = []
    suggestions += naming_suggestions(context.name_similar_groups)
    suggestions += duplicate_suggestions(context.duplicates)
    suggestions += near_duplicate_suggestions(
        context.near_duplicates, in_degree, thresholds.centrality_threshold
    )
    suggestions += inline_suggestions(
        context.schemas, context.reference_graph, thresholds, context.inline_map
    )
    suggestions += field_suggestions(context.field_insights)
    suggestions += circular_suggestions(context.circular_references, context.project_metrics)
    suggestions += complexity_suggestions(
        context.complexity_metrics, index, thresholds.top_complex_count
    )

    suggestions.sort(key=lambda s: -s.impact_score)
    return suggestions
