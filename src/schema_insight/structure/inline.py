"""Inline-duplication mining.

Finds object/array sub-structures that are written out inline in several
schemas instead of being extracted and referenced. ``$ref`` nodes are
skipped entirely: a reference is already correct reuse.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Optional, Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..graph.models import ReferenceGraph
from ..models import Schema
from ..nodes import MAX_WALK_DEPTH, NodeKind, child_schemas, classify, is_node
from ..signatures import structural_signature
from .models import InlineCandidate


def _has_structure(node: dict[str, Any]) -> bool:
    return isinstance(node.get("properties"), (dict, list)) or isinstance(
        node.get("items"), (dict, list)
    )


def collect_inline_duplication(schemas: Sequence[Schema]) -> dict[str, set[str]]:
    """Map structural signature -> names of the schemas containing it inline.

    A structure repeated within one schema counts once for that schema.
    """
    parents_by_signature: dict[str, set[str]] = defaultdict(set)

    for schema in schemas:
        visited: set[int] = set()
        stack: list[tuple[Any, int]] = [(schema.content, 0)]
        while stack:
            node, depth = stack.pop()
            if not is_node(node) or id(node) in visited or depth > MAX_WALK_DEPTH:
                continue
            visited.add(id(node))
            if classify(node) is NodeKind.REF:
                continue
            if _has_structure(node):
                signature = structural_signature(node)
                if len(signature) > 2:
                    parents_by_signature[signature].add(schema.name)
            stack.extend((child, depth + 1) for child in child_schemas(node))

    return dict(parents_by_signature)


def find_inline_candidates(
    schemas: Sequence[Schema],
    graph: Optional[ReferenceGraph] = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
    inline_map: Optional[dict[str, set[str]]] = None,
) -> list[InlineCandidate]:
    """Inline structures worth extracting into a shared schema.

    A signature qualifies when it appears inline in at least
    ``inline_min_parents`` schemas, unless a schema with that exact
    signature is already referenced by ``centrality_threshold`` or more
    schemas (the structure is already being reused properly).
    """
    if inline_map is None:
        inline_map = collect_inline_duplication(schemas)

    central_signatures: set[str] = set()
    if graph is not None:
        by_id = {schema.id: schema for schema in schemas}
        for node in graph.nodes:
            schema = by_id.get(node.id)
            if schema is not None and node.in_degree >= thresholds.centrality_threshold:
                central_signatures.add(structural_signature(schema.content))

    candidates = [
        InlineCandidate(signature=signature, parents=sorted(parents))
        for signature, parents in inline_map.items()
        if len(parents) >= thresholds.inline_min_parents and signature not in central_signatures
    ]
    candidates.sort(key=lambda c: (-len(c.parents), c.signature))
    return candidates
