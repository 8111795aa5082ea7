"""Exact and near-duplicate schema detection.

Exact duplicates share a structural signature (cosmetic keys and key order
ignored). Near-duplicates are pairs whose ``name:type`` field signatures
have a Jaccard similarity of at least ``threshold`` with at least
``min_overlap`` shared fields, which keeps tiny schemas from matching on
one or two common fields.

Near-duplicate detection compares every pair: O(n^2) in the number of
schemas. That is comfortable for hundreds of schemas and becomes the
dominant cost for projects with many thousands.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from ..models import Schema
from ..scoring import round_half_up_to
from ..signatures import field_signatures, structural_signature
from .matrix import pairwise_overlap
from .models import DuplicateGroup, NearDuplicatePair, SchemaRef

DEFAULT_NEAR_DUPLICATE_THRESHOLD = 0.8
DEFAULT_MIN_OVERLAP = 3


def sort_by_name(refs: list[SchemaRef]) -> list[SchemaRef]:
    return sorted(refs, key=lambda r: (r.name.casefold(), r.name))


def detect_duplicate_schemas(schemas: Sequence[Schema]) -> list[DuplicateGroup]:
    """Group structurally identical schemas; largest groups first."""
    by_signature: dict[str, list[SchemaRef]] = defaultdict(list)
    for schema in schemas:
        by_signature[structural_signature(schema.content)].append(
            SchemaRef(id=schema.id, name=schema.name)
        )

    groups = [
        DuplicateGroup(signature=signature, schemas=sort_by_name(members))
        for signature, members in by_signature.items()
        if len(members) > 1
    ]
    groups.sort(key=lambda g: -len(g.schemas))
    return groups


def detect_near_duplicate_schemas(
    schemas: Sequence[Schema],
    threshold: float = DEFAULT_NEAR_DUPLICATE_THRESHOLD,
    min_overlap: int = DEFAULT_MIN_OVERLAP,
) -> list[NearDuplicatePair]:
    """Pairs of schemas with similar field surfaces, most similar first.

    Both bounds are inclusive: a pair exactly at ``threshold`` with exactly
    ``min_overlap`` shared fields is reported.
    """
    schemas = list(schemas)
    field_sets = [field_signatures(schema.content) for schema in schemas]
    overlap, union = pairwise_overlap(field_sets)

    pairs: list[NearDuplicatePair] = []
    for i in range(len(schemas)):
        for j in range(i + 1, len(schemas)):
            if not field_sets[i] and not field_sets[j]:
                continue
            shared = int(overlap[i, j])
            total = int(union[i, j])
            similarity = shared / total if total > 0 else 0.0
            if similarity >= threshold and shared >= min_overlap:
                a, b = schemas[i], schemas[j]
                pairs.append(
                    NearDuplicatePair(
                        a_id=a.id,
                        b_id=b.id,
                        a_name=a.name,
                        b_name=b.name,
                        similarity=round_half_up_to(similarity, 3),
                        overlap_fields=shared,
                        union_fields=total,
                    )
                )

    pairs.sort(key=lambda p: (-p.similarity, -p.overlap_fields))
    return pairs
