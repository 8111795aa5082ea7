"""Structural and field signatures of schema documents.

Two views of a schema's shape:

- The *structural signature* is a canonical JSON string of the
  type-relevant keys only (see :data:`~schema_insight.nodes.STRUCTURAL_KEYS`).
  Key order, ``required``/``enum`` declaration order and cosmetic keys
  (``description``, ``title``, ``$id``, ``examples``...) never affect it, so
  string equality means "structurally identical".
- The *field signature* is the set of ``name:type`` tokens of every
  property at any depth. It is the feature vector for Jaccard similarity.
"""

from __future__ import annotations

import json
from typing import Any

from .nodes import (
    MAX_WALK_DEPTH,
    STRUCTURAL_KEYS,
    child_schemas,
    is_node,
    properties_of,
    type_of,
)


def stringify_value(value: Any) -> str:
    """Coerce an enum / required entry to the string used for comparison.

    JSON literals keep their JSON spelling (``true``, ``null``, ``1``), so a
    document and its round-tripped copy produce the same strings.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return json.dumps(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return repr(value)
    return canonical_json(value)


def canonical_json(value: Any) -> str:
    """Deterministic compact JSON serialization."""
    return json.dumps(
        value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str
    )


def _canonicalize(node: Any, depth: int = 0) -> Any:
    if depth > MAX_WALK_DEPTH:
        return None
    if isinstance(node, list):
        return [_canonicalize(x, depth + 1) for x in node]
    if not is_node(node):
        return node

    out: dict[str, Any] = {}
    for key in sorted(k for k in node if k in STRUCTURAL_KEYS):
        value = node[key]
        if key == "properties" and isinstance(value, dict):
            out[key] = {
                name: _canonicalize(value[name], depth + 1) for name in sorted(value)
            }
        elif key in ("required", "enum") and isinstance(value, list):
            out[key] = sorted(stringify_value(x) for x in value)
        else:
            out[key] = _canonicalize(value, depth + 1)
    return out


def structural_signature(node: Any) -> str:
    """Canonical structural signature of a schema node.

    Never raises: non-object values are serialized as opaque leaves.
    """
    return canonical_json(_canonicalize(node))


def field_signatures(node: Any) -> set[str]:
    """Flattened ``name:type`` tokens for every property at any depth."""
    tokens: set[str] = set()
    visited: set[int] = set()

    def walk(n: Any, depth: int) -> None:
        if not is_node(n) or id(n) in visited or depth > MAX_WALK_DEPTH:
            return
        visited.add(id(n))
        for name, child in properties_of(n).items():
            tokens.add(f"{name}:{type_of(child)}")
        for child in child_schemas(n):
            walk(child, depth + 1)

    walk(node, 0)
    return tokens


def jaccard(a: set[str], b: set[str]) -> tuple[float, int, int]:
    """Jaccard similarity of two token sets.

    Returns:
        (similarity, overlap, union). Two empty sets give (0.0, 0, 0).
    """
    overlap = len(a & b)
    union = len(a) + len(b) - overlap
    if union == 0:
        return 0.0, 0, 0
    return overlap / union, overlap, union
