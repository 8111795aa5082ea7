"""Schema node classification and child access.

Every analysis pass walks arbitrary, caller-supplied JSON. Instead of
probing optional keys ad hoc, passes go through the helpers here:

- :func:`classify` maps any value to a :class:`NodeKind`. Anything that is
  not a JSON object lands in PRIMITIVE or OPAQUE, which walkers treat as
  leaves.
- The accessors return empty / ``None`` values for malformed input
  instead of raising, so one bad node never aborts an analysis.

Walkers additionally stop at :data:`MAX_WALK_DEPTH` so that deeply nested
(or adversarially deep) documents cannot exhaust the interpreter stack.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Optional

MAX_WALK_DEPTH = 256

COMBINATOR_KEYS = ("allOf", "anyOf", "oneOf", "not")

# Keys that carry type-relevant shape; everything else is cosmetic.
STRUCTURAL_KEYS = frozenset(
    {"type", "properties", "required", "items", "enum", "format", "additionalProperties"}
)


class NodeKind(Enum):
    """Variant of a JSON Schema node."""

    REF = "ref"
    OBJECT = "object"
    ARRAY = "array"
    COMBINATOR = "combinator"
    PRIMITIVE = "primitive"  # a schema object with no children (e.g. {"type": "string"})
    OPAQUE = "opaque"  # not a schema object at all


def is_node(value: Any) -> bool:
    """True for JSON objects, the only values that can carry sub-schemas."""
    return isinstance(value, dict)


def classify(node: Any) -> NodeKind:
    """Classify a JSON value into a :class:`NodeKind`."""
    if not is_node(node):
        return NodeKind.OPAQUE
    if isinstance(node.get("$ref"), str):
        return NodeKind.REF
    if properties_of(node) or is_node(node.get("additionalProperties")):
        return NodeKind.OBJECT
    if node.get("items") is not None and items_of(node):
        return NodeKind.ARRAY
    if any(key in node for key in COMBINATOR_KEYS):
        return NodeKind.COMBINATOR
    return NodeKind.PRIMITIVE


def properties_of(node: Any) -> dict[str, Any]:
    """The ``properties`` map of a node, or an empty dict."""
    if not is_node(node):
        return {}
    props = node.get("properties")
    return props if isinstance(props, dict) else {}


def items_of(node: Any) -> list[Any]:
    """``items`` as a list of sub-schemas (tuple-form arrays are flattened)."""
    if not is_node(node):
        return []
    items = node.get("items")
    if isinstance(items, list):
        return [item for item in items if is_node(item)]
    if is_node(items):
        return [items]
    return []


def additional_of(node: Any) -> Optional[dict[str, Any]]:
    """``additionalProperties`` when it is a schema (not a boolean)."""
    if not is_node(node):
        return None
    extra = node.get("additionalProperties")
    return extra if is_node(extra) else None


def required_of(node: Any) -> list[str]:
    """The ``required`` list coerced to strings, or an empty list."""
    if not is_node(node):
        return []
    required = node.get("required")
    if not isinstance(required, list):
        return []
    return [str(name) for name in required]


def type_of(node: Any) -> str:
    """The ``type`` keyword when it is a single string, else ''."""
    if not is_node(node):
        return ""
    value = node.get("type")
    return value if isinstance(value, str) else ""


def format_of(node: Any) -> str:
    """The ``format`` keyword when it is a string, else ''."""
    if not is_node(node):
        return ""
    value = node.get("format")
    return value if isinstance(value, str) else ""


def enum_of(node: Any) -> Optional[list[Any]]:
    """The ``enum`` list, or None when absent / malformed."""
    if not is_node(node):
        return None
    value = node.get("enum")
    return value if isinstance(value, list) else None


def description_of(node: Any) -> str:
    if not is_node(node):
        return ""
    value = node.get("description")
    return value if isinstance(value, str) else ""


def child_schemas(node: Any) -> Iterator[Any]:
    """Yield the sub-schemas reachable through properties, items and additionalProperties."""
    yield from properties_of(node).values()
    yield from items_of(node)
    extra = additional_of(node)
    if extra is not None:
        yield extra
