"""Circular reference detection over the schema reference relation.

DFS from every schema not yet reached by an earlier traversal. A reference
to a schema that is currently on the DFS path closes a cycle. Each cycle
is reduced to a rotation-normalized key (drop the repeated closing node,
rotate so the smallest id comes first) so that A -> B -> A found from A
and B -> A -> B found from B are reported once.

Traversal uses an explicit stack (no Python recursion). Worst case is
O(V * (V + E)) for dense, fully connected reference graphs.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

from ..logging_config import get_logger
from ..models import Schema
from .builder import SchemaIndex
from .models import CircularReference, Severity

logger = get_logger(__name__)


def circular_severity(depth: int) -> Severity:
    """Band a cycle by its depth."""
    if depth <= 2:
        return "low"
    if depth <= 4:
        return "medium"
    return "high"


def cycle_key(segment: list[str]) -> str:
    """Rotation-normalized key of a closed cycle segment [a, ..., a]."""
    cycle = segment[:-1]
    if not cycle:
        return ""
    start = cycle.index(min(cycle))
    rotated = cycle[start:] + cycle[:start]
    return "->".join(rotated)


def detect_circular_references(
    schemas: Sequence[Schema], index: Optional[SchemaIndex] = None
) -> list[CircularReference]:
    """Find every unique reference cycle in the collection.

    Dangling references (schema names with no matching schema) are skipped
    and never take part in a cycle.
    """
    index = index or SchemaIndex(schemas)
    found: list[CircularReference] = []
    seen_keys: set[str] = set()
    global_visited: set[str] = set()

    def targets(schema_id: str) -> Iterator[str]:
        schema = index.by_id.get(schema_id)
        if schema is None:
            return iter(())
        return (target.id for _ref, target in index.resolved_references(schema))

    def record(segment: list[str]) -> None:
        key = cycle_key(segment)
        if key in seen_keys:
            return
        seen_keys.add(key)
        names = [index.name_of(schema_id) for schema_id in segment]
        nodes = segment[:-1]
        # a self reference counts as a one-step cycle
        depth = max(1, len(nodes) - 1)
        logger.debug(f"Found circular reference: {' -> '.join(names)} (depth {depth})")
        found.append(
            CircularReference(
                path=names,
                depth=depth,
                type="direct" if len(nodes) <= 2 else "indirect",
                severity=circular_severity(depth),
            )
        )

    for schema in schemas:
        root = schema.id
        if root in global_visited:
            continue

        visited: set[str] = {root}
        on_stack: set[str] = {root}
        path: list[str] = [root]
        frames: list[tuple[str, Iterator[str]]] = [(root, targets(root))]

        while frames:
            node, neighbors = frames[-1]
            descended = False
            for target in neighbors:
                if target in on_stack:
                    closed = path + [target]
                    record(closed[closed.index(target):])
                    continue
                if target in visited:
                    continue
                visited.add(target)
                on_stack.add(target)
                path.append(target)
                frames.append((target, targets(target)))
                descended = True
                break

            if not descended:
                frames.pop()
                on_stack.discard(node)
                path.pop()

        global_visited.update(visited)

    logger.debug(f"Circular reference detection completed: {len(found)} unique cycle(s)")
    return found
