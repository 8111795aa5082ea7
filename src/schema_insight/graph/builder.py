"""Build the reference graph from a schema collection."""

from __future__ import annotations

from collections import Counter
from typing import Iterator, Optional, Sequence

from ..logging_config import get_logger
from ..models import Schema, SchemaReference
from .algorithms import average_degree, count_connected_components, degree_centrality, graph_density
from .models import GraphMetrics, ReferenceEdge, ReferenceGraph, ReferenceNode

logger = get_logger(__name__)


class SchemaIndex:
    """Lookup tables over one schema collection.

    Name resolution follows first-wins semantics: when two schemas share a
    name, references resolve to the one that appears first.
    """

    def __init__(self, schemas: Sequence[Schema]):
        self.schemas = list(schemas)
        self.by_id: dict[str, Schema] = {}
        self.by_name: dict[str, Schema] = {}
        for schema in self.schemas:
            self.by_id.setdefault(schema.id, schema)
            if schema.name in self.by_name:
                logger.debug(
                    f"Duplicate schema name '{schema.name}' ({schema.id}); "
                    f"references resolve to {self.by_name[schema.name].id}"
                )
                continue
            self.by_name[schema.name] = schema

    def resolve(self, ref: SchemaReference) -> Optional[Schema]:
        """Schema a reference points to, or None for a dangling reference."""
        return self.by_name.get(ref.schema_name)

    def resolved_references(self, schema: Schema) -> Iterator[tuple[SchemaReference, Schema]]:
        """Yield (reference, target) for every resolvable reference of *schema*."""
        for ref in schema.references:
            target = self.resolve(ref)
            if target is None:
                logger.debug(f"Referenced schema not found: '{ref.schema_name}' (from {schema.name})")
                continue
            yield ref, target

    def name_of(self, schema_id: str) -> str:
        schema = self.by_id.get(schema_id)
        return schema.name if schema else schema_id


def classify_edge(ref: str) -> str:
    """In-document pointers ("#/definitions/X") are nested, anything else direct."""
    return "nested" if ref.startswith("#/") else "direct"


def build_reference_graph(
    schemas: Sequence[Schema], index: Optional[SchemaIndex] = None
) -> ReferenceGraph:
    """Build the directed reference graph with degree centrality and metrics."""
    index = index or SchemaIndex(schemas)

    edges: list[ReferenceEdge] = []
    for schema in schemas:
        for ref, target in index.resolved_references(schema):
            edges.append(
                ReferenceEdge(
                    source=schema.id,
                    target=target.id,
                    path=ref.ref,
                    type=classify_edge(ref.ref),
                )
            )

    in_degree = Counter(edge.target for edge in edges)
    out_degree = Counter(edge.source for edge in edges)
    node_count = len(schemas)

    nodes = [
        ReferenceNode(
            id=schema.id,
            name=schema.name,
            in_degree=in_degree[schema.id],
            out_degree=out_degree[schema.id],
            centrality=degree_centrality(in_degree[schema.id], out_degree[schema.id], node_count),
        )
        for schema in schemas
    ]

    edge_count = len(edges)
    metrics = GraphMetrics(
        node_count=node_count,
        edge_count=edge_count,
        density=graph_density(node_count, edge_count),
        average_degree=average_degree(node_count, edge_count),
        connected_components=count_connected_components([n.id for n in nodes], edges),
    )

    return ReferenceGraph(nodes=nodes, edges=edges, metrics=metrics)


def in_degree_by_name(graph: ReferenceGraph) -> dict[str, int]:
    """In-degree keyed by schema name (first node wins on duplicate names)."""
    result: dict[str, int] = {}
    for node in graph.nodes:
        result.setdefault(node.name, node.in_degree)
    return result
