"""Data models for the schema reference graph.

Edges are directed: an edge (A, B) means schema A holds a ``$ref`` that
resolves to schema B. Node ids are schema ids; names are carried along
for display.
"""

from dataclasses import dataclass, field
from typing import Literal

Severity = Literal["low", "medium", "high"]
CycleType = Literal["direct", "indirect"]
EdgeType = Literal["direct", "nested"]


# ── Nodes and edges ────────────────────────────────────────────────


@dataclass
class ReferenceNode:
    """A schema in the reference graph with its degree measurements."""

    id: str
    name: str
    in_degree: int = 0
    out_degree: int = 0
    centrality: float = 0.0  # normalized degree centrality in [0, 1]


@dataclass
class ReferenceEdge:
    """A resolved reference between two schemas."""

    source: str  # schema id holding the $ref
    target: str  # schema id the $ref resolves to
    path: str  # the raw $ref string
    type: EdgeType = "direct"  # "nested" for in-document pointers ("#/...")


@dataclass
class GraphMetrics:
    node_count: int = 0
    edge_count: int = 0
    density: float = 0.0
    average_degree: float = 0.0
    connected_components: int = 0


@dataclass
class ReferenceGraph:
    """Directed graph of resolved schema references."""

    nodes: list[ReferenceNode] = field(default_factory=list)
    edges: list[ReferenceEdge] = field(default_factory=list)
    metrics: GraphMetrics = field(default_factory=GraphMetrics)

    def node_by_id(self) -> dict[str, ReferenceNode]:
        return {node.id: node for node in self.nodes}


# ── Derived structures ─────────────────────────────────────────────


@dataclass
class CircularReference:
    """One unique reference cycle.

    ``path`` lists schema names in traversal order and repeats the first
    name at the end (A -> B -> A). ``depth`` is the number of hops.
    """

    path: list[str]
    depth: int
    type: CycleType
    severity: Severity
