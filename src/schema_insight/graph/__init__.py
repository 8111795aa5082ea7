"""Reference graph construction, cycle detection and centrality."""

from .builder import SchemaIndex, build_reference_graph, in_degree_by_name
from .cycles import detect_circular_references
from .models import CircularReference, GraphMetrics, ReferenceEdge, ReferenceGraph, ReferenceNode

__all__ = [
    "SchemaIndex",
    "build_reference_graph",
    "in_degree_by_name",
    "detect_circular_references",
    "CircularReference",
    "GraphMetrics",
    "ReferenceEdge",
    "ReferenceGraph",
    "ReferenceNode",
]
