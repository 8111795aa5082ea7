"""Graph algorithms over the reference relation: degrees, centrality, components."""

from collections import defaultdict
from typing import Iterable

from .models import ReferenceEdge


def degree_centrality(in_degree: int, out_degree: int, node_count: int) -> float:
    """Normalized degree centrality: (in + out) / ((n - 1) * 2).

    Zero when the graph has at most one node.
    """
    max_possible = (node_count - 1) * 2
    if max_possible <= 0:
        return 0.0
    return (in_degree + out_degree) / max_possible


def graph_density(node_count: int, edge_count: int) -> float:
    """Directed density: edges / (n * (n - 1)), zero for n <= 1."""
    max_edges = node_count * (node_count - 1)
    return edge_count / max_edges if max_edges > 0 else 0.0


def average_degree(node_count: int, edge_count: int) -> float:
    return (edge_count * 2) / node_count if node_count > 0 else 0.0


def count_connected_components(node_ids: Iterable[str], edges: Iterable[ReferenceEdge]) -> int:
    """Count weakly connected components (every edge treated as undirected).

    Iterative DFS with an explicit stack, so long reference chains do not
    hit Python's recursion limit.
    """
    undirected: dict[str, set[str]] = defaultdict(set)
    for edge in edges:
        undirected[edge.source].add(edge.target)
        undirected[edge.target].add(edge.source)

    visited: set[str] = set()
    components = 0

    for root in node_ids:
        if root in visited:
            continue
        components += 1
        stack = [root]
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            stack.extend(n for n in undirected.get(node, ()) if n not in visited)

    return components
