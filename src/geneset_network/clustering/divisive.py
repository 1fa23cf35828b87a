"""Divisive (Girvan-Newman) community detection.

Repeatedly removes the edge with the highest betweenness from a working
copy of the graph.  Whenever the removal disconnects a component, the
new partition is scored by Newman modularity against the original
graph; the best-scoring partition is returned.  Edge weights are
ignored.

Ties between equally central edges are broken by the lexicographically
smallest ``(u, v)`` pair, so results are deterministic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import networkx as nx
from networkx.algorithms.community import modularity

# Modularity gains below this are treated as noise
_MODULARITY_TOLERANCE = 1e-12


@dataclass
class CommunityPartition:
    """A hard partition of a graph's nodes.

    Attributes:
        communities: Sorted member lists, ordered by first member.
        modularity: Newman modularity of the partition (0.0 for graphs
            without edges).
    """

    communities: list[list[str]] = field(default_factory=list)
    modularity: float = 0.0


def _edge_key(u: str, v: str) -> tuple[str, str]:
    return (u, v) if u <= v else (v, u)


def _components(graph: nx.Graph) -> list[list[str]]:
    return sorted(sorted(c) for c in nx.connected_components(graph))


def _betweenness(graph: nx.Graph) -> dict[tuple[str, str], float]:
    """Unnormalized edge betweenness keyed by canonical edge."""
    scores = nx.edge_betweenness_centrality(graph, normalized=False)
    return {_edge_key(u, v): value for (u, v), value in scores.items()}


def most_central_edge(betweenness: dict[tuple[str, str], float]) -> tuple[str, str]:
    """Pick the edge with maximal betweenness (smallest key on ties)."""
    top = max(betweenness.values())
    return min(
        edge
        for edge, value in betweenness.items()
        if math.isclose(value, top, rel_tol=1e-9, abs_tol=1e-12)
    )


def divisive_communities(graph: nx.Graph) -> CommunityPartition:
    """Find the maximum-modularity partition along the Girvan-Newman dendrogram.

    The unsplit graph is the first candidate, so a graph that no edge
    removal improves comes back as its own connected components.

    Args:
        graph: Input graph (not modified).

    Returns:
        The best ``CommunityPartition`` found.
    """
    reference = nx.Graph()
    reference.add_nodes_from(sorted(graph.nodes))
    reference.add_edges_from(_edge_key(u, v) for u, v in graph.edges)

    best = _components(reference)
    if reference.number_of_edges() == 0:
        return CommunityPartition(communities=best, modularity=0.0)

    best_q = modularity(reference, best)
    n_components = len(best)

    working = reference.copy()
    betweenness = _betweenness(working)

    while betweenness:
        u, v = most_central_edge(betweenness)
        working.remove_edge(u, v)
        del betweenness[(u, v)]

        # Betweenness only changes inside the component(s) that held the edge
        touched = {frozenset(nx.node_connected_component(working, n)) for n in (u, v)}
        for nodes in touched:
            betweenness.update(_betweenness(working.subgraph(nodes)))

        components = _components(working)
        if len(components) > n_components:
            n_components = len(components)
            q = modularity(reference, components)
            if q > best_q + _MODULARITY_TOLERANCE:
                best, best_q = components, q

    return CommunityPartition(communities=best, modularity=best_q)
