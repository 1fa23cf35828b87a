"""Topological pruning of the similarity graph.

Two passes, each idempotent and each returning a new graph:

1. **Singleton removal** -- nodes without any edge are dropped.
2. **Minor-component removal** -- connected components smaller than the
   minimum cluster size are dropped wholesale; their members share a
   synthetic group ID so they can be reported together.

Singletons must be removed first, otherwise they would be counted as
size-1 components and mixed up with genuine small clusters.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import networkx as nx
import structlog

from geneset_network.network.config import DEFAULT_MIN_CLUSTER_SIZE, check_min_size
from geneset_network.network.items import ExcludedItem, ExclusionReason

logger = structlog.get_logger()


@dataclass
class PruneResult:
    """Result of topological pruning.

    Attributes:
        graph: Pruned graph (only components of at least the minimum size).
        isolated: Items removed as singletons.
        minor: Items removed as members of too-small components.
    """

    graph: nx.Graph
    isolated: list[ExcludedItem] = field(default_factory=list)
    minor: list[ExcludedItem] = field(default_factory=list)


def sorted_components(graph: nx.Graph) -> list[list[str]]:
    """Connected components as sorted member lists, ordered by first member."""
    return sorted(sorted(c) for c in nx.connected_components(graph))


def remove_singletons(graph: nx.Graph) -> tuple[nx.Graph, list[ExcludedItem]]:
    """Drop every degree-0 node.

    Returns:
        ``(pruned copy, excluded records)``.  The input graph is untouched.
    """
    isolated = sorted(node for node, degree in graph.degree() if degree == 0)

    pruned = graph.copy()
    pruned.remove_nodes_from(isolated)
    excluded = [
        ExcludedItem(item=graph.nodes[node]["item"], reason=ExclusionReason.ISOLATED)
        for node in isolated
    ]

    logger.info("singletons_removed", removed=len(isolated), remaining=pruned.number_of_nodes())
    return pruned, excluded


def remove_small_components(
    graph: nx.Graph,
    min_size: int,
    reason: ExclusionReason,
    first_group_id: int = 1,
) -> tuple[nx.Graph, list[ExcludedItem]]:
    """Drop every connected component with fewer than ``min_size`` nodes.

    Components are visited in order of their smallest member, so group
    IDs are stable for a given graph.

    Args:
        graph: Input graph (not modified).
        min_size: Minimum component size kept.
        reason: Exclusion reason recorded for removed members.
        first_group_id: Group ID given to the first removed component.

    Returns:
        ``(pruned copy, excluded records)``.
    """
    check_min_size(min_size)

    pruned = graph.copy()
    excluded: list[ExcludedItem] = []
    group_id = first_group_id
    for component in sorted_components(graph):
        if len(component) >= min_size:
            continue
        pruned.remove_nodes_from(component)
        excluded.extend(
            ExcludedItem(item=graph.nodes[node]["item"], reason=reason, group_id=group_id)
            for node in component
        )
        group_id += 1

    return pruned, excluded


def remove_minor_components(
    graph: nx.Graph, min_size: int = DEFAULT_MIN_CLUSTER_SIZE
) -> tuple[nx.Graph, list[ExcludedItem]]:
    """Drop components smaller than ``min_size`` as minor clusters."""
    pruned, excluded = remove_small_components(
        graph, min_size, ExclusionReason.MINOR_CLUSTER
    )
    logger.info(
        "minor_components_removed",
        removed=len(excluded),
        groups=len({e.group_id for e in excluded}),
        remaining=pruned.number_of_nodes(),
    )
    return pruned, excluded


def prune_topology(
    graph: nx.Graph, min_size: int = DEFAULT_MIN_CLUSTER_SIZE
) -> PruneResult:
    """Run singleton removal followed by minor-component removal."""
    check_min_size(min_size)
    without_singletons, isolated = remove_singletons(graph)
    pruned, minor = remove_minor_components(without_singletons, min_size)
    return PruneResult(graph=pruned, isolated=isolated, minor=minor)
