"""Frequency-based labeling of gene set clusters.

A cluster's label is made of the words that recur across the names of
its members.  Names are tokenized lazily, reduced with a single
``Counter`` and ranked by frequency (ties broken by first occurrence).
Clusters where no word recurs get an explicit empty label.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import networkx as nx
import structlog

from geneset_network.labeling.tokenizer import iter_tokens
from geneset_network.network.config import LabelConfig

logger = structlog.get_logger()


@dataclass(frozen=True)
class ClusterLabel:
    """Label of one cluster.

    Attributes:
        cluster_id: The cluster the label belongs to.
        terms: Ranked label terms; empty when no term recurs.
    """

    cluster_id: int
    terms: tuple[str, ...] = ()

    @property
    def is_unlabeled(self) -> bool:
        return not self.terms

    @property
    def text(self) -> str | None:
        """Space-joined terms, or ``None`` for an unlabeled cluster."""
        if not self.terms:
            return None
        return " ".join(self.terms)


def rank_terms(names: Iterable[str], config: LabelConfig) -> list[tuple[str, int]]:
    """Rank the recurring terms of a group of names.

    Names are visited in sorted order so the result does not depend on
    the iteration order of the caller's collection.

    Returns:
        ``(term, count)`` pairs with ``count >= min_term_frequency``,
        sorted by descending count, then by first occurrence.
    """
    counts: Counter[str] = Counter()
    first_seen: dict[str, int] = {}
    for position, token in enumerate(iter_tokens(sorted(names), config)):
        counts[token] += 1
        first_seen.setdefault(token, position)

    qualifying = [
        (term, count)
        for term, count in counts.items()
        if count >= config.min_term_frequency
    ]
    qualifying.sort(key=lambda tc: (-tc[1], first_seen[tc[0]]))
    return qualifying


def label_cluster(
    cluster_id: int, names: Iterable[str], config: LabelConfig
) -> ClusterLabel:
    """Build the label of one cluster from its member names."""
    ranked = rank_terms(names, config)
    terms = tuple(term for term, _ in ranked[: config.max_terms])
    return ClusterLabel(cluster_id=cluster_id, terms=terms)


def label_clusters(
    membership: Mapping[str, int], config: LabelConfig
) -> dict[int, ClusterLabel]:
    """Label every cluster of a membership assignment.

    Args:
        membership: Node name -> cluster ID.
        config: Labeling parameters.

    Returns:
        Cluster ID -> ``ClusterLabel``, in ascending cluster ID order.
    """
    names_by_cluster: dict[int, list[str]] = {}
    for name, cluster_id in membership.items():
        names_by_cluster.setdefault(cluster_id, []).append(name)

    labels: dict[int, ClusterLabel] = {}
    for cluster_id in sorted(names_by_cluster):
        label = label_cluster(cluster_id, names_by_cluster[cluster_id], config)
        if label.is_unlabeled:
            logger.warning(
                "cluster_unlabeled",
                cluster_id=cluster_id,
                size=len(names_by_cluster[cluster_id]),
            )
        labels[cluster_id] = label
    return labels


def label_graph(graph: nx.Graph, config: LabelConfig) -> dict[int, ClusterLabel]:
    """Label clusters using the ``cluster_id`` node attribute of a graph."""
    membership = {
        node: data["cluster_id"] for node, data in graph.nodes(data=True)
    }
    return label_clusters(membership, config)
