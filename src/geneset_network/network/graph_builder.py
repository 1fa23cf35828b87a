"""Similarity graph construction from a Jaccard matrix.

Builds an undirected networkx graph with one node per gene set and an
edge for every pair whose Jaccard index exceeds the threshold.  Edge
weight is the overlap count.
"""

from __future__ import annotations

from collections.abc import Iterable

import networkx as nx
import structlog

from geneset_network.errors import InvalidInput
from geneset_network.network.config import DEFAULT_JACCARD_THRESHOLD, check_threshold
from geneset_network.network.items import Item, index_items
from geneset_network.similarity.index import SimilarityMatrix

logger = structlog.get_logger()


def build_similarity_graph(
    matrix: SimilarityMatrix,
    items: Iterable[Item],
    threshold: float = DEFAULT_JACCARD_THRESHOLD,
) -> nx.Graph:
    """Build the thresholded similarity graph.

    Args:
        matrix: Pairwise scores for exactly the given items.
        items: Item records; each becomes a node keyed by its identifier
            with the record stored under the ``item`` attribute.
        threshold: Edges are added iff ``jaccard > threshold``.

    Returns:
        A new ``nx.Graph``.  Edges carry ``weight`` (overlap count) and
        ``jaccard``.

    Raises:
        InvalidThreshold: If ``threshold`` is not inside (0, 1).
        InvalidInput: If the items and the matrix disagree.
    """
    check_threshold(threshold)
    items_by_id = index_items(items)
    if tuple(sorted(items_by_id)) != matrix.identifiers:
        raise InvalidInput("Similarity matrix does not cover exactly the given items")

    G = nx.Graph()

    # Add all nodes first (ensures items without edges stay visible as singletons)
    for item_id in matrix.identifiers:
        G.add_node(item_id, item=items_by_id[item_id])

    for id_a, id_b, score in matrix.pairs():
        if score.jaccard > threshold:
            G.add_edge(id_a, id_b, weight=score.overlap, jaccard=score.jaccard)

    logger.info(
        "graph_built",
        nodes=G.number_of_nodes(),
        edges=G.number_of_edges(),
        threshold=threshold,
    )
    return G
