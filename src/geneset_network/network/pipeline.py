"""Network pipeline orchestrator.

Runs the full chain on a list of gene sets:

    similarity -> graph -> pruning -> community splitting -> labeling

Each stage receives the previous stage's graph and returns a new one;
no stage mutates an upstream graph.  All functions are PURE -- no file
or network access.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import networkx as nx
import structlog

from geneset_network.clustering.splitter import split_communities
from geneset_network.errors import InvalidInput
from geneset_network.labeling.labeler import ClusterLabel, label_clusters
from geneset_network.network.config import NetworkConfig, build_network_config
from geneset_network.network.graph_builder import build_similarity_graph
from geneset_network.network.items import ExcludedItem, Item, index_items
from geneset_network.network.pruning import prune_topology
from geneset_network.similarity.index import similarity_from_items

logger = structlog.get_logger()


@dataclass
class NetworkResult:
    """Complete result of one pipeline run.

    Attributes:
        graph: Final graph; every node carries ``item`` and ``cluster_id``.
        membership: Node -> cluster ID (1 = largest cluster).
        labels: Cluster ID -> label.
        excluded_isolated: Items without any edge above the threshold.
        excluded_minor: Members of components below the minimum size,
            sharing a group ID per component.
        excluded_split: Members of communities that fell below the
            minimum size after splitting.
        stage_node_counts: Node count after each stage, in run order.
        component_modularity: Modularity of each split component.
        config: The configuration used for the run.
    """

    graph: nx.Graph
    membership: dict[str, int]
    labels: dict[int, ClusterLabel]
    excluded_isolated: list[ExcludedItem] = field(default_factory=list)
    excluded_minor: list[ExcludedItem] = field(default_factory=list)
    excluded_split: list[ExcludedItem] = field(default_factory=list)
    stage_node_counts: dict[str, int] = field(default_factory=dict)
    component_modularity: list[float] = field(default_factory=list)
    config: NetworkConfig = field(default_factory=NetworkConfig)

    @property
    def cluster_count(self) -> int:
        return len(self.labels)

    @property
    def excluded(self) -> list[ExcludedItem]:
        """All exclusion records, in stage order."""
        return self.excluded_isolated + self.excluded_minor + self.excluded_split


def select_significant(items: Iterable[Item], cutoff: float | None) -> list[Item]:
    """Keep items with ``score <= cutoff`` (all items if ``cutoff`` is None)."""
    if cutoff is None:
        return list(items)
    return [item for item in items if item.score <= cutoff]


def run_network_pipeline(
    items: Iterable[Item],
    config: NetworkConfig | Mapping[str, Any] | None = None,
) -> NetworkResult:
    """Full pipeline: similarity -> graph -> pruning -> splitting -> labeling.

    This is a PURE FUNCTION.  Takes gene set records and configuration,
    returns the clustered, labeled network plus every exclusion record.

    Args:
        items: Enriched gene sets (identifiers must be unique).
        config: Full network configuration, or a raw mapping validated
            with ``build_network_config``.  Defaults are used when None.

    Returns:
        A ``NetworkResult``.

    Raises:
        InvalidInput: For duplicate identifiers or malformed names.
        InvalidConfiguration: If a raw mapping holds out-of-range values.
    """
    if config is None:
        config = NetworkConfig()
    elif not isinstance(config, NetworkConfig):
        config = build_network_config(config)

    all_items = list(items)
    index_items(all_items)
    selected = select_significant(all_items, config.significance_cutoff)
    if not selected and all_items:
        logger.warning(
            "no_significant_items",
            total=len(all_items),
            cutoff=config.significance_cutoff,
        )

    # Step 1: Pairwise similarity
    matrix = similarity_from_items(selected)

    # Step 2: Thresholded graph
    graph = build_similarity_graph(matrix, selected, config.graph.jaccard_threshold)
    stage_node_counts = {"graph": graph.number_of_nodes()}

    # Step 3: Topological pruning
    pruned = prune_topology(graph, config.pruning.min_cluster_size)
    stage_node_counts["pruned"] = pruned.graph.number_of_nodes()

    # Step 4: Community splitting
    split = split_communities(
        pruned.graph,
        config.pruning.min_cluster_size,
        split=config.community.split,
    )
    stage_node_counts["split"] = split.graph.number_of_nodes()

    # Step 5: Labeling
    try:
        labels = label_clusters(split.membership, config.labeling)
    except InvalidInput:
        logger.error("labeling_failed", clusters=split.cluster_count)
        raise

    logger.info(
        "network_pipeline_complete",
        items=len(all_items),
        selected=len(selected),
        clusters=len(labels),
        unlabeled=sum(1 for label in labels.values() if label.is_unlabeled),
        isolated=len(pruned.isolated),
        minor=len(pruned.minor),
        split_remnants=len(split.excluded),
    )
    return NetworkResult(
        graph=split.graph,
        membership=split.membership,
        labels=labels,
        excluded_isolated=pruned.isolated,
        excluded_minor=pruned.minor,
        excluded_split=split.excluded,
        stage_node_counts=stage_node_counts,
        component_modularity=split.component_modularity,
        config=config,
    )
