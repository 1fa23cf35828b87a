"""Core export logic: transform a network result into a JSON document."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from geneset_network.network.items import ExcludedItem, Item
from geneset_network.network.pipeline import NetworkResult

RESULT_FILENAME_PREFIX = "network"


def _sort_key(value: str | int) -> tuple[str, str | int]:
    return (type(value).__name__, value)


def item_to_dict(item: Item) -> dict:
    """Transform an ``Item`` into plain JSON-compatible fields."""
    return {
        "id": item.identifier,
        "size": item.size,
        "score": item.score,
        "direction": item.direction.value,
        "members": sorted(item.members, key=_sort_key),
    }


def excluded_to_dict(excluded: ExcludedItem) -> dict:
    """Transform an exclusion record, including the group ID only when set."""
    record = item_to_dict(excluded.item)
    record["reason"] = excluded.reason.value
    if excluded.group_id is not None:
        record["group_id"] = excluded.group_id
    return record


def result_to_dict(
    result: NetworkResult,
    input_hash: str | None = None,
) -> dict:
    """Transform a ``NetworkResult`` into a JSON-compatible document.

    The document has four blocks consumed by reporting tools: ``clusters``
    (labels and members), ``nodes`` and ``edges`` of the final graph, and
    ``excluded`` items; plus a ``metadata`` block for reproducibility.
    """
    members_by_cluster: dict[int, list[str]] = {}
    for node, cluster_id in result.membership.items():
        members_by_cluster.setdefault(cluster_id, []).append(node)

    clusters = [
        {
            "cluster_id": cluster_id,
            # None marks an unlabeled cluster
            "label": label.text,
            "terms": list(label.terms),
            "members": sorted(members_by_cluster.get(cluster_id, [])),
        }
        for cluster_id, label in sorted(result.labels.items())
    ]

    nodes = []
    for node in sorted(result.graph.nodes):
        data = result.graph.nodes[node]
        record = item_to_dict(data["item"])
        record["cluster_id"] = data["cluster_id"]
        nodes.append(record)

    edges = []
    for u, v, data in result.graph.edges(data=True):
        source, target = sorted((u, v))
        edges.append(
            {
                "source": source,
                "target": target,
                "weight": data["weight"],
                "jaccard": data["jaccard"],
            }
        )
    edges.sort(key=lambda e: (e["source"], e["target"]))

    return {
        "clusters": clusters,
        "nodes": nodes,
        "edges": edges,
        "excluded": [excluded_to_dict(e) for e in result.excluded],
        "metadata": {
            "exportedAt": datetime.now(timezone.utc).isoformat(),
            "inputHash": input_hash,
            "config": result.config.model_dump(mode="json"),
            "clusterCount": result.cluster_count,
            "nodeCount": result.graph.number_of_nodes(),
            "edgeCount": result.graph.number_of_edges(),
            "stageNodeCounts": result.stage_node_counts,
            "componentModularity": result.component_modularity,
        },
    }


def write_result(
    result: NetworkResult,
    output_dir: Path,
    input_hash: str | None = None,
) -> Path:
    """Write the result document to ``output_dir`` and return its path."""
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M")
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{RESULT_FILENAME_PREFIX}_{timestamp}.json"
    content = json.dumps(
        result_to_dict(result, input_hash=input_hash),
        ensure_ascii=False,
        indent=2,
    )
    path.write_text(content, encoding="utf-8")
    return path
