"""Per-cluster summaries of a network result.

Builds one summary row per cluster (size, label, dominant direction,
best score, members ordered by significance) and formats them for
terminal display.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from geneset_network.network.items import Direction, Item
from geneset_network.network.pipeline import NetworkResult

UNLABELED_TEXT = "(unlabeled)"


@dataclass
class ClusterSummary:
    """Container for one cluster's summary."""

    cluster_id: int
    label: str | None
    size: int
    direction: Direction
    direction_counts: dict[str, int]
    best_score: float
    members: list[str]


def dominant_direction(items: list[Item]) -> Direction:
    """Direction shared by a strict majority of items, else ``MIXED``."""
    if not items:
        return Direction.MIXED
    direction, count = Counter(item.direction for item in items).most_common(1)[0]
    if count * 2 > len(items):
        return direction
    return Direction.MIXED


def summarize_clusters(result: NetworkResult) -> list[ClusterSummary]:
    """Summarize every cluster of a result, in cluster ID order."""
    items_by_cluster: dict[int, list[Item]] = {}
    for node, cluster_id in result.membership.items():
        items_by_cluster.setdefault(cluster_id, []).append(result.graph.nodes[node]["item"])

    summaries: list[ClusterSummary] = []
    for cluster_id in sorted(items_by_cluster):
        items = sorted(items_by_cluster[cluster_id], key=lambda i: (i.score, i.identifier))
        label = result.labels.get(cluster_id)
        summaries.append(
            ClusterSummary(
                cluster_id=cluster_id,
                label=label.text if label is not None else None,
                size=len(items),
                direction=dominant_direction(items),
                direction_counts={
                    d.value: sum(1 for i in items if i.direction == d) for d in Direction
                },
                best_score=items[0].score,
                members=[i.identifier for i in items],
            )
        )
    return summaries


def format_summary(result: NetworkResult) -> str:
    """Format cluster summaries and exclusion counts for terminal display.

    Args:
        result: NetworkResult to format.

    Returns:
        Human-readable string representation of the network.
    """
    lines = [
        "",
        "=" * 60,
        "  Gene Set Network",
        "=" * 60,
        "",
        f"  Clusters:           {result.cluster_count}",
        f"  Clustered sets:     {result.graph.number_of_nodes()}",
        f"  Isolated sets:      {len(result.excluded_isolated)}",
        f"  Minor-cluster sets: {len(result.excluded_minor)}",
        f"  Split remnants:     {len(result.excluded_split)}",
        "",
    ]
    for summary in summarize_clusters(result):
        lines.append(
            f"  [{summary.cluster_id}] {summary.label or UNLABELED_TEXT}"
            f"  (n={summary.size}, {summary.direction.value}, best={summary.best_score:.3g})"
        )
        for member in summary.members:
            lines.append(f"      {member}")
    lines.extend(["=" * 60, ""])
    return "\n".join(lines)
