"""Item and exclusion records shared by every pipeline stage.

An ``Item`` is one enriched gene set.  It carries a fixed attribute set;
graph nodes reference the record through a single ``item`` attribute
instead of copying loose fields onto the node.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from geneset_network.errors import InvalidInput


class Direction(str, enum.Enum):
    """Effect direction of a gene set relative to the reference condition."""

    UP = "Up"
    DOWN = "Down"
    MIXED = "Mixed"


class ExclusionReason(str, enum.Enum):
    """Why an item was removed from the network."""

    ISOLATED = "isolated"
    MINOR_CLUSTER = "minor_cluster"
    SPLIT_REMNANT = "split_remnant"


@dataclass(frozen=True)
class Item:
    """A gene set with its enrichment result.

    Attributes:
        identifier: Unique gene set name (e.g. ``"KEGG_CELL_CYCLE"``).
        members: Member gene identifiers.  Never empty.
        score: Significance value (FDR); smaller is more significant.
        direction: Effect direction.
    """

    identifier: str
    members: frozenset[str | int]
    score: float
    direction: Direction = Direction.MIXED

    def __post_init__(self) -> None:
        if not self.identifier:
            raise InvalidInput("Item identifier must be a non-empty string")
        if not self.members:
            raise InvalidInput(f"Item {self.identifier!r} has an empty member set")

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class ExcludedItem:
    """An item dropped by a pruning step, kept for reporting.

    Attributes:
        item: The original item record.
        reason: Which step removed it.
        group_id: Shared synthetic id of items removed together as one
            small component (``None`` for isolated items).
    """

    item: Item
    reason: ExclusionReason
    group_id: int | None = None


def make_item(
    identifier: str,
    members: Iterable[str | int],
    score: float = 0.0,
    direction: Direction | str = Direction.MIXED,
) -> Item:
    """Build an ``Item`` from loose values, coercing members and direction."""
    return Item(
        identifier=identifier,
        members=frozenset(members),
        score=float(score),
        direction=Direction(direction),
    )


def index_items(items: Iterable[Item]) -> dict[str, Item]:
    """Map identifier -> item, rejecting duplicate identifiers."""
    by_id: dict[str, Item] = {}
    for item in items:
        if item.identifier in by_id:
            raise InvalidInput(f"Duplicate item identifier {item.identifier!r}")
        by_id[item.identifier] = item
    return by_id
