"""Pairwise overlap and Jaccard scores between gene sets.

Generates every unordered pair of items (canonical ordering: id_a < id_b)
and scores it by member overlap.  The result is a complete, symmetric
matrix without diagonal entries.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from geneset_network.errors import InvalidInput
from geneset_network.network.items import Item, index_items


@dataclass(frozen=True)
class PairScore:
    """Overlap statistics for one unordered pair.

    Attributes:
        overlap: Number of shared members.
        jaccard: ``overlap / |union|``, in ``[0, 1]``.
    """

    overlap: int
    jaccard: float


def _canonicalize(id_a: str, id_b: str) -> tuple[str, str]:
    """Ensure canonical ordering (a < b) for a pair of item IDs."""
    if id_a > id_b:
        return (id_b, id_a)
    return (id_a, id_b)


@dataclass(frozen=True)
class SimilarityMatrix:
    """Symmetric pair -> ``PairScore`` mapping over a fixed set of items.

    Attributes:
        identifiers: Sorted item identifiers covered by the matrix.
        scores: Scores keyed by canonically ordered pairs.
    """

    identifiers: tuple[str, ...]
    scores: dict[tuple[str, str], PairScore] = field(default_factory=dict)

    def get(self, id_a: str, id_b: str) -> PairScore:
        """Return the score of a pair, in either argument order.

        Raises:
            KeyError: For the diagonal (``id_a == id_b``) or unknown IDs.
        """
        if id_a == id_b:
            raise KeyError(f"Diagonal entry ({id_a!r}, {id_b!r}) is not defined")
        return self.scores[_canonicalize(id_a, id_b)]

    def jaccard(self, id_a: str, id_b: str) -> float:
        return self.get(id_a, id_b).jaccard

    def overlap(self, id_a: str, id_b: str) -> int:
        return self.get(id_a, id_b).overlap

    def pairs(self) -> Iterator[tuple[str, str, PairScore]]:
        """Yield ``(id_a, id_b, score)`` for every pair in sorted order."""
        for (id_a, id_b), score in sorted(self.scores.items()):
            yield id_a, id_b, score

    def __len__(self) -> int:
        return len(self.scores)


def jaccard_score(members_a: frozenset | set, members_b: frozenset | set) -> PairScore:
    """Score two member sets by overlap count and Jaccard index.

    Raises:
        InvalidInput: If both sets are empty (the index is undefined).
    """
    overlap = len(members_a & members_b)
    union = len(members_a) + len(members_b) - overlap
    if union == 0:
        raise InvalidInput("Jaccard index is undefined for two empty member sets")
    return PairScore(overlap=overlap, jaccard=overlap / union)


def compute_similarity(members_by_id: Mapping[str, Iterable]) -> SimilarityMatrix:
    """Compute the complete similarity matrix for a set of items.

    Args:
        members_by_id: Item identifier -> member IDs, restricted to the
            items retained upstream.

    Returns:
        A ``SimilarityMatrix`` with one entry per unordered pair.

    Raises:
        InvalidInput: If a pair of empty member sets is encountered.
    """
    identifiers = tuple(sorted(members_by_id))
    sets = {item_id: frozenset(members_by_id[item_id]) for item_id in identifiers}

    scores: dict[tuple[str, str], PairScore] = {}
    for i in range(len(identifiers)):
        for j in range(i + 1, len(identifiers)):
            id_a, id_b = identifiers[i], identifiers[j]
            try:
                scores[(id_a, id_b)] = jaccard_score(sets[id_a], sets[id_b])
            except InvalidInput as e:
                raise InvalidInput(f"Cannot score pair ({id_a!r}, {id_b!r}): {e}") from e

    return SimilarityMatrix(identifiers=identifiers, scores=scores)


def similarity_from_items(items: Iterable[Item]) -> SimilarityMatrix:
    """Convenience wrapper over ``compute_similarity`` for ``Item`` records."""
    by_id = index_items(items)
    return compute_similarity({item_id: item.members for item_id, item in by_id.items()})
