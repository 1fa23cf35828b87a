"""Tests for pairwise overlap and Jaccard scoring."""

from __future__ import annotations

import itertools

import pytest

from geneset_network.errors import InvalidInput
from geneset_network.network.items import make_item
from geneset_network.similarity import (
    PairScore,
    SimilarityMatrix,
    compute_similarity,
    jaccard_score,
    similarity_from_items,
)


class TestJaccardScore:
    """Tests for scoring a single pair of member sets."""

    def test_partial_overlap(self):
        """Two of four distinct members shared -> 0.5."""
        score = jaccard_score(frozenset({1, 2, 3}), frozenset({2, 3, 4}))
        assert score == PairScore(overlap=2, jaccard=0.5)

    def test_identical_sets(self):
        score = jaccard_score(frozenset({"a", "b"}), frozenset({"a", "b"}))
        assert score.overlap == 2
        assert score.jaccard == 1.0

    def test_disjoint_sets(self):
        score = jaccard_score(frozenset({"a"}), frozenset({"b"}))
        assert score.overlap == 0
        assert score.jaccard == 0.0

    def test_one_empty_set_scores_zero(self):
        """Only one empty set still has a defined (zero) score."""
        score = jaccard_score(frozenset(), frozenset({"a"}))
        assert score.jaccard == 0.0

    def test_both_empty_raises(self):
        with pytest.raises(InvalidInput):
            jaccard_score(frozenset(), frozenset())


class TestComputeSimilarity:
    """Tests for the complete similarity matrix."""

    MEMBERS = {
        "C": {"g1", "g2", "g3", "g4"},
        "A": {"g1", "g2"},
        "B": {"g2", "g3", "g5"},
        "D": {"g9"},
    }

    def test_complete_over_unordered_pairs(self):
        """Every unordered pair appears exactly once."""
        matrix = compute_similarity(self.MEMBERS)
        assert len(matrix) == 6
        assert matrix.identifiers == ("A", "B", "C", "D")
        assert [(a, b) for a, b, _ in matrix.pairs()] == [
            ("A", "B"), ("A", "C"), ("A", "D"), ("B", "C"), ("B", "D"), ("C", "D"),
        ]

    def test_symmetric(self):
        matrix = compute_similarity(self.MEMBERS)
        for a, b in itertools.permutations(self.MEMBERS, 2):
            assert matrix.jaccard(a, b) == matrix.jaccard(b, a)
            assert matrix.overlap(a, b) == matrix.overlap(b, a)

    def test_bounded(self):
        matrix = compute_similarity(self.MEMBERS)
        for _, _, score in matrix.pairs():
            assert 0.0 <= score.jaccard <= 1.0

    def test_values(self):
        matrix = compute_similarity(self.MEMBERS)
        # A={g1,g2}, C={g1..g4}: 2 shared of 4
        assert matrix.get("C", "A") == PairScore(overlap=2, jaccard=0.5)
        # B={g2,g3,g5}, C={g1..g4}: 2 shared of 5
        assert matrix.jaccard("B", "C") == pytest.approx(0.4)
        assert matrix.jaccard("A", "D") == 0.0

    def test_diagonal_not_defined(self):
        matrix = compute_similarity(self.MEMBERS)
        with pytest.raises(KeyError):
            matrix.get("A", "A")

    def test_unknown_id_raises(self):
        matrix = compute_similarity(self.MEMBERS)
        with pytest.raises(KeyError):
            matrix.get("A", "Z")

    def test_two_empty_sets_raise(self):
        with pytest.raises(InvalidInput, match="'E1', 'E2'"):
            compute_similarity({"E1": set(), "E2": [], "A": {"g1"}})

    def test_empty_and_single_input(self):
        assert len(compute_similarity({})) == 0
        matrix = compute_similarity({"A": {"g1"}})
        assert isinstance(matrix, SimilarityMatrix)
        assert len(matrix) == 0

    def test_does_not_modify_input(self):
        members = {"A": {"g1", "g2"}, "B": {"g2"}}
        compute_similarity(members)
        assert members == {"A": {"g1", "g2"}, "B": {"g2"}}


class TestSimilarityFromItems:
    """Tests for the Item-based wrapper."""

    def test_matches_mapping_version(self):
        items = [make_item("A", {1, 2}), make_item("B", {2, 3})]
        matrix = similarity_from_items(items)
        assert matrix.get("A", "B") == PairScore(overlap=1, jaccard=pytest.approx(1 / 3))

    def test_duplicate_identifiers_rejected(self):
        items = [make_item("A", {1}), make_item("A", {2})]
        with pytest.raises(InvalidInput, match="Duplicate"):
            similarity_from_items(items)
