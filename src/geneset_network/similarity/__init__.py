"""Pairwise set-overlap scoring."""

from .index import PairScore, SimilarityMatrix, compute_similarity, jaccard_score, similarity_from_items

__all__ = [
    "compute_similarity",
    "jaccard_score",
    "PairScore",
    "SimilarityMatrix",
    "similarity_from_items",
]
