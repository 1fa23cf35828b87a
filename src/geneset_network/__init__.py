"""Similarity networks of enriched gene sets: pruning, clustering and labeling."""

__version__ = "0.1.0"
