"""Similarity graph construction, pruning and the pipeline driver."""
