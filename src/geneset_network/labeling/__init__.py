"""Automatic labeling of clusters from gene set names."""
