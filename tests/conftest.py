"""Shared test fixtures."""

import json
import logging
from pathlib import Path

import networkx as nx
import pytest
import structlog

from geneset_network.network.items import Direction, Item, make_item


def _triangle_members(core: str, extra: str) -> set[str]:
    return {f"{core}{i}" for i in range(1, 5)} | {extra}


@pytest.fixture
def two_triangle_items() -> list[Item]:
    """Six gene sets forming two tight triangles joined by one weaker edge.

    Within each triangle pairs share 4 genes (Jaccard >= 0.5).  The
    bridge KEGG_DNA_REPAIR -- KEGG_T_CELL_ACTIVATION shares 3 genes
    (Jaccard 3/11).  All other cross-triangle pairs share nothing.
    """
    bridge = {"x1", "x2", "x3"}
    return [
        make_item("KEGG_DNA_REPAIR", {f"a{i}" for i in range(1, 5)} | bridge, 0.001, Direction.UP),
        make_item("REACTOME_DNA_REPAIR", _triangle_members("a", "b1"), 0.004, Direction.UP),
        make_item("GOBP_DNA_REPLICATION", _triangle_members("a", "c1"), 0.02, Direction.DOWN),
        make_item("KEGG_T_CELL_ACTIVATION", {f"d{i}" for i in range(1, 5)} | bridge, 0.003, Direction.DOWN),
        make_item("REACTOME_T_CELL_RECEPTOR", _triangle_members("d", "e1"), 0.01, Direction.DOWN),
        make_item("GOBP_T_CELL_DIFFERENTIATION", _triangle_members("d", "f1"), 0.03, Direction.MIXED),
    ]


@pytest.fixture
def make_graph():
    """Factory building a graph whose nodes carry ``item`` records."""

    def _make(edges: list[tuple[str, str]], isolated: list[str] | None = None) -> nx.Graph:
        G = nx.Graph()
        for node in sorted({n for e in edges for n in e} | set(isolated or [])):
            G.add_node(node, item=make_item(node, {node}, 0.01))
        for u, v in edges:
            G.add_edge(u, v, weight=1, jaccard=0.5)
        return G

    return _make


@pytest.fixture
def sample_enrichment_json() -> dict:
    """Return a small valid enrichment file dict for unit tests."""
    return {
        "items": [
            {"id": "KEGG_DNA_REPAIR", "members": ["BRCA1", "BRCA2", "RAD51", "ATM"], "score": 0.001, "direction": "Up"},
            {"id": "REACTOME_DNA_REPAIR", "members": ["BRCA1", "BRCA2", "RAD51", "XRCC1"], "score": 0.004, "direction": "Up"},
            {"id": "GOBP_DNA_REPAIR_COMPLEX", "members": ["BRCA1", "BRCA2", "RAD51", "MRE11"], "score": 0.02, "direction": "Mixed"},
            {"id": "KEGG_RIBOSOME", "members": ["RPL3", "RPL4", "RPS6"], "score": 0.03, "direction": "Down"},
            {"id": "HALLMARK_HYPOXIA", "members": [1, 2, 3], "score": 0.2, "direction": "Down"},
        ],
        "metadata": {"source": "unit-test", "comparison": "treated_vs_control"},
    }


@pytest.fixture
def sample_enrichment_file(tmp_path: Path, sample_enrichment_json: dict) -> Path:
    """Write the sample enrichment dict to a JSON file and return its path."""
    path = tmp_path / "enrichment.json"
    path.write_text(json.dumps(sample_enrichment_json), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo any logging configuration a test installs (CLI runs configure it)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
