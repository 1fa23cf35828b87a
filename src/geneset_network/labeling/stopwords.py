"""Stopword sets used when labeling clusters.

Two explicit sets: ``DOMAIN_STOPWORDS`` (gene set library tags and
generic biological/process vocabulary that carries no cluster-specific
meaning) and ``GENERIC_STOPWORDS`` (English function words).  Both can
be replaced through ``LabelConfig`` or loaded from a YAML file.
"""

from __future__ import annotations

from pathlib import Path

import yaml

DOMAIN_STOPWORDS: frozenset[str] = frozenset(
    {
        # Gene set library tags
        "kegg",
        "reactome",
        "biocarta",
        "hallmark",
        "pid",
        "wp",
        "go",
        "gobp",
        "gocc",
        "gomf",
        "bp",
        "cc",
        "mf",
        # Generic biological/process terms
        "pathway",
        "pathways",
        "process",
        "processes",
        "regulation",
        "regulated",
        "response",
        "activity",
        "positive",
        "negative",
        "cellular",
        "involved",
        "mediated",
        "dependent",
        "protein",
        "proteins",
        "gene",
        "genes",
        "complex",
        "binding",
        "signaling",
        "signalling",
        "system",
        "metabolic",
        "metabolism",
        "biosynthetic",
        "biosynthesis",
        "catabolic",
        "compound",
        "molecule",
        "type",
        "up",
        "dn",
        "down",
    }
)

GENERIC_STOPWORDS: frozenset[str] = frozenset(
    {
        "a",
        "an",
        "and",
        "are",
        "as",
        "at",
        "be",
        "by",
        "for",
        "from",
        "has",
        "have",
        "in",
        "into",
        "is",
        "it",
        "its",
        "of",
        "on",
        "or",
        "other",
        "that",
        "the",
        "to",
        "via",
        "was",
        "were",
        "with",
        "without",
    }
)


def load_stopwords(config_path: Path) -> tuple[frozenset[str], frozenset[str]]:
    """Load domain and generic stopword lists from a YAML file.

    The file holds two optional keys, ``domain`` and ``generic``, each a
    list of words.  A missing key falls back to the built-in set.

    Args:
        config_path: Path to the stopwords YAML file.

    Returns:
        ``(domain_stopwords, generic_stopwords)``, lower-cased.
        Returns the built-in sets if the file doesn't exist or is empty.
    """
    if not config_path.exists():
        return DOMAIN_STOPWORDS, GENERIC_STOPWORDS

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if not raw:
        return DOMAIN_STOPWORDS, GENERIC_STOPWORDS

    domain = raw.get("domain")
    generic = raw.get("generic")
    return (
        frozenset(w.lower() for w in domain) if domain is not None else DOMAIN_STOPWORDS,
        frozenset(w.lower() for w in generic) if generic is not None else GENERIC_STOPWORDS,
    )
