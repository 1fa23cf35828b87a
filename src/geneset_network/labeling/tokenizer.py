"""Tokenization of gene set names for labeling.

Gene set names are delimiter-joined words, usually led by a source
library tag (``KEGG_CELL_CYCLE``, ``REACTOME_DNA_REPAIR``).  Known tags
are removed as domain stopwords like any other token, so untagged names
(``APOPTOSIS_EXTRINSIC``) keep every word.  Tokens are produced lazily
so the labeler can reduce them with a single frequency count.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from geneset_network.errors import InvalidInput
from geneset_network.network.config import LabelConfig

# Anything that is not a letter (punctuation, digits, underscores)
_NON_LETTER_RE = re.compile(r"[\W\d_]+")


def normalize_token(token: str) -> str:
    """Lower-case a raw token and strip punctuation and digits.

    Args:
        token: A single raw token from a gene set name.

    Returns:
        The cleaned token (possibly empty).
    """
    return _NON_LETTER_RE.sub("", token.lower())


def split_name(name: str, config: LabelConfig) -> list[str]:
    """Split a gene set name into raw tokens.

    The first token is dropped only when ``strip_source_tag`` is set,
    for collections whose tags are not in the stopword lists.

    Raises:
        InvalidInput: If the name is not a string, is empty, or contains
            nothing but delimiters.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput(f"Gene set name must be a non-empty string, got {name!r}")

    tokens = [t for t in name.split(config.delimiter) if t.strip()]
    if not tokens:
        raise InvalidInput(f"Gene set name {name!r} contains no tokens")

    if config.strip_source_tag and len(tokens) > 1:
        tokens = tokens[1:]
    return tokens


def iter_name_tokens(name: str, config: LabelConfig) -> Iterator[str]:
    """Yield the label-candidate tokens of one name, in order."""
    stopwords = config.stopwords
    for raw in split_name(name, config):
        # A raw token may itself hold spaces ("CELL CYCLE")
        for part in raw.split():
            token = normalize_token(part)
            if token and token not in stopwords:
                yield token


def iter_tokens(names: Iterable[str], config: LabelConfig) -> Iterator[str]:
    """Yield the label-candidate tokens of many names, name by name."""
    for name in names:
        yield from iter_name_tokens(name, config)
