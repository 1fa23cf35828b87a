"""Network pipeline configuration with sensible defaults.

All parameters can be overridden via ``config/network.yaml``.
If the file does not exist, defaults are used.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ValidationError, field_validator

from geneset_network.errors import InvalidConfiguration, InvalidThreshold
from geneset_network.labeling.stopwords import DOMAIN_STOPWORDS, GENERIC_STOPWORDS

DEFAULT_JACCARD_THRESHOLD = 0.2
DEFAULT_MIN_CLUSTER_SIZE = 3


def check_threshold(threshold: float) -> float:
    """Reject a Jaccard threshold outside the open interval (0, 1)."""
    if not 0.0 < threshold < 1.0:
        raise InvalidThreshold(
            f"Jaccard threshold must lie strictly between 0 and 1, got {threshold!r}"
        )
    return threshold


def check_min_size(min_size: int) -> int:
    """Reject a minimum cluster size below 2."""
    if isinstance(min_size, bool) or not isinstance(min_size, int) or min_size < 2:
        raise InvalidConfiguration(
            f"Minimum cluster size must be an integer >= 2, got {min_size!r}"
        )
    return min_size


class GraphConfig(BaseModel):
    """Parameters for building the similarity graph."""

    jaccard_threshold: float = DEFAULT_JACCARD_THRESHOLD

    @field_validator("jaccard_threshold")
    @classmethod
    def _threshold_in_range(cls, value: float) -> float:
        return check_threshold(value)


class PruningConfig(BaseModel):
    """Minimum size of a component (or community) kept as a cluster."""

    min_cluster_size: int = DEFAULT_MIN_CLUSTER_SIZE

    @field_validator("min_cluster_size")
    @classmethod
    def _min_size_in_range(cls, value: int) -> int:
        return check_min_size(value)


class CommunityConfig(BaseModel):
    """Community splitting of the pruned components."""

    split: bool = True


class LabelConfig(BaseModel):
    """Parameters for frequency-based cluster labeling."""

    delimiter: str = "_"
    strip_source_tag: bool = False
    min_term_frequency: int = 2
    max_terms: int = 4
    domain_stopwords: frozenset[str] = DOMAIN_STOPWORDS
    generic_stopwords: frozenset[str] = GENERIC_STOPWORDS
    extra_stopwords: frozenset[str] = frozenset()

    @field_validator("delimiter")
    @classmethod
    def _delimiter_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("delimiter must not be empty")
        return value

    @field_validator("min_term_frequency", "max_terms")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"must be >= 1, got {value}")
        return value

    @field_validator("domain_stopwords", "generic_stopwords", "extra_stopwords")
    @classmethod
    def _lowercase_words(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(word.lower() for word in value)

    @property
    def stopwords(self) -> frozenset[str]:
        """Union of domain, generic and extra stopwords."""
        return self.domain_stopwords | self.generic_stopwords | self.extra_stopwords


class NetworkConfig(BaseModel):
    """Top-level network configuration combining all sub-configs."""

    significance_cutoff: float | None = None
    graph: GraphConfig = GraphConfig()
    pruning: PruningConfig = PruningConfig()
    community: CommunityConfig = CommunityConfig()
    labeling: LabelConfig = LabelConfig()

    @field_validator("significance_cutoff")
    @classmethod
    def _cutoff_in_range(cls, value: float | None) -> float | None:
        if value is not None and not 0.0 < value <= 1.0:
            raise ValueError(f"significance_cutoff must lie in (0, 1], got {value}")
        return value


def build_network_config(data: Mapping[str, Any]) -> NetworkConfig:
    """Validate a raw mapping into a ``NetworkConfig``.

    This and ``load_network_config`` are the validated entry points:
    constructing the models directly raises pydantic's ``ValidationError``
    instead of the ``NetworkError`` hierarchy.

    Raises:
        InvalidThreshold: If the Jaccard threshold is outside (0, 1).
        InvalidConfiguration: If any other value is out of range.
    """
    try:
        return NetworkConfig(**data)
    except ValidationError as e:
        structlog.get_logger().error("network_config_invalid", errors=e.error_count())
        if any(tuple(err["loc"]) == ("graph", "jaccard_threshold") for err in e.errors()):
            raise InvalidThreshold(f"Invalid network configuration: {e}") from e
        raise InvalidConfiguration(f"Invalid network configuration: {e}") from e


def load_network_config(path: Path) -> NetworkConfig:
    """Load network configuration from a YAML file.

    If the file does not exist, returns a ``NetworkConfig`` with all
    default values.  Partial overrides are supported -- only the keys
    present in the YAML file will override defaults.

    Raises:
        InvalidConfiguration: If the file cannot be read or parsed, or
            holds out-of-range values.
    """
    if not path.exists():
        return NetworkConfig()

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise InvalidConfiguration(f"Cannot load network config {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfiguration(f"Network config {path} must be a mapping")
    return build_network_config(data)
