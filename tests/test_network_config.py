"""Tests for network configuration loading and validation."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from geneset_network.errors import InvalidConfiguration, InvalidThreshold, NetworkError
from geneset_network.network.config import (
    GraphConfig,
    LabelConfig,
    NetworkConfig,
    PruningConfig,
    build_network_config,
    check_min_size,
    check_threshold,
    load_network_config,
)

REPO_CONFIG = Path(__file__).resolve().parents[1] / "config" / "network.yaml"


class TestDefaultValues:
    """Test default configuration values when no YAML exists."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        cfg = load_network_config(tmp_path / "nonexistent.yaml")
        assert cfg == NetworkConfig()

    def test_defaults(self) -> None:
        cfg = NetworkConfig()
        assert cfg.graph.jaccard_threshold == 0.2
        assert cfg.pruning.min_cluster_size == 3
        assert cfg.community.split is True
        assert cfg.labeling.min_term_frequency == 2
        assert cfg.labeling.max_terms == 4
        assert cfg.labeling.delimiter == "_"
        assert cfg.significance_cutoff is None


class TestLoadFromYaml:
    """Test loading configuration from a YAML file."""

    def test_partial_override(self, tmp_path: Path) -> None:
        config_path = tmp_path / "network.yaml"
        config_path.write_text(
            yaml.dump({"graph": {"jaccard_threshold": 0.35}, "labeling": {"max_terms": 2}})
        )
        cfg = load_network_config(config_path)
        assert cfg.graph.jaccard_threshold == 0.35
        assert cfg.labeling.max_terms == 2
        assert cfg.pruning.min_cluster_size == 3

    def test_load_empty_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")
        assert load_network_config(config_path) == NetworkConfig()

    def test_stopword_lists_from_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "network.yaml"
        config_path.write_text(yaml.dump({"labeling": {"extra_stopwords": ["Cell", "cycle"]}}))
        cfg = load_network_config(config_path)
        assert cfg.labeling.extra_stopwords == frozenset({"cell", "cycle"})
        assert {"cell", "cycle"} <= cfg.labeling.stopwords

    def test_invalid_value_raises_configuration_error(self, tmp_path: Path) -> None:
        config_path = tmp_path / "bad.yaml"
        config_path.write_text(yaml.dump({"graph": {"jaccard_threshold": 1.5}}))
        with pytest.raises(InvalidConfiguration):
            load_network_config(config_path)

    def test_invalid_threshold_raises_threshold_error(self, tmp_path: Path) -> None:
        config_path = tmp_path / "bad.yaml"
        config_path.write_text(yaml.dump({"graph": {"jaccard_threshold": 1.5}}))
        with pytest.raises(InvalidThreshold):
            load_network_config(config_path)

    def test_unreadable_path_raises_configuration_error(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidConfiguration, match="Cannot load"):
            load_network_config(tmp_path)

    def test_malformed_yaml_raises_configuration_error(self, tmp_path: Path) -> None:
        config_path = tmp_path / "broken.yaml"
        config_path.write_text("graph: [unclosed\n")
        with pytest.raises(InvalidConfiguration, match="Cannot load"):
            load_network_config(config_path)

    def test_non_mapping_yaml_rejected(self, tmp_path: Path) -> None:
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- 0.2\n- 3\n")
        with pytest.raises(InvalidConfiguration, match="mapping"):
            load_network_config(config_path)

    def test_load_repo_config(self) -> None:
        """The shipped config/network.yaml should load without errors."""
        cfg = load_network_config(REPO_CONFIG)
        assert cfg.graph.jaccard_threshold == 0.2
        assert cfg.pruning.min_cluster_size == 3


class TestValidation:
    """Out-of-range parameters are rejected before any computation."""

    @pytest.mark.parametrize("threshold", [0.0, 1.0, -0.5, 3.0])
    def test_threshold_range(self, threshold: float) -> None:
        with pytest.raises(ValidationError):
            GraphConfig(jaccard_threshold=threshold)
        with pytest.raises(InvalidThreshold):
            check_threshold(threshold)

    def test_threshold_accepted(self) -> None:
        assert check_threshold(0.5) == 0.5
        assert GraphConfig(jaccard_threshold=0.01).jaccard_threshold == 0.01

    @pytest.mark.parametrize("min_size", [1, 0, -1, True])
    def test_min_size_range(self, min_size) -> None:
        with pytest.raises(InvalidConfiguration):
            check_min_size(min_size)

    def test_min_size_in_model(self) -> None:
        with pytest.raises(ValidationError):
            PruningConfig(min_cluster_size=1)
        assert PruningConfig(min_cluster_size=2).min_cluster_size == 2

    @pytest.mark.parametrize(
        "overrides",
        [{"min_term_frequency": 0}, {"max_terms": 0}, {"delimiter": ""}],
    )
    def test_label_config_ranges(self, overrides: dict) -> None:
        with pytest.raises(ValidationError):
            LabelConfig(**overrides)

    @pytest.mark.parametrize("cutoff", [0.0, 1.5, -0.1])
    def test_significance_cutoff_range(self, cutoff: float) -> None:
        with pytest.raises(InvalidConfiguration):
            build_network_config({"significance_cutoff": cutoff})

    def test_build_network_config(self) -> None:
        cfg = build_network_config({"significance_cutoff": 0.05, "community": {"split": False}})
        assert cfg.significance_cutoff == 0.05
        assert cfg.community.split is False

    def test_build_maps_threshold_to_threshold_error(self) -> None:
        with pytest.raises(InvalidThreshold):
            build_network_config({"graph": {"jaccard_threshold": 1.5}})

    def test_build_errors_are_network_errors(self) -> None:
        with pytest.raises(NetworkError):
            build_network_config({"pruning": {"min_cluster_size": 1}})
        with pytest.raises(NetworkError):
            build_network_config({"labeling": {"max_terms": 0}})

    def test_default_keeps_every_name_token(self) -> None:
        assert LabelConfig().strip_source_tag is False
