"""Tests for the analysis configuration system."""

import json
import re

import numpy as np
import pytest
from dacite import UnexpectedDataError
from dataclasses import FrozenInstanceError, replace

from src.config import (
    ANCHOR_CONFIG,
    AnalysisConfig,
    CentralityConfig,
    CommunityConfig,
    NetworkConfig,
    PlotConfig,
    config_from_json,
    config_hash,
    config_to_json,
    full_config_hash,
    matrix_hash,
    metrics_config_hash,
)


class TestAnchorConfigDefaults:
    """ANCHOR_CONFIG has the pinned defaults."""

    def test_anchor_config_defaults(self):
        assert ANCHOR_CONFIG.network.n == 30
        assert ANCHOR_CONFIG.network.K == 3
        assert ANCHOR_CONFIG.centrality.damping == 0.85
        assert ANCHOR_CONFIG.centrality.normalized_betweenness is False
        assert ANCHOR_CONFIG.community.max_girvan_newman_levels is None
        assert ANCHOR_CONFIG.seed == 42

    def test_teleport_probability_is_complement_of_damping(self):
        assert 1 - ANCHOR_CONFIG.centrality.damping == pytest.approx(0.15)


class TestConfigImmutability:
    """Frozen dataclasses prevent mutation."""

    def test_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ANCHOR_CONFIG.seed = 99  # type: ignore[misc]

    def test_centrality_config_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ANCHOR_CONFIG.centrality.damping = 0.5  # type: ignore[misc]


class TestConfigRoundTrip:
    """JSON serialization round-trip preserves identity."""

    def test_config_round_trip_hash(self):
        restored = config_from_json(config_to_json(ANCHOR_CONFIG))
        assert config_hash(ANCHOR_CONFIG) == config_hash(restored)

    def test_round_trip_keeps_optional_levels_and_tags(self):
        cfg = replace(
            ANCHOR_CONFIG,
            community=CommunityConfig(max_girvan_newman_levels=3),
            tags=("school", "week1"),
        )
        restored = config_from_json(config_to_json(cfg))
        assert restored.community.max_girvan_newman_levels == 3
        assert restored.tags == ("school", "week1")

    def test_unknown_key_rejected(self):
        data = json.loads(config_to_json(ANCHOR_CONFIG))
        data["centrality"]["alpha"] = 0.9
        with pytest.raises(UnexpectedDataError):
            config_from_json(json.dumps(data))

    def test_partial_json_uses_defaults(self):
        cfg = config_from_json('{"seed": 7, "centrality": {"damping": 0.9}}')
        assert cfg.seed == 7
        assert cfg.centrality.damping == 0.9
        assert cfg.network == NetworkConfig()


class TestConfigHashing:
    """Hashing separates numeric identity from presentation."""

    def test_metrics_hash_ignores_plot_and_description(self):
        cfg2 = replace(
            ANCHOR_CONFIG, plot=PlotConfig(top_k=3), description="slides"
        )
        assert metrics_config_hash(ANCHOR_CONFIG) == metrics_config_hash(cfg2)
        assert full_config_hash(ANCHOR_CONFIG) != full_config_hash(cfg2)

    def test_metrics_hash_tracks_damping(self):
        cfg2 = replace(ANCHOR_CONFIG, centrality=CentralityConfig(damping=0.5))
        assert metrics_config_hash(ANCHOR_CONFIG) != metrics_config_hash(cfg2)

    def test_config_hash_is_hex_string(self):
        h = full_config_hash(ANCHOR_CONFIG)
        assert re.match(r"^[0-9a-f]{16}$", h)


class TestConfigValidation:
    """Cross-parameter validation catches invalid configs."""

    def test_damping_must_be_open_unit_interval(self):
        with pytest.raises(ValueError, match="damping"):
            AnalysisConfig(centrality=CentralityConfig(damping=1.0))

    def test_probabilities_in_range(self):
        with pytest.raises(ValueError, match="p_in"):
            AnalysisConfig(network=NetworkConfig(p_in=1.5))
        with pytest.raises(ValueError, match="reciprocity"):
            AnalysisConfig(network=NetworkConfig(reciprocity=-0.1))

    def test_more_groups_than_people(self):
        with pytest.raises(ValueError, match="must be >= K"):
            AnalysisConfig(network=NetworkConfig(n=2, K=3))

    def test_girvan_newman_levels_positive(self):
        with pytest.raises(ValueError, match="max_girvan_newman_levels"):
            AnalysisConfig(community=CommunityConfig(max_girvan_newman_levels=0))

    def test_node_size_range(self):
        with pytest.raises(ValueError, match="min_node_size"):
            AnalysisConfig(plot=PlotConfig(min_node_size=500, max_node_size=100))


class TestMatrixHash:
    """Input fingerprints depend on labels and ties, not dtype."""

    def test_dtype_does_not_matter(self):
        values = np.array([[0, 1], [0, 0]])
        assert matrix_hash(["A", "B"], values) == matrix_hash(
            ["A", "B"], values.astype(np.float64) * 3
        )

    def test_labels_matter(self):
        values = np.array([[0, 1], [0, 0]])
        assert matrix_hash(["A", "B"], values) != matrix_hash(["B", "A"], values)

    def test_ties_matter(self):
        a = np.array([[0, 1], [0, 0]])
        b = np.array([[0, 1], [1, 0]])
        assert matrix_hash(["A", "B"], a) != matrix_hash(["A", "B"], b)
