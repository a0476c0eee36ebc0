"""Tests for synthetic friendship network generation and degree correction."""

from dataclasses import replace
from unittest.mock import patch

import numpy as np
import pytest
import scipy.sparse
from scipy.sparse.csgraph import connected_components

from src.config.defaults import ANCHOR_CONFIG
from src.config.analysis import AnalysisConfig, NetworkConfig
from src.network.degree_correction import sample_theta
from src.network.errors import NetworkGenerationError
from src.network.synthetic import (
    assign_groups,
    build_probability_matrix,
    generate_social_network,
    node_labels,
    sample_ties,
    validate_network,
)
from src.network.types import AdjacencyMatrix


class TestDegreeCorrection:
    """Tests for theta sampling and normalization."""

    def test_theta_per_group_normalization(self) -> None:
        groups = assign_groups(10, 3)
        theta = sample_theta(groups, 1.0, np.random.default_rng(42))
        for g in range(3):
            members = groups == g
            assert theta[members].sum() == pytest.approx(members.sum())

    def test_theta_all_positive(self) -> None:
        theta = sample_theta(assign_groups(30, 3), 1.0, np.random.default_rng(0))
        assert (theta > 0).all()


class TestGroupsAndLabels:

    def test_group_sizes_differ_by_at_most_one(self) -> None:
        sizes = np.bincount(assign_groups(10, 3))
        assert sizes.tolist() == [4, 3, 3]

    def test_labels_zero_padded(self) -> None:
        assert node_labels(3, "P") == ("P01", "P02", "P03")
        assert node_labels(120, "X")[0] == "X001"


class TestProbabilityMatrix:

    def test_no_self_loops_and_range(self) -> None:
        groups = assign_groups(30, 3)
        theta = sample_theta(groups, 1.0, np.random.default_rng(42))
        P = build_probability_matrix(groups, 0.35, 0.04, theta)
        assert P.shape == (30, 30)
        assert np.all(np.diag(P) == 0.0)
        assert P.min() >= 0.0 and P.max() <= 1.0

    def test_in_group_probability_dominates(self) -> None:
        groups = assign_groups(30, 3)
        P = build_probability_matrix(groups, 0.35, 0.04, np.ones(30))
        assert P[0, 1] == pytest.approx(0.35)
        assert P[0, 29] == pytest.approx(0.04)


class TestSampleTies:

    def test_full_reciprocity_gives_symmetric_matrix(self) -> None:
        P = np.full((12, 12), 0.3)
        np.fill_diagonal(P, 0.0)
        ties = sample_ties(P, 1.0, np.random.default_rng(1))
        np.testing.assert_array_equal(ties, ties.T)

    def test_no_self_loops(self) -> None:
        P = np.ones((5, 5))
        ties = sample_ties(P, 0.5, np.random.default_rng(1))
        assert np.diag(ties).sum() == 0


class TestGenerateSocialNetwork:
    """Tests for end-to-end synthetic generation."""

    def test_anchor_config_generates_valid_network(self) -> None:
        adj = generate_social_network(ANCHOR_CONFIG)
        assert isinstance(adj, AdjacencyMatrix)
        assert adj.n == 30
        assert adj.labels[0] == "P01"
        assert validate_network(adj.values) == []

    def test_network_is_weakly_connected(self) -> None:
        adj = generate_social_network(ANCHOR_CONFIG)
        n_components, _ = connected_components(
            scipy.sparse.csr_matrix(adj.values), directed=True, connection="weak"
        )
        assert n_components == 1

    def test_reproducibility_same_seed(self) -> None:
        a1 = generate_social_network(ANCHOR_CONFIG)
        a2 = generate_social_network(ANCHOR_CONFIG)
        np.testing.assert_array_equal(a1.values, a2.values)

    def test_different_seed_differs(self) -> None:
        a1 = generate_social_network(ANCHOR_CONFIG)
        a2 = generate_social_network(replace(ANCHOR_CONFIG, seed=7))
        assert not np.array_equal(a1.values, a2.values)

    def test_validation_rejects_disconnected_network(self) -> None:
        ties = np.array(
            [
                [0, 1, 0, 0],
                [1, 0, 0, 0],
                [0, 0, 0, 1],
                [0, 0, 1, 0],
            ],
            dtype=np.int8,
        )
        errors = validate_network(ties)
        assert any("Not weakly connected" in e for e in errors)

    def test_raises_after_max_retries(self) -> None:
        cfg = AnalysisConfig(network=NetworkConfig(p_in=0.0, p_out=0.0))
        with pytest.raises(NetworkGenerationError, match="after 2 attempts"):
            generate_social_network(cfg, max_retries=2)

    def test_retry_on_failure(self) -> None:
        """Retry logic moves on to the next seed when validation fails."""
        call_count = 0
        original_validate = validate_network

        def mock_validate(*args, **kwargs):
            nonlocal call_count
            call_count += 1
            if call_count <= 2:
                return ["Simulated failure"]
            return original_validate(*args, **kwargs)

        with patch("src.network.synthetic.validate_network", side_effect=mock_validate):
            adj = generate_social_network(ANCHOR_CONFIG)

        assert call_count >= 3
        assert adj.n == 30
