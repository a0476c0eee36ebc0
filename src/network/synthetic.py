"""Synthetic directed friendship network with groups, popularity and reciprocity.

Uses a degree-corrected stochastic block model (Karrer & Newman 2011) for
initiated ties, then returns each one-sided tie with probability
`reciprocity`, which is what gives the mutual graph its community structure.
"""

import logging

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import connected_components

from src.config.analysis import AnalysisConfig
from src.network.degree_correction import sample_theta
from src.network.errors import NetworkGenerationError
from src.network.types import AdjacencyMatrix

log = logging.getLogger(__name__)

# Zipf exponent for sociability heterogeneity
DEGREE_CORRECTION_ALPHA = 1.0


def assign_groups(n: int, K: int) -> np.ndarray:
    """Split n people into K contiguous groups whose sizes differ by at most one."""
    return (np.arange(n) * K) // n


def build_probability_matrix(
    block_assignments: np.ndarray, p_in: float, p_out: float, theta: np.ndarray
) -> np.ndarray:
    """Build the tie probability matrix.

    P[i,j] = theta[i] * theta[j] * omega[group[i], group[j]]
    where omega is p_in for same-group, p_out for different-group.

    Returns:
        Probability matrix of shape (n, n) with values in [0, 1] and a zero
        diagonal.
    """
    same_group = block_assignments[:, None] == block_assignments[None, :]
    block_probs = np.where(same_group, p_in, p_out)

    P = np.outer(theta, theta) * block_probs

    # Degree correction can push above 1 for very sociable people
    np.clip(P, 0.0, 1.0, out=P)
    np.fill_diagonal(P, 0.0)

    return P


def sample_ties(
    P: np.ndarray, reciprocity: float, rng: np.random.Generator
) -> np.ndarray:
    """Sample initiated ties from P, then reciprocate one-sided ties.

    Returns:
        Dense (n, n) int8 matrix with zero diagonal.
    """
    n = P.shape[0]
    ties = rng.random((n, n)) < P
    one_sided = ties & ~ties.T
    returned = one_sided & (rng.random((n, n)) < reciprocity)
    ties = ties | returned.T
    np.fill_diagonal(ties, False)
    return ties.astype(np.int8)


def validate_network(ties: np.ndarray) -> list[str]:
    """Validate a sampled network.

    Checks:
    1. No self-loops
    2. Weak connectivity
    3. At least one reciprocated tie

    Returns:
        List of error strings (empty = valid network).
    """
    errors: list[str] = []

    if np.diag(ties).any():
        errors.append("Self-loops detected")

    n_components, _ = connected_components(
        csr_matrix(ties), directed=True, connection="weak"
    )
    if n_components != 1:
        errors.append(f"Not weakly connected: {n_components} components found")

    if not (ties & ties.T).any():
        errors.append("No reciprocated ties")

    return errors


def node_labels(n: int, prefix: str) -> tuple[str, ...]:
    """Zero-padded labels like P01..P30 that sort in node order."""
    width = max(2, len(str(n)))
    return tuple(f"{prefix}{i + 1:0{width}d}" for i in range(n))


def generate_social_network(
    config: AnalysisConfig, max_retries: int = 10
) -> AdjacencyMatrix:
    """Generate a valid synthetic friendship network.

    Retries with an incremented seed until validate_network passes.

    Args:
        config: Full analysis configuration (uses config.network and seed).
        max_retries: Maximum generation attempts before raising error.

    Returns:
        AdjacencyMatrix with labels from node_labels.

    Raises:
        NetworkGenerationError: If no valid network produced after max_retries.
    """
    net = config.network
    groups = assign_groups(net.n, net.K)
    labels = node_labels(net.n, net.label_prefix)
    last_errors: list[str] = []

    for attempt in range(max_retries):
        rng = np.random.default_rng(config.seed + attempt)

        theta = sample_theta(groups, DEGREE_CORRECTION_ALPHA, rng)
        P = build_probability_matrix(groups, net.p_in, net.p_out, theta)
        ties = sample_ties(P, net.reciprocity, rng)

        errors = validate_network(ties)
        if not errors:
            log.info(
                "Network generated on attempt %d (n=%d, K=%d, ties=%d)",
                attempt, net.n, net.K, int(ties.sum()),
            )
            return AdjacencyMatrix.from_arrays(labels, labels, ties)

        last_errors = errors
        log.warning(
            "Network generation attempt %d failed: %s",
            attempt,
            "; ".join(errors),
        )

    raise NetworkGenerationError(
        f"Failed to generate valid network after {max_retries} attempts. "
        f"Last errors: {'; '.join(last_errors)}"
    )
