"""Degree correction parameter sampling following Zipf's law (Karrer & Newman 2011)."""

import numpy as np


def sample_theta(
    block_assignments: np.ndarray, alpha: float, rng: np.random.Generator
) -> np.ndarray:
    """Sample per-person sociability parameters from a Zipf distribution.

    A single theta_i scales both the ties a person initiates and the ties
    they receive. Each group's theta values are normalized to sum to the
    group size, preserving the expected tie count of the uncorrected model.

    Args:
        block_assignments: Group index per person, shape (n,).
        alpha: Power-law exponent (1.0 is classic Zipf).
        rng: numpy random Generator for reproducibility.

    Returns:
        Array of shape (n,) with per-person degree correction parameters.
    """
    theta = np.zeros(len(block_assignments), dtype=np.float64)

    for b in np.unique(block_assignments):
        members = np.flatnonzero(block_assignments == b)
        size = len(members)

        # theta_i proportional to 1/rank^alpha
        ranks = np.arange(1, size + 1, dtype=np.float64)
        raw = 1.0 / (ranks**alpha)

        # Randomize which person gets which rank
        rng.shuffle(raw)

        theta[members] = raw * (size / raw.sum())

    return theta
