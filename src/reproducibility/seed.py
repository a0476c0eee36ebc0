"""Seed management for reproducible synthetic networks and layouts.

Synthetic generation and spring layouts take explicit seeds; set_seed covers
anything else that draws from the global Python or NumPy generators.
"""

import random

import numpy as np


def set_seed(seed: int) -> None:
    """Seed the Python random module and NumPy's legacy global RNG.

    Args:
        seed: Master seed value (e.g., 42).
    """
    random.seed(seed)
    np.random.seed(seed)


def verify_seed_determinism(seed: int) -> bool:
    """Check that re-seeding reproduces identical random and numpy sequences."""
    set_seed(seed)
    r1 = [random.random() for _ in range(10)]
    n1 = np.random.rand(10).tolist()

    set_seed(seed)
    r2 = [random.random() for _ in range(10)]
    n2 = np.random.rand(10).tolist()

    return r1 == r2 and n1 == n2
