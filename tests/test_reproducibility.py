"""Tests for seed management and git hash capture."""

import random
import re
from pathlib import Path

import numpy as np

from src.reproducibility import get_git_hash, set_seed, verify_seed_determinism


class TestSeedDeterminism:
    """set_seed produces identical sequences from all RNG sources."""

    def test_set_seed_random_determinism(self):
        set_seed(42)
        r1 = [random.random() for _ in range(100)]
        set_seed(42)
        r2 = [random.random() for _ in range(100)]
        assert r1 == r2

    def test_set_seed_numpy_determinism(self):
        set_seed(42)
        n1 = np.random.rand(100).tolist()
        set_seed(42)
        n2 = np.random.rand(100).tolist()
        assert n1 == n2

    def test_set_seed_cross_seed_different(self):
        set_seed(42)
        r1 = [random.random() for _ in range(10)]
        set_seed(99)
        r2 = [random.random() for _ in range(10)]
        assert r1 != r2

    def test_verify_seed_determinism_passes(self):
        assert verify_seed_determinism(42) is True


class TestGitHash:

    def test_git_hash_format(self):
        h = get_git_hash()
        assert h == "unknown" or re.match(r"^[0-9a-f]{7,}(-dirty)?$", h)

    def test_outside_repository(self, tmp_path: Path):
        assert get_git_hash(tmp_path) == "unknown"
