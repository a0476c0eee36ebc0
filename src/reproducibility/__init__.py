"""Reproducibility infrastructure: seed management and code provenance tracking."""

from src.reproducibility.seed import set_seed, verify_seed_determinism
from src.reproducibility.git_hash import get_git_hash

__all__ = [
    "set_seed",
    "verify_seed_determinism",
    "get_git_hash",
]
