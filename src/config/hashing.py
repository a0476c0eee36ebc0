"""Deterministic SHA-256 fingerprints for configs and input matrices.

All hashes are the first 16 hex characters of a SHA-256 digest, so a run
summary can be matched to the exact settings and input that produced it.
"""

import hashlib
import json
from dataclasses import asdict
from typing import Any, Sequence

import numpy as np

from src.config.analysis import AnalysisConfig

HASH_LENGTH = 16


def _digest(payload: bytes) -> str:
    return hashlib.sha256(payload).hexdigest()[:HASH_LENGTH]


def _drop_path(d: dict[str, Any], field_path: str) -> None:
    """Delete a dotted key such as "centrality.damping" if present."""
    *parents, leaf = field_path.split(".")
    for part in parents:
        d = d.get(part)
        if not isinstance(d, dict):
            return
    d.pop(leaf, None)


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Hash a config dataclass via its sorted, compact JSON form.

    Args:
        config: AnalysisConfig or any of its sub-configs.
        exclude_fields: Dotted field paths left out of the hash.
    """
    d = asdict(config)
    for field_path in exclude_fields or ():
        _drop_path(d, field_path)
    canonical = json.dumps(d, sort_keys=True, ensure_ascii=True, separators=(",", ":"))
    return _digest(canonical.encode("utf-8"))


def metrics_config_hash(config: AnalysisConfig) -> str:
    """Hash of everything that changes computed numbers.

    Plot settings, description and tags are excluded, so two runs with the
    same hash produce identical metric tables for the same input.
    """
    return config_hash(config, exclude_fields=["plot", "description", "tags"])


def full_config_hash(config: AnalysisConfig) -> str:
    """Hash for full run identity, seed and plot settings included."""
    return config_hash(config)


def matrix_hash(labels: Sequence[str], values: np.ndarray) -> str:
    """Fingerprint of a labeled 0/1 matrix.

    Labels and the binarized cells both contribute; the cell dtype does
    not, so a float matrix and its int8 copy hash the same.
    """
    h = hashlib.sha256()
    h.update(json.dumps(list(labels), ensure_ascii=True).encode("utf-8"))
    h.update(np.ascontiguousarray(np.asarray(values) != 0, dtype=np.uint8).tobytes())
    return h.hexdigest()[:HASH_LENGTH]
