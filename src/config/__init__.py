"""Analysis configuration system with frozen, hashable, serializable dataclasses."""

from src.config.analysis import (
    AnalysisConfig,
    CentralityConfig,
    CommunityConfig,
    NetworkConfig,
    PlotConfig,
)
from src.config.defaults import ANCHOR_CONFIG
from src.config.hashing import (
    config_hash,
    full_config_hash,
    matrix_hash,
    metrics_config_hash,
)
from src.config.serialization import config_from_json, config_to_json

__all__ = [
    "AnalysisConfig",
    "CentralityConfig",
    "CommunityConfig",
    "NetworkConfig",
    "PlotConfig",
    "ANCHOR_CONFIG",
    "config_hash",
    "metrics_config_hash",
    "full_config_hash",
    "matrix_hash",
    "config_to_json",
    "config_from_json",
]
