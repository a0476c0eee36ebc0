"""Anchor configuration: the default analysis parameters in one place."""

from src.config.analysis import AnalysisConfig

# Anchor config with all-default values: n=30 people in K=3 groups,
# PageRank damping 0.85, seed=42.
ANCHOR_CONFIG = AnalysisConfig()
