"""Run ID generation with scannable parameter slug format."""

import re
from datetime import datetime, timezone
from pathlib import Path

from src.config.analysis import AnalysisConfig


def generate_run_id(
    config: AnalysisConfig, source: str | Path | None = None
) -> str:
    """Generate a scannable run ID.

    Format: {source}_s{seed}_{YYYYMMDD}_{HHMMSS}
    Example: friends_s42_20260224_143012

    source is the input CSV stem; without one the synthetic network
    parameters are used instead (e.g. synthetic_n30_K3).
    """
    if source is not None:
        slug = re.sub(r"[^A-Za-z0-9]+", "-", Path(source).stem).strip("-") or "input"
    else:
        slug = f"synthetic_n{config.network.n}_K{config.network.K}"
    ts = datetime.now(timezone.utc)
    return f"{slug}_s{config.seed}_{ts.strftime('%Y%m%d_%H%M%S')}"
