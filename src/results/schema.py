"""Run summary schema validation and writing.

Uses a Python validation function (not jsonschema) to check required fields
and types before writing summary.json, and writes the per-node table next
to it as node_metrics.csv.
"""

import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from src.analysis.pipeline import (
    NetworkAnalysis,
    node_table,
    summary_scalars,
    top_nodes,
)
from src.config.analysis import AnalysisConfig
from src.config.hashing import full_config_hash, matrix_hash, metrics_config_hash
from src.reproducibility.git_hash import get_git_hash

log = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "run_id",
    "timestamp",
    "description",
    "tags",
    "source",
    "config",
    "metrics",
}

REQUIRED_METRICS_FIELDS = {"scalars", "top_nodes", "communities"}


def validate_summary(summary: dict[str, Any]) -> list[str]:
    """Validate a summary dict against the project schema.

    Returns a list of error strings. An empty list means the summary is valid.
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(summary.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in summary and not isinstance(summary["schema_version"], str):
        errors.append("schema_version must be a string")

    if "tags" in summary and not isinstance(summary["tags"], list):
        errors.append("tags must be a list")

    if "config" in summary and not isinstance(summary["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in summary:
        ts = summary["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    metrics = summary.get("metrics")
    if metrics is not None:
        if not isinstance(metrics, dict):
            errors.append("metrics must be a dict")
        else:
            missing_metrics = REQUIRED_METRICS_FIELDS - set(metrics.keys())
            if missing_metrics:
                errors.append(
                    f"metrics missing required fields: {sorted(missing_metrics)}"
                )
            for method, block in metrics.get("communities", {}).items():
                if not isinstance(block, dict):
                    errors.append(f"metrics.communities.{method} must be a dict")
                    continue
                for field in ("n_communities", "modularity", "membership"):
                    if field not in block:
                        errors.append(
                            f"metrics.communities.{method} missing field: {field}"
                        )

    return errors


def build_summary(
    analysis: NetworkAnalysis,
    config: AnalysisConfig,
    run_id: str,
    source: str,
) -> dict[str, Any]:
    """Assemble the summary dict for one run."""
    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": run_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "source": source,
        "config": asdict(config),
        "metadata": {
            "config_hash": full_config_hash(config),
            "metrics_hash": metrics_config_hash(config),
            "input_hash": matrix_hash(
                analysis.adjacency.labels, analysis.adjacency.values
            ),
            "git_hash": get_git_hash(),
        },
        "metrics": {
            "scalars": summary_scalars(analysis),
            "top_nodes": {
                measure: [
                    {"node": node, "value": value}
                    for node, value in top_nodes(vector, config.plot.top_k)
                ]
                for measure, vector in analysis.centrality.items()
            },
            "communities": {
                method: {
                    "n_communities": assignment.n_communities,
                    "modularity": assignment.modularity,
                    "sizes": assignment.sizes(),
                    "membership": dict(assignment.membership),
                }
                for method, assignment in analysis.communities.items()
            },
        },
    }


def write_results(
    analysis: NetworkAnalysis,
    config: AnalysisConfig,
    output_dir: str | Path,
    run_id: str,
    source: str,
) -> Path:
    """Validate and write summary.json and node_metrics.csv.

    Args:
        analysis: Computed analysis.
        config: Configuration used for the run.
        output_dir: Directory to write into. Created if absent.
        run_id: Identifier for this run.
        source: Input CSV path, or "synthetic".

    Returns:
        Path to summary.json.

    Raises:
        ValueError: If the assembled summary fails validation.
    """
    summary = build_summary(analysis, config, run_id, source)
    errors = validate_summary(summary)
    if errors:
        raise ValueError(f"Summary validation failed: {'; '.join(errors)}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    summary_path = output_dir / "summary.json"
    with open(summary_path, "w") as f:
        json.dump(summary, f, indent=2)

    node_table(analysis).to_csv(output_dir / "node_metrics.csv")

    log.info("Results written to %s", output_dir)
    return summary_path


def load_summary(path: str | Path) -> dict[str, Any]:
    """Load summary.json from a run directory or file path."""
    path = Path(path)
    if path.is_dir():
        path = path / "summary.json"
    with open(path) as f:
        return json.load(f)
