"""Integration tests for the run_analysis.py command line.

Runs the CLI as a subprocess against a small CSV and a small synthetic
network.
"""

import subprocess
import sys
from pathlib import Path

import pytest

from src.config import AnalysisConfig, NetworkConfig
from src.config.serialization import config_to_json
from src.results import load_summary

REPO_ROOT = Path(__file__).resolve().parent.parent

SMALL_CONFIG = AnalysisConfig(
    network=NetworkConfig(n=12, K=2, p_in=0.6, p_out=0.1, reciprocity=0.7),
    seed=3,
    description="E2E pipeline test",
    tags=("test", "e2e"),
)

FRIENDS_CSV = """\
,Ana,Ben,Cleo,Dev,Eli
Ana,0,1,1,0,0
Ben,1,0,1,0,0
Cleo,1,1,0,1,0
Dev,0,0,1,0,1
Eli,0,0,0,1,0
"""


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "run_analysis.py", *args],
        capture_output=True,
        text=True,
        timeout=300,
        cwd=REPO_ROOT,
    )


def _write_config(tmp_path: Path) -> Path:
    config_path = tmp_path / "config.json"
    config_path.write_text(config_to_json(SMALL_CONFIG))
    return config_path


def _write_csv(tmp_path: Path, text: str = FRIENDS_CSV) -> Path:
    csv_path = tmp_path / "friends.csv"
    csv_path.write_text(text, encoding="utf-8")
    return csv_path


class TestDryRun:

    def test_dry_run_exits_cleanly(self, tmp_path: Path) -> None:
        result = _run("--input", str(_write_csv(tmp_path)), "--dry-run")
        assert result.returncode == 0
        assert "Pipeline plan" in result.stdout
        assert "dry-run" in result.stdout.lower()

    def test_dry_run_generate_shows_network(self, tmp_path: Path) -> None:
        result = _run("--generate", "--config", str(_write_config(tmp_path)), "--dry-run")
        assert result.returncode == 0
        assert "n=12, K=2" in result.stdout

    def test_requires_a_source(self) -> None:
        result = _run("--dry-run")
        assert result.returncode != 0


class TestFullRun:

    def test_csv_run_writes_outputs(self, tmp_path: Path) -> None:
        out = tmp_path / "results"
        result = _run(
            "--input", str(_write_csv(tmp_path)),
            "--output-dir", str(out),
            "--highlight", "Cleo",
        )
        assert result.returncode == 0, result.stderr
        assert "Analysis complete" in result.stdout
        assert "Profile for Cleo" in result.stdout

        run_dirs = list(out.iterdir())
        assert len(run_dirs) == 1
        run_dir = run_dirs[0]
        assert run_dir.name.startswith("friends_s42_")
        summary = load_summary(run_dir)
        assert summary["metrics"]["scalars"]["n_nodes"] == 5
        assert (run_dir / "node_metrics.csv").exists()
        assert (run_dir / "figures" / "network_pagerank.png").exists()

    def test_generate_run(self, tmp_path: Path) -> None:
        out = tmp_path / "results"
        result = _run(
            "--generate",
            "--config", str(_write_config(tmp_path)),
            "--output-dir", str(out),
        )
        assert result.returncode == 0, result.stderr
        run_dir = next(out.iterdir())
        assert (run_dir / "adjacency.csv").exists()
        summary = load_summary(run_dir)
        assert summary["source"] == "synthetic"
        assert summary["metrics"]["scalars"]["n_nodes"] == 12


class TestErrors:

    def test_malformed_input_exits_1(self, tmp_path: Path) -> None:
        bad = _write_csv(tmp_path, ",A,B\nA,1,1\nB,0,0\n")
        result = _run("--input", str(bad), "--output-dir", str(tmp_path / "out"))
        assert result.returncode == 1
        assert "Error" in result.stderr
        assert "self-loops" in result.stderr

    def test_missing_input_exits_1(self, tmp_path: Path) -> None:
        result = _run("--input", str(tmp_path / "missing.csv"))
        assert result.returncode == 1
        assert "not found" in result.stderr

    def test_unknown_highlight_exits_1(self, tmp_path: Path) -> None:
        result = _run(
            "--input", str(_write_csv(tmp_path)),
            "--output-dir", str(tmp_path / "out"),
            "--highlight", "Zed",
        )
        assert result.returncode == 1
        assert "Zed" in result.stderr
