#!/usr/bin/env python3
"""Entry point for analysing a friendship network.

Chains all pipeline stages into a single executable command:
load (or generate) -> build graphs -> centrality -> communities ->
results -> figures.

Usage:
    python run_analysis.py --input friends.csv
    python run_analysis.py --generate --config config.json
    python run_analysis.py --input friends.csv --highlight P07 --verbose
    python run_analysis.py --input friends.csv --dry-run
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from src.config import ANCHOR_CONFIG, AnalysisConfig, config_from_json, full_config_hash
from src.network.errors import (
    MalformedInputError,
    NetworkGenerationError,
    UnknownNodeError,
)
from src.results import generate_run_id

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_pipeline(
    config: AnalysisConfig,
    input_path: Path | None,
    results_dir: str = "results",
    highlight: str | None = None,
) -> Path:
    """Execute the full analysis pipeline.

    Args:
        config: Analysis configuration.
        input_path: Adjacency CSV, or None to generate a synthetic network.
        results_dir: Base directory for results output.
        highlight: Optional person to look up and emphasize in figures.

    Returns:
        Path to the output directory.
    """
    # Lazy imports to keep --dry-run fast
    from src.analysis import analyze_network, node_profile, top_nodes
    from src.network import (
        generate_social_network,
        read_adjacency_csv,
        write_adjacency_csv,
    )
    from src.reproducibility import get_git_hash, set_seed
    from src.results import write_results
    from src.visualization import render_all

    pipeline_start = time.monotonic()
    run_id = generate_run_id(config, input_path)
    output_dir = Path(results_dir) / run_id
    output_dir.mkdir(parents=True, exist_ok=True)
    log.info("Seed: %d", config.seed)
    log.info("Git hash: %s", get_git_hash())

    # ── Stage 1: Seed ──────────────────────────────────────────────
    with stage_timer("Reproducibility Seeding"):
        set_seed(config.seed)

    # ── Stage 2: Load or generate ─────────────────────────────────
    with stage_timer("Load Network"):
        if input_path is not None:
            adjacency = read_adjacency_csv(input_path)
            source = str(input_path)
        else:
            adjacency = generate_social_network(config)
            write_adjacency_csv(adjacency, output_dir / "adjacency.csv")
            source = "synthetic"
        log.info("Network: n=%d, ties=%d", adjacency.n, adjacency.n_edges)

    # ── Stage 3: Graphs, centrality, communities ──────────────────
    with stage_timer("Centrality and Communities"):
        analysis = analyze_network(adjacency, config)
        for measure in ("eigen_directed", "pagerank_directed", "betweenness_directed"):
            leaders = top_nodes(analysis.vector(measure), 3)
            log.info(
                "Top %s: %s", measure,
                ", ".join(f"{node}={value:.3f}" for node, value in leaders),
            )

    if highlight is not None:
        profile = node_profile(analysis, highlight)
        print(f"\nProfile for {highlight}:")
        for key, value in profile.items():
            print(f"  {key:<34} {value:.4g}" if isinstance(value, float)
                  else f"  {key:<34} {value}")

    # ── Stage 4: Results ──────────────────────────────────────────
    with stage_timer("Write Results"):
        summary_path = write_results(analysis, config, output_dir, run_id, source)

    # ── Stage 5: Figures ──────────────────────────────────────────
    with stage_timer("Figures"):
        figures = render_all(analysis, output_dir, config, highlight=highlight)
        log.info("Generated %d figure files", len(figures))

    # ── Final Summary ──────────────────────────────────────────────
    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Analysis complete in {total_elapsed:.1f}s")
    print(f"  Run:      {run_id}")
    print(f"  Output:   {output_dir}")
    print(f"  Summary:  {summary_path}")
    print(f"  Figures:  {len(figures)} files")
    for method, assignment in analysis.communities.items():
        print(f"  {method}: {assignment.n_communities} communities, "
              f"Q={assignment.modularity:.3f}")
    print(f"{'=' * 60}")

    return output_dir


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Centrality and community analysis of a friendship network"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        type=str,
        help="Adjacency matrix CSV (labeled header row and first column)",
    )
    source.add_argument(
        "--generate",
        action="store_true",
        help="Analyse a synthetic network generated from the config",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to analysis config JSON file (default: built-in defaults)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="results",
        help="Base directory for run output",
    )
    parser.add_argument(
        "--highlight",
        type=str,
        default=None,
        help="Person to profile and emphasize in figures",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show pipeline plan without running the analysis",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is not None:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        config = config_from_json(config_path.read_text())
    else:
        config = ANCHOR_CONFIG

    input_path = Path(args.input) if args.input else None
    if input_path is not None and not input_path.exists():
        print(f"Error: input file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    run_id = generate_run_id(config, input_path)
    print(f"Run ID:      {run_id}")
    print(f"Config hash: {full_config_hash(config)}")
    print(f"Source:      {input_path if input_path else 'synthetic'}")
    print(f"PageRank:    damping={config.centrality.damping}")
    print(f"Seed:        {config.seed}")

    if args.dry_run:
        print(f"\nPipeline plan for run {run_id}:")
        print(f"  1. Set seed: {config.seed}")
        if input_path is not None:
            print(f"  2. Load adjacency matrix: {input_path}")
        else:
            net = config.network
            print(f"  2. Generate network: n={net.n}, K={net.K}, "
                  f"p_in={net.p_in}, p_out={net.p_out}, "
                  f"reciprocity={net.reciprocity}")
        print("  3. Build directed and mutual graphs")
        print("  4. Centrality: degree, eigenvector, PageRank, betweenness")
        print("  5. Communities: greedy modularity, Girvan-Newman")
        print("  6. Results: summary.json, node_metrics.csv")
        print("  7. Figures: networks, distributions, rankings")
        print(f"\nOutput: {args.output_dir}/{run_id}/")
        print(f"\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(config, input_path, args.output_dir, args.highlight)
    except (MalformedInputError, UnknownNodeError, NetworkGenerationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        log.exception("Analysis failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
