"""Orchestrator: render all figures for a single analysis run.

Draws every figure from one NetworkAnalysis and saves them to
{output_dir}/figures/ as PNG + SVG.
"""

import logging
from pathlib import Path
from typing import Callable

import matplotlib.pyplot as plt

from src.analysis.pipeline import NetworkAnalysis, node_table
from src.config.analysis import AnalysisConfig
from src.network.errors import UnknownNodeError
from src.visualization.style import apply_style, save_figure

log = logging.getLogger(__name__)

# (figure name, measure sizing the nodes) for directed-graph drawings
DIRECTED_DRAWINGS = (
    ("network_degree", "degree_total"),
    ("network_eigen", "eigen_directed"),
    ("network_pagerank", "pagerank_directed"),
    ("network_betweenness", "betweenness_directed"),
)

RANKED_MEASURES = ("eigen_directed", "pagerank_directed", "betweenness_directed")


def render_all(
    analysis: NetworkAnalysis,
    output_dir: str | Path,
    config: AnalysisConfig,
    highlight: str | None = None,
) -> list[Path]:
    """Generate all figures for one analysis.

    Each figure is wrapped in try/except so one failure doesn't block
    the others.

    Args:
        analysis: Computed analysis.
        output_dir: Run directory; figures go to its figures/ subdirectory.
        config: Analysis configuration (plot settings).
        highlight: Optional person to emphasize in every figure.

    Returns:
        List of paths to generated figure files.

    Raises:
        UnknownNodeError: If highlight is not in the network.
    """
    from src.visualization.distributions import (
        plot_centrality_comparison,
        plot_centrality_correlation,
        plot_community_sizes,
        plot_degree_distribution,
        plot_top_nodes,
    )
    from src.visualization.network import compute_layout, node_style, plot_network

    if highlight is not None and highlight not in analysis.directed:
        raise UnknownNodeError(highlight)

    apply_style()
    pc = config.plot
    figures_dir = Path(output_dir) / "figures"
    generated_files: list[Path] = []

    def _render(name: str, draw: Callable[[], plt.Figure]) -> None:
        try:
            fig = draw()
            generated_files.extend(save_figure(fig, figures_dir, name))
            log.info("Generated: %s", name)
        except Exception as e:
            plt.close("all")
            log.warning("Failed to generate %s: %s", name, e)

    # One layout for every drawing so people stay in place across figures
    pos = compute_layout(analysis.directed, seed=pc.layout_seed)

    for name, measure in DIRECTED_DRAWINGS:
        _render(name, lambda measure=measure: plot_network(
            analysis.directed,
            node_style(
                analysis.directed,
                size_by=analysis.vector(measure),
                highlight=highlight,
                min_size=pc.min_node_size,
                max_size=pc.max_node_size,
            ),
            pos=pos,
            title=f"Friendship network sized by {measure}",
        ))

    for method, assignment in analysis.communities.items():
        _render(f"communities_{method}", lambda a=assignment, m=method: plot_network(
            analysis.mutual,
            node_style(
                analysis.mutual,
                size_by=analysis.vector("degree_mutual"),
                communities=a,
                highlight=highlight,
                min_size=pc.min_node_size,
                max_size=pc.max_node_size,
            ),
            pos=pos,
            title=f"Mutual ties: {m} ({a.n_communities} communities, Q={a.modularity:.3f})",
        ))

    _render("degree_distribution", lambda: plot_degree_distribution({
        "in": analysis.vector("degree_in"),
        "out": analysis.vector("degree_out"),
        "mutual": analysis.vector("degree_mutual"),
    }))

    _render("eigen_vs_pagerank", lambda: plot_centrality_comparison(
        analysis.vector("eigen_directed"),
        analysis.vector("pagerank_directed"),
        "Eigenvector centrality (max = 1)",
        "PageRank (sums to 1)",
        highlight=highlight,
    ))

    for measure in RANKED_MEASURES:
        _render(f"top_{measure}", lambda measure=measure: plot_top_nodes(
            analysis.vector(measure), measure, k=pc.top_k, highlight=highlight,
        ))

    table = node_table(analysis)
    _render("centrality_correlation", lambda: plot_centrality_correlation(
        table[[c for c in table.columns if not c.startswith("community_")]]
    ))

    _render("community_sizes", lambda: plot_community_sizes(analysis.communities))

    return generated_files
