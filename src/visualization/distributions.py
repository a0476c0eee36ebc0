"""Degree distributions, centrality comparisons and community size plots."""

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from src.analysis.community import CommunityAssignment
from src.visualization.style import (
    DIRECTED_COLOR,
    HIGHLIGHT_COLOR,
    MUTUAL_COLOR,
    PALETTE,
)


def plot_degree_distribution(
    degrees: dict[str, dict[str, int]],
) -> plt.Figure:
    """Histogram of each degree vector on shared integer bins.

    Args:
        degrees: Maps a series label (e.g. "in", "out", "mutual") to a
            degree vector.

    Returns:
        The matplotlib Figure.
    """
    fig, ax = plt.subplots(figsize=(8, 5))

    all_values = [v for vector in degrees.values() for v in vector.values()]
    if not all_values:
        ax.text(
            0.5, 0.5, "No nodes",
            transform=ax.transAxes, ha="center", va="center",
            fontsize=12, color="gray",
        )
        ax.set_title("Degree distribution")
        return fig

    bins = np.arange(0, max(all_values) + 2) - 0.5
    for i, (label, vector) in enumerate(degrees.items()):
        ax.hist(
            list(vector.values()),
            bins=bins,
            alpha=0.5,
            color=PALETTE[i % len(PALETTE)],
            label=label,
            edgecolor="white",
        )

    ax.set_xlabel("Degree")
    ax.set_ylabel("Number of people")
    ax.set_title("Degree distribution")
    ax.legend(loc="upper right")
    return fig


def plot_centrality_comparison(
    x: dict[str, float],
    y: dict[str, float],
    x_label: str,
    y_label: str,
    highlight: str | None = None,
    annotate_top: int = 5,
) -> plt.Figure:
    """Scatter one centrality vector against another.

    The annotate_top nodes by y are labeled; highlight is drawn in
    HIGHLIGHT_COLOR.
    """
    fig, ax = plt.subplots(figsize=(7, 6))

    nodes = list(x)
    xs = np.array([x[node] for node in nodes])
    ys = np.array([y[node] for node in nodes])
    ax.scatter(xs, ys, color=DIRECTED_COLOR, alpha=0.7, s=30)

    ranked = sorted(nodes, key=lambda node: y[node], reverse=True)
    for node in ranked[:annotate_top]:
        ax.annotate(node, (x[node], y[node]), fontsize=7,
                    xytext=(3, 3), textcoords="offset points")

    if highlight is not None and highlight in x:
        ax.scatter([x[highlight]], [y[highlight]], color=HIGHLIGHT_COLOR,
                   s=60, zorder=3, label=highlight)
        ax.legend(loc="best")

    ax.set_xlabel(x_label)
    ax.set_ylabel(y_label)
    ax.set_title(f"{y_label} vs {x_label}")
    return fig


def plot_top_nodes(
    vector: dict[str, float],
    measure: str,
    k: int = 10,
    highlight: str | None = None,
) -> plt.Figure:
    """Horizontal bar chart of the k highest-scoring nodes."""
    ranked = sorted(vector.items(), key=lambda item: item[1], reverse=True)[:k]

    fig, ax = plt.subplots(figsize=(7, max(3, 0.35 * len(ranked) + 1)))
    names = [node for node, _ in ranked][::-1]
    values = [value for _, value in ranked][::-1]
    colors = [HIGHLIGHT_COLOR if node == highlight else MUTUAL_COLOR for node in names]
    ax.barh(names, values, color=colors)

    ax.set_xlabel(measure)
    ax.set_title(f"Top {len(ranked)} by {measure}")
    return fig


def plot_centrality_correlation(table: pd.DataFrame) -> plt.Figure:
    """Spearman rank correlation between centrality columns.

    Constant columns (e.g. all-zero betweenness) have undefined
    correlation and are masked.
    """
    corr = table.corr(method="spearman")
    mask = corr.isna().to_numpy()

    size = max(6, 0.6 * len(corr.columns) + 2)
    fig, ax = plt.subplots(figsize=(size, size * 0.85))
    sns.heatmap(
        corr,
        annot=True,
        fmt=".2f",
        cmap="vlag",
        vmin=-1.0,
        vmax=1.0,
        mask=mask,
        square=True,
        linewidths=0.5,
        linecolor="white",
        cbar_kws={"label": "Spearman rho"},
        annot_kws={"fontsize": 7},
        ax=ax,
    )
    ax.set_title("Rank agreement between centrality measures")
    fig.tight_layout()
    return fig


def plot_community_sizes(
    assignments: dict[str, CommunityAssignment],
) -> plt.Figure:
    """Community sizes per detection method, largest first."""
    fig, ax = plt.subplots(figsize=(8, 5))

    n_methods = max(len(assignments), 1)
    width = 0.8 / n_methods
    for i, (method, assignment) in enumerate(assignments.items()):
        sizes = assignment.sizes()
        positions = np.arange(len(sizes)) + i * width
        ax.bar(
            positions,
            sizes,
            width=width,
            color=PALETTE[i % len(PALETTE)],
            label=f"{method} (Q={assignment.modularity:.3f})",
        )

    ax.set_xlabel("Community label")
    ax.set_ylabel("Members")
    ax.set_title("Community sizes")
    if assignments:
        ax.legend(loc="upper right")
    return fig
