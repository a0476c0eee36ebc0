"""Network drawings sized by centrality and colored by community.

Display attributes live in a NodeStyle side table built per drawing; they
are never written onto the graph.
"""

from dataclasses import dataclass

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
from matplotlib.patches import Patch

from src.analysis.community import CommunityAssignment
from src.network.errors import UnknownNodeError
from src.visualization.style import (
    EDGE_COLOR,
    HIGHLIGHT_COLOR,
    NODE_COLOR,
    apply_style,
    community_color,
)

Color = tuple[float, float, float]


@dataclass(frozen=True)
class NodeStyle:
    """Ephemeral per-node display attributes for one drawing."""

    sizes: dict[str, float]
    colors: dict[str, Color]
    labels: dict[str, str]
    legend: tuple[tuple[str, Color], ...] = ()


def scale_sizes(
    vector: dict[str, float], min_size: float, max_size: float
) -> dict[str, float]:
    """Map values linearly onto [min_size, max_size]; constant vectors get the midpoint."""
    if not vector:
        return {}
    values = np.array(list(vector.values()), dtype=np.float64)
    lo, hi = values.min(), values.max()
    if hi - lo <= 0:
        mid = (min_size + max_size) / 2
        return {node: mid for node in vector}
    scaled = min_size + (values - lo) / (hi - lo) * (max_size - min_size)
    return dict(zip(vector.keys(), scaled.tolist()))


def node_style(
    graph: nx.Graph,
    size_by: dict[str, float] | None = None,
    communities: CommunityAssignment | None = None,
    highlight: str | None = None,
    min_size: float = 80.0,
    max_size: float = 900.0,
) -> NodeStyle:
    """Build the display side table for one drawing.

    Args:
        graph: Graph being drawn (defines the node set).
        size_by: Centrality vector for node sizes (None = uniform).
        communities: Assignment for node colors (None = single color).
        highlight: Node drawn in HIGHLIGHT_COLOR.
        min_size: Size of the lowest-scoring node.
        max_size: Size of the highest-scoring node.

    Raises:
        UnknownNodeError: If highlight is not in the graph.
    """
    if highlight is not None and highlight not in graph:
        raise UnknownNodeError(highlight)

    nodes = list(graph)
    if size_by is None:
        sizes = {node: (min_size + max_size) / 2 for node in nodes}
    else:
        sizes = scale_sizes({node: size_by[node] for node in nodes}, min_size, max_size)

    legend: list[tuple[str, Color]] = []
    if communities is None:
        colors = {node: NODE_COLOR for node in nodes}
    else:
        colors = {
            node: community_color(communities.membership[node]) for node in nodes
        }
        legend = [
            (f"Community {label}", community_color(label))
            for label in range(communities.n_communities)
        ]

    if highlight is not None:
        colors[highlight] = HIGHLIGHT_COLOR
        legend.append((highlight, HIGHLIGHT_COLOR))

    return NodeStyle(
        sizes=sizes,
        colors=colors,
        labels={node: str(node) for node in nodes},
        legend=tuple(legend),
    )


def compute_layout(graph: nx.Graph, seed: int = 7) -> dict[str, np.ndarray]:
    """Spring layout; share it between the directed and mutual drawings."""
    return nx.spring_layout(graph, seed=seed)


def plot_network(
    graph: nx.Graph,
    style: NodeStyle,
    pos: dict[str, np.ndarray] | None = None,
    title: str = "",
    ax: plt.Axes | None = None,
) -> plt.Figure:
    """Draw a graph with the given node style.

    Directed graphs get arrowheads. Node order follows the graph.

    Returns:
        Matplotlib Figure.
    """
    apply_style()

    if ax is None:
        fig, ax = plt.subplots(figsize=(9, 8))
    else:
        fig = ax.figure

    if pos is None:
        pos = compute_layout(graph)

    nodes = list(graph)
    nx.draw_networkx_edges(
        graph,
        pos,
        ax=ax,
        edge_color=EDGE_COLOR,
        alpha=0.5,
        width=0.8,
        arrows=graph.is_directed(),
        arrowsize=8,
        node_size=[style.sizes[node] for node in nodes],
    )
    nx.draw_networkx_nodes(
        graph,
        pos,
        ax=ax,
        nodelist=nodes,
        node_size=[style.sizes[node] for node in nodes],
        node_color=[style.colors[node] for node in nodes],
        edgecolors="white",
        linewidths=0.8,
    )
    nx.draw_networkx_labels(graph, pos, labels=style.labels, ax=ax, font_size=7)

    if style.legend:
        handles = [Patch(color=color, label=label) for label, color in style.legend]
        ax.legend(handles=handles, loc="best", fontsize=7)

    ax.set_title(title)
    ax.set_axis_off()
    return fig
