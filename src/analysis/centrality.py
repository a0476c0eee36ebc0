"""Per-node centrality measures, delegated to networkx.

Every function takes a graph and returns a fresh {node: value} mapping in
the graph's node order; none mutate the graph. `directed=False` on a
directed graph analyses its undirected projection, where a tie in either
direction becomes an edge.

Eigenvector centrality uses the in-edge convention (a person is central
when central people point at them) and is scaled so the maximum is 1.
PageRank is a probability distribution summing to 1. The two are not on
the same scale and should not be compared numerically.

On near-reducible graphs (several strongly connected components, or ties
in the leading eigenvalue) the eigenvector is not unique and the values
returned depend on the solver's starting vector. That is a property of
the measure, not an error.
"""

import logging
import warnings
from enum import Enum

import networkx as nx
import numpy as np

from src.network.errors import NumericNonConvergence, UnknownNodeError

log = logging.getLogger(__name__)


class DegreeMode(str, Enum):
    """Which ties count towards a node's degree on a directed graph."""

    TOTAL = "total"
    IN = "in"
    OUT = "out"


def _oriented(graph: nx.Graph, directed: bool) -> nx.Graph:
    """Return `graph`, or a read-only undirected view of it."""
    if graph.is_directed() and not directed:
        return graph.to_undirected(as_view=True)
    return graph


def _scale_to_max(scores: dict[str, float]) -> dict[str, float]:
    top = max(scores.values(), default=0.0)
    if top <= 0.0:
        return {node: 0.0 for node in scores}
    return {node: float(value) / top for node, value in scores.items()}


def degree(
    graph: nx.Graph, mode: DegreeMode | str = DegreeMode.TOTAL
) -> dict[str, int]:
    """Count each node's ties.

    Args:
        graph: Directed or undirected graph.
        mode: total, in or out. Ignored for undirected graphs, which only
            have a total degree. Graphs carry no self-loops, so total is
            exactly in + out.

    Returns:
        Mapping node -> non-negative integer degree.
    """
    mode = DegreeMode(mode)
    if not graph.is_directed() or mode is DegreeMode.TOTAL:
        view = graph.degree
    elif mode is DegreeMode.IN:
        view = graph.in_degree
    else:
        view = graph.out_degree
    return {node: int(d) for node, d in view}


def node_degree(
    graph: nx.Graph, node: str, mode: DegreeMode | str = DegreeMode.TOTAL
) -> int:
    """Degree of a single node.

    Raises:
        UnknownNodeError: If node is not in the graph.
    """
    if node not in graph:
        raise UnknownNodeError(node)
    return degree(graph, mode)[node]


def _dense_principal_eigenvector(graph: nx.Graph) -> dict[str, float]:
    """Leading eigenvector of A^T by a dense numpy eigendecomposition."""
    nodes = list(graph)
    A = nx.to_numpy_array(graph, nodelist=nodes)
    eigvals, eigvecs = np.linalg.eig(A.T)
    lead = np.argmax(eigvals.real)
    vec = np.abs(eigvecs[:, lead].real)
    return dict(zip(nodes, vec.tolist()))


def eigen_centrality(
    graph: nx.Graph,
    directed: bool = True,
    max_iter: int = 1000,
    tol: float = 1e-6,
) -> dict[str, float]:
    """Eigenvector centrality scaled so the most central node scores 1.

    Uses networkx power iteration. If it does not converge within
    max_iter, a NumericNonConvergence warning is emitted and the dense
    numpy solution is returned instead.

    Args:
        graph: Directed or undirected graph.
        directed: Respect edge direction (in-edge convention).
        max_iter: Power iteration limit.
        tol: Power iteration tolerance (networkx semantics, per node).

    Returns:
        Mapping node -> value in [0, 1]. All 1.0 for a graph without
        edges, empty for a graph without nodes.
    """
    g = _oriented(graph, directed)
    if g.number_of_nodes() == 0:
        return {}
    if g.number_of_edges() == 0:
        return {node: 1.0 for node in g}

    try:
        scores = nx.eigenvector_centrality(g, max_iter=max_iter, tol=tol)
    except nx.PowerIterationFailedConvergence:
        log.warning(
            "Eigenvector centrality did not converge in %d iterations; "
            "using dense eigendecomposition",
            max_iter,
        )
        warnings.warn(
            f"eigenvector centrality did not converge in {max_iter} iterations",
            NumericNonConvergence,
            stacklevel=2,
        )
        scores = _dense_principal_eigenvector(g)

    return _scale_to_max(scores)


def _dense_pagerank(graph: nx.Graph, damping: float) -> dict[str, float]:
    """Stationary distribution of the Google matrix by dense eigendecomposition."""
    nodes = list(graph)
    G = np.asarray(nx.google_matrix(graph, alpha=damping, nodelist=nodes))
    eigvals, eigvecs = np.linalg.eig(G.T)
    lead = np.argmax(eigvals.real)
    vec = np.abs(eigvecs[:, lead].real)
    vec = vec / vec.sum()
    return dict(zip(nodes, vec.tolist()))


def page_rank(
    graph: nx.Graph,
    directed: bool = True,
    damping: float = 0.85,
    max_iter: int = 100,
    tol: float = 1e-6,
) -> dict[str, float]:
    """PageRank with uniform teleportation.

    damping is the probability of following a tie; with probability
    1 - damping (0.15 by default) the walker jumps to a uniformly random
    node. Dangling nodes also jump uniformly.

    If the power iteration does not converge, a NumericNonConvergence
    warning is emitted and the dense Google-matrix solution is returned.

    Returns:
        Mapping node -> probability; values sum to 1 for any non-empty graph.
    """
    g = _oriented(graph, directed)
    if g.number_of_nodes() == 0:
        return {}

    try:
        scores = nx.pagerank(g, alpha=damping, max_iter=max_iter, tol=tol)
    except nx.PowerIterationFailedConvergence:
        log.warning(
            "PageRank did not converge in %d iterations; "
            "using dense eigendecomposition",
            max_iter,
        )
        warnings.warn(
            f"PageRank did not converge in {max_iter} iterations",
            NumericNonConvergence,
            stacklevel=2,
        )
        scores = _dense_pagerank(g, damping)

    return {node: float(value) for node, value in scores.items()}


def betweenness(
    graph: nx.Graph, directed: bool = True, normalized: bool = False
) -> dict[str, float]:
    """Shortest-path betweenness centrality.

    For each pair (s, t), s != t, adds the fraction of shortest s-t paths
    that pass through the node (s and t excluded). Pairs are ordered on
    directed graphs and unordered on undirected ones. Leaves, isolated
    nodes and every node of an edgeless graph score 0.

    Args:
        graph: Directed or undirected graph.
        directed: Respect edge direction.
        normalized: Divide by the number of pairs not containing the node.
    """
    g = _oriented(graph, directed)
    scores = nx.betweenness_centrality(g, normalized=normalized)
    return {node: float(value) for node, value in scores.items()}
