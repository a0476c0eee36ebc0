"""Run every centrality measure and community method once per network.

analyze_network is the single place vectors are computed; plots, tables
and the summary all read the same NetworkAnalysis.
"""

import logging
from dataclasses import dataclass
from typing import Any

import networkx as nx
import pandas as pd

from src.analysis.centrality import (
    DegreeMode,
    betweenness,
    degree,
    eigen_centrality,
    page_rank,
)
from src.analysis.community import (
    CommunityAssignment,
    girvan_newman,
    greedy_modularity,
)
from src.config.analysis import AnalysisConfig
from src.network.builder import build_directed_graph, mutualize
from src.network.errors import UnknownNodeError
from src.network.types import AdjacencyMatrix, DirectedGraph, MutualGraph

log = logging.getLogger(__name__)

# Column order for node tables and CSV export
CENTRALITY_MEASURES = (
    "degree_total",
    "degree_in",
    "degree_out",
    "degree_mutual",
    "eigen_directed",
    "eigen_mutual",
    "pagerank_directed",
    "pagerank_mutual",
    "betweenness_directed",
    "betweenness_mutual",
)


@dataclass(frozen=True)
class NetworkAnalysis:
    """Graphs plus every computed vector for one analysis run."""

    adjacency: AdjacencyMatrix
    directed: DirectedGraph
    mutual: MutualGraph
    centrality: dict[str, dict[str, float]]  # measure name -> vector
    communities: dict[str, CommunityAssignment]  # method name -> assignment

    @property
    def nodes(self) -> tuple[str, ...]:
        return self.adjacency.labels

    def vector(self, measure: str) -> dict[str, float]:
        if measure not in self.centrality:
            raise KeyError(
                f"Unknown measure {measure!r}; available: {sorted(self.centrality)}"
            )
        return self.centrality[measure]


def compute_centrality(
    directed: DirectedGraph, mutual: MutualGraph, config: AnalysisConfig
) -> dict[str, dict[str, float]]:
    """Compute each CENTRALITY_MEASURES vector exactly once."""
    cc = config.centrality
    vectors: dict[str, dict[str, float]] = {
        "degree_total": degree(directed, DegreeMode.TOTAL),
        "degree_in": degree(directed, DegreeMode.IN),
        "degree_out": degree(directed, DegreeMode.OUT),
        "degree_mutual": degree(mutual),
    }
    for suffix, graph in (("directed", directed), ("mutual", mutual)):
        vectors[f"eigen_{suffix}"] = eigen_centrality(
            graph, directed=True, max_iter=cc.eigen_max_iter, tol=cc.eigen_tol
        )
        vectors[f"pagerank_{suffix}"] = page_rank(
            graph,
            directed=True,
            damping=cc.damping,
            max_iter=cc.pagerank_max_iter,
            tol=cc.pagerank_tol,
        )
        vectors[f"betweenness_{suffix}"] = betweenness(
            graph, directed=True, normalized=cc.normalized_betweenness
        )
    return vectors


def detect_communities(
    mutual: MutualGraph, config: AnalysisConfig
) -> dict[str, CommunityAssignment]:
    greedy = greedy_modularity(mutual)
    gn = girvan_newman(
        mutual, max_levels=config.community.max_girvan_newman_levels
    )
    return {greedy.method: greedy, gn.method: gn}


def analyze_network(
    adjacency: AdjacencyMatrix, config: AnalysisConfig
) -> NetworkAnalysis:
    """Build both graphs and compute all measures and communities.

    Args:
        adjacency: Validated adjacency matrix.
        config: Analysis configuration (solver and community settings).

    Returns:
        NetworkAnalysis holding graphs, vectors and assignments.
    """
    directed = build_directed_graph(adjacency)
    mutual = mutualize(directed)
    log.info(
        "Graphs built: %d nodes, %d directed edges, %d mutual edges",
        directed.number_of_nodes(),
        directed.number_of_edges(),
        mutual.number_of_edges(),
    )

    centrality = compute_centrality(directed, mutual, config)
    communities = detect_communities(mutual, config)

    return NetworkAnalysis(
        adjacency=adjacency,
        directed=directed,
        mutual=mutual,
        centrality=centrality,
        communities=communities,
    )


def node_table(analysis: NetworkAnalysis) -> pd.DataFrame:
    """One row per node: every centrality measure and community label."""
    columns: dict[str, Any] = {
        measure: [analysis.centrality[measure][node] for node in analysis.nodes]
        for measure in CENTRALITY_MEASURES
    }
    for method, assignment in analysis.communities.items():
        columns[f"community_{method}"] = [
            assignment.membership[node] for node in analysis.nodes
        ]
    return pd.DataFrame(columns, index=pd.Index(analysis.nodes, name="node"))


def top_nodes(vector: dict[str, float], k: int) -> list[tuple[str, float]]:
    """The k highest-scoring nodes, ties broken by node order."""
    ranked = sorted(vector.items(), key=lambda item: item[1], reverse=True)
    return ranked[:k]


def node_profile(analysis: NetworkAnalysis, node: str) -> dict[str, Any]:
    """All measures and community labels for one person.

    Raises:
        UnknownNodeError: If node is not in the network.
    """
    if node not in analysis.directed:
        raise UnknownNodeError(node)
    profile: dict[str, Any] = {
        measure: analysis.centrality[measure][node]
        for measure in CENTRALITY_MEASURES
    }
    for method, assignment in analysis.communities.items():
        profile[f"community_{method}"] = assignment.label_of(node)
    return profile


def summary_scalars(analysis: NetworkAnalysis) -> dict[str, Any]:
    """Network-level numbers for the run summary."""
    n_edges = analysis.directed.number_of_edges()
    n_mutual = analysis.mutual.number_of_edges()
    scalars: dict[str, Any] = {
        "n_nodes": analysis.directed.number_of_nodes(),
        "n_edges": n_edges,
        "n_mutual_edges": n_mutual,
        "density": nx.density(analysis.directed),
        # Share of directed ties that are returned
        "reciprocity": (2 * n_mutual / n_edges) if n_edges else 0.0,
        "n_isolated_mutual": sum(1 for _ in nx.isolates(analysis.mutual)),
    }
    for method, assignment in analysis.communities.items():
        scalars[f"{method}_n_communities"] = assignment.n_communities
        scalars[f"{method}_modularity"] = assignment.modularity
    return scalars
