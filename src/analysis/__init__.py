"""Centrality measures, community detection and the analysis pipeline."""

from src.analysis.centrality import (
    DegreeMode,
    betweenness,
    degree,
    eigen_centrality,
    node_degree,
    page_rank,
)
from src.analysis.community import (
    CommunityAssignment,
    girvan_newman,
    greedy_modularity,
    modularity,
)
from src.analysis.pipeline import (
    CENTRALITY_MEASURES,
    NetworkAnalysis,
    analyze_network,
    node_profile,
    node_table,
    summary_scalars,
    top_nodes,
)

__all__ = [
    "CENTRALITY_MEASURES",
    "CommunityAssignment",
    "DegreeMode",
    "NetworkAnalysis",
    "analyze_network",
    "betweenness",
    "degree",
    "eigen_centrality",
    "girvan_newman",
    "greedy_modularity",
    "modularity",
    "node_degree",
    "node_profile",
    "node_table",
    "page_rank",
    "summary_scalars",
    "top_nodes",
]
