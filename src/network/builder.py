"""Directed and mutual graph construction from an adjacency matrix."""

import logging

import networkx as nx
import numpy as np

from src.network.types import AdjacencyMatrix, DirectedGraph, MutualGraph

log = logging.getLogger(__name__)


def build_directed_graph(adjacency: AdjacencyMatrix) -> DirectedGraph:
    """Convert an adjacency matrix into a frozen directed graph.

    Nodes are the matrix labels in matrix order; (u, v) is an edge iff
    values[u, v] != 0. The graph is frozen, so any later attempt to add
    or remove nodes or edges raises networkx.NetworkXError.
    """
    graph = nx.DiGraph()
    graph.add_nodes_from(adjacency.labels)
    rows, cols = np.nonzero(adjacency.values)
    graph.add_edges_from(
        (adjacency.labels[i], adjacency.labels[j]) for i, j in zip(rows, cols)
    )
    log.debug(
        "Directed graph: %d nodes, %d edges",
        graph.number_of_nodes(), graph.number_of_edges(),
    )
    return nx.freeze(graph)


def mutualize(directed: DirectedGraph) -> MutualGraph:
    """Derive the undirected graph of reciprocated ties.

    {u, v} is an edge iff both (u, v) and (v, u) are in `directed`.
    Node order and node set are preserved, so one-sided people stay as
    isolated nodes.
    """
    mutual = nx.Graph()
    mutual.add_nodes_from(directed.nodes)
    mutual.add_edges_from(
        (u, v) for u, v in directed.edges if directed.has_edge(v, u)
    )
    log.debug(
        "Mutual graph: %d nodes, %d edges",
        mutual.number_of_nodes(), mutual.number_of_edges(),
    )
    return nx.freeze(mutual)
