"""Adjacency matrix loading, validation, graph building and synthetic networks."""

from src.network.builder import build_directed_graph, mutualize
from src.network.errors import (
    MalformedInputError,
    NetworkGenerationError,
    NumericNonConvergence,
    UnknownNodeError,
)
from src.network.loader import read_adjacency_csv, write_adjacency_csv
from src.network.synthetic import generate_social_network
from src.network.types import (
    AdjacencyMatrix,
    DirectedGraph,
    MutualGraph,
    validate_adjacency,
)

__all__ = [
    "AdjacencyMatrix",
    "DirectedGraph",
    "MalformedInputError",
    "MutualGraph",
    "NetworkGenerationError",
    "NumericNonConvergence",
    "UnknownNodeError",
    "build_directed_graph",
    "generate_social_network",
    "mutualize",
    "read_adjacency_csv",
    "validate_adjacency",
    "write_adjacency_csv",
]
