"""Adjacency matrix container and graph type aliases."""

from collections import Counter
from dataclasses import dataclass
from typing import Sequence, TypeAlias

import networkx as nx
import numpy as np

from src.network.errors import MalformedInputError

# Frozen networkx graphs: structure is fixed once built.
DirectedGraph: TypeAlias = nx.DiGraph
MutualGraph: TypeAlias = nx.Graph


def validate_adjacency(
    row_labels: Sequence[str],
    col_labels: Sequence[str],
    values: np.ndarray,
) -> list[str]:
    """Validate a labeled adjacency matrix.

    Checks (cheapest first):
    1. Two-dimensional and square
    2. Row and column labels match the matrix shape
    3. Row and column labels are identical and in the same order
    4. Labels are unique
    5. All cells are finite numbers
    6. Zero diagonal (no self-loops)

    Returns:
        List of error strings (empty = valid matrix).
    """
    errors: list[str] = []

    if values.ndim != 2:
        return [f"Adjacency matrix must be 2-dimensional, got {values.ndim} dims"]

    n_rows, n_cols = values.shape
    if n_rows != n_cols:
        errors.append(f"Adjacency matrix is not square: {n_rows} x {n_cols}")
    if len(row_labels) != n_rows or len(col_labels) != n_cols:
        errors.append(
            f"Label counts ({len(row_labels)} rows, {len(col_labels)} columns) "
            f"do not match matrix shape {n_rows} x {n_cols}"
        )
    if errors:
        return errors

    if list(row_labels) != list(col_labels):
        mismatched = [
            (r, c) for r, c in zip(row_labels, col_labels) if r != c
        ]
        errors.append(
            f"Row and column labels differ at {len(mismatched)} positions, "
            f"first: {mismatched[0]}"
        )

    if len(set(row_labels)) != len(row_labels):
        dupes = sorted(x for x, count in Counter(row_labels).items() if count > 1)
        errors.append(f"Duplicate node labels: {dupes}")

    if not np.issubdtype(values.dtype, np.number):
        errors.append(f"Adjacency matrix must be numeric, got dtype {values.dtype}")
        return errors

    if not np.all(np.isfinite(values)):
        errors.append("Adjacency matrix contains missing or non-finite cells")
        return errors

    diagonal = np.diag(values)
    if np.any(diagonal != 0):
        loops = [row_labels[i] for i in np.flatnonzero(diagonal)]
        errors.append(f"Nonzero diagonal (self-loops) at: {loops}")

    return errors


@dataclass(frozen=True)
class AdjacencyMatrix:
    """Immutable labeled square adjacency matrix.

    Entry values[i, j] != 0 means a tie from labels[i] to labels[j].
    Omits slots=True since numpy arrays don't interact well with __slots__.
    """

    labels: tuple[str, ...]  # node identifiers, same order for rows and columns
    values: np.ndarray  # (n, n) int8, entries in {0, 1}

    @property
    def n(self) -> int:
        return len(self.labels)

    @property
    def n_edges(self) -> int:
        return int(np.count_nonzero(self.values))

    @classmethod
    def from_arrays(
        cls,
        row_labels: Sequence[str],
        col_labels: Sequence[str],
        values: np.ndarray,
    ) -> "AdjacencyMatrix":
        """Validate and build an AdjacencyMatrix.

        Nonzero cells become 1; the stored array is read-only.

        Raises:
            MalformedInputError: If validate_adjacency reports any error.
        """
        values = np.asarray(values)
        errors = validate_adjacency(row_labels, col_labels, values)
        if errors:
            raise MalformedInputError("; ".join(errors))

        binary = (values != 0).astype(np.int8)
        binary.setflags(write=False)
        return cls(labels=tuple(str(x) for x in row_labels), values=binary)
