"""CSV reading and writing for labeled adjacency matrices.

The file layout is a square table: the header row and the first column both
hold node identifiers in the same order, the remaining cells are 0/1 ties.
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from src.network.errors import MalformedInputError
from src.network.types import AdjacencyMatrix

log = logging.getLogger(__name__)


def read_adjacency_csv(path: str | Path) -> AdjacencyMatrix:
    """Read a labeled adjacency matrix from a UTF-8 CSV file.

    Args:
        path: CSV file with matching header row and first column.

    Returns:
        Validated AdjacencyMatrix (nonzero cells become 1).

    Raises:
        FileNotFoundError: If path does not exist.
        MalformedInputError: If the table is empty, not square, has
            mismatched or duplicate labels, non-numeric cells, or a
            nonzero diagonal.
    """
    path = Path(path)
    try:
        frame = pd.read_csv(
            path,
            index_col=0,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8",
        )
    except pd.errors.EmptyDataError as e:
        raise MalformedInputError(f"{path} is empty") from e
    except pd.errors.ParserError as e:
        raise MalformedInputError(f"{path} is not a valid CSV table: {e}") from e

    row_labels = [str(x).strip() for x in frame.index]
    col_labels = [str(x).strip() for x in frame.columns]

    numeric = frame.apply(lambda col: pd.to_numeric(col.str.strip(), errors="coerce"))
    values = numeric.to_numpy(dtype=np.float64)

    bad_cells = int(np.isnan(values).sum())
    if bad_cells:
        log.debug("%s: %d non-numeric or empty cells", path, bad_cells)

    finite = values[np.isfinite(values)]
    if finite.size and not np.isin(finite, (0.0, 1.0)).all():
        log.warning(
            "%s: entries outside {0, 1} found; treating every nonzero cell as a tie",
            path,
        )

    adjacency = AdjacencyMatrix.from_arrays(row_labels, col_labels, values)
    log.info(
        "Loaded %s: %d nodes, %d directed ties",
        path, adjacency.n, adjacency.n_edges,
    )
    return adjacency


def write_adjacency_csv(adjacency: AdjacencyMatrix, path: str | Path) -> Path:
    """Write an AdjacencyMatrix in the layout read_adjacency_csv expects.

    Args:
        adjacency: Matrix to write.
        path: Destination file. Parent directories are created if absent.

    Returns:
        The written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame = pd.DataFrame(
        adjacency.values,
        index=list(adjacency.labels),
        columns=list(adjacency.labels),
    )
    frame.to_csv(path, encoding="utf-8")
    log.info("Adjacency matrix written to %s", path)
    return path
