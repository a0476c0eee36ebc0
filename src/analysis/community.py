"""Community detection on the mutual (reciprocated-tie) graph.

Two alternatives, both delegated to networkx:

- greedy_modularity: Clauset-Newman-Moore agglomeration. networkx keeps
  candidate merges in a heap keyed on (-dq, i, j), so among equal
  modularity gains the pair with the lowest node indices merges first.
  Merging stops once no merge increases modularity, which is the
  modularity-maximizing cut of the dendrogram.
- girvan_newman: repeated removal of the highest-betweenness edge. Every
  partition the removals produce is scored and the best one is kept; on
  ties the earliest (coarsest) partition wins. Among edges with equal
  betweenness, networkx removes the first in edge iteration order.

Labels are renumbered 0..k-1 by descending community size, then by the
position of the community's first node in graph order. Labels from the
two methods are not comparable.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterable

import networkx as nx

from src.network.errors import UnknownNodeError

log = logging.getLogger(__name__)

GREEDY_MODULARITY = "greedy_modularity"
GIRVAN_NEWMAN = "girvan_newman"


@dataclass(frozen=True)
class CommunityAssignment:
    """Immutable node -> community label mapping from one detection method."""

    method: str
    membership: dict[str, int] = field(default_factory=dict)
    modularity: float = 0.0

    @property
    def n_communities(self) -> int:
        return len(set(self.membership.values()))

    def communities(self) -> list[list[str]]:
        """Members of each community, indexed by label."""
        groups: list[list[str]] = [[] for _ in range(self.n_communities)]
        for node, label in self.membership.items():
            groups[label].append(node)
        return groups

    def sizes(self) -> list[int]:
        return [len(group) for group in self.communities()]

    def label_of(self, node: str) -> int:
        if node not in self.membership:
            raise UnknownNodeError(node)
        return self.membership[node]


def _require_undirected(graph: nx.Graph) -> None:
    if graph.is_directed():
        raise ValueError(
            "Community detection expects the undirected mutual graph; "
            "call mutualize() first"
        )


def modularity(graph: nx.Graph, communities: Iterable[Iterable[str]]) -> float:
    """Newman modularity of a partition; 0.0 by convention without edges."""
    if graph.number_of_edges() == 0:
        return 0.0
    return float(nx.community.modularity(graph, [set(c) for c in communities]))


def _assignment(
    graph: nx.Graph, method: str, communities: Iterable[Iterable[str]], q: float
) -> CommunityAssignment:
    position = {node: i for i, node in enumerate(graph)}
    ordered = sorted(
        (sorted(c, key=position.__getitem__) for c in communities),
        key=lambda members: (-len(members), position[members[0]]),
    )
    membership = {
        node: label for label, members in enumerate(ordered) for node in members
    }
    # Graph node order, not community order
    membership = {node: membership[node] for node in graph}
    return CommunityAssignment(method=method, membership=membership, modularity=q)


def greedy_modularity(graph: nx.Graph) -> CommunityAssignment:
    """Partition by greedy modularity maximization.

    An edgeless graph yields one singleton community per node.
    """
    _require_undirected(graph)
    if graph.number_of_edges() == 0:
        communities = [{node} for node in graph]
    else:
        communities = nx.community.greedy_modularity_communities(graph)

    q = modularity(graph, communities)
    result = _assignment(graph, GREEDY_MODULARITY, communities, q)
    log.info(
        "Greedy modularity: %d communities, Q=%.4f",
        result.n_communities, result.modularity,
    )
    return result


def girvan_newman(
    graph: nx.Graph, max_levels: int | None = None
) -> CommunityAssignment:
    """Partition by iterative edge-betweenness removal.

    The starting partition is the graph's connected components. Each
    level of networkx's girvan_newman removes highest-betweenness edges
    (recomputed after every removal) until one more component splits off;
    levels where no component splits leave modularity unchanged, so
    scoring each level covers every removal step.

    Args:
        graph: Undirected mutual graph.
        max_levels: Stop after this many splits (None = until no edges
            remain).

    Returns:
        The highest-modularity partition observed.
    """
    _require_undirected(graph)
    best = [set(c) for c in nx.connected_components(graph)]
    best_q = modularity(graph, best)
    log.debug("Girvan-Newman level 0: %d communities, Q=%.4f", len(best), best_q)

    if graph.number_of_edges() > 0:
        levels = nx.community.girvan_newman(graph)
        if max_levels is not None:
            levels = itertools.islice(levels, max_levels)
        for level, partition in enumerate(levels, start=1):
            q = modularity(graph, partition)
            log.debug(
                "Girvan-Newman level %d: %d communities, Q=%.4f",
                level, len(partition), q,
            )
            if q > best_q:
                best, best_q = [set(c) for c in partition], q

    result = _assignment(graph, GIRVAN_NEWMAN, best, best_q)
    log.info(
        "Girvan-Newman: %d communities, Q=%.4f",
        result.n_communities, result.modularity,
    )
    return result
