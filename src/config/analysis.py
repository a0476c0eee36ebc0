"""Analysis configuration dataclasses, all frozen and slotted."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    """Synthetic social network generation parameters."""

    n: int = 30  # number of people
    K: int = 3  # number of friend groups
    p_in: float = 0.35  # in-group tie probability
    p_out: float = 0.04  # out-group tie probability
    reciprocity: float = 0.6  # chance a tie is returned
    label_prefix: str = "P"


@dataclass(frozen=True, slots=True)
class CentralityConfig:
    """Solver parameters for the centrality measures."""

    damping: float = 0.85  # PageRank damping (teleport probability 0.15)
    eigen_max_iter: int = 1000
    eigen_tol: float = 1e-6
    pagerank_max_iter: int = 100
    pagerank_tol: float = 1e-6
    normalized_betweenness: bool = False


@dataclass(frozen=True, slots=True)
class CommunityConfig:
    """Community detection parameters."""

    max_girvan_newman_levels: int | None = None  # None = remove every edge


@dataclass(frozen=True, slots=True)
class PlotConfig:
    """Static figure parameters."""

    layout_seed: int = 7
    top_k: int = 10
    min_node_size: float = 80.0
    max_node_size: float = 900.0


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Top-level analysis configuration composing all sub-configs.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ to reject invalid configurations early.
    """

    network: NetworkConfig = field(default_factory=NetworkConfig)
    centrality: CentralityConfig = field(default_factory=CentralityConfig)
    community: CommunityConfig = field(default_factory=CommunityConfig)
    plot: PlotConfig = field(default_factory=PlotConfig)
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.network.K < 1 or self.network.n < self.network.K:
            raise ValueError(
                f"n ({self.network.n}) must be >= K ({self.network.K}) >= 1"
            )
        for name in ("p_in", "p_out", "reciprocity"):
            value = getattr(self.network, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if not 0.0 < self.centrality.damping < 1.0:
            raise ValueError(
                f"damping must be in (0, 1), got {self.centrality.damping}"
            )
        if self.centrality.eigen_max_iter < 1 or self.centrality.pagerank_max_iter < 1:
            raise ValueError("solver max_iter values must be >= 1")
        levels = self.community.max_girvan_newman_levels
        if levels is not None and levels < 1:
            raise ValueError(
                f"max_girvan_newman_levels must be >= 1 or None, got {levels}"
            )
        if self.plot.min_node_size > self.plot.max_node_size:
            raise ValueError(
                f"min_node_size ({self.plot.min_node_size}) must be "
                f"<= max_node_size ({self.plot.max_node_size})"
            )
        if self.plot.top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {self.plot.top_k}")
