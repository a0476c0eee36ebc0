"""Error and warning types raised by the network and analysis modules."""


class MalformedInputError(ValueError):
    """Raised when an adjacency matrix is not a valid labeled square 0/1 matrix."""


class UnknownNodeError(KeyError):
    """Raised when a node identifier is not in the graph's node set."""

    def __init__(self, node: str) -> None:
        super().__init__(node)
        self.node = node

    def __str__(self) -> str:
        return f"Unknown node: {self.node!r}"


class NumericNonConvergence(RuntimeWarning):
    """Warned when an iterative solver misses its tolerance.

    The accompanying result is a best-effort estimate, not a failure.
    """


class NetworkGenerationError(Exception):
    """Raised when synthetic network generation fails after all retry attempts."""
