"""Default parameters for algorithm runs and edge-list ingestion."""

from dataclasses import dataclass

# Whitespace separated "<from> <to> [cost] [capacity]" lines.
DEFAULT_PATTERN = (
    r"^\s*(?P<from>\S+)\s+(?P<to>\S+)"
    r"(?:\s+(?P<cost>\S+))?(?:\s+(?P<cap>\S+))?\s*$"
)


@dataclass
class AlgorithmConfig:
    """Defaults used by the runner and the command-line interface."""

    # Teleport probability for PageRank
    beta: float = 0.2

    # Convergence tolerance on the L2 distance between successive rank vectors
    eps: float = 1e-6

    # Start node for searches and shortest paths when no name is given
    start_id: int = 0

    # Edge-list parsing
    pattern: str = DEFAULT_PATTERN
    skip: int = 0

    # Maximum number of result rows printed by the CLI
    limit: int = 100


# Global configuration instance
DEFAULTS = AlgorithmConfig()
