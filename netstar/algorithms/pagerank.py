"""PageRank by power iteration over a `CompactNetwork`.

Each iteration propagates ``(1 - beta) * rank[i] / out_degree(i)`` along every
arc ``i -> j``. Nodes without outgoing arcs propagate nothing; their mass is
not redistributed along arcs. The shortfall ``1 - sum(new_rank)``, which
covers both the teleport share and the dangling leak, is then spread evenly
over all nodes. Iteration stops when the L2 distance between successive rank
vectors is at most ``eps``.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from netstar.graph.compact_star import CompactNetwork
from netstar.logging import get_logger

logger = get_logger(__name__)


class ProbabilityMassError(ArithmeticError):
    """Propagated rank mass exceeded 1.0.

    Signals a misconfigured ``beta`` (typically exactly 0) or a numerical
    defect. The computation is aborted rather than clamped.
    """


def inverse_out_degrees(network: CompactNetwork) -> np.ndarray:
    """Return ``1 / out_degree`` per node, with 0.0 for dangling nodes."""
    out_degree = np.diff(network.point).astype(np.float64)
    inv = np.zeros_like(out_degree)
    np.divide(1.0, out_degree, out=inv, where=out_degree > 0)
    return inv


def propagate(
    network: CompactNetwork,
    ranks: np.ndarray,
    beta: float,
    inv_out_degree: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Return the rank mass arriving at each node along arcs (no smoothing)."""
    if inv_out_degree is None:
        inv_out_degree = inverse_out_degrees(network)
    tail = network.tail
    contributions = (1.0 - beta) * inv_out_degree[tail] * ranks[tail]
    return np.bincount(
        network.head, weights=contributions, minlength=network.num_nodes()
    ).astype(np.float64)


def redistribute(ranks: np.ndarray) -> np.ndarray:
    """Spread ``1 - sum(ranks)`` evenly over all nodes, in place.

    Raises:
        ProbabilityMassError: If ``sum(ranks)`` exceeds 1.0.
    """
    total = float(ranks.sum())
    if total > 1.0:
        raise ProbabilityMassError(
            f"Propagated rank mass {total!r} exceeds 1.0; check beta."
        )
    ranks += (1.0 - total) / len(ranks)
    return ranks


def rank_distance(old: np.ndarray, new: np.ndarray) -> float:
    """Euclidean distance between two rank vectors."""
    return float(np.linalg.norm(new - old))


def pagerank(
    network: CompactNetwork,
    beta: float = 0.2,
    eps: float = 1e-6,
    max_iter: Optional[int] = None,
) -> np.ndarray:
    """Compute PageRank scores using power iteration.

    Args:
        network: Directed network; costs and capacities are ignored.
        beta: Teleport probability in ``[0, 1]``. Avoid exactly 0: rounding
            can push the propagated mass above 1.0, which is fatal.
        eps: Convergence tolerance on the L2 distance between iterations.
        max_iter: Optional iteration cap. When reached, a warning is logged
            and the latest vector is returned.

    Returns:
        np.ndarray of length ``n`` with ranks summing to ~1.0 (empty for an
        empty network). This is the newest iterate, the one whose distance to
        its predecessor is within ``eps``; the predecessor itself is dropped.

    Raises:
        ValueError: If ``beta`` is outside ``[0, 1]`` or ``eps`` is not positive.
        ProbabilityMassError: If the propagated mass ever exceeds 1.0.

    Example:
        >>> network = build_network(4, [(0, 1, 0, 0), (0, 2, 0, 0), (0, 3, 0, 0),
        ...     (1, 2, 0, 0), (1, 3, 0, 0), (2, 0, 0, 0), (3, 0, 0, 0), (3, 2, 0, 0)])
        >>> pagerank(network, beta=0.2, eps=1e-9).round(3)
        array([0.362, 0.146, 0.287, 0.205])
    """
    if not (0.0 <= beta <= 1.0):
        raise ValueError(f"beta must be in [0, 1], got {beta}")
    if not eps > 0:
        raise ValueError(f"eps must be positive, got {eps}")
    if max_iter is not None and max_iter < 1:
        raise ValueError(f"max_iter must be at least 1, got {max_iter}")
    if beta == 0.0:
        logger.warning(
            "PageRank with beta=0 may fail: rounding can push rank mass above 1.0"
        )

    n = network.num_nodes()
    if n == 0:
        return np.array([], dtype=np.float64)

    inv_out_degree = inverse_out_degrees(network)
    ranks = np.full(n, 1.0 / n, dtype=np.float64)

    iteration = 0
    while True:
        iteration += 1
        new_ranks = redistribute(propagate(network, ranks, beta, inv_out_degree))
        distance = rank_distance(ranks, new_ranks)
        logger.debug(
            "PageRank iteration %d: distance %e (eps %e)", iteration, distance, eps
        )

        if distance <= eps:
            logger.debug("PageRank converged after %d iterations", iteration)
            return new_ranks
        if max_iter is not None and iteration >= max_iter:
            logger.warning(
                "PageRank stopped after %d iterations without converging "
                "(distance %e > eps %e)",
                iteration,
                distance,
                eps,
            )
            return new_ranks
        ranks = new_ranks
