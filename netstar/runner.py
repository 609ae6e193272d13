"""Algorithm selection and result presentation.

`run_algorithm` dispatches one of the supported algorithms on a network and
returns a typed result; the ``*_rows`` helpers translate node ids back to
names for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, List, Optional, Type, Union

import numpy as np

from netstar.algorithms.base import NodeId, SearchDiscipline
from netstar.algorithms.heaps import BinaryHeap, FibonacciHeap, PriorityQueue
from netstar.algorithms.pagerank import pagerank
from netstar.algorithms.search import reached_nodes, traverse
from netstar.algorithms.spf import dijkstra
from netstar.config import DEFAULTS
from netstar.graph.compact_star import CompactNetwork
from netstar.graph.node_map import NameMap
from netstar.logging import get_logger

logger = get_logger(__name__)

#: Placeholder name for the invalid sentinel and unmapped ids.
NO_NAME = "NONE"

HEAPS = {"binary": BinaryHeap, "fibonacci": FibonacciHeap}


class Algorithm(str, Enum):
    """Algorithms selectable by name."""

    BFS = "bfs"
    DFS = "dfs"
    DIJKSTRA = "dijkstra"
    PAGERANK = "pagerank"


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a breadth-first or depth-first search."""

    start: NodeId
    pred: List[NodeId]
    order: List[int]
    invalid_id: NodeId


@dataclass(frozen=True)
class ShortestPathResult:
    """Outcome of a single-source shortest-path run."""

    source: NodeId
    pred: List[NodeId]
    dist: List[float]
    invalid_id: NodeId


@dataclass(frozen=True)
class RankResult:
    """Outcome of a PageRank run."""

    ranks: np.ndarray
    beta: float
    eps: float


AlgorithmResult = Union[SearchResult, ShortestPathResult, RankResult]


def resolve_heap(name: str) -> Type[PriorityQueue]:
    """Return the priority queue class registered under ``name``.

    Raises:
        ValueError: If ``name`` is not a known heap.
    """
    try:
        return HEAPS[name.lower()]
    except KeyError:
        valid = ", ".join(HEAPS)
        raise ValueError(f"Unknown heap '{name}'. Valid values are: {valid}") from None


def run_algorithm(
    network: CompactNetwork,
    algorithm: Union[Algorithm, str],
    start: NodeId = DEFAULTS.start_id,
    use_heap: bool = False,
    heap: str = "binary",
    beta: float = DEFAULTS.beta,
    eps: float = DEFAULTS.eps,
) -> AlgorithmResult:
    """Run one algorithm on ``network``.

    Args:
        network: Network to analyze.
        algorithm: `Algorithm` member or its value (``"bfs"``, ...).
        start: Start/source node id for searches and Dijkstra.
        use_heap: Use the priority-queue Dijkstra.
        heap: Heap name for the priority-queue Dijkstra.
        beta: PageRank teleport probability.
        eps: PageRank convergence tolerance.

    Returns:
        SearchResult, ShortestPathResult or RankResult.
    """
    algorithm = Algorithm(algorithm)
    logger.debug("Running %s", algorithm.value)

    if algorithm in (Algorithm.BFS, Algorithm.DFS):
        discipline = SearchDiscipline.from_string(algorithm.value)
        pred, order = traverse(network, start, discipline)
        return SearchResult(start, pred, order, network.invalid_id())

    if algorithm == Algorithm.DIJKSTRA:
        pred, dist = dijkstra(
            network, start, use_heap=use_heap, heap_cls=resolve_heap(heap)
        )
        return ShortestPathResult(start, pred, dist, network.invalid_id())

    ranks = pagerank(network, beta=beta, eps=eps)
    return RankResult(ranks, beta, eps)


def _name(
    name_map: Optional[NameMap], index: NodeId, invalid_id: Optional[NodeId] = None
) -> str:
    if index == invalid_id:
        return NO_NAME
    if name_map is None:
        return str(index)
    name: Optional[Hashable] = name_map.name_of(index)
    return NO_NAME if name is None else str(name)


def search_rows(
    result: SearchResult,
    name_map: Optional[NameMap] = None,
    limit: Optional[int] = None,
) -> List[List[str]]:
    """Rows of ``[predecessor, node, order]`` for reached nodes, in visit order."""
    reached = reached_nodes(result.pred, result.start, result.invalid_id)
    reached.sort(key=lambda v: result.order[v])
    rows = [
        [
            _name(name_map, result.pred[v], result.invalid_id),
            _name(name_map, v),
            str(result.order[v]),
        ]
        for v in reached
    ]
    return rows if limit is None else rows[:limit]


def shortest_path_rows(
    result: ShortestPathResult,
    name_map: Optional[NameMap] = None,
    limit: Optional[int] = None,
) -> List[List[str]]:
    """Rows of ``[predecessor, node, distance]`` in node id order."""
    count = len(result.pred) if limit is None else min(limit, len(result.pred))
    return [
        [
            _name(name_map, result.pred[v], result.invalid_id),
            _name(name_map, v),
            f"{result.dist[v]:g}",
        ]
        for v in range(count)
    ]


def rank_rows(
    result: RankResult,
    name_map: Optional[NameMap] = None,
    limit: Optional[int] = None,
) -> List[List[str]]:
    """Rows of ``[node, rank]``, highest rank first (ties by id)."""
    order = sorted(range(len(result.ranks)), key=lambda v: (-result.ranks[v], v))
    if limit is not None:
        order = order[:limit]
    return [[_name(name_map, v), f"{result.ranks[v]:.6e}"] for v in order]
