"""Compact star (forward and reverse star) network representation.

`CompactNetwork` stores a directed network with arc costs and capacities in
flat, read-only arrays grouped by source node (forward star) plus an index of
the same arcs grouped by target node (reverse star). See Ahuja, Magnanti,
Orlin: "Network Flows", section 2.3.

Layout, for ``n`` nodes and ``m`` arcs:
    - ``point[0..n]``: arcs leaving node ``i`` occupy ``[point[i], point[i+1])``
      of ``tail``/``head``/``costs``/``capacities``.
    - ``rpoint[0..n]`` and ``trace[0..m)``: arcs entering node ``j`` are
      ``trace[rpoint[j]:rpoint[j+1]]`` (positions in the forward arrays).

The network is built once and never mutated, so one instance can be shared by
any number of algorithm calls.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, List, NamedTuple, Optional, Sequence

import numpy as np

from netstar.algorithms.base import Capacity, Cost, NodeId
from netstar.logging import get_logger

logger = get_logger(__name__)


class Arc(NamedTuple):
    """Directed arc ``tail -> head``; an undirected edge is two arcs."""

    tail: NodeId
    head: NodeId
    cost: Cost = 0.0
    capacity: Capacity = 0.0


def _readonly(values: Sequence[Any], dtype: Any) -> np.ndarray:
    arr = np.asarray(values, dtype=dtype)
    arr.flags.writeable = False
    return arr


def _index_from_counts(counts: np.ndarray) -> np.ndarray:
    """Return ``[0, c0, c0+c1, ...]`` (length ``len(counts) + 1``)."""
    index = np.zeros(len(counts) + 1, dtype=np.int64)
    np.cumsum(counts, out=index[1:])
    return index


def _check_node_id(value: Any, num_nodes: int, position: int, role: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(
            f"Arc {position}: {role} id {value!r} is not an integer node id."
        )
    node = int(value)
    if node < 0 or node >= num_nodes:
        raise ValueError(
            f"Arc {position}: {role} id {node} is outside [0, {num_nodes}); "
            "node ids must be contiguous."
        )
    return node


class CompactNetwork:
    """Immutable directed network in compact star representation.

    Instances are created with `build_network` (or `CompactNetwork.build`).
    Arcs are stored grouped by source id; within one source, arcs keep the
    relative order in which they were supplied.

    Complexity:
        - adjacent_nodes: O(deg(v))
        - cost / capacity: O(deg(v)), first matching arc only
        - incoming_nodes: O(indeg(v))
    """

    __slots__ = (
        "_num_nodes",
        "_point",
        "_rpoint",
        "_tail",
        "_head",
        "_trace",
        "_costs",
        "_capacities",
        "_cost_sum",
    )

    def __init__(
        self,
        num_nodes: int,
        point: np.ndarray,
        rpoint: np.ndarray,
        tail: np.ndarray,
        head: np.ndarray,
        trace: np.ndarray,
        costs: np.ndarray,
        capacities: np.ndarray,
        cost_sum: float,
    ) -> None:
        """Wrap pre-built arrays. Prefer `build_network` for construction."""
        self._num_nodes = num_nodes
        self._point = point
        self._rpoint = rpoint
        self._tail = tail
        self._head = head
        self._trace = trace
        self._costs = costs
        self._capacities = capacities
        self._cost_sum = cost_sum

    @classmethod
    def build(cls, num_nodes: int, arcs: Iterable[Sequence[Any]]) -> CompactNetwork:
        """Alias for `build_network`."""
        return build_network(num_nodes, arcs)

    #
    # Raw arrays (read-only views)
    #
    @property
    def point(self) -> np.ndarray:
        return self._point

    @property
    def rpoint(self) -> np.ndarray:
        return self._rpoint

    @property
    def tail(self) -> np.ndarray:
        return self._tail

    @property
    def head(self) -> np.ndarray:
        return self._head

    @property
    def trace(self) -> np.ndarray:
        return self._trace

    @property
    def costs(self) -> np.ndarray:
        return self._costs

    @property
    def capacities(self) -> np.ndarray:
        return self._capacities

    #
    # Queries
    #
    def num_nodes(self) -> int:
        return self._num_nodes

    def num_arcs(self) -> int:
        return len(self._tail)

    def invalid_id(self) -> NodeId:
        """Return the sentinel id ``n`` meaning "no predecessor" / "not found"."""
        return self._num_nodes

    def infinity(self) -> float:
        """Return the sum of all arc costs.

        No simple path is longer than this, so it serves as a finite
        "infinite" distance for non-negative relaxation.
        """
        return self._cost_sum

    def has_node(self, node: Any) -> bool:
        if isinstance(node, bool) or not isinstance(node, (int, np.integer)):
            return False
        return 0 <= int(node) < self._num_nodes

    def _out_range(self, node: NodeId) -> range:
        return range(int(self._point[node]), int(self._point[node + 1]))

    def adjacent_nodes(self, node: NodeId) -> List[NodeId]:
        """Return the targets of all arcs leaving ``node``.

        Duplicates from parallel arcs are kept; order is the original relative
        insertion order, not sorted by target.

        Raises:
            KeyError: If ``node`` is not a valid node id.
        """
        if not self.has_node(node):
            raise KeyError(f"Node {node!r} is not in the network.")
        lower, upper = self._point[node], self._point[node + 1]
        return self._head[lower:upper].tolist()

    def out_degree(self, node: NodeId) -> int:
        """Return the number of arcs leaving ``node`` (parallel arcs counted)."""
        if not self.has_node(node):
            raise KeyError(f"Node {node!r} is not in the network.")
        return int(self._point[node + 1] - self._point[node])

    def incoming_nodes(self, node: NodeId) -> List[NodeId]:
        """Return the sources of all arcs entering ``node``.

        Reads the reverse star (``rpoint``/``trace``); no algorithm in this
        package needs it yet, it is kept for reverse traversals.

        Raises:
            KeyError: If ``node`` is not a valid node id.
        """
        if not self.has_node(node):
            raise KeyError(f"Node {node!r} is not in the network.")
        lower, upper = self._rpoint[node], self._rpoint[node + 1]
        return self._tail[self._trace[lower:upper]].tolist()

    def arc_index(self, from_node: NodeId, to_node: NodeId) -> Optional[int]:
        """Return the storage position of the first arc ``from_node -> to_node``.

        Returns:
            Position into the forward arrays, or None if no such arc exists or
            ``from_node`` is unknown.
        """
        if not self.has_node(from_node):
            return None
        lower, upper = int(self._point[from_node]), int(self._point[from_node + 1])
        matches = np.flatnonzero(self._head[lower:upper] == to_node)
        if matches.size == 0:
            return None
        return lower + int(matches[0])

    def cost(self, from_node: NodeId, to_node: NodeId) -> Optional[float]:
        """Return the cost of the first arc ``from_node -> to_node``, or None."""
        index = self.arc_index(from_node, to_node)
        if index is None:
            return None
        return float(self._costs[index])

    def capacity(self, from_node: NodeId, to_node: NodeId) -> Optional[float]:
        """Return the capacity of the first arc ``from_node -> to_node``, or None."""
        index = self.arc_index(from_node, to_node)
        if index is None:
            return None
        return float(self._capacities[index])

    def arcs(self) -> Iterator[Arc]:
        """Iterate over all arcs in storage order (grouped by source)."""
        for tail, head, cost, cap in zip(
            self._tail.tolist(),
            self._head.tolist(),
            self._costs.tolist(),
            self._capacities.tolist(),
        ):
            yield Arc(tail, head, cost, cap)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompactNetwork):
            return NotImplemented
        return (
            self._num_nodes == other._num_nodes
            and self._cost_sum == other._cost_sum
            and np.array_equal(self._point, other._point)
            and np.array_equal(self._rpoint, other._rpoint)
            and np.array_equal(self._tail, other._tail)
            and np.array_equal(self._head, other._head)
            and np.array_equal(self._trace, other._trace)
            and np.array_equal(self._costs, other._costs)
            and np.array_equal(self._capacities, other._capacities)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"CompactNetwork(num_nodes={self._num_nodes}, "
            f"num_arcs={self.num_arcs()}, cost_sum={self._cost_sum})"
        )


def build_network(num_nodes: int, arcs: Iterable[Sequence[Any]]) -> CompactNetwork:
    """Create a `CompactNetwork` from a node count and a list of arcs.

    Arcs are stably sorted by source id, so arcs of the same source keep the
    order in which they were given. The input is not modified.

    Args:
        num_nodes: Number of nodes. Node ids must lie in ``[0, num_nodes)``.
        arcs: ``(from, to, cost, capacity)`` tuples (or `Arc` instances).

    Returns:
        CompactNetwork: The immutable network.

    Raises:
        ValueError: If ``num_nodes`` is negative, an arc is malformed, or an
            endpoint is not an integer id in ``[0, num_nodes)``.
    """
    if isinstance(num_nodes, bool) or not isinstance(num_nodes, (int, np.integer)):
        raise ValueError(f"num_nodes must be an integer, got {num_nodes!r}.")
    num_nodes = int(num_nodes)
    if num_nodes < 0:
        raise ValueError(f"num_nodes must be non-negative, got {num_nodes}.")

    tails: List[int] = []
    heads: List[int] = []
    costs: List[float] = []
    caps: List[float] = []
    for position, arc in enumerate(arcs):
        if len(arc) != 4:
            raise ValueError(
                f"Arc {position}: expected (from, to, cost, capacity), got {arc!r}."
            )
        from_node, to_node, cost, cap = arc
        tails.append(_check_node_id(from_node, num_nodes, position, "source"))
        heads.append(_check_node_id(to_node, num_nodes, position, "target"))
        costs.append(float(cost))
        caps.append(float(cap))

    tail_arr = np.asarray(tails, dtype=np.int64)
    order = np.argsort(tail_arr, kind="stable")

    tail_sorted = tail_arr[order]
    head_sorted = np.asarray(heads, dtype=np.int64)[order]
    cost_sorted = np.asarray(costs, dtype=np.float64)[order]
    cap_sorted = np.asarray(caps, dtype=np.float64)[order]

    point = _index_from_counts(np.bincount(tail_sorted, minlength=num_nodes))
    rpoint = _index_from_counts(np.bincount(head_sorted, minlength=num_nodes))
    trace = np.argsort(head_sorted, kind="stable")

    # Summed in storage order for reproducible rounding
    cost_sum = 0.0
    for value in cost_sorted.tolist():
        cost_sum += value

    logger.debug(
        "Built compact network: %d nodes, %d arcs, cost sum %s",
        num_nodes,
        len(tail_sorted),
        cost_sum,
    )

    return CompactNetwork(
        num_nodes=num_nodes,
        point=_readonly(point, np.int64),
        rpoint=_readonly(rpoint, np.int64),
        tail=_readonly(tail_sorted, np.int64),
        head=_readonly(head_sorted, np.int64),
        trace=_readonly(trace, np.int64),
        costs=_readonly(cost_sorted, np.float64),
        capacities=_readonly(cap_sorted, np.float64),
        cost_sum=cost_sum,
    )
