"""Single-source shortest paths (Dijkstra).

Two strategies with identical results on non-negative costs:
    - `array_dijkstra`: scans the not-yet-finalized nodes for the minimum
      tentative distance, O(n^2 + m).
    - `heap_dijkstra`: priority queue with lazy deletion; a node is inserted
      again on every improvement and stale entries are skipped once the node
      is finalized, O(m log m).

Distances start at ``network.infinity()`` (the sum of all costs) rather than
a float infinity, so relaxation arithmetic stays finite. Nodes that are never
reached keep that value and the invalid predecessor. Reachability is tracked
separately, so a node whose distance equals the cost sum is still reached.

Relaxation of arc ``(i, j)``: if ``j`` is not yet reached or
``dist[j] > dist[i] + cost(i, j)`` then
``dist[j] = dist[i] + cost(i, j)`` and ``pred[j] = i``. Costs are looked up
with ``network.cost(i, j)``, so of several parallel arcs only the first one
counts. Which of several equal-cost paths is reported depends on arc order.
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Type

from netstar.algorithms.base import NodeId, PredList
from netstar.algorithms.heaps import BinaryHeap, PriorityQueue
from netstar.graph.compact_star import CompactNetwork
from netstar.logging import get_logger

logger = get_logger(__name__)


def _check_inputs(network: CompactNetwork, source: NodeId) -> None:
    if not network.has_node(source):
        raise ValueError(f"Source node {source!r} is not in the network.")
    if network.num_arcs() and float(network.costs.min()) < 0:
        raise ValueError("Dijkstra requires non-negative arc costs.")


def dijkstra(
    network: CompactNetwork,
    source: NodeId,
    use_heap: bool = False,
    heap_cls: Type[PriorityQueue] = BinaryHeap,
) -> Tuple[PredList, List[float]]:
    """Compute shortest paths from ``source``.

    Args:
        network: Network with non-negative arc costs.
        source: Source node id.
        use_heap: Use the priority-queue strategy instead of the array scan.
        heap_cls: Priority queue class for the heap strategy
            (`BinaryHeap` or `FibonacciHeap`).

    Returns:
        A tuple of (pred, dist) lists indexed by node id.

    Raises:
        ValueError: If ``source`` is unknown or a cost is negative.
    """
    if use_heap:
        return heap_dijkstra(network, source, heap_cls=heap_cls)
    return array_dijkstra(network, source)


def _relax(
    network: CompactNetwork,
    i: NodeId,
    neighbors: List[NodeId],
    pred: PredList,
    dist: List[float],
    reached: List[bool],
) -> List[NodeId]:
    """Relax arcs leaving ``i``; return the nodes whose distance improved."""
    improved: List[NodeId] = []
    for j in neighbors:
        candidate = dist[i] + network.cost(i, j)
        if not reached[j] or dist[j] > candidate:
            dist[j] = candidate
            pred[j] = i
            reached[j] = True
            improved.append(j)
    return improved


def array_dijkstra(
    network: CompactNetwork, source: NodeId
) -> Tuple[PredList, List[float]]:
    """Dijkstra with a linear scan for the next node to finalize."""
    _check_inputs(network, source)
    source = int(source)
    n = network.num_nodes()

    pred: PredList = [network.invalid_id()] * n
    dist: List[float] = [network.infinity()] * n
    reached = [False] * n
    dist[source] = 0.0
    reached[source] = True

    temporary: List[NodeId] = list(range(n))
    while temporary:
        best_pos: Optional[int] = None
        for pos, node in enumerate(temporary):
            if not reached[node]:
                continue
            if best_pos is None or dist[node] < dist[temporary[best_pos]]:
                best_pos = pos
        # Only unreached nodes are left
        if best_pos is None:
            break
        i = temporary.pop(best_pos)
        _relax(network, i, network.adjacent_nodes(i), pred, dist, reached)

    return pred, dist


def heap_dijkstra(
    network: CompactNetwork,
    source: NodeId,
    heap_cls: Type[PriorityQueue] = BinaryHeap,
) -> Tuple[PredList, List[float]]:
    """Dijkstra with a priority queue and lazy deletion of stale entries."""
    _check_inputs(network, source)
    source = int(source)
    n = network.num_nodes()

    pred: PredList = [network.invalid_id()] * n
    dist: List[float] = [network.infinity()] * n
    reached = [False] * n
    finalized = [False] * n
    dist[source] = 0.0
    reached[source] = True

    heap = heap_cls()
    heap.insert(source, 0.0)
    extractions = 0

    while not heap.is_empty():
        i, _ = heap.delete_min()  # type: ignore[misc]
        extractions += 1
        if finalized[i]:
            continue
        finalized[i] = True
        for j in _relax(network, i, network.adjacent_nodes(i), pred, dist, reached):
            heap.insert(j, dist[j])

    logger.debug(
        "Heap Dijkstra from %d: %d extractions with %s",
        source,
        extractions,
        heap_cls.__name__,
    )
    return pred, dist


def reconstruct_path(
    pred: PredList, source: NodeId, target: NodeId, invalid_id: NodeId
) -> Optional[List[NodeId]]:
    """Return the node path from ``source`` to ``target``.

    Args:
        pred: Predecessor list from a search or shortest-path run rooted at
            ``source``.
        source: Start node of that run.
        target: Node to reconstruct the path to.
        invalid_id: The network's invalid sentinel.

    Returns:
        ``[source, ..., target]`` (``[source]`` when they coincide), or None
        if ``target`` is out of range or was not reached.

    Raises:
        ValueError: If following ``pred`` never reaches ``source``.
    """
    if target < 0 or target >= len(pred):
        return None
    if target != source and pred[target] == invalid_id:
        return None

    path = [target]
    current = target
    while current != source:
        current = pred[current]
        if current == invalid_id or len(path) >= len(pred):
            raise ValueError(
                f"Predecessor list does not lead from {target} back to {source}."
            )
        path.append(current)
    path.reverse()
    return path
