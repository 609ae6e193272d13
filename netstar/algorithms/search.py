"""Graph search: breadth-first and depth-first from one start node.

Both searches run the same loop (`traverse`) and differ only in the work
container: a queue gives breadth-first order, a stack depth-first order. The
set of reached nodes is the same for both; predecessors and visit order may
differ.
"""

from __future__ import annotations

from typing import List, Tuple, Union

from netstar.algorithms.base import NodeId, PredList, SearchDiscipline
from netstar.algorithms.containers import Container, container_for
from netstar.graph.compact_star import CompactNetwork
from netstar.logging import get_logger

logger = get_logger(__name__)


def traverse(
    network: CompactNetwork,
    start: NodeId,
    discipline: Union[SearchDiscipline, Container] = SearchDiscipline.FIFO,
) -> Tuple[PredList, List[int]]:
    """Search the network from ``start``.

    The current node is peeked, not popped. Its first unvisited neighbor is
    marked, recorded and pushed while the current node stays in the
    container; a node with no unvisited neighbor left is popped.

    Args:
        network: Network to search.
        start: Start node id.
        discipline: `SearchDiscipline` or an empty `Container` instance.

    Returns:
        A tuple of (pred, order):
          - pred: ``pred[v]`` is the node that discovered ``v``, or
            ``network.invalid_id()`` for the start and for unreached nodes.
          - order: ``order[v]`` is the discovery rank of ``v`` (start is 0).
            Unreached nodes also hold 0; use ``pred`` to tell them apart.

    Raises:
        ValueError: If ``start`` is not a node of the network.
    """
    if not network.has_node(start):
        raise ValueError(f"Start node {start!r} is not in the network.")
    start = int(start)

    if isinstance(discipline, Container):
        to_process = discipline
    else:
        to_process = container_for(discipline)

    n = network.num_nodes()
    no_pred = network.invalid_id()
    point = network.point.tolist()
    head = network.head.tolist()

    pred: PredList = [no_pred] * n
    order: List[int] = [0] * n
    visited = [False] * n
    # Arcs before next_arc[i] lead to nodes already visited.
    next_arc = point[:-1]

    visited[start] = True
    discovered = 0
    to_process.push(start)

    while not to_process.is_empty():
        i = to_process.peek()
        arc, last = next_arc[i], point[i + 1]
        while arc < last and visited[head[arc]]:
            arc += 1
        next_arc[i] = arc

        if arc < last:
            j = head[arc]
            visited[j] = True
            pred[j] = i
            discovered += 1
            order[j] = discovered
            to_process.push(j)
        else:
            to_process.pop()

    logger.debug(
        "Search from %d with %s reached %d of %d nodes",
        start,
        type(to_process).__name__,
        discovered + 1,
        n,
    )
    return pred, order


def breadth_first_search(
    network: CompactNetwork, start: NodeId
) -> Tuple[PredList, List[int]]:
    """Breadth-first search; see `traverse` for the result layout.

    Example:
        >>> network = build_network(5, [(0, 1, 25, 30), (0, 2, 35, 50),
        ...     (1, 3, 15, 40), (2, 1, 45, 10), (3, 2, 15, 30),
        ...     (3, 4, 45, 60), (4, 2, 25, 20), (4, 3, 35, 50)])
        >>> breadth_first_search(network, 0)
        ([5, 0, 0, 1, 3], [0, 1, 2, 3, 4])
    """
    return traverse(network, start, SearchDiscipline.FIFO)


def depth_first_search(
    network: CompactNetwork, start: NodeId
) -> Tuple[PredList, List[int]]:
    """Depth-first search; see `traverse` for the result layout."""
    return traverse(network, start, SearchDiscipline.LIFO)


def reached_nodes(pred: PredList, start: NodeId, invalid_id: NodeId) -> List[NodeId]:
    """Return the sorted ids reached by a search from ``start``."""
    return [v for v, p in enumerate(pred) if v == start or p != invalid_id]
