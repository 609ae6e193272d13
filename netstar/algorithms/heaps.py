"""Priority queues over ``(node, cost)`` entries.

Both heaps order entries by cost, then by node id, so equal-cost entries are
extracted in a reproducible order. There is no decrease-key: callers insert a
node again when its cost improves and skip stale entries on extraction.

Comparisons involving a NaN cost are never "less than"; such entries are
simply unordered and never raise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from heapq import heappop, heappush
from typing import List, Optional, Tuple

from netstar.algorithms.base import Cost, NodeId

#: Removed heap entry as ``(node, cost)``.
HeapEntry = Tuple[NodeId, Cost]


class PriorityQueue(ABC):
    """Min-priority queue of ``(node, cost)`` entries."""

    @abstractmethod
    def insert(self, node: NodeId, cost: Cost) -> None:
        """Add an entry. The same node may be present several times."""

    @abstractmethod
    def find_min(self) -> Optional[NodeId]:
        """Return the node of the minimum entry, or None if empty."""

    @abstractmethod
    def find_min_cost(self) -> Optional[Cost]:
        """Return the cost of the minimum entry, or None if empty."""

    @abstractmethod
    def delete_min(self) -> Optional[HeapEntry]:
        """Remove the minimum entry and return it, or None if empty."""

    @abstractmethod
    def size(self) -> int:
        """Return the number of entries, stale duplicates included."""

    def is_empty(self) -> bool:
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()


class BinaryHeap(PriorityQueue):
    """Array-backed binary min-heap (``heapq``).

    Complexity:
        - insert: O(log n)
        - find_min: O(1)
        - delete_min: O(log n)
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[Cost, NodeId]] = []

    def insert(self, node: NodeId, cost: Cost) -> None:
        heappush(self._heap, (cost, node))

    def find_min(self) -> Optional[NodeId]:
        if not self._heap:
            return None
        return self._heap[0][1]

    def find_min_cost(self) -> Optional[Cost]:
        if not self._heap:
            return None
        return self._heap[0][0]

    def delete_min(self) -> Optional[HeapEntry]:
        if not self._heap:
            return None
        cost, node = heappop(self._heap)
        return node, cost

    def size(self) -> int:
        return len(self._heap)


class _FibTree:
    """Heap-ordered tree; ``rank`` is the number of children."""

    __slots__ = ("node", "cost", "children")

    def __init__(self, node: NodeId, cost: Cost) -> None:
        self.node = node
        self.cost = cost
        self.children: List[_FibTree] = []

    @property
    def rank(self) -> int:
        return len(self.children)


def _less(a: _FibTree, b: _FibTree) -> bool:
    if a.cost < b.cost:
        return True
    return a.cost == b.cost and a.node < b.node


class FibonacciHeap(PriorityQueue):
    """Fibonacci heap without decrease-key.

    Inserts add a single-node tree to the root list. ``delete_min`` removes
    the minimum root, promotes its children to roots and consolidates: roots
    of equal rank are linked until every rank occurs at most once. The rank
    table holds ``None`` for an unused rank, so no rank value doubles as a
    marker.

    Complexity:
        - insert: O(1)
        - find_min: O(1)
        - delete_min: O(log n) amortized
    """

    def __init__(self) -> None:
        self._roots: List[_FibTree] = []
        self._min: Optional[_FibTree] = None
        self._size = 0

    def insert(self, node: NodeId, cost: Cost) -> None:
        tree = _FibTree(node, cost)
        self._roots.append(tree)
        if self._min is None or _less(tree, self._min):
            self._min = tree
        self._size += 1

    def find_min(self) -> Optional[NodeId]:
        if self._min is None:
            return None
        return self._min.node

    def find_min_cost(self) -> Optional[Cost]:
        if self._min is None:
            return None
        return self._min.cost

    def delete_min(self) -> Optional[HeapEntry]:
        removed = self._min
        if removed is None:
            return None

        roots = [tree for tree in self._roots if tree is not removed]
        roots.extend(removed.children)
        self._size -= 1
        self._consolidate(roots)
        return removed.node, removed.cost

    def _consolidate(self, roots: List[_FibTree]) -> None:
        by_rank: List[Optional[_FibTree]] = []
        for tree in roots:
            while True:
                rank = tree.rank
                if rank >= len(by_rank):
                    by_rank.extend([None] * (rank + 1 - len(by_rank)))
                other = by_rank[rank]
                if other is None:
                    by_rank[rank] = tree
                    break
                by_rank[rank] = None
                if _less(other, tree):
                    tree, other = other, tree
                tree.children.append(other)

        self._roots = [tree for tree in by_rank if tree is not None]
        self._min = None
        for tree in self._roots:
            if self._min is None or _less(tree, self._min):
                self._min = tree

    def size(self) -> int:
        return self._size
