"""Work containers for graph search.

`Stack` and `Queue` share the `Container` interface (push, pop, peek), so a
single search loop yields depth-first or breadth-first order depending only
on which container it is given.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Optional

from netstar.algorithms.base import NodeId, SearchDiscipline


class Container(ABC):
    """Collection of node ids with a discipline-specific "current" element."""

    def __init__(self) -> None:
        self._data: Deque[NodeId] = deque()

    def push(self, node: NodeId) -> None:
        self._data.append(node)

    @abstractmethod
    def pop(self) -> Optional[NodeId]:
        """Remove and return the current element, or None if empty."""

    @abstractmethod
    def peek(self) -> Optional[NodeId]:
        """Return the current element without removing it, or None if empty."""

    def is_empty(self) -> bool:
        return not self._data

    def __len__(self) -> int:
        return len(self._data)


class Queue(Container):
    """First in, first out."""

    def pop(self) -> Optional[NodeId]:
        if not self._data:
            return None
        return self._data.popleft()

    def peek(self) -> Optional[NodeId]:
        if not self._data:
            return None
        return self._data[0]


class Stack(Container):
    """Last in, first out."""

    def pop(self) -> Optional[NodeId]:
        if not self._data:
            return None
        return self._data.pop()

    def peek(self) -> Optional[NodeId]:
        if not self._data:
            return None
        return self._data[-1]


def container_for(discipline: SearchDiscipline) -> Container:
    """Return an empty container implementing ``discipline``."""
    if discipline == SearchDiscipline.FIFO:
        return Queue()
    if discipline == SearchDiscipline.LIFO:
        return Stack()
    raise ValueError(f"Unsupported search discipline: {discipline!r}")
