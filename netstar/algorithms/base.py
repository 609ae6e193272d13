"""Base types and enums shared by the network algorithms."""

from __future__ import annotations

from enum import IntEnum
from typing import List, Union

#: Dense node identifier in ``[0, n)``; ``n`` itself is the invalid sentinel.
NodeId = int

#: Represents numeric cost of an arc (e.g. distance, latency, etc.).
Cost = Union[int, float]

#: Represents the capacity of an arc.
Capacity = Union[int, float]

#: Per-node predecessor list, indexed by node id.
PredList = List[NodeId]


class SearchDiscipline(IntEnum):
    """Order in which a graph search expands discovered nodes."""

    #: Queue discipline, gives breadth-first search.
    FIFO = 1
    #: Stack discipline, gives depth-first search.
    LIFO = 2

    @classmethod
    def from_string(cls, value: str) -> "SearchDiscipline":
        """Parse a string into a SearchDiscipline enum value.

        Accepts the member names and the aliases ``bfs``/``dfs``
        (case-insensitive).

        Raises:
            ValueError: If the string doesn't match any member or alias.
        """
        aliases = {"BFS": cls.FIFO, "DFS": cls.LIFO}
        key = value.upper()
        if key in aliases:
            return aliases[key]
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join([e.name for e in cls] + list(aliases))
            raise ValueError(
                f"Invalid search discipline '{value}'. Valid values are: {valid}"
            ) from None
