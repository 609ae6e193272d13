"""Bidirectional mapping between external node names and dense ids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, Optional

from netstar.algorithms.base import NodeId


@dataclass
class NameMap:
    """Bidirectional mapping between node names and integer ids.

    Ids are dense and assigned first-seen-gets-next-id, which is exactly what
    `build_network` requires.

    Attributes:
        to_index: Maps node names to integer ids.
        to_name: Maps integer ids back to node names.

    Example:
        >>> names = NameMap()
        >>> names.assign("B"), names.assign("A"), names.assign("B")
        (0, 1, 0)
        >>> names.name_of(1)
        'A'
    """

    to_index: Dict[Hashable, NodeId] = field(default_factory=dict)
    to_name: Dict[NodeId, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: Iterable[Hashable]) -> "NameMap":
        """Create a NameMap assigning ids in iteration order (duplicates reuse ids)."""
        name_map = cls()
        for name in names:
            name_map.assign(name)
        return name_map

    def assign(self, name: Hashable) -> NodeId:
        """Return the id of ``name``, assigning the next free id on first sight."""
        index = self.to_index.get(name)
        if index is None:
            index = len(self.to_index)
            self.to_index[name] = index
            self.to_name[index] = name
        return index

    def index_of(self, name: Hashable) -> Optional[NodeId]:
        """Return the id of ``name`` or None if it was never assigned."""
        return self.to_index.get(name)

    def name_of(self, index: NodeId) -> Optional[Hashable]:
        """Return the name for ``index`` or None (e.g. for the invalid sentinel)."""
        return self.to_name.get(index)

    def __contains__(self, name: object) -> bool:
        return name in self.to_index

    def __len__(self) -> int:
        """Return the number of assigned names."""
        return len(self.to_index)
