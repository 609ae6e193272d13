"""NetworkX graph conversion utilities.

Example:
    >>> import networkx as nx
    >>> from netstar.graph.convert import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("A", "B", cost=10, capacity=100.0)
    >>> G.add_edge("B", "C", cost=5, capacity=50.0)
    >>>
    >>> network, name_map = from_networkx(G)
    >>> network.adjacent_nodes(name_map.index_of("A"))
    [1]
    >>> G_out = to_networkx(network, name_map)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Tuple, Union

import networkx as nx

from netstar.graph.compact_star import CompactNetwork, build_network
from netstar.graph.node_map import NameMap

if TYPE_CHECKING:
    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]
else:
    NxGraph = Any


def from_networkx(
    G: NxGraph,
    *,
    cost_attr: str = "cost",
    capacity_attr: str = "capacity",
    default_cost: float = 0.0,
    default_capacity: float = 0.0,
    bidirectional: bool = False,
) -> Tuple[CompactNetwork, NameMap]:
    """Convert a NetworkX graph to a `CompactNetwork`.

    Node names are mapped to ids in ``G.nodes`` order. Undirected graphs
    produce two arcs per edge; directed graphs produce one unless
    ``bidirectional`` is set.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph).
        cost_attr: Edge attribute name for cost.
        capacity_attr: Edge attribute name for capacity.
        default_cost: Cost used when the attribute is missing.
        default_capacity: Capacity used when the attribute is missing.
        bidirectional: If True, also add the reverse arc for directed edges.

    Returns:
        Tuple of (network, name_map).

    Raises:
        TypeError: If G is not a NetworkX graph.
    """
    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )

    name_map = NameMap.from_names(G.nodes())
    add_reverse = bidirectional or not G.is_directed()

    arcs: List[Tuple[int, int, float, float]] = []
    for u, v, data in G.edges(data=True):
        src = name_map.to_index[u]
        dst = name_map.to_index[v]
        cost = float(data.get(cost_attr, default_cost))
        cap = float(data.get(capacity_attr, default_capacity))
        arcs.append((src, dst, cost, cap))
        if add_reverse:
            arcs.append((dst, src, cost, cap))

    return build_network(len(name_map), arcs), name_map


def to_networkx(
    network: CompactNetwork,
    name_map: Optional[NameMap] = None,
    *,
    cost_attr: str = "cost",
    capacity_attr: str = "capacity",
) -> nx.MultiDiGraph:
    """Convert a `CompactNetwork` to a NetworkX MultiDiGraph.

    Args:
        network: Network to convert.
        name_map: Optional NameMap to restore original node names. If None,
            nodes are labeled with their integer ids.
        cost_attr: Edge attribute name for cost.
        capacity_attr: Edge attribute name for capacity.

    Returns:
        nx.MultiDiGraph with one edge per arc, in storage order.
    """

    def label(index: int) -> Any:
        if name_map is None:
            return index
        name = name_map.name_of(index)
        return index if name is None else name

    G = nx.MultiDiGraph()
    G.add_nodes_from(label(i) for i in range(network.num_nodes()))
    for arc in network.arcs():
        G.add_edge(
            label(arc.tail),
            label(arc.head),
            **{cost_attr: arc.cost, capacity_attr: arc.capacity},
        )
    return G
