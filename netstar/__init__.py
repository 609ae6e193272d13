"""netstar: small-graph algorithms over compact star networks.

A directed network with arc costs and capacities is built once into an
immutable compact star representation and shared by the algorithms:
breadth-/depth-first search, Dijkstra (array scan or priority queue), and
PageRank.

Example:
    from netstar import build_network, dijkstra, pagerank

    network = build_network(3, [(0, 1, 2.0, 10.0), (1, 2, 1.5, 5.0)])
    pred, dist = dijkstra(network, 0, use_heap=True)
    ranks = pagerank(network, beta=0.2, eps=1e-6)
"""

from __future__ import annotations

from netstar import logging
from netstar._version import __version__
from netstar.algorithms.base import SearchDiscipline
from netstar.algorithms.heaps import BinaryHeap, FibonacciHeap, PriorityQueue
from netstar.algorithms.pagerank import ProbabilityMassError, pagerank
from netstar.algorithms.search import (
    breadth_first_search,
    depth_first_search,
    traverse,
)
from netstar.algorithms.spf import (
    array_dijkstra,
    dijkstra,
    heap_dijkstra,
    reconstruct_path,
)
from netstar.graph.compact_star import Arc, CompactNetwork, build_network
from netstar.graph.convert import from_networkx, to_networkx
from netstar.graph.node_map import NameMap
from netstar.io import edges_from_file, edges_from_lines, network_from_file

__all__ = [
    # Version
    "__version__",
    # Network
    "Arc",
    "CompactNetwork",
    "build_network",
    "NameMap",
    # Algorithms
    "SearchDiscipline",
    "traverse",
    "breadth_first_search",
    "depth_first_search",
    "dijkstra",
    "array_dijkstra",
    "heap_dijkstra",
    "reconstruct_path",
    "pagerank",
    "ProbabilityMassError",
    # Priority queues
    "PriorityQueue",
    "BinaryHeap",
    "FibonacciHeap",
    # Input
    "edges_from_lines",
    "edges_from_file",
    "network_from_file",
    # Library integrations (NetworkX)
    "from_networkx",
    "to_networkx",
    # Utilities
    "logging",
]
