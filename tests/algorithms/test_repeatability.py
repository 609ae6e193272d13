"""Repeated runs on one shared network give bit-identical results."""

import numpy as np

from netstar.algorithms.base import SearchDiscipline
from netstar.algorithms.heaps import BinaryHeap, FibonacciHeap
from netstar.algorithms.pagerank import pagerank
from netstar.algorithms.search import traverse
from netstar.algorithms.spf import array_dijkstra, heap_dijkstra


def _run_all(network):
    return {
        "fifo": traverse(network, 0, SearchDiscipline.FIFO),
        "lifo": traverse(network, 0, SearchDiscipline.LIFO),
        "array": array_dijkstra(network, 0),
        "binary": heap_dijkstra(network, 0, heap_cls=BinaryHeap),
        "fibonacci": heap_dijkstra(network, 0, heap_cls=FibonacciHeap),
        "pagerank": pagerank(network, beta=0.2, eps=1e-9),
    }


def test_repeated_runs_are_identical(search5):
    point_before = search5.point.copy()
    first = _run_all(search5)
    second = _run_all(search5)

    for key in ("fifo", "lifo", "array", "binary", "fibonacci"):
        assert first[key] == second[key], key
    assert np.array_equal(first["pagerank"], second["pagerank"])
    assert np.array_equal(search5.point, point_before)


def test_interleaved_runs_do_not_share_state(dijkstra6, rank4):
    before = array_dijkstra(dijkstra6, 0)
    ranks_before = pagerank(rank4, eps=1e-9)
    traverse(dijkstra6, 3, SearchDiscipline.LIFO)
    heap_dijkstra(dijkstra6, 2)
    pagerank(rank4, beta=0.5)
    assert array_dijkstra(dijkstra6, 0) == before
    assert np.array_equal(pagerank(rank4, eps=1e-9), ranks_before)
