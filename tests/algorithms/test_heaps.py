import math
import random

import pytest

from netstar.algorithms.heaps import BinaryHeap, FibonacciHeap

HEAPS = [BinaryHeap, FibonacciHeap]


@pytest.mark.parametrize("heap_cls", HEAPS)
def test_empty_heap(heap_cls):
    heap = heap_cls()
    assert heap.is_empty()
    assert heap.size() == 0
    assert len(heap) == 0
    assert heap.find_min() is None
    assert heap.find_min_cost() is None
    assert heap.delete_min() is None


@pytest.mark.parametrize("heap_cls", HEAPS)
def test_insert_and_find_min(heap_cls):
    heap = heap_cls()
    heap.insert(4, 7.0)
    heap.insert(2, 3.0)
    heap.insert(9, 5.0)
    assert heap.find_min() == 2
    assert heap.find_min_cost() == 3.0
    assert heap.size() == 3


@pytest.mark.parametrize("heap_cls", HEAPS)
def test_delete_min_order(heap_cls):
    heap = heap_cls()
    for node, cost in [(0, 5), (1, 3), (2, 8), (3, 1), (4, 4)]:
        heap.insert(node, cost)

    removed = []
    while not heap.is_empty():
        removed.append(heap.delete_min())

    assert removed == [(3, 1), (1, 3), (4, 4), (0, 5), (2, 8)]
    assert heap.delete_min() is None


@pytest.mark.parametrize("heap_cls", HEAPS)
def test_ties_break_by_node_id(heap_cls):
    heap = heap_cls()
    for node in (7, 3, 5, 1):
        heap.insert(node, 2.0)
    assert [heap.delete_min()[0] for _ in range(4)] == [1, 3, 5, 7]


@pytest.mark.parametrize("heap_cls", HEAPS)
def test_duplicate_entries_are_kept(heap_cls):
    heap = heap_cls()
    heap.insert(1, 9.0)
    heap.insert(1, 4.0)
    assert heap.size() == 2
    assert heap.delete_min() == (1, 4.0)
    assert heap.delete_min() == (1, 9.0)


@pytest.mark.parametrize("heap_cls", HEAPS)
def test_interleaved_operations(heap_cls):
    heap = heap_cls()
    heap.insert(0, 10)
    heap.insert(1, 20)
    assert heap.delete_min() == (0, 10)
    heap.insert(2, 15)
    heap.insert(3, 5)
    assert heap.find_min() == 3
    assert heap.delete_min() == (3, 5)
    assert heap.delete_min() == (2, 15)
    heap.insert(4, 1)
    assert heap.delete_min() == (4, 1)
    assert heap.delete_min() == (1, 20)
    assert heap.is_empty()


@pytest.mark.parametrize("heap_cls", HEAPS)
def test_matches_sorted_order_on_random_input(heap_cls):
    rng = random.Random(7)
    entries = [(node, rng.randint(0, 50)) for node in range(300)]
    heap = heap_cls()
    for node, cost in entries:
        heap.insert(node, cost)

    removed = [heap.delete_min() for _ in range(len(entries))]

    assert removed == sorted(entries, key=lambda e: (e[1], e[0]))
    assert heap.is_empty()


def test_fibonacci_consolidation_keeps_unique_ranks():
    heap = FibonacciHeap()
    for node in range(16):
        heap.insert(node, float(16 - node))
    assert heap.delete_min() == (15, 1.0)

    ranks = [tree.rank for tree in heap._roots]
    assert len(ranks) == len(set(ranks))
    assert heap.size() == 15
    assert heap.find_min() == 14


@pytest.mark.parametrize("heap_cls", HEAPS)
def test_nan_cost_does_not_raise(heap_cls):
    heap = heap_cls()
    heap.insert(0, 1.0)
    heap.insert(1, math.nan)
    heap.insert(2, 0.5)
    removed = [heap.delete_min() for _ in range(3)]
    assert sorted(node for node, _ in removed) == [0, 1, 2]
    assert heap.is_empty()
