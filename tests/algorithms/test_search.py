import networkx as nx
import pytest

from netstar.algorithms.base import SearchDiscipline
from netstar.algorithms.containers import Queue, Stack
from netstar.algorithms.search import (
    breadth_first_search,
    depth_first_search,
    reached_nodes,
    traverse,
)
from netstar.graph.compact_star import build_network
from netstar.graph.convert import to_networkx


def test_bfs_example(search5):
    pred, order = breadth_first_search(search5, 0)
    assert pred == [5, 0, 0, 1, 3]
    assert order == [0, 1, 2, 3, 4]


def test_dfs_example(search5):
    pred, order = depth_first_search(search5, 0)
    assert pred == [5, 0, 3, 1, 3]
    assert order == [0, 1, 3, 2, 4]


def test_traverse_accepts_container_instances(search5):
    assert traverse(search5, 0, Queue()) == breadth_first_search(search5, 0)
    assert traverse(search5, 0, Stack()) == depth_first_search(search5, 0)
    assert traverse(search5, 0, SearchDiscipline.LIFO) == depth_first_search(
        search5, 0
    )


def test_default_discipline_is_breadth_first(search5):
    assert traverse(search5, 2) == breadth_first_search(search5, 2)


def test_start_in_middle(search5):
    pred, order = breadth_first_search(search5, 3)
    # 3 -> {2, 4}, 2 -> 1
    assert pred == [5, 2, 3, 5, 3]
    assert order[3] == 0
    assert order[2] == 1
    assert order[4] == 2
    assert order[1] == 3


def test_unreached_nodes(two_components):
    invalid = two_components.invalid_id()
    for search in (breadth_first_search, depth_first_search):
        pred, order = search(two_components, 0)
        assert pred == [invalid, 0, 1, invalid, invalid, invalid]
        # Unreached slots stay at zero, like the start
        assert order == [0, 1, 2, 0, 0, 0]
        assert reached_nodes(pred, 0, invalid) == [0, 1, 2]


def test_single_node(single_node):
    for search in (breadth_first_search, depth_first_search):
        pred, order = search(single_node, 0)
        assert pred == [1]
        assert order == [0]


def test_self_loops_and_parallel_arcs():
    network = build_network(
        3, [(0, 0, 1, 1), (0, 1, 1, 1), (0, 1, 1, 1), (1, 2, 1, 1)]
    )
    pred, order = breadth_first_search(network, 0)
    assert pred == [3, 0, 1]
    assert order == [0, 1, 2]


@pytest.mark.parametrize("start", [-1, 5, "0", None])
def test_unknown_start(search5, start):
    with pytest.raises(ValueError):
        traverse(search5, start)


def test_bfs_and_dfs_reach_the_same_nodes():
    G = nx.gnp_random_graph(40, 0.06, seed=11, directed=True)
    network = build_network(40, [(u, v, 1, 1) for u, v in G.edges()])
    invalid = network.invalid_id()
    for start in range(0, 40, 7):
        bfs_pred, _ = breadth_first_search(network, start)
        dfs_pred, _ = depth_first_search(network, start)
        expected = sorted(nx.descendants(G, start) | {start})
        assert reached_nodes(bfs_pred, start, invalid) == expected
        assert reached_nodes(dfs_pred, start, invalid) == expected


def test_bfs_order_is_by_hop_distance(search5):
    G = to_networkx(search5)
    hops = nx.single_source_shortest_path_length(G, 0)
    pred, order = breadth_first_search(search5, 0)
    by_order = sorted(range(5), key=lambda v: order[v])
    assert [hops[v] for v in by_order] == sorted(hops.values())
    # Tree arcs are real arcs and go one hop deeper
    for v in range(1, 5):
        assert pred[v] in search5.incoming_nodes(v)
        assert hops[v] == hops[pred[v]] + 1


def test_network_is_not_modified(search5):
    before = search5.point.copy(), search5.head.copy()
    breadth_first_search(search5, 0)
    depth_first_search(search5, 0)
    assert search5.point.tolist() == before[0].tolist()
    assert search5.head.tolist() == before[1].tolist()
