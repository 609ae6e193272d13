import logging

import numpy as np
import pytest

from netstar.algorithms import pagerank as pagerank_mod
from netstar.algorithms.pagerank import (
    ProbabilityMassError,
    inverse_out_degrees,
    pagerank,
    propagate,
    rank_distance,
    redistribute,
)
from netstar.graph.compact_star import build_network


def _fixed_point(network, beta):
    """Solve r = (1-beta) P^T r + (1 - (1-beta) * sum of non-dangling r) / n."""
    n = network.num_nodes()
    inv = inverse_out_degrees(network)
    transition = np.zeros((n, n))
    for arc in network.arcs():
        transition[arc.head, arc.tail] += inv[arc.tail]
    non_dangling = (inv > 0).astype(float)
    system = (
        np.eye(n)
        - (1.0 - beta) * transition
        + (1.0 - beta) / n * np.outer(np.ones(n), non_dangling)
    )
    return np.linalg.solve(system, np.full(n, 1.0 / n))


def test_example_beta_0_2(rank4):
    ranks = pagerank(rank4, beta=0.2, eps=1e-10)
    assert ranks.sum() == pytest.approx(1.0)
    assert ranks == pytest.approx(_fixed_point(rank4, 0.2), abs=1e-8)
    assert ranks == pytest.approx([0.3616, 0.1464, 0.2870, 0.2050], abs=1e-3)


def test_example_without_teleport(rank4):
    ranks = pagerank(rank4, beta=1e-9, eps=1e-3)
    assert ranks.sum() == pytest.approx(1.0)
    assert ranks == pytest.approx([0.38, 0.12, 0.29, 0.19], abs=0.02)


def test_dangling_mass_is_spread_evenly():
    # 0 -> 1 -> 2, node 2 has no outgoing arcs
    network = build_network(3, [(0, 1, 0, 0), (1, 2, 0, 0)])
    ranks = pagerank(network, beta=0.15, eps=1e-12)
    assert ranks.sum() == pytest.approx(1.0)
    assert ranks == pytest.approx(_fixed_point(network, 0.15), abs=1e-9)
    assert ranks[0] < ranks[1] < ranks[2]


def test_parallel_arcs_count_in_out_degree():
    network = build_network(3, [(0, 1, 0, 0), (0, 1, 0, 0), (0, 2, 0, 0)])
    ranks = pagerank(network, beta=0.2, eps=1e-12)
    assert ranks == pytest.approx(_fixed_point(network, 0.2), abs=1e-9)
    assert ranks[1] > ranks[2]


def test_single_node(single_node):
    assert pagerank(single_node).tolist() == [1.0]


def test_empty_network():
    ranks = pagerank(build_network(0, []))
    assert isinstance(ranks, np.ndarray)
    assert ranks.size == 0


def test_full_teleport_is_uniform(search5):
    ranks = pagerank(search5, beta=1.0)
    assert ranks == pytest.approx([0.2] * 5)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"beta": -0.1},
        {"beta": 1.5},
        {"eps": 0.0},
        {"eps": -1e-6},
        {"max_iter": 0},
    ],
)
def test_invalid_parameters(rank4, kwargs):
    with pytest.raises(ValueError):
        pagerank(rank4, **kwargs)


def test_beta_zero_warns(single_node, caplog):
    with caplog.at_level(logging.WARNING, logger="netstar"):
        ranks = pagerank(single_node, beta=0.0)
    assert ranks.tolist() == [1.0]
    assert "beta=0" in caplog.text


def test_max_iter_returns_latest_vector_with_warning(rank4, caplog):
    with caplog.at_level(logging.WARNING, logger="netstar"):
        ranks = pagerank(rank4, beta=0.2, eps=1e-15, max_iter=2)
    assert "without converging" in caplog.text
    assert ranks.sum() == pytest.approx(1.0)


def test_excess_mass_aborts(rank4, monkeypatch):
    def overfull(network, ranks, beta, inv_out_degree=None):
        return np.full(network.num_nodes(), 0.3)

    monkeypatch.setattr(pagerank_mod, "propagate", overfull)
    with pytest.raises(ProbabilityMassError):
        pagerank(rank4)


def test_redistribute():
    ranks = redistribute(np.array([0.1, 0.3, 0.2, 0.0]))
    assert ranks == pytest.approx([0.2, 0.4, 0.3, 0.1])
    with pytest.raises(ProbabilityMassError):
        redistribute(np.array([0.6, 0.6]))
    assert issubclass(ProbabilityMassError, ArithmeticError)


def test_propagate_and_inverse_out_degrees(search5):
    inv = inverse_out_degrees(search5)
    assert inv == pytest.approx([0.5, 1.0, 1.0, 0.5, 0.5])

    mass = propagate(search5, np.full(5, 0.2), beta=0.2)
    # Every node has outgoing arcs, so (1 - beta) of the mass arrives
    assert mass.sum() == pytest.approx(0.8)
    # Node 0 has no incoming arcs
    assert mass[0] == 0.0


def test_inverse_out_degrees_dangling():
    network = build_network(2, [(0, 1, 0, 0)])
    assert inverse_out_degrees(network).tolist() == [1.0, 0.0]


def test_rank_distance_is_euclidean():
    assert rank_distance(np.array([0.0, 0.0]), np.array([3.0, 4.0])) == 5.0


def test_returns_the_iterate_that_met_the_tolerance(rank4):
    # A loose tolerance stops after one step; the uniform start is not returned
    ranks = pagerank(rank4, beta=0.2, eps=10.0)
    start = np.full(4, 0.25)
    expected = redistribute(propagate(rank4, start, 0.2))
    assert np.array_equal(ranks, expected)
    assert not np.array_equal(ranks, start)
