import numpy as np
import pytest

from delivery_route.ant import Ant, transition_probabilities
from delivery_route.distance import DistanceTable
from delivery_route.pheromone import PheromoneMatrix


class FixedDraw:
    """Stands in for np.random.Generator with a constant draw."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def _setup(coords, tau0=0.1, beta=2.0):
    dist = DistanceTable.from_coordinates(coords)
    return dist, PheromoneMatrix(dist.n, tau0), dist.heuristic(beta)


@pytest.mark.parametrize("seed", range(10))
def test_tour_visits_every_location_once(random_coords, check_tour, seed):
    dist, tau, eta = _setup(random_coords)
    tour = Ant(dist.n).traverse(tau, eta, 1.0, np.random.default_rng(seed))
    check_tour(tour, dist.n)


def test_two_locations():
    dist, tau, eta = _setup([(0, 0), (5, 5)])
    assert Ant(2).traverse(tau, eta, 1.0, np.random.default_rng(0)) == [0, 1, 0]


def test_selection_walks_candidates_in_index_order():
    # equidistant destinations, flat pheromone: each candidate gets 1/3
    coords = [(0, 0), (1, 0), (0, 1), (-1, 0)]
    dist, tau, eta = _setup(coords)
    ant = Ant(dist.n)
    ant.visited[0] = True
    assert ant.select_next_node(0, tau, eta, 1.0, FixedDraw(0.0)) == 1
    assert ant.select_next_node(0, tau, eta, 1.0, FixedDraw(0.5)) == 2
    assert ant.select_next_node(0, tau, eta, 1.0, FixedDraw(0.9)) == 3


def test_selection_falls_back_to_last_candidate():
    coords = [(0, 0), (1, 0), (0, 1), (-1, 0)]
    dist, tau, eta = _setup(coords)
    ant = Ant(dist.n)
    ant.visited[0] = True
    # a draw the cumulative sum can never reach
    assert ant.select_next_node(0, tau, eta, 1.0, FixedDraw(1.5)) == 3


def test_selection_skips_visited_and_zero_weight_candidates():
    coords = [(0, 0), (1, 0), (0, 1), (-1, 0)]
    dist, tau, eta = _setup(coords, tau0=0.0)
    tau.deposit(0, 3, 1.0)
    ant = Ant(dist.n)
    ant.visited[[0, 1]] = True
    # node 2 has no pheromone, so even a zero draw lands on node 3
    assert ant.select_next_node(0, tau, eta, 1.0, FixedDraw(0.0)) == 3


def test_pheromone_steers_selection():
    coords = [(0, 0), (1, 0), (0, 1), (-1, 0)]
    dist, tau, eta = _setup(coords, tau0=1e-6)
    tau.deposit(0, 3, 100.0)
    ant = Ant(dist.n)
    ant.visited[0] = True
    assert ant.select_next_node(0, tau, eta, 1.0, FixedDraw(0.01)) == 3


def test_coincident_locations_still_give_valid_tours(check_tour):
    coords = [(0, 0), (1, 1), (1, 1), (2, 0), (0, 0)]
    dist, tau, eta = _setup(coords)
    for seed in range(5):
        check_tour(Ant(dist.n).traverse(tau, eta, 1.0, np.random.default_rng(seed)), dist.n)


def test_all_locations_coincident(check_tour):
    dist, tau, eta = _setup([(3, 3)] * 4, beta=60.0)
    tour = Ant(dist.n).traverse(tau, eta, 1.0, np.random.default_rng(1))
    check_tour(tour, 4)


def test_probabilities_normalised():
    p = transition_probabilities(np.array([1.0, 2.0, 1.0]), np.array([1.0, 1.0, 2.0]), 1.0)
    assert p == pytest.approx([0.2, 0.4, 0.4])
    assert p.sum() == pytest.approx(1.0)


def test_probabilities_zero_total_is_uniform():
    p = transition_probabilities(np.zeros(4), np.ones(4), 1.0)
    assert p == pytest.approx([0.25] * 4)


def test_probabilities_infinite_scores_share_mass():
    p = transition_probabilities(np.ones(3), np.array([np.inf, 1.0, np.inf]), 1.0)
    assert p == pytest.approx([0.5, 0.0, 0.5])


def test_probabilities_overflowing_sum():
    big = np.finfo(float).max
    p = transition_probabilities(np.ones(2), np.array([big, big]), 1.0)
    assert p == pytest.approx([0.5, 0.5])
