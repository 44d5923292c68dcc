"""
Single ant: builds one closed tour from the depot.

An ant only reads the pheromone matrix and the heuristic table; everything it
writes (visited flags, path) is its own. Ants of one generation can therefore
run on separate threads.
"""

from __future__ import annotations

import numpy as np

from .distance import DEPOT
from .pheromone import PheromoneMatrix


class Ant:
    """
    One stochastic agent of the colony.

    Parameters
    ----------
    n : int
        Number of locations, depot included.
    """

    def __init__(self, n: int) -> None:
        self.n = n
        self.visited = np.zeros(n, dtype=bool)
        self.path: list[int] = []

    def traverse(
        self,
        pheromone: PheromoneMatrix,
        heuristic: np.ndarray,
        alpha: float,
        rng: np.random.Generator,
    ) -> list[int]:
        """
        Walk from the depot through every destination and back.

        Parameters
        ----------
        pheromone : PheromoneMatrix
            Current pheromone levels (read only).
        heuristic : np.ndarray
            n × n table of (1/d)^β.
        alpha : float
            Pheromone exponent.
        rng : np.random.Generator
            Random source of this ant.

        Returns
        -------
        list[int]
            Closed tour of n + 1 indices, depot first and last.
        """
        self.visited[:] = False
        self.path = [DEPOT]
        self.visited[DEPOT] = True

        current = DEPOT
        for _ in range(1, self.n):
            nxt = self.select_next_node(current, pheromone, heuristic, alpha, rng)
            self.path.append(nxt)
            self.visited[nxt] = True
            current = nxt

        self.path.append(DEPOT)
        return self.path

    def select_next_node(
        self,
        current: int,
        pheromone: PheromoneMatrix,
        heuristic: np.ndarray,
        alpha: float,
        rng: np.random.Generator,
    ) -> int:
        """Roulette-wheel choice among the unvisited locations, swept in ascending index order."""
        candidates = np.flatnonzero(~self.visited)
        probs = transition_probabilities(
            pheromone.row(current)[candidates], heuristic[current, candidates], alpha
        )
        draw = rng.random()
        cumulative = np.cumsum(probs)
        # first candidate with non-zero mass whose cumulative probability reaches the draw
        hits = np.flatnonzero((cumulative >= draw) & (probs > 0))
        if hits.size:
            return int(candidates[hits[0]])
        # rounding left the cumulative sum short of the draw
        return int(candidates[-1])


def transition_probabilities(tau: np.ndarray, eta: np.ndarray, alpha: float) -> np.ndarray:
    """
    Normalised τ^α · η scores of the candidate edges.

    A zero total (every score underflowed) gives every candidate equal weight.
    An infinite total splits the mass equally between the infinite scores.
    """
    with np.errstate(over="ignore", invalid="ignore"):
        scores = tau ** alpha * eta
    scores = np.nan_to_num(scores, nan=0.0, posinf=np.inf)

    infinite = np.isinf(scores)
    if infinite.any():
        return infinite / infinite.sum()

    with np.errstate(over="ignore"):
        total = scores.sum()
    if not np.isfinite(total):
        # finite scores whose sum overflows
        scores = scores / scores.max()
        total = scores.sum()
    if total <= 0:
        return np.full(scores.shape, 1.0 / scores.size)
    return scores / total
