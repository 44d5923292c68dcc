"""
Ant Colony Optimization for the delivery tour.

`Colony` runs one generation (traverse, deposit, evaporate, track best) and
`Optimizer` repeats it for the configured number of iterations on a single
pheromone matrix. All mutable run state belongs to the Optimizer.
"""

from __future__ import annotations

import math
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

import numpy as np

from .ant import Ant
from .config import DEFAULT_PARAMS, ACOParams
from .distance import DEPOT, DistanceTable
from .pheromone import PheromoneMatrix

ProgressCallback = Callable[[int, "BestTour", PheromoneMatrix], None]


# ---------------------------------------------------------------------------
#  Results
# ---------------------------------------------------------------------------

@dataclass
class BestTour:
    """Shortest tour seen so far; only a strictly shorter tour replaces it."""

    path: list[int] | None = None
    length: float = math.inf

    def offer(self, path: Sequence[int], length: float) -> bool:
        if length < self.length:
            self.path = list(path)
            self.length = length
            return True
        return False


@dataclass
class Generation:
    tours: list[list[int]]
    lengths: list[float]


@dataclass
class ACOResult:
    best_tour: list[int]
    best_length: float
    iterations: int
    history: list[float] = field(default_factory=list)
    generation_found: int = 0


# ---------------------------------------------------------------------------
#  One generation
# ---------------------------------------------------------------------------

class Colony:
    """
    Runs the ants of one generation and folds their tours into the pheromone matrix.

    Deposits are applied ant by ant in spawn order, then the whole matrix
    evaporates once.
    """

    def __init__(
        self,
        distances: DistanceTable,
        pheromone: PheromoneMatrix,
        heuristic: np.ndarray,
        params: ACOParams,
        executor: Executor | None = None,
    ) -> None:
        self.distances = distances
        self.pheromone = pheromone
        self.heuristic = heuristic
        self.params = params
        self.executor = executor

    def _traverse(self, rng: np.random.Generator) -> list[int]:
        ant = Ant(self.distances.n)
        return ant.traverse(self.pheromone, self.heuristic, self.params.alpha, rng)

    def traverse_all(self, rngs: Iterable[np.random.Generator]) -> list[list[int]]:
        if self.executor is None:
            return [self._traverse(rng) for rng in rngs]
        # map() yields in submission order whatever order the threads finish in
        return list(self.executor.map(self._traverse, rngs))

    def run_generation(self, rngs: Sequence[np.random.Generator], best: BestTour) -> Generation:
        tours = self.traverse_all(rngs)
        lengths = [self.distances.tour_length(tour) for tour in tours]

        for tour, length in zip(tours, lengths):
            if length > 0:
                self.pheromone.deposit_tour(tour, self.params.q / length)

        self.pheromone.evaporate(self.params.degradation)

        for tour, length in zip(tours, lengths):
            best.offer(tour, length)

        return Generation(tours=tours, lengths=lengths)


# ---------------------------------------------------------------------------
#  Top-level loop
# ---------------------------------------------------------------------------

class Optimizer:
    """
    Repeats the colony cycle for `params.iterations` generations.

    Parameters
    ----------
    locations : DistanceTable | sequence of (x, y)
        Depot first.
    params : ACOParams, optional
        Defaults to DEFAULT_PARAMS. Validated before anything is allocated.

    Every call to `run` starts from a fresh pheromone matrix and a fresh
    random stream derived from `params.seed`, so two runs with the same seed
    give identical results whatever the number of workers.
    """

    def __init__(self, locations: DistanceTable | Iterable[Sequence[float]], params: ACOParams | None = None) -> None:
        self.params = (params or DEFAULT_PARAMS).validate()
        if isinstance(locations, DistanceTable):
            self.distances = locations
        else:
            self.distances = DistanceTable.from_coordinates(locations)
        self.heuristic = self.distances.heuristic(self.params.beta)
        self.pheromone = PheromoneMatrix(self.distances.n, self.params.tau0)
        self.best = BestTour()
        self.history: list[float] = []

    @property
    def n(self) -> int:
        return self.distances.n

    def run(self, callback: ProgressCallback | None = None) -> ACOResult:
        p = self.params
        self.pheromone = PheromoneMatrix(self.n, p.tau0)
        self.best = BestTour()
        self.history = []

        if self.n == 1:
            self.best.offer([DEPOT, DEPOT], 0.0)
            return ACOResult(best_tour=self.best_tour(), best_length=0.0, iterations=0)

        seeds = np.random.SeedSequence(p.seed)
        generation_found = 0
        executor = ThreadPoolExecutor(max_workers=p.workers) if p.workers > 1 else None
        try:
            colony = Colony(self.distances, self.pheromone, self.heuristic, p, executor)
            for it in range(1, p.iterations + 1):
                rngs = [np.random.default_rng(child) for child in seeds.spawn(p.ants)]
                previous = self.best.length
                colony.run_generation(rngs, self.best)
                if self.best.length < previous:
                    generation_found = it
                self.history.append(self.best.length)
                if callback is not None:
                    callback(it, self.best, self.pheromone)
        finally:
            if executor is not None:
                executor.shutdown()

        return ACOResult(
            best_tour=self.best_tour(),
            best_length=self.best_length(),
            iterations=p.iterations,
            history=list(self.history),
            generation_found=generation_found,
        )

    # ---- read-only accessors ---------------------------------------------

    def best_tour(self) -> list[int]:
        return list(self.best.path) if self.best.path is not None else []

    def best_length(self) -> float:
        return self.best.length

    def pheromone_level(self, i: int, j: int) -> float:
        return self.pheromone.level(i, j)


def aco_tsp(locations: DistanceTable | Iterable[Sequence[float]], **params) -> tuple[list[int], float]:
    """Run the optimizer once; keyword arguments are ACOParams fields."""
    result = Optimizer(locations, ACOParams(**params)).run()
    return result.best_tour, result.best_length
