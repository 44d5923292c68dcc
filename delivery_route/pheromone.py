"""Pheromone memory: a symmetric n × n matrix of edge intensities."""

from __future__ import annotations

from typing import Sequence

import numpy as np

# Smallest normal double. Positive entries never evaporate below it.
PHEROMONE_FLOOR = np.finfo(float).tiny


class PheromoneMatrix:
    """
    Pheromone levels per edge, kept symmetric.

    Every entry, diagonal included, starts at the same initial intensity.
    `deposit` writes [i][j] and [j][i] with the same amount and `evaporate`
    scales the whole matrix, so the matrix stays symmetric after any sequence
    of updates.
    """

    def __init__(self, n: int, initial: float) -> None:
        if n < 1:
            raise ValueError(f"pheromone matrix needs n >= 1, got {n}")
        if initial < 0:
            raise ValueError(f"initial pheromone must be non-negative, got {initial}")
        self.initial = float(initial)
        self._tau = np.full((n, n), self.initial, dtype=float)

    @property
    def n(self) -> int:
        return self._tau.shape[0]

    def level(self, i: int, j: int) -> float:
        return float(self._tau[i, j])

    def row(self, i: int) -> np.ndarray:
        """Read-only view of the levels on the edges leaving location i."""
        view = self._tau[i]
        view.flags.writeable = False
        return view

    def deposit(self, i: int, j: int, amount: float) -> None:
        if amount < 0:
            raise ValueError(f"deposit amount must be non-negative, got {amount}")
        self._tau[i, j] += amount
        if i != j:
            self._tau[j, i] += amount

    def deposit_tour(self, tour: Sequence[int], amount: float) -> None:
        """Deposit `amount` on every consecutive edge of a closed tour."""
        for a, b in zip(tour, tour[1:]):
            self.deposit(a, b, amount)

    def evaporate(self, factor: float) -> None:
        """Multiply every entry by `factor` (0 < factor <= 1) in place."""
        if not 0.0 < factor <= 1.0:
            raise ValueError(f"evaporation factor must be in (0, 1], got {factor}")
        self._tau *= factor
        np.maximum(self._tau, PHEROMONE_FLOOR, out=self._tau, where=self._tau > 0)

    def as_array(self) -> np.ndarray:
        return self._tau.copy()

    def is_symmetric(self) -> bool:
        return bool(np.array_equal(self._tau, self._tau.T))

    def __repr__(self) -> str:
        return f"PheromoneMatrix(n={self.n}, max={self._tau.max():.4g})"
