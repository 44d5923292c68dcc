"""
Distance table for the delivery problem.

The table is built once from the location coordinates (depot first) and is
read-only afterwards: the underlying NumPy array is flagged non-writeable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .errors import ConfigurationError

# 1 / d for coincident locations; large but finite so that (1/d)^β stays finite.
ZERO_DISTANCE_HEURISTIC = 1e6

DEPOT = 0


@dataclass(frozen=True)
class Location:
    index: int
    x: float
    y: float

    @property
    def is_depot(self) -> bool:
        return self.index == DEPOT


def euclidean_distance(p1: Sequence[float], p2: Sequence[float]) -> float:
    return math.hypot(p1[0] - p2[0], p1[1] - p2[1])


def as_locations(coords: Iterable[Sequence[float]]) -> list[Location]:
    """Turn (x, y) pairs into Locations, rejecting anything that is not a finite 2-D point."""
    locations = []
    for idx, point in enumerate(coords):
        if len(point) != 2:
            raise ConfigurationError(f"location {idx} must be an (x, y) pair, got {point!r}")
        x, y = float(point[0]), float(point[1])
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ConfigurationError(f"location {idx} has non-finite coordinates ({x}, {y})")
        locations.append(Location(idx, x, y))
    return locations


class DistanceTable:
    """Symmetric n × n matrix of Euclidean distances between all locations."""

    def __init__(self, matrix: np.ndarray, locations: Sequence[Location] | None = None) -> None:
        matrix = np.array(matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.shape[0] < 1:
            raise ConfigurationError("distance matrix must be square and non-empty")
        if np.any(matrix < 0) or not np.all(np.isfinite(matrix)):
            raise ConfigurationError("distances must be finite and non-negative")
        matrix.setflags(write=False)
        self._dist = matrix
        self.locations: list[Location] = list(locations) if locations is not None else []

    @classmethod
    def from_coordinates(cls, coords: Iterable[Sequence[float]]) -> "DistanceTable":
        locations = as_locations(coords)
        if not locations:
            raise ConfigurationError("at least one location (the depot) is required")
        points = np.array([(loc.x, loc.y) for loc in locations], dtype=float)
        diff = points[:, None, :] - points[None, :, :]
        matrix = np.hypot(diff[..., 0], diff[..., 1])
        return cls(matrix, locations)

    @property
    def n(self) -> int:
        return self._dist.shape[0]

    @property
    def matrix(self) -> np.ndarray:
        """Read-only view of the distances."""
        return self._dist

    def distance(self, i: int, j: int) -> float:
        return float(self._dist[i, j])

    def tour_length(self, tour: Sequence[int]) -> float:
        """Sum of consecutive distances along a closed tour (its last entry is the depot again)."""
        if len(tour) < 2:
            return 0.0
        idx = np.asarray(tour, dtype=int)
        return float(self._dist[idx[:-1], idx[1:]].sum())

    def heuristic(self, beta: float) -> np.ndarray:
        """
        (1 / d)^β for every pair of locations.

        Coincident distinct locations (d == 0) get ZERO_DISTANCE_HEURISTIC as
        their inverse distance, i.e. maximal desirability. The diagonal is
        zero; self-loops are never candidates.
        """
        with np.errstate(divide="ignore"):
            inverse = np.where(self._dist > 0, 1.0 / self._dist, ZERO_DISTANCE_HEURISTIC)
        np.fill_diagonal(inverse, 0.0)
        with np.errstate(over="ignore"):
            eta = inverse ** beta
        np.fill_diagonal(eta, 0.0)
        eta.setflags(write=False)
        return eta

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return f"DistanceTable(n={self.n})"
