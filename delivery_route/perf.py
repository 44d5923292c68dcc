"""Timing and memory of one solver call."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Callable

import psutil

Solver = Callable[..., "tuple[list[int], float]"]


@dataclass
class Measurement:
    """
    Outcome of one solver run.

    `memory_mb` is the resident set size of the whole process once the solver
    returns, not the solver's own allocation.
    """

    method: str
    tour: list[int]
    cost: float
    wall_s: float
    cpu_s: float
    memory_mb: float

    def as_row(self) -> dict:
        return asdict(self)


def measure(method: str, solver: Solver, **kwargs) -> Measurement:
    """Call `solver(**kwargs)`, which must return (tour, cost), and record its wall/CPU time and RSS."""
    process = psutil.Process()
    cpu_before = process.cpu_times()
    started = time.perf_counter()

    tour, cost = solver(**kwargs)

    wall = time.perf_counter() - started
    cpu_after = process.cpu_times()
    cpu = (cpu_after.user - cpu_before.user) + (cpu_after.system - cpu_before.system)
    return Measurement(
        method=method,
        tour=list(tour),
        cost=float(cost),
        wall_s=wall,
        cpu_s=cpu,
        memory_mb=process.memory_info().rss / 2 ** 20,
    )
