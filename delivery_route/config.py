"""
Run parameters for the Ant Colony Optimizer.

`ACOParams` is a frozen record, validated as soon as it is built.
`DEFAULT_PARAMS` reproduces the settings of the original delivery program.
"""

from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True)
class ACOParams:
    """Parameters of one ACO run.

    Parameters
    ----------
    iterations : int
        Number of generations N.
    ants : int
        Ants spawned per generation M.
    degradation : float
        Evaporation factor ρ in (0, 1]; every pheromone entry is multiplied by
        it once per generation.
    alpha : float
        Exponent applied to the pheromone level (exploitation).
    beta : float
        Exponent applied to the inverse distance (exploration).
    tau0 : float
        Initial pheromone intensity of every edge.
    q : float
        Deposit scale: an ant with tour length L deposits q / L on each edge.
    seed : int | None
        Seed of the random source; None draws fresh OS entropy.
    workers : int
        Threads used to run the ants of one generation.
    """

    iterations: int = 100
    ants: int = 20
    degradation: float = 0.9
    alpha: float = 1.0
    beta: float = 2.0
    tau0: float = 0.1
    q: float = 1.0
    seed: int | None = None
    workers: int = 1

    def __post_init__(self):
        self.validate()

    def validate(self) -> "ACOParams":
        """Raise ConfigurationError for any mistyped or out-of-range value, else return self."""
        for name in ("iterations", "ants", "workers"):
            value = getattr(self, name)
            # bool is an Integral too, but `ants=True` is never meant
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.iterations < 1:
            raise ConfigurationError(f"iterations must be >= 1, got {self.iterations}")
        if self.ants < 1:
            raise ConfigurationError(f"ants must be >= 1, got {self.ants}")
        if not 0.0 < self.degradation <= 1.0:
            raise ConfigurationError(f"degradation must be in (0, 1], got {self.degradation}")
        for name in ("alpha", "beta"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(f"{name} must be a finite value >= 0, got {value}")
        for name in ("tau0", "q"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a finite value > 0, got {value}")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        return self

    def replace(self, **changes) -> "ACOParams":
        return dataclasses.replace(self, **changes)


# Original program: N=300, M=200, degradationFactor=0.9, alpha=0.8, beta=1.5,
# initialPheromoneIntensity=0.1, Q=0.0001.
DEFAULT_PARAMS = ACOParams(
    iterations=300,
    ants=200,
    degradation=0.9,
    alpha=0.8,
    beta=1.5,
    tau0=0.1,
    q=0.0001,
)
