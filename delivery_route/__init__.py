"""
Delivery route optimisation.

Finds a short closed tour from the depot (location 0) through every house
and back, either exactly (brute force, Held-Karp) or with an Ant Colony
Optimizer.
"""

from .colony import ACOResult, BestTour, Colony, Optimizer, aco_tsp
from .config import DEFAULT_PARAMS, ACOParams
from .distance import DistanceTable, Location
from .errors import ConfigurationError, CoordinateFileError, RouteError
from .exact import brute_force_tsp, held_karp_tsp
from .pheromone import PheromoneMatrix

__all__ = [
    "ACOParams", "ACOResult", "BestTour", "Colony", "ConfigurationError",
    "CoordinateFileError", "DEFAULT_PARAMS", "DistanceTable", "Location",
    "Optimizer", "PheromoneMatrix", "RouteError", "aco_tsp",
    "brute_force_tsp", "held_karp_tsp",
]
