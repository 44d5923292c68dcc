"""
Exact solvers, used as a point of comparison for the ant colony.

Both return `(tour, cost)` with the tour closed at the depot, like the ACO
solver, and raise ConfigurationError when the instance is too large to
enumerate in reasonable time.
"""

from __future__ import annotations

import itertools
import math

from .distance import DEPOT, DistanceTable
from .errors import ConfigurationError

MAX_BRUTE_FORCE = 11
MAX_HELD_KARP = 15


# ---------- Brute force ---------- #
def brute_force_tsp(dist: DistanceTable) -> tuple[list[int], float]:
    """
    Try every ordering of the destinations.

    Orders are enumerated lexicographically and only a strictly shorter tour
    replaces the incumbent, so ties resolve to the first ordering found.
    """
    n = dist.n
    if n > MAX_BRUTE_FORCE:
        raise ConfigurationError(
            f"brute force is limited to {MAX_BRUTE_FORCE} locations, got {n}"
        )
    if n == 1:
        return [DEPOT, DEPOT], 0.0

    best_cost = math.inf
    best_tour: list[int] = []
    for order in itertools.permutations(range(1, n)):
        tour = [DEPOT, *order, DEPOT]
        cost = dist.tour_length(tour)
        if cost < best_cost:
            best_cost, best_tour = cost, tour
    return best_tour, best_cost


# ---------- Held-Karp DP ---------- #
def held_karp_tsp(dist: DistanceTable) -> tuple[list[int], float]:
    """
    Held-Karp dynamic programming over subsets of visited locations.

    dp[mask][pos] = (cost, prev): cheapest path that leaves the depot, visits
    exactly the locations in `mask` and stops at `pos`.
    """
    n = dist.n
    if n > MAX_HELD_KARP:
        raise ConfigurationError(
            f"Held-Karp is limited to {MAX_HELD_KARP} locations, got {n}"
        )
    if n == 1:
        return [DEPOT, DEPOT], 0.0

    cost = dist.matrix
    full_mask = (1 << n) - 1
    dp: list[dict[int, tuple[float, int]]] = [dict() for _ in range(1 << n)]
    dp[1][DEPOT] = (0.0, -1)

    for mask in range(1 << n):
        for pos, (cost_so_far, _) in list(dp[mask].items()):
            for nxt in range(n):
                if mask & (1 << nxt):
                    continue
                new_mask = mask | (1 << nxt)
                new_cost = cost_so_far + float(cost[pos, nxt])
                if nxt not in dp[new_mask] or new_cost < dp[new_mask][nxt][0]:
                    dp[new_mask][nxt] = (new_cost, pos)

    # close the cycle back at the depot
    best_cost = math.inf
    last = -1
    for pos, (c, _) in dp[full_mask].items():
        total = c + float(cost[pos, DEPOT])
        if total < best_cost:
            best_cost, last = total, pos

    path = [DEPOT] * (n + 1)
    mask, idx = full_mask, last
    for i in range(n - 1, 0, -1):
        path[i] = idx
        _, idx = dp[mask][idx]
        mask ^= 1 << path[i]
    return path, best_cost
