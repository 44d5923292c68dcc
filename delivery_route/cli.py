"""
Command line for the delivery route solvers.

    python -m delivery_route input01.txt --method aco --graph pheromone
    python -m delivery_route ch130.tsp --method compare --log results.csv
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pandas as pd

from .colony import Optimizer
from .config import DEFAULT_PARAMS, ACOParams
from .distance import DistanceTable
from .errors import RouteError
from .exact import MAX_BRUTE_FORCE, MAX_HELD_KARP, brute_force_tsp, held_karp_tsp
from .loader import load_optimal_tour, optimal_tour_path, read_coordinates
from .perf import Measurement, measure

METHOD_NAMES = {
    "brute": "Brute-Force Method",
    "dp": "Held-Karp Dynamic Programming",
    "aco": "Ant Colony Optimization Method",
}
OPTIMAL_ROW = "Optimal Solution"


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="delivery-route",
        description="Shortest delivery tour from the depot (first location) through every house and back.",
    )
    p.add_argument("instance", help="coordinate file: one 'x,y' per line, or a TSPLIB <name>.tsp")
    p.add_argument("--method", choices=["brute", "dp", "aco", "compare"], default="aco",
                   help="solver to run (default: aco)")
    p.add_argument("--graph", choices=["none", "pheromone", "path", "convergence", "comparison"], default="none",
                   help="figure to draw after the run")
    p.add_argument("--save-plot", default=None, help="write the figure to this file")
    p.add_argument("--show", action="store_true", help="open the figure in a window")
    p.add_argument("--log", default=None, help="append the results to this CSV file")
    p.add_argument("--verbose", action="store_true", help="print every ACO improvement")

    d = DEFAULT_PARAMS
    aco = p.add_argument_group("ACO parameters")
    aco.add_argument("--iterations", type=int, default=d.iterations, help=f"iteration count N (default: {d.iterations})")
    aco.add_argument("--ants", type=int, default=d.ants, help=f"ants per iteration M (default: {d.ants})")
    aco.add_argument("--degradation", type=float, default=d.degradation, help=f"evaporation factor in (0, 1] (default: {d.degradation})")
    aco.add_argument("--alpha", type=float, default=d.alpha, help=f"pheromone priority (default: {d.alpha})")
    aco.add_argument("--beta", type=float, default=d.beta, help=f"edge distance priority (default: {d.beta})")
    aco.add_argument("--tau0", type=float, default=d.tau0, help=f"initial pheromone intensity (default: {d.tau0})")
    aco.add_argument("--q", type=float, default=d.q, help=f"deposit scale Q (default: {d.q})")
    aco.add_argument("--seed", type=int, default=None, help="random seed for reproducible runs")
    aco.add_argument("--workers", type=int, default=1, help="threads per generation (default: 1)")
    return p


def params_from_args(args: argparse.Namespace) -> ACOParams:
    return ACOParams(
        iterations=args.iterations,
        ants=args.ants,
        degradation=args.degradation,
        alpha=args.alpha,
        beta=args.beta,
        tau0=args.tau0,
        q=args.q,
        seed=args.seed,
        workers=args.workers,
    ).validate()


def format_path(tour) -> str:
    """1-based location numbers, the way houses are labelled on the map."""
    return "[" + ", ".join(str(v + 1) for v in tour) + "]"


# ---------------------------------------------------------------------------
#  Solvers
# ---------------------------------------------------------------------------

def _progress_printer(optimizer: Optimizer):
    def report(it, best, _pheromone):
        if it == 1 or optimizer.history[-2] > best.length:
            print(f"iter={it} best_len={best.length:.4f}")
    return report


def _run_optimizer(optimizer: Optimizer, callback=None) -> tuple[list[int], float]:
    result = optimizer.run(callback=callback)
    return result.best_tour, result.best_length


def solve(method: str, dist: DistanceTable, params: ACOParams,
          verbose: bool = False) -> tuple[Measurement, Optimizer | None]:
    """Run one solver; the optimizer is returned too for ACO so its pheromone field can be drawn."""
    name = METHOD_NAMES[method]
    if method == "brute":
        return measure(name, brute_force_tsp, dist=dist), None
    if method == "dp":
        return measure(name, held_karp_tsp, dist=dist), None
    optimizer = Optimizer(dist, params)
    callback = _progress_printer(optimizer) if verbose else None
    return measure(name, _run_optimizer, optimizer=optimizer, callback=callback), optimizer


def print_record(m: Measurement) -> None:
    print("────────────────────────────────────────────────────────────────")
    print(f"Method: {m.method}")
    print(f"Shortest Distance: {m.cost}")
    print(f"Shortest Path: {format_path(m.tour)}")
    print(f"Time it takes to find the shortest path: {m.wall_s:.3f} seconds.  "
          f"|  CPU: {m.cpu_s:.3f} s  |  Memory: {m.memory_mb:.1f} MB")


LOG_COLUMNS = {
    "method": "Method", "tour": "Found_Tour", "cost": "Found_Cost",
    "wall_s": "Time_Taken_s", "cpu_s": "CPU_Time_s", "memory_mb": "Memory_Usage_MB",
}
TABLE_COLUMNS = {
    "method": "Method", "tour": "Tour", "cost": "Cost",
    "wall_s": "Time_s", "cpu_s": "CPU_s", "memory_mb": "Memory_MB",
}


def append_log(log_path: str, problem_name: str, n: int, records: list[Measurement]) -> None:
    df = pd.DataFrame([m.as_row() for m in records]).rename(columns=LOG_COLUMNS)
    df["Found_Tour"] = df["Found_Tour"].map(lambda t: " ".join(map(str, t)))
    df.insert(0, "Problem", problem_name)
    df.insert(1, "N_Locations", n)
    exists = Path(log_path).exists()
    df.to_csv(log_path, mode="a" if exists else "w", header=not exists, index=False)
    print(f"✅ Results have been logged to {log_path}")


def comparison_table(records: list[Measurement], optimal_cost: float | None = None) -> pd.DataFrame:
    """
    One row per solver, indexed by method name.

    Gap_Pct is measured against the known optimum when there is one (it then
    gets its own zero-cost row), else against the best exact solver.
    """
    df = pd.DataFrame([m.as_row() for m in records]).rename(columns=TABLE_COLUMNS).set_index("Method")
    reference = optimal_cost
    if reference is None:
        exact = df.loc[df.index != METHOD_NAMES["aco"], "Cost"]
        reference = exact.min() if len(exact) else None
    else:
        df.loc[OPTIMAL_ROW] = {"Tour": None, "Cost": optimal_cost,
                               "Time_s": 0.0, "CPU_s": 0.0, "Memory_MB": 0.0}
    if reference is not None and reference > 0:
        df["Gap_Pct"] = (df["Cost"] - reference) / reference * 100
    return df


# ---------------------------------------------------------------------------
#  Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = build_argparser()
    args = parser.parse_args(argv)

    try:
        params = params_from_args(args)
        instance = Path(args.instance)
        coords = read_coordinates(instance)
        dist = DistanceTable.from_coordinates(coords)

        if args.method == "compare":
            methods = [m for m, limit in (("brute", MAX_BRUTE_FORCE), ("dp", MAX_HELD_KARP)) if dist.n <= limit]
            methods.append("aco")
        else:
            methods = [args.method]

        records = []
        optimizer = None
        for method in methods:
            record, opt = solve(method, dist, params, verbose=args.verbose)
            optimizer = opt or optimizer
            records.append(record)
            print_record(record)

        optimal_cost = None
        if instance.suffix.lower() == ".tsp":
            opt_tour = load_optimal_tour(optimal_tour_path(instance))
            if opt_tour is not None:
                optimal_cost = dist.tour_length(opt_tour)
                print(f"Known optimum : {optimal_cost:,.4f}")
    except RouteError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1

    df = None
    if args.method == "compare":
        df = comparison_table(records, optimal_cost)
        print()
        print(df.drop(columns=["Tour"]).to_string())

    if args.log:
        append_log(args.log, instance.stem, dist.n, records)

    if args.graph != "none":
        draw(args, coords, records[-1], optimizer, df, instance.stem)

    return 0


def draw(args: argparse.Namespace, coords, record: Measurement, optimizer: Optimizer | None,
         df: pd.DataFrame | None = None, problem_name: str = "") -> None:
    from . import plot

    if args.graph == "path":
        plot.plot_best_path(coords, record.tour, record.cost, save_path=args.save_plot)
    elif args.graph == "comparison":
        if df is None:
            print("[warning] --graph comparison needs --method compare; nothing drawn", file=sys.stderr)
            return
        plot.plot_algorithm_comparison(df, problem_name, save_path=args.save_plot)
    elif optimizer is None:
        print(f"[warning] --graph {args.graph} needs an ACO run; nothing drawn", file=sys.stderr)
        return
    elif args.graph == "pheromone":
        plot.plot_pheromone_intensity(coords, optimizer.pheromone, save_path=args.save_plot)
    else:
        plot.plot_convergence(optimizer.history, save_path=args.save_plot)

    if args.show:
        plot.plt.show()
