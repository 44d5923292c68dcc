"""
Matplotlib views of a finished run.

The depot is drawn as an orange disc and destinations as light grey discs,
each labelled with its 1-based location number.
"""

from __future__ import annotations

from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .pheromone import PheromoneMatrix

DEPOT_COLOR = "#ff8f00"
HOUSE_COLOR = "lightgray"
MAX_LINE_WIDTH = 8.0


def _draw_locations(ax, coords: Sequence[Sequence[float]]) -> None:
    xs = [c[0] for c in coords]
    ys = [c[1] for c in coords]
    colors = [DEPOT_COLOR] + [HOUSE_COLOR] * (len(coords) - 1)
    ax.scatter(xs, ys, s=300, c=colors, edgecolors="black", zorder=3)
    for k, (x, y) in enumerate(zip(xs, ys)):
        ax.text(x, y, str(k + 1), ha="center", va="center", fontsize=9,
                fontweight="bold", fontfamily="serif", zorder=4)
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_xticks([]); ax.set_yticks([])


def _finish(fig, save_path: str | None):
    fig.tight_layout()
    if save_path:
        fig.savefig(save_path)
        print(f"📈 Plot saved to {save_path}")
    return fig


def plot_pheromone_intensity(coords, pheromone: PheromoneMatrix | np.ndarray, save_path: str | None = None):
    """Every edge drawn with a width proportional to its pheromone level."""
    tau = pheromone.as_array() if isinstance(pheromone, PheromoneMatrix) else np.asarray(pheromone)
    n = len(coords)
    off_diagonal = tau[~np.eye(n, dtype=bool)] if n > 1 else np.array([0.0])
    peak = off_diagonal.max() if off_diagonal.size else 0.0

    fig, ax = plt.subplots(figsize=(8, 8))
    for i in range(n):
        for j in range(i + 1, n):
            width = MAX_LINE_WIDTH * tau[i, j] / peak if peak > 0 else 0.0
            if width <= 0:
                continue
            ax.plot([coords[i][0], coords[j][0]], [coords[i][1], coords[j][1]],
                    color="black", linewidth=width, alpha=0.8, zorder=1)
    _draw_locations(ax, coords)
    ax.set_title("Pheromone Intensity")
    return _finish(fig, save_path)


def plot_best_path(coords, tour: Sequence[int], length: float | None = None, save_path: str | None = None):
    fig, ax = plt.subplots(figsize=(8, 8))
    for a, b in zip(tour, tour[1:]):
        ax.plot([coords[a][0], coords[b][0]], [coords[a][1], coords[b][1]],
                color="black", linewidth=2, zorder=1)
    _draw_locations(ax, coords)
    title = "Best Path"
    if length is not None:
        title += f" (length = {length:,.4f})"
    ax.set_title(title)
    return _finish(fig, save_path)


def plot_convergence(history: Sequence[float], save_path: str | None = None):
    """Best length after each generation."""
    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(range(1, len(history) + 1), history, marker="o", markersize=3, color="coral")
    ax.set_title("ACO Convergence"); ax.set_xlabel("Iteration"); ax.set_ylabel("Best length")
    ax.grid(True)
    return _finish(fig, save_path)


# column of `cli.comparison_table` -> (panel title, y label)
COMPARISON_PANELS = {
    "Cost": ("Tour length", "Total cost"),
    "Time_s": ("Wall time", "Seconds"),
    "Memory_MB": ("Resident memory", "MB"),
    "Gap_Pct": ("Gap to reference", "%"),
}
BAR_COLORS = ["#1f77b4", "#ff7f0e", "#2ca02c", "#d62728"]


def plot_algorithm_comparison(df: pd.DataFrame, problem_name: str = "", save_path: str | None = None):
    """One bar panel per metric column present in `df`, which has one row per solver."""
    panels = [col for col in COMPARISON_PANELS if col in df.columns]
    if not panels:
        raise ValueError(f"no plottable column among {list(df.columns)}")

    fig, axs = plt.subplots(1, len(panels), figsize=(5 * len(panels), 6), squeeze=False)
    for ax, col in zip(axs[0], panels):
        title, ylabel = COMPARISON_PANELS[col]
        df[col].astype(float).plot(kind="bar", ax=ax, color=BAR_COLORS[:len(df)])
        ax.set_title(title); ax.set_ylabel(ylabel); ax.set_xlabel("")
        ax.tick_params(axis="x", rotation=15)
    fig.suptitle(f'Solver comparison on "{problem_name}"' if problem_name else "Solver comparison")
    return _finish(fig, save_path)
