"""
Coordinate and tour files.

Two coordinate formats are understood:

* TSPLIB `.tsp` instances, read with tsplib95 (the first node is the depot);
* plain text with one `x,y` pair per line, depot on the first line.
"""

from __future__ import annotations

from pathlib import Path

import tsplib95

from .distance import DEPOT
from .errors import CoordinateFileError


def read_coordinates(path: str | Path) -> list[tuple[float, float]]:
    """Load the location coordinates, depot first."""
    path = Path(path)
    if not path.exists():
        raise CoordinateFileError(f"coordinate file '{path}' does not exist")
    if path.suffix.lower() == ".tsp":
        return _read_tsplib(path)
    return _read_pairs(path)


def _read_tsplib(path: Path) -> list[tuple[float, float]]:
    try:
        problem = tsplib95.load(path)
    except Exception as exc:
        raise CoordinateFileError(f"cannot parse TSPLIB file '{path}': {exc}") from exc

    coords = problem.node_coords
    if not coords:
        raise CoordinateFileError(f"'{path}' has no NODE_COORD_SECTION")
    # TSPLIB node ids are 1-based; keep file order by sorting them
    return [(float(coords[node][0]), float(coords[node][1])) for node in sorted(coords)]


def _read_pairs(path: Path) -> list[tuple[float, float]]:
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise CoordinateFileError(f"cannot read '{path}': {exc}") from exc

    coords = []
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.replace(",", " ").split()
        if len(parts) != 2:
            raise CoordinateFileError(f"{path}:{lineno}: expected 'x,y', got {line!r}")
        try:
            coords.append((float(parts[0]), float(parts[1])))
        except ValueError as exc:
            raise CoordinateFileError(f"{path}:{lineno}: {exc}") from exc
    if not coords:
        raise CoordinateFileError(f"'{path}' contains no coordinates")
    return coords


def load_optimal_tour(path: str | Path) -> list[int] | None:
    """
    Load a TSPLIB `.opt.tour` file as a closed 0-based tour starting at the depot.

    Returns None when the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        tour_file = tsplib95.load(path)
    except Exception as exc:
        raise CoordinateFileError(f"cannot parse tour file '{path}': {exc}") from exc

    if not tour_file.tours:
        raise CoordinateFileError(f"'{path}' has no TOUR_SECTION")
    # 1-based ids; drop a trailing -1 terminator if the parser kept it
    nodes = [v - 1 for v in tour_file.tours[0] if v > 0]
    if DEPOT not in nodes:
        raise CoordinateFileError(f"tour in '{path}' does not visit the depot")
    start = nodes.index(DEPOT)
    nodes = nodes[start:] + nodes[:start]
    return nodes + [DEPOT]


def optimal_tour_path(instance: str | Path) -> Path:
    """`name.tsp` -> `name.opt.tour`, next to the instance."""
    return Path(instance).with_suffix(".opt.tour")
