import matplotlib

matplotlib.use("Agg")

import pytest

SQUARE_TSP = """NAME: square
TYPE: TSP
COMMENT: square of side 10
DIMENSION: 4
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 10 0
3 10 10
4 0 10
EOF
"""

SQUARE_TOUR = """NAME: square.opt.tour
TYPE: TOUR
DIMENSION: 4
TOUR_SECTION
3
4
1
2
-1
EOF
"""


@pytest.fixture
def square():
    return [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


@pytest.fixture
def square_tsp(tmp_path):
    """TSPLIB square of side 10 with its .opt.tour next to it."""
    tsp = tmp_path / "square.tsp"
    tsp.write_text(SQUARE_TSP, encoding="utf-8")
    (tmp_path / "square.opt.tour").write_text(SQUARE_TOUR, encoding="utf-8")
    return tsp


@pytest.fixture
def random_coords():
    import numpy as np

    rng = np.random.default_rng(2024)
    return [tuple(p) for p in rng.uniform(0, 10, size=(8, 2))]


@pytest.fixture
def check_tour():
    def check(tour, n):
        assert len(tour) == n + 1
        assert tour[0] == 0 and tour[-1] == 0
        assert sorted(tour[:-1]) == list(range(n))
    return check
