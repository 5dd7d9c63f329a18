import pytest

from gridstep.core.types import Grid
from gridstep.core.algorithms import ALGORITHMS


def open_rows(n, start=(0, 0), goal=None):
    goal = goal or (n - 1, n - 1)
    rows = []
    for y in range(n):
        row = ""
        for x in range(n):
            row += "S" if (x, y) == start else "G" if (x, y) == goal else "."
        rows.append(row)
    return rows


@pytest.fixture
def open_grid():
    return Grid.from_rows(open_rows(5))


@pytest.fixture
def enclosed_grid():
    return Grid.from_rows([
        "#####.",
        "#S..#.",
        "#...#.",
        "#####.",
        "....G.",
    ])


@pytest.fixture(params=sorted(ALGORITHMS))
def algo_key(request):
    return request.param


@pytest.fixture
def make_engine():
    def _make(key, grid=None):
        engine = ALGORITHMS[key](trace_memory=False)
        if grid is not None:
            engine.init(grid)
        return engine
    return _make
