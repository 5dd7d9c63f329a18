"""Engines against a Bellman-Ford style fixpoint on small random grids."""
from math import inf

import pytest

from gridstep.core.types import Status
from gridstep.core.maps import random_grid
from gridstep.core.stepper import run_to_completion


def brute_force_costs(grid, engine):
    """Relax every edge until nothing changes; no queue, no heuristic."""
    dist = {grid.start: 0}
    changed = True
    while changed:
        changed = False
        for y in range(grid.height):
            for x in range(grid.width):
                u = (x, y)
                if u not in dist:
                    continue
                for v in grid.neighbors(u, engine.connectivity):
                    if grid.is_block(v):
                        continue
                    alt = dist[u] + engine.edge_cost(u, v)
                    if alt < dist.get(v, inf):
                        dist[v] = alt
                        changed = True
    return dist


def step_bound(grid, engine):
    # one pop per push; every traversable cell pushes at most once per neighbour
    return grid.width * grid.height * (engine.connectivity + 1) + 2


CASES = [(size, seed) for size in (4, 5, 6) for seed in range(15)]


@pytest.mark.parametrize("size,seed", CASES)
def test_matches_brute_force(size, seed, algo_key, make_engine):
    grid = random_grid(size, wall_ratio=0.3, weighted=True, max_cost=5, seed=seed)
    engine = make_engine(algo_key, grid)
    expected = brute_force_costs(grid, engine)

    res = run_to_completion(engine, max_steps=step_bound(grid, engine))
    assert res.status != Status.RUNNING

    goal = grid.goal
    if goal not in expected:
        assert res.status == Status.NO_PATH
        return

    assert res.status == Status.DONE
    path = engine.current_path()
    assert path[0] == grid.start and path[-1] == goal
    for a, b in zip(path, path[1:]):
        assert b in grid.neighbors(a, engine.connectivity)
        assert grid.is_traversable(b)
    assert engine.path_cost(path) == expected[goal]
    assert engine.total_cost() == expected[goal]
