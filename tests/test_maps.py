import json

import pytest

from gridstep.core.types import CellKind, GridError, Status
from gridstep.core.maps import (MapFormatError, bundled_maps, grid_from_dict, grid_to_dict,
                                load_map, random_grid, save_map)
from gridstep.core.stepper import run_to_completion


def test_random_grid_has_one_start_and_goal():
    for seed in range(20):
        g = random_grid(8, 0.3, seed=seed)
        assert (g.width, g.height) == (8, 8)
        assert len(g.cells_of(CellKind.START)) == 1
        assert len(g.cells_of(CellKind.GOAL)) == 1
        assert g.start != g.goal
        assert g.costs is None


def test_random_grid_seed_is_reproducible():
    assert random_grid(10, seed=5).kinds == random_grid(10, seed=5).kinds


def test_random_weighted_costs_in_range():
    g = random_grid(10, weighted=True, max_cost=4, seed=1)
    flat = [c for row in g.costs for c in row]
    assert min(flat) >= 1 and max(flat) <= 4


def test_random_grid_wall_count_bounded():
    g = random_grid(10, 0.3, seed=2)
    assert len(g.cells_of(CellKind.WALL)) <= 30


def test_random_grid_rejects_tiny():
    with pytest.raises(GridError):
        random_grid(1)


def workshop_map():
    return {
        "width": 4,
        "height": 3,
        "start": [0, 0],
        "goal": [3, 2],
        "weights": {"0": 1, "2": 5, "4": "BLOCK"},
        "cells": [
            [0, 2, 1, 0],
            [0, 4, 0, 0],
            [0, 0, 2, 0],
        ],
    }


def test_grid_from_workshop_dict():
    g = grid_from_dict(workshop_map())
    assert g.start == (0, 0)
    assert g.goal == (3, 2)
    assert g.is_block((2, 0))
    assert g.is_block((1, 1))
    assert g.cost((1, 0)) == 5
    assert g.cost((3, 0)) == 1


def test_unweighted_dict_has_no_costs():
    data = workshop_map()
    del data["weights"]
    data["cells"][1][1] = 0
    g = grid_from_dict(data)
    assert g.costs is None


@pytest.mark.parametrize("mutate", [
    lambda d: d.pop("cells"),
    lambda d: d.__setitem__("height", 5),
    lambda d: d.__setitem__("start", [9, 9]),
    lambda d: d.__setitem__("goal", [-1, 0]),
    lambda d: d.__setitem__("goal", [2, 0]),
    lambda d: d.__setitem__("goal", [0, 0]),
    lambda d: d.__setitem__("start", "nowhere"),
    lambda d: d.__setitem__("weights", {"2": "heavy"}),
    lambda d: d.__setitem__("weights", ["BLOCK"]),
    lambda d: d.__setitem__("costs", [[1, 1]]),
    lambda d: d.__setitem__("costs", [[1, 1, 1, 1], [1, "x", 1, 1], [1, 1, 1, 1]]),
    lambda d: d.__setitem__("cells", [0, 0, 0]),
])
def test_bad_dicts_raise(mutate):
    data = workshop_map()
    mutate(data)
    with pytest.raises(MapFormatError):
        grid_from_dict(data)


def test_save_and_load(tmp_path):
    g = random_grid(7, weighted=True, seed=9)
    path = tmp_path / "grid.json"
    save_map(g, path)
    back = load_map(path)
    assert back.kinds == g.kinds
    assert back.costs == g.costs
    assert grid_to_dict(back) == grid_to_dict(g)


def test_load_rejects_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{ not json")
    with pytest.raises(MapFormatError):
        load_map(path)


@pytest.mark.parametrize("raw", [b"\xff\xfe{", b"[1, 2, 3]"])
def test_load_rejects_undecodable_or_non_object(tmp_path, raw):
    path = tmp_path / "broken.json"
    path.write_bytes(raw)
    with pytest.raises(MapFormatError):
        load_map(path)


def test_bundled_maps_are_solvable(algo_key, make_engine):
    maps = bundled_maps()
    assert len(maps) >= 3
    for name, path in maps.items():
        json.loads(path.read_text())
        engine = make_engine(algo_key, load_map(path))
        assert run_to_completion(engine).status == Status.DONE, name
