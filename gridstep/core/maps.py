#!/usr/bin/env python3
"""
Grid sources: random layouts and JSON map files.

JSON format (same as the workshop maps):
    {
      "width": 8, "height": 6,
      "cells": [[0, 0, 1, ...], ...],      # [row][col]; 1 is always a wall
      "start": [0, 0], "goal": [7, 5],     # (col, row)
      "weights": {"2": 3, "4": "BLOCK"},   # optional: cell value -> cost
      "costs": [[1, 3, ...], ...]          # optional: explicit per-cell costs
    }
"""

import json
import random
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from gridstep.core.types import Cell, CellKind, Grid, GridError

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"

BLOCK = "BLOCK"


class MapFormatError(GridError):
    """Map file is malformed."""


# ---------- random layouts ----------

def random_grid(size: int = 20, wall_ratio: float = 0.3, weighted: bool = False,
                max_cost: int = 9, seed: Optional[int] = None,
                rng: Optional[random.Random] = None) -> Grid:
    """Random square grid with walls, one start, one goal and optional costs.

    Walls are int(size*size*wall_ratio) random picks (repeats allowed, so the
    real wall count can be lower). Start and goal are random non-wall cells.
    """
    if size < 2:
        raise GridError(f"grid size must be at least 2, got {size}")
    rng = rng or random.Random(seed)

    kinds = [[int(CellKind.EMPTY)] * size for _ in range(size)]
    costs = [[rng.randint(1, max_cost) for _ in range(size)] for _ in range(size)] if weighted else None

    for _ in range(int(size * size * wall_ratio)):
        x = rng.randrange(size)
        y = rng.randrange(size)
        kinds[y][x] = int(CellKind.WALL)

    free = [(x, y) for y in range(size) for x in range(size) if kinds[y][x] != CellKind.WALL]
    if len(free) < 2:
        raise GridError("not enough free cells for a start and a goal")

    start = free[rng.randrange(len(free))]
    while True:
        goal = free[rng.randrange(len(free))]
        if goal != start:
            break

    sx, sy = start
    gx, gy = goal
    kinds[sy][sx] = int(CellKind.START)
    kinds[gy][gx] = int(CellKind.GOAL)
    return Grid(size, size, kinds, costs)


# ---------- JSON maps ----------

def _cell(data: Dict[str, Any], key: str) -> Cell:
    try:
        x, y = data[key]
        return int(x), int(y)
    except (KeyError, TypeError, ValueError):
        raise MapFormatError(f"map needs '{key}' as [col, row]") from None


def _fits(rows: Any, width: int, height: int) -> bool:
    return (isinstance(rows, list) and len(rows) == height
            and all(isinstance(r, list) and len(r) == width for r in rows))


def grid_from_dict(data: Dict[str, Any]) -> Grid:
    try:
        width = int(data["width"])
        height = int(data["height"])
        cells = data["cells"]
    except (KeyError, TypeError, ValueError) as ex:
        raise MapFormatError(f"map is missing width/height/cells: {ex}") from None
    weights = data.get("weights", {})
    explicit_costs = data.get("costs")
    if not isinstance(weights, dict):
        raise MapFormatError("weights must map cell values to costs")

    if not _fits(cells, width, height):
        raise MapFormatError("cells size mismatch")
    if explicit_costs is not None and not _fits(explicit_costs, width, height):
        raise MapFormatError("costs size mismatch")
    start = _cell(data, "start")
    goal = _cell(data, "goal")
    sx, sy = start
    gx, gy = goal
    if not (0 <= sx < width and 0 <= sy < height):
        raise MapFormatError("start out of bounds")
    if not (0 <= gx < width and 0 <= gy < height):
        raise MapFormatError("goal out of bounds")

    kinds: List[List[int]] = []
    costs: Optional[List[List[int]]] = [] if (weights or explicit_costs) else None
    for y, row in enumerate(cells):
        krow: List[int] = []
        crow: List[int] = []
        for x, v in enumerate(row):
            w = weights.get(str(v), 1)
            blocked = v == 1 or w == BLOCK
            krow.append(int(CellKind.WALL if blocked else CellKind.EMPTY))
            raw = explicit_costs[y][x] if explicit_costs is not None else (1 if blocked else w)
            try:
                crow.append(int(raw))
            except (TypeError, ValueError):
                raise MapFormatError(f"cell {(x, y)} has a non-integer cost {raw!r}") from None
        kinds.append(krow)
        if costs is not None:
            costs.append(crow)

    if kinds[sy][sx] == CellKind.WALL or kinds[gy][gx] == CellKind.WALL:
        raise MapFormatError("start or goal sits on a wall")
    if start == goal:
        raise MapFormatError("start and goal must differ")
    kinds[sy][sx] = int(CellKind.START)
    kinds[gy][gx] = int(CellKind.GOAL)
    return Grid(width, height, kinds, costs)


def grid_to_dict(grid: Grid) -> Dict[str, Any]:
    cells = [[1 if v == CellKind.WALL else 0 for v in row] for row in grid.kinds]
    data: Dict[str, Any] = {
        "width": grid.width,
        "height": grid.height,
        "cells": cells,
        "start": list(grid.start),
        "goal": list(grid.goal),
    }
    if grid.costs is not None:
        data["costs"] = [list(r) for r in grid.costs]
    return data


def load_map(path: Union[str, Path]) -> Grid:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except ValueError as ex:  # JSONDecodeError, UnicodeDecodeError
        raise MapFormatError(f"{path.name}: invalid JSON ({ex})") from None
    if not isinstance(data, dict):
        raise MapFormatError(f"{path.name}: top level must be a JSON object")
    return grid_from_dict(data)


def save_map(grid: Grid, path: Union[str, Path]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(grid_to_dict(grid), f)


def bundled_maps() -> Dict[str, Path]:
    return {p.stem: p for p in sorted(MAP_DIR.glob("*.json"))}
