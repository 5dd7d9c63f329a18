#!/usr/bin/env python3
"""
Headless driver: build a grid, run one engine to the end, print a summary.

    gridstep-run --algo dijkstra --size 30 --weighted --seed 7
    gridstep-run --algo astar --map gridstep/maps/02_corridors.json
"""

import sys
from typing import List, Optional

from gridstep.config import Settings, load_settings
from gridstep.core.algorithms import make_algo
from gridstep.core.maps import MapFormatError, load_map, random_grid
from gridstep.core.stepper import run_to_completion
from gridstep.core.types import Grid, GridError, Status


def make_grid(settings: Settings) -> Grid:
    if settings.map_path:
        return load_map(settings.map_path)
    return random_grid(settings.grid_size, settings.wall_ratio, settings.weighted,
                       settings.max_cost, seed=settings.seed)


def format_summary(name: str, res, path: Optional[List], engine) -> str:
    m = engine.metrics_snapshot()
    lines = [f"{name}: {res.status.value}"]
    if path:
        lines.append(f"  path length: {len(path)} cells")
        lines.append(f"  path cost:   {engine.total_cost()}")
    lines.append(f"  steps:       {m.steps}")
    lines.append(f"  elapsed:     {m.elapsed_ns / 1e6:.3f} ms")
    lines.append(f"  memory:      {m.memory_delta_bytes / 1024:.1f} KiB")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = load_settings(argv, description="Run one grid search to completion")
    except ValueError as ex:
        print(f"Bad settings: {ex}")
        return 2

    try:
        grid = make_grid(settings)
    except (OSError, MapFormatError) as ex:
        print(f"Failed to load map {settings.map_path}: {ex}")
        return 1
    except GridError as ex:
        print(f"Failed to make grid: {ex}")
        return 1

    engine = make_algo(settings.algorithm, trace_memory=settings.trace_memory)
    try:
        engine.init(grid)
    except GridError as ex:
        print(f"Grid rejected by {engine.name}: {ex}")
        return 1

    res = run_to_completion(engine, max_steps=settings.max_steps)
    print(format_summary(engine.name, res, engine.current_path(), engine))
    return 0 if res.status == Status.DONE else 1


if __name__ == "__main__":
    sys.exit(main())
