#!/usr/bin/env python3
"""
Run settings: defaults < environment (GRIDSTEP_*) < command line.

    GRIDSTEP_ALGO=astar GRIDSTEP_SIZE=30 gridstep-viewer --weighted
"""

import argparse
import os
from dataclasses import dataclass, fields, replace
from typing import List, Mapping, Optional

from gridstep.core.algorithms import ALGORITHMS

MIN_SIZE = 5
MAX_SIZE = 60


@dataclass(frozen=True)
class Settings:
    grid_size: int = 20
    wall_ratio: float = 0.3
    weighted: bool = False
    max_cost: int = 9
    seed: Optional[int] = None
    algorithm: str = "bfs"
    steps_per_sec: int = 8
    trace_memory: bool = True
    map_path: Optional[str] = None
    max_steps: Optional[int] = None


ENV_KEYS = {
    "grid_size": "GRIDSTEP_SIZE",
    "wall_ratio": "GRIDSTEP_WALL_RATIO",
    "weighted": "GRIDSTEP_WEIGHTED",
    "max_cost": "GRIDSTEP_MAX_COST",
    "seed": "GRIDSTEP_SEED",
    "algorithm": "GRIDSTEP_ALGO",
    "steps_per_sec": "GRIDSTEP_SPEED",
    "trace_memory": "GRIDSTEP_TRACE_MEMORY",
    "map_path": "GRIDSTEP_MAP",
    "max_steps": "GRIDSTEP_MAX_STEPS",
}

_TRUE = ("1", "true", "yes", "on")


def _coerce(name: str, raw: str):
    if name in ("weighted", "trace_memory"):
        return raw.strip().lower() in _TRUE
    if name in ("grid_size", "max_cost", "seed", "steps_per_sec", "max_steps"):
        return int(raw)
    if name == "wall_ratio":
        return float(raw)
    return raw


def from_env(env: Optional[Mapping[str, str]] = None, base: Optional[Settings] = None) -> Settings:
    env = os.environ if env is None else env
    base = base or Settings()
    changes = {}
    for f in fields(Settings):
        raw = env.get(ENV_KEYS[f.name])
        if raw is None or raw == "":
            continue
        try:
            changes[f.name] = _coerce(f.name, raw)
        except ValueError:
            raise ValueError(f"{ENV_KEYS[f.name]}={raw!r} is not a valid {f.name}") from None
    return replace(base, **changes)


def build_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--algo", dest="algorithm", choices=sorted(ALGORITHMS),
                        help="search algorithm")
    parser.add_argument("--size", dest="grid_size", type=int,
                        help=f"cells per side of a random grid ({MIN_SIZE}..{MAX_SIZE})")
    parser.add_argument("--walls", dest="wall_ratio", type=float,
                        help="share of random wall picks, 0..1")
    parser.add_argument("--weighted", dest="weighted", action="store_true", default=None,
                        help="give random grids per-cell costs")
    parser.add_argument("--max-cost", dest="max_cost", type=int,
                        help="highest random cell cost")
    parser.add_argument("--seed", type=int, help="seed for random grids")
    parser.add_argument("--map", dest="map_path", help="JSON map file instead of a random grid")
    parser.add_argument("--speed", dest="steps_per_sec", type=int, help="viewer steps per second")
    parser.add_argument("--max-steps", dest="max_steps", type=int,
                        help="stop a headless run after this many steps")
    parser.add_argument("--no-trace-memory", dest="trace_memory", action="store_false", default=None,
                        help="skip tracemalloc sampling")
    return parser


def load_settings(argv: Optional[List[str]] = None, env: Optional[Mapping[str, str]] = None,
                  description: str = "Step-by-step grid search") -> Settings:
    settings = from_env(env)
    args = build_parser(description).parse_args(argv)
    changes = {k: v for k, v in vars(args).items() if v is not None}
    settings = replace(settings, **changes)
    return validate(settings)


def validate(settings: Settings) -> Settings:
    if settings.algorithm not in ALGORITHMS:
        raise ValueError(f"unknown algorithm {settings.algorithm!r}")
    if not MIN_SIZE <= settings.grid_size <= MAX_SIZE:
        raise ValueError(f"grid size must be within {MIN_SIZE}..{MAX_SIZE}")
    if not 0.0 <= settings.wall_ratio < 1.0:
        raise ValueError("wall ratio must be within [0, 1)")
    if settings.max_cost < 1:
        raise ValueError("max cost must be positive")
    return replace(settings, steps_per_sec=max(1, min(60, settings.steps_per_sec)))
