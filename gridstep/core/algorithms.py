#!/usr/bin/env python3
from typing import Dict, Type

from gridstep.core.stepper import StepEngine
from gridstep.core.bfs import BfsAlgo
from gridstep.core.dijkstra import DijkstraAlgo
from gridstep.core.astar import AStarAlgo

ALGORITHMS: Dict[str, Type[StepEngine]] = {
    "bfs": BfsAlgo,
    "dijkstra": DijkstraAlgo,
    "astar": AStarAlgo,
}


def make_algo(key: str, trace_memory: bool = True) -> StepEngine:
    try:
        cls = ALGORITHMS[key.lower()]
    except KeyError:
        raise ValueError(f"unknown algorithm {key!r}, expected one of {sorted(ALGORITHMS)}") from None
    return cls(trace_memory=trace_memory)
