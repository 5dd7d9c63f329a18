#!/usr/bin/env python3
from typing import Callable, List

from gridstep.core.types import Cell, NoPathError
from gridstep.core.state import SearchState, Phase


def reconstruct_path(state: SearchState, start: Cell, goal: Cell) -> List[Cell]:
    """Walk the predecessor map back from goal; return start -> goal."""
    if state.phase is not Phase.PATH_FOUND:
        raise NoPathError(f"no path: search is {state.phase.value}")
    path: List[Cell] = []
    cur = goal
    while True:
        path.append(cur)
        if cur == start:
            break
        cur = state.predecessor[cur]
    path.reverse()
    return path


def path_cost(path: List[Cell], edge_cost: Callable[[Cell, Cell], int]) -> int:
    return sum(edge_cost(a, b) for a, b in zip(path, path[1:]))
