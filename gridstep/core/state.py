#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Set, Union

from gridstep.core.types import Cell
from gridstep.core.frontier import FifoFrontier, PriorityFrontier


class Phase(Enum):
    SEARCHING = "searching"
    PATH_FOUND = "path_found"
    EXHAUSTED = "exhausted"


@dataclass
class SearchState:
    """Working state of one engine run. Rebuilt on every reset()."""
    frontier: Union[FifoFrontier, PriorityFrontier]
    visited: Set[Cell] = field(default_factory=set)
    best_cost: Dict[Cell, int] = field(default_factory=dict)
    predecessor: Dict[Cell, Cell] = field(default_factory=dict)  # child -> parent
    open_set: Set[Cell] = field(default_factory=set)             # for overlay
    current: Optional[Cell] = None
    phase: Phase = Phase.SEARCHING

    @property
    def terminal(self) -> bool:
        return self.phase is not Phase.SEARCHING
