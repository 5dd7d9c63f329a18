#!/usr/bin/env python3
"""
Breadth-first search, one dequeue per step().

Cells are marked visited when they are enqueued, so each cell enters the
queue at most once and the first time the goal is dequeued its path is the
shortest by edge count. 4-connected, every move costs 1.
"""

from dataclasses import dataclass
from typing import ClassVar

from gridstep.core.frontier import FifoFrontier
from gridstep.core.stepper import StepEngine


@dataclass
class BfsAlgo(StepEngine):
    name: str = "BFS"

    connectivity: ClassVar[int] = 4
    mark_on_insert: ClassVar[bool] = True

    def _new_frontier(self) -> FifoFrontier:
        return FifoFrontier()
