#!/usr/bin/env python3
"""
Dijkstra (uniform-cost search), one heap pop per step().

- Heap keyed by (g, seq): lower cost first, FIFO among equal costs.
- Moving into a cell costs that cell's weight (1 on unweighted grids).
- A cell can be pushed again when a cheaper route shows up; the older
  entry is skipped when it surfaces after the cell was finalized.
"""

from dataclasses import dataclass
from typing import ClassVar

from gridstep.core.types import Cell
from gridstep.core.frontier import PriorityFrontier
from gridstep.core.stepper import StepEngine


@dataclass
class DijkstraAlgo(StepEngine):
    name: str = "Dijkstra"

    connectivity: ClassVar[int] = 4
    require_positive_costs: ClassVar[bool] = True

    def _new_frontier(self) -> PriorityFrontier:
        return PriorityFrontier()

    def edge_cost(self, a: Cell, b: Cell) -> int:
        return self.grid.cost(b)
