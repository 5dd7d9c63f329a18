#!/usr/bin/env python3
"""
A*, one heap pop per step().

Moves:
- 8-connected. A cardinal move costs 10, a diagonal move 14 (about 10 * sqrt(2)),
  each multiplied by the weight of the cell being entered.
- Diagonals may slip between two walls that only touch at a corner.

Heuristic:
- Plain Manhattan distance to the goal, not scaled by the move cost. A move
  lowers it by at most 2 while costing at least 10, so it never overestimates.

Tie-breaking in the PQ: (f, seq), lower f first, then FIFO by seq.

Closed cells are never reopened, even if a cheaper route to one turns up
later. With this heuristic that cannot happen, but the policy is kept as is
so step sequences stay reproducible.
"""

from dataclasses import dataclass
from typing import ClassVar

from gridstep.core.types import Cell
from gridstep.core.frontier import PriorityFrontier
from gridstep.core.stepper import StepEngine

CARDINAL_COST = 10
DIAGONAL_COST = 14


def manhattan(a: Cell, b: Cell) -> int:
    (x1, y1), (x2, y2) = a, b
    return abs(x1 - x2) + abs(y1 - y2)


@dataclass
class AStarAlgo(StepEngine):
    name: str = "A*"

    connectivity: ClassVar[int] = 8
    require_positive_costs: ClassVar[bool] = True

    def _new_frontier(self) -> PriorityFrontier:
        return PriorityFrontier()

    def _h(self, c: Cell) -> int:
        return manhattan(c, self.goal_cell)

    def _priority(self, c: Cell, g: int) -> int:
        return g + self._h(c)

    def edge_cost(self, a: Cell, b: Cell) -> int:
        diagonal = a[0] != b[0] and a[1] != b[1]
        move = DIAGONAL_COST if diagonal else CARDINAL_COST
        return move * self.grid.cost(b)
