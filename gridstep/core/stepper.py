#!/usr/bin/env python3
"""
Shared stepper: one frontier pop per step() for animation.

Implements the Algorithm API expected by the viewer:
- init(grid) - reset(grid=None) - step() -> StepResult
- is_complete() - current_path() - metrics_snapshot()

Subclasses pick the frontier (FIFO or heap), the priority key, the edge cost,
the connectivity and whether a cell is marked visited when it is pushed
(breadth-first) or when it is popped (Dijkstra / A*). With visit-on-pop a
cell may sit in the heap several times; pops of already visited cells are
stale and skipped.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, List, Optional, Union
from math import inf

from gridstep.core.types import Cell, Grid, Status, StepResult
from gridstep.core.frontier import FifoFrontier, PriorityFrontier
from gridstep.core.state import Phase, SearchState
from gridstep.core.metrics import MetricsRecorder, MetricsSnapshot
from gridstep.core.path import reconstruct_path, path_cost


@dataclass
class StepEngine:
    name: str = "search"

    connectivity: ClassVar[int] = 4
    mark_on_insert: ClassVar[bool] = False
    require_positive_costs: ClassVar[bool] = False

    # Internal state
    grid: Optional[Grid] = None
    state: Optional[SearchState] = None
    start_cell: Optional[Cell] = None
    goal_cell: Optional[Cell] = None
    popped_count: int = 0
    trace_memory: bool = True
    recorder: MetricsRecorder = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.recorder = MetricsRecorder(trace_memory=self.trace_memory)

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        """Initialize on a given grid."""
        self.reset(grid)

    def reset(self, grid: Optional[Grid] = None) -> None:
        """Validate the grid, clear all state and seed with the start cell.

        Raises GridError if the grid has no single start/goal, or (for the
        weighted engines) a traversable cell with a non-positive cost.
        """
        grid = grid if grid is not None else self.grid
        if grid is None:
            return
        start, goal = grid.validate(require_positive_costs=self.require_positive_costs)

        self.grid = grid
        self.start_cell = start
        self.goal_cell = goal
        self.popped_count = 0
        self.state = SearchState(frontier=self._new_frontier())

        st = self.state
        st.best_cost[start] = 0
        if self.mark_on_insert:
            st.visited.add(start)
        st.frontier.push(start, self._priority(start, 0))
        st.open_set.add(start)
        self.recorder.reset()

    # -------------------- hooks --------------------

    def _new_frontier(self) -> Union[FifoFrontier, PriorityFrontier]:
        raise NotImplementedError

    def _priority(self, c: Cell, g: int) -> Any:
        return g

    def edge_cost(self, a: Cell, b: Cell) -> int:
        return 1

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        if self.grid is None or self.state is None:
            return StepResult(status=Status.IDLE, metrics={"algo": self.name})

        self.recorder.begin_step()
        res = self._advance()
        self.recorder.end_step(final=self.state.terminal)

        path_len = len(res.path) if res.path else 0
        res.metrics = self._metrics(path_len=path_len)
        return res

    def _advance(self) -> StepResult:
        st = self.state

        if st.phase is Phase.PATH_FOUND:
            return StepResult(status=Status.DONE, path=self.current_path())
        if st.phase is Phase.EXHAUSTED:
            return StepResult(status=Status.NO_PATH)

        if not st.frontier:
            st.phase = Phase.EXHAUSTED
            return StepResult(status=Status.NO_PATH)

        u = st.frontier.pop()

        # Ignore stale pops
        if not self.mark_on_insert and u in st.visited:
            return StepResult(status=Status.RUNNING)

        self.popped_count += 1
        st.current = u
        st.open_set.discard(u)

        if u == self.goal_cell:
            st.phase = Phase.PATH_FOUND
            return StepResult(status=Status.DONE, current=u, path=self.current_path())

        st.visited.add(u)

        # Relax neighbors
        opened_now: List[Cell] = []
        g_u = st.best_cost[u]
        for v in self.grid.neighbors(u, self.connectivity):
            if self.grid.is_block(v) or v in st.visited:
                continue
            alt = g_u + self.edge_cost(u, v)
            if alt < st.best_cost.get(v, inf):
                st.best_cost[v] = alt
                st.predecessor[v] = u
                if self.mark_on_insert:
                    st.visited.add(v)
                st.frontier.push(v, self._priority(v, alt))
                if v not in st.open_set:
                    st.open_set.add(v)
                    opened_now.append(v)

        return StepResult(status=Status.RUNNING, opened=opened_now, closed=[u], current=u)

    # -------------------- queries --------------------

    def is_complete(self) -> bool:
        return self.state is not None and self.state.terminal

    def current_path(self) -> Optional[List[Cell]]:
        """Start -> goal path once the goal was popped, else None."""
        if self.state is None or self.state.phase is not Phase.PATH_FOUND:
            return None
        return reconstruct_path(self.state, self.start_cell, self.goal_cell)

    def total_cost(self) -> Optional[int]:
        if self.state is None or self.state.phase is not Phase.PATH_FOUND:
            return None
        return self.state.best_cost[self.goal_cell]

    def path_cost(self, path: List[Cell]) -> int:
        return path_cost(path, self.edge_cost)

    def metrics_snapshot(self) -> MetricsSnapshot:
        return self.recorder.snapshot()

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        st = self.state
        m = {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(st.open_set),
            "closed_count": len(st.visited),
            "path_len": path_len,
            "total_cost": self.total_cost(),
        }
        m.update(self.metrics_snapshot().as_dict())
        return m


def run_to_completion(engine: StepEngine, max_steps: Optional[int] = None) -> StepResult:
    """Step until a terminal status, or until max_steps calls were made."""
    res = engine.step()
    n = 1
    while res.status == Status.RUNNING:
        if max_steps is not None and n >= max_steps:
            break
        res = engine.step()
        n += 1
    return res
