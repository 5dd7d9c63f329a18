#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Tuple, Optional, Dict, Any

Cell = Tuple[int, int]  # (x, y) == (col, row)

# up, right, down, left, then the diagonals clockwise from up-right
CARDINAL_DIRS: List[Cell] = [(0, -1), (1, 0), (0, 1), (-1, 0)]
DIAGONAL_DIRS: List[Cell] = [(1, -1), (1, 1), (-1, 1), (-1, -1)]


class GridError(ValueError):
    """Grid breaks an engine precondition (start/goal count, costs, shape)."""


class NoPathError(LookupError):
    """Asked for a path the search has not found."""


class CellKind(IntEnum):
    EMPTY = 0
    WALL = 1
    START = 2
    GOAL = 3


class Status(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"
    NO_PATH = "no_path"


@dataclass
class Grid:
    width: int
    height: int
    kinds: List[List[int]]                       # [row][col] -> CellKind
    costs: Optional[List[List[int]]] = None      # [row][col] -> positive int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise GridError(f"grid must be non-empty, got {self.width}x{self.height}")
        if len(self.kinds) != self.height or any(len(r) != self.width for r in self.kinds):
            raise GridError("kinds size mismatch")
        valid = {int(k) for k in CellKind}
        for row in self.kinds:
            for v in row:
                if int(v) not in valid:
                    raise GridError(f"unknown cell kind {v!r}")
        if self.costs is not None:
            if len(self.costs) != self.height or any(len(r) != self.width for r in self.costs):
                raise GridError("costs size mismatch")

    @classmethod
    def from_rows(cls, rows: List[str], costs: Optional[List[List[int]]] = None) -> "Grid":
        """Build a grid from text rows: '.' empty, '#' wall, 'S' start, 'G' goal."""
        symbols = {".": CellKind.EMPTY, "#": CellKind.WALL,
                   "S": CellKind.START, "G": CellKind.GOAL}
        try:
            kinds = [[int(symbols[ch]) for ch in row] for row in rows]
        except KeyError as ex:
            raise GridError(f"unknown cell symbol {ex.args[0]!r}") from None
        width = len(rows[0]) if rows else 0
        return cls(width, len(rows), kinds, costs)

    # -------------------- classification --------------------

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def classify(self, c: Cell) -> CellKind:
        if not self.in_bounds(c):
            raise IndexError(f"cell {c} is outside the {self.width}x{self.height} grid")
        x, y = c
        return CellKind(self.kinds[y][x])

    def is_block(self, c: Cell) -> bool:
        # off-grid cells count as walls
        if not self.in_bounds(c):
            return True
        x, y = c
        return self.kinds[y][x] == CellKind.WALL

    def is_traversable(self, c: Cell) -> bool:
        return not self.is_block(c)

    def cost(self, c: Cell) -> int:
        if not self.in_bounds(c):
            raise IndexError(f"cell {c} is outside the {self.width}x{self.height} grid")
        if self.costs is None:
            return 1
        x, y = c
        return int(self.costs[y][x])

    @property
    def weighted(self) -> bool:
        return self.costs is not None

    def cells_of(self, kind: CellKind) -> List[Cell]:
        return [(x, y)
                for y, row in enumerate(self.kinds)
                for x, v in enumerate(row)
                if v == kind]

    @property
    def start(self) -> Cell:
        return self._single(CellKind.START)

    @property
    def goal(self) -> Cell:
        return self._single(CellKind.GOAL)

    def _single(self, kind: CellKind) -> Cell:
        found = self.cells_of(kind)
        if len(found) != 1:
            raise GridError(f"grid needs exactly one {kind.name} cell, found {len(found)}")
        return found[0]

    def neighbors(self, c: Cell, connectivity: int = 4) -> List[Cell]:
        """In-bounds neighbours of c (walls included), in a fixed order."""
        if connectivity == 4:
            dirs = CARDINAL_DIRS
        elif connectivity == 8:
            dirs = CARDINAL_DIRS + DIAGONAL_DIRS
        else:
            raise ValueError(f"connectivity must be 4 or 8, got {connectivity}")
        x, y = c
        out: List[Cell] = []
        for dx, dy in dirs:
            n = (x + dx, y + dy)
            if self.in_bounds(n):
                out.append(n)
        return out

    def validate(self, require_positive_costs: bool = False) -> Tuple[Cell, Cell]:
        """Check engine preconditions; return (start, goal)."""
        start, goal = self.start, self.goal
        if require_positive_costs and self.costs is not None:
            for y, row in enumerate(self.costs):
                for x, w in enumerate(row):
                    if self.kinds[y][x] != CellKind.WALL and int(w) <= 0:
                        raise GridError(f"cell {(x, y)} has non-positive cost {w}")
        return start, goal


@dataclass
class StepResult:
    status: Status
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def touched(self) -> List[Cell]:
        """Cells whose display changed this step: current first, then new frontier."""
        head = [self.current] if self.current is not None else []
        return head + list(self.opened)
