#!/usr/bin/env python3
"""
Frontier containers for the stepper.

Both expose push(cell, key) / pop() -> cell / len(). The FIFO ignores the key;
the priority frontier orders by (key, seq) so equal keys pop in insertion order.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Tuple, Any
import heapq

from gridstep.core.types import Cell


@dataclass
class FifoFrontier:
    queue: Deque[Cell] = field(default_factory=deque)

    def push(self, cell: Cell, key: Any = None) -> None:
        self.queue.append(cell)

    def pop(self) -> Cell:
        return self.queue.popleft()

    def __len__(self) -> int:
        return len(self.queue)


@dataclass
class PriorityFrontier:
    heap: List[Tuple[Any, int, Cell]] = field(default_factory=list)  # (key, seq, cell)
    seq: int = 0  # monotonic counter for PQ stability

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def push(self, cell: Cell, key: Any = 0) -> None:
        heapq.heappush(self.heap, (key, self._bump(), cell))

    def pop(self) -> Cell:
        _, _, cell = heapq.heappop(self.heap)
        return cell

    def peek_key(self) -> Any:
        return self.heap[0][0]

    def __len__(self) -> int:
        return len(self.heap)
