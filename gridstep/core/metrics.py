#!/usr/bin/env python3
"""
Step metrics: count, wall-clock time and a memory delta.

Timing uses perf_counter_ns around each step; memory is sampled with
tracemalloc against a baseline taken at reset. Numbers are advisory.
"""

from dataclasses import dataclass
from typing import Optional
import time
import tracemalloc


@dataclass(frozen=True)
class MetricsSnapshot:
    steps: int
    elapsed_ns: int
    memory_delta_bytes: int

    def as_dict(self) -> dict:
        return {
            "steps": self.steps,
            "elapsed_ns": self.elapsed_ns,
            "memory_delta_bytes": self.memory_delta_bytes,
        }


class MetricsRecorder:
    def __init__(self, trace_memory: bool = True):
        self.trace_memory = trace_memory
        self.steps = 0
        self.elapsed_ns = 0
        self._mem_base = 0
        self._mem_delta = 0
        self._frozen_delta: Optional[int] = None
        self._t0: Optional[int] = None

    def reset(self) -> None:
        self.steps = 0
        self.elapsed_ns = 0
        self._mem_delta = 0
        self._frozen_delta = None
        self._t0 = None
        if self.trace_memory:
            # Start tracking memory if not already started
            if not tracemalloc.is_tracing():
                tracemalloc.start()
            self._mem_base, _ = tracemalloc.get_traced_memory()

    def begin_step(self) -> None:
        self._t0 = time.perf_counter_ns()

    def end_step(self, final: bool = False) -> None:
        if self._t0 is not None:
            self.elapsed_ns += time.perf_counter_ns() - self._t0
            self._t0 = None
        self.steps += 1
        if self.trace_memory and tracemalloc.is_tracing():
            cur_mem, _ = tracemalloc.get_traced_memory()
            self._mem_delta = cur_mem - self._mem_base

        # memory delta stops moving once the search is terminal
        if final and self._frozen_delta is None:
            self._frozen_delta = self._mem_delta

    def snapshot(self) -> MetricsSnapshot:
        mem = self._frozen_delta if self._frozen_delta is not None else self._mem_delta
        return MetricsSnapshot(self.steps, self.elapsed_ns, mem)
