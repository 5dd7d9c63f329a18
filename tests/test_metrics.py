import tracemalloc

import pytest

from gridstep.core.metrics import MetricsRecorder, MetricsSnapshot
from gridstep.core.dijkstra import DijkstraAlgo
from gridstep.core.stepper import run_to_completion


@pytest.fixture
def tracing():
    was_tracing = tracemalloc.is_tracing()
    yield
    if not was_tracing:
        tracemalloc.stop()


def test_counts_and_accumulates_time():
    rec = MetricsRecorder(trace_memory=False)
    rec.reset()
    for _ in range(3):
        rec.begin_step()
        rec.end_step()
    snap = rec.snapshot()
    assert snap.steps == 3
    assert snap.elapsed_ns >= 0
    assert snap.memory_delta_bytes == 0


def test_reset_clears_totals():
    rec = MetricsRecorder(trace_memory=False)
    rec.reset()
    rec.begin_step()
    rec.end_step()
    rec.reset()
    assert rec.snapshot() == MetricsSnapshot(0, 0, 0)


def test_memory_delta_is_sampled(tracing):
    rec = MetricsRecorder(trace_memory=True)
    rec.reset()
    assert tracemalloc.is_tracing()
    rec.begin_step()
    junk = [bytearray(64) for _ in range(100)]
    rec.end_step()
    assert isinstance(rec.snapshot().memory_delta_bytes, int)
    del junk


def test_memory_delta_freezes_at_terminal_step(tracing):
    rec = MetricsRecorder(trace_memory=True)
    rec.reset()
    rec.begin_step()
    rec.end_step(final=True)
    frozen = rec.snapshot().memory_delta_bytes
    rec.begin_step()
    junk = [bytearray(256) for _ in range(100)]
    rec.end_step(final=True)
    assert rec.snapshot().memory_delta_bytes == frozen
    assert rec.snapshot().steps == 2
    del junk


def test_engine_exposes_snapshot(open_grid, tracing):
    engine = DijkstraAlgo()
    engine.init(open_grid)
    res = run_to_completion(engine)
    snap = engine.metrics_snapshot()
    assert snap.steps == res.metrics["steps"]
    assert set(snap.as_dict()) == {"steps", "elapsed_ns", "memory_delta_bytes"}
    assert res.metrics["algo"] == "Dijkstra"
