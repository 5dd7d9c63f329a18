import pytest

from gridstep.config import Settings, from_env, load_settings


def test_defaults():
    s = load_settings([], env={})
    assert s == Settings()


def test_environment_overrides_defaults():
    s = from_env({"GRIDSTEP_ALGO": "astar", "GRIDSTEP_SIZE": "12",
                  "GRIDSTEP_WEIGHTED": "yes", "GRIDSTEP_SEED": "4",
                  "GRIDSTEP_WALL_RATIO": "0.1", "GRIDSTEP_TRACE_MEMORY": "0"})
    assert s.algorithm == "astar"
    assert s.grid_size == 12
    assert s.weighted is True
    assert s.seed == 4
    assert s.wall_ratio == 0.1
    assert s.trace_memory is False


def test_empty_env_values_are_ignored():
    assert from_env({"GRIDSTEP_SIZE": ""}) == Settings()


def test_command_line_beats_environment():
    s = load_settings(["--algo", "dijkstra", "--size", "15", "--no-trace-memory"],
                      env={"GRIDSTEP_ALGO": "astar", "GRIDSTEP_SIZE": "30"})
    assert s.algorithm == "dijkstra"
    assert s.grid_size == 15
    assert s.trace_memory is False
    assert s.weighted is False


def test_speed_is_clamped():
    assert load_settings(["--speed", "500"], env={}).steps_per_sec == 60


def test_bad_env_value():
    with pytest.raises(ValueError):
        from_env({"GRIDSTEP_SIZE": "big"})


@pytest.mark.parametrize("argv", [
    ["--size", "2"],
    ["--walls", "1.5"],
    ["--max-cost", "0"],
])
def test_out_of_range_values(argv):
    with pytest.raises(ValueError):
        load_settings(argv, env={})


def test_unknown_algorithm_from_env():
    with pytest.raises(ValueError):
        load_settings([], env={"GRIDSTEP_ALGO": "dfs"})
