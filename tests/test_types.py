import pytest

from gridstep.core.types import CellKind, Grid, GridError, StepResult, Status


def test_from_rows_classifies_cells():
    g = Grid.from_rows(["S.#", "..G"])
    assert (g.width, g.height) == (3, 2)
    assert g.classify((0, 0)) is CellKind.START
    assert g.classify((2, 0)) is CellKind.WALL
    assert g.classify((2, 1)) is CellKind.GOAL
    assert g.classify((1, 1)) is CellKind.EMPTY
    assert g.start == (0, 0)
    assert g.goal == (2, 1)


def test_traversable_and_cost_defaults():
    g = Grid.from_rows(["S#G"])
    assert g.is_traversable((0, 0))
    assert not g.is_traversable((1, 0))
    assert g.cost((0, 0)) == 1
    assert not g.weighted


def test_cost_from_cost_table():
    g = Grid.from_rows(["S.G"], costs=[[1, 7, 3]])
    assert g.weighted
    assert g.cost((1, 0)) == 7


@pytest.mark.parametrize("cell", [(-1, 0), (0, -1), (3, 0), (0, 2)])
def test_off_grid_cells_do_not_wrap(cell):
    g = Grid.from_rows(["S.#", "..G"])
    assert g.is_block(cell)
    assert not g.is_traversable(cell)
    with pytest.raises(IndexError):
        g.classify(cell)
    with pytest.raises(IndexError):
        g.cost(cell)


def test_neighbors_four_way_order_and_bounds():
    g = Grid.from_rows(["S..", "...", "..G"])
    assert g.neighbors((1, 1)) == [(1, 0), (2, 1), (1, 2), (0, 1)]
    assert g.neighbors((0, 0)) == [(1, 0), (0, 1)]


def test_neighbors_eight_way_includes_diagonals():
    g = Grid.from_rows(["S..", "...", "..G"])
    assert g.neighbors((1, 1), 8) == [
        (1, 0), (2, 1), (1, 2), (0, 1),
        (2, 0), (2, 2), (0, 2), (0, 0),
    ]
    assert g.neighbors((2, 2), 8) == [(2, 1), (1, 2), (1, 1)]


def test_neighbors_rejects_other_connectivity():
    g = Grid.from_rows(["SG"])
    with pytest.raises(ValueError):
        g.neighbors((0, 0), 6)


def test_neighbors_keep_walls_for_callers_to_filter():
    g = Grid.from_rows(["S#G"])
    assert (1, 0) in g.neighbors((0, 0))


@pytest.mark.parametrize("rows", [
    ["...", "..G"],        # no start
    ["S.S", "..G"],        # two starts
    ["S..", "..."],        # no goal
    ["S.G", "..G"],        # two goals
])
def test_validate_needs_one_start_and_goal(rows):
    g = Grid.from_rows(rows)
    with pytest.raises(GridError):
        g.validate()


def test_validate_positive_costs():
    g = Grid.from_rows(["S.G"], costs=[[1, 0, 1]])
    assert g.validate() == ((0, 0), (2, 0))
    with pytest.raises(GridError):
        g.validate(require_positive_costs=True)


def test_validate_ignores_wall_costs():
    g = Grid.from_rows(["S#G"], costs=[[1, 0, 1]])
    assert g.validate(require_positive_costs=True) == ((0, 0), (2, 0))


@pytest.mark.parametrize("kwargs", [
    dict(width=2, height=1, kinds=[[0, 0, 0]]),
    dict(width=2, height=2, kinds=[[0, 0]]),
    dict(width=2, height=1, kinds=[[0, 9]]),
    dict(width=2, height=1, kinds=[[2, 3]], costs=[[1]]),
    dict(width=0, height=0, kinds=[]),
])
def test_bad_shapes_are_rejected(kwargs):
    with pytest.raises(GridError):
        Grid(**kwargs)


def test_unknown_symbol():
    with pytest.raises(GridError):
        Grid.from_rows(["S?G"])


def test_touched_lists_current_then_opened():
    res = StepResult(status=Status.RUNNING, opened=[(1, 0), (0, 1)], current=(0, 0))
    assert res.touched == [(0, 0), (1, 0), (0, 1)]
    assert StepResult(status=Status.RUNNING).touched == []
