import json

import numpy as np
import pytest

from gridpath.grid import Grid, Square
from gridpath.point import Point


def test_grid_starts_empty():
    grid = Grid(4, 3)
    assert grid.width == 4 and grid.height == 3
    assert grid.dimensions == Point(4, 3)
    assert grid.cells.shape == (3, 4)
    assert grid.count(Square.FULL) == 0
    assert grid.get_square(Point(3, 2)) is Square.EMPTY


@pytest.mark.parametrize("width,height", [(0, 3), (3, 0), (-1, 2)])
def test_grid_rejects_bad_dimensions(width, height):
    with pytest.raises(ValueError):
        Grid(width, height)


def test_from_rows_and_is_blocked():
    grid = Grid.from_rows([[0, 1], [1, 0]])
    assert grid.width == 2 and grid.height == 2
    assert not grid.is_blocked(Point(0, 0))
    assert grid.is_blocked(Point(1, 0))
    assert grid.is_blocked(Point(0, 1))
    assert not grid.is_blocked(Point(1, 1))


def test_from_rows_rejects_ragged_rows():
    with pytest.raises(ValueError):
        Grid.from_rows([[0, 0], [0]])


@pytest.mark.parametrize("p", [(-1, 0), (0, -1), (2, 0), (0, 2)])
def test_is_blocked_out_of_bounds(p):
    grid = Grid(2, 2)
    # Anything outside [0, 2) is treated as blocked
    assert grid.is_blocked(p)


@pytest.mark.parametrize(
    "p,expected",
    [
        ((0, 0), {(1, 0), (0, 1), (1, 1)}),
        ((4, 0), {(3, 0), (3, 1), (4, 1)}),
        ((2, 2), {(x, y) for x in (1, 2, 3) for y in (1, 2, 3)} - {(2, 2)}),
    ],
)
def test_neighbours_are_clipped_to_grid(p, expected):
    grid = Grid(5, 5)
    assert grid.neighbours(Point(*p)) == expected


def test_empty_neighbours_skip_full_cells():
    grid = Grid(3, 3)
    grid.set_square(Point(1, 0), Square.FULL)
    grid.set_square(Point(1, 1), Square.FULL)
    assert grid.empty_neighbours(Point(0, 0)) == {(0, 1)}


def test_populate_is_deterministic_for_a_seed():
    a = Grid(10, 10).populate(30, np.random.default_rng(42))
    b = Grid(10, 10).populate(30, np.random.default_rng(42))
    assert np.array_equal(a.cells, b.cells)
    # Cells may be drawn twice, so at most 30 end up full
    assert 0 < a.count(Square.FULL) <= 30


def test_populate_more_than_capacity_fills_everything():
    grid = Grid(3, 3).populate(10, np.random.default_rng(0))
    assert grid.count(Square.FULL) == 9


def test_populate_zero_changes_nothing():
    grid = Grid(3, 3).populate(0, np.random.default_rng(0))
    assert grid.count(Square.FULL) == 0


def test_empty_point_and_full_grid():
    rng = np.random.default_rng(1)
    grid = Grid(3, 3)
    for x in range(3):
        for y in range(3):
            if (x, y) != (2, 1):
                grid.set_square(Point(x, y), Square.FULL)
    assert grid.empty_point(rng) == (2, 1)
    grid.set_square(Point(2, 1), Square.FULL)
    with pytest.raises(RuntimeError):
        grid.empty_point(rng)


def test_clear():
    grid = Grid(4, 4).populate(100, np.random.default_rng(0))
    grid.clear()
    assert grid.count(Square.FULL) == 0


def test_to_string_with_path():
    grid = Grid.from_rows([[0, 1, 0], [0, 0, 0]])
    assert str(grid) == "oxo\nooo\n"
    assert grid.to_string([Point(0, 0), Point(1, 1), Point(2, 0)]) == ".x.\no.o\n"


def test_save_and_load(tmp_path):
    grid = Grid.from_rows([[0, 1, 0], [1, 0, 0]])
    path = tmp_path / "grid.json"
    grid.save(str(path))
    loaded = Grid.load(str(path))
    assert np.array_equal(loaded.cells, grid.cells)


def test_load_full_cell_list(tmp_path):
    path = tmp_path / "grid.json"
    path.write_text(json.dumps({"width": 4, "height": 2, "full": [[3, 1], [0, 0]]}))
    grid = Grid.load(str(path))
    assert grid.dimensions == (4, 2)
    assert grid.is_blocked(Point(3, 1)) and grid.is_blocked(Point(0, 0))
    assert grid.count(Square.FULL) == 2


@pytest.mark.parametrize(
    "content",
    ["not json", json.dumps({"width": 2}), json.dumps({"width": 2, "height": 2, "full": [[5, 5]]})],
)
def test_load_bad_file_raises_runtime_error(tmp_path, content):
    path = tmp_path / "grid.json"
    path.write_text(content)
    with pytest.raises(RuntimeError):
        Grid.load(str(path))


def test_load_missing_file_raises_runtime_error(tmp_path):
    with pytest.raises(RuntimeError):
        Grid.load(str(tmp_path / "missing.json"))
