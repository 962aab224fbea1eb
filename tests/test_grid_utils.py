import numpy as np
import pytest

from grid_utils import empty_grid, neighbors


def test_empty_grid_shape_and_fill():
    grid = empty_grid(3, 4, False, dtype=bool)
    assert grid.shape == (3, 4)
    assert not grid.any()


def test_empty_grid_rows_are_independent():
    grid = empty_grid(3, 3, 0)
    grid[0, 0] = 7
    assert grid[1, 0] == 0
    assert grid[2, 0] == 0
    assert int(np.count_nonzero(grid)) == 1


@pytest.mark.parametrize("cell,expected", [
    ((0, 0), 3),
    ((0, 4), 5),
    ((4, 4), 8),
    ((8, 8), 3),
    ((8, 3), 5),
])
def test_neighbor_counts(cell, expected):
    result = neighbors(*cell, 9, 9)
    assert len(result) == expected
    assert len(set(result)) == expected
    assert cell not in result
    for r, c in result:
        assert 0 <= r < 9 and 0 <= c < 9
        assert max(abs(r - cell[0]), abs(c - cell[1])) == 1


def test_neighbors_single_cell_grid():
    assert neighbors(0, 0, 1, 1) == []
