import numpy as np
import pytest

from board import MINE, count_adjacent, generate_board, place_mines, safe_zone
from grid_utils import neighbors
from settings import DIFFICULTIES, Difficulty


@pytest.mark.parametrize("key", ["rookie", "veteran", "expert"])
@pytest.mark.parametrize("click", [(0, 0), (4, 4), (8, 8), (0, 5)])
def test_first_click_zone_is_mine_free(key, click, rng):
    difficulty = DIFFICULTIES[key]
    board, mines = generate_board(*click, difficulty, rng)
    for r, c in safe_zone(*click, difficulty.rows, difficulty.cols):
        assert board[r, c] != MINE
        assert (r, c) not in mines


@pytest.mark.parametrize("key", ["rookie", "veteran", "expert"])
def test_mine_count_and_adjacent_counts(key, rng):
    difficulty = DIFFICULTIES[key]
    board, mines = generate_board(3, 3, difficulty, rng)

    assert board.shape == (difficulty.rows, difficulty.cols)
    assert len(mines) == difficulty.mines
    assert len(set(mines)) == difficulty.mines
    assert int(np.count_nonzero(board == MINE)) == difficulty.mines

    for r in range(difficulty.rows):
        for c in range(difficulty.cols):
            if board[r, c] == MINE:
                continue
            expected = sum(board[nr, nc] == MINE for nr, nc in neighbors(r, c, difficulty.rows, difficulty.cols))
            assert board[r, c] == expected


def test_generation_is_deterministic_for_a_seed():
    difficulty = DIFFICULTIES["rookie"]
    first = generate_board(4, 4, difficulty, np.random.default_rng(7))
    second = generate_board(4, 4, difficulty, np.random.default_rng(7))
    assert np.array_equal(first[0], second[0])
    assert first[1] == second[1]


def test_safe_zone_is_clipped_at_corner():
    assert safe_zone(0, 0, 9, 9) == {(0, 0), (0, 1), (1, 0), (1, 1)}


def test_safe_zone_covering_whole_grid_fails_fast(rng):
    with pytest.raises(ValueError):
        place_mines(2, 2, 1, 0, 0, rng)


def test_mines_fill_exactly_the_remaining_capacity(rng):
    mines = place_mines(3, 4, 3, 1, 1, rng)
    assert sorted(mines) == [(0, 3), (1, 3), (2, 3)]


def test_undersized_difficulty_is_rejected():
    with pytest.raises(ValueError):
        Difficulty("tiny", "Tiny", 2, 2, 1)
    with pytest.raises(ValueError):
        Difficulty("full", "Full", 9, 9, 72)


def test_count_adjacent_marks_mines():
    board = count_adjacent([(0, 0), (2, 2)], 3, 3)
    assert board.tolist() == [
        [MINE, 1, 0],
        [1, 2, 1],
        [0, 1, MINE],
    ]
