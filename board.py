"""Mine placement and adjacent-count computation."""

import logging

import numpy as np

from grid_utils import empty_grid, neighbors
from settings import Difficulty

logger = logging.getLogger(__name__)

MINE = -1


def safe_zone(r: int, c: int, rows: int, cols: int) -> set:
    return {(r, c), *neighbors(r, c, rows, cols)}


def place_mines(rows: int, cols: int, mines: int, safe_r: int, safe_c: int, rng: np.random.Generator):
    """Pick ``mines`` distinct cells outside the safe zone by rejection sampling.

    Raises ValueError when the grid cannot hold that many mines outside the
    safe zone, so the sampling loop always terminates.
    """
    forbidden = safe_zone(safe_r, safe_c, rows, cols)
    capacity = rows * cols - len(forbidden)
    if mines < 0 or mines > capacity:
        raise ValueError(f"mines must be in [0, {capacity}] for a {rows}x{cols} grid")

    placed = set()
    mine_list = []
    while len(mine_list) < mines:
        r = int(rng.integers(rows))
        c = int(rng.integers(cols))
        if (r, c) in placed or (r, c) in forbidden:
            continue
        placed.add((r, c))
        mine_list.append((r, c))
    return mine_list


def count_adjacent(mine_list, rows: int, cols: int) -> np.ndarray:
    board = empty_grid(rows, cols, 0, dtype=np.int8)
    for r, c in mine_list:
        board[r, c] = MINE

    for r in range(rows):
        for c in range(cols):
            if board[r, c] == MINE:
                continue
            board[r, c] = sum(board[nr, nc] == MINE for nr, nc in neighbors(r, c, rows, cols))
    return board


def generate_board(safe_r: int, safe_c: int, difficulty: Difficulty, rng: np.random.Generator | None = None):
    if rng is None:
        rng = np.random.default_rng()
    mine_list = place_mines(difficulty.rows, difficulty.cols, difficulty.mines, safe_r, safe_c, rng)
    board = count_adjacent(mine_list, difficulty.rows, difficulty.cols)
    logger.debug("Generated %s board around (%d, %d)", difficulty.key, safe_r, safe_c)
    return board, mine_list
