import numpy as np

from grid_utils import neighbors


def flood_reveal(board: np.ndarray, revealed: np.ndarray, flagged: np.ndarray, r: int, c: int) -> np.ndarray:
    """Open the region around (r, c) and return a new reveal matrix.

    Zero cells expand to their neighbours; flagged cells are never opened and
    stop the expansion. ``revealed`` itself is left untouched.
    """
    rows, cols = board.shape
    result = revealed.copy()
    stack = [(r, c)]
    while stack:
        cr, cc = stack.pop()
        if result[cr, cc] or flagged[cr, cc]:
            continue
        result[cr, cc] = True

        if board[cr, cc] == 0:
            for nr, nc in neighbors(cr, cc, rows, cols):
                if not result[nr, nc] and not flagged[nr, nc]:
                    stack.append((nr, nc))
    return result


def count_revealed(revealed: np.ndarray) -> int:
    return int(np.count_nonzero(revealed))
