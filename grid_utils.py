import numpy as np


def empty_grid(rows: int, cols: int, fill_value, dtype=None) -> np.ndarray:
    return np.full((rows, cols), fill_value, dtype=dtype)


def neighbors(r: int, c: int, rows: int, cols: int):
    neighbors_list = []
    for nr in range(max(0, r - 1), min(rows, r + 2)):
        for nc in range(max(0, c - 1), min(cols, c + 2)):
            if (nr, nc) != (r, c):
                neighbors_list.append((nr, nc))

    return neighbors_list
