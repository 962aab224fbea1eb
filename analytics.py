import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns

from board import MINE, generate_board
from grid_utils import empty_grid, neighbors
from reveal import count_revealed, flood_reveal
from settings import Difficulty


def mine_mask(board: np.ndarray) -> np.ndarray:
    return board == MINE


def count_mine_clusters(mine_list, rows: int, cols: int) -> int:
    """Number of 8-connected groups formed by the mines."""
    remaining = set(mine_list)
    clusters = 0
    while remaining:
        clusters += 1
        stack = [remaining.pop()]
        while stack:
            r, c = stack.pop()
            for cell in neighbors(r, c, rows, cols):
                if cell in remaining:
                    remaining.remove(cell)
                    stack.append(cell)
    return clusters


def mines_in_local_region(mask: np.ndarray) -> np.ndarray:
    # sum of the 3x3 window centered on each cell, edges padded with zeros
    rows, cols = mask.shape
    padded = np.pad(mask.astype(np.int8), 1)
    heat = np.zeros((rows, cols), dtype=np.int8)
    for dr in range(3):
        for dc in range(3):
            heat += padded[dr:dr + rows, dc:dc + cols]
    return heat


def first_click_opening(board: np.ndarray, r: int, c: int) -> int:
    rows, cols = board.shape
    hidden = empty_grid(rows, cols, False, dtype=bool)
    return count_revealed(flood_reveal(board, hidden, hidden, r, c))


def summarize_boards(difficulty: Difficulty, boards: int, seed: int | None = 42) -> dict:
    if boards <= 0:
        raise ValueError("boards must be positive")
    rng = np.random.default_rng(seed)
    rows, cols = difficulty.rows, difficulty.cols
    openings = []
    clusters_per_board = []
    value_counts = np.zeros(9, dtype=np.int64)
    heat_accum = np.zeros((rows, cols), dtype=np.float64)

    for _ in range(boards):
        r, c = int(rng.integers(rows)), int(rng.integers(cols))
        board, mines = generate_board(r, c, difficulty, rng)
        mask = mine_mask(board)
        openings.append(first_click_opening(board, r, c))
        value_counts += np.bincount(board[~mask].ravel(), minlength=9)
        clusters_per_board.append(count_mine_clusters(mines, rows, cols))
        heat_accum += mines_in_local_region(mask)

    return {
        "openings": openings,
        "clusters": clusters_per_board,
        "value_counts": value_counts,
        "heat": heat_accum / float(boards),
    }


def _label(ax, title, xlabel, ylabel):
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)


def generate_report(difficulty: Difficulty, boards: int, output_path: str, seed: int | None = 42) -> dict:
    """Write a four-panel PDF summary of ``boards`` safe-first boards."""
    summary = summarize_boards(difficulty, boards, seed)

    sns.set_theme(style="whitegrid")
    fig, ((openings_ax, values_ax), (clusters_ax, heat_ax)) = plt.subplots(2, 2, figsize=(12, 9))
    fig.suptitle(f"{difficulty.label}: {difficulty.rows}x{difficulty.cols}, {difficulty.mines} mines, {boards} boards")

    sns.histplot(summary["openings"], ax=openings_ax, color="#4C78A8", discrete=True)
    _label(openings_ax, "First-click opening size", "Cells opened by the first click", "Boards")

    sns.barplot(x=list(range(9)), y=summary["value_counts"], ax=values_ax, color="#F58518")
    _label(values_ax, "Adjacent-mine counts on safe cells", "Count shown (0-8)", "Cells")

    sns.histplot(summary["clusters"], ax=clusters_ax, color="#54A24B", discrete=True)
    _label(clusters_ax, "Mine clusters per board", "8-connected clusters", "Boards")

    sns.heatmap(summary["heat"], ax=heat_ax, cmap="magma", square=True, cbar_kws={"label": "Mean mines in 3x3 window"})
    _label(heat_ax, "Mine density around each cell", "Column", "Row")

    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)
    return summary
