"""Difficulty presets and runtime settings."""

import os
from dataclasses import dataclass

SAFE_ZONE_SIZE = 9


@dataclass(frozen=True)
class Difficulty:
    key: str
    label: str
    rows: int
    cols: int
    mines: int

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"{self.key}: rows and cols must be positive")
        if self.mines < 0 or self.mines >= self.rows * self.cols - SAFE_ZONE_SIZE:
            raise ValueError(
                f"{self.key}: mines must be in [0, rows*cols-{SAFE_ZONE_SIZE + 1}]"
            )

    @property
    def safe_cells(self) -> int:
        return self.rows * self.cols - self.mines


DIFFICULTIES = {
    d.key: d
    for d in (
        Difficulty("rookie", "Rookie", 9, 9, 10),
        Difficulty("veteran", "Veteran", 16, 16, 40),
        Difficulty("expert", "Expert", 16, 30, 99),
    )
}

DEFAULT_DIFFICULTY = DIFFICULTIES.get(os.getenv("MINESWEEPER_DIFFICULTY", "rookie"), DIFFICULTIES["rookie"])

STATS_PATH = os.getenv(
    "MINESWEEPER_STATS_PATH",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "stats.json"),
)

BEST_TIMES_KEY = "minesweeper.bestTimes"
STREAK_KEY = "minesweeper.winStreak"

TICK_MS = 1000
