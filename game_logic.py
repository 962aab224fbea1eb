import logging
from enum import Enum

import numpy as np

from board import MINE, generate_board
from grid_utils import empty_grid
from reveal import count_revealed, flood_reveal
from settings import DIFFICULTIES, Difficulty
from stats_store import StatsStore
from timer import RoundTimer

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class InputMode(str, Enum):
    REVEAL = "reveal"
    FLAG = "flag"


TERMINAL_PHASES = (Phase.WON, Phase.LOST)


class GameSession:
    """One player's game: the active round plus its timer and stats.

    Boards are generated lazily on the first reveal so that the clicked cell
    and its neighbours are always mine free. Every matrix exposed here is
    replaced, never mutated, when the round changes.
    """

    def __init__(self, difficulty: Difficulty, stats: StatsStore, scheduler, rng: np.random.Generator | None = None):
        self.stats = stats
        self.rng = rng if rng is not None else np.random.default_rng()
        self.timer = RoundTimer(scheduler, self._on_tick)
        self.input_mode = InputMode.REVEAL
        self.win_token = 0
        self.difficulty = difficulty
        self.reset()

    @property
    def rows(self) -> int:
        return self.difficulty.rows

    @property
    def cols(self) -> int:
        return self.difficulty.cols

    @property
    def is_over(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def mines_left(self) -> int:
        return self.difficulty.mines - self.flag_count

    @property
    def streak(self) -> int:
        return self.stats.streak

    @property
    def best_time(self):
        return self.stats.best_time(self.difficulty.key)

    def reset(self, difficulty: Difficulty | None = None):
        self.timer.stop()
        if difficulty is not None:
            self.difficulty = difficulty
        self.board = empty_grid(self.rows, self.cols, 0, dtype=np.int8)
        self.revealed = empty_grid(self.rows, self.cols, False, dtype=bool)
        self.flagged = empty_grid(self.rows, self.cols, False, dtype=bool)
        self.mines = []
        self.phase = Phase.WAITING
        self.elapsed = 0
        self.flag_count = 0
        self.new_record = False
        self.clicked_mine = None
        self.reveal_origin = None
        logger.info("New %s round (%dx%d, %d mines)", self.difficulty.key, self.rows, self.cols, self.difficulty.mines)

    def select_difficulty(self, difficulty):
        if isinstance(difficulty, str):
            difficulty = DIFFICULTIES[difficulty]
        self.input_mode = InputMode.REVEAL
        if difficulty != self.difficulty:
            self.reset(difficulty)

    def toggle_input_mode(self):
        self.input_mode = InputMode.FLAG if self.input_mode == InputMode.REVEAL else InputMode.REVEAL
        return self.input_mode

    def press(self, r: int, c: int):
        if self.input_mode == InputMode.FLAG:
            self.toggle_flag(r, c)
        else:
            self.reveal_cell(r, c)

    def reveal_cell(self, r: int, c: int):
        if self.is_over or self.flagged[r, c] or self.revealed[r, c]:
            return

        if self.phase == Phase.WAITING:
            self.board, self.mines = generate_board(r, c, self.difficulty, self.rng)
            self.phase = Phase.PLAYING
            self.timer.start()

        if self.board[r, c] == MINE:
            self._lose(r, c)
            return

        self.reveal_origin = (r, c)
        self.revealed = flood_reveal(self.board, self.revealed, self.flagged, r, c)
        logger.debug("Revealed from (%d, %d), %d cells open", r, c, count_revealed(self.revealed))
        if count_revealed(self.revealed) == self.difficulty.safe_cells:
            self._win()

    def toggle_flag(self, r: int, c: int):
        if self.is_over or self.revealed[r, c]:
            return
        flagged = self.flagged.copy()
        flagged[r, c] = not flagged[r, c]
        self.flagged = flagged
        self.flag_count += 1 if flagged[r, c] else -1

    def dispose(self):
        self.timer.stop()

    def _on_tick(self):
        if self.phase != Phase.PLAYING:
            self.timer.stop()
            return
        self.elapsed += 1

    def _lose(self, r: int, c: int):
        self.timer.stop()
        self.phase = Phase.LOST
        self.clicked_mine = (r, c)
        revealed = self.revealed.copy()
        for mr, mc in self.mines:
            revealed[mr, mc] = True
        self.revealed = revealed
        self.stats.record_loss()
        logger.info("Lost %s round after %ds", self.difficulty.key, self.elapsed)

    def _win(self):
        self.timer.stop()
        self.phase = Phase.WON
        best = self.best_time
        self.new_record = best is None or self.elapsed <= best
        self.stats.record_win_streak(self.stats.streak + 1)
        self.stats.record_win(self.difficulty.key, self.elapsed)
        self.win_token += 1
        logger.info("Won %s round in %ds (streak %d)", self.difficulty.key, self.elapsed, self.streak)
