import logging
import os
from datetime import datetime
import tkinter as tk
from tkinter import messagebox

from analytics import generate_report
from board import MINE
from game_logic import GameSession, InputMode, Phase
from settings import DEFAULT_DIFFICULTY, DIFFICULTIES, STATS_PATH
from stats_store import LocalStorage, StatsStore

logger = logging.getLogger(__name__)


class Minesweeper:
    NUMBER_COLORS = {1: "blue", 2: "green", 3: "red", 4: "purple", 5: "brown", 6: "teal", 7: "black", 8: "gray"}

    CELL_BG = "#E5E7EB"
    CELL_BG_HOVER = "#D1D5DB"
    REVEALED_BG = "#F3F4F6"
    MINE_BG = "#FEE2E2"
    MINE_SOURCE_BG = "#FCA5A5"
    BOARD_BG = "#F8FAFC"
    PANEL_BG = "#FFFFFF"
    BOARD_MAX_WIDTH = 920
    BOARD_MAX_HEIGHT = 640
    ANALYTICS_BOARDS = 100

    def __init__(self, root, difficulty=DEFAULT_DIFFICULTY, stats_path=STATS_PATH):
        self.root = root
        self.buttons = {}
        self.stats = StatsStore(LocalStorage(stats_path), DIFFICULTIES.keys())
        self.session = GameSession(difficulty, self.stats, scheduler=root)
        self.shown_win_token = self.session.win_token
        base_dir = os.path.dirname(os.path.abspath(__file__))
        self.analytics_reports_dir = os.path.join(base_dir, "analytics_reports")

        self.cell_font = ("Segoe UI", 10, "bold")
        self.counter_font = ("Consolas", 14, "bold")
        self.ui_font = ("Segoe UI", 11)

        self._build_ui()
        self._create_board()
        self._poll_counters()

    def _build_ui(self):
        self.root.configure(bg=self.BOARD_BG)
        self.root.resizable(False, False)
        self.root.protocol("WM_DELETE_WINDOW", self.close)

        self.main_frame = tk.Frame(self.root, bg=self.BOARD_BG)
        self.main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=(10, 10))

        self.side_panel = tk.Frame(self.main_frame, bg=self.PANEL_BG, bd=1, relief=tk.SOLID, width=240)
        self.side_panel.pack(side=tk.LEFT, fill=tk.Y)
        self.side_panel.pack_propagate(False)

        tk.Label(
            self.side_panel, text="Minesweeper", bg=self.PANEL_BG, fg="#111827",
            font=("Segoe UI", 14, "bold")
        ).pack(fill=tk.X, padx=10, pady=(10, 6))

        self.mines_label = tk.Label(self.side_panel, text="Mines: 000", font=self.counter_font, bg=self.PANEL_BG, fg="#EF4444")
        self.mines_label.pack(fill=tk.X, padx=10, pady=(0, 10), anchor="w")

        self.timer_label = tk.Label(self.side_panel, text="Time: 000", font=self.counter_font, bg=self.PANEL_BG, fg="#111827")
        self.timer_label.pack(fill=tk.X, padx=10, pady=(0, 10), anchor="w")

        self.stats_label = tk.Label(self.side_panel, text="", font=self.ui_font, bg=self.PANEL_BG, fg="#374151", anchor="w", justify=tk.LEFT)
        self.stats_label.pack(fill=tk.X, padx=10, pady=(0, 10))

        self.reset_btn = tk.Button(self.side_panel, text="Reset Game", font=("Segoe UI Emoji", 12), command=self.reset)
        self.reset_btn.pack(fill=tk.X, padx=10, pady=(0, 8))

        self.mode_btn = tk.Button(self.side_panel, text="Mode: Reveal", font=self.ui_font, command=self.toggle_mode)
        self.mode_btn.pack(fill=tk.X, padx=10, pady=(0, 8))

        self.difficulty_var = tk.StringVar(value=self.session.difficulty.label)
        self.difficulty_map = {d.label: d for d in DIFFICULTIES.values()}
        self.difficulty_menu = tk.OptionMenu(self.side_panel, self.difficulty_var, *self.difficulty_map.keys(), command=self._on_change_difficulty)
        self.difficulty_menu.config(font=("Segoe UI Emoji", 12), width=10)
        self.difficulty_menu.pack(fill=tk.X, padx=10, pady=(0, 10))

        tk.Button(
            self.side_panel,
            text="Run Analytics",
            command=self.run_analytics_report,
            font=self.ui_font,
        ).pack(fill=tk.X, padx=10, pady=(0, 10))

        self.board_frame = tk.Frame(self.main_frame, bg=self.PANEL_BG, bd=1, relief=tk.SOLID)
        self.board_frame.pack(side=tk.LEFT, padx=(10, 0))

        self.status = tk.Label(self.root, text="Left-click to reveal, right-click to flag. Press R to reset.", bg=self.BOARD_BG, fg="#374151", font=self.ui_font)
        self.status.pack(padx=10, pady=(0, 6), anchor="w")

        self.root.bind("<r>", lambda e: self.reset())
        self.root.bind("<R>", lambda e: self.reset())

    def _create_board(self):
        for w in self.board_frame.winfo_children():
            w.destroy()
        self.buttons.clear()
        rows, cols = self.session.rows, self.session.cols

        width_limit = self.BOARD_MAX_WIDTH // max(1, cols)
        height_limit = self.BOARD_MAX_HEIGHT // max(1, rows)
        self.cell_px = max(18, min(48, width_limit, height_limit))
        self.board_frame.config(width=self.cell_px * cols, height=self.cell_px * rows)
        self.board_frame.grid_propagate(False)

        for r in range(rows):
            self.board_frame.grid_rowconfigure(r, weight=1, uniform="row", minsize=self.cell_px)
        for c in range(cols):
            self.board_frame.grid_columnconfigure(c, weight=1, uniform="col", minsize=self.cell_px)

        font_size = max(8, int(self.cell_px * 0.45))
        for r in range(rows):
            for c in range(cols):
                b = tk.Button(
                    self.board_frame,
                    text="",
                    bg=self.CELL_BG,
                    activebackground=self.CELL_BG_HOVER,
                    font=("Segoe UI", font_size, "bold"),
                    relief=tk.RAISED,
                    command=lambda r=r, c=c: self.press(r, c),
                )
                b.bind("<Button-3>", lambda e, r=r, c=c: self.toggle_flag(r, c)) #Window
                b.bind("<Button-2>", lambda e, r=r, c=c: self.toggle_flag(r, c)) #Mac
                b.grid(row=r, column=c, sticky="nsew")
                self.buttons[(r, c)] = b

        self._refresh_ui()

    def press(self, r, c):
        self.session.press(r, c)
        self._after_move()

    def toggle_flag(self, r, c):
        self.session.toggle_flag(r, c)
        self._after_move()

    def toggle_mode(self):
        mode = self.session.toggle_input_mode()
        self.mode_btn.config(text="Mode: Flag" if mode == InputMode.FLAG else "Mode: Reveal")

    def _after_move(self):
        self._refresh_ui()
        if self.session.phase == Phase.LOST:
            self.status.config(text="Game over! Press R to try again.")
        elif self.session.phase == Phase.WON and self.session.win_token != self.shown_win_token:
            self.shown_win_token = self.session.win_token
            message = f"You Win! Time: {self.session.elapsed}s"
            if self.session.new_record:
                message += "\nNew best time!"
            messagebox.showinfo("Game Over", message)

    def _refresh_ui(self):
        session = self.session
        over = session.is_over
        for (r, c), btn in self.buttons.items():
            value = int(session.board[r, c])
            if session.revealed[r, c]:
                btn.config(relief=tk.SUNKEN, bg=self.REVEALED_BG)
                if value == MINE:
                    bg = self.MINE_SOURCE_BG if session.clicked_mine == (r, c) else self.MINE_BG
                    btn.config(text="*", bg=bg, fg="#111827")
                elif value > 0:
                    btn.config(text=str(value), fg=self.NUMBER_COLORS.get(value, "#111827"))
                else:
                    btn.config(text="")
            elif session.flagged[r, c]:
                btn.config(text="F", fg="#EF4444", bg=self.CELL_BG, relief=tk.RAISED)
            else:
                btn.config(text="", bg=self.CELL_BG, relief=tk.RAISED)
            btn.config(state="disabled" if over else "normal")

        self._update_counters()

    def _update_counters(self):
        session = self.session
        self.mines_label.config(text=f"Mines: {session.mines_left:03d}")
        self.timer_label.config(text=f"Time: {session.elapsed:03d}")
        best = session.best_time
        self.stats_label.config(text=f"Streak: {session.streak}\nBest: {best if best is not None else '-'}")

    def _poll_counters(self):
        self._update_counters()
        self.poll_job = self.root.after(250, self._poll_counters)

    def _on_change_difficulty(self, *_):
        self.session.select_difficulty(self.difficulty_map[self.difficulty_var.get()])
        self.mode_btn.config(text="Mode: Reveal")
        self._create_board()

    def reset(self):
        self.session.reset()
        self.status.config(text="Left-click to reveal, right-click to flag. Press R to reset.")
        self._create_board()

    def run_analytics_report(self):
        os.makedirs(self.analytics_reports_dir, exist_ok=True)
        difficulty = self.session.difficulty
        unix_suffix = str(int(datetime.now().timestamp()))
        pdf_path = os.path.join(self.analytics_reports_dir, f"{difficulty.key}_{unix_suffix}.pdf")
        try:
            generate_report(difficulty, self.ANALYTICS_BOARDS, pdf_path)
        except Exception as exc:
            logger.exception("Analytics report failed")
            messagebox.showwarning("Analytics", f"Failed to build analytics report:\n{exc}")
            return
        messagebox.showinfo("Analytics", f"Report saved to {os.path.basename(pdf_path)}")

    def close(self):
        self.session.dispose()
        self.root.after_cancel(self.poll_job)
        self.root.destroy()


def main():
    logging.basicConfig(level=logging.INFO)
    root = tk.Tk()
    root.title("Minesweeper")
    Minesweeper(root)
    root.mainloop()


if __name__ == "__main__":
    main()
