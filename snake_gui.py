# Tkinter presentation layer for the arcade Snake game.
from __future__ import annotations

import logging
import math
import tkinter as tk
from tkinter import messagebox

# Support both package imports and running this file directly.
try:
    from .driver import FrameDriver
    from .effects import ParticleSystem
    from .game_logic import (
        Difficulty,
        EndReason,
        GameSnapshot,
        GameState,
        SnakeConfig,
        SnakeGame,
    )
    from .scoring import HighScoreStore, ScoreBoard
except ImportError:
    from driver import FrameDriver
    from effects import ParticleSystem
    from game_logic import (
        Difficulty,
        EndReason,
        GameSnapshot,
        GameState,
        SnakeConfig,
        SnakeGame,
    )
    from scoring import HighScoreStore, ScoreBoard


logger = logging.getLogger(__name__)


class SnakeApp:
    """Tkinter presentation layer for SnakeGame. Owns every Tk handle; the game owns none."""
    UI_SCALE = 1.25
    BG = "#05070a"
    BOARD_BG = "#020b02"
    SIDEBAR_BG = "#0b1410"
    GRID_COLOR = "#0d2a0d"
    SNAKE_HEAD = "#00ffff"
    SNAKE_BODY = "#00ff00"
    FOOD_COLOR = "#ff0055"
    TEXT_PRIMARY = "#e6f7ee"
    TEXT_MUTED = "#8fb8a0"
    ACCENT = "#00ff99"
    RECORD_COLOR = "#ffd400"

    STATE_LABELS = {
        GameState.MENU: "Menu",
        GameState.PLAYING: "Playing",
        GameState.PAUSED: "Paused",
        GameState.GAME_OVER: "Game Over",
    }
    END_LABELS = {
        EndReason.WALL: "Hit the wall",
        EndReason.SELF: "Bit your own tail",
        EndReason.BOARD_FULL: "Board cleared!",
    }
    DIFFICULTY_KEYS = {"1": Difficulty.EASY, "2": Difficulty.MEDIUM, "3": Difficulty.HARD}

    def __init__(self, root: tk.Tk, config: SnakeConfig | None = None) -> None:
        self.root = root
        self.root.title("Snake Arcade")
        self.root.configure(bg=self.BG)
        self.root.tk.call("tk", "scaling", self.UI_SCALE)

        self.config = config or SnakeConfig()
        self.scoreboard = ScoreBoard(HighScoreStore(self.config.high_score_path))
        self.game = SnakeGame(self.config, on_game_over=self.scoreboard.finish)
        self.particles = ParticleSystem(self.config.cell_size)
        self.driver = FrameDriver(self.root.after, self.root.after_cancel, self.frame, self.config.frame_ms)

        self._build_layout()
        self._bind_keys()
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)
        self.draw()
        self.driver.start()

    def _s(self, value: int) -> int:
        """Scale pixel/font values for better readability."""
        return int(round(value * self.UI_SCALE))

    def _build_layout(self) -> None:
        """Create game canvas + right sidebar panels."""
        container = tk.Frame(self.root, bg=self.BG)
        container.pack(fill="both", expand=True, padx=self._s(16), pady=self._s(16))

        side = self.config.tile_count * self.config.cell_size
        self.canvas = tk.Canvas(
            container,
            width=side,
            height=side,
            bg=self.BOARD_BG,
            highlightthickness=0,
            bd=0,
        )
        self.canvas.pack(side="left", padx=(0, self._s(16)))

        self.sidebar = tk.Frame(container, bg=self.SIDEBAR_BG, width=self._s(260))
        self.sidebar.pack(side="left", fill="y")

        tk.Label(
            self.sidebar,
            text="SNAKE",
            fg=self.ACCENT,
            bg=self.SIDEBAR_BG,
            font=("Courier", self._s(20), "bold"),
        ).pack(anchor="w", padx=self._s(16), pady=(self._s(16), self._s(10)))

        self._build_status()
        self._build_difficulty()
        self._build_buttons()

    def _build_status(self) -> None:
        """Live score, best score, length and state labels."""
        frame = tk.LabelFrame(
            self.sidebar,
            text="Status",
            fg=self.TEXT_PRIMARY,
            bg=self.SIDEBAR_BG,
            bd=1,
            font=("Courier", self._s(10), "bold"),
            labelanchor="n",
        )
        frame.pack(fill="x", padx=self._s(16), pady=(0, self._s(14)))

        self.score_var = tk.StringVar()
        self.high_var = tk.StringVar()
        self.length_var = tk.StringVar()
        self.state_var = tk.StringVar()
        self.difficulty_var = tk.StringVar()

        for var in (self.score_var, self.high_var, self.length_var, self.state_var, self.difficulty_var):
            tk.Label(
                frame,
                textvariable=var,
                fg=self.TEXT_PRIMARY,
                bg=self.SIDEBAR_BG,
                font=("Courier", self._s(11)),
                anchor="w",
            ).pack(fill="x", padx=self._s(10), pady=self._s(3))

    def _build_difficulty(self) -> None:
        frame = tk.LabelFrame(
            self.sidebar,
            text="Difficulty",
            fg=self.TEXT_PRIMARY,
            bg=self.SIDEBAR_BG,
            bd=1,
            font=("Courier", self._s(10), "bold"),
            labelanchor="n",
        )
        frame.pack(fill="x", padx=self._s(16), pady=(0, self._s(14)))

        self.difficulty_buttons: dict[Difficulty, tk.Button] = {}
        for difficulty in Difficulty:
            btn = self._button(frame, difficulty.label, lambda d=difficulty: self.select_difficulty(d))
            btn.pack(side="left", expand=True, fill="x", padx=self._s(3), pady=self._s(6))
            self.difficulty_buttons[difficulty] = btn

    def _build_buttons(self) -> None:
        """Action buttons for start/pause/resume/menu."""
        frame = tk.Frame(self.sidebar, bg=self.SIDEBAR_BG)
        frame.pack(fill="x", padx=self._s(16), pady=(0, self._s(10)))

        self.start_btn = self._button(frame, "Start", self.start_game)
        self.start_btn.pack(fill="x", pady=self._s(4))

        self.pause_btn = self._button(frame, "Pause / Resume", self.toggle_pause)
        self.pause_btn.pack(fill="x", pady=self._s(4))

        self.menu_btn = self._button(frame, "Menu", self.show_menu)
        self.menu_btn.pack(fill="x", pady=self._s(4))

        tk.Label(
            self.sidebar,
            text="Move: Arrow keys / WASD\nPause: Space   Menu: Esc\nStart: Enter   Level: 1-3",
            fg=self.TEXT_MUTED,
            bg=self.SIDEBAR_BG,
            justify="left",
            font=("Courier", self._s(9)),
        ).pack(anchor="w", padx=self._s(16), pady=(self._s(4), self._s(10)))

    def _button(self, parent: tk.Widget, text: str, command) -> tk.Button:
        return tk.Button(
            parent,
            text=text,
            command=command,
            fg="#031108",
            bg=self.ACCENT,
            activebackground="#66ffc2",
            activeforeground="#031108",
            bd=0,
            relief="flat",
            font=("Courier", self._s(10), "bold"),
            padx=self._s(8),
            pady=self._s(6),
            cursor="hand2",
        )

    def _bind_keys(self) -> None:
        """Direction keys go to the input buffer; the rest are control commands."""
        self.root.bind("<KeyPress>", self._on_key)
        self.root.bind("<space>", lambda _e: self.toggle_pause())
        self.root.bind("p", lambda _e: self.toggle_pause())
        self.root.bind("<Return>", lambda _e: self.start_game())
        self.root.bind("<Escape>", lambda _e: self.show_menu())

    def _on_key(self, event: tk.Event) -> None:
        if self.game.press(event.keysym):
            return
        difficulty = self.DIFFICULTY_KEYS.get(event.keysym)
        if difficulty is not None:
            self.select_difficulty(difficulty)

    # Commands. Illegal ones are no-ops inside the game.

    def start_game(self) -> None:
        if self.game.start():
            self.particles.clear()

    def toggle_pause(self) -> None:
        self.game.toggle_pause()

    def show_menu(self) -> None:
        self.game.show_menu()

    def select_difficulty(self, difficulty: Difficulty) -> None:
        self.game.select_difficulty(difficulty)

    def _on_close(self) -> None:
        self.driver.stop()
        self.root.destroy()

    # Frame loop.

    def frame(self) -> None:
        """One driver frame: simulate, then render."""
        self.game.tick()
        self.particles.emit_all(self.game.drain_events())
        self.particles.update()
        self.draw()

    def draw(self) -> None:
        """Render board, food, snake, particles, status labels and the screen overlay."""
        snap = self.game.snapshot()
        self.canvas.delete("all")
        self._draw_grid()
        if snap.state is not GameState.MENU:
            self._draw_food(snap)
            self._draw_snake(snap)
        self._draw_particles()
        self._draw_overlay(snap)
        self._update_labels(snap)

    def _draw_grid(self) -> None:
        size = self.config.tile_count
        cell = self.config.cell_size
        for i in range(size + 1):
            pos = i * cell
            self.canvas.create_line(0, pos, size * cell, pos, fill=self.GRID_COLOR)
            self.canvas.create_line(pos, 0, pos, size * cell, fill=self.GRID_COLOR)

    def _draw_food(self, snap: GameSnapshot) -> None:
        if snap.food is None:
            return
        cell = self.config.cell_size
        pulse = math.sin(self.game.frame_count * 0.1) * 0.3 + 0.7
        size = cell * pulse
        offset = (cell - size) / 2
        x, y = snap.food[0] * cell + offset, snap.food[1] * cell + offset
        self.canvas.create_rectangle(x, y, x + size, y + size, fill=self.FOOD_COLOR, outline="")

    def _draw_snake(self, snap: GameSnapshot) -> None:
        cell = self.config.cell_size
        for idx, (x, y) in enumerate(snap.snake):
            px, py = x * cell, y * cell
            if idx == 0:
                self.canvas.create_rectangle(px + 2, py + 2, px + cell - 2, py + cell - 2, fill=self.SNAKE_HEAD, outline="")
                eye = max(2, cell // 10)
                self.canvas.create_rectangle(px + 6, py + 6, px + 6 + eye, py + 6 + eye, fill="#000000", outline="")
                self.canvas.create_rectangle(
                    px + cell - 8, py + 6, px + cell - 8 + eye, py + 6 + eye, fill="#000000", outline=""
                )
            else:
                self.canvas.create_rectangle(px + 1, py + 1, px + cell - 1, py + cell - 1, fill=self.SNAKE_BODY, outline="")

    def _draw_particles(self) -> None:
        p = self.particles
        for (x, y), size, color, alpha in zip(p.pos, p.size, p.colors, p.opacity()):
            # Tk has no per-item alpha; shrink fading particles instead.
            r = float(size * alpha) / 2
            self.canvas.create_oval(x - r, y - r, x + r, y + r, fill=color, outline="")

    def _draw_overlay(self, snap: GameSnapshot) -> None:
        if snap.state is GameState.PLAYING:
            return
        side = self.config.tile_count * self.config.cell_size
        mid = side // 2
        if snap.state is not GameState.MENU:
            self.canvas.create_rectangle(0, 0, side, side, fill="#000000", stipple="gray50", outline="")

        if snap.state is GameState.MENU:
            lines = [
                ("SNAKE", self.ACCENT, 26),
                (f"High score: {self.scoreboard.high_score}", self.TEXT_PRIMARY, 12),
                (f"Difficulty: {snap.difficulty}", self.TEXT_MUTED, 11),
                ("Press Enter or Start", self.TEXT_MUTED, 11),
            ]
        elif snap.state is GameState.PAUSED:
            lines = [("Paused", self.TEXT_PRIMARY, 22), ("Space to resume", self.TEXT_MUTED, 11)]
        else:
            lines = [
                ("Game Over", self.TEXT_PRIMARY, 22),
                (self.END_LABELS.get(snap.end_reason, ""), self.TEXT_MUTED, 11),
                (f"Score: {snap.score}", self.TEXT_PRIMARY, 13),
                (f"Length: {snap.length}   Food: {snap.food_eaten}", self.TEXT_MUTED, 11),
            ]
            if self.scoreboard.last_was_record:
                lines.append(("New high score!", self.RECORD_COLOR, 13))
            lines.append(("Enter to restart, Esc for menu", self.TEXT_MUTED, 10))

        y = mid - 18 * len(lines) + 18
        for text, color, size in lines:
            self.canvas.create_text(mid, y, text=text, fill=color, font=("Courier", size, "bold"))
            y += 36

    def _update_labels(self, snap: GameSnapshot) -> None:
        self.score_var.set(f"Score: {snap.score}")
        self.high_var.set(f"Best: {self.scoreboard.high_score}")
        self.length_var.set(f"Length: {snap.length}")
        self.state_var.set(f"State: {self.STATE_LABELS[snap.state]}")
        self.difficulty_var.set(f"Level: {snap.difficulty}")
        for difficulty, btn in self.difficulty_buttons.items():
            active = difficulty is self.game.difficulty
            btn.configure(bg=self.ACCENT if active else "#1f3a2c", fg="#031108" if active else self.TEXT_MUTED)


def run_player_gui(config: SnakeConfig | None = None) -> None:
    """Launch the Snake window."""
    try:
        root = tk.Tk()
    except tk.TclError as exc:
        logger.error("Could not open a display: %s", exc)
        raise
    try:
        SnakeApp(root, config)
    except ValueError as exc:
        messagebox.showerror("Invalid Setting", str(exc))
        root.destroy()
        return
    root.mainloop()


if __name__ == "__main__":
    run_player_gui()
