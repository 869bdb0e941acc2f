# Core Snake game state and rules, independent from GUI code.
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
import logging
import random
from typing import Callable, Iterable

try:
    from .input_buffer import Direction, DirectionBuffer
    from .utils import default_high_score_path, free_cells
except ImportError:
    from input_buffer import Direction, DirectionBuffer
    from utils import default_high_score_path, free_cells


logger = logging.getLogger(__name__)

Cell = tuple[int, int]

# Bounds used by the GUI when validating settings.
MIN_TILE_COUNT = 10
MAX_TILE_COUNT = 60
MIN_CELL_SIZE = 8
MAX_CELL_SIZE = 48
MIN_FRAME_MS = 8
MAX_FRAME_MS = 100

BASE_FOOD_POINTS = 10
SPEED_UNIT = 5
FRAME_DIVISOR_BASE = 10
# Rejection samples tried before falling back to an exact pick over free cells.
MAX_FOOD_ATTEMPTS = 64

DEFAULT_SNAKE: tuple[Cell, ...] = ((5, 10), (4, 10), (3, 10))


class Difficulty(Enum):
    EASY = ("Easy", 5)
    MEDIUM = ("Medium", 8)
    HARD = ("Hard", 12)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def speed(self) -> int:
        return self.value[1]

    @property
    def frames_per_step(self) -> int:
        """Driver frames between two simulation steps."""
        return max(1, int(FRAME_DIVISOR_BASE // (self.speed / SPEED_UNIT)))

    @property
    def food_points(self) -> int:
        return BASE_FOOD_POINTS * self.speed // SPEED_UNIT


class GameState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class EndReason(Enum):
    WALL = "wall"
    SELF = "self"
    BOARD_FULL = "board_full"


@dataclass(frozen=True)
class ParticleEvent:
    """Decorative effect request for the presentation layer."""
    kind: str
    cell: tuple[float, float]


@dataclass
class SnakeConfig:
    """Runtime settings shared between the logic layer and GUI."""
    tile_count: int = 20
    cell_size: int = 20
    frame_ms: int = 16
    initial_snake: tuple[Cell, ...] = DEFAULT_SNAKE
    initial_direction: Direction = Direction.RIGHT
    difficulty: Difficulty = Difficulty.MEDIUM
    high_score_path: str = field(default_factory=default_high_score_path)

    def validate(self) -> None:
        """Raise ValueError with a readable message when a setting is out of range."""
        if not (MIN_TILE_COUNT <= self.tile_count <= MAX_TILE_COUNT):
            raise ValueError(f"Tile count must be between {MIN_TILE_COUNT} and {MAX_TILE_COUNT}.")
        if not (MIN_CELL_SIZE <= self.cell_size <= MAX_CELL_SIZE):
            raise ValueError(f"Cell size must be between {MIN_CELL_SIZE} and {MAX_CELL_SIZE}.")
        if not (MIN_FRAME_MS <= self.frame_ms <= MAX_FRAME_MS):
            raise ValueError(f"Frame interval must be between {MIN_FRAME_MS} and {MAX_FRAME_MS} ms.")
        if len(self.initial_snake) < 3:
            raise ValueError("Initial snake needs at least 3 cells.")
        if len(set(self.initial_snake)) != len(self.initial_snake):
            raise ValueError("Initial snake cells must be distinct.")
        for cell in self.initial_snake:
            if hits_wall(cell, self.tile_count):
                raise ValueError(f"Initial snake cell {cell} is outside the board.")
        if next_cell(self.initial_snake[0], self.initial_direction) == self.initial_snake[1]:
            raise ValueError("Initial direction points back into the snake's body.")


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view handed to the presentation layer once per frame."""
    snake: tuple[Cell, ...]
    food: Cell | None
    score: int
    state: GameState
    difficulty: str
    food_eaten: int
    end_reason: EndReason | None

    @property
    def length(self) -> int:
        return len(self.snake)


def next_cell(cell: Cell, direction: Direction) -> Cell:
    return cell[0] + direction.dx, cell[1] + direction.dy


def hits_wall(cell: Cell, tile_count: int) -> bool:
    x, y = cell
    return x < 0 or x >= tile_count or y < 0 or y >= tile_count


def hits_self(cell: Cell, body: Iterable[Cell]) -> bool:
    # The tail is still checked even though it moves away this step.
    return cell in body


def is_collision(cell: Cell, body: Iterable[Cell], tile_count: int) -> EndReason | None:
    """Which rule a new head position breaks, if any."""
    if hits_wall(cell, tile_count):
        return EndReason.WALL
    if hits_self(cell, body):
        return EndReason.SELF
    return None


def place_food(body: Iterable[Cell], tile_count: int, rng: random.Random | None = None) -> Cell | None:
    """Pick a uniformly random cell not covered by the snake; None if the board is full."""
    rng = rng or random
    occupied = set(body)
    if len(occupied) >= tile_count * tile_count:
        return None

    for _ in range(MAX_FOOD_ATTEMPTS):
        cell = (rng.randrange(tile_count), rng.randrange(tile_count))
        if cell not in occupied:
            return cell

    # Near saturation rejection sampling stalls; choose among the free cells directly.
    candidates = free_cells(occupied, tile_count)
    if not candidates:
        return None
    return rng.choice(candidates)


class SnakeGame:
    """Pure game state + rules (no Tkinter/UI code)."""
    def __init__(
        self,
        config: SnakeConfig | None = None,
        rng: random.Random | None = None,
        on_game_over: Callable[["SnakeGame"], None] | None = None,
    ) -> None:
        self.config = config or SnakeConfig()
        self.config.validate()
        self.rng = rng or random.Random()
        self.on_game_over = on_game_over
        self.state = GameState.MENU
        self.difficulty = self.config.difficulty
        self.events: list[ParticleEvent] = []
        self.reset()

    @property
    def tile_count(self) -> int:
        return self.config.tile_count

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def direction(self) -> Direction:
        return self.input.applied

    def reset(self) -> None:
        """Initialize a fresh session: snake, direction, counters and food."""
        self.snake: deque[Cell] = deque(self.config.initial_snake)   # ordered body, head at index 0
        self.input = DirectionBuffer(self.config.initial_direction)
        self.score = 0
        self.food_eaten = 0
        self.frame_count = 0
        self.end_reason: EndReason | None = None
        self.food: Cell | None = place_food(self.snake, self.tile_count, self.rng)

    # State machine commands. Each returns False when illegal in the current state.

    def start(self) -> bool:
        """Begin a new session from the menu or after game over."""
        if self.state not in (GameState.MENU, GameState.GAME_OVER):
            logger.debug("Ignoring start while %s", self.state.value)
            return False
        self.reset()
        self.state = GameState.PLAYING
        logger.info("New game on %s", self.difficulty.label)
        return True

    def restart(self) -> bool:
        if self.state is not GameState.GAME_OVER:
            logger.debug("Ignoring restart while %s", self.state.value)
            return False
        return self.start()

    def pause(self) -> bool:
        if self.state is not GameState.PLAYING:
            logger.debug("Ignoring pause while %s", self.state.value)
            return False
        self.state = GameState.PAUSED
        return True

    def resume(self) -> bool:
        if self.state is not GameState.PAUSED:
            logger.debug("Ignoring resume while %s", self.state.value)
            return False
        self.state = GameState.PLAYING
        return True

    def toggle_pause(self) -> bool:
        if self.state is GameState.PLAYING:
            return self.pause()
        return self.resume()

    def show_menu(self) -> bool:
        """Abandon the current session and go back to the menu."""
        self.state = GameState.MENU
        return True

    def select_difficulty(self, difficulty: Difficulty) -> bool:
        if self.state is not GameState.MENU:
            logger.debug("Ignoring difficulty change while %s", self.state.value)
            return False
        self.difficulty = difficulty
        return True

    def press(self, key: str) -> bool:
        """Forward a key name to the input buffer."""
        return self.input.press(key)

    def queue_direction(self, direction: Direction) -> None:
        self.input.request(direction)

    # Simulation.

    def tick(self) -> bool:
        """One driver frame. Advances the simulation every frames_per_step frames."""
        if self.state is not GameState.PLAYING:
            return False
        self.frame_count += 1
        if self.frame_count % self.difficulty.frames_per_step != 0:
            return False
        self.step()
        return True

    def step(self) -> bool:
        """Advance one grid step. Returns False if the session ended this step."""
        if self.state is not GameState.PLAYING:
            return False

        direction = self.input.resolve()
        new_head = next_cell(self.head, direction)

        reason = is_collision(new_head, self.snake, self.tile_count)
        if reason is not None:
            self._end(reason, self.head, "explosion")
            return False

        self.snake.appendleft(new_head)

        if new_head == self.food:
            self.score += self.difficulty.food_points
            self.food_eaten += 1
            self.events.append(ParticleEvent("food", new_head))
            self.food = place_food(self.snake, self.tile_count, self.rng)
            if self.food is None:
                center = self.tile_count / 2
                self._end(EndReason.BOARD_FULL, (center, center), "success")
                return False
        else:
            self.snake.pop()

        return True

    def _end(self, reason: EndReason, origin: tuple[float, float], effect: str) -> None:
        self.state = GameState.GAME_OVER
        self.end_reason = reason
        self.events.append(ParticleEvent(effect, origin))
        logger.info(
            "Game over (%s): score=%d length=%d food=%d",
            reason.value,
            self.score,
            len(self.snake),
            self.food_eaten,
        )
        if self.on_game_over is not None:
            self.on_game_over(self)

    # Presentation access.

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            snake=tuple(self.snake),
            food=self.food,
            score=self.score,
            state=self.state,
            difficulty=self.difficulty.label,
            food_eaten=self.food_eaten,
            end_reason=self.end_reason,
        )

    def drain_events(self) -> list[ParticleEvent]:
        """Hand pending particle events to the caller and clear the queue."""
        events, self.events = self.events, []
        return events
