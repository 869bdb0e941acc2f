# Shared helpers: board occupancy, data paths, logging setup, and headless frame runs.
from __future__ import annotations

import logging
import os
from typing import Iterable, Protocol

import numpy as np


DATA_DIR = os.path.join(os.path.expanduser("~"), ".snake_arcade")
HIGH_SCORE_FILENAME = "high_score.txt"

HIGH_SCORE_ENV = "SNAKE_HIGH_SCORE_FILE"
LOG_LEVEL_ENV = "SNAKE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class Tickable(Protocol):
    def tick(self) -> bool: ...


def default_high_score_path() -> str:
    """High score file location, overridable through the environment."""
    override = os.environ.get(HIGH_SCORE_ENV)
    if override:
        return os.path.expanduser(override)
    return os.path.join(DATA_DIR, HIGH_SCORE_FILENAME)


def configure_logging(level: str | int | None = None) -> None:
    """Install the root logging handler. Level falls back to SNAKE_LOG_LEVEL, then WARNING."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def occupancy_grid(body: Iterable[tuple[int, int]], tile_count: int) -> np.ndarray:
    """Boolean board indexed as grid[y, x], True where the snake covers the cell."""
    grid = np.zeros((tile_count, tile_count), dtype=bool)
    for x, y in body:
        grid[y, x] = True
    return grid


def free_cells(body: Iterable[tuple[int, int]], tile_count: int) -> list[tuple[int, int]]:
    """All cells not covered by the snake, in row-major order."""
    ys, xs = np.nonzero(~occupancy_grid(body, tile_count))
    return [(int(x), int(y)) for x, y in zip(xs, ys)]


def run_frames(game: Tickable, frames: int) -> int:
    """Drive a game for a number of frames without a GUI. Returns how many steps ran."""
    if frames < 0:
        raise ValueError("frames must be >= 0")
    steps = 0
    for _ in range(frames):
        if game.tick():
            steps += 1
    return steps
