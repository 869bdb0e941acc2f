# Keyboard-to-direction mapping and the pending/applied direction buffer.
from __future__ import annotations

from enum import Enum
import logging


logger = logging.getLogger(__name__)


class Direction(Enum):
    """Unit step on the grid, as (dx, dy) with y growing downwards."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def is_opposite(self, other: "Direction") -> bool:
        return self.dx + other.dx == 0 and self.dy + other.dy == 0


# Tk keysyms ("up") and browser key names ("arrowup") both land here after lowercasing.
ARROW_KEYS: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
}

LETTER_KEYS: dict[str, Direction] = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}

KEY_TABLES = (ARROW_KEYS, LETTER_KEYS)


def direction_for_key(key: str) -> Direction | None:
    """Return the direction bound to a key name, or None for unrecognized keys."""
    name = key.lower()
    for table in KEY_TABLES:
        direction = table.get(name)
        if direction is not None:
            return direction
    return None


class DirectionBuffer:
    """Latest requested direction plus the one the snake is currently moving in.

    Requests are last-write-wins: only the most recent one before a step counts.
    """

    def __init__(self, initial: Direction = Direction.RIGHT) -> None:
        self.applied = initial
        self.pending = initial

    def reset(self, direction: Direction) -> None:
        self.applied = direction
        self.pending = direction

    def request(self, direction: Direction) -> None:
        self.pending = direction

    def press(self, key: str) -> bool:
        """Map a key event to a request. Returns False when the key is not a direction key."""
        direction = direction_for_key(key)
        if direction is None:
            return False
        self.request(direction)
        return True

    def resolve(self) -> Direction:
        """Apply the pending request unless it would reverse the snake onto itself."""
        if self.pending.is_opposite(self.applied):
            logger.debug("Discarding reversal %s while moving %s", self.pending.name, self.applied.name)
            self.pending = self.applied
        else:
            self.applied = self.pending
        return self.applied
