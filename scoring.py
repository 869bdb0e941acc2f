# High score persistence and the bridge that compares finished sessions against it.
from __future__ import annotations

import logging
import os

try:
    from .game_logic import ParticleEvent, SnakeGame
    from .utils import default_high_score_path
except ImportError:
    from game_logic import ParticleEvent, SnakeGame
    from utils import default_high_score_path


logger = logging.getLogger(__name__)


class HighScoreStore:
    """Single durable slot holding the best score as a textual integer."""

    def __init__(self, path: str | None = None) -> None:
        self.path = path or default_high_score_path()

    def load(self) -> int:
        """Read the stored value. Missing or malformed data counts as 0."""
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                raw = fh.read().strip()
        except FileNotFoundError:
            return 0
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read high score from %s: %s", self.path, exc)
            return 0

        if not raw:
            return 0
        # Plain decimal digits only: no sign, underscores or non-ASCII digits.
        if not (raw.isascii() and raw.isdigit()):
            logger.warning("Ignoring malformed high score %r in %s", raw, self.path)
            return 0
        return int(raw)

    def save(self, value: int) -> bool:
        """Write the value. Returns False (and logs) if the file could not be written."""
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as fh:
                fh.write(str(int(value)))
        except OSError as exc:
            logger.error("Could not save high score to %s: %s", self.path, exc)
            return False
        logger.info("Saved high score %d", value)
        return True


class ScoreBoard:
    """Tracks the persisted best score and decides when a session beats it."""

    def __init__(self, store: HighScoreStore) -> None:
        self.store = store
        self.high_score = store.load()
        self.last_was_record = False

    def record(self, final_score: float) -> bool:
        """Compare a finished session's score; persist and return True on a new record."""
        score = int(final_score)
        self.last_was_record = score > self.high_score
        if self.last_was_record:
            self.high_score = score
            self.store.save(score)
        return self.last_was_record

    def finish(self, game: SnakeGame) -> bool:
        """Game-over hook: record the score and celebrate a new record at the board center.

        A board-full win already queued its success burst, so only one is emitted.
        """
        is_record = self.record(game.score)
        if is_record and not any(e.kind == "success" for e in game.events):
            center = game.tile_count / 2
            game.events.append(ParticleEvent("success", (center, center)))
        return is_record
