# Repeating frame driver built on a scheduler such as Tk's after/after_cancel.
from __future__ import annotations

import logging
from typing import Any, Callable


logger = logging.getLogger(__name__)

Schedule = Callable[[int, Callable[[], None]], Any]
Cancel = Callable[[Any], None]


class FrameDriver:
    """Calls on_frame every frame_ms milliseconds until stopped.

    Owns no game logic. A frame is never started while another one is running.
    """

    def __init__(self, schedule: Schedule, cancel: Cancel, on_frame: Callable[[], None], frame_ms: int = 16) -> None:
        if frame_ms <= 0:
            raise ValueError("frame_ms must be > 0")
        self.schedule = schedule
        self.cancel = cancel
        self.on_frame = on_frame
        self.frame_ms = frame_ms
        self.after_id: Any = None  # scheduler handle for the next frame
        self.running = False
        self.in_frame = False
        self.frames = 0

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        self._schedule_next()

    def stop(self) -> None:
        """Cancel the scheduled frame callback if one exists."""
        self.running = False
        if self.after_id is not None:
            self.cancel(self.after_id)
            self.after_id = None

    def _schedule_next(self) -> None:
        self.after_id = self.schedule(self.frame_ms, self._frame)

    def _frame(self) -> None:
        if self.in_frame:
            logger.debug("Skipping reentrant frame")
            return
        self.after_id = None
        if not self.running:
            return
        self.in_frame = True
        try:
            self.on_frame()
            self.frames += 1
        finally:
            self.in_frame = False
        if self.running:
            self._schedule_next()
