# Particle bursts for food, crashes and new records. Pure numpy, drawn by the GUI.
from __future__ import annotations

import numpy as np

try:
    from .game_logic import ParticleEvent
except ImportError:
    from game_logic import ParticleEvent


GRAVITY = 0.1

# kind -> (count, colors, life in frames, min speed, speed spread)
BURSTS = {
    "food": (5, ("#ff00ff",), 40, 1.0, 2.0),
    "explosion": (20, ("#ff0055", "#ff00ff"), 60, 2.0, 3.0),
    "success": (30, ("#00ff00", "#00ffff"), 80, 1.0, 2.0),
}


class ParticleSystem:
    """Particles stored column-wise: positions, velocities and remaining life."""

    def __init__(self, cell_size: int, rng: np.random.Generator | None = None) -> None:
        self.cell_size = cell_size
        self.rng = rng or np.random.default_rng()
        self.clear()

    def __len__(self) -> int:
        return int(self.life.size)

    def emit(self, event: ParticleEvent) -> None:
        """Spawn a ring of particles centred on the event's cell."""
        count, palette, life, min_speed, spread = BURSTS[event.kind]
        cx = event.cell[0] * self.cell_size + self.cell_size / 2
        cy = event.cell[1] * self.cell_size + self.cell_size / 2

        angles = 2 * np.pi * np.arange(count) / count
        speeds = min_speed + self.rng.random(count) * spread
        vel = np.stack([np.cos(angles) * speeds, np.sin(angles) * speeds], axis=1)
        pos = np.tile(np.array([cx, cy], dtype=np.float32), (count, 1))

        self.pos = np.concatenate([self.pos, pos.astype(np.float32)])
        self.vel = np.concatenate([self.vel, vel.astype(np.float32)])
        self.life = np.concatenate([self.life, np.full(count, life, dtype=np.int32)])
        self.max_life = np.concatenate([self.max_life, np.full(count, life, dtype=np.int32)])
        self.size = np.concatenate([self.size, (3 + self.rng.random(count) * 3).astype(np.float32)])
        self.colors.extend(palette[i] for i in self.rng.integers(0, len(palette), size=count))

    def emit_all(self, events: list[ParticleEvent]) -> None:
        for event in events:
            self.emit(event)

    def update(self) -> None:
        """Move one frame, apply gravity and drop expired particles."""
        if not len(self):
            return
        self.pos += self.vel
        self.vel[:, 1] += GRAVITY
        self.life -= 1

        alive = self.life > 0
        self.pos = self.pos[alive]
        self.vel = self.vel[alive]
        self.life = self.life[alive]
        self.max_life = self.max_life[alive]
        self.size = self.size[alive]
        self.colors = [c for c, keep in zip(self.colors, alive) if keep]

    def clear(self) -> None:
        self.pos = np.zeros((0, 2), dtype=np.float32)
        self.vel = np.zeros((0, 2), dtype=np.float32)
        self.life = np.zeros(0, dtype=np.int32)
        self.max_life = np.zeros(0, dtype=np.int32)
        self.size = np.zeros(0, dtype=np.float32)
        self.colors: list[str] = []

    def opacity(self) -> np.ndarray:
        return self.life / np.maximum(self.max_life, 1)
