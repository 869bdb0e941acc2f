import os
import sys

import numpy as np
import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from effects import BURSTS, ParticleSystem
from game_logic import ParticleEvent
from utils import free_cells, occupancy_grid, run_frames


def test_occupancy_grid_marks_snake_cells():
    grid = occupancy_grid([(2, 1), (1, 1), (0, 1)], 4)
    assert grid.shape == (4, 4)
    assert grid.dtype == bool
    assert grid[1, 0] and grid[1, 1] and grid[1, 2]
    assert np.count_nonzero(grid) == 3


def test_free_cells_excludes_snake():
    cells = free_cells([(0, 0), (1, 0)], 3)
    assert len(cells) == 7
    assert (0, 0) not in cells and (1, 0) not in cells
    assert cells[0] == (2, 0)


def test_run_frames_rejects_negative():
    with pytest.raises(ValueError):
        run_frames(None, -1)


@pytest.mark.parametrize("kind", ["food", "explosion", "success"])
def test_particles_burst_and_expire(kind):
    count, palette, life, _, _ = BURSTS[kind]
    particles = ParticleSystem(cell_size=20, rng=np.random.default_rng(0))
    particles.emit(ParticleEvent(kind, (5, 5)))

    assert len(particles) == count
    assert len(particles.colors) == count
    assert set(particles.colors) <= set(palette)
    assert np.allclose(particles.pos, [110.0, 110.0])

    for _ in range(life - 1):
        particles.update()
    assert len(particles) == count
    assert np.all(particles.opacity() > 0)
    particles.update()
    assert len(particles) == 0
    assert particles.colors == []


def test_particles_fall_under_gravity():
    particles = ParticleSystem(cell_size=10, rng=np.random.default_rng(1))
    particles.emit(ParticleEvent("food", (0, 0)))
    vy = particles.vel[:, 1].copy()
    particles.update()
    assert np.allclose(particles.vel[:, 1], vy + 0.1)


def test_clear_drops_everything():
    particles = ParticleSystem(cell_size=10)
    particles.emit_all([ParticleEvent("food", (1, 1)), ParticleEvent("explosion", (2, 2))])
    assert len(particles) == 25
    particles.clear()
    assert len(particles) == 0
