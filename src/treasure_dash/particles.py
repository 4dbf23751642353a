"""Cosmetic particle bursts, stored as numpy arrays.

Particles never feed back into the simulation; the session only emits them
and the renderer only reads them.
"""

from typing import Optional, Tuple

import numpy as np

from .physics import Vector2

PARTICLE_LIFE = 60  # Ticks
PARTICLE_GRAVITY = 0.3
PARTICLE_DRAG = 0.98
PARTICLE_SIZE = 4.0


class ParticleSystem:
    """Fixed-lifetime particles with gravity and horizontal drag."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng or np.random.default_rng()
        self.positions = np.zeros((0, 2), dtype=np.float64)
        self.velocities = np.zeros((0, 2), dtype=np.float64)
        self.life = np.zeros(0, dtype=np.int32)
        self.colors = np.zeros((0, 3), dtype=np.uint8)

    def __len__(self) -> int:
        return len(self.life)

    def emit(
        self,
        position: Vector2,
        count: int,
        color: Tuple[int, int, int],
        speed_range: float = 3.0,
    ) -> None:
        """Spawn `count` particles at position in random directions.

        Args:
            position: Spawn point (x, y)
            count: Number of particles
            color: RGB colour shared by the burst
            speed_range: Maximum initial speed in px/tick
        """
        if count <= 0:
            return
        angles = self.rng.random(count) * 2 * np.pi
        speeds = self.rng.random(count) * speed_range
        lift = self.rng.random(count) * 2
        velocities = np.column_stack((
            np.cos(angles) * speeds,
            np.sin(angles) * speeds - lift,
        ))
        positions = np.tile(np.asarray(position, dtype=np.float64), (count, 1))

        self.positions = np.concatenate((self.positions, positions))
        self.velocities = np.concatenate((self.velocities, velocities))
        self.life = np.concatenate((self.life, np.full(count, PARTICLE_LIFE, dtype=np.int32)))
        self.colors = np.concatenate((self.colors, np.tile(np.asarray(color, dtype=np.uint8), (count, 1))))

    def update(self) -> None:
        """Drop expired particles, then advance the rest by one tick."""
        alive = self.life > 0
        self.positions = self.positions[alive]
        self.velocities = self.velocities[alive]
        self.life = self.life[alive]
        self.colors = self.colors[alive]

        self.positions += self.velocities
        self.velocities[:, 1] += PARTICLE_GRAVITY
        self.velocities[:, 0] *= PARTICLE_DRAG
        self.life -= 1

    @property
    def alpha(self) -> np.ndarray:
        """Per-particle opacity in [0, 1], fading with remaining life."""
        return np.clip(self.life / PARTICLE_LIFE, 0.0, 1.0)

    def clear(self) -> None:
        self.positions = self.positions[:0]
        self.velocities = self.velocities[:0]
        self.life = self.life[:0]
        self.colors = self.colors[:0]
