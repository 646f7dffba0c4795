"""
Decorative particle bursts shown when food is eaten.

Particles never feed back into the simulation; they keep animating after
the game ends.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from domain.constants import CELL_SIZE, PARTICLE_COUNT, PARTICLE_FADE_PER_MS, PARTICLE_SPEED


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    color: str
    life: float = 1.0


class ParticleSystem:
    """
    Owns every live particle.

    Velocities are in pixels per frame, fading is in life per millisecond.
    """

    def __init__(
        self,
        count: int = PARTICLE_COUNT,
        fade_per_ms: float = PARTICLE_FADE_PER_MS,
        speed: float = PARTICLE_SPEED,
        rng: Optional[random.Random] = None,
    ):
        self.count = count
        self.fade_per_ms = fade_per_ms
        self.speed = speed
        self.rng = rng or random.Random()
        self.particles: List[Particle] = []

    def spawn(self, cell: Tuple[int, int], color: str, cell_size: int = CELL_SIZE) -> List[Particle]:
        """Burst `count` particles from the pixel centre of a cell."""
        px = cell[0] * cell_size + cell_size / 2
        py = cell[1] * cell_size + cell_size / 2

        burst = [
            Particle(
                x=px,
                y=py,
                vx=(self.rng.random() - 0.5) * self.speed,
                vy=(self.rng.random() - 0.5) * self.speed,
                color=color,
            )
            for _ in range(self.count)
        ]
        self.particles.extend(burst)
        return burst

    def advance(self, delta_ms: float):
        """Move every particle one frame and drop the ones that faded out."""
        alive = []
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            p.life -= max(0.0, delta_ms) * self.fade_per_ms
            if p.life > 0:
                alive.append(p)
        self.particles = alive

    def clear(self):
        self.particles = []

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)
