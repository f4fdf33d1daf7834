"""
Particle swarm orbiting the glyph.

A fixed-size population: particles are attracted to the glyph center,
pushed tangentially into orbit, damped, and respawned in place when
their life runs out. Frequency scales both forces.
"""

import dataclasses
import logging
import math
from dataclasses import dataclass

import numpy as np
import pygame

from glyphmind.visualizers.colors import to_rgb, with_alpha

logger = logging.getLogger(__name__)

ATTRACTION = 0.001
ORBIT = 0.01
DAMPING = 0.99

SPEED_RANGE = (-1.0, 1.0)
SIZE_RANGE = (1.0, 4.0)
LIFE_RANGE = (50.0, 150.0)


@dataclass
class Particle:
    """A single swarm particle. Life counts down in ticks."""
    x: float
    y: float
    vx: float
    vy: float
    color: str
    size: float
    life: float
    max_life: float


def particle_count(symbolic_density: float) -> int:
    """Swarm size for a vector: floor(symbolic_density / 10) + 10."""
    return int(math.floor(symbolic_density / 10)) + 10


class ParticleSystem:
    """
    Owns and simulates the particle population.

    Randomness comes from an injectable numpy Generator so runs can be
    reproduced with a fixed seed.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        fixed_respawn_bounds: tuple[float, float] | None = None,
    ):
        """
        Args:
            rng: Random generator. Created from ``seed`` if None.
            seed: Seed used when no generator is given.
            fixed_respawn_bounds: If set, respawns use this (width, height)
                instead of the live surface bounds.
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.fixed_respawn_bounds = fixed_respawn_bounds
        self.bounds: tuple[float, float] = (0.0, 0.0)
        self.particles: list[Particle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def _spawn_position(self, bounds: tuple[float, float]) -> tuple[float, float]:
        width, height = bounds
        return float(self.rng.uniform(0, width)), float(self.rng.uniform(0, height))

    def _spawn_velocity(self) -> tuple[float, float]:
        return float(self.rng.uniform(*SPEED_RANGE)), float(self.rng.uniform(*SPEED_RANGE))

    def initialize(self, count: int, bounds: tuple[float, float], color: str):
        """
        Replace the population with ``count`` fresh particles.

        Args:
            count: Number of particles.
            bounds: (width, height) of the spawn area.
            color: Glyph color string shared by every particle.
        """
        self.bounds = (float(bounds[0]), float(bounds[1]))
        self.particles = []
        for _ in range(max(0, int(count))):
            x, y = self._spawn_position(self.bounds)
            vx, vy = self._spawn_velocity()
            max_life = float(self.rng.uniform(*LIFE_RANGE))
            self.particles.append(Particle(
                x=x, y=y, vx=vx, vy=vy,
                color=color,
                size=float(self.rng.uniform(*SIZE_RANGE)),
                life=max_life,
                max_life=max_life,
            ))

    def resize(self, bounds: tuple[float, float]):
        """Use new spawn bounds from the next respawn on. Live particles stay put."""
        self.bounds = (float(bounds[0]), float(bounds[1]))

    def respawn(self, particle: Particle):
        """Reset position, velocity and life of a spent particle in place."""
        bounds = self.fixed_respawn_bounds or self.bounds
        particle.x, particle.y = self._spawn_position(bounds)
        particle.vx, particle.vy = self._spawn_velocity()
        particle.life = particle.max_life

    def tick(self, center_x: float, center_y: float, frequency: float, dt: float = 1.0):
        """
        Advance every particle by ``dt`` ticks.

        Args:
            center_x, center_y: Attraction point (glyph center).
            frequency: Glyph frequency scaling both forces.
            dt: Tick multiplier; 1.0 is one animation frame.
        """
        attraction = ATTRACTION * frequency
        orbit = ORBIT * frequency
        damping = DAMPING ** dt

        for p in self.particles:
            dx = center_x - p.x
            dy = center_y - p.y
            distance = math.hypot(dx, dy)

            if distance > 0:
                p.vx += dx / distance * attraction * dt
                p.vy += dy / distance * attraction * dt

            # Tangential push keeps the swarm circling instead of collapsing
            angle = math.atan2(dy, dx) + math.pi / 2
            p.vx += math.cos(angle) * orbit * dt
            p.vy += math.sin(angle) * orbit * dt

            p.x += p.vx * dt
            p.y += p.vy * dt
            p.vx *= damping
            p.vy *= damping

            p.life -= dt
            if p.life <= 0:
                self.respawn(p)

    def render(self, surface: pygame.Surface, glow: float = 2.5):
        """Draw each particle as a glowing dot fading with its remaining life."""
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        for p in self.particles:
            alpha = max(0.0, min(1.0, p.life / p.max_life))
            color = to_rgb(p.color)
            center = (int(p.x), int(p.y))

            if glow > 1:
                pygame.draw.circle(
                    overlay,
                    with_alpha(color, alpha * 0.25),
                    center,
                    max(1, int(p.size * glow)),
                )
            pygame.draw.circle(overlay, with_alpha(color, alpha), center, max(1, int(p.size)))
        surface.blit(overlay, (0, 0))

    def snapshot(self) -> tuple[Particle, ...]:
        """Copies of the current particles, safe to hand to inspectors."""
        return tuple(dataclasses.replace(p) for p in self.particles)
