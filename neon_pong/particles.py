"""Pooled particle bursts used for hit and score feedback."""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pygame

from .config import EffectsConfig

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int, int]
Range = Tuple[float, float]


@dataclass
class Particle:
    pos: pygame.Vector2 = field(default_factory=pygame.Vector2)
    vel: pygame.Vector2 = field(default_factory=pygame.Vector2)
    life: float = 0.0
    max_life: float = 0.0
    size: float = 0.0
    color: Color = (255, 255, 255, 255)
    active: bool = False


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    size: float
    color: Color
    alpha: float


class ParticleEngine:
    """Fixed-capacity particle arena.

    Slots are allocated once. ``_free`` holds the indices of idle slots and
    ``_live`` the indices in spawn order, so spawning never scans the pool and
    a saturated pool simply drops the rest of a burst.
    """

    def __init__(
        self,
        capacity: int,
        gravity: float,
        drag: float,
        size_range: Range,
        radial_speed_jitter: float,
        directional_speed_range: Range,
        radial_life_range: Range,
        directional_life_range: Range,
        rng: Optional[random.Random] = None,
    ) -> None:
        if capacity < 0:
            raise ValueError("Particle capacity must not be negative")
        self.capacity = capacity
        self.gravity = gravity
        self.drag = drag
        self.size_range = size_range
        self.radial_speed_jitter = radial_speed_jitter
        self.directional_speed_range = directional_speed_range
        self.radial_life_range = radial_life_range
        self.directional_life_range = directional_life_range
        self.rng = rng or random.Random()
        self._slots: List[Particle] = [Particle() for _ in range(capacity)]
        self._free: List[int] = list(range(capacity - 1, -1, -1))
        self._live: List[int] = []

    @classmethod
    def from_effects(cls, effects: EffectsConfig, rng: Optional[random.Random] = None) -> "ParticleEngine":
        return cls(
            effects.max_particles,
            effects.gravity,
            effects.drag,
            size_range=effects.size_range,
            radial_speed_jitter=effects.radial_speed_jitter,
            directional_speed_range=effects.directional_speed_range,
            radial_life_range=effects.radial_life_range,
            directional_life_range=effects.directional_life_range,
            rng=rng,
        )

    # ----------------------------------------------------------------------------------
    @property
    def active_count(self) -> int:
        return len(self._live)

    @property
    def free_count(self) -> int:
        return len(self._free)

    def active_particles(self) -> List[Particle]:
        return [self._slots[i] for i in self._live]

    def _acquire(self) -> Optional[Particle]:
        if not self._free:
            return None
        index = self._free.pop()
        self._live.append(index)
        particle = self._slots[index]
        particle.active = True
        return particle

    def _emit(self, x: float, y: float, angle: float, speed: float, max_life: float, color: Color) -> bool:
        particle = self._acquire()
        if particle is None:
            return False
        particle.pos.update(x, y)
        particle.vel.update(math.cos(angle) * speed, math.sin(angle) * speed)
        particle.life = 1.0
        particle.max_life = max_life
        particle.size = self.rng.uniform(*self.size_range)
        particle.color = color
        return True

    # ----------------------------------------------------------------------------------
    def spawn_radial(self, x: float, y: float, count: int, color: Color, speed: float) -> int:
        """Burst evenly around a full circle. Returns how many particles were placed."""
        spawned = 0
        for i in range(max(0, count)):
            angle = math.tau * i / count
            velocity = speed + self.rng.random() * self.radial_speed_jitter
            max_life = self.rng.uniform(*self.radial_life_range)
            if not self._emit(x, y, angle, velocity, max_life, color):
                logger.debug("Particle pool saturated, dropped %d of %d", count - spawned, count)
                break
            spawned += 1
        return spawned

    def spawn_directional(
        self,
        x: float,
        y: float,
        count: int,
        color: Color,
        direction: float,
        spread_degrees: float,
    ) -> int:
        """Burst within ``spread_degrees`` around ``direction`` (radians)."""
        spread = math.radians(spread_degrees)
        spawned = 0
        for _ in range(max(0, count)):
            angle = direction + (self.rng.random() - 0.5) * spread
            velocity = self.rng.uniform(*self.directional_speed_range)
            max_life = self.rng.uniform(*self.directional_life_range)
            if not self._emit(x, y, angle, velocity, max_life, color):
                logger.debug("Particle pool saturated, dropped %d of %d", count - spawned, count)
                break
            spawned += 1
        return spawned

    def step(self, delta_ms: float) -> None:
        dt = max(0.0, delta_ms) / 1000.0
        survivors: List[int] = []
        for index in self._live:
            particle = self._slots[index]
            particle.pos += particle.vel
            particle.vel.y += self.gravity
            particle.vel *= self.drag
            particle.life -= dt / particle.max_life
            if particle.life <= 0:
                particle.active = False
                self._free.append(index)
            else:
                survivors.append(index)
        self._live = survivors

    def snapshot(self) -> List[ParticleView]:
        views = []
        for index in self._live:
            particle = self._slots[index]
            views.append(
                ParticleView(
                    x=particle.pos.x,
                    y=particle.pos.y,
                    size=particle.size,
                    color=particle.color,
                    alpha=max(0.0, particle.life),
                )
            )
        return views

    def clear(self) -> None:
        for index in self._live:
            self._slots[index].active = False
            self._free.append(index)
        self._live = []
