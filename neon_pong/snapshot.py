"""Read-only views of a match handed to drawing and audio code."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .entities import Phase, Side
from .events import EventKind, GameEvent
from .geometry import Rect
from .particles import ParticleView


@dataclass(frozen=True)
class BallView:
    x: float
    y: float
    size: float
    vx: float
    vy: float
    speed: float

    @property
    def rect(self) -> Rect:
        half = self.size / 2
        return (self.x - half, self.y - half, self.size, self.size)


@dataclass(frozen=True)
class MatchSnapshot:
    phase: Phase
    left_paddle: Rect
    right_paddle: Rect
    ball: BallView
    left_score: int
    right_score: int
    winner: Optional[Side]
    difficulty: str
    is_resetting: bool
    events: Tuple[GameEvent, ...] = ()
    trail: Tuple[Tuple[float, float], ...] = ()
    particles: Tuple[ParticleView, ...] = ()

    def events_of(self, kind: EventKind) -> Tuple[GameEvent, ...]:
        return tuple(event for event in self.events if event.kind is kind)
