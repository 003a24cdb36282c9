from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .geometry import Rect, centered_rect


# --------------------------------------------------------------------------------------
# Helper Enums
# --------------------------------------------------------------------------------------
class Phase(Enum):
    """High level match phases."""

    MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


class Side(Enum):
    LEFT = -1
    RIGHT = 1

    @property
    def direction(self) -> int:
        """Sign of ``vx`` for a ball travelling toward this side."""
        return self.value


# --------------------------------------------------------------------------------------
# Entities
# --------------------------------------------------------------------------------------
@dataclass
class Paddle:
    side: Side
    x: float
    y: float
    width: float
    height: float

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def front(self) -> float:
        """x of the face that looks into the field."""
        return self.x + self.width if self.side is Side.LEFT else self.x


@dataclass
class Ball:
    """Ball state; ``x`` and ``y`` are the centre of its square box."""

    x: float
    y: float
    size: float
    speed: float
    vx: float = 0.0
    vy: float = 0.0
    prev_x: Optional[float] = None
    prev_y: Optional[float] = None

    def __post_init__(self) -> None:
        if self.prev_x is None:
            self.prev_x = self.x
        if self.prev_y is None:
            self.prev_y = self.y

    @property
    def rect(self) -> Rect:
        return centered_rect(self.x, self.y, self.size)

    @property
    def prev_rect(self) -> Rect:
        return centered_rect(self.prev_x, self.prev_y, self.size)

    def place(self, x: float, y: float) -> None:
        self.x = self.prev_x = x
        self.y = self.prev_y = y
