"""Discrete events reported by a tick, in the order they happened."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .entities import Side


class EventKind(Enum):
    MATCH_STARTED = auto()
    DIFFICULTY_CHANGED = auto()
    PAUSED = auto()
    RESUMED = auto()
    SERVE = auto()
    PADDLE_HIT = auto()
    WALL_BOUNCE = auto()
    POINT_SCORED = auto()
    MATCH_WON = auto()
    RETURNED_TO_MENU = auto()


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    side: Optional[Side] = None
    x: float = 0.0
    y: float = 0.0
    detail: str = ""
