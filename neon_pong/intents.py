"""Per-tick input intents and their sanitising."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from .geometry import clamp


@dataclass(frozen=True)
class InputIntents:
    """What the human side asked for during one frame.

    ``move`` is a vertical intent in ``[-1, 1]`` (negative is up). ``target_y``
    is an absolute paddle centre from pointer or touch control; when set it wins
    over ``move`` for that tick. The remaining fields are one-shot triggers.
    """

    move: float = 0.0
    target_y: Optional[float] = None
    start: bool = False
    pause: bool = False
    acknowledge: bool = False
    difficulty: Optional[str] = None

    @property
    def confirm(self) -> bool:
        return self.start or self.acknowledge

    @classmethod
    def coerce(cls, raw: Any) -> "InputIntents":
        """Turn whatever the input layer produced into usable intents.

        Anything unreadable becomes "no movement, no trigger" instead of an error.
        """
        if isinstance(raw, cls):
            return cls(
                move=_finite(raw.move, 0.0, -1.0, 1.0),
                target_y=_finite_or_none(raw.target_y),
                start=bool(raw.start),
                pause=bool(raw.pause),
                acknowledge=bool(raw.acknowledge),
                difficulty=raw.difficulty if isinstance(raw.difficulty, str) else None,
            )
        if isinstance(raw, dict):
            difficulty = raw.get("difficulty")
            return cls(
                move=_finite(raw.get("move", 0.0), 0.0, -1.0, 1.0),
                target_y=_finite_or_none(raw.get("target_y")),
                start=bool(raw.get("start", False)),
                pause=bool(raw.get("pause", False)),
                acknowledge=bool(raw.get("acknowledge", False)),
                difficulty=difficulty if isinstance(difficulty, str) else None,
            )
        return NO_INPUT


def _finite(value: Any, fallback: float, low: float, high: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return clamp(number, low, high)


def _finite_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


NO_INPUT = InputIntents()
