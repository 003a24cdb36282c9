"""Tick driver: frame deltas in, snapshots out."""
from __future__ import annotations

import dataclasses
import logging
import math
import random
from typing import Any, List, Optional

from .config import GameConfig
from .entities import Phase, Side
from .events import EventKind, GameEvent
from .match import Match
from .particles import ParticleEngine
from .snapshot import MatchSnapshot

logger = logging.getLogger(__name__)


class GameLoop:
    """Runs one match tick per frame and steps the particle effects after it."""

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng or random.Random()
        self.match = Match(config, rng=self.rng)
        self.particles = ParticleEngine.from_effects(config.effects, rng=self.rng)
        self.last_timestamp: Optional[float] = None

    def frame_delta(self, timestamp_ms: float) -> float:
        """Milliseconds since the previous frame; zero on the first frame."""
        if self.last_timestamp is None or not math.isfinite(timestamp_ms):
            delta = 0.0
        else:
            delta = timestamp_ms - self.last_timestamp
        if math.isfinite(timestamp_ms):
            self.last_timestamp = timestamp_ms
        return delta

    def advance(self, timestamp_ms: float, intents: Any = None) -> MatchSnapshot:
        return self.tick(self.frame_delta(timestamp_ms), intents)

    def tick(self, delta_ms: float, intents: Any = None) -> MatchSnapshot:
        try:
            delta = float(delta_ms)
        except (TypeError, ValueError):
            delta = 0.0
        if not math.isfinite(delta) or delta < 0:
            delta = 0.0
        if delta > self.config.max_frame_delta:
            logger.debug("Long frame %.1f ms capped to %.1f ms", delta, self.config.max_frame_delta)
            delta = self.config.max_frame_delta

        events = self.match.update(delta, intents)
        self._spawn_effects(events)
        if self.match.phase is not Phase.PAUSED:
            self.particles.step(delta)
        snapshot = self.match.snapshot(tuple(events))
        return dataclasses.replace(snapshot, particles=tuple(self.particles.snapshot()))

    def _spawn_effects(self, events: List[GameEvent]) -> None:
        effects = self.config.effects
        for event in events:
            if event.kind is EventKind.PADDLE_HIT:
                # spray away from the paddle that was hit
                direction = 0.0 if event.side is Side.LEFT else math.pi
                self.particles.spawn_directional(
                    event.x, event.y, effects.hit_count, effects.hit_color, direction, effects.hit_spread
                )
            elif event.kind is EventKind.POINT_SCORED:
                self.particles.spawn_radial(
                    event.x, event.y, effects.score_count, effects.score_color, effects.score_speed
                )
            elif event.kind is EventKind.MATCH_WON:
                self.particles.spawn_radial(
                    self.config.canvas_width / 2,
                    self.config.canvas_height / 2,
                    effects.win_count,
                    effects.win_color,
                    effects.score_speed * 2,
                )
            elif event.kind in (EventKind.MATCH_STARTED, EventKind.RETURNED_TO_MENU):
                self.particles.clear()
