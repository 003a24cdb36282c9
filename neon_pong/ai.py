"""Computer-controlled paddle."""
from __future__ import annotations

import logging
import random
from typing import Optional

from .config import DifficultyProfile
from .entities import Ball, Paddle, Side
from .geometry import clamp

logger = logging.getLogger(__name__)


class OpponentController:
    """Follows the ball with a reaction delay and a deliberate aiming error.

    The reaction timer only runs while the ball travels toward ``side``. Each
    time it reaches the profile's ``reaction_delay`` the controller samples the
    ball's height as its new target and draws a new error offset. While the
    ball moves away the paddle drifts back to the vertical centre.
    """

    def __init__(
        self,
        profile: DifficultyProfile,
        side: Side,
        canvas_height: float,
        paddle_speed: float,
        fine_adjust: float,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.profile = profile
        self.side = side
        self.canvas_height = canvas_height
        self.paddle_speed = paddle_speed
        self.fine_adjust = fine_adjust
        self.rng = rng or random.Random()
        self.reaction_timer = 0.0
        self.target_y = canvas_height / 2
        self.error_offset = 0.0
        self.resamples = 0

    def set_profile(self, profile: DifficultyProfile) -> None:
        if profile is not self.profile:
            logger.debug("Opponent profile %s -> %s", self.profile.name, profile.name)
        self.profile = profile

    def reset(self) -> None:
        self.reaction_timer = 0.0
        self.target_y = self.canvas_height / 2
        self.error_offset = 0.0

    @property
    def aim_y(self) -> float:
        return self.target_y + self.error_offset

    @property
    def move_speed(self) -> float:
        return self.paddle_speed * self.profile.speed_multiplier

    def _draw_error(self) -> float:
        profile = self.profile
        if profile.error_margin <= 0:
            return 0.0
        if profile.misdirection_chance > 0 and self.rng.random() < profile.misdirection_chance:
            return self.rng.uniform(-profile.misdirection_range, profile.misdirection_range)
        return self.rng.uniform(-profile.error_margin, profile.error_margin)

    def observe(self, ball: Ball, delta_ms: float) -> None:
        """Advance the reaction timer and resample the target when it is due."""
        approaching = ball.vx * self.side.direction > 0
        if not approaching:
            self.reaction_timer = 0.0
            self.target_y = self.canvas_height / 2
            return
        self.reaction_timer += max(0.0, delta_ms)
        if self.reaction_timer >= self.profile.reaction_delay:
            self.reaction_timer = 0.0
            self.target_y = ball.y
            self.error_offset = self._draw_error()
            self.resamples += 1

    def steer(self, paddle: Paddle) -> None:
        diff = self.aim_y - paddle.center_y
        step = self.move_speed
        if abs(diff) > step:
            paddle.y += step if diff > 0 else -step
        else:
            # close enough: ease in instead of stepping past the target
            paddle.y += diff * self.fine_adjust
        paddle.y = clamp(paddle.y, 0.0, self.canvas_height - paddle.height)

    def update(self, paddle: Paddle, ball: Ball, delta_ms: float) -> None:
        self.observe(ball, delta_ms)
        self.steer(paddle)
