"""Match state machine: phases, scores and the per-tick gameplay update."""
from __future__ import annotations

import logging
import math
import random
from collections import deque
from typing import Any, Deque, List, Optional, Tuple, Union

from . import physics
from .ai import OpponentController
from .config import DifficultyProfile, GameConfig
from .entities import Ball, Paddle, Phase, Side
from .events import EventKind, GameEvent
from .geometry import clamp
from .intents import InputIntents
from .snapshot import BallView, MatchSnapshot

logger = logging.getLogger(__name__)

HUMAN_SIDE = Side.LEFT
OPPONENT_SIDE = Side.RIGHT


class Match:
    """Owns both paddles, the ball and the score, and moves them through the phases.

    MENU -> PLAYING on start, PLAYING <-> PAUSED on the pause trigger,
    PLAYING -> GAME_OVER when a side reaches the winning score, and
    GAME_OVER -> MENU on acknowledge. After a point that does not end the match
    the entities hold still for ``reset_delay`` ms before the next serve.
    """

    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng or random.Random()
        self.difficulty = config.default_difficulty
        self.phase = Phase.MENU
        paddle_y = (config.canvas_height - config.paddle_height) / 2
        self.left = Paddle(Side.LEFT, config.left_paddle_x, paddle_y, config.paddle_width, config.paddle_height)
        self.right = Paddle(Side.RIGHT, config.right_paddle_x, paddle_y, config.paddle_width, config.paddle_height)
        self.ball = Ball(
            config.canvas_width / 2,
            config.canvas_height / 2,
            size=config.ball_size,
            speed=config.ball_initial_speed,
        )
        self.left_score = 0
        self.right_score = 0
        self.winner: Optional[Side] = None
        self.is_resetting = False
        self.reset_timer = 0.0
        # flipped before every serve; starting at 1 makes the first serve go left
        self.serve_direction = 1
        self.trail: Deque[Tuple[float, float]] = deque(maxlen=max(0, config.trail_length))
        self.ai = OpponentController(
            self.profile,
            OPPONENT_SIDE,
            canvas_height=config.canvas_height,
            paddle_speed=config.paddle_speed,
            fine_adjust=config.fine_adjust,
            rng=self.rng,
        )
        self._events: List[GameEvent] = []

    # ----------------------------------------------------------------------------------
    # Utility properties
    # ----------------------------------------------------------------------------------
    @property
    def profile(self) -> DifficultyProfile:
        return self.config.difficulties[self.difficulty]

    @property
    def human_paddle(self) -> Paddle:
        return self.paddle_for(HUMAN_SIDE)

    @property
    def opponent_paddle(self) -> Paddle:
        return self.paddle_for(OPPONENT_SIDE)

    def paddle_for(self, side: Side) -> Paddle:
        return self.left if side is Side.LEFT else self.right

    def score_of(self, side: Side) -> int:
        return self.left_score if side is Side.LEFT else self.right_score

    def _emit(self, kind: EventKind, side: Optional[Side] = None, detail: str = "") -> None:
        self._events.append(GameEvent(kind, side=side, x=self.ball.x, y=self.ball.y, detail=detail))

    def _set_phase(self, phase: Phase) -> None:
        if phase is not self.phase:
            logger.info("Phase %s -> %s", self.phase.name, phase.name)
            self.phase = phase

    # ----------------------------------------------------------------------------------
    # Menu actions
    # ----------------------------------------------------------------------------------
    def select_difficulty(self, choice: Union[str, int]) -> bool:
        """Pick a profile by name or by 1-based menu position.

        Anything unknown is ignored and the current profile stays in place.
        """
        if self.phase is not Phase.MENU:
            logger.warning("Difficulty can only change in the menu, ignoring %r", choice)
            return False
        name: Optional[str] = None
        if isinstance(choice, int) and not isinstance(choice, bool):
            if 1 <= choice <= len(self.config.difficulty_order):
                name = self.config.difficulty_order[choice - 1]
        elif isinstance(choice, str):
            name = choice.strip().upper()
        if name not in self.config.difficulties:
            logger.warning("Invalid difficulty %r, keeping %s", choice, self.difficulty)
            return False
        self.difficulty = name
        self.ai.set_profile(self.profile)
        self._emit(EventKind.DIFFICULTY_CHANGED, detail=name)
        return True

    def _center_entities(self) -> None:
        paddle_y = (self.config.canvas_height - self.config.paddle_height) / 2
        self.left.y = paddle_y
        self.right.y = paddle_y
        self.ball.place(self.config.canvas_width / 2, self.config.canvas_height / 2)
        self.ball.vx = self.ball.vy = 0.0
        self.ball.speed = self.config.ball_initial_speed
        self.trail.clear()

    def start_match(self) -> None:
        self.left_score = 0
        self.right_score = 0
        self.winner = None
        self.is_resetting = False
        self.reset_timer = 0.0
        self._center_entities()
        self.ai.reset()
        self._set_phase(Phase.PLAYING)
        logger.info("Match started against %s", self.difficulty)
        self._emit(EventKind.MATCH_STARTED, detail=self.difficulty)
        self.serve()

    def return_to_menu(self) -> None:
        self.left_score = 0
        self.right_score = 0
        self.winner = None
        self.is_resetting = False
        self.reset_timer = 0.0
        self._center_entities()
        self.ai.reset()
        self._set_phase(Phase.MENU)
        self._emit(EventKind.RETURNED_TO_MENU)

    def serve(self) -> None:
        self.serve_direction *= -1
        angle = physics.serve(self.ball, self.config, self.serve_direction, self.rng)
        self.trail.clear()
        toward = Side.RIGHT if self.serve_direction > 0 else Side.LEFT
        logger.debug("Serve toward %s at %.1f degrees", toward.name, angle)
        self._emit(EventKind.SERVE, side=toward, detail=f"{angle:.2f}")

    # ----------------------------------------------------------------------------------
    # Gameplay
    # ----------------------------------------------------------------------------------
    def _apply_human_input(self, intents: InputIntents) -> None:
        paddle = self.human_paddle
        if intents.target_y is not None:
            paddle.y = intents.target_y - paddle.height / 2
        else:
            paddle.y += intents.move * self.config.paddle_speed
        paddle.y = clamp(paddle.y, 0.0, self.config.paddle_max_y)

    def score_point(self, side: Side) -> None:
        if side is Side.LEFT:
            self.left_score += 1
        else:
            self.right_score += 1
        logger.info("Point to %s (%d - %d)", side.name, self.left_score, self.right_score)
        self._emit(EventKind.POINT_SCORED, side=side)
        if self.score_of(side) >= self.config.winning_score:
            self.winner = side
            self.is_resetting = False
            self.reset_timer = 0.0
            self._set_phase(Phase.GAME_OVER)
            self._emit(EventKind.MATCH_WON, side=side)
            return
        self.is_resetting = True
        self.reset_timer = 0.0

    def _update_menu(self, intents: InputIntents) -> None:
        if intents.difficulty is not None:
            self.select_difficulty(intents.difficulty)
        if intents.confirm:
            self.start_match()

    def _update_paused(self, intents: InputIntents) -> None:
        if intents.pause:
            self._set_phase(Phase.PLAYING)
            self._emit(EventKind.RESUMED)

    def _update_game_over(self, intents: InputIntents) -> None:
        if intents.confirm:
            self.return_to_menu()

    def _update_playing(self, delta_ms: float, intents: InputIntents) -> None:
        if intents.pause:
            self._set_phase(Phase.PAUSED)
            self._emit(EventKind.PAUSED)
            return

        if self.is_resetting:
            self.reset_timer += delta_ms
            if self.reset_timer >= self.config.reset_delay:
                self.is_resetting = False
                self.reset_timer = 0.0
                self.serve()
            return

        self._apply_human_input(intents)
        self.ai.update(self.opponent_paddle, self.ball, delta_ms)
        events, scorer = physics.step(self.ball, self.left, self.right, self.config)
        self._events.extend(events)
        self.trail.append((self.ball.x, self.ball.y))
        if scorer is not None:
            self.score_point(scorer)

    def update(self, delta_ms: float, intents: Any = None) -> List[GameEvent]:
        """Advance the match by one tick and return the events it produced."""
        intents = InputIntents.coerce(intents)
        try:
            delta = float(delta_ms)
        except (TypeError, ValueError):
            delta = 0.0
        if not math.isfinite(delta) or delta < 0:
            delta = 0.0

        self._events = []
        if self.phase is Phase.MENU:
            self._update_menu(intents)
        elif self.phase is Phase.PLAYING:
            self._update_playing(delta, intents)
        elif self.phase is Phase.PAUSED:
            self._update_paused(intents)
        elif self.phase is Phase.GAME_OVER:
            self._update_game_over(intents)
        return list(self._events)

    def snapshot(self, events: Tuple[GameEvent, ...] = ()) -> MatchSnapshot:
        ball = self.ball
        return MatchSnapshot(
            phase=self.phase,
            left_paddle=self.left.rect,
            right_paddle=self.right.rect,
            ball=BallView(ball.x, ball.y, ball.size, ball.vx, ball.vy, ball.speed),
            left_score=self.left_score,
            right_score=self.right_score,
            winner=self.winner,
            difficulty=self.difficulty,
            is_resetting=self.is_resetting,
            events=tuple(events),
            trail=tuple(self.trail),
        )
