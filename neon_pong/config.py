"""Configuration surface for the engine.

Everything the simulation reads is carried by :class:`GameConfig`; the stock
values live in the constants block below and are assembled into
:data:`DEFAULT_CONFIG`.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple


# --------------------------------------------------------------------------------------
# Constants
# --------------------------------------------------------------------------------------
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600

PADDLE_WIDTH = 15
PADDLE_HEIGHT = 100
PADDLE_SPEED = 8.0
PADDLE_MARGIN = 20  # distance from the side edge

BALL_SIZE = 15
BALL_INITIAL_SPEED = 5.0
BALL_SPEED_INCREMENT = 0.5  # per paddle hit
BALL_MAX_SPEED = 15.0
MAX_BOUNCE_ANGLE = 60.0
MAX_SERVE_ANGLE = 30.0

WINNING_SCORE = 11
RESET_DELAY = 1000.0  # ms after a point before the next serve
MAX_FRAME_DELTA = 250.0  # ms, longer frames are treated as this long
TRAIL_LENGTH = 8
FINE_ADJUST = 0.1

MAX_PARTICLES = 200
PARTICLE_GRAVITY = 0.1
PARTICLE_DRAG = 0.98
HIT_PARTICLES = 12
HIT_SPREAD = 45.0
SCORE_PARTICLES = 30
SCORE_PARTICLE_SPEED = 3.0
WIN_PARTICLES = 60
PARTICLE_SIZE_RANGE = (2.0, 5.0)
RADIAL_SPEED_JITTER = 2.0  # added on top of the burst speed
DIRECTIONAL_SPEED_RANGE = (3.0, 7.0)
RADIAL_LIFE_RANGE = (0.5, 1.0)  # seconds
DIRECTIONAL_LIFE_RANGE = (0.4, 0.8)

COLOR_HIT = (0, 255, 255, 255)
COLOR_SCORE = (255, 0, 255, 255)
COLOR_WIN = (255, 255, 255, 255)

DIFFICULTY_ORDER = ("EASY", "MEDIUM", "HARD", "IMPOSSIBLE")
DEFAULT_DIFFICULTY = "MEDIUM"


@dataclass(frozen=True)
class DifficultyProfile:
    """How quickly and how accurately the opponent follows the ball."""

    name: str
    reaction_delay: float  # ms
    error_margin: float  # px
    speed_multiplier: float = 1.0
    misdirection_chance: float = 0.0
    misdirection_range: float = 0.0


DIFFICULTIES: Dict[str, DifficultyProfile] = {
    "EASY": DifficultyProfile(
        "EASY",
        reaction_delay=150.0,
        error_margin=50.0,
        speed_multiplier=0.6,
        misdirection_chance=0.15,
        misdirection_range=80.0,
    ),
    "MEDIUM": DifficultyProfile("MEDIUM", reaction_delay=80.0, error_margin=25.0, speed_multiplier=0.8),
    "HARD": DifficultyProfile("HARD", reaction_delay=30.0, error_margin=10.0, speed_multiplier=1.0),
    "IMPOSSIBLE": DifficultyProfile("IMPOSSIBLE", reaction_delay=0.0, error_margin=0.0, speed_multiplier=1.2),
}


@dataclass(frozen=True)
class EffectsConfig:
    """Particle pool size, physical constants and burst sizes."""

    max_particles: int = MAX_PARTICLES
    gravity: float = PARTICLE_GRAVITY
    drag: float = PARTICLE_DRAG
    hit_count: int = HIT_PARTICLES
    hit_spread: float = HIT_SPREAD
    score_count: int = SCORE_PARTICLES
    score_speed: float = SCORE_PARTICLE_SPEED
    win_count: int = WIN_PARTICLES
    hit_color: Tuple[int, int, int, int] = COLOR_HIT
    score_color: Tuple[int, int, int, int] = COLOR_SCORE
    win_color: Tuple[int, int, int, int] = COLOR_WIN
    size_range: Tuple[float, float] = PARTICLE_SIZE_RANGE
    radial_speed_jitter: float = RADIAL_SPEED_JITTER
    directional_speed_range: Tuple[float, float] = DIRECTIONAL_SPEED_RANGE
    radial_life_range: Tuple[float, float] = RADIAL_LIFE_RANGE
    directional_life_range: Tuple[float, float] = DIRECTIONAL_LIFE_RANGE

    def __post_init__(self) -> None:
        if self.max_particles < 0:
            raise ValueError("max_particles must not be negative")
        if not 0.0 <= self.drag <= 1.0:
            raise ValueError(f"particle drag must be within [0, 1], got {self.drag}")
        for name in ("size_range", "directional_speed_range", "radial_life_range", "directional_life_range"):
            low, high = getattr(self, name)
            if low > high:
                raise ValueError(f"{name} is reversed: {low} > {high}")
        for name in ("radial_life_range", "directional_life_range"):
            if getattr(self, name)[0] <= 0:
                raise ValueError(f"{name} must start above zero")
        if self.radial_speed_jitter < 0:
            raise ValueError("radial_speed_jitter must not be negative")


@dataclass(frozen=True)
class GameConfig:
    """All tunables of a match. Built once and shared read-only."""

    canvas_width: float = CANVAS_WIDTH
    canvas_height: float = CANVAS_HEIGHT
    paddle_width: float = PADDLE_WIDTH
    paddle_height: float = PADDLE_HEIGHT
    paddle_speed: float = PADDLE_SPEED
    paddle_margin: float = PADDLE_MARGIN
    ball_size: float = BALL_SIZE
    ball_initial_speed: float = BALL_INITIAL_SPEED
    ball_speed_increment: float = BALL_SPEED_INCREMENT
    ball_max_speed: float = BALL_MAX_SPEED
    max_bounce_angle: float = MAX_BOUNCE_ANGLE
    max_serve_angle: float = MAX_SERVE_ANGLE
    winning_score: int = WINNING_SCORE
    reset_delay: float = RESET_DELAY
    max_frame_delta: float = MAX_FRAME_DELTA
    trail_length: int = TRAIL_LENGTH
    fine_adjust: float = FINE_ADJUST
    difficulty_order: Tuple[str, ...] = DIFFICULTY_ORDER
    difficulties: Mapping[str, DifficultyProfile] = field(default_factory=lambda: dict(DIFFICULTIES), hash=False)
    default_difficulty: str = DEFAULT_DIFFICULTY
    effects: EffectsConfig = field(default_factory=EffectsConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "difficulties", MappingProxyType(dict(self.difficulties)))
        for name in ("canvas_width", "canvas_height", "paddle_width", "paddle_height", "ball_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.paddle_height > self.canvas_height:
            raise ValueError("paddle_height does not fit the canvas")
        if self.winning_score < 1:
            raise ValueError("winning_score must be at least 1")
        if self.ball_initial_speed > self.ball_max_speed:
            raise ValueError("ball_initial_speed exceeds ball_max_speed")
        # Collisions are not swept: one step must never carry the ball across a paddle.
        if self.ball_max_speed >= self.paddle_width + self.ball_size:
            raise ValueError(
                f"ball_max_speed {self.ball_max_speed} allows tunneling through a "
                f"{self.paddle_width}px paddle with a {self.ball_size}px ball"
            )
        if self.default_difficulty not in self.difficulties:
            raise ValueError(f"Unknown default difficulty {self.default_difficulty!r}")
        missing = [name for name in self.difficulty_order if name not in self.difficulties]
        if missing:
            raise ValueError(f"difficulty_order names unknown profiles: {', '.join(missing)}")

    def replace(self, **changes) -> "GameConfig":
        return dataclasses.replace(self, **changes)

    @property
    def left_paddle_x(self) -> float:
        return float(self.paddle_margin)

    @property
    def right_paddle_x(self) -> float:
        return self.canvas_width - self.paddle_margin - self.paddle_width

    @property
    def paddle_max_y(self) -> float:
        return self.canvas_height - self.paddle_height


DEFAULT_CONFIG = GameConfig()
