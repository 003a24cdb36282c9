"""Pong simulation engine: match state machine, physics, opponent AI and particles."""
from .config import DEFAULT_CONFIG, DifficultyProfile, EffectsConfig, GameConfig
from .entities import Ball, Paddle, Phase, Side
from .events import EventKind, GameEvent
from .intents import NO_INPUT, InputIntents
from .loop import GameLoop
from .match import Match
from .particles import ParticleEngine
from .snapshot import BallView, MatchSnapshot

__all__ = [
    "DEFAULT_CONFIG",
    "Ball",
    "BallView",
    "DifficultyProfile",
    "EffectsConfig",
    "EventKind",
    "GameConfig",
    "GameEvent",
    "GameLoop",
    "InputIntents",
    "Match",
    "MatchSnapshot",
    "NO_INPUT",
    "Paddle",
    "ParticleEngine",
    "Phase",
    "Side",
]
