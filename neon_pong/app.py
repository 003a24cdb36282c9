"""
Neon Pong
=========
How to run: pip install -e .; neon-pong   (or python -m neon_pong)
Controls: W/S or Up/Down to move, hold the left mouse button to drag the paddle.
Menu: 1-4 choose EASY/MEDIUM/HARD/IMPOSSIBLE, Space starts.
In game: Esc pauses and resumes. After the match Space returns to the menu.
Q quits.
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pygame

from .config import DEFAULT_CONFIG, GameConfig
from .entities import Phase, Side
from .events import EventKind
from .intents import InputIntents
from .loop import GameLoop
from .snapshot import MatchSnapshot

logger = logging.getLogger(__name__)

FPS = 60
SAMPLE_RATE = 44100

COLOR_BG = (10, 10, 10)
COLOR_PADDLE = (0, 255, 255)
COLOR_BALL = (255, 0, 255)
COLOR_SCORE = (255, 255, 255)
COLOR_CENTER_LINE = (51, 51, 51)
COLOR_HINT = (150, 150, 170)

# note sequences as (frequency, seconds, wave, volume)
TONES: Dict[str, List[Tuple[float, float, str, float]]] = {
    "paddle": [(500.0, 0.1, "square", 0.5)],
    "wall": [(200.0, 0.1, "square", 0.3)],
    "score": [(523.25, 0.1, "square", 0.4), (659.25, 0.1, "square", 0.4), (783.99, 0.2, "square", 0.4)],
    "lose": [(523.25, 0.1, "sine", 0.3), (392.0, 0.1, "sine", 0.3), (329.63, 0.2, "sine", 0.3)],
    "start": [(261.63, 0.08, "square", 0.35), (329.63, 0.08, "square", 0.35), (392.0, 0.08, "square", 0.35), (523.25, 0.15, "square", 0.35)],
    "win": [(523.25, 0.15, "square", 0.4), (659.25, 0.15, "square", 0.4), (783.99, 0.15, "square", 0.4), (1046.5, 0.3, "square", 0.4)],
    "defeat": [(392.0, 0.2, "sine", 0.3), (329.63, 0.2, "sine", 0.3), (261.63, 0.4, "sine", 0.3)],
    "click": [(800.0, 0.05, "square", 0.2)],
}


# --------------------------------------------------------------------------------------
# Audio
# --------------------------------------------------------------------------------------
def render_tone(frequency: float, duration: float, wave: str = "sine", volume: float = 1.0) -> np.ndarray:
    n_samples = max(1, int(SAMPLE_RATE * duration))
    t = np.linspace(0, duration, n_samples, dtype=np.float32)
    if wave == "square":
        waveform = np.sign(np.sin(2 * np.pi * frequency * t))
    else:
        waveform = np.sin(2 * np.pi * frequency * t)
    # short fade out so consecutive notes do not click
    envelope = np.ones(n_samples, dtype=np.float32)
    decay = min(n_samples, int(0.02 * SAMPLE_RATE))
    if decay > 0:
        envelope[-decay:] = np.linspace(1, 0, decay)
    return (waveform * envelope * volume * 32767).astype(np.int16)


def render_sequence(notes: Sequence[Tuple[float, float, str, float]]) -> np.ndarray:
    mono = np.concatenate([render_tone(*note) for note in notes])
    return np.column_stack((mono, mono))


class SoundBoard:
    """Synthesised blips for match events; silent when no mixer is available."""

    def __init__(self) -> None:
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.enabled = False
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
        except pygame.error as exc:
            logger.warning("Audio disabled: %s", exc)
            return
        for name, notes in TONES.items():
            self.sounds[name] = pygame.sndarray.make_sound(render_sequence(notes))
        self.enabled = True

    def play(self, name: str) -> None:
        if self.enabled and name in self.sounds:
            self.sounds[name].play()

    def react(self, snapshot: MatchSnapshot) -> None:
        for event in snapshot.events:
            name = sound_for(event.kind, event.side)
            if name:
                self.play(name)


def sound_for(kind: EventKind, side: Optional[Side]) -> Optional[str]:
    if kind is EventKind.PADDLE_HIT:
        return "paddle"
    if kind is EventKind.WALL_BOUNCE:
        return "wall"
    if kind is EventKind.POINT_SCORED:
        return "score" if side is Side.LEFT else "lose"
    if kind is EventKind.MATCH_WON:
        return "win" if side is Side.LEFT else "defeat"
    if kind is EventKind.MATCH_STARTED:
        return "start"
    if kind is EventKind.DIFFICULTY_CHANGED:
        return "click"
    return None


# --------------------------------------------------------------------------------------
# Input
# --------------------------------------------------------------------------------------
def build_intents(
    up: bool,
    down: bool,
    keys_pressed: Sequence[int],
    pointer_y: Optional[float],
    difficulty_order: Sequence[str],
) -> InputIntents:
    """Fold one frame of keyboard/mouse state into intents."""
    difficulty = None
    for key in keys_pressed:
        if pygame.K_1 <= key <= pygame.K_9:
            index = key - pygame.K_1
            if index < len(difficulty_order):
                difficulty = difficulty_order[index]
    return InputIntents(
        move=float(down) - float(up),
        target_y=pointer_y,
        start=pygame.K_SPACE in keys_pressed,
        pause=pygame.K_ESCAPE in keys_pressed,
        difficulty=difficulty,
    )


# --------------------------------------------------------------------------------------
# Window
# --------------------------------------------------------------------------------------
class App:
    """pygame window around a :class:`GameLoop`."""

    def __init__(self, config: GameConfig, seed: Optional[int] = None, sound: bool = True) -> None:
        pygame.init()
        pygame.display.set_caption("Neon Pong")
        self.config = config
        self.screen = pygame.display.set_mode((int(config.canvas_width), int(config.canvas_height)))
        self.clock = pygame.time.Clock()
        self.loop = GameLoop(config, rng=random.Random(seed))
        self.sound = SoundBoard() if sound else None
        self.font = pygame.font.Font(None, 72)
        self.small_font = pygame.font.Font(None, 28)
        self.running = True

    def run(self) -> None:
        while self.running:
            self.clock.tick(FPS)
            intents = self.handle_events()
            snapshot = self.loop.advance(float(pygame.time.get_ticks()), intents)
            if self.sound is not None:
                self.sound.react(snapshot)
            self.draw(snapshot)
        pygame.quit()

    def handle_events(self) -> InputIntents:
        keys_pressed: List[int] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    self.running = False
                    continue
                keys_pressed.append(event.key)
        held = pygame.key.get_pressed()
        pointer_y: Optional[float] = None
        if pygame.mouse.get_pressed()[0]:
            pointer_y = float(pygame.mouse.get_pos()[1])
        return build_intents(
            held[pygame.K_w] or held[pygame.K_UP],
            held[pygame.K_s] or held[pygame.K_DOWN],
            keys_pressed,
            pointer_y,
            self.config.difficulty_order,
        )

    # ----------------------------------------------------------------------------------
    def draw(self, snapshot: MatchSnapshot) -> None:
        self.screen.fill(COLOR_BG)
        width, height = self.screen.get_size()
        for y in range(0, height, 30):
            pygame.draw.rect(self.screen, COLOR_CENTER_LINE, pygame.Rect(width // 2 - 2, y, 4, 15))

        self.draw_scores(snapshot)
        for rect in (snapshot.left_paddle, snapshot.right_paddle):
            pygame.draw.rect(self.screen, COLOR_PADDLE, pygame.Rect(*(int(v) for v in rect)))
        if snapshot.phase is not Phase.MENU:
            self.draw_trail(snapshot)
            pygame.draw.rect(self.screen, COLOR_BALL, pygame.Rect(*(int(v) for v in snapshot.ball.rect)))
        self.draw_particles(snapshot)
        self.draw_overlay(snapshot)
        pygame.display.flip()

    def draw_scores(self, snapshot: MatchSnapshot) -> None:
        width = self.screen.get_width()
        for score, cx in ((snapshot.left_score, width // 4), (snapshot.right_score, width * 3 // 4)):
            text = self.font.render(str(score), True, COLOR_SCORE)
            self.screen.blit(text, text.get_rect(midtop=(cx, 20)))

    def draw_trail(self, snapshot: MatchSnapshot) -> None:
        trail = snapshot.trail
        size = snapshot.ball.size
        for i, (x, y) in enumerate(trail[:-1]):
            fade = i / len(trail)
            s = max(1, int(size * (0.5 + fade * 0.5)))
            surf = pygame.Surface((s, s), pygame.SRCALPHA)
            surf.fill((*COLOR_BALL, int(255 * fade * 0.5)))
            self.screen.blit(surf, (int(x - s / 2), int(y - s / 2)))

    def draw_particles(self, snapshot: MatchSnapshot) -> None:
        for particle in snapshot.particles:
            alpha = int(255 * particle.alpha)
            if alpha <= 0:
                continue
            size = max(1, int(particle.size))
            surf = pygame.Surface((size * 2, size * 2), pygame.SRCALPHA)
            r, g, b, _ = particle.color
            pygame.draw.circle(surf, (r, g, b, alpha), (size, size), size)
            self.screen.blit(surf, (int(particle.x - size), int(particle.y - size)))

    def draw_overlay(self, snapshot: MatchSnapshot) -> None:
        lines: List[str] = []
        if snapshot.phase is Phase.MENU:
            lines = [
                "NEON PONG",
                f"Difficulty: {snapshot.difficulty}   (1-{len(self.config.difficulty_order)} to change)",
                "Space to start",
            ]
        elif snapshot.phase is Phase.PAUSED:
            lines = ["PAUSED", "Esc to resume"]
        elif snapshot.phase is Phase.GAME_OVER:
            winner = "You win!" if snapshot.winner is Side.LEFT else "AI wins"
            lines = [winner, "Space for menu"]
        cy = self.screen.get_height() // 2 - 40
        for i, line in enumerate(lines):
            font = self.font if i == 0 else self.small_font
            text = font.render(line, True, COLOR_SCORE if i == 0 else COLOR_HINT)
            self.screen.blit(text, text.get_rect(center=(self.screen.get_width() // 2, cy)))
            cy += 60 if i == 0 else 32


# --------------------------------------------------------------------------------------
# Entry point
# --------------------------------------------------------------------------------------
def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Neon Pong against the computer")
    parser.add_argument("--difficulty", choices=DEFAULT_CONFIG.difficulty_order, default=DEFAULT_CONFIG.default_difficulty)
    parser.add_argument("--winning-score", type=int, default=DEFAULT_CONFIG.winning_score)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--mute", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        config = DEFAULT_CONFIG.replace(default_difficulty=args.difficulty, winning_score=args.winning_score)
    except ValueError as exc:
        sys.exit(f"neon-pong: {exc}")
    App(config, seed=args.seed, sound=not args.mute).run()


if __name__ == "__main__":
    main()
