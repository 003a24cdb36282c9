"""Ball motion, wall and paddle collisions, bounce angle and serve."""
from __future__ import annotations

import math
import random
from typing import List, Optional, Tuple

from .config import GameConfig
from .entities import Ball, Paddle, Side
from .events import EventKind, GameEvent
from .geometry import clamp, deg_to_rad, rects_overlap


def integrate(ball: Ball) -> None:
    """Move the ball by one velocity step.

    The step is per tick, not per millisecond: the ball covers the same
    distance whatever the frame length, unlike the reaction timer, particle
    life and serve delay which all run on elapsed time. Match feel is tuned
    around this, so it stays frame-rate dependent.
    """
    ball.prev_x = ball.x
    ball.prev_y = ball.y
    ball.x += ball.vx
    ball.y += ball.vy


def resolve_walls(ball: Ball, canvas_height: float) -> Optional[GameEvent]:
    half = ball.size / 2
    if ball.y - half <= 0:
        ball.y = half
        ball.vy = abs(ball.vy)
        return GameEvent(EventKind.WALL_BOUNCE, x=ball.x, y=0.0, detail="top")
    if ball.y + half >= canvas_height:
        ball.y = canvas_height - half
        ball.vy = -abs(ball.vy)
        return GameEvent(EventKind.WALL_BOUNCE, x=ball.x, y=canvas_height, detail="bottom")
    return None


def approaches(ball: Ball, paddle: Paddle) -> bool:
    """True while the ball travels toward ``paddle`` from the field side of its face.

    Both conditions gate a hit: a ball that is moving away, or that was already
    past the face on the previous tick, cannot register again on this paddle
    until it comes back around.
    """
    half = ball.size / 2
    if paddle.side is Side.LEFT:
        return ball.vx < 0 and ball.prev_x - half >= paddle.front
    return ball.vx > 0 and ball.prev_x + half <= paddle.front


def paddle_contact(ball: Ball, paddle: Paddle) -> bool:
    return approaches(ball, paddle) and rects_overlap(ball.rect, paddle.rect)


def hit_position(ball: Ball, paddle: Paddle) -> float:
    """Where the ball met the paddle: -1 top edge, 0 centre, 1 bottom edge."""
    return clamp((ball.y - paddle.center_y) / (paddle.height / 2), -1.0, 1.0)


def bounce_off_paddle(ball: Ball, paddle: Paddle, config: GameConfig) -> GameEvent:
    hit = hit_position(ball, paddle)
    angle = deg_to_rad(hit * config.max_bounce_angle)
    ball.speed = min(ball.speed + config.ball_speed_increment, config.ball_max_speed)
    direction = -paddle.side.direction
    ball.vx = math.cos(angle) * ball.speed * direction
    ball.vy = math.sin(angle) * ball.speed
    # park the ball just outside the face so the next tick starts clear of it
    if paddle.side is Side.LEFT:
        ball.x = paddle.front + ball.size / 2 + 1
    else:
        ball.x = paddle.front - ball.size / 2 - 1
    return GameEvent(EventKind.PADDLE_HIT, side=paddle.side, x=ball.x, y=ball.y, detail=f"{hit:.3f}")


def out_of_bounds(ball: Ball, canvas_width: float) -> Optional[Side]:
    """Return the side that scores if the ball left the field."""
    half = ball.size / 2
    if ball.x - half <= 0:
        return Side.RIGHT
    if ball.x + half >= canvas_width:
        return Side.LEFT
    return None


def step(
    ball: Ball, left: Paddle, right: Paddle, config: GameConfig
) -> Tuple[List[GameEvent], Optional[Side]]:
    """Run one physics tick: integrate, bounce, then check for a point."""
    events: List[GameEvent] = []
    integrate(ball)
    wall = resolve_walls(ball, config.canvas_height)
    if wall is not None:
        events.append(wall)
    for paddle in (left, right):
        if paddle_contact(ball, paddle):
            events.append(bounce_off_paddle(ball, paddle, config))
    return events, out_of_bounds(ball, config.canvas_width)


def serve(ball: Ball, config: GameConfig, direction: int, rng: random.Random) -> float:
    """Relaunch from the centre at the initial speed. Returns the angle in degrees."""
    ball.place(config.canvas_width / 2, config.canvas_height / 2)
    ball.speed = config.ball_initial_speed
    angle = rng.uniform(-config.max_serve_angle, config.max_serve_angle)
    radians = deg_to_rad(angle)
    ball.vx = math.cos(radians) * ball.speed * direction
    ball.vy = math.sin(radians) * ball.speed
    return angle
