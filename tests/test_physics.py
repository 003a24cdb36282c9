import math
import random

import pytest

from neon_pong import physics
from neon_pong.entities import Ball, Paddle, Side
from neon_pong.events import EventKind


@pytest.fixture
def paddles(config):
    y = (config.canvas_height - config.paddle_height) / 2
    left = Paddle(Side.LEFT, config.left_paddle_x, y, config.paddle_width, config.paddle_height)
    right = Paddle(Side.RIGHT, config.right_paddle_x, y, config.paddle_width, config.paddle_height)
    return left, right


def ball_before_right_paddle(config, y=300.0, speed=5.0):
    ball = Ball(757.0, y, size=config.ball_size, speed=speed, vx=speed, vy=0.0)
    return ball


def test_centre_hit_returns_ball_horizontally(config, paddles):
    left, right = paddles
    assert right.rect[1] == 250 and right.rect[3] == 100
    ball = ball_before_right_paddle(config)

    events, scorer = physics.step(ball, left, right, config)

    assert scorer is None
    assert [e.kind for e in events] == [EventKind.PADDLE_HIT]
    assert events[0].side is Side.RIGHT
    assert ball.speed == pytest.approx(5.5)
    assert ball.vx == pytest.approx(-5.5)
    assert ball.vy == pytest.approx(0.0)
    assert ball.x == pytest.approx(right.x - ball.size / 2 - 1)


@pytest.mark.parametrize("offset", [-55.0, -30.0, -7.0, 12.0, 40.0, 55.0])
def test_bounce_keeps_speed_and_velocity_consistent(config, paddles, offset):
    left, right = paddles
    ball = ball_before_right_paddle(config, y=300.0 + offset)
    physics.step(ball, left, right, config)
    assert math.hypot(ball.vx, ball.vy) == pytest.approx(ball.speed)
    assert ball.vx < 0
    hit = max(-1.0, min(1.0, offset / 50.0))
    assert math.degrees(math.atan2(ball.vy, -ball.vx)) == pytest.approx(hit * 60.0)


def test_left_paddle_sends_ball_right(config, paddles):
    left, right = paddles
    ball = Ball(left.front + 9.0, 300.0, size=config.ball_size, speed=5.0, vx=-5.0, vy=0.0)
    events, _ = physics.step(ball, left, right, config)
    assert [e.side for e in events] == [Side.LEFT]
    assert ball.vx == pytest.approx(5.5)
    assert ball.x == pytest.approx(left.front + ball.size / 2 + 1)


def test_speed_is_capped(config, paddles):
    left, right = paddles
    ball = ball_before_right_paddle(config, speed=14.8)
    ball.x = 752.0
    physics.step(ball, left, right, config)
    assert ball.speed == config.ball_max_speed


def test_no_second_hit_without_recrossing(config, paddles):
    left, right = paddles
    ball = ball_before_right_paddle(config)
    hits = 0
    for _ in range(5):
        events, _ = physics.step(ball, left, right, config)
        hits += sum(1 for e in events if e.kind is EventKind.PADDLE_HIT)
        # even pushed back toward the paddle it cannot hit from behind the face
        ball.vx = abs(ball.vx)
        ball.x = right.x + 2
    assert hits == 1


def test_ball_already_past_the_face_is_ignored(config, paddles):
    left, right = paddles
    ball = Ball(right.x + 5, 300.0, size=config.ball_size, speed=5.0, vx=5.0)
    assert not physics.approaches(ball, right)
    events, _ = physics.step(ball, left, right, config)
    assert not events


def test_explicit_previous_position_is_kept(config, paddles):
    _, right = paddles
    # overlapping the paddle now, coming from the field side on the last tick
    ball = Ball(right.x - 3, 300.0, size=config.ball_size, speed=5.0, vx=5.0, prev_x=right.x - 10, prev_y=296.0)
    assert (ball.prev_x, ball.prev_y) == (right.x - 10, 296.0)
    assert physics.paddle_contact(ball, right)
    fresh = Ball(right.x - 3, 300.0, size=config.ball_size, speed=5.0, vx=5.0)
    assert (fresh.prev_x, fresh.prev_y) == (right.x - 3, 300.0)
    assert not physics.paddle_contact(fresh, right)


def test_ball_moving_away_is_ignored(config, paddles):
    left, right = paddles
    ball = Ball(right.x - 3, 300.0, size=config.ball_size, speed=5.0, vx=-5.0)
    assert not physics.paddle_contact(ball, right)


@pytest.mark.parametrize("y, vy, expected_y", [(5.0, -3.0, 7.5), (595.0, 3.0, 592.5)])
def test_wall_reflection(config, paddles, y, vy, expected_y):
    left, right = paddles
    ball = Ball(400.0, y, size=config.ball_size, speed=5.0, vx=4.0, vy=vy)
    events, _ = physics.step(ball, left, right, config)
    assert [e.kind for e in events] == [EventKind.WALL_BOUNCE]
    assert ball.y == expected_y
    assert ball.vy == -vy
    assert ball.speed == 5.0


def test_integration_ignores_frame_length(config):
    ball = Ball(400.0, 300.0, size=15, speed=5.0, vx=3.0, vy=-2.0)
    physics.integrate(ball)
    assert (ball.x, ball.y) == (403.0, 298.0)
    assert (ball.prev_x, ball.prev_y) == (400.0, 300.0)


@pytest.mark.parametrize("x, scorer", [(5.0, Side.RIGHT), (795.0, Side.LEFT), (10.0, None), (790.0, None)])
def test_out_of_bounds(config, x, scorer):
    ball = Ball(x, 300.0, size=15, speed=5.0)
    assert physics.out_of_bounds(ball, config.canvas_width) is scorer


def test_hit_position_is_clamped(config, paddles):
    _, right = paddles
    ball = Ball(760.0, right.y - 7.0, size=15, speed=5.0)
    assert physics.hit_position(ball, right) == -1.0


@pytest.mark.parametrize("seed", range(10))
@pytest.mark.parametrize("direction", [-1, 1])
def test_serve(config, seed, direction):
    ball = Ball(12.0, 40.0, size=15, speed=12.5, vx=-3.0, vy=9.0)
    angle = physics.serve(ball, config, direction, random.Random(seed))
    assert -30.0 <= angle <= 30.0
    assert (ball.x, ball.y) == (400.0, 300.0)
    assert ball.speed == config.ball_initial_speed
    assert math.hypot(ball.vx, ball.vy) == pytest.approx(config.ball_initial_speed)
    assert ball.vx * direction > 0
