import random

import pytest

from neon_pong import DEFAULT_CONFIG, GameLoop, InputIntents, Match


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def config():
    return DEFAULT_CONFIG


@pytest.fixture
def match(config, rng):
    return Match(config, rng=rng)


@pytest.fixture
def playing_match(match):
    match.update(0, InputIntents(start=True))
    return match


@pytest.fixture
def loop(config, rng):
    return GameLoop(config, rng=rng)


class FixedRandom:
    """Stand-in for ``random.Random`` with canned draws."""

    def __init__(self, roll, pick_high=True):
        self.roll = roll
        self.pick_high = pick_high

    def random(self):
        return self.roll

    def uniform(self, a, b):
        return b if self.pick_high else a


@pytest.fixture
def fixed_random():
    return FixedRandom
