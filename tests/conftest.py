import random

import pytest

from shatterfx.geometry import Rectangle, ViewportSize


class ConstantRandom:
    """Random source that always returns the same value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


class FakeClock:
    def __init__(self, now=10.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def centered_rng():
    """Zero direction jitter, 1.05x travel, no rotation, 0.15 delay."""
    return ConstantRandom(0.5)


@pytest.fixture
def button_rect():
    return Rectangle(x=100, y=100, width=200, height=80)


@pytest.fixture
def viewport():
    return ViewportSize(width=1000, height=800)


@pytest.fixture
def clock():
    return FakeClock()
