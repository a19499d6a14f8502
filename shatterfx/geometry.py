"""Geometry value types and the injectable random source."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Tuple


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1).

    ``random.Random`` and ``numpy.random.Generator`` both qualify.
    """

    def random(self) -> float:
        ...


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle in viewport coordinates."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def is_degenerate(self) -> bool:
        """True for zero, negative or non-finite bounds."""
        if not all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height)):
            return True
        return not (self.width > 0 and self.height > 0)


@dataclass(frozen=True)
class ViewportSize:
    width: float
    height: float

    @property
    def longest_side(self) -> float:
        return max(self.width, self.height)

    @property
    def is_degenerate(self) -> bool:
        if not (math.isfinite(self.width) and math.isfinite(self.height)):
            return True
        return not (self.width > 0 and self.height > 0)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def lerp(start: float, end: float, t: float) -> float:
    """Interpolate so that t=0 and t=1 reproduce the endpoints exactly."""
    return start * (1.0 - t) + end * t


def vector_length(dx: float, dy: float) -> float:
    return math.hypot(dx, dy)
