"""
Per-frame fragment transforms.

Nothing here holds state: every transform is a pure function of a fragment
descriptor and the global progress value, so a frame can be evaluated in any
order and re-evaluated at will.
"""

from __future__ import annotations

import math
from typing import List, NamedTuple, Sequence

import numpy as np

from .fragments import FragmentDescriptor
from .geometry import clamp, lerp

# Fragments shrink to half size by the end of their travel
SHRINK_AMOUNT = 0.5
# Opacity hits zero at effective progress 1 / 1.2 (~0.833)
FADE_RATE = 1.2

_BISECTION_STEPS = 32


class CubicBezier:
    """Unit cubic Bezier easing curve through (0, 0), (a, b), (c, d), (1, 1).

    ``transform`` inverts x(t) by a fixed number of bisection steps, which
    keeps the result monotonic in the input.
    """

    def __init__(self, a: float, b: float, c: float, d: float):
        self.a = a
        self.b = b
        self.c = c
        self.d = d

    @staticmethod
    def _cubic(p1, p2, m):
        # Works on floats and numpy arrays alike
        return 3 * p1 * (1 - m) * (1 - m) * m + 3 * p2 * (1 - m) * m * m + m * m * m

    def transform(self, t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        low = 0.0
        step = 0.5
        for _ in range(_BISECTION_STEPS):
            mid = low + step
            if self._cubic(self.a, self.c, mid) < t:
                low = mid
            step *= 0.5
        return self._cubic(self.b, self.d, low + step)

    def transform_array(self, t: np.ndarray) -> np.ndarray:
        t = np.asarray(t, dtype=np.float64)
        low = np.zeros_like(t)
        step = 0.5
        for _ in range(_BISECTION_STEPS):
            mid = low + step
            low = np.where(self._cubic(self.a, self.c, mid) < t, mid, low)
            step *= 0.5
        out = self._cubic(self.b, self.d, low + step)
        out = np.where(t <= 0.0, 0.0, out)
        return np.where(t >= 1.0, 1.0, out)

    def __repr__(self):
        return f"CubicBezier({self.a}, {self.b}, {self.c}, {self.d})"


# Fast start, long deceleration into the target
EASE_OUT_EXPO = CubicBezier(0.16, 1.0, 0.3, 1.0)


class RenderTransform(NamedTuple):
    """Where and how to draw one fragment. ``x``/``y`` are its top-left."""
    x: float
    y: float
    rotation: float
    scale: float
    opacity: float


class FragmentArrays(NamedTuple):
    start_x: np.ndarray
    start_y: np.ndarray
    end_x: np.ndarray
    end_y: np.ndarray
    rotation_range: np.ndarray
    delay_fraction: np.ndarray


class FieldTransforms(NamedTuple):
    x: np.ndarray
    y: np.ndarray
    rotation: np.ndarray
    scale: np.ndarray
    opacity: np.ndarray


def clamp_progress(progress: float) -> float:
    """Clamp to [0, 1]; NaN reads as the rest state."""
    if math.isnan(progress):
        return 0.0
    return clamp(progress)


def effective_progress(delay_fraction: float, progress: float) -> float:
    """Remap global progress onto a fragment that waits ``delay_fraction`` before moving."""
    progress = clamp_progress(progress)
    return clamp((progress - delay_fraction) / (1.0 - delay_fraction))


def evaluate(
    descriptor: FragmentDescriptor,
    progress: float,
    curve: CubicBezier = EASE_OUT_EXPO,
) -> RenderTransform:
    """Transform of ``descriptor`` at global ``progress`` (clamped to [0, 1]).

    Position follows ``curve``; rotation, scale and opacity follow the raw
    effective progress so spin continues linearly through the slow tail.
    """
    effective = effective_progress(descriptor.delay_fraction, progress)
    curved = curve.transform(effective)
    return RenderTransform(
        x=lerp(descriptor.start_x, descriptor.end_x, curved),
        y=lerp(descriptor.start_y, descriptor.end_y, curved),
        rotation=descriptor.rotation_range * effective,
        scale=1.0 - SHRINK_AMOUNT * effective,
        opacity=clamp(1.0 - effective * FADE_RATE),
    )


def pack_fragments(descriptors: Sequence[FragmentDescriptor]) -> FragmentArrays:
    """Columnar copy of a fragment field for ``evaluate_field``. Build once per trigger."""
    def column(name):
        return np.array([getattr(d, name) for d in descriptors], dtype=np.float64)

    return FragmentArrays(*(column(name) for name in FragmentArrays._fields))


def evaluate_field(
    packed: FragmentArrays,
    progress: float,
    curve: CubicBezier = EASE_OUT_EXPO,
) -> FieldTransforms:
    """Vectorised ``evaluate`` over every fragment of a packed field."""
    progress = clamp_progress(progress)
    effective = np.clip((progress - packed.delay_fraction) / (1.0 - packed.delay_fraction), 0.0, 1.0)
    curved = curve.transform_array(effective)
    return FieldTransforms(
        x=packed.start_x * (1.0 - curved) + packed.end_x * curved,
        y=packed.start_y * (1.0 - curved) + packed.end_y * curved,
        rotation=packed.rotation_range * effective,
        scale=1.0 - SHRINK_AMOUNT * effective,
        opacity=np.clip(1.0 - effective * FADE_RATE, 0.0, 1.0),
    )


class FragmentAnimator:
    """Evaluates fragments with a configurable easing curve."""

    def __init__(self, curve: CubicBezier = EASE_OUT_EXPO):
        self.curve = curve

    def evaluate(self, descriptor: FragmentDescriptor, progress: float) -> RenderTransform:
        return evaluate(descriptor, progress, self.curve)

    def evaluate_all(self, descriptors: Sequence[FragmentDescriptor], progress: float) -> List[RenderTransform]:
        return [evaluate(d, progress, self.curve) for d in descriptors]

    def evaluate_field(self, packed: FragmentArrays, progress: float) -> FieldTransforms:
        return evaluate_field(packed, progress, self.curve)
