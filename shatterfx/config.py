"""
Tunables for the shatter effect.

The defaults reproduce the stock effect: a 10x10 grid (100 fragments)
flying out over 1.5 seconds with a 1.5x explosion force.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Tuple, Union

from PIL import ImageColor

from .errors import InvalidConfiguration

RGB = Tuple[int, int, int]
ColorSpec = Union[str, Tuple[int, ...]]

DEFAULT_GRID_SIZE = 10
DEFAULT_EXPLOSION_FORCE = 1.5
DEFAULT_ANIMATION_DURATION_MS = 1500
DEFAULT_ACCENT_COLOR = "#6200EE"
DEFAULT_BACKGROUND_COLOR = "#121212"


def parse_color(value: ColorSpec) -> RGB:
    """Normalise a Pillow color string or RGB(A) tuple to an RGB tuple."""
    if isinstance(value, str):
        try:
            rgb = ImageColor.getrgb(value)
        except ValueError as e:
            raise InvalidConfiguration(f"Unrecognised color {value!r}") from e
    else:
        rgb = tuple(value)
        if len(rgb) not in (3, 4) or not all(isinstance(c, int) and 0 <= c <= 255 for c in rgb):
            raise InvalidConfiguration(f"Color must be 3 or 4 ints in 0..255, got {value!r}")
    return (rgb[0], rgb[1], rgb[2])


def validate_grid_size(grid_size: Any) -> int:
    if isinstance(grid_size, bool) or not isinstance(grid_size, int):
        raise InvalidConfiguration(f"grid_size must be an int, got {grid_size!r}")
    if grid_size < 1:
        raise InvalidConfiguration(f"grid_size must be >= 1, got {grid_size}")
    return grid_size


def validate_explosion_force(explosion_force: Any) -> float:
    # inf would turn the zero-distance cell into 0 * inf = NaN
    if not (math.isfinite(explosion_force) and explosion_force > 0):
        raise InvalidConfiguration(f"explosion_force must be finite and > 0, got {explosion_force}")
    return explosion_force


@dataclass(frozen=True)
class ShatterConfig:
    """Static configuration for one shatter effect.

    Args:
        grid_size: Fragments per side; the field holds ``grid_size ** 2``.
        explosion_force: Multiplier on how far fragments travel relative to
            the viewport's longest side.
        animation_duration_ms: Time for progress to go from 0 to 1.
        accent_color: Fill color of the fragments.
        background_color: Canvas color used by rendering surfaces.

    Raises:
        InvalidConfiguration: On construction, if any value is out of range.
    """
    grid_size: int = DEFAULT_GRID_SIZE
    explosion_force: float = DEFAULT_EXPLOSION_FORCE
    animation_duration_ms: int = DEFAULT_ANIMATION_DURATION_MS
    accent_color: ColorSpec = field(default=DEFAULT_ACCENT_COLOR)
    background_color: ColorSpec = field(default=DEFAULT_BACKGROUND_COLOR)

    def __post_init__(self):
        validate_grid_size(self.grid_size)
        validate_explosion_force(self.explosion_force)
        if not self.animation_duration_ms > 0:
            raise InvalidConfiguration(
                f"animation_duration_ms must be > 0, got {self.animation_duration_ms}"
            )
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "accent_color", parse_color(self.accent_color))
        object.__setattr__(self, "background_color", parse_color(self.background_color))

    @property
    def duration_seconds(self) -> float:
        return self.animation_duration_ms / 1000.0

    def with_overrides(self, **overrides: Any) -> "ShatterConfig":
        """Return a copy with the given fields replaced, skipping ``None`` values."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
