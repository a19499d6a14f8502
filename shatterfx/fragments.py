"""
Fragment field generation.

The source rectangle is partitioned into a uniform grid of rectangular
fragments that fully cover it. Each fragment gets a target position along an
outward vector from the rectangle center, scaled so it clears the viewport,
plus its own rotation, start delay and scale jitter.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import (
    DEFAULT_ACCENT_COLOR,
    RGB,
    ShatterConfig,
    parse_color,
    validate_explosion_force,
    validate_grid_size,
)
from .errors import GeometryUnavailable
from .geometry import RandomSource, Rectangle, ViewportSize, vector_length

logger = logging.getLogger(__name__)

# Per-axis perturbation of the direction vector, in pixels (+/- half of this)
DIRECTION_JITTER = 20.0
# Travel distance multiplier is drawn from [MIN, MIN + SPAN)
TRAVEL_JITTER_MIN = 0.8
TRAVEL_JITTER_SPAN = 0.5
# Up to two full turns either way
ROTATION_SPAN = 4 * math.pi
# All fragments are moving by 30% of the progress
MAX_DELAY_FRACTION = 0.3


@dataclass(frozen=True)
class FragmentDescriptor:
    """Immutable description of one fragment's trajectory.

    Positions are top-left corners in viewport coordinates. ``row`` and
    ``column`` identify the grid cell the fragment was cut from.
    """
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    width: float
    height: float
    rotation_range: float
    delay_fraction: float
    final_scale_jitter: float
    color: RGB
    row: int = 0
    column: int = 0


def build_fragments(
    source_rect: Optional[Rectangle],
    viewport: Optional[ViewportSize],
    grid_size: int = 10,
    explosion_force: float = 1.5,
    rng: Optional[RandomSource] = None,
    color: RGB = parse_color(DEFAULT_ACCENT_COLOR),
) -> Tuple[FragmentDescriptor, ...]:
    """Cut ``source_rect`` into ``grid_size`` x ``grid_size`` fragments.

    Args:
        source_rect: On-screen bounds of the element being shattered.
        viewport: Size of the visible area the fragments must clear.
        grid_size: Fragments per side.
        explosion_force: Multiplier on travel distance.
        rng: Source of uniform floats; a fresh ``random.Random`` if omitted.
        color: Fill color copied onto every descriptor.

    Returns:
        Descriptors in row-major order.

    Raises:
        GeometryUnavailable: If the rectangle or viewport is missing or empty.
        InvalidConfiguration: If ``grid_size`` or ``explosion_force`` is out
            of range.
    """
    validate_grid_size(grid_size)
    validate_explosion_force(explosion_force)
    if source_rect is None or source_rect.is_degenerate:
        raise GeometryUnavailable(f"Source rectangle unavailable: {source_rect!r}")
    if viewport is None or viewport.is_degenerate:
        raise GeometryUnavailable(f"Viewport size unavailable: {viewport!r}")
    if rng is None:
        rng = random.Random()

    fragment_width = source_rect.width / grid_size
    fragment_height = source_rect.height / grid_size
    center_x, center_y = source_rect.center
    longest_side = viewport.longest_side

    fragments = []
    for i in range(grid_size):
        for j in range(grid_size):
            start_x = source_rect.x + j * fragment_width
            start_y = source_rect.y + i * fragment_height

            # Vector from the rectangle center to the fragment center, with
            # a little noise so the burst is not perfectly radial
            dir_x = start_x + fragment_width / 2 - center_x
            dir_y = start_y + fragment_height / 2 - center_y
            dir_x += (rng.random() - 0.5) * DIRECTION_JITTER
            dir_y += (rng.random() - 0.5) * DIRECTION_JITTER

            distance = vector_length(dir_x, dir_y)
            scale = longest_side / (distance if distance != 0 else 1.0) * explosion_force
            scale *= TRAVEL_JITTER_MIN + rng.random() * TRAVEL_JITTER_SPAN

            fragments.append(FragmentDescriptor(
                start_x=start_x,
                start_y=start_y,
                end_x=start_x + dir_x * scale,
                end_y=start_y + dir_y * scale,
                width=fragment_width,
                height=fragment_height,
                rotation_range=(rng.random() - 0.5) * ROTATION_SPAN,
                delay_fraction=rng.random() * MAX_DELAY_FRACTION,
                final_scale_jitter=0.5 + rng.random(),
                color=color,
                row=i,
                column=j,
            ))

    logger.debug(
        "Built %d fragments (%dx%d grid, %.1fx%.1f each)",
        len(fragments), grid_size, grid_size, fragment_width, fragment_height,
    )
    return tuple(fragments)


class FragmentFieldBuilder:
    """Builds fragment fields using the tunables of a ``ShatterConfig``."""

    def __init__(self, config: Optional[ShatterConfig] = None):
        self.config = config or ShatterConfig()

    def build(
        self,
        source_rect: Optional[Rectangle],
        viewport: Optional[ViewportSize],
        rng: Optional[RandomSource] = None,
    ) -> Tuple[FragmentDescriptor, ...]:
        return build_fragments(
            source_rect,
            viewport,
            grid_size=self.config.grid_size,
            explosion_force=self.config.explosion_force,
            rng=rng,
            color=self.config.accent_color,
        )
