"""Grid shatter effect: fragment generation and per-frame interpolation."""

from .animator import (
    EASE_OUT_EXPO,
    CubicBezier,
    FragmentAnimator,
    RenderTransform,
    evaluate,
    evaluate_field,
    pack_fragments,
)
from .config import ShatterConfig
from .controller import ShatterController
from .errors import GeometryUnavailable, InvalidConfiguration, ShatterError
from .fragments import FragmentDescriptor, FragmentFieldBuilder, build_fragments
from .geometry import RandomSource, Rectangle, ViewportSize

__version__ = "0.1.0"

__all__ = [
    "EASE_OUT_EXPO",
    "CubicBezier",
    "FragmentAnimator",
    "FragmentDescriptor",
    "FragmentFieldBuilder",
    "GeometryUnavailable",
    "InvalidConfiguration",
    "RandomSource",
    "Rectangle",
    "RenderTransform",
    "ShatterConfig",
    "ShatterController",
    "ShatterError",
    "ViewportSize",
    "build_fragments",
    "evaluate",
    "evaluate_field",
    "pack_fragments",
]
