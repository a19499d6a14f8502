"""
Command line front end.

  shatter-gif button.gif --grid 10 --force 1.5 --duration 1500 --fps 24
  shatter-gif logo.gif --image logo.png --width 1024 --height 768 --seed 7
"""

import argparse
import logging
import random
import sys

from .config import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_ANIMATION_DURATION_MS,
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_EXPLOSION_FORCE,
    DEFAULT_GRID_SIZE,
    ShatterConfig,
)
from .errors import InvalidConfiguration
from .geometry import ViewportSize
from .render import DEFAULT_LABEL, render_shatter_gif


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shatter-gif",
        description="Render a button (or image) shattering into fragments as a GIF",
    )
    parser.add_argument('output', help='Output GIF path')
    parser.add_argument('--image', help='Image to shatter instead of the default button')
    parser.add_argument('--label', default=DEFAULT_LABEL, help=f'Button text (default: {DEFAULT_LABEL})')
    parser.add_argument('--width', type=int, default=800, help='Viewport width (default: 800)')
    parser.add_argument('--height', type=int, default=600, help='Viewport height (default: 600)')
    parser.add_argument('--grid', type=int, default=DEFAULT_GRID_SIZE,
                        help=f'Fragments per side (default: {DEFAULT_GRID_SIZE})')
    parser.add_argument('--force', type=float, default=DEFAULT_EXPLOSION_FORCE,
                        help=f'Explosion force multiplier (default: {DEFAULT_EXPLOSION_FORCE})')
    parser.add_argument('--duration', type=int, default=DEFAULT_ANIMATION_DURATION_MS,
                        help=f'Shatter duration in ms (default: {DEFAULT_ANIMATION_DURATION_MS})')
    parser.add_argument('--hold', type=int, default=300, help='Intact lead-in in ms (default: 300)')
    parser.add_argument('--fps', type=int, default=24, help='Frames per second (default: 24)')
    parser.add_argument('--color', default=DEFAULT_ACCENT_COLOR,
                        help=f'Accent color (default: {DEFAULT_ACCENT_COLOR})')
    parser.add_argument('--background', default=DEFAULT_BACKGROUND_COLOR,
                        help=f'Background color (default: {DEFAULT_BACKGROUND_COLOR})')
    parser.add_argument('--seed', type=int, help='Seed for a reproducible fragment field')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s - %(message)s",
    )

    try:
        config = ShatterConfig(
            grid_size=args.grid,
            explosion_force=args.force,
            animation_duration_ms=args.duration,
            accent_color=args.color,
            background_color=args.background,
        )
        if args.fps < 1:
            raise InvalidConfiguration(f"fps must be >= 1, got {args.fps}")
    except InvalidConfiguration as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    rng = random.Random(args.seed) if args.seed is not None else None
    print(f"Shattering {config.grid_size}x{config.grid_size} fragments over {config.animation_duration_ms} ms")

    try:
        frames = render_shatter_gif(
            args.output,
            config,
            ViewportSize(args.width, args.height),
            image_path=args.image,
            label=args.label,
            fps=args.fps,
            hold_ms=args.hold,
            rng=rng,
            on_complete=lambda: print("Shatter complete"),
        )
    except (OSError, ValueError) as e:
        logging.getLogger(__name__).exception("Rendering failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Saved {frames} frames to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
