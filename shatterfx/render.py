"""
Render a shatter effect to an animated GIF.

High level:
- The trigger element (a rounded button, or any input image) is drawn
  centered on a background-colored canvas.
- The element is held intact for a short lead-in, then a ShatterController
  is triggered with the element's bounds and stepped frame by frame.
- Every visible fragment is scaled, rotated about its center, faded and
  composited onto the frame.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .config import RGB, ShatterConfig
from .controller import ShatterController
from .fragments import FragmentDescriptor
from .geometry import RandomSource, Rectangle, ViewportSize

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "GET STARTED"
BUTTON_PADDING = (48, 24)
BUTTON_RADIUS = 12
FRAGMENT_RADIUS = 1
# Fragments further than this outside the canvas are not drawn
OFFSCREEN_MARGIN = 50


def draw_button(label: str, color: RGB, text_color: RGB = (255, 255, 255)) -> Image.Image:
    """Draw a rounded, padded button as a transparent RGBA image."""
    font = ImageFont.load_default()
    probe = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
    left, top, right, bottom = probe.textbbox((0, 0), label, font=font)
    text_w, text_h = right - left, bottom - top

    pad_x, pad_y = BUTTON_PADDING
    button = Image.new("RGBA", (text_w + 2 * pad_x, text_h + 2 * pad_y), (0, 0, 0, 0))
    draw = ImageDraw.Draw(button)
    draw.rounded_rectangle(
        (0, 0, button.width - 1, button.height - 1), radius=BUTTON_RADIUS, fill=color
    )
    draw.text((pad_x - left, pad_y - top), label, font=font, fill=text_color)
    return button


def element_bounds(element: Image.Image, viewport: ViewportSize) -> Rectangle:
    """Bounds of ``element`` when centered in ``viewport``."""
    return Rectangle(
        x=float((int(viewport.width) - element.width) // 2),
        y=float((int(viewport.height) - element.height) // 2),
        width=float(element.width),
        height=float(element.height),
    )


def _fragment_tile(
    fragment: FragmentDescriptor,
    element: Optional[Image.Image],
) -> Image.Image:
    """Image for one fragment: a crop of ``element``, or a flat rounded tile."""
    width = max(1, int(round(fragment.width)))
    height = max(1, int(round(fragment.height)))
    if element is not None:
        left = int(round(fragment.column * fragment.width))
        top = int(round(fragment.row * fragment.height))
        return element.crop((left, top, left + width, top + height))

    tile = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    ImageDraw.Draw(tile).rounded_rectangle(
        (0, 0, width - 1, height - 1), radius=FRAGMENT_RADIUS, fill=fragment.color
    )
    return tile


def _place_fragment(
    tile: Image.Image,
    fragment: FragmentDescriptor,
    x: float,
    y: float,
    rotation: float,
    scale: float,
    opacity: float,
) -> Tuple[Image.Image, Tuple[int, int]]:
    """Return the transformed tile and its paste position (top-left)."""
    scaled_w = max(1, int(round(tile.width * scale)))
    scaled_h = max(1, int(round(tile.height * scale)))
    image = tile.resize((scaled_w, scaled_h), resample=Image.BILINEAR)

    # Screen y points down, so a positive angle turns clockwise
    image = image.rotate(
        -math.degrees(rotation),
        expand=True,
        fillcolor=(0, 0, 0, 0),
        resample=Image.BILINEAR,
    )

    if opacity < 1.0:
        alpha = image.getchannel("A").point(lambda a: int(a * opacity))
        image.putalpha(alpha)

    # Scale and rotation pivot on the fragment's center
    center_x = x + fragment.width / 2
    center_y = y + fragment.height / 2
    return image, (int(center_x - image.width / 2), int(center_y - image.height / 2))


def render_shatter_frames(
    config: Optional[ShatterConfig] = None,
    viewport: ViewportSize = ViewportSize(800, 600),
    element: Optional[Image.Image] = None,
    label: str = DEFAULT_LABEL,
    fps: int = 24,
    hold_ms: int = 300,
    rng: Optional[RandomSource] = None,
    on_complete: Optional[Callable[[], None]] = None,
) -> List[Image.Image]:
    """Render every frame of the effect as RGB images.

    Args:
        config: Effect tunables; colors and duration come from here.
        viewport: Canvas size.
        element: Image to shatter. A button labelled ``label`` if omitted.
        label: Button text, used only when ``element`` is None.
        fps: Frames per second.
        hold_ms: How long the intact element is shown before shattering.
        rng: Random source for the fragment field.
        on_complete: Forwarded to the controller; fires once on the last frame.
    """
    config = config or ShatterConfig()
    if element is None:
        element = draw_button(label, config.accent_color)
        tile_source = None
    else:
        element = element.convert("RGBA")
        tile_source = element

    canvas_size = (int(viewport.width), int(viewport.height))
    background = Image.new("RGBA", canvas_size, config.background_color + (255,))
    source_rect = element_bounds(element, viewport)

    intact = background.copy()
    intact.paste(element, (int(source_rect.x), int(source_rect.y)), element)
    intact = intact.convert("RGB")

    hold_frames = int(hold_ms * fps // 1000)
    frames: List[Image.Image] = [intact] * hold_frames

    controller = ShatterController(config, on_complete=on_complete, rng=rng)
    if not controller.trigger(source_rect, viewport):
        return frames or [intact]

    tiles = [_fragment_tile(f, tile_source) for f in controller.fragments]
    num_frames = max(2, int(config.animation_duration_ms * fps // 1000))
    logger.info("Rendering %d frames (%d held) at %d fps", num_frames + hold_frames, hold_frames, fps)

    for frame_num in range(num_frames):
        controller.seek(frame_num / (num_frames - 1))
        transforms = controller.field_transforms()
        frame = background.copy()

        for idx, fragment in enumerate(controller.fragments):
            opacity = float(transforms.opacity[idx])
            if opacity <= 0.0:
                continue
            image, position = _place_fragment(
                tiles[idx],
                fragment,
                float(transforms.x[idx]),
                float(transforms.y[idx]),
                float(transforms.rotation[idx]),
                float(transforms.scale[idx]),
                opacity,
            )
            # Only paste if the fragment is still near the viewport
            if (position[0] + image.width > -OFFSCREEN_MARGIN and
                    position[1] + image.height > -OFFSCREEN_MARGIN and
                    position[0] < canvas_size[0] + OFFSCREEN_MARGIN and
                    position[1] < canvas_size[1] + OFFSCREEN_MARGIN):
                frame.paste(image, position, image)

        frames.append(frame.convert("RGB"))
        if frame_num % 10 == 0:
            logger.debug("Frame %d/%d", frame_num + 1, num_frames)

    return frames


def save_gif(frames: List[Image.Image], output_path: str, fps: int = 24):
    """Write ``frames`` as an endlessly looping GIF."""
    frames[0].save(
        output_path,
        save_all=True,
        append_images=frames[1:],
        duration=int(1000 // fps),
        loop=0,
        optimize=True,
        disposal=2,  # Clear frame before drawing next one
    )


def render_shatter_gif(
    output_path: str,
    config: Optional[ShatterConfig] = None,
    viewport: ViewportSize = ViewportSize(800, 600),
    image_path: Optional[str] = None,
    label: str = DEFAULT_LABEL,
    fps: int = 24,
    hold_ms: int = 300,
    rng: Optional[RandomSource] = None,
    on_complete: Optional[Callable[[], None]] = None,
) -> int:
    """Render the effect and save it to ``output_path``. Returns the frame count."""
    element = None
    if image_path:
        with Image.open(image_path) as source:
            element = source.convert("RGBA")
    frames = render_shatter_frames(
        config,
        viewport,
        element=element,
        label=label,
        fps=fps,
        hold_ms=hold_ms,
        rng=rng,
        on_complete=on_complete,
    )
    save_gif(frames, output_path, fps)
    logger.info("Saved %d frames to %s", len(frames), output_path)
    return len(frames)
