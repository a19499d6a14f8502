"""
Tests for the Pillow GIF renderer.
"""
import random

import pytest
from PIL import Image

from shatterfx.config import ShatterConfig
from shatterfx.geometry import ViewportSize
from shatterfx.render import (
    BUTTON_PADDING,
    draw_button,
    element_bounds,
    render_shatter_frames,
    render_shatter_gif,
)

VIEWPORT = ViewportSize(300, 200)


@pytest.fixture
def fast_config():
    # 200 ms at 10 fps -> 2 shatter frames (progress 0 and 1)
    return ShatterConfig(grid_size=4, animation_duration_ms=200)


class TestButton:

    def test_button_is_padded(self):
        button = draw_button("GO", (255, 0, 0))
        assert button.mode == "RGBA"
        assert button.width > 2 * BUTTON_PADDING[0]
        assert button.height > 2 * BUTTON_PADDING[1]

    def test_button_fill(self):
        button = draw_button("GO", (255, 0, 0))
        assert button.getpixel((button.width // 2, 4)) == (255, 0, 0, 255)
        # Rounded corner stays transparent
        assert button.getpixel((0, 0))[3] == 0

    def test_centered_bounds(self):
        bounds = element_bounds(Image.new("RGBA", (100, 40)), VIEWPORT)
        assert (bounds.x, bounds.y, bounds.width, bounds.height) == (100, 80, 100, 40)


class TestFrames:

    def test_frame_count_and_size(self, fast_config):
        frames = render_shatter_frames(fast_config, VIEWPORT, fps=10, hold_ms=100, rng=random.Random(1))
        # 1 held frame + 2 shatter frames
        assert len(frames) == 3
        assert all(f.size == (300, 200) and f.mode == "RGB" for f in frames)

    def test_held_frame_shows_button(self, fast_config):
        frames = render_shatter_frames(fast_config, VIEWPORT, fps=10, hold_ms=100, rng=random.Random(1))
        bounds = element_bounds(draw_button("GET STARTED", fast_config.accent_color), VIEWPORT)
        pixel = frames[0].getpixel((150, int(bounds.y) + 4))
        assert pixel == fast_config.accent_color

    def test_last_frame_is_empty_background(self, fast_config):
        frames = render_shatter_frames(fast_config, VIEWPORT, fps=10, hold_ms=0, rng=random.Random(1))
        assert frames[-1].getcolors() == [(300 * 200, fast_config.background_color)]

    def test_completion_fires_once(self, fast_config):
        calls = []
        render_shatter_frames(fast_config, VIEWPORT, fps=10, on_complete=lambda: calls.append(1))
        assert calls == [1]

    def test_image_element(self, fast_config):
        element = Image.new("RGB", (40, 40), (255, 0, 0))
        frames = render_shatter_frames(
            fast_config, VIEWPORT, element=element, fps=10, hold_ms=0, rng=random.Random(1)
        )
        # Progress 0: every fragment still covers its own cell
        assert frames[0].getpixel((150, 100)) == (255, 0, 0)
        assert frames[0].getpixel((10, 10)) == fast_config.background_color


class TestGif:

    def test_writes_animated_gif(self, fast_config, tmp_path):
        output = tmp_path / "shatter.gif"
        count = render_shatter_gif(str(output), fast_config, VIEWPORT, fps=10, hold_ms=100, rng=random.Random(1))
        assert count == 3
        with Image.open(output) as gif:
            assert gif.format == "GIF"
            assert gif.size == (300, 200)
            assert gif.n_frames >= 2

    def test_shatters_input_image(self, fast_config, tmp_path):
        source = tmp_path / "source.png"
        Image.new("RGBA", (60, 30), (0, 128, 255, 255)).save(source)
        output = tmp_path / "out.gif"
        count = render_shatter_gif(
            str(output), fast_config, VIEWPORT, image_path=str(source), fps=10, hold_ms=0
        )
        assert count == 2
        assert output.exists()

    def test_source_image_is_closed(self, fast_config, tmp_path, monkeypatch):
        # Multi-frame files keep their handle open after load()
        source = tmp_path / "source.gif"
        first = Image.new("RGB", (40, 20), (255, 0, 0))
        second = Image.new("RGB", (40, 20), (0, 0, 255))
        first.save(source, save_all=True, append_images=[second])

        opened = []
        real_open = Image.open

        def tracking_open(*args, **kwargs):
            image = real_open(*args, **kwargs)
            opened.append(image)
            return image

        monkeypatch.setattr(Image, "open", tracking_open)
        render_shatter_gif(
            str(tmp_path / "out.gif"), fast_config, VIEWPORT,
            image_path=str(source), fps=10, hold_ms=0,
        )
        assert len(opened) == 1
        assert opened[0].fp is None
