"""
Tests for ShatterConfig validation and color handling.
"""
import dataclasses

import pytest

from shatterfx.config import ShatterConfig, parse_color
from shatterfx.errors import InvalidConfiguration, ShatterError


class TestDefaults:

    def test_stock_values(self):
        config = ShatterConfig()
        assert config.grid_size == 10
        assert config.explosion_force == 1.5
        assert config.animation_duration_ms == 1500
        assert config.duration_seconds == 1.5

    def test_colors_normalised(self):
        config = ShatterConfig()
        assert config.accent_color == (98, 0, 238)
        assert config.background_color == (18, 18, 18)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ShatterConfig().grid_size = 4


class TestValidation:

    @pytest.mark.parametrize("grid_size", [0, -3])
    def test_grid_size_below_one(self, grid_size):
        with pytest.raises(InvalidConfiguration):
            ShatterConfig(grid_size=grid_size)

    @pytest.mark.parametrize("grid_size", [2.5, "10", True])
    def test_grid_size_must_be_int(self, grid_size):
        with pytest.raises(InvalidConfiguration):
            ShatterConfig(grid_size=grid_size)

    @pytest.mark.parametrize("force", [0, 0.0, -1, float("inf"), float("nan")])
    def test_explosion_force_must_be_positive_and_finite(self, force):
        with pytest.raises(InvalidConfiguration):
            ShatterConfig(explosion_force=force)

    def test_duration_must_be_positive(self):
        with pytest.raises(InvalidConfiguration):
            ShatterConfig(animation_duration_ms=0)

    def test_bad_color(self):
        with pytest.raises(InvalidConfiguration):
            ShatterConfig(accent_color="not-a-color")

    def test_error_hierarchy(self):
        with pytest.raises(ValueError):
            ShatterConfig(grid_size=0)
        with pytest.raises(ShatterError):
            ShatterConfig(grid_size=0)


class TestColors:

    def test_named_color(self):
        assert parse_color("red") == (255, 0, 0)

    def test_rgba_tuple_drops_alpha(self):
        assert parse_color((1, 2, 3, 128)) == (1, 2, 3)

    @pytest.mark.parametrize("value", [(1, 2), (0, 0, 300), (0.5, 0, 0)])
    def test_invalid_tuples(self, value):
        with pytest.raises(InvalidConfiguration):
            parse_color(value)


class TestOverrides:

    def test_none_values_are_skipped(self):
        config = ShatterConfig().with_overrides(grid_size=4, explosion_force=None)
        assert config.grid_size == 4
        assert config.explosion_force == 1.5

    def test_overrides_are_validated(self):
        with pytest.raises(InvalidConfiguration):
            ShatterConfig().with_overrides(grid_size=0)

    def test_color_override(self):
        assert ShatterConfig().with_overrides(accent_color="#00FF00").accent_color == (0, 255, 0)
