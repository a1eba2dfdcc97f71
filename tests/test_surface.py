"""
Hush — Surface Tests
Transform/style stack and the Pillow rasterizer.

Run with: pytest tests/test_surface.py -v
"""

import math
import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.surface import PillowSurface


@pytest.fixture
def white():
    return np.full((120, 160, 3), 255, dtype=np.uint8)


class TestTransformStack:

    def test_translate_accumulates(self, fake_surface):
        fake_surface.translate(10, 5)
        fake_surface.translate(3, 4)
        assert fake_surface.to_world(0, 0) == (13.0, 9.0)

    def test_rotate_then_translate(self, fake_surface):
        fake_surface.rotate(math.pi / 2)
        fake_surface.translate(10, 0)
        x, y = fake_surface.to_world(0, 0)
        assert x == pytest.approx(0.0, abs=1e-9)
        assert y == pytest.approx(10.0)

    def test_push_pop_restores(self, fake_surface):
        fake_surface.push()
        fake_surface.translate(50, 50)
        fake_surface.set_blur(3)
        fake_surface.set_fill((1, 2, 3), 10)
        fake_surface.pop()
        assert fake_surface.to_world(0, 0) == (0.0, 0.0)
        assert fake_surface._state.blur == 0.0
        assert fake_surface._state.alpha == 255.0

    def test_unbalanced_pop_harmless(self, fake_surface):
        fake_surface.pop()
        assert fake_surface.to_world(1, 1) == (1.0, 1.0)

    def test_fill_gray_and_clamp(self, fake_surface):
        fake_surface.set_fill(30, 400)
        assert fake_surface._state.color == (30, 30, 30)
        assert fake_surface._state.alpha == 255.0
        fake_surface.set_fill(30, -5)
        assert fake_surface._state.alpha == 0.0

    def test_negative_blur_clamped(self, fake_surface):
        fake_surface.set_blur(-2)
        assert fake_surface._state.blur == 0.0

    def test_empty_text_skipped(self, fake_surface):
        fake_surface.text("", 0, 0, 12)
        assert fake_surface.texts() == []


class TestPillowSurface:

    def test_round_trip_backdrop(self, white):
        surface = PillowSurface(160, 120)
        surface.begin(white)
        np.testing.assert_array_equal(surface.snapshot(), white)

    def test_text_darkens_near_anchor(self, white):
        surface = PillowSurface(160, 120)
        surface.begin(white)
        surface.set_fill(0, 255)
        surface.text("H", 80, 60, 40, align="center")
        out = surface.snapshot()
        assert out[40:80, 60:100].min() < 100
        assert np.all(out[:10, :10] == 255)

    def test_zero_alpha_draws_nothing(self, white):
        surface = PillowSurface(160, 120)
        surface.begin(white)
        surface.set_fill(0, 0)
        surface.text("H", 80, 60, 40, align="center")
        np.testing.assert_array_equal(surface.snapshot(), white)

    def test_blur_softens(self, white):
        sharp = PillowSurface(160, 120)
        sharp.begin(white)
        sharp.set_fill(0, 255)
        sharp.text("H", 80, 60, 40, align="center")

        soft = PillowSurface(160, 120)
        soft.begin(white)
        soft.set_fill(0, 255)
        soft.set_blur(4)
        soft.text("H", 80, 60, 40, align="center")

        assert soft.snapshot().min() > sharp.snapshot().min()

    def test_rotated_text_draws(self, white):
        surface = PillowSurface(160, 120)
        surface.begin(white)
        surface.set_fill(0, 255)
        surface.translate(80, 60)
        surface.rotate(0.7)
        surface.text("/", 0, 0, 30, align="center")
        assert surface.snapshot().min() < 200

    def test_text_partially_off_canvas(self, white):
        surface = PillowSurface(160, 120)
        surface.begin(white)
        surface.set_fill(0, 255)
        surface.text("hush", -10, 5, 30)
        surface.text("hush", 5000, 5000, 30)
        assert surface.snapshot().shape == (120, 160, 3)

    def test_overlay_composites(self, white):
        surface = PillowSurface(160, 120)
        surface.begin(white)
        layer = np.zeros((120, 160, 4), dtype=np.uint8)
        layer[0, 0] = (0, 0, 0, 255)
        surface.overlay(layer)
        out = surface.snapshot()
        assert tuple(out[0, 0]) == (0, 0, 0)
        assert tuple(out[1, 1]) == (255, 255, 255)

    def test_begin_adopts_frame_size(self):
        surface = PillowSurface(10, 10)
        surface.begin(np.zeros((30, 40, 3), dtype=np.uint8))
        assert (surface.width, surface.height) == (40, 30)
        assert surface.snapshot().shape == (30, 40, 3)

    def test_text_width_scales_with_size(self):
        surface = PillowSurface(10, 10)
        assert surface.text_width("hush", 40) > surface.text_width("hush", 20) > 0
        assert surface.text_width("", 20) == 0.0

    def test_bad_font_falls_back(self, tmp_path):
        bogus = tmp_path / "nope.ttf"
        bogus.write_bytes(b"not a font")
        surface = PillowSurface(10, 10, font_path=str(bogus))
        assert surface.font_path is None
        assert surface.text_width("a", 20) > 0
