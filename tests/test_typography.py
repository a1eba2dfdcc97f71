"""
Hush — Tracked Text Tests
Width measurement and glyph placement for letter-spaced words.

Run with: pytest tests/test_typography.py -v
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from conftest import glyph_width
from core.surface import PillowSurface
from core.typography import measure_tracked_width, draw_tracked_centered, BASELINE_SHIFT


class TestMeasureTrackedWidth:

    def test_two_glyphs_one_gap(self, fake_surface):
        size, track = 20.0, 3.0
        expected = glyph_width("a", size) + glyph_width("b", size) + track
        assert measure_tracked_width(fake_surface, "ab", size, track) == pytest.approx(expected)

    def test_single_glyph_no_gap(self, fake_surface):
        assert measure_tracked_width(fake_surface, "a", 20.0, 50.0) == pytest.approx(glyph_width("a", 20.0))

    def test_empty_is_zero(self, fake_surface):
        assert measure_tracked_width(fake_surface, "", 20.0, 5.0) == 0.0

    def test_gaps_are_between_glyphs_only(self, fake_surface):
        """n glyphs → n - 1 gaps."""
        word = "breathe"
        plain = measure_tracked_width(fake_surface, word, 16.0, 0.0)
        tracked = measure_tracked_width(fake_surface, word, 16.0, 2.0)
        assert tracked - plain == pytest.approx(2.0 * (len(word) - 1))

    def test_real_font_two_glyphs(self):
        """Same contract against Pillow's glyph advances."""
        surface = PillowSurface(64, 64)
        size, track = 24.0, 4.0
        expected = surface.text_width("a", size) + surface.text_width("b", size) + track
        assert measure_tracked_width(surface, "ab", size, track) == pytest.approx(expected)


class TestDrawTrackedCentered:

    def test_glyphs_left_to_right_from_centered_start(self, fake_surface):
        size, track = 20.0, 2.0
        draw_tracked_centered(fake_surface, "hush", size, track, origin_x=100.0, origin_y=50.0)
        texts = fake_surface.texts()
        assert [t["text"] for t in texts] == list("hush")

        width = measure_tracked_width(fake_surface, "hush", size, track)
        x = 100.0 - width / 2
        for t in texts:
            assert t["x"] == pytest.approx(x)
            x += glyph_width(t["text"], size) + track

    def test_baseline_below_origin(self, fake_surface):
        draw_tracked_centered(fake_surface, "soft", 16.0, 1.0, origin_x=0.0, origin_y=10.0)
        for t in fake_surface.texts():
            assert t["y"] == pytest.approx(10.0 + 16.0 * BASELINE_SHIFT)
            assert t["align"] == "baseline"

    def test_visually_centered_on_origin(self, fake_surface):
        """Right edge of the last glyph mirrors the left edge of the first."""
        size, track = 30.0, 4.0
        draw_tracked_centered(fake_surface, "breathe", size, track, origin_x=0.0)
        texts = fake_surface.texts()
        left = texts[0]["x"]
        right = texts[-1]["x"] + glyph_width(texts[-1]["text"], size)
        assert left == pytest.approx(-right)

    def test_follows_surface_transform(self, fake_surface):
        fake_surface.translate(200.0, 80.0)
        draw_tracked_centered(fake_surface, "a", 10.0, 0.0)
        t = fake_surface.texts()[0]
        assert t["x"] == pytest.approx(200.0 - glyph_width("a", 10.0) / 2)
        assert t["y"] == pytest.approx(80.0 + 10.0 * BASELINE_SHIFT)

    def test_empty_draws_nothing(self, fake_surface):
        draw_tracked_centered(fake_surface, "", 20.0, 3.0)
        assert fake_surface.texts() == []

    def test_no_state_retained(self, fake_surface):
        """Drawing leaves the surface transform and style untouched."""
        fake_surface.set_fill((1, 2, 3), 40)
        draw_tracked_centered(fake_surface, "hush", 20.0, 2.0, origin_x=5.0)
        assert fake_surface.to_world(0, 0) == (0.0, 0.0)
        assert fake_surface._state.color == (1, 2, 3)
