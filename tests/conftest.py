"""
Conftest: shared fixtures for all Hush test modules.

1. Backdrop cache reset (per-test), prevents cached layers leaking between tests
2. FakeSurface: records draw calls with deterministic glyph widths, no fonts needed
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.surface import Surface, DrawState

# Per-glyph advance as a fraction of font size (default 0.5)
GLYPH_WIDTHS = {"a": 0.5, "b": 0.55, "h": 0.6, "u": 0.55, "s": 0.4, "o": 0.5,
                "f": 0.35, "t": 0.3, "r": 0.4, "e": 0.45}


def glyph_width(ch, size):
    return GLYPH_WIDTHS.get(ch, 0.5) * size


class FakeSurface(Surface):
    """Surface that records every draw instead of rasterizing."""

    def __init__(self, width=320, height=240):
        super().__init__(width, height)
        self.calls = []
        self._frame = np.zeros((height, width, 3), dtype=np.uint8)

    def text_width(self, s, size):
        return sum(glyph_width(ch, size) for ch in s)

    def begin(self, frame):
        self._frame = frame.copy()
        self._state = DrawState()
        self._stack = []
        self.calls.append({"op": "begin"})

    def overlay(self, layer):
        self.calls.append({"op": "overlay", "layer": layer})

    def snapshot(self):
        return self._frame.copy()

    def _draw_text(self, s, wx, wy, size, align, state):
        self.calls.append({
            "op": "text", "text": s, "x": wx, "y": wy, "size": size, "align": align,
            "blur": state.blur, "color": state.color, "alpha": state.alpha, "angle": state.angle,
        })

    def texts(self):
        return [c for c in self.calls if c["op"] == "text"]


@pytest.fixture
def fake_surface():
    return FakeSurface()


@pytest.fixture
def rng():
    return np.random.RandomState(1234)


@pytest.fixture(autouse=True)
def _reset_backdrop_cache():
    """Clear cached backdrop layers before and after each test."""
    from effects import backdrop

    backdrop._backdrop_cache.clear()
    backdrop._backdrop_access_order.clear()

    yield

    backdrop._backdrop_cache.clear()
    backdrop._backdrop_access_order.clear()
