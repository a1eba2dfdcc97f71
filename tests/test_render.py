"""
Hush — Offline Render Tests

Run with: pytest tests/test_render.py -v
"""

import os
import sys

import numpy as np
import pytest
from PIL import Image

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.render import build_session, render_still, render_sequence
from core.compositor import Compositor
from core.scene import SceneConfig, SceneState


@pytest.fixture
def config():
    return SceneConfig(width=96, height=64, seed=5)


class TestBuildSession:

    def test_returns_state_and_compositor(self, config):
        state, compositor = build_session(config)
        assert isinstance(state, SceneState)
        assert isinstance(compositor, Compositor)
        assert compositor.texture is None

    def test_loads_texture(self, tmp_path):
        path = tmp_path / "A1.png"
        Image.new("RGBA", (8, 8), (0, 0, 0, 255)).save(path)
        _, compositor = build_session(SceneConfig(width=32, height=32, seed=1, texture_path=str(path)))
        assert compositor.texture.shape == (8, 8, 4)

    def test_missing_texture_tolerated(self, tmp_path):
        _, compositor = build_session(
            SceneConfig(width=32, height=32, seed=1, texture_path=str(tmp_path / "none.png")))
        assert compositor.texture is None


class TestRenderStill:

    def test_shape(self, config):
        frame = render_still(config)
        assert frame.shape == (64, 96, 3)
        assert frame.dtype == np.uint8

    def test_deterministic_for_seed(self, config):
        np.testing.assert_array_equal(render_still(config, 10), render_still(config, 10))

    def test_frames_differ(self, config):
        assert not np.array_equal(render_still(config, 0), render_still(config, 40))

    def test_pointer_fades_hush(self):
        config = SceneConfig(width=200, height=120, seed=8)
        state, _ = build_session(config)
        big = state.hushes[0]
        hovered = render_still(config, 120, pointer=(big.x, big.y)).astype(int)
        idle = render_still(config, 120).astype(int)
        # fewer dark hush pixels while hovered
        assert hovered.sum() > idle.sum()


class TestRenderSequence:

    def test_writes_numbered_frames(self, tmp_path, config, capsys):
        paths = render_sequence(config, 3, tmp_path / "frames")
        assert [p.name for p in paths] == [
            "frame_000000.png", "frame_000001.png", "frame_000002.png",
        ]
        assert all(p.exists() for p in paths)
        assert "Render complete" in capsys.readouterr().out

    def test_progress_callback(self, tmp_path, config):
        seen = []
        render_sequence(config, 4, tmp_path, progress_callback=lambda i, n: seen.append((i, n)))
        assert seen == [(0, 4), (1, 4), (2, 4), (3, 4)]

    def test_first_frame_matches_still(self, tmp_path, config):
        (path,) = render_sequence(config, 1, tmp_path)
        np.testing.assert_array_equal(np.array(Image.open(path)), render_still(config, 1))

    def test_zero_frames(self, tmp_path, config):
        assert render_sequence(config, 0, tmp_path) == []
