"""
Hush — Offline Renderer

Headless rendering without a window: a single still or a numbered PNG
sequence, deterministic for a fixed seed. The pointer is optional and fixed
for the whole run (None = pointer off-canvas, every hush visible).
"""

import time
from pathlib import Path

import numpy as np

from core.compositor import Compositor
from core.image_io import load_texture, save_frame
from core.safety import preflight_output
from core.scene import SceneConfig, create_scene, step_scene
from core.surface import PillowSurface


def build_session(config: SceneConfig):
    """Create the scene and a compositor drawing on a Pillow surface.

    Returns:
        (SceneState, Compositor)
    """
    state = create_scene(config)
    surface = PillowSurface(state.width, state.height, font_path=config.font_path)
    compositor = Compositor(surface, texture=load_texture(config.texture_path))
    return state, compositor


def render_still(config: SceneConfig, frame_index: int = 0, pointer=None) -> np.ndarray:
    """Render the frame reached after `frame_index` steps.

    Returns:
        (H, W, 3) uint8 RGB frame.
    """
    state, compositor = build_session(config)
    for _ in range(max(0, int(frame_index))):
        state = step_scene(state, pointer)
    return compositor.render(state)


def render_sequence(
    config: SceneConfig,
    frames: int,
    output_dir,
    pointer=None,
    progress_callback=None,
) -> list[Path]:
    """Render `frames` consecutive frames to output_dir/frame_XXXXXX.png.

    Args:
        config: Scene configuration (seed, size, font, texture).
        frames: Number of frames to write.
        output_dir: Directory for the PNG files (created if needed).
        pointer: Fixed (x, y) pointer position, or None.
        progress_callback: Optional fn(frame_index, total_frames) for progress.

    Returns:
        List of written paths in frame order.
    """
    output_dir = preflight_output(output_dir)
    state, compositor = build_session(config)

    print(f"  Rendering: {state.width}x{state.height}, {frames} frames "
          f"({frames / max(config.fps, 1):.1f}s @ {config.fps}fps), seed {state.params.seed}")

    written = []
    start_time = time.time()
    for frame_idx in range(frames):
        state = step_scene(state, pointer)
        frame = compositor.render(state)
        written.append(save_frame(frame, output_dir / f"frame_{frame_idx:06d}.png"))

        if progress_callback:
            progress_callback(frame_idx, frames)
        elif frame_idx % 50 == 0:
            elapsed = time.time() - start_time
            pct = (frame_idx + 1) / frames * 100
            fps_actual = (frame_idx + 1) / max(elapsed, 0.001)
            print(f"\r  Rendering: {pct:.1f}% ({frame_idx}/{frames}) "
                  f"@ {fps_actual:.1f} fps", end="", flush=True)

    elapsed = time.time() - start_time
    if not progress_callback:
        print()
    print(f"  Render complete: {elapsed:.1f}s -> {output_dir}")
    return written
