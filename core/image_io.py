"""
Hush — Image I/O
Loads the background texture and writes exported frames.
"""

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from core.safety import preflight_texture, preflight_output, SafetyError

EXPORT_NAME = "hush-responsive"


def load_texture(texture_path) -> np.ndarray | None:
    """Load a texture as an (H, W, 4) uint8 RGBA array.

    Best-effort: any failure is logged and returns None, and the texture
    layer is then skipped at draw time.
    """
    if not texture_path:
        return None
    try:
        info = preflight_texture(texture_path)
        img = Image.open(info["path"]).convert("RGBA")
        return np.array(img)
    except (SafetyError, OSError, UnidentifiedImageError) as e:
        logging.warning("Texture not loaded (%s): %s", texture_path, e)
        return None


def save_frame(array: np.ndarray, output_path) -> Path:
    """Save a numpy array (H, W, 3) as PNG."""
    output_path = Path(output_path)
    img = Image.fromarray(np.clip(array, 0, 255).astype(np.uint8))
    img.save(str(output_path))
    return output_path


def export_frame(array: np.ndarray, output_dir, name: str = EXPORT_NAME) -> Path:
    """Save a frame as `<name>.png` in `output_dir`, never overwriting.

    Repeated exports get a numeric suffix: name.png, name (1).png, ...
    """
    output_dir = preflight_output(output_dir)
    path = output_dir / f"{name}.png"
    n = 1
    while path.exists():
        path = output_dir / f"{name} ({n}).png"
        n += 1
    return save_frame(array, path)
