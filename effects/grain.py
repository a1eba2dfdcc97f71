"""
Hush — Grain Overlay

Sparse, faint white dots composited over the finished frame by the
render surface. The layer is generated once per viewport (startup /
resize), never per frame.
"""

import numpy as np

GRAIN_DENSITY = 0.0022        # dots per pixel
GRAIN_ALPHA = (12, 30)        # 0-255
GRAIN_DIAMETER = (0.7, 1.5)   # pixels


def make_grain_layer(width, height, rng, density=GRAIN_DENSITY,
                     alpha_range=GRAIN_ALPHA, diameter_range=GRAIN_DIAMETER):
    """Build an (H, W, 4) uint8 RGBA grain layer.

    Dots are at most ~1.5px across, so each one lands on a single pixel with
    its alpha scaled by the dot's area coverage.

    Args:
        width, height: Viewport size in pixels.
        rng: np.random.RandomState (or compatible) for positions/alpha/size.
        density: Dots per pixel.
        alpha_range: (min, max) dot alpha, 0-255.
        diameter_range: (min, max) dot diameter in pixels.
    """
    width, height = int(width), int(height)
    count = int(width * height * density)

    layer = np.zeros((height, width, 4), dtype=np.uint8)
    layer[:, :, :3] = 255
    if count <= 0:
        return layer

    xs = rng.uniform(0, width, count)
    ys = rng.uniform(0, height, count)
    alphas = rng.uniform(alpha_range[0], alpha_range[1], count)
    diameters = rng.uniform(diameter_range[0], diameter_range[1], count)

    coverage = np.minimum(1.0, np.pi * (diameters / 2.0) ** 2)
    px = np.clip(xs.astype(np.int64), 0, width - 1)
    py = np.clip(ys.astype(np.int64), 0, height - 1)

    acc = np.zeros((height, width), dtype=np.float32)
    np.add.at(acc, (py, px), alphas * coverage)
    layer[:, :, 3] = np.clip(acc + 0.5, 0, 255).astype(np.uint8)
    return layer

