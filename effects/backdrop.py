"""
Hush — Backdrop Painters

Layers painted under the words, in order: animated two-color vertical
gradient, left-to-right aqua tint, soft blurred edge glow, cover-scaled
texture image.

Every painter is a function: (frame: np.ndarray, **params) -> np.ndarray
on (H, W, 3) uint8 RGB frames. Painters whose output only depends on the
viewport size cache their layers in `_backdrop_cache`.
"""

import hashlib
import math

import numpy as np
import cv2
from PIL import Image

# Palette: between blue and aqua
BASE_A = (210, 240, 245)     # cool aqua-blue (top)
BASE_B = (235, 245, 240)     # faint warmish white-green (bottom)
SIDE_TINT = (205, 235, 240)  # left soft aqua overlay

_backdrop_cache = {}
_backdrop_access_order = []  # LRU tracking: most recent at end
_MAX_BACKDROP_ENTRIES = 8


def _cached(key, build):
    """Return the cached layer for `key`, building it on miss (LRU capped)."""
    if key in _backdrop_cache:
        if key in _backdrop_access_order:
            _backdrop_access_order.remove(key)
        _backdrop_access_order.append(key)
        return _backdrop_cache[key]

    while len(_backdrop_cache) >= _MAX_BACKDROP_ENTRIES and _backdrop_access_order:
        evict_key = _backdrop_access_order.pop(0)
        _backdrop_cache.pop(evict_key, None)

    _backdrop_cache[key] = build()
    _backdrop_access_order.append(key)
    return _backdrop_cache[key]


def _blend(frame, color, alpha):
    """Normal-blend a solid color over `frame` with a per-pixel alpha (0-1)."""
    if alpha.ndim == 2:
        alpha = alpha[:, :, np.newaxis]
    color = np.asarray(color, dtype=np.float32)
    result = frame.astype(np.float32) * (1.0 - alpha) + color * alpha
    return np.clip(result + 0.5, 0, 255).astype(np.uint8)


def animated_gradient(frame, base_a=BASE_A, base_b=BASE_B, frame_index=0):
    """Vertical gradient whose two end colors breathe on slow sinusoids.

    Replaces the frame contents entirely (only its shape is used).
    """
    h, w = frame.shape[:2]
    t = frame_index * 0.0022
    a = 0.18 * math.sin(t * 0.8)
    b = 0.15 * math.sin(t * 0.9 + 1.1)

    top = np.asarray(base_a, dtype=np.float32) + np.array([10, 8, 14], dtype=np.float32) * a
    bottom = np.asarray(base_b, dtype=np.float32) + np.array([12, 12, 10], dtype=np.float32) * b

    m = (np.arange(h, dtype=np.float32) / max(h, 1) * 0.9)[:, np.newaxis]
    rows = top * (1.0 - m) + bottom * m
    rows = np.clip(rows + 0.5, 0, 255).astype(np.uint8)
    return np.ascontiguousarray(np.broadcast_to(rows[:, np.newaxis, :], (h, w, 3)))


def side_tint(frame, color=SIDE_TINT, max_alpha=80):
    """Tint fading from `max_alpha` (0-255) at the left edge to 0 at the right."""
    h, w = frame.shape[:2]
    alpha = _cached(
        ("side_tint", h, w, max_alpha),
        lambda: np.tile((1.0 - np.arange(w, dtype=np.float32) / max(w, 1)) * (max_alpha / 255.0), (h, 1)),
    )
    return _blend(frame, color, alpha)


def _vignette_alpha(h, w, weight, blur, alpha):
    """Blurred stroke band hugging the outside of the viewport, cropped to it."""
    inset = weight / 2.0
    pad = int(math.ceil(weight + 3 * blur)) + 1
    ph, pw = h + 2 * pad, w + 2 * pad
    mask = np.zeros((ph, pw), dtype=np.float32)

    # Stroke of `weight` centered on a rect inset by -weight/2: spans [-weight, 0] outside
    o0 = int(round(pad - inset - weight / 2))
    mask[max(0, o0):ph - max(0, o0), max(0, o0):pw - max(0, o0)] = 1.0
    i0 = int(round(pad - inset + weight / 2))
    mask[i0:ph - i0, i0:pw - i0] = 0.0

    if blur > 0:
        mask = cv2.GaussianBlur(mask, (0, 0), sigmaX=blur)
    return mask[pad:pad + h, pad:pad + w] * (alpha / 255.0)


def vignette(frame, alpha=70, weight=120, blur=26.0):
    """Soft white glow bleeding in from the viewport edges."""
    h, w = frame.shape[:2]
    mask = _cached(("vignette", h, w, alpha, weight, blur),
                   lambda: _vignette_alpha(h, w, weight, blur, alpha))
    return _blend(frame, (255, 255, 255), mask)


def _cover(texture, h, w):
    """Scale an RGBA texture to cover (w, h) keeping aspect, center-cropped."""
    th, tw = texture.shape[:2]
    ar = tw / th
    sw, sh = float(w), w / ar
    if sh < h:
        sh, sw = float(h), h * ar
    sw, sh = max(w, int(round(sw))), max(h, int(round(sh)))

    img = Image.fromarray(np.ascontiguousarray(texture)).resize((sw, sh), Image.LANCZOS)
    x0, y0 = (sw - w) // 2, (sh - h) // 2
    return np.asarray(img.crop((x0, y0, x0 + w, y0 + h)))


def texture_key(texture) -> str:
    """Content digest identifying a texture in the layer cache."""
    digest = hashlib.md5(np.ascontiguousarray(texture).tobytes()).hexdigest()
    return f"{digest}:{texture.shape}"


def texture_cover(frame, texture=None, alpha=80, key=None):
    """Draw `texture` scaled to cover the frame at `alpha` (0-255).

    No-op when the texture is missing (asset failed to load). `key` is the
    texture's `texture_key`; callers drawing the same texture every frame
    pass it in so the digest is computed once.
    """
    if texture is None:
        return frame
    h, w = frame.shape[:2]
    key = key or texture_key(texture)
    covered = _cached(("texture", key, h, w), lambda: _cover(texture, h, w))
    tex_alpha = covered[:, :, 3].astype(np.float32) / 255.0 * (alpha / 255.0)
    result = frame.astype(np.float32) * (1.0 - tex_alpha[:, :, np.newaxis])
    result += covered[:, :, :3].astype(np.float32) * tex_alpha[:, :, np.newaxis]
    return np.clip(result + 0.5, 0, 255).astype(np.uint8)
