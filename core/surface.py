"""
Hush — Render Surface

Immediate-mode drawing target the scene renders into. Mirrors the small set
of canvas primitives the animation needs: push/pop of transform + style,
translate/rotate, a blur filter applied to subsequent draws, a fill color
with alpha, glyph measurement and text drawing.

`Surface` owns the transform/style stack; subclasses supply measurement and
the actual pixel work. `PillowSurface` is the real implementation: each text
draw is rasterized into a small tile, blurred and rotated with Pillow, then
alpha-composited onto an RGBA canvas.
"""

import logging
import math
from dataclasses import dataclass, replace

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, ImageFont

ALIGN_ANCHORS = {
    "baseline": "ls",  # left, baseline
    "center": "mm",    # middle, middle
}


@dataclass
class DrawState:
    """Transform + style in effect for the next draw call."""
    tx: float = 0.0
    ty: float = 0.0
    angle: float = 0.0
    blur: float = 0.0
    color: tuple = (0, 0, 0)
    alpha: float = 255.0


class Surface:
    """Base drawing surface. Subclasses implement the pixel operations."""

    def __init__(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self._state = DrawState()
        self._stack = []

    # --- transform / style stack ---

    def push(self):
        self._stack.append(replace(self._state))

    def pop(self):
        if self._stack:
            self._state = self._stack.pop()

    def translate(self, dx: float, dy: float):
        s = self._state
        c, n = math.cos(s.angle), math.sin(s.angle)
        s.tx += c * dx - n * dy
        s.ty += n * dx + c * dy

    def rotate(self, angle: float):
        self._state.angle += angle

    def set_blur(self, px: float):
        self._state.blur = max(0.0, float(px))

    def set_fill(self, color, alpha: float = 255.0):
        if isinstance(color, (int, float)):
            color = (color, color, color)
        self._state.color = tuple(int(c) for c in color)
        self._state.alpha = max(0.0, min(255.0, float(alpha)))

    def to_world(self, x: float, y: float) -> tuple:
        """Map a local point through the current transform."""
        s = self._state
        c, n = math.cos(s.angle), math.sin(s.angle)
        return s.tx + c * x - n * y, s.ty + n * x + c * y

    # --- drawing ---

    def text(self, s: str, x: float, y: float, size: float, align: str = "baseline"):
        """Draw `s` at local (x, y) with the current fill, blur and rotation."""
        if not s:
            return
        wx, wy = self.to_world(x, y)
        self._draw_text(s, wx, wy, size, align, self._state)

    def resize(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)

    # --- subclass hooks ---

    def text_width(self, s: str, size: float) -> float:
        """Natural advance width of `s` at `size` pixels."""
        raise NotImplementedError

    def begin(self, frame: np.ndarray):
        """Start a frame on top of an (H, W, 3) uint8 RGB backdrop."""
        raise NotImplementedError

    def overlay(self, layer: np.ndarray):
        """Composite an (H, W, 4) uint8 RGBA layer over everything drawn so far."""
        raise NotImplementedError

    def snapshot(self) -> np.ndarray:
        """Return the current frame as (H, W, 3) uint8 RGB."""
        raise NotImplementedError

    def _draw_text(self, s, wx, wy, size, align, state):
        raise NotImplementedError


class PillowSurface(Surface):
    """Pillow-backed surface.

    Args:
        width, height: Canvas size in pixels.
        font_path: TrueType/OpenType font file. None (or unreadable) falls
            back to Pillow's bundled scalable font.
    """

    def __init__(self, width: int, height: int, font_path: str | None = None):
        super().__init__(width, height)
        self.font_path = _check_font(font_path)
        self._fonts = {}
        self._canvas = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 255))

    def _font(self, size: float):
        key = round(float(size), 2)
        font = self._fonts.get(key)
        if font is None:
            if self.font_path:
                font = ImageFont.truetype(self.font_path, key)
            else:
                font = ImageFont.load_default(size=key)
            self._fonts[key] = font
        return font

    def text_width(self, s: str, size: float) -> float:
        if not s:
            return 0.0
        return float(self._font(size).getlength(s))

    def begin(self, frame: np.ndarray):
        h, w = frame.shape[:2]
        if (w, h) != (self.width, self.height):
            self.resize(w, h)
        self._canvas = Image.fromarray(np.ascontiguousarray(frame[:, :, :3])).convert("RGBA")
        self._state = DrawState()
        self._stack = []

    def overlay(self, layer: np.ndarray):
        if layer is None:
            return
        self._canvas.alpha_composite(Image.fromarray(np.ascontiguousarray(layer)))

    def snapshot(self) -> np.ndarray:
        return np.array(self._canvas.convert("RGB"))

    def _draw_text(self, s, wx, wy, size, align, state):
        if state.alpha <= 0:
            return
        font = self._font(size)
        anchor = ALIGN_ANCHORS.get(align, "ls")

        # Tile centered on the anchor point, big enough for blur spread and rotation
        left, top, right, bottom = font.getbbox(s, anchor=anchor)
        extent = max(abs(left), abs(top), abs(right), abs(bottom)) + math.ceil(state.blur * 3) + 2
        if state.angle:
            extent *= math.sqrt(2)
        half = int(math.ceil(extent)) + 1

        fx, fy = wx - math.floor(wx), wy - math.floor(wy)
        mask = Image.new("L", (2 * half, 2 * half), 0)
        ImageDraw.Draw(mask).text((half + fx, half + fy), s, fill=255, font=font, anchor=anchor)
        if state.blur > 0:
            mask = mask.filter(ImageFilter.GaussianBlur(state.blur))
        if state.angle:
            mask = mask.rotate(-math.degrees(state.angle), resample=Image.BICUBIC,
                               center=(half + fx, half + fy))

        a = np.asarray(mask, dtype=np.float32) * (state.alpha / 255.0)
        tile = np.empty((2 * half, 2 * half, 4), dtype=np.uint8)
        tile[:, :, :3] = state.color
        tile[:, :, 3] = np.clip(a + 0.5, 0, 255).astype(np.uint8)

        self._paste(tile, int(math.floor(wx)) - half, int(math.floor(wy)) - half)

    def _paste(self, tile: np.ndarray, x0: int, y0: int):
        """Alpha-composite an RGBA tile at (x0, y0), clipped to the canvas."""
        th, tw = tile.shape[:2]
        cx0, cy0 = max(0, x0), max(0, y0)
        cx1, cy1 = min(self.width, x0 + tw), min(self.height, y0 + th)
        if cx0 >= cx1 or cy0 >= cy1:
            return
        crop = tile[cy0 - y0:cy1 - y0, cx0 - x0:cx1 - x0]
        self._canvas.alpha_composite(Image.fromarray(np.ascontiguousarray(crop)), dest=(cx0, cy0))


def _check_font(font_path):
    """Return `font_path` if Pillow can open it, else None (logged)."""
    if not font_path:
        return None
    try:
        ImageFont.truetype(str(font_path), 12)
    except OSError:
        logging.warning("Font not usable: %s (falling back to default font)", font_path)
        return None
    return str(font_path)
