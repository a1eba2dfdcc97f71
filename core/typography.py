"""
Hush — Tracked Text

Letter-spaced ("tracked") text, placed glyph by glyph since the surface has
no native letter-spacing. Tracking is extra advance between consecutive
glyphs only, never after the last one.
"""

BASELINE_SHIFT = 0.35  # optical baseline tweak for EB Garamond


def measure_tracked_width(surface, text: str, font_size: float, track_px: float) -> float:
    """Total width of `text` with `track_px` inserted between glyphs."""
    width = 0.0
    for i, ch in enumerate(text):
        width += surface.text_width(ch, font_size)
        if i < len(text) - 1:
            width += track_px
    return width


def draw_tracked_centered(surface, text: str, font_size: float, track_px: float,
                          origin_x: float = 0.0, origin_y: float = 0.0):
    """Draw `text` horizontally centered on (origin_x, origin_y).

    Uses the surface's current fill, blur and transform. The baseline sits
    `font_size * 0.35` below the origin so the word looks vertically centered.
    """
    x = origin_x - measure_tracked_width(surface, text, font_size, track_px) / 2
    y = origin_y + font_size * BASELINE_SHIFT
    for ch in text:
        surface.text(ch, x, y, font_size, align="baseline")
        x += surface.text_width(ch, font_size) + track_px
