"""
Hush — Frame Compositor

Paints one frame of a SceneState in a fixed z-order, bottom to top:

    gradient -> side tint -> vignette -> texture     (backdrop, numpy)
    falling symbols -> hush labels -> floaters       (surface text draws)
    grain                                            (prebuilt RGBA layer)

Symbols always sit below the interactive words, and the grain above all.
"""

import numpy as np

from effects import apply_chain
from effects.backdrop import texture_key

TEXTURE_ALPHA = 80

BACKDROP_CHAIN = (
    {"name": "gradient", "params": {}},
    {"name": "sidetint", "params": {"max_alpha": 80}},
    {"name": "vignette", "params": {"alpha": 70, "weight": 120, "blur": 26.0}},
    {"name": "texture", "params": {"alpha": TEXTURE_ALPHA}},
)


class Compositor:
    """Renders scene states onto a surface.

    Args:
        surface: A core.surface.Surface to draw on.
        texture: Optional (H, W, 4) RGBA texture. None skips the texture layer.
    """

    def __init__(self, surface, texture=None):
        self.surface = surface
        self.texture = texture
        self.texture_key = texture_key(texture) if texture is not None else None

    def backdrop_chain(self) -> list[dict]:
        chain = [dict(e, params=dict(e["params"])) for e in BACKDROP_CHAIN]
        for effect in chain:
            if effect["name"] == "texture":
                effect["params"]["texture"] = self.texture
                effect["params"]["key"] = self.texture_key
                effect["bypassed"] = self.texture is None
        return chain

    def backdrop(self, state) -> np.ndarray:
        """Paint the backdrop layers into a fresh (H, W, 3) frame."""
        frame = np.zeros((state.height, state.width, 3), dtype=np.uint8)
        return apply_chain(frame, self.backdrop_chain(), frame_index=state.frame_count)

    def render(self, state) -> np.ndarray:
        """Draw `state` and return the finished (H, W, 3) uint8 RGB frame."""
        surface = self.surface
        f = state.frame_count

        surface.begin(self.backdrop(state))

        for symbol in state.symbols:
            symbol.render(surface)
        for hush in state.hushes:
            hush.render(surface, f)
        for word in state.floaters:
            word.render(surface, f)

        surface.overlay(state.grain)
        return surface.snapshot()
