"""
Hush — Scene Entities

Three kinds of animated things, each an immutable record with a pure
`update(...)` step returning the next state and a `render(surface, ...)`
step that only draws:

- HushLabel:     the three large "hush" words; fade out while hovered.
- FloaterWord:   small "soft"/"breathe" words drifting on a noise flow,
                 pushed softly away from every hush label.
- FallingSymbol: slow, blurred background glyphs that fall, wobble and
                 spin, then respawn above the top edge.

Sizes and tracking are chosen once at creation and never change while an
entity lives.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum

from core.typography import draw_tracked_centered


class Word(str, Enum):
    HUSH = "hush"
    SOFT = "soft"
    BREATHE = "breathe"


# --- HushLabel ---
HUSH_BLUR = 3.5
HUSH_ALPHA_MAX = 170.0
HUSH_EASE = 0.04              # ~25 frame time constant
HUSH_HOVER_FACTOR = 0.58      # hover radius = size * factor
HUSH_COLOR = (64, 121, 114)
HUSH_DRIFT_X = 2.0
HUSH_DRIFT_Y = 1.4

# --- FloaterWord ---
FLOATER_AVOID_FACTOR = 0.80   # runtime push-away radius = hush size * factor
FLOATER_PUSH = 0.08
FLOATER_EPSILON = 0.0001
FLOATER_SEED_OFFSET = 99      # y-axis noise channel = seed + offset
FLOATER_FILL = 30
BREATH_FLOOR = 0.65

# --- FallingSymbol ---
SYMBOL_GLYPHS = ("—", "·", "□", "◇", "/", "×")
SYMBOL_SIZE = (12.0, 20.0)
SYMBOL_SPEED = (0.012, 0.030)
SYMBOL_SPIN = (-0.002, 0.002)
SYMBOL_ALPHA = (60.0, 95.0)
SYMBOL_FALL_SCALE = 14
SYMBOL_WOBBLE = 0.35
SYMBOL_BLUR = 1.2
SYMBOL_FILL = 30
SYMBOL_EXIT_MARGIN = 30
SYMBOL_SPAWN_Y = -20.0


def wrap(value: float, extent: float) -> float:
    """Toroidal wrap into [0, extent)."""
    v = value % extent
    # float modulo can round up to exactly `extent` for tiny negatives
    return 0.0 if v >= extent else v


@dataclass(frozen=True)
class HushLabel:
    """Hover-reactive "hush" label.

    `alpha` eases toward `target_alpha` by `ease` each frame; the target is
    0 while the pointer is within `hover_radius` of the anchor, otherwise
    `alpha_max`.
    """
    x: float
    y: float
    size: float
    track: float
    phase: float = 0.0
    blur: float = HUSH_BLUR
    alpha_max: float = HUSH_ALPHA_MAX
    alpha: float = HUSH_ALPHA_MAX
    target_alpha: float = HUSH_ALPHA_MAX
    ease: float = HUSH_EASE

    @property
    def hover_radius(self) -> float:
        return self.size * HUSH_HOVER_FACTOR

    def is_hovered(self, pointer) -> bool:
        if pointer is None:
            return False
        return math.hypot(pointer[0] - self.x, pointer[1] - self.y) <= self.hover_radius

    def update(self, pointer) -> "HushLabel":
        target = 0.0 if self.is_hovered(pointer) else self.alpha_max
        alpha = self.alpha + (target - self.alpha) * self.ease
        alpha = max(0.0, min(self.alpha_max, alpha))
        return replace(self, alpha=alpha, target_alpha=target)

    def drift(self, frame_count: int) -> tuple:
        dx = HUSH_DRIFT_X * math.sin((frame_count + self.phase) * 0.02)
        dy = HUSH_DRIFT_Y * math.cos((frame_count + self.phase) * 0.018)
        return dx, dy

    def render(self, surface, frame_count: int):
        dx, dy = self.drift(frame_count)
        surface.push()
        surface.translate(self.x + dx, self.y + dy)
        surface.set_blur(self.blur)
        surface.set_fill(HUSH_COLOR, self.alpha)
        draw_tracked_centered(surface, Word.HUSH.value, self.size, self.size * self.track)
        surface.pop()


@dataclass(frozen=True)
class FloaterWord:
    """Foreground "soft"/"breathe" word.

    (u, v) is the normalized position; it is only refreshed on resize so the
    layout survives a viewport change. `fallback` marks a word whose start
    position came from the unchecked fallback of the placement search.
    """
    text: Word
    u: float
    v: float
    x: float
    y: float
    size: float
    base_alpha: float
    blur: float
    speed: float
    drift: float
    seed_x: float
    seed_y: float
    fade_offset: float
    track: float
    fallback: bool = False

    def velocity(self, frame_count: int, noise) -> tuple:
        t = frame_count * self.speed * 0.01
        vx = (noise(self.seed_x, t) - 0.5) * self.drift
        vy = (noise(self.seed_y, t) - 0.5) * self.drift
        return vx, vy

    def update(self, frame_count: int, width: float, height: float, hushes, noise) -> "FloaterWord":
        vx, vy = self.velocity(frame_count, noise)
        x = wrap(self.x + vx, width)
        y = wrap(self.y + vy, height)

        for h in hushes:
            avoid_r = h.size * FLOATER_AVOID_FACTOR
            d = math.hypot(x - h.x, y - h.y)
            if FLOATER_EPSILON < d < avoid_r:
                push = (avoid_r - d) * FLOATER_PUSH
                x += (x - h.x) / d * push
                y += (y - h.y) / d * push

        # the push can step past an edge; wrap again so the bounds always hold
        return replace(self, x=wrap(x, width), y=wrap(y, height))

    def alpha(self, frame_count: int) -> float:
        breath = 0.5 + 0.5 * math.sin((frame_count + self.fade_offset) * 0.01)
        return self.base_alpha * (BREATH_FLOOR + (1.0 - BREATH_FLOOR) * breath)

    def capture(self, width: float, height: float) -> "FloaterWord":
        """Record the normalized position for the current viewport."""
        return replace(self, u=self.x / width, v=self.y / height)

    def project(self, width: float, height: float) -> "FloaterWord":
        """Place the word at its normalized position in a new viewport."""
        return replace(self, x=self.u * width, y=self.v * height)

    def render(self, surface, frame_count: int):
        surface.push()
        surface.translate(self.x, self.y)
        surface.set_blur(self.blur)
        surface.set_fill(FLOATER_FILL, self.alpha(frame_count))
        draw_tracked_centered(surface, self.text.value, self.size, self.size * self.track)
        surface.pop()


@dataclass(frozen=True)
class FallingSymbol:
    """Background glyph that falls forever, respawning above the top edge."""
    x: float
    y: float
    angle: float
    spin: float
    glyph: str
    size: float
    speed: float
    alpha: float
    wobble: float
    blur: float = SYMBOL_BLUR

    @classmethod
    def spawn(cls, rng, width: float, height: float, initial: bool = False) -> "FallingSymbol":
        """Roll a fresh symbol. `initial` scatters it over the whole viewport."""
        return cls(
            x=rng.uniform(0, width),
            y=rng.uniform(0, height) if initial else SYMBOL_SPAWN_Y,
            angle=rng.uniform(0, 2 * math.pi),
            spin=rng.uniform(*SYMBOL_SPIN),
            glyph=str(rng.choice(SYMBOL_GLYPHS)),
            size=rng.uniform(*SYMBOL_SIZE),
            speed=rng.uniform(*SYMBOL_SPEED),
            alpha=rng.uniform(*SYMBOL_ALPHA),
            wobble=rng.uniform(0, 1000),
        )

    def update(self, frame_count: int, width: float, height: float, rng) -> "FallingSymbol":
        y = self.y + self.speed * SYMBOL_FALL_SCALE
        if y > height + SYMBOL_EXIT_MARGIN:
            return FallingSymbol.spawn(rng, width, height)
        x = self.x + math.sin(frame_count * 0.008 + self.wobble) * SYMBOL_WOBBLE
        return replace(self, x=x, y=y, angle=self.angle + self.spin)

    def render(self, surface):
        surface.push()
        surface.translate(self.x, self.y)
        surface.rotate(self.angle)
        surface.set_blur(self.blur)
        surface.set_fill(SYMBOL_FILL, self.alpha)
        surface.text(self.glyph, 0, 0, self.size, align="center")
        surface.pop()
