"""
Hush — Scene Generator

Builds every entity population from one seeded random source and carries it
in an explicit `SceneState`:

    state = create_scene(SceneConfig(width=1920, height=1080, seed=7))
    state = step_scene(state, pointer=(x, y))      # one frame
    state = resize_scene(state, 1280, 720)         # viewport changed

On resize the hush labels and falling symbols are rebuilt from scratch, while
the foreground words keep their identity and size and are reprojected from
their normalized (u, v) position.
"""

import math
from dataclasses import dataclass, field, replace

import numpy as np

from core.entities import HushLabel, FloaterWord, FallingSymbol, Word
from core.noise import NoiseField
from effects.grain import make_grain_layer

# --- Hush anchors: (u, v) fraction of viewport, size fraction of min(W, H) ---


@dataclass(frozen=True)
class HushAnchor:
    u: float
    v: float
    size_factor: float


HUSH_ANCHORS = (
    HushAnchor(0.53, 0.60, 0.16),   # biggest
    HushAnchor(0.76, 0.44, 0.085),  # mid
    HushAnchor(0.28, 0.24, 0.08),   # small
)

# --- Session-random tracking: (center, +/- spread) as fraction of font size ---
TRACKING_BANDS = {
    "hush": (0.10, 0.015),
    "soft": (0.12, 0.02),
    "breathe": (0.14, 0.02),
    "symbol": (0.0, 0.0),
}

# --- Foreground words ---
BREATHE_COUNT = (5, 6)             # inclusive
SOFT_COUNT = 7
FRONT_SIZE = (12.0, 20.0)
FLOATER_SPEED = (0.08, 0.16)
FLOATER_DRIFT = (0.30, 0.50)
WORD_STYLES = {
    Word.BREATHE: {"alpha": (35.0, 70.0), "blur": (0.8, 1.2, 1.6)},
    Word.SOFT: {"alpha": (60.0, 95.0), "blur": (0.8, 1.0, 1.4)},
}

# --- Placement (rejection sampling around hush labels) ---
PLACEMENT_TRIES = 90
PLACEMENT_PADDING = 0.85
PLACEMENT_U = (0.05, 0.95)
PLACEMENT_V = (0.06, 0.94)

SYMBOL_COUNT = 28
DEFAULT_VIEWPORT = (1280, 720)
TARGET_FPS = 60


@dataclass
class SceneConfig:
    """Per-run options. Everything else is a module constant."""
    width: int = DEFAULT_VIEWPORT[0]
    height: int = DEFAULT_VIEWPORT[1]
    seed: int | None = None
    fps: int = TARGET_FPS
    font_path: str | None = None
    texture_path: str | None = None
    placement_tries: int = PLACEMENT_TRIES
    placement_padding: float = PLACEMENT_PADDING
    symbol_count: int = SYMBOL_COUNT


@dataclass(frozen=True)
class Tracking:
    """Letter-spacing factors (times font size) for each kind of text."""
    hush: float
    soft: float
    breathe: float
    symbol: float

    def for_word(self, word: Word) -> float:
        return getattr(self, word.value)


@dataclass(frozen=True)
class GeneratedParameters:
    """Values rolled once per session and frozen afterwards."""
    seed: int
    tracking: Tracking
    breathe_count: int
    noise_seed: int

    @classmethod
    def generate(cls, seed: int, rng) -> "GeneratedParameters":
        tracking = Tracking(**{
            name: center + rng.uniform(-spread, spread) if spread else center
            for name, (center, spread) in TRACKING_BANDS.items()
        })
        return cls(
            seed=seed,
            tracking=tracking,
            breathe_count=int(rng.randint(BREATHE_COUNT[0], BREATHE_COUNT[1] + 1)),
            noise_seed=int(rng.randint(0, 2 ** 31 - 1)),
        )


@dataclass(frozen=True)
class Placement:
    """Result of a placement search. `fallback` marks an unchecked position."""
    u: float
    v: float
    x: float
    y: float
    attempts: int
    fallback: bool = False


@dataclass
class SceneState:
    """Everything one running animation owns."""
    width: int
    height: int
    params: GeneratedParameters
    rng: np.random.RandomState
    noise: NoiseField
    hushes: tuple = ()
    floaters: tuple = ()
    symbols: tuple = ()
    grain: np.ndarray | None = None
    frame_count: int = 0
    config: SceneConfig = field(default_factory=SceneConfig)


def _fork_rng(rng) -> np.random.RandomState:
    """Independent copy of `rng` at its current position."""
    fork = np.random.RandomState()
    fork.set_state(rng.get_state())
    return fork


def _check_viewport(width, height):
    if width <= 0 or height <= 0:
        raise ValueError(f"Viewport must be positive, got {width}x{height}")


def build_hushes(width, height, tracking: Tracking, rng, anchors=HUSH_ANCHORS) -> tuple:
    """One HushLabel per anchor, sized from the shorter viewport edge."""
    return tuple(
        HushLabel(
            x=a.u * width,
            y=a.v * height,
            size=min(width, height) * a.size_factor,
            track=tracking.hush,
            phase=rng.uniform(0, 2 * math.pi),
        )
        for a in anchors
    )


def pick_position(hushes, width, height, rng, tries=PLACEMENT_TRIES,
                  padding=PLACEMENT_PADDING) -> Placement:
    """Sample a position at least `padding * size` away from every hush.

    Candidates are drawn inside an inset margin. After `tries` rejections
    the position is drawn from the whole viewport without any check.
    """
    for attempt in range(1, tries + 1):
        u = rng.uniform(*PLACEMENT_U)
        v = rng.uniform(*PLACEMENT_V)
        x, y = u * width, v * height
        if all(math.hypot(x - h.x, y - h.y) >= h.size * padding for h in hushes):
            return Placement(u, v, x, y, attempts=attempt)

    u, v = rng.uniform(0, 1), rng.uniform(0, 1)
    return Placement(u, v, u * width, v * height, attempts=tries, fallback=True)


def _make_floater(word, spot, tracking, rng) -> FloaterWord:
    style = WORD_STYLES[word]
    seed = rng.uniform(0, 1000)
    return FloaterWord(
        text=word,
        u=spot.u, v=spot.v, x=spot.x, y=spot.y,
        size=rng.uniform(*FRONT_SIZE),
        base_alpha=rng.uniform(*style["alpha"]),
        blur=float(rng.choice(style["blur"])),
        speed=rng.uniform(*FLOATER_SPEED),
        drift=rng.uniform(*FLOATER_DRIFT),
        seed_x=seed,
        seed_y=seed + 99,
        fade_offset=rng.uniform(0, 1000),
        track=tracking.for_word(word),
        fallback=spot.fallback,
    )


def build_floaters(width, height, hushes, params: GeneratedParameters, rng,
                   tries=PLACEMENT_TRIES, padding=PLACEMENT_PADDING) -> tuple:
    """All "breathe" words first, then the "soft" ones."""
    words = [Word.BREATHE] * params.breathe_count + [Word.SOFT] * SOFT_COUNT
    floaters = []
    for word in words:
        spot = pick_position(hushes, width, height, rng, tries=tries, padding=padding)
        floaters.append(_make_floater(word, spot, params.tracking, rng))
    return tuple(floaters)


def build_symbols(width, height, rng, count=SYMBOL_COUNT) -> tuple:
    """First population is scattered over the whole viewport."""
    return tuple(FallingSymbol.spawn(rng, width, height, initial=True) for _ in range(count))


def create_scene(config: SceneConfig | None = None) -> SceneState:
    """Roll the session parameters and build every population."""
    config = config or SceneConfig()
    width, height = int(config.width), int(config.height)
    _check_viewport(width, height)

    seed = config.seed if config.seed is not None else int(np.random.randint(0, 2 ** 31 - 1))
    rng = np.random.RandomState(seed)
    params = GeneratedParameters.generate(seed, rng)

    grain = make_grain_layer(width, height, rng)
    symbols = build_symbols(width, height, rng, config.symbol_count)
    hushes = build_hushes(width, height, params.tracking, rng)
    floaters = build_floaters(width, height, hushes, params, rng,
                              tries=config.placement_tries, padding=config.placement_padding)

    return SceneState(
        width=width,
        height=height,
        params=params,
        rng=rng,
        noise=NoiseField(params.noise_seed),
        hushes=hushes,
        floaters=floaters,
        symbols=symbols,
        grain=grain,
        config=config,
    )


def resize_scene(state: SceneState, width: int, height: int) -> SceneState:
    """Adapt a running scene to a new viewport.

    Hush labels (and their fade state), symbols and grain are regenerated;
    floaters keep size and identity and move to the same relative spot.
    """
    width, height = int(width), int(height)
    _check_viewport(width, height)
    rng = _fork_rng(state.rng)

    captured = [f.capture(state.width, state.height) for f in state.floaters]

    grain = make_grain_layer(width, height, rng)
    symbols = build_symbols(width, height, rng, state.config.symbol_count)
    hushes = build_hushes(width, height, state.params.tracking, rng)
    floaters = tuple(f.project(width, height) for f in captured)

    return replace(
        state,
        width=width,
        height=height,
        hushes=hushes,
        floaters=floaters,
        symbols=symbols,
        grain=grain,
        rng=rng,
    )


def step_scene(state: SceneState, pointer=None) -> SceneState:
    """Advance one frame. `pointer` is (x, y) in pixels or None (off-canvas).

    Pure: `state` is left untouched, including its random source.
    """
    f = state.frame_count + 1
    w, h = state.width, state.height
    rng = _fork_rng(state.rng)

    symbols = tuple(s.update(f, w, h, rng) for s in state.symbols)
    hushes = tuple(hl.update(pointer) for hl in state.hushes)
    floaters = tuple(fw.update(f, w, h, hushes, state.noise) for fw in state.floaters)

    return replace(state, rng=rng, frame_count=f, symbols=symbols, hushes=hushes,
                   floaters=floaters)
