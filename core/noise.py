"""
Hush — Smooth Noise Field

Seeded 2D value noise with octave summing, used to drive the gentle drift
of the foreground words. Output is normalized to 0.0-1.0 with a mean near 0.5,
so callers can center it with `noise(x, y) - 0.5`.
"""

import math

import numpy as np

LATTICE_SIZE = 256
DEFAULT_OCTAVES = 4
DEFAULT_FALLOFF = 0.5


def _smooth(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class NoiseField:
    """Deterministic 2D value noise.

    Args:
        seed: Seed for the lattice values (same seed = same field).
        octaves: Number of summed layers (each at double frequency).
        falloff: Amplitude multiplier per octave.
    """

    def __init__(self, seed: int = 0, octaves: int = DEFAULT_OCTAVES,
                 falloff: float = DEFAULT_FALLOFF):
        rng = np.random.RandomState(seed)
        self.octaves = max(1, int(octaves))
        self.falloff = float(falloff)
        self._perm = rng.permutation(LATTICE_SIZE)
        self._values = rng.random_sample(LATTICE_SIZE)
        self._norm = sum(self.falloff ** i for i in range(self.octaves))

    def _lattice(self, ix: int, iy: int) -> float:
        p = self._perm
        return self._values[p[(p[ix % LATTICE_SIZE] + iy) % LATTICE_SIZE]]

    def _octave(self, x: float, y: float) -> float:
        xi = math.floor(x)
        yi = math.floor(y)
        u = _smooth(x - xi)
        v = _smooth(y - yi)

        c00 = self._lattice(xi, yi)
        c10 = self._lattice(xi + 1, yi)
        c01 = self._lattice(xi, yi + 1)
        c11 = self._lattice(xi + 1, yi + 1)

        return _lerp(_lerp(c00, c10, u), _lerp(c01, c11, u), v)

    def __call__(self, x: float, y: float = 0.0) -> float:
        total = 0.0
        amp = 1.0
        freq = 1.0
        for _ in range(self.octaves):
            total += amp * self._octave(x * freq, y * freq)
            amp *= self.falloff
            freq *= 2.0
        return total / self._norm
