"""Gradient noise and terrain height maps built from it."""

from __future__ import annotations

import math
import random
from typing import Sequence

_DIAG = 1.0 / math.sqrt(2.0)
_GRADIENTS = (
    (1.0, 0.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (0.0, -1.0),
    (_DIAG, _DIAG),
    (-_DIAG, _DIAG),
    (_DIAG, -_DIAG),
    (-_DIAG, -_DIAG),
)
_SCALE_FACTOR = 2.0 / math.sqrt(2.0)

HEIGHTMAP_SCALE = 0.025
MAX_HEIGHT = 5.0


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


class Perlin:
    """Two-dimensional Perlin noise with values clamped to [-1, 1]."""

    def __init__(self, seed: int = 0) -> None:
        self.seed = seed
        table = list(range(256))
        random.Random(seed).shuffle(table)
        self._perm = tuple(table)

    def _corner(self, ix: int, iy: int, dx: float, dy: float) -> float:
        index = self._perm[self._perm[ix & 255] ^ (iy & 255)]
        gx, gy = _GRADIENTS[index % len(_GRADIENTS)]
        return gx * dx + gy * dy

    def get(self, point: Sequence[float]) -> float:
        """Return the noise value at the 2D ``point``."""
        x, y = point
        floor_x = math.floor(x)
        floor_y = math.floor(y)
        dx = x - floor_x
        dy = y - floor_y
        ix, iy = int(floor_x), int(floor_y)

        n00 = self._corner(ix, iy, dx, dy)
        n10 = self._corner(ix + 1, iy, dx - 1.0, dy)
        n01 = self._corner(ix, iy + 1, dx, dy - 1.0)
        n11 = self._corner(ix + 1, iy + 1, dx - 1.0, dy - 1.0)

        u = _fade(dx)
        v = _fade(dy)
        value = _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), v) * _SCALE_FACTOR
        return max(-1.0, min(1.0, value))


PERLIN = Perlin(0)


def generate_heightmap(position: Sequence[int], size: int) -> dict[tuple[int, int], int]:
    """Return column heights for the square of radius ``size`` around ``position``.

    Rows run over ``position[0]`` and columns over ``position[1]``; keys are
    ``(x, y)`` and heights lie in ``0..=5``. ``size`` must fit in a byte.
    """
    if not 0 <= size <= 255:
        raise ValueError(f"size must be between 0 and 255, got {size}")

    row_center, column_center = position
    height_map: dict[tuple[int, int], int] = {}
    for y in range(row_center - size, row_center + size + 1):
        for x in range(column_center - size, column_center + size + 1):
            noise = PERLIN.get((x * HEIGHTMAP_SCALE, y * HEIGHTMAP_SCALE))
            height_map[(x, y)] = int((noise + 1.0) * 0.5 * MAX_HEIGHT)
    return height_map