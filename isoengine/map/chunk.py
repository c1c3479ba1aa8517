"""Terrain chunks made of stacked tiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .noise import generate_heightmap

DEFAULT_TEXTURE = "grass"


@dataclass(frozen=True)
class Tile:
    """A single block of terrain at an integer position."""

    pos: tuple[int, int, int]
    texture_name: str


@dataclass(frozen=True)
class Chunk:
    """A square patch of terrain and the tiles it holds."""

    pos: tuple[int, int]
    tiles: tuple[Tile, ...]


def generate_chunk(pos: Sequence[int], size: int) -> Chunk:
    """Build a chunk whose columns are filled from height 0 up to the noise height."""
    chunk_x, chunk_y = pos
    height_map = generate_heightmap((chunk_x, chunk_y), size)
    tiles = tuple(
        Tile((x, y, z), DEFAULT_TEXTURE)
        for (x, y), height in height_map.items()
        for z in range(height + 1)
    )
    return Chunk((chunk_x, chunk_y), tiles)