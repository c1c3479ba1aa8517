"""Tiles as textured quads and their per-instance data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..assets.importer import AnimationDef
from ..mesh.data import InstanceData, MeshData, VertexData
from .texture import TileTextureHandle

QUAD_CORNERS = (
    (-1.0, -1.0, 0.0),
    (-1.0, 1.0, 0.0),
    (1.0, 1.0, 0.0),
    (1.0, -1.0, 0.0),
)
QUAD_INDICES = (0, 1, 2, 2, 3, 0)


def quad_mesh_data() -> MeshData:
    """Return the unit quad every tile is drawn with."""
    return MeshData(
        vertices=[VertexData(corner) for corner in QUAD_CORNERS],
        indices=list(QUAD_INDICES),
    )


@dataclass
class TileTexture:
    """A registered tile: its atlas frames, tint and animation timing."""

    name: str
    tint: tuple[int, int, int, int]
    frames: list[TileTextureHandle] = field(default_factory=list)
    animation: AnimationDef | None = None

    def to_instance_data(self, model: Sequence[Sequence[float]]) -> InstanceData:
        """Return the instance data that draws this tile with ``model``."""
        if not self.frames:
            raise ValueError(f"Tile {self.name!r} has no frames")
        return InstanceData(
            model=model,  # type: ignore[arg-type]
            base_frame=self.frames[0],
            frame_count=len(self.frames),
            frame_time_ms=self.animation.frame_time_ms if self.animation else 0,
            color=tuple(self.tint),  # type: ignore[arg-type]
        )