"""Vertex and per-instance data in the byte layout the GPU expects."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Sequence

Vec3 = tuple[float, float, float]
Column = tuple[float, float, float, float]
Model = tuple[Column, Column, Column, Column]

IDENTITY: Model = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)

_VERTEX = struct.Struct("<3f")
_MODEL = struct.Struct("<16f")
_INSTANCE = struct.Struct("<16f3I4B3I")

VERTEX_SIZE = _VERTEX.size
MODEL_SIZE = _MODEL.size
INSTANCE_SIZE = _INSTANCE.size


def _as_model(model: Sequence[Sequence[float]]) -> Model:
    columns = tuple(tuple(float(value) for value in column) for column in model)
    if len(columns) != 4 or any(len(column) != 4 for column in columns):
        raise ValueError("model must be a 4x4 matrix given as four columns")
    return columns  # type: ignore[return-value]


@dataclass(frozen=True)
class VertexData:
    """A single mesh vertex."""

    position: Vec3

    def __post_init__(self) -> None:
        position = tuple(float(value) for value in self.position)
        if len(position) != 3:
            raise ValueError("vertex position must have exactly 3 coordinates")
        object.__setattr__(self, "position", position)

    def pack(self) -> bytes:
        """Return the vertex as three little-endian 32-bit floats."""
        return _VERTEX.pack(*self.position)


@dataclass
class MeshData:
    """Vertices of a mesh and, optionally, the indices that draw them."""

    vertices: list[VertexData]
    indices: list[int] | None = None


@dataclass(frozen=True)
class InstanceData:
    """Per-instance data: model matrix, animation frames and tint colour."""

    model: Model
    base_frame: int
    frame_count: int
    frame_time_ms: int
    color: tuple[int, int, int, int]
    padding: tuple[int, int, int] = field(default=(0, 0, 0))

    def __post_init__(self) -> None:
        object.__setattr__(self, "model", _as_model(self.model))
        color = tuple(self.color)
        if len(color) != 4:
            raise ValueError("color must have exactly 4 channels")
        object.__setattr__(self, "color", color)
        padding = tuple(self.padding)
        if len(padding) != 3:
            raise ValueError("padding must have exactly 3 words")
        object.__setattr__(self, "padding", padding)

    def pack(self) -> bytes:
        """Return the instance in its GPU layout."""
        try:
            return _INSTANCE.pack(
                *(value for column in self.model for value in column),
                self.base_frame,
                self.frame_count,
                self.frame_time_ms,
                *self.color,
                *self.padding,
            )
        except struct.error as error:
            raise ValueError(f"instance data out of range: {error}") from error