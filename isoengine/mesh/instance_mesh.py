"""A mesh drawn once per instance, with updatable instance data."""

from __future__ import annotations

import struct
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from .data import InstanceData, Vec3, VertexData


@dataclass(frozen=True)
class DrawCall:
    """One instance to draw: vertex positions in draw order and its data."""

    positions: tuple[Vec3, ...]
    instance: InstanceData


class InstanceMesh:
    """Shared vertices and indices, drawn once for each instance."""

    def __init__(
        self,
        vertices: Sequence[VertexData],
        indices: Iterable[int] | None,
        instances: Iterable[InstanceData],
    ) -> None:
        self.vertices = tuple(vertices)
        self.indices = None if indices is None else tuple(indices)
        if self.indices is not None:
            invalid = [i for i in self.indices if not 0 <= i < len(self.vertices)]
            if invalid:
                raise ValueError(f"indices reference missing vertices: {invalid}")
        self.instances = list(instances)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def index_count(self) -> int:
        return 0 if self.indices is None else len(self.indices)

    @property
    def instance_count(self) -> int:
        return len(self.instances)

    @property
    def vertex_buffer(self) -> bytes:
        """The vertices in their GPU layout."""
        return b"".join(vertex.pack() for vertex in self.vertices)

    @property
    def index_buffer(self) -> bytes | None:
        """The indices as little-endian 32-bit integers, or None."""
        if self.indices is None:
            return None
        return struct.pack(f"<{len(self.indices)}I", *self.indices)

    @property
    def instance_buffer(self) -> bytes:
        """The instances in their GPU layout."""
        return b"".join(instance.pack() for instance in self.instances)

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self.instances):
            raise IndexError(f"instance index {index} out of range")

    def update_instance(self, index: int, data: InstanceData) -> None:
        """Replace the instance at ``index``."""
        self._check(index)
        self.instances[index] = data

    def update_instance_model(self, index: int, model: Sequence[Sequence[float]]) -> None:
        """Replace only the model matrix of the instance at ``index``."""
        self._check(index)
        self.instances[index] = replace(self.instances[index], model=model)

    def draw_calls(self) -> list[DrawCall]:
        """Return one draw call per instance, vertices expanded through the indices."""
        order = self.indices if self.indices is not None else range(len(self.vertices))
        positions = tuple(self.vertices[i].position for i in order)
        return [DrawCall(positions, instance) for instance in self.instances]