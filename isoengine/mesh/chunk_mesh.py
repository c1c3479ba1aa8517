"""Instance meshes for terrain chunks and for single entities."""

from __future__ import annotations

from typing import Sequence

from ..game_logic.components import RenderEntity
from ..graphics.registry import TextureRegistry
from ..graphics.tile import TileTexture, quad_mesh_data
from ..map.chunk import Chunk
from .data import InstanceData, Model
from .instance_mesh import InstanceMesh

CHUNK_TEXTURE = "grass"


def isometric_model(pos: Sequence[float], scale: float) -> Model:
    """Return the model matrix, as four columns, that places a quad at ``pos``.

    The quad is scaled by ``scale`` in x and y, flattened in z, and moved to
    its isometric screen position: x runs along ``x - y``, y along
    ``(x + y) / 2`` and height ``z`` lifts it straight up.
    """
    x, y, z = (float(value) for value in pos)
    s = float(scale)
    tx = (x - y) * s
    ty = (x + y) * 0.5 * s + z * s
    return (
        (s, 0.0, 0.0, 0.0),
        (0.0, s, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0),
        (tx, ty, 0.0, 1.0),
    )


def _lookup(registry: TextureRegistry, name: str, message: str) -> TileTexture:
    try:
        return registry.handles[name]
    except KeyError:
        raise LookupError(message) from None


class ChunkMesh:
    """All tiles of a chunk as instances of one quad, in back-to-front order."""

    def __init__(self, chunk: Chunk, texture_registry: TextureRegistry, scale: float) -> None:
        mesh_data = quad_mesh_data()
        by_depth: dict[tuple[int, int, int], InstanceData] = {}
        for tile in chunk.tiles:
            x, y, z = tile.pos
            texture = _lookup(
                texture_registry, CHUNK_TEXTURE, "Could not find grass texture handle"
            )
            by_depth[(-x, -y, z)] = texture.to_instance_data(isometric_model(tile.pos, scale))

        self.pos = chunk.pos
        self.instance_mesh = InstanceMesh(
            mesh_data.vertices,
            mesh_data.indices,
            (by_depth[key] for key in sorted(by_depth)),
        )


class EntityMesh:
    """A single entity drawn as one textured quad."""

    def __init__(
        self, entity: RenderEntity, texture_registry: TextureRegistry, scale: float
    ) -> None:
        mesh_data = quad_mesh_data()
        texture = _lookup(
            texture_registry,
            entity.texture_name,
            f"Could not find texture handle: {entity.texture_name}",
        )
        instance = texture.to_instance_data(isometric_model(entity.pos, scale))

        self.entity = entity.entity
        self.instance_mesh = InstanceMesh(mesh_data.vertices, mesh_data.indices, [instance])

    def update_transform(self, pos: Sequence[float], scale: float) -> None:
        """Move the entity's quad to ``pos`` drawn at ``scale``."""
        self.instance_mesh.update_instance_model(0, isometric_model(pos, scale))