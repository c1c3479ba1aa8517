"""The whole visible world: chunk meshes and entity meshes, rebuilt on demand."""

from __future__ import annotations

from pathlib import Path

from ..assets.importer import load_blocks
from ..ecs.entity import Entity
from ..game_logic.components import RenderEntity
from ..graphics.registry import TextureRegistry, TextureRegistryBuilder
from ..map.chunk import Chunk
from .chunk_mesh import ChunkMesh, EntityMesh
from .instance_mesh import InstanceMesh


class WorldMesh:
    """Queues chunk and entity changes and turns them into meshes on ``update``."""

    def __init__(self, texture_registry: TextureRegistry, scale: float) -> None:
        self.texture_registry = texture_registry
        self.scale = scale
        self._chunks_to_render: dict[tuple[int, int], ChunkMesh] = {}
        self._chunks_to_update: dict[tuple[int, int], Chunk] = {}
        self._entities_to_render: dict[Entity, EntityMesh] = {}
        self._entities_to_update: dict[Entity, RenderEntity] = {}

    def update_entity(self, entity: RenderEntity) -> None:
        """Queue an entity to be (re)built on the next update."""
        self._entities_to_update[entity.entity] = entity

    def update_chunk(self, chunk: Chunk) -> None:
        """Queue a chunk to be (re)built on the next update."""
        chunk_x, chunk_y = chunk.pos
        self._chunks_to_update[(chunk_x, chunk_y)] = chunk

    def update(self) -> None:
        """Build meshes for everything queued since the last update."""
        for (chunk_x, chunk_y), chunk in self._chunks_to_update.items():
            self._chunks_to_render[(-chunk_x, -chunk_y)] = ChunkMesh(
                chunk, self.texture_registry, self.scale
            )
        self._chunks_to_update = {}

        for entity in self._entities_to_update.values():
            self._entities_to_render[entity.entity] = EntityMesh(
                entity, self.texture_registry, self.scale
            )
        self._entities_to_update = {}

    def meshes(self) -> list[InstanceMesh]:
        """Return the meshes in draw order: chunks back to front, then entities."""
        chunk_meshes = [
            self._chunks_to_render[key].instance_mesh for key in sorted(self._chunks_to_render)
        ]
        entity_meshes = [mesh.instance_mesh for mesh in self._entities_to_render.values()]
        return chunk_meshes + entity_meshes


def create_world_mesh(tiles_dir: str | Path, scale: float) -> WorldMesh:
    """Load the tile assets under ``tiles_dir`` and return an empty world mesh."""
    registry = TextureRegistryBuilder().register_tiles(load_blocks(tiles_dir)).build()
    return WorldMesh(registry, scale)