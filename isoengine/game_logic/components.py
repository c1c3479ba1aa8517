"""Game components, render snapshots of entities, and the game world."""

from __future__ import annotations

from dataclasses import dataclass

from ..ecs.entity import Entity
from ..ecs.world import World
from ..map.chunk import Chunk, generate_chunk

WORLD_CHUNK_POS = (0, 0)
WORLD_CHUNK_SIZE = 2


@dataclass
class Position:
    """Location of an entity in world space."""

    x: float
    y: float
    z: float


@dataclass
class Velocity:
    """Per-tick displacement of an entity."""

    x: float
    y: float
    z: float


@dataclass
class Sprite:
    """Name of the texture an entity is drawn with."""

    texture_name: str


@dataclass(frozen=True)
class RenderEntity:
    """What the renderer needs to draw one entity."""

    entity: Entity
    pos: tuple[float, float, float]
    texture_name: str


class GameWorld:
    """The entity world together with the terrain chunk it stands on."""

    def __init__(self) -> None:
        self.world = World()
        self.chunk: Chunk = generate_chunk(WORLD_CHUNK_POS, WORLD_CHUNK_SIZE)