import pytest

from isoengine.ecs.world import Maybe
from isoengine.game_logic.components import (
    GameWorld,
    Position,
    RenderEntity,
    Sprite,
    Velocity,
)
from isoengine.map.chunk import generate_chunk


def test_game_world_chunk_is_origin_chunk():
    game_world = GameWorld()
    assert game_world.chunk.pos == (0, 0)
    assert game_world.chunk == generate_chunk((0, 0), 2)


def test_game_world_starts_with_empty_world():
    game_world = GameWorld()
    seen = []
    game_world.world.system(Position, lambda entity, pos: seen.append(entity))
    assert seen == []


def test_movement_system_updates_positions():
    game_world = GameWorld()
    world = game_world.world
    mover = world.spawn_entity(Position(6.0, 6.0, 0.0), Velocity(-0.25, 0.5, 1.0), Sprite("grass"))
    still = world.spawn_entity(Position(1.0, 1.0, 1.0))

    def step(entity, items):
        pos, vel, _sprite = items
        pos.x += vel.x
        pos.y += vel.y
        pos.z += vel.z

    world.system((Position, Velocity, Maybe(Sprite)), step)
    assert world.get_component(mover, Position) == Position(5.75, 6.5, 1.0)
    assert world.get_component(still, Position) == Position(1.0, 1.0, 1.0)


def test_render_entity_snapshot():
    game_world = GameWorld()
    world = game_world.world
    entity = world.spawn_entity(Position(2.0, 3.0, 4.0), Sprite("water"))
    snapshots = []

    def snapshot(found, items):
        pos, sprite = items
        snapshots.append(RenderEntity(found, (pos.x, pos.y, pos.z), sprite.texture_name))

    world.entity_system(entity, (Position, Sprite), snapshot)
    assert snapshots == [RenderEntity(entity, (2.0, 3.0, 4.0), "water")]


def test_render_entity_is_frozen():
    game_world = GameWorld()
    entity = game_world.world.spawn_entity()
    snapshot = RenderEntity(entity, (0.0, 0.0, 0.0), "grass")
    with pytest.raises(AttributeError):
        snapshot.texture_name = "stone"
    assert snapshot.texture_name == "grass"
    assert snapshot == RenderEntity(entity, (0.0, 0.0, 0.0), "grass")