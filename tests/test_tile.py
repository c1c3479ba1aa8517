import pytest

from isoengine.assets.importer import AnimationDef
from isoengine.graphics.tile import TileTexture, quad_mesh_data
from isoengine.mesh.data import IDENTITY


def test_quad_indices():
    assert quad_mesh_data().indices == [0, 1, 2, 2, 3, 0]


def test_quad_vertices():
    positions = [v.position for v in quad_mesh_data().vertices]
    assert positions == [
        (-1.0, -1.0, 0.0),
        (-1.0, 1.0, 0.0),
        (1.0, 1.0, 0.0),
        (1.0, -1.0, 0.0),
    ]


def test_quad_indices_reference_existing_vertices():
    mesh = quad_mesh_data()
    assert max(mesh.indices) < len(mesh.vertices)
    assert min(mesh.indices) >= 0


def test_quad_mesh_is_fresh_each_call():
    first = quad_mesh_data()
    first.indices.append(99)
    assert quad_mesh_data().indices == [0, 1, 2, 2, 3, 0]


def test_animated_instance_data():
    tile = TileTexture("water", (1, 2, 3, 4), [4, 5, 6], AnimationDef(120, True))
    instance = tile.to_instance_data(IDENTITY)
    assert instance.base_frame == 4
    assert instance.frame_count == 3
    assert instance.frame_time_ms == 120
    assert instance.color == (1, 2, 3, 4)
    assert instance.model == IDENTITY


def test_static_instance_has_zero_frame_time():
    tile = TileTexture("grass", (9, 9, 9, 9), [7])
    instance = tile.to_instance_data(IDENTITY)
    assert instance.frame_time_ms == 0
    assert instance.frame_count == 1


def test_tile_without_frames_rejected():
    with pytest.raises(ValueError):
        TileTexture("empty", (0, 0, 0, 0), []).to_instance_data(IDENTITY)