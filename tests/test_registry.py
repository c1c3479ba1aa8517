import pytest
from PIL import Image

from isoengine.assets.importer import AnimationDef, AssetError, TileAsset
from isoengine.graphics.registry import TextureRegistryBuilder


def _png(path, color, size=(2, 2)):
    Image.new("RGBA", size, color).save(path)
    return path


def test_register_and_build(tmp_path):
    frames = [_png(tmp_path / "0.png", (1, 1, 1, 255)), _png(tmp_path / "1.png", (2, 2, 2, 255))]
    animation = AnimationDef(100, True)
    asset = TileAsset("grass", (1, 2, 3, 4), frames, animation)
    registry = TextureRegistryBuilder().register_tiles([asset]).build()
    tile = registry.handles["grass"]
    assert tile.frames == [0, 1]
    assert tile.tint == (1, 2, 3, 4)
    assert tile.animation == animation
    assert len(registry.uvs) == 2
    assert registry.atlas.height == 2


def test_handles_continue_across_assets(tmp_path):
    first = TileAsset("a", (0, 0, 0, 0), [_png(tmp_path / "a.png", (1, 0, 0, 255))])
    second = TileAsset("b", (0, 0, 0, 0), [_png(tmp_path / "b.png", (0, 1, 0, 255))])
    registry = TextureRegistryBuilder().register_tiles([first, second]).build()
    assert registry.handles["a"].frames == [0]
    assert registry.handles["b"].frames == [1]


def test_atlas_holds_frame_pixels(tmp_path):
    color = (9, 8, 7, 255)
    asset = TileAsset("dot", (0, 0, 0, 0), [_png(tmp_path / "dot.png", color, (1, 1))])
    registry = TextureRegistryBuilder().register_tiles([asset]).build()
    assert registry.atlas.to_image().getpixel((0, 0)) == color


def test_missing_frame_rejected(tmp_path):
    asset = TileAsset("ghost", (0, 0, 0, 0), [tmp_path / "missing.png"])
    with pytest.raises(AssetError):
        TextureRegistryBuilder().register_tiles([asset])


def test_unreadable_frame_rejected(tmp_path):
    path = tmp_path / "broken.png"
    path.write_text("not an image")
    asset = TileAsset("broken", (0, 0, 0, 0), [path])
    with pytest.raises(AssetError):
        TextureRegistryBuilder().register_tiles([asset])


def test_build_without_tiles_fails():
    with pytest.raises(ValueError):
        TextureRegistryBuilder().build()