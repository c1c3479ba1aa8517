import pytest

from isoengine.graphics.atlas import (
    ATLAS_BACKGROUND,
    ATLAS_WIDTH,
    AtlasBuilder,
    AtlasImage,
    UVRect,
    calculate_atlas_height,
)


def _image(width, height, color):
    return AtlasImage(bytes(color) * (width * height), width, height)


def test_add_image_returns_sequential_handles():
    builder = AtlasBuilder()
    handles = [builder.add_image(_image(1, 1, (0, 0, 0, 0))) for _ in range(3)]
    assert handles == list(range(3))


def test_height_single_row_is_tallest_image():
    images = [_image(3, 2, (0, 0, 0, 0)), _image(3, 4, (0, 0, 0, 0))]
    assert calculate_atlas_height(images, 6) == 4


def test_height_wraps_to_new_row():
    images = [_image(3, 2, (0, 0, 0, 0)), _image(3, 4, (0, 0, 0, 0))]
    assert calculate_atlas_height(images, 5) == 2 + 4


def test_height_of_nothing():
    assert calculate_atlas_height([], ATLAS_WIDTH) == 0


def test_flipped_reverses_rows():
    image = AtlasImage(bytes(range(16)), 2, 2)
    assert image.flipped().pixels == bytes(range(8, 16)) + bytes(range(8))
    assert image.flipped().flipped() == image


def test_image_pixel_length_validated():
    with pytest.raises(ValueError):
        AtlasImage(bytes(5), 1, 1)


def test_build_empty_fails():
    with pytest.raises(ValueError):
        AtlasBuilder().build()


def test_build_places_and_flips():
    top = (255, 0, 0, 255)
    bottom = (0, 0, 255, 255)
    green = (0, 255, 0, 255)
    builder = AtlasBuilder()
    builder.add_image(AtlasImage(bytes(top) * 2 + bytes(bottom) * 2, 2, 2))
    builder.add_image(_image(3, 1, green))
    atlas, uvs = builder.build()

    assert atlas.width == ATLAS_WIDTH
    assert atlas.height == 2
    image = atlas.to_image()
    assert image.getpixel((0, 0)) == bottom
    assert image.getpixel((0, 1)) == top
    assert image.getpixel((2, 0)) == green
    assert image.getpixel((10, 0)) == ATLAS_BACKGROUND

    assert uvs[0] == UVRect((0.0, 0.0), (2 / ATLAS_WIDTH, 2 / atlas.height))
    assert uvs[1].min == (2 / ATLAS_WIDTH, 0.0)
    assert len(uvs) == len(builder.images)


def test_image_wider_than_atlas_fails():
    builder = AtlasBuilder()
    builder.add_image(_image(ATLAS_WIDTH + 1, 1, (0, 0, 0, 0)))
    with pytest.raises(ValueError):
        builder.build()