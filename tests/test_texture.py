import pytest
from PIL import Image

from isoengine.graphics.texture import Texture, texture_from_color, texture_from_file


def test_from_color_fills_every_pixel():
    texture = texture_from_color((1, 2, 3, 4), 3, 2)
    image = texture.to_image()
    assert image.size == (3, 2)
    assert {image.getpixel((x, y)) for x in range(3) for y in range(2)} == {(1, 2, 3, 4)}


def test_write_region():
    texture = texture_from_color((0, 0, 0, 255), 4, 4)
    red = (255, 0, 0, 255)
    texture.write(1, 2, 2, 2, bytes(red) * 4)
    image = texture.to_image()
    painted = {(x, y) for x in range(4) for y in range(4) if image.getpixel((x, y)) == red}
    assert painted == {(1, 2), (2, 2), (1, 3), (2, 3)}
    assert image.getpixel((0, 0)) == (0, 0, 0, 255)


def test_write_out_of_bounds():
    texture = texture_from_color((0, 0, 0, 0), 2, 2)
    with pytest.raises(ValueError):
        texture.write(1, 1, 2, 1, bytes(8))


def test_write_wrong_length():
    texture = texture_from_color((0, 0, 0, 0), 2, 2)
    with pytest.raises(ValueError):
        texture.write(0, 0, 2, 2, bytes(15))


def test_from_file_round_trip(tmp_path):
    original = Image.new("RGBA", (2, 3), (5, 6, 7, 8))
    original.putpixel((1, 2), (100, 110, 120, 130))
    path = tmp_path / "frame.png"
    original.save(path)
    texture = texture_from_file(path)
    assert (texture.width, texture.height) == (2, 3)
    assert texture.to_image().tobytes() == original.tobytes()


def test_from_file_adds_opaque_alpha(tmp_path):
    path = tmp_path / "rgb.png"
    Image.new("RGB", (1, 1), (10, 20, 30)).save(path)
    assert texture_from_file(path).to_image().getpixel((0, 0)) == (10, 20, 30, 255)


def test_from_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        texture_from_file(tmp_path / "absent.png")


def test_from_color_rejects_bad_channel():
    with pytest.raises(ValueError):
        texture_from_color((300, 0, 0, 0), 1, 1)


def test_texture_pixel_length_validated():
    with pytest.raises(ValueError):
        Texture(2, 2, bytearray(3))