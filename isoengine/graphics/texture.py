"""RGBA textures held in memory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from PIL import Image

TextureHandle = int
TileTextureHandle = TextureHandle

_CHANNELS = 4


@dataclass
class Texture:
    """A width x height RGBA8 image, rows stored top to bottom."""

    width: int
    height: int
    pixels: bytearray

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("texture dimensions must not be negative")
        self.pixels = bytearray(self.pixels)
        if len(self.pixels) != self.width * self.height * _CHANNELS:
            raise ValueError(
                f"expected {self.width * self.height * _CHANNELS} bytes of pixels, "
                f"got {len(self.pixels)}"
            )

    def write(self, x: int, y: int, width: int, height: int, pixels: bytes) -> None:
        """Copy a ``width`` x ``height`` block of RGBA pixels to ``(x, y)``."""
        if x < 0 or y < 0 or width < 0 or height < 0:
            raise ValueError("write region must not be negative")
        if x + width > self.width or y + height > self.height:
            raise ValueError(
                f"write region {width}x{height} at ({x}, {y}) exceeds "
                f"texture of {self.width}x{self.height}"
            )
        data = bytes(pixels)
        row_bytes = width * _CHANNELS
        if len(data) != row_bytes * height:
            raise ValueError(f"expected {row_bytes * height} bytes, got {len(data)}")
        for row in range(height):
            target = ((y + row) * self.width + x) * _CHANNELS
            source = row * row_bytes
            self.pixels[target : target + row_bytes] = data[source : source + row_bytes]

    def to_image(self) -> Image.Image:
        """Return the texture as a Pillow RGBA image."""
        if self.width == 0 or self.height == 0:
            return Image.new("RGBA", (self.width, self.height))
        return Image.frombytes("RGBA", (self.width, self.height), bytes(self.pixels))


def texture_from_file(path: str | Path) -> Texture:
    """Load an image file as an RGBA texture."""
    with Image.open(path) as image:
        rgba = image.convert("RGBA")
    width, height = rgba.size
    return Texture(width, height, bytearray(rgba.tobytes()))


def texture_from_color(color: Sequence[int], width: int, height: int) -> Texture:
    """Return a texture filled with one RGBA colour."""
    pixel = bytes(color)
    if len(pixel) != _CHANNELS:
        raise ValueError("color must have exactly 4 channels")
    if width < 0 or height < 0:
        raise ValueError("texture dimensions must not be negative")
    return Texture(width, height, bytearray(pixel * (width * height)))