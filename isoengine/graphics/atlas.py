"""Packing tile frames into a single texture atlas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .texture import Texture, TextureHandle, texture_from_color

ATLAS_WIDTH = 2048
ATLAS_BACKGROUND = (255, 255, 255, 255)


@dataclass(frozen=True)
class UVRect:
    """Normalised texture coordinates of one frame inside the atlas."""

    min: tuple[float, float]
    max: tuple[float, float]


@dataclass(frozen=True)
class AtlasImage:
    """RGBA pixels of one frame, rows stored top to bottom."""

    pixels: bytes
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        object.__setattr__(self, "pixels", bytes(self.pixels))
        if len(self.pixels) != self.width * self.height * 4:
            raise ValueError(
                f"expected {self.width * self.height * 4} bytes of pixels, got {len(self.pixels)}"
            )

    def flipped(self) -> AtlasImage:
        """Return the image with its rows in reverse order."""
        stride = self.width * 4
        if stride == 0:
            return self
        rows = [self.pixels[start : start + stride] for start in range(0, len(self.pixels), stride)]
        return AtlasImage(b"".join(reversed(rows)), self.width, self.height)


def _layout(
    images: Sequence[AtlasImage], atlas_width: int
) -> tuple[list[tuple[int, int]], int]:
    """Place images left to right in rows; return their origins and the total height."""
    x = y = row_height = 0
    origins: list[tuple[int, int]] = []
    for image in images:
        if x + image.width > atlas_width:
            x = 0
            y += row_height
            row_height = 0
        origins.append((x, y))
        x += image.width
        row_height = max(row_height, image.height)
    return origins, y + row_height


def calculate_atlas_height(images: Sequence[AtlasImage], atlas_width: int) -> int:
    """Return the height an atlas of ``atlas_width`` needs to hold ``images``."""
    return _layout(images, atlas_width)[1]


class AtlasBuilder:
    """Collects frame images and packs them into one atlas texture."""

    def __init__(self) -> None:
        self.images: list[AtlasImage] = []

    def add_image(self, image: AtlasImage) -> TextureHandle:
        """Queue an image and return its handle, its index in the atlas."""
        self.images.append(image)
        return len(self.images) - 1

    def build(self) -> tuple[Texture, list[UVRect]]:
        """Pack all queued images; return the atlas and one UVRect per handle."""
        if not self.images:
            raise ValueError("AtlasBuilder cannot build: images are empty!")

        origins, atlas_height = _layout(self.images, ATLAS_WIDTH)
        if atlas_height == 0:
            raise ValueError("AtlasBuilder cannot build: images have no height!")

        atlas = texture_from_color(ATLAS_BACKGROUND, ATLAS_WIDTH, atlas_height)
        uvs: list[UVRect] = []
        for image, (x, y) in zip(self.images, origins):
            atlas.write(x, y, image.width, image.height, image.flipped().pixels)
            uvs.append(
                UVRect(
                    min=(x / ATLAS_WIDTH, y / atlas_height),
                    max=((x + image.width) / ATLAS_WIDTH, (y + image.height) / atlas_height),
                )
            )
        return atlas, uvs