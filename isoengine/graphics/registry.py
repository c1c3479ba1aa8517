"""The registry of tile textures packed into one atlas."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from PIL import Image

from ..assets.importer import AssetError, TileAsset
from .atlas import AtlasBuilder, AtlasImage, UVRect
from .texture import Texture, TileTextureHandle
from .tile import TileTexture


@dataclass
class TextureRegistry:
    """The atlas, its frame rectangles, and tiles looked up by name."""

    atlas: Texture
    uvs: list[UVRect]
    handles: dict[str, TileTexture]


class TextureRegistryBuilder:
    """Loads tile frames into an atlas builder and records their handles."""

    def __init__(self) -> None:
        self._atlas_builder = AtlasBuilder()
        self.handles: dict[str, TileTexture] = {}

    def _load_frame(self, asset: TileAsset, frame: str | Path) -> TileTextureHandle:
        path = Path(frame)
        if not path.is_file():
            raise AssetError(f"TileAsset {asset.name} frame: {path} is not a file")
        try:
            with Image.open(path) as image:
                rgba = image.convert("RGBA")
        except OSError as error:
            raise AssetError(f"TileAsset {asset.name} frame {path}: {error}") from error
        width, height = rgba.size
        return self._atlas_builder.add_image(AtlasImage(rgba.tobytes(), width, height))

    def register_tiles(self, tile_assets: Iterable[TileAsset]) -> TextureRegistryBuilder:
        """Add every frame of every asset to the atlas; return the builder."""
        for asset in tile_assets:
            frames = [self._load_frame(asset, frame) for frame in asset.frames]
            self.handles[asset.name] = TileTexture(
                name=asset.name,
                tint=asset.tint,
                frames=frames,
                animation=asset.animation,
            )
        return self

    def build(self) -> TextureRegistry:
        """Pack the atlas and return the finished registry."""
        atlas, uvs = self._atlas_builder.build()
        return TextureRegistry(atlas=atlas, uvs=uvs, handles=dict(self.handles))