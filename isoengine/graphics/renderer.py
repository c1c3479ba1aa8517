"""Software rendering of the world mesh into an RGBA frame."""

from __future__ import annotations

from typing import Sequence

from PIL import Image, ImageChops

from ..mesh.data import Model
from ..mesh.instance_mesh import DrawCall
from ..mesh.world_mesh import WorldMesh
from .atlas import UVRect

CLEAR_COLOR = (0.1, 0.2, 0.3, 1.0)
_OPAQUE_WHITE = (255, 255, 255, 255)


class RenderError(Exception):
    """Raised when a frame cannot be rendered."""


def frame_index(time_ms: int, frame_count: int, frame_time_ms: int) -> int:
    """Return which of ``frame_count`` animation frames shows at ``time_ms``.

    Animations loop; a frame time of zero means the tile is not animated.
    """
    if frame_count <= 0:
        raise ValueError(f"frame_count must be positive, got {frame_count}")
    if frame_time_ms == 0:
        return 0
    return (time_ms // frame_time_ms) % frame_count


def _to_byte(channel: float) -> int:
    return max(0, min(255, int(channel * 255.0 + 0.5)))


def _transform(model: Model, position: Sequence[float]) -> tuple[float, float]:
    x, y, z = position
    c0, c1, c2, c3 = model
    out_x = c0[0] * x + c1[0] * y + c2[0] * z + c3[0]
    out_y = c0[1] * x + c1[1] * y + c2[1] * z + c3[1]
    out_w = c0[3] * x + c1[3] * y + c2[3] * z + c3[3]
    if out_w not in (0.0, 1.0):
        out_x /= out_w
        out_y /= out_w
    return out_x, out_y


class Renderer:
    """Draws world meshes into an in-memory RGBA frame of a fixed size."""

    def __init__(
        self, width: int, height: int, clear_color: Sequence[float] = CLEAR_COLOR
    ) -> None:
        if width <= 0 or height <= 0:
            raise RenderError("Could not get surface configuration")
        self.width = width
        self.height = height
        r, g, b, a = clear_color
        self.clear_pixel = (_to_byte(r), _to_byte(g), _to_byte(b), _to_byte(a))

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def resize(self, width: int, height: int) -> None:
        """Change the frame size; a zero dimension is ignored."""
        if width == 0 or height == 0:
            return
        self.width = width
        self.height = height

    def render(self, world_mesh: WorldMesh | None, time_ms: int = 0) -> Image.Image:
        """Clear the frame and draw ``world_mesh`` as it looks at ``time_ms``."""
        frame = Image.new("RGBA", self.size, self.clear_pixel)
        if world_mesh is None:
            return frame

        registry = world_mesh.texture_registry
        atlas = registry.atlas.to_image()
        for mesh in world_mesh.meshes():
            for call in mesh.draw_calls():
                self._draw(frame, atlas, registry.uvs, call, time_ms)
        return frame

    def _to_pixels(self, clip_x: float, clip_y: float) -> tuple[float, float]:
        return (clip_x + 1.0) * 0.5 * self.width, (1.0 - clip_y) * 0.5 * self.height

    def _draw(
        self,
        frame: Image.Image,
        atlas: Image.Image,
        uvs: Sequence[UVRect],
        call: DrawCall,
        time_ms: int,
    ) -> None:
        instance = call.instance
        if not call.positions:
            return
        frame_number = instance.base_frame + frame_index(
            time_ms, instance.frame_count, instance.frame_time_ms
        )
        if not 0 <= frame_number < len(uvs):
            raise RenderError(f"Texture frame {frame_number} has no atlas rectangle")
        uv = uvs[frame_number]

        points = [self._to_pixels(*_transform(instance.model, p)) for p in call.positions]
        left = round(min(x for x, _ in points))
        right = round(max(x for x, _ in points))
        top = round(min(y for _, y in points))
        bottom = round(max(y for _, y in points))
        width, height = right - left, bottom - top
        if width <= 0 or height <= 0:
            return

        x0, y0, x1, y1 = (max(0, left), max(0, top), min(self.width, right), min(self.height, bottom))
        if x0 >= x1 or y0 >= y1:
            return

        atlas_w, atlas_h = atlas.size
        region = (
            round(uv.min[0] * atlas_w),
            round(uv.min[1] * atlas_h),
            round(uv.max[0] * atlas_w),
            round(uv.max[1] * atlas_h),
        )
        if region[2] <= region[0] or region[3] <= region[1]:
            return
        # Frames are stored bottom row first in the atlas.
        sprite = atlas.crop(region).transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        sprite = sprite.resize((width, height), Image.Resampling.NEAREST)
        if tuple(instance.color) != _OPAQUE_WHITE:
            sprite = ImageChops.multiply(sprite, Image.new("RGBA", sprite.size, instance.color))

        sprite = sprite.crop((x0 - left, y0 - top, x1 - left, y1 - top))
        frame.alpha_composite(sprite, (x0, y0))