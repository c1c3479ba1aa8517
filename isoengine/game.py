"""The game loop: simulation ticks, frame pacing and the display window."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Callable, Sequence

from PIL import Image

from .assets.importer import AssetError
from .ecs.entity import Entity
from .ecs.world import Maybe
from .game_logic.components import GameWorld, Position, RenderEntity, Sprite, Velocity
from .graphics.renderer import Renderer, RenderError
from .mesh.world_mesh import WorldMesh, create_world_mesh

DEFAULT_TILES_DIR = Path("assets/tiles")
DEFAULT_SIZE = (800, 600)
DEFAULT_SCALE = 0.1
TARGET_FPS = 120.0
_U32_MASK = 0xFFFFFFFF


def spawn_player(game_world: GameWorld) -> Entity:
    """Spawn the player entity into ``game_world`` and return it."""
    return game_world.world.spawn_entity(
        Position(6.0, 6.0, 0.0),
        Velocity(-0.01, -0.01, 0.0),
        Sprite("grass"),
    )


def _render_entity(entity: Entity, pos: Position, sprite: Sprite) -> RenderEntity:
    return RenderEntity(entity, (pos.x, pos.y, pos.z), sprite.texture_name)


class Game:
    """Owns the game world, its meshes and the renderer, and paces frames."""

    def __init__(
        self,
        tiles_dir: str | Path = DEFAULT_TILES_DIR,
        width: int = DEFAULT_SIZE[0],
        height: int = DEFAULT_SIZE[1],
        scale: float = DEFAULT_SCALE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self.game_world = GameWorld()
        self.player = spawn_player(self.game_world)
        self.renderer = Renderer(width, height)
        self.world_mesh: WorldMesh | None = None
        self.frame: Image.Image | None = None
        self.target_frame_duration = 1.0 / TARGET_FPS

        try:
            world_mesh = create_world_mesh(tiles_dir, scale)
        except (AssetError, ValueError, LookupError, OSError) as error:
            print(f"Error creating chunk meshes: {error}", file=sys.stderr)
        else:
            world_mesh.update_chunk(self.game_world.chunk)
            self.game_world.world.entity_system(
                self.player,
                (Position, Sprite),
                lambda entity, items: world_mesh.update_entity(_render_entity(entity, *items)),
            )
            self.world_mesh = world_mesh

        self.start = clock()
        self.last_frame = self.start
        self._started = False

    def _simulate(self) -> None:
        def step(entity: Entity, items: tuple[Position, Velocity, Sprite | None]) -> None:
            pos, vel, sprite = items
            pos.x += vel.x
            pos.y += vel.y
            pos.z += vel.z
            if self.world_mesh is not None and sprite is not None:
                self.world_mesh.update_entity(_render_entity(entity, pos, sprite))

        self.game_world.world.system((Position, Velocity, Maybe(Sprite)), step)

    def _redraw(self, now: float) -> Image.Image | None:
        if self.world_mesh is None:
            return None
        time_ms = int((now - self.start) * 1000.0) & _U32_MASK
        try:
            self.world_mesh.update()
        except (LookupError, ValueError) as error:
            print(f"Error updating world mesh: {error}", file=sys.stderr)
        try:
            self.frame = self.renderer.render(self.world_mesh, time_ms)
        except RenderError as error:
            print(f"Error rendering graphics: {error}", file=sys.stderr)
            return None
        return self.frame

    def tick(self) -> Image.Image | None:
        """Advance the simulation one step; return a new frame when one is due."""
        now = self._clock()
        self._simulate()
        first = not self._started
        self._started = True
        if now >= self.last_frame + self.target_frame_duration or first:
            self.last_frame = now
            return self._redraw(now)
        return None

    def run(self) -> None:
        """Open a window and run the game until it is closed."""
        import pygame

        pygame.init()
        try:
            pygame.display.set_mode(self.renderer.size, pygame.RESIZABLE)
            pygame.display.set_caption("isoengine")
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.VIDEORESIZE:
                        self.renderer.resize(event.w, event.h)
                if not running:
                    break
                frame = self.tick()
                if frame is not None:
                    surface = pygame.image.frombuffer(frame.tobytes(), frame.size, "RGBA")
                    screen = pygame.display.get_surface()
                    screen.blit(surface, (0, 0))
                    pygame.display.flip()
                wait = self.last_frame + self.target_frame_duration - self._clock()
                if wait > 0:
                    pygame.time.wait(int(wait * 1000))
        finally:
            pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game window."""
    parser = argparse.ArgumentParser(prog="isoengine", description="Run the isometric game.")
    parser.add_argument("--tiles", type=Path, default=DEFAULT_TILES_DIR, help="tile asset directory")
    parser.add_argument("--width", type=int, default=DEFAULT_SIZE[0])
    parser.add_argument("--height", type=int, default=DEFAULT_SIZE[1])
    parser.add_argument("--scale", type=float, default=DEFAULT_SCALE)
    args = parser.parse_args(argv)

    Game(args.tiles, args.width, args.height, args.scale).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())