# isoengine

A small isometric tile game engine. It contains:

- an entity-component-system core (`isoengine.ecs`): generational entity
  handles, per-type component storage grouped by archetype, and systems that
  call a function for every entity holding a given set of components;
- Perlin-noise height maps and terrain chunks built from them (`isoengine.map`);
- a tile asset loader that reads `tile.ron` definitions and PNG frames
  (`isoengine.assets.importer`);
- in-memory RGBA textures, a texture atlas packer and a texture registry
  (`isoengine.graphics`);
- isometric instance meshes for chunks and entities, and a world mesh that
  rebuilds them on demand (`isoengine.mesh`);
- a software renderer that draws the world mesh into a Pillow image, and a
  game loop paced at 120 frames per second that shows it in a pygame window
  (`isoengine.graphics.renderer`, `isoengine.game`).

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Running the game

```
isoengine
```

Options:

- `--tiles DIR` – tile asset directory (default `assets/tiles`)
- `--width N`, `--height N` – window size in pixels (default 800 x 600)
- `--scale F` – size of one tile on screen (default 0.1)

The command opens a resizable window, generates a chunk of terrain around the
origin and spawns a player sprite that drifts across the map. If the tile
assets cannot be loaded, an error is printed and the window shows only the
clear colour.

The tile directory holds one sub-directory per tile. Each sub-directory has a
`tile.ron` file and one or more `.png` frames (frames are used in file-name
order; any other file extension is an error):

```
(
    name: "grass",
    tint: (255, 255, 255, 255),
    animation: Some((frame_time_ms: 250, looped: true)),
)
```

The terrain and the player are both drawn with the tile named `grass`, so the
asset directory must contain it.

## Using the ECS

```python
from isoengine.ecs.world import World, Maybe
from isoengine.game_logic.components import Position, Velocity, Sprite

world = World()
player = world.spawn_entity(
    Position(6.0, 6.0, 0.0),
    Velocity(-0.01, -0.01, 0.0),
    Sprite("grass"),
)

def move(entity, params):
    pos, vel, sprite = params   # sprite is None for entities without one
    pos.x += vel.x
    pos.y += vel.y
    pos.z += vel.z

world.system((Position, Velocity, Maybe(Sprite)), move)
```

`world.get_component(player, Position)` returns the component or `None`.
Adding a second component of the same type raises `DuplicateComponentError`;
using an entity that is not alive raises `EntityNotFoundError`.
`world.despawn_entity(player)` removes the entity and all of its components;
its id is then reused with a higher generation.

## Generating terrain

```python
from isoengine.map.chunk import generate_chunk

chunk = generate_chunk((0, 0), 2)
print(len(chunk.tiles))
```

`generate_heightmap(position, size)` in `isoengine.map.noise` returns the
column heights (0 to 5) for the square of radius `size` around `position`.

## Rendering without a window

```python
from isoengine.graphics.renderer import Renderer
from isoengine.mesh.world_mesh import create_world_mesh
from isoengine.map.chunk import generate_chunk

world_mesh = create_world_mesh("assets/tiles", 0.1)
world_mesh.update_chunk(generate_chunk((0, 0), 2))
world_mesh.update()
image = Renderer(800, 600).render(world_mesh, time_ms=0)
image.save("frame.png")
```

Animated tiles loop through their frames according to `frame_time_ms`.

## What it does not do

- Keyboard and mouse input is not handled; only closing and resizing the
  window have an effect.
- Rendering is done in software: each tile is drawn as an axis-aligned,
  nearest-neighbour scaled sprite, with no GPU pipeline or shaders.
- Only one chunk of terrain, around the origin, is generated; there is no
  loading or unloading of chunks as the player moves, and nothing is saved.