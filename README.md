# cubcaster

cubcaster is the core of a first-person maze viewer on a square grid. It
casts rays through a map of walls, moves a player around it with wall and
corner collision, and renders the textured three-dimensional view and a
minimap into numpy arrays of packed `0xRRGGBB` colours.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## The map grid

A map is a sequence of strings, one per row:

* `1` is a wall, `0` is open floor, and a space is empty area, which also
  stops rays and movement.
* One of `N`, `S`, `E`, `W` marks the player's start cell and facing
  direction.

Each cell is 64 pixels wide (`cubcaster.raycast.TILE_SIZE`); player
positions are given in pixels.

## Modules

### `cubcaster.raycast`

* `World(grid)` holds the grid and measures its `width`, `height` and
  `max_fov` (how many grid lines a ray may cross). `World.is_wall(x, y)`
  tells whether a pixel position lies in a wall; `World.corner_blocked(...)`
  stops a move that would slip diagonally between two wall cells.
* `Player(x, y, angle, speed=15)` with `dx` and `dy` giving one step along
  the viewing direction.
* `find_player(grid)` places the player at the centre of the marker cell;
  it raises `SceneError` if there is none.
* `cast_horizontal`, `cast_vertical`, `cast_ray` and `cast_view` return
  `RayHit` values (point, distance, whether a vertical grid line was hit,
  `side` and `offset`), or `None` where a ray meets no wall.
* Helpers: `normalize_angle`, `distance`, `rgb_to_int`, `direction_angle`,
  `texture_side` and the `Side` enum (`NORTH`, `SOUTH`, `WEST`, `EAST`).

### `cubcaster.movement`

* `Action` — `FORWARD`, `BACKWARD`, `STRAFE_LEFT`, `STRAFE_RIGHT`,
  `TURN_LEFT`, `TURN_RIGHT`.
* `apply_action(world, player, action)` carries out one step and returns
  whether anything changed. Turning is by 0.1 radians.
* `rotate(player, delta)` and `try_move(world, player, dx, dy, direction)`
  are the pieces it is built from.

### `cubcaster.render`

* `render_view(world, player, textures, ceiling, floor, width, height)`
  returns a `(height, width)` `uint32` array. `textures` maps each `Side`
  to a 2-D array of packed colours.
* `render_minimap(world, player, width, height)` draws a bordered minimap
  centred on the player, with 10-pixel cells, the player as a disc and a
  heading line.
* `wall_height`, `draw_column`, `minimap_cell_color` and `frame_colors`
  are available on their own.

### `cubcaster.textutil`

String helpers for reading scene header lines and colour values:
`is_path_rgb`, `special_strncmp`, `endswith_ignoring_spaces`,
`is_str_digit`, `parse_int`, `trim_last_spaces`, `has_non_space`,
`extract_value`, `check_commas`, `split_rgb` and `has_cub_extension`.
Invalid input raises `cubcaster.errors.SceneError`, a `ValueError`.

## Example

```python
import numpy as np

from cubcaster.movement import Action, apply_action
from cubcaster.raycast import Side, World, find_player, rgb_to_int
from cubcaster.render import render_minimap, render_view

grid = (
    "111111",
    "100001",
    "10N001",
    "111111",
)
world = World(grid)
player = find_player(grid)

textures = {side: np.full((64, 64), 0x996633, dtype=np.uint32) for side in Side}
ceiling = rgb_to_int((225, 30, 0))
floor = rgb_to_int((220, 100, 0))

apply_action(world, player, Action.TURN_RIGHT)
frame = render_view(world, player, textures, ceiling, floor, 1200, 800)
minimap = render_minimap(world, player, 300, 200)
```

## What it does not do

cubcaster has no command to run and opens no window: it does not read
whole `.cub` scene files into a map, does not load texture images, and
does not handle keyboard or mouse input. A program using it supplies the
grid, the texture arrays and the colours, calls `apply_action` for each
input, and displays the arrays that `render_view` and `render_minimap`
return.