"""Drawing the three-dimensional view and the minimap into pixel arrays."""

from __future__ import annotations

import math
from typing import Mapping, Sequence

import numpy as np

from .raycast import TILE_SIZE, Player, RayHit, Side, World, cast_view, normalize_angle

HALF_FOV = 0.523599
MINIMAP_CELL = 10

MINIMAP_FLOOR = 0x808080
MINIMAP_WALL = 0x339999
MINIMAP_BORDER = 0x1100FF00
MINIMAP_PLAYER = 0x0000FF
MINIMAP_HEADING = 0xFF0000

_PLAYER_RADIUS = 5
_HEADING_LENGTH = 10
_MAX_HEIGHT = 1e9
_WALKABLE = frozenset("0NSWE")


def wall_height(hit: RayHit | None, player_angle: float, width: int) -> float:
    """Projected wall height in pixels for ``hit``, corrected for fish-eye."""
    if hit is None:
        return 0.0
    ratio = (width / 2) / math.tan(HALF_FOV)
    corrected = hit.distance * math.cos(normalize_angle(player_angle - hit.angle))
    if corrected <= 0:
        return math.inf
    return TILE_SIZE * ratio / corrected


def draw_column(
    frame: np.ndarray,
    x: int,
    height: float,
    texture: np.ndarray,
    offset: int,
    ceiling: int,
    floor: int,
) -> None:
    """Fill column ``x`` of ``frame`` with ceiling, textured wall and floor."""
    rows = frame.shape[0]
    height = min(height, _MAX_HEIGHT)
    half = rows / 2
    top = int(half - height / 2)
    bottom = int(half + height / 2)
    ys = np.arange(rows)
    column = np.full(rows, floor, dtype=frame.dtype)
    column[ys < top] = ceiling
    wall = (ys >= top) & (ys < bottom)
    if height > 0 and wall.any():
        tex_y = ((ys[wall] - top) * TILE_SIZE / height).astype(np.int64)
        tex_y = np.clip(tex_y, 0, TILE_SIZE - 1)
        tex_h, tex_w = texture.shape[:2]
        tex_col = (offset % TILE_SIZE) * tex_w // TILE_SIZE
        column[wall] = texture[tex_y * tex_h // TILE_SIZE, tex_col]
    frame[:, x] = column


def render_view(
    world: World,
    player: Player,
    textures: Mapping[Side, np.ndarray],
    ceiling: int,
    floor: int,
    width: int,
    height: int,
) -> np.ndarray:
    """Render the player's view as a ``(height, width)`` array of packed colours."""
    frame = np.zeros((height, width), dtype=np.uint32)
    for x, hit in enumerate(cast_view(world, player, width)):
        column_height = wall_height(hit, player.angle, width)
        if hit is None:
            texture = np.zeros((1, 1), dtype=np.uint32)
            offset = 0
        else:
            texture = textures[hit.side]
            offset = hit.offset
        draw_column(frame, x, column_height, texture, offset, ceiling, floor)
    return frame


def minimap_cell_color(world: World, col: int, row: int) -> int:
    """Minimap colour of a grid cell: floor, wall, or black for anything else."""
    if col < 0 or row < 0 or col >= world.width or row >= world.height:
        return 0
    line = world.grid[row]
    if len(line) < col:
        return 0
    c = line[col] if col < len(line) else ""
    if c and c in _WALKABLE:
        return MINIMAP_FLOOR
    if c == "1":
        return MINIMAP_WALL
    return 0


def _put(image: np.ndarray, x: int, y: int, color: int) -> None:
    rows, cols = image.shape
    if 0 <= x < cols and 0 <= y < rows:
        image[y, x] = color


def _cell_indices(positions: np.ndarray, magic: float, start: float) -> np.ndarray:
    return np.trunc(magic / MINIMAP_CELL + (positions - start) / MINIMAP_CELL).astype(np.int64)


def _draw_cells(image: np.ndarray, world: World, player: Player) -> None:
    rows, cols = image.shape
    pos_x = player.x / TILE_SIZE
    pos_y = player.y / TILE_SIZE
    start_x = max(cols / 2 - pos_x * MINIMAP_CELL, 0.0)
    start_y = max(rows / 2 - pos_y * MINIMAP_CELL, 0.0)
    magic_x = pos_x * MINIMAP_CELL - cols / 2 if start_x == 0 else 0.0
    magic_y = pos_y * MINIMAP_CELL - rows / 2 if start_y == 0 else 0.0
    xs = np.arange(int(start_x), cols)
    ys = np.arange(int(start_y), rows)
    if xs.size == 0 or ys.size == 0:
        return
    cell_cols = _cell_indices(xs, magic_x, start_x)
    cell_rows = _cell_indices(ys, magic_y, start_y)
    unique_cols, col_index = np.unique(cell_cols, return_inverse=True)
    unique_rows, row_index = np.unique(cell_rows, return_inverse=True)
    table = np.array(
        [[minimap_cell_color(world, int(c), int(r)) for c in unique_cols] for r in unique_rows],
        dtype=image.dtype,
    )
    image[int(start_y):, int(start_x):] = table[np.ix_(row_index, col_index)]


def _draw_player(image: np.ndarray, player: Player) -> None:
    rows, cols = image.shape
    cx, cy = cols / 2, rows / 2
    span = range(-_PLAYER_RADIUS, 2 * _PLAYER_RADIUS)
    for i in span:
        for j in span:
            if int(math.sqrt(i * i + j * j)) <= _PLAYER_RADIUS:
                _put(image, int(cx + i), int(cy + j), MINIMAP_PLAYER)
    d_x = math.cos(player.angle) * _HEADING_LENGTH
    d_y = math.sin(player.angle) * _HEADING_LENGTH
    pixels = int(math.sqrt(d_x * d_x + d_y * d_y))
    if pixels <= 0:
        return
    d_x /= pixels
    d_y /= pixels
    px, py = cx, cy
    for _ in range(pixels):
        _put(image, int(px), int(py), MINIMAP_HEADING)
        px -= d_x
        py -= d_y


def render_minimap(world: World, player: Player, width: int, height: int) -> np.ndarray:
    """Render a minimap centred on the player as a ``(height, width)`` array."""
    image = np.zeros((height, width), dtype=np.uint32)
    if width > 0 and height > 0:
        image[0, :] = MINIMAP_BORDER
        image[-1, :] = MINIMAP_BORDER
        image[:, 0] = MINIMAP_BORDER
        image[:, -1] = MINIMAP_BORDER
    _draw_cells(image, world, player)
    _draw_player(image, player)
    return image


def frame_colors(frame: np.ndarray) -> Sequence[int]:
    """Distinct colours present in a rendered array, in ascending order."""
    return [int(v) for v in np.unique(frame)]