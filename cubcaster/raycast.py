"""Grid ray casting: the player, the world grid and wall intersections."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from .errors import SceneError

TILE_SIZE = 64
DEGREE = 0.0174533
FOV_DEGREES = 60
DEFAULT_SPEED = 15

_HALF_PI = math.pi / 2
_THREE_HALF_PI = 3 * math.pi / 2
_TWO_PI = 2 * math.pi
_EPSILON = 0.0001

_DIRECTIONS = {"E": math.pi, "N": _HALF_PI, "W": 0.0, "S": _THREE_HALF_PI}
_WALL_CHARS = frozenset("1 \n")

# Corner patterns checked when moving diagonally past two walls: the two
# neighbouring cells that must both be walls, and for each quadrant of the
# player's angle the movement direction that is blocked.
_CORNERS = (
    ((1, 0), (0, 1), (3, 1, 4, 2)),
    ((0, 1), (-1, 0), (2, 3, 1, 4)),
    ((0, -1), (-1, 0), (4, 2, 3, 1)),
    ((0, -1), (1, 0), (1, 4, 2, 3)),
)


class Side(Enum):
    """The wall face a ray hit, named after the texture drawn on it."""

    NORTH = "NO"
    SOUTH = "SO"
    WEST = "WE"
    EAST = "EA"


def normalize_angle(angle: float) -> float:
    """Bring an angle that is at most one turn out of range back into it."""
    if angle < 0:
        angle += _TWO_PI
    if angle > _TWO_PI:
        angle -= _TWO_PI
    return angle


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    """Euclidean distance between two points."""
    return math.sqrt((bx - ax) * (bx - ax) + (by - ay) * (by - ay))


def rgb_to_int(rgb: Iterable[int]) -> int:
    """Pack an ``(r, g, b)`` triple into a single ``0xRRGGBB`` integer."""
    r, g, b = rgb
    return (r << 16) + (g << 8) + b


def direction_angle(c: str) -> float | None:
    """Viewing angle for a player marker, or ``None`` if ``c`` is not one."""
    return _DIRECTIONS.get(c)


def texture_side(angle: float, vertical: bool) -> Side:
    """Which wall face a ray at ``angle`` hit, given the kind of grid line."""
    if vertical:
        if angle <= _HALF_PI or angle >= _THREE_HALF_PI:
            return Side.WEST
        return Side.EAST
    if angle <= math.pi:
        return Side.NORTH
    return Side.SOUTH


def _cell(value: float) -> int:
    return int(value / TILE_SIZE)


@dataclass
class Player:
    """Player position in pixels and viewing angle in radians."""

    x: float
    y: float
    angle: float
    speed: int = DEFAULT_SPEED

    @property
    def dx(self) -> float:
        """Horizontal step for one move along the viewing direction."""
        return math.cos(self.angle) * self.speed

    @property
    def dy(self) -> float:
        """Vertical step for one move along the viewing direction."""
        return math.sin(self.angle) * self.speed


def find_player(grid: Sequence[str]) -> Player:
    """Place the player at the centre of the first marker cell of ``grid``."""
    for row_index, row in enumerate(grid):
        for col_index, c in enumerate(row.split("\n", 1)[0]):
            angle = direction_angle(c)
            if angle is not None:
                return Player(
                    x=TILE_SIZE * col_index + TILE_SIZE / 2,
                    y=TILE_SIZE * row_index + TILE_SIZE / 2,
                    angle=angle,
                )
    raise SceneError("player not found x_x")


def _quadrant(angle: float) -> int | None:
    if angle < _HALF_PI:
        return 0
    if _HALF_PI < angle < math.pi:
        return 1
    if math.pi < angle < _THREE_HALF_PI:
        return 2
    if angle > _THREE_HALF_PI:
        return 3
    return None


@dataclass
class World:
    """The map grid with its measured size."""

    grid: tuple[str, ...]
    width: int = field(init=False)
    height: int = field(init=False)
    max_fov: int = field(init=False)

    def __post_init__(self) -> None:
        self.grid = tuple(self.grid)
        self.width = max(
            (len(row.split("\n", 1)[0].rstrip("#")) for row in self.grid), default=0
        )
        self.height = len(self.grid)
        self.max_fov = max(self.width, self.height) + 1

    def _char_at(self, col: int, row: int) -> str:
        if 0 <= row < len(self.grid) and 0 <= col < len(self.grid[row]):
            return self.grid[row][col]
        return ""

    def is_wall(self, x: float, y: float) -> bool:
        """Tell whether the pixel position ``(x, y)`` lies in a wall.

        Positions outside the grid are open; the cell just past the end of a
        short row counts as a wall, and so do spaces.
        """
        col, row = _cell(x), _cell(y)
        if col >= self.width or row >= self.height or col < 0 or row < 0:
            return False
        line = self.grid[row]
        if len(line) < col:
            return False
        if col == len(line):
            return True
        return line[col] in _WALL_CHARS

    def corner_blocked(
        self, player: Player, new_x: float, new_y: float, direction: int
    ) -> bool:
        """Tell whether a move into a new cell slips diagonally between two walls.

        ``direction`` is 1 for a step left, 2 for a step right, 3 forward
        and 4 backward.  A move that stays in the same cell is never blocked.
        """
        if _cell(new_x) == _cell(player.x) and _cell(new_y) == _cell(player.y):
            return False
        quadrant = _quadrant(player.angle)
        if quadrant is None:
            return False
        col, row = _cell(new_x), _cell(new_y)
        for (ax, ay), (bx, by), blocked in _CORNERS:
            if (
                self._char_at(col + ax, row + ay) == "1"
                and self._char_at(col + bx, row + by) == "1"
                and blocked[quadrant] == direction
            ):
                return True
        return False


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall."""

    x: float
    y: float
    distance: float
    vertical: bool
    angle: float

    @property
    def side(self) -> Side:
        """The wall face that was hit."""
        return texture_side(self.angle, self.vertical)

    @property
    def offset(self) -> int:
        """Pixel coordinate along the wall, used to pick a texture column."""
        return int(self.y) if self.vertical else int(self.x)


def _march(
    world: World,
    player: Player,
    x: float,
    y: float,
    step_x: float,
    step_y: float,
    angle: float,
    vertical: bool,
) -> RayHit | None:
    cells = world.width * world.height
    for _ in range(world.max_fov):
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        index = (int(y) >> 6) * world.width + (int(x) >> 6)
        if 0 < index < cells and world.is_wall(x, y):
            return RayHit(x, y, distance(player.x, player.y, x, y), vertical, angle)
        x += step_x
        y += step_y
    return None


def cast_horizontal(world: World, player: Player, angle: float) -> RayHit | None:
    """Follow a ray across horizontal grid lines until it meets a wall."""
    if angle in (0.0, math.pi):
        return None
    a_tan = -1 / math.tan(angle)
    base = (int(player.y) // TILE_SIZE) * TILE_SIZE
    if angle < math.pi:
        y = base - _EPSILON
        step_y = -TILE_SIZE
    else:
        y = base + TILE_SIZE
        step_y = TILE_SIZE
    x = (player.y - y) * a_tan + player.x
    step_x = -step_y * a_tan
    return _march(world, player, x, y, step_x, step_y, angle, False)


def cast_vertical(world: World, player: Player, angle: float) -> RayHit | None:
    """Follow a ray across vertical grid lines until it meets a wall."""
    if angle in (0.0, math.pi):
        return None
    n_tan = -math.tan(angle)
    base = (int(player.x) // TILE_SIZE) * TILE_SIZE
    if _HALF_PI < angle < _THREE_HALF_PI:
        x = base + TILE_SIZE
        step_x = TILE_SIZE
    elif angle < _HALF_PI or angle > _THREE_HALF_PI:
        x = base - _EPSILON
        step_x = -TILE_SIZE
    else:
        return None
    y = (player.x - x) * n_tan + player.y
    step_y = -step_x * n_tan
    return _march(world, player, x, y, step_x, step_y, angle, True)


def cast_ray(world: World, player: Player, angle: float) -> RayHit | None:
    """Nearest wall hit along ``angle``; a tie goes to the vertical line."""
    horizontal = cast_horizontal(world, player, angle)
    vertical = cast_vertical(world, player, angle)
    if horizontal is None:
        return vertical
    if vertical is None:
        return horizontal
    if horizontal.distance < vertical.distance:
        return horizontal
    return vertical


def cast_view(world: World, player: Player, width: int) -> list[RayHit | None]:
    """Cast one ray per screen column across the field of view."""
    angle = normalize_angle(player.angle - DEGREE * (FOV_DEGREES / 2))
    step = DEGREE / (width / FOV_DEGREES)
    hits: list[RayHit | None] = []
    for _ in range(width):
        hits.append(cast_ray(world, player, angle))
        angle = normalize_angle(angle + step)
    return hits