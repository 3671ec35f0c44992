import math

import pytest

from cubcaster.errors import SceneError
from cubcaster.raycast import (
    DEGREE,
    TILE_SIZE,
    Player,
    RayHit,
    Side,
    World,
    cast_horizontal,
    cast_ray,
    cast_vertical,
    cast_view,
    direction_angle,
    distance,
    find_player,
    normalize_angle,
    rgb_to_int,
    texture_side,
)

ROOM = ("11111", "10001", "10N01", "10001", "11111")


def centre(col, row):
    return col * TILE_SIZE + TILE_SIZE / 2, row * TILE_SIZE + TILE_SIZE / 2


@pytest.fixture
def room():
    return World(ROOM)


@pytest.fixture
def player():
    x, y = centre(2, 2)
    return Player(x=x, y=y, angle=math.pi / 2)


def test_normalize_angle_wraps_negative():
    assert normalize_angle(-1.0) == pytest.approx(2 * math.pi - 1.0)


def test_normalize_angle_wraps_large():
    assert normalize_angle(7.0) == pytest.approx(7.0 - 2 * math.pi)


def test_normalize_angle_keeps_in_range():
    assert normalize_angle(1.0) == 1.0


def test_distance_pythagorean():
    assert distance(0, 0, 3, 4) == 5


def test_distance_symmetric_and_zero():
    assert distance(1.5, 2.0, -3.0, 7.0) == distance(-3.0, 7.0, 1.5, 2.0)
    assert distance(4.0, 4.0, 4.0, 4.0) == 0


def test_rgb_to_int_packs_channels():
    assert rgb_to_int((255, 0, 0)) == 0xFF0000
    assert rgb_to_int((0, 0, 255)) == 0x0000FF
    assert rgb_to_int((0x12, 0x34, 0x56)) == 0x123456


@pytest.mark.parametrize(
    "marker, expected",
    [("E", math.pi), ("N", math.pi / 2), ("W", 0.0), ("S", 3 * math.pi / 2)],
)
def test_direction_angle(marker, expected):
    assert direction_angle(marker) == expected


def test_direction_angle_rejects_other_chars():
    assert direction_angle("0") is None


def test_texture_side():
    assert texture_side(0.0, True) is Side.WEST
    assert texture_side(math.pi, True) is Side.EAST
    assert texture_side(math.pi / 2, False) is Side.NORTH
    assert texture_side(3 * math.pi / 2, False) is Side.SOUTH


def test_find_player_centres_in_cell():
    found = find_player(ROOM)
    assert found.x // TILE_SIZE == 2
    assert found.y // TILE_SIZE == 2
    assert found.x % TILE_SIZE == TILE_SIZE / 2
    assert found.angle == math.pi / 2


def test_find_player_south_steps():
    found = find_player(("111", "1S1", "111"))
    assert found.angle == 3 * math.pi / 2
    assert found.dy == pytest.approx(-found.speed)
    assert found.dx == pytest.approx(0.0, abs=1e-9)


def test_find_player_missing():
    with pytest.raises(SceneError):
        find_player(("111", "101", "111"))


def test_world_dimensions(room):
    assert room.width == 5
    assert room.height == 5
    assert room.max_fov == 6


def test_is_wall(room):
    assert room.is_wall(*centre(0, 0))
    assert not room.is_wall(*centre(1, 1))
    assert not room.is_wall(*centre(7, 1))
    assert not room.is_wall(-TILE_SIZE * 2, 10)


def test_is_wall_short_row():
    world = World(("111111", "1N01", "111111"))
    assert world.is_wall(*centre(4, 1))
    assert not world.is_wall(*centre(5, 1))


def test_cast_vertical_west(room, player):
    hit = cast_vertical(room, player, 1e-6)
    assert hit is not None
    assert hit.vertical
    assert hit.x == pytest.approx(TILE_SIZE, abs=1e-3)
    assert hit.y == pytest.approx(player.y, abs=1e-3)
    assert hit.distance == pytest.approx(player.x - TILE_SIZE, abs=1e-3)
    assert hit.side is Side.WEST


def test_cast_vertical_parallel_rays_miss(room, player):
    assert cast_vertical(room, player, 0.0) is None
    assert cast_vertical(room, player, math.pi / 2) is None


def test_cast_horizontal_north(room, player):
    hit = cast_horizontal(room, player, math.pi / 2)
    assert hit is not None
    assert not hit.vertical
    assert hit.y == pytest.approx(TILE_SIZE, abs=1e-3)
    assert hit.x == pytest.approx(player.x, abs=1e-3)
    assert hit.side is Side.NORTH


def test_cast_horizontal_south(room, player):
    hit = cast_horizontal(room, player, 3 * math.pi / 2)
    assert hit is not None
    assert hit.y == pytest.approx(4 * TILE_SIZE)
    assert hit.side is Side.SOUTH


def test_cast_horizontal_parallel_rays_miss(room, player):
    assert cast_horizontal(room, player, math.pi) is None


def test_cast_ray_east(room, player):
    hit = cast_ray(room, player, math.pi - 1e-6)
    assert hit is not None
    assert hit.vertical
    assert hit.x == pytest.approx(4 * TILE_SIZE)
    assert hit.side is Side.EAST
    assert hit.offset == int(hit.y)


def test_cast_ray_picks_nearest(room, player):
    angle = 0.7
    hit = cast_ray(room, player, angle)
    candidates = [
        h for h in (cast_horizontal(room, player, angle), cast_vertical(room, player, angle)) if h
    ]
    assert hit is not None
    assert hit.distance == min(h.distance for h in candidates)


def test_ray_hit_offset_horizontal():
    hit = RayHit(x=70.7, y=64.0, distance=10.0, vertical=False, angle=math.pi / 2)
    assert hit.offset == 70


def test_cast_view_covers_every_column(room, player):
    player.angle = 1.0
    hits = cast_view(room, player, 60)
    assert len(hits) == 60
    assert all(hit is not None and hit.distance > 0 for hit in hits)
    assert hits[0].angle == pytest.approx(normalize_angle(1.0 - 30 * DEGREE))
    assert all(room.is_wall(hit.x, hit.y) for hit in hits)


def test_corner_blocked():
    world = World(("1111", "1001", "1011", "1111"))
    px, py = centre(1, 1)
    player = Player(x=px, y=py, angle=0.5)
    nx, ny = centre(2, 1)
    assert world.corner_blocked(player, nx, ny, 3)
    assert world.corner_blocked(player, nx, ny, 1)
    assert not world.corner_blocked(player, nx, ny, 2)
    assert not world.corner_blocked(player, nx, ny, 4)


def test_corner_blocked_same_cell_and_boundary_angle():
    world = World(("1111", "1001", "1011", "1111"))
    px, py = centre(1, 1)
    player = Player(x=px, y=py, angle=0.5)
    assert not world.corner_blocked(player, px + 5, py + 5, 3)
    player.angle = math.pi / 2
    nx, ny = centre(2, 1)
    assert not any(world.corner_blocked(player, nx, ny, d) for d in (1, 2, 3, 4))