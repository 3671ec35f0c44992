"""Player movement: walking, strafing and turning inside the world grid."""

from __future__ import annotations

from enum import Enum

from .raycast import Player, World, normalize_angle

TURN_STEP = 0.1

# Direction codes understood by World.corner_blocked.
_STEP_LEFT = 1
_STEP_RIGHT = 2
_STEP_FORWARD = 3
_STEP_BACKWARD = 4


class Action(Enum):
    """Something the player can do in one step."""

    FORWARD = "forward"
    BACKWARD = "backward"
    STRAFE_LEFT = "strafe_left"
    STRAFE_RIGHT = "strafe_right"
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"


def rotate(player: Player, delta: float) -> None:
    """Turn the player by ``delta`` radians, keeping the angle within one turn."""
    player.angle = normalize_angle(player.angle + delta)


def try_move(world: World, player: Player, dx: float, dy: float, direction: int) -> bool:
    """Shift the player by ``(dx, dy)`` unless a wall or a wall corner is in the way.

    Returns whether the player actually moved.
    """
    new_x = player.x + dx
    new_y = player.y + dy
    if world.is_wall(new_x, new_y) or world.corner_blocked(player, new_x, new_y, direction):
        return False
    player.x = new_x
    player.y = new_y
    return True


def apply_action(world: World, player: Player, action: Action) -> bool:
    """Carry out ``action``; returns whether the player's position or view changed."""
    if action is Action.TURN_LEFT:
        rotate(player, -TURN_STEP)
        return True
    if action is Action.TURN_RIGHT:
        rotate(player, TURN_STEP)
        return True
    dx, dy = player.dx, player.dy
    steps = {
        Action.FORWARD: (-dx, -dy, _STEP_FORWARD),
        Action.BACKWARD: (dx, dy, _STEP_BACKWARD),
        Action.STRAFE_LEFT: (-dy, dx, _STEP_LEFT),
        Action.STRAFE_RIGHT: (dy, -dx, _STEP_RIGHT),
    }
    step_x, step_y, direction = steps[action]
    return try_move(world, player, step_x, step_y, direction)