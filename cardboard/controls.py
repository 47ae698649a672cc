#
# PROJECT: cardboard
# MODULE: cardboard/controls.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

"""
Input to camera command dispatch.

Device events are turned into CameraCommand values by pure lookup functions;
`apply_command` evaluates a command against a Camera and returns the new one.
"""

from enum import Enum
from typing import NamedTuple, Optional

from .camera import Camera
from .math_utils import Mat4, deg_to_rad, vertical_axis

CAM_STEP = 1.2 * 2.0
CAM_STEP_ROT = 0.0174533 * 2.0


class Key(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class CommandKind(Enum):
    SIDE_MOVE = "side_move"                  # pan eye and target sideways
    AXIS_MOVE = "axis_move"                  # dolly the eye along the view axis
    ROTATE_EYE_VERTICAL = "rotate_eye_v"     # orbit eye around world Z through target
    ROTATE_EYE_HORIZONTAL = "rotate_eye_h"   # orbit eye around the horizontal axis
    TARGET_AXIS_MOVE = "target_axis_move"    # move target along the view axis
    ROTATE_TARGET = "rotate_target"          # look around: target pivots on the eye


class CameraCommand(NamedTuple):
    kind: CommandKind
    amount: float = 0.0
    # Second angle (degrees) for ROTATE_TARGET, around the horizontal axis
    amount_y: float = 0.0


class PreAction(Enum):
    RESET = "reset"
    CAPTURE = "capture"
    FOLLOW = "follow"
    SAVE = "save"
    PRINT_CAM = "print_cam"
    QUIT = "quit"


# (key, modifier held) -> command
KEY_BINDINGS = {
    (Key.LEFT, False): CameraCommand(CommandKind.SIDE_MOVE, CAM_STEP),
    (Key.LEFT, True): CameraCommand(CommandKind.ROTATE_EYE_VERTICAL, CAM_STEP_ROT),
    (Key.RIGHT, False): CameraCommand(CommandKind.SIDE_MOVE, -CAM_STEP),
    (Key.RIGHT, True): CameraCommand(CommandKind.ROTATE_EYE_VERTICAL, -CAM_STEP_ROT),
    (Key.UP, False): CameraCommand(CommandKind.AXIS_MOVE, -CAM_STEP),
    (Key.UP, True): CameraCommand(CommandKind.ROTATE_EYE_HORIZONTAL, -CAM_STEP_ROT),
    (Key.DOWN, False): CameraCommand(CommandKind.AXIS_MOVE, CAM_STEP),
    (Key.DOWN, True): CameraCommand(CommandKind.ROTATE_EYE_HORIZONTAL, CAM_STEP_ROT),
}

PRE_ACTION_KEYS = {
    'r': PreAction.RESET,
    'c': PreAction.CAPTURE,
    'f': PreAction.FOLLOW,
    's': PreAction.SAVE,
    'p': PreAction.PRINT_CAM,
    'q': PreAction.QUIT,
}


def command_for_key(key: Key, modified: bool = False) -> Optional[CameraCommand]:
    return KEY_BINDINGS.get((key, bool(modified)))


def pre_action_for_key(char: str) -> Optional[PreAction]:
    return PRE_ACTION_KEYS.get(char)


def motion_command(xrel: int, yrel: int) -> Optional[CameraCommand]:
    """Relative pointer motion (degrees per unit) in follow mode."""
    if xrel == 0 and yrel == 0:
        return None
    return CameraCommand(CommandKind.ROTATE_TARGET, float(xrel), float(yrel))


def wheel_command(y: int) -> Optional[CameraCommand]:
    if y == 0:
        return None
    return CameraCommand(CommandKind.TARGET_AXIS_MOVE, CAM_STEP * y)


def _rotate_target(camera: Camera, x_deg: float, y_deg: float) -> Camera:
    eye = camera.eye
    tr = Mat4.translation(eye.x, eye.y, eye.z)
    itr = Mat4.translation(-eye.x, -eye.y, -eye.z)
    hmat = Mat4.from_axis_angle(camera.get_horizontal_axis(), deg_to_rad(y_deg))
    vmat = Mat4.from_axis_angle(vertical_axis(), deg_to_rad(x_deg))
    if x_deg == 0:
        op = tr @ hmat @ itr
    elif y_deg == 0:
        op = tr @ vmat @ itr
    else:
        op = tr @ vmat @ hmat @ itr
    return camera.move_target(op)


def apply_command(command: CameraCommand, camera: Camera) -> Camera:
    kind = command.kind
    if kind is CommandKind.SIDE_MOVE:
        return camera.move_cam(camera.side_mov(command.amount))
    if kind is CommandKind.AXIS_MOVE:
        return camera.move_eye(camera.axis_mov(command.amount))
    if kind is CommandKind.ROTATE_EYE_VERTICAL:
        return camera.rotate_eye(vertical_axis(), command.amount)
    if kind is CommandKind.ROTATE_EYE_HORIZONTAL:
        return camera.rotate_eye(camera.get_horizontal_axis(), command.amount)
    if kind is CommandKind.TARGET_AXIS_MOVE:
        return camera.move_target(camera.axis_mov(command.amount))
    if kind is CommandKind.ROTATE_TARGET:
        return _rotate_target(camera, command.amount, command.amount_y)
    raise ValueError(f"Unknown camera command {kind!r}")
