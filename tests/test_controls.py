import pytest

from cardboard.camera import Camera
from cardboard.controls import (CAM_STEP, CAM_STEP_ROT, CameraCommand, CommandKind, Key, PreAction,
                                apply_command, command_for_key, motion_command,
                                pre_action_for_key, wheel_command)
from cardboard.math_utils import Vec3


class TestDispatch:
    @pytest.mark.parametrize("key,modified,kind,amount", [
        (Key.LEFT, False, CommandKind.SIDE_MOVE, CAM_STEP),
        (Key.RIGHT, False, CommandKind.SIDE_MOVE, -CAM_STEP),
        (Key.LEFT, True, CommandKind.ROTATE_EYE_VERTICAL, CAM_STEP_ROT),
        (Key.RIGHT, True, CommandKind.ROTATE_EYE_VERTICAL, -CAM_STEP_ROT),
        (Key.UP, False, CommandKind.AXIS_MOVE, -CAM_STEP),
        (Key.DOWN, False, CommandKind.AXIS_MOVE, CAM_STEP),
        (Key.UP, True, CommandKind.ROTATE_EYE_HORIZONTAL, -CAM_STEP_ROT),
        (Key.DOWN, True, CommandKind.ROTATE_EYE_HORIZONTAL, CAM_STEP_ROT),
    ])
    def test_key_bindings(self, key, modified, kind, amount):
        assert command_for_key(key, modified) == CameraCommand(kind, amount)

    def test_pre_actions(self):
        assert pre_action_for_key('q') is PreAction.QUIT
        assert pre_action_for_key('c') is PreAction.CAPTURE
        assert pre_action_for_key('x') is None

    def test_wheel_and_motion(self):
        assert wheel_command(0) is None
        assert wheel_command(-1) == CameraCommand(CommandKind.TARGET_AXIS_MOVE, -CAM_STEP)
        assert motion_command(0, 0) is None
        assert motion_command(3, -2) == CameraCommand(CommandKind.ROTATE_TARGET, 3.0, -2.0)


class TestApply:
    def test_side_move_pans_both(self, oblique_camera):
        moved = apply_command(command_for_key(Key.LEFT), oblique_camera)
        delta_eye = moved.eye - oblique_camera.eye
        delta_target = moved.target - oblique_camera.target
        assert delta_eye.magnitude() == pytest.approx(CAM_STEP)
        for a, b in zip(delta_eye, delta_target):
            assert a == pytest.approx(b)

    def test_axis_move_keeps_target(self, oblique_camera):
        moved = apply_command(CameraCommand(CommandKind.AXIS_MOVE, 1.0), oblique_camera)
        assert moved.target == oblique_camera.target
        before = oblique_camera.eye.distance(oblique_camera.target)
        assert moved.eye.distance(moved.target) == pytest.approx(before - 1.0)

    @pytest.mark.parametrize("key", [Key.LEFT, Key.UP])
    def test_eye_rotations_keep_distance(self, oblique_camera, key):
        moved = apply_command(command_for_key(key, True), oblique_camera)
        assert moved.target == oblique_camera.target
        assert moved.eye.distance(moved.target) == pytest.approx(
            oblique_camera.eye.distance(oblique_camera.target))
        assert moved.eye != oblique_camera.eye

    def test_target_commands_keep_eye(self, oblique_camera):
        for command in (wheel_command(1), motion_command(5, 0), motion_command(0, 5),
                        motion_command(5, 5)):
            moved = apply_command(command, oblique_camera)
            assert moved.eye == oblique_camera.eye
            assert moved.target != oblique_camera.target

    def test_look_around_keeps_target_distance(self):
        camera = Camera(Vec3(0, -10, 5), Vec3(0, 0, 0))
        moved = apply_command(motion_command(10, 4), camera)
        assert moved.eye.distance(moved.target) == pytest.approx(camera.eye.distance(camera.target))
