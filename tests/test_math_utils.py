import math

import pytest

from cardboard.math_utils import (Mat3, Mat4, Vec3, angle2d, cross_norm, deg_to_rad,
                                  transform2d, vertical_axis)


def approx_vec(v, expected, abs=1e-9):
    return all(a == pytest.approx(b, abs=abs) for a, b in zip(v, expected))


class TestVec3:
    def test_arithmetic(self):
        a = Vec3(1, 2, 3)
        b = Vec3(4, 5, 6)
        assert a + b == Vec3(5, 7, 9)
        assert b - a == Vec3(3, 3, 3)
        assert a * 2 == Vec3(2, 4, 6)
        assert -a == Vec3(-1, -2, -3)
        assert a.dot(b) == 32

    def test_cross_is_right_handed(self):
        assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)

    def test_normalize_zero_vector(self):
        assert Vec3(0, 0, 0).normalize() == Vec3(0, 0, 0)

    def test_distance(self):
        assert Vec3(0, 0, 0).distance_squared(Vec3(1, 2, 2)) == 9
        assert Vec3(0, 0, 0).distance(Vec3(1, 2, 2)) == 3


class TestMat4:
    def test_identity_transform(self):
        v = Vec3(1.5, -2.0, 3.25)
        assert Mat4.identity().transform_point(v) == v

    def test_translation_composition(self):
        m = Mat4.translation(1, 2, 3) @ Mat4.translation(-1, -2, -3)
        assert Mat4.identity().m == m.m

    def test_axis_angle_quarter_turn(self):
        m = Mat4.from_axis_angle(vertical_axis(), math.pi / 2)
        assert approx_vec(m.transform_point(Vec3(1, 0, 0)), (0, 1, 0))

    def test_look_at_puts_eye_at_origin_and_target_down_negative_z(self):
        eye = Vec3(0, -10, 5)
        target = Vec3(0, 0, 0)
        view = Mat4.look_at_rh(eye, target, vertical_axis())
        assert approx_vec(view.transform_point(eye), (0, 0, 0))
        t = view.transform_point(target)
        assert approx_vec(t, (0, 0, -eye.distance(target)))

    def test_orthographic_zero_extent_raises(self):
        with pytest.raises(ZeroDivisionError):
            Mat4.orthographic(0, 0, 0, 0, 0, 0)


class TestPlaneHelpers:
    def test_cross_norm_parallel_is_zero(self):
        assert cross_norm(Vec3(1, 1, 1), Vec3(2, 2, 2)) == Vec3(0, 0, 0)

    def test_deg_to_rad(self):
        assert deg_to_rad(180) == pytest.approx(math.pi)

    def test_angle2d(self):
        assert angle2d((0, -1), (1, 0)) == pytest.approx(math.pi / 2)
        assert angle2d((0, -1), (0, 1)) == pytest.approx(math.pi)
        assert angle2d((0, -1), (0, 0)) == 0.0

    def test_transform2d_rotates_scales_then_translates(self):
        p = transform2d(Vec3(1, 0, 7), Mat3.rotation(math.pi / 2), 10, Mat3.translation(50, 50))
        assert p.x == pytest.approx(50)
        assert p.y == pytest.approx(60)
