#
# PROJECT: cardboard
# MODULE: cardboard/camera.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from dataclasses import dataclass

from .math_utils import Vec3, Mat4, cross_norm


@dataclass(frozen=True)
class Camera:
    """
    Eye/target camera.

    Immutable: every movement operator returns a new Camera.  Axes are
    derived on demand from eye and target and never stored.
    """
    eye: Vec3
    target: Vec3

    @classmethod
    def from_bbox(cls, bbox) -> 'Camera':
        """Default camera looking from the top-left-near corner at the center."""
        return cls(eye=bbox.top_left_near(), target=bbox.center())

    def __str__(self):
        return (f"Camera {self.eye.x} {self.eye.y} {self.eye.z} "
                f"{self.target.x} {self.target.y} {self.target.z}")

    def get_horizontal_axis(self) -> Vec3:
        """Unit axis perpendicular to the eye->target direction, in the XY plane.

        Zero when eye and target sit at the same height.
        """
        dx = self.eye.x - self.target.x
        dy = self.eye.y - self.target.y
        pt0 = Vec3(dx, dy, self.eye.z)
        pt1 = Vec3(dx, dy, self.target.z)
        return cross_norm(pt0, pt1)

    def move_cam(self, mt: Mat4) -> 'Camera':
        return Camera(eye=mt.transform_point(self.eye),
                      target=mt.transform_point(self.target))

    def move_eye(self, mt: Mat4) -> 'Camera':
        return Camera(eye=mt.transform_point(self.eye), target=self.target)

    def move_target(self, mt: Mat4) -> 'Camera':
        return Camera(eye=self.eye, target=mt.transform_point(self.target))

    def rotate_eye(self, axis: Vec3, angle: float) -> 'Camera':
        """Rotate the eye around `axis` pivoting on the target."""
        t = self.target
        tr = Mat4.translation(t.x, t.y, t.z)
        itr = Mat4.translation(-t.x, -t.y, -t.z)
        return self.move_eye(tr @ Mat4.from_axis_angle(axis, angle) @ itr)

    def side_mov(self, step: float) -> Mat4:
        m = self.get_horizontal_axis() * step
        return Mat4.translation(m.x, m.y, m.z)

    def axis_mov(self, step: float) -> Mat4:
        m = (self.target - self.eye).normalize() * step
        return Mat4.translation(m.x, m.y, m.z)
