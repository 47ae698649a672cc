#
# PROJECT: cardboard
# MODULE: cardboard/math_utils.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math
from typing import NamedTuple


class Vec3:
    """3-component vector, also used as the world-space point type."""
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float, y: float, z: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __repr__(self):
        return f"Vec3({self.x!r}, {self.y!r}, {self.z!r})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index):
        if index == 0: return self.x
        if index == 1: return self.y
        if index == 2: return self.z
        raise IndexError("Vec3 index out of range")

    def __eq__(self, other):
        if isinstance(other, Vec3):
            return self.x == other.x and self.y == other.y and self.z == other.z
        return NotImplemented

    __hash__ = None

    def __add__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar):
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar):
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other) -> 'Vec3':
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> 'Vec3':
        m = self.magnitude()
        if m == 0:
            return Vec3(0, 0, 0)
        return self / m

    def distance_squared(self, other) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def distance(self, other) -> float:
        return math.sqrt(self.distance_squared(other))


# World-space points and vectors share one representation.
Point = Vec3


class Point2D(NamedTuple):
    x: float
    y: float


class Mat4:
    """4x4 homogeneous transform, [row][col] storage, column-vector convention."""
    __slots__ = ('m',)

    def __init__(self, data=None):
        if data:
            self.m = data
        else:
            self.m = [[0.0]*4 for _ in range(4)]

    def __repr__(self):
        return f"Mat4({self.m!r})"

    @classmethod
    def identity(cls) -> 'Mat4':
        res = cls()
        for i in range(4):
            res.m[i][i] = 1.0
        return res

    @classmethod
    def translation(cls, x, y, z) -> 'Mat4':
        mat = cls.identity()
        mat.m[0][3] = x
        mat.m[1][3] = y
        mat.m[2][3] = z
        return mat

    @classmethod
    def from_axis_angle(cls, axis: Vec3, angle: float) -> 'Mat4':
        """Right-handed rotation of `angle` radians around the unit `axis`."""
        x, y, z = axis
        c = math.cos(angle)
        s = math.sin(angle)
        t = 1.0 - c
        mat = cls.identity()
        mat.m[0][0] = t * x * x + c
        mat.m[0][1] = t * x * y - s * z
        mat.m[0][2] = t * x * z + s * y
        mat.m[1][0] = t * x * y + s * z
        mat.m[1][1] = t * y * y + c
        mat.m[1][2] = t * y * z - s * x
        mat.m[2][0] = t * x * z - s * y
        mat.m[2][1] = t * y * z + s * x
        mat.m[2][2] = t * z * z + c
        return mat

    @classmethod
    def look_at_rh(cls, eye: Vec3, target: Vec3, up: Vec3) -> 'Mat4':
        """Right-handed view matrix: eye at the origin looking down -Z."""
        f = (target - eye).normalize()
        s = f.cross(up).normalize()
        u = s.cross(f)
        return cls([
            [s.x, s.y, s.z, -s.dot(eye)],
            [u.x, u.y, u.z, -u.dot(eye)],
            [-f.x, -f.y, -f.z, f.dot(eye)],
            [0.0, 0.0, 0.0, 1.0],
        ])

    @classmethod
    def orthographic(cls, left, right, bottom, top, znear, zfar) -> 'Mat4':
        """Orthographic projection mapping the given box onto [-1, 1]^3.

        Passing bottom > top flips the Y axis, which is how screen-space
        (y grows downward) projections are built.
        """
        mat = cls.identity()
        mat.m[0][0] = 2.0 / (right - left)
        mat.m[1][1] = 2.0 / (top - bottom)
        mat.m[2][2] = -2.0 / (zfar - znear)
        mat.m[0][3] = -(right + left) / (right - left)
        mat.m[1][3] = -(top + bottom) / (top - bottom)
        mat.m[2][3] = -(zfar + znear) / (zfar - znear)
        return mat

    def __matmul__(self, other):
        if isinstance(other, Mat4):
            res = Mat4()
            for r in range(4):
                for c in range(4):
                    val = 0.0
                    for k in range(4):
                        val += self.m[r][k] * other.m[k][c]
                    res.m[r][c] = val
            return res
        return NotImplemented

    def transform_point(self, v: Vec3) -> Vec3:
        """Multiply with v as if w=1, dividing by the resulting w when it is not 1."""
        x = self.m[0][0]*v.x + self.m[0][1]*v.y + self.m[0][2]*v.z + self.m[0][3]
        y = self.m[1][0]*v.x + self.m[1][1]*v.y + self.m[1][2]*v.z + self.m[1][3]
        z = self.m[2][0]*v.x + self.m[2][1]*v.y + self.m[2][2]*v.z + self.m[2][3]
        w = self.m[3][0]*v.x + self.m[3][1]*v.y + self.m[3][2]*v.z + self.m[3][3]
        if w != 1.0 and w != 0.0:
            return Vec3(x/w, y/w, z/w)
        return Vec3(x, y, z)


class Mat3:
    """3x3 homogeneous transform for 2-D points."""
    __slots__ = ('m',)

    def __init__(self, data=None):
        if data:
            self.m = data
        else:
            self.m = [[0.0]*3 for _ in range(3)]

    def __repr__(self):
        return f"Mat3({self.m!r})"

    @classmethod
    def identity(cls) -> 'Mat3':
        res = cls()
        for i in range(3):
            res.m[i][i] = 1.0
        return res

    @classmethod
    def rotation(cls, rad: float) -> 'Mat3':
        mat = cls.identity()
        c = math.cos(rad)
        s = math.sin(rad)
        mat.m[0][0] = c
        mat.m[0][1] = -s
        mat.m[1][0] = s
        mat.m[1][1] = c
        return mat

    @classmethod
    def translation(cls, tx, ty) -> 'Mat3':
        mat = cls.identity()
        mat.m[0][2] = tx
        mat.m[1][2] = ty
        return mat

    def __matmul__(self, other):
        if isinstance(other, Mat3):
            res = Mat3()
            for r in range(3):
                for c in range(3):
                    res.m[r][c] = sum(self.m[r][k] * other.m[k][c] for k in range(3))
            return res
        return NotImplemented

    def transform_point(self, p) -> Point2D:
        x = self.m[0][0]*p[0] + self.m[0][1]*p[1] + self.m[0][2]
        y = self.m[1][0]*p[0] + self.m[1][1]*p[1] + self.m[1][2]
        return Point2D(x, y)


def cross(a: Vec3, b: Vec3) -> Vec3:
    return a.cross(b)


def cross_norm(a: Vec3, b: Vec3) -> Vec3:
    """Normalized cross product; a zero vector when a and b are parallel."""
    return a.cross(b).normalize()


def deg_to_rad(a: float) -> float:
    return a * math.pi / 180.0


def vertical_axis() -> Vec3:
    return Vec3(0.0, 0.0, 1.0)


def angle2d(a, b) -> float:
    """Unsigned angle in radians between two 2-D vectors (0 if either is null)."""
    prod = math.hypot(a[0], a[1]) * math.hypot(b[0], b[1])
    if prod == 0:
        return 0.0
    cos = (a[0] * b[0] + a[1] * b[1]) / prod
    return math.acos(max(-1.0, min(1.0, cos)))


def transform2d(aligned_point3d: Vec3, corrective: Mat3, scale: float, tr: Mat3) -> Point2D:
    """Drop Z, rotate by `corrective`, scale, then translate by `tr`."""
    rotated = corrective.transform_point((aligned_point3d.x, aligned_point3d.y))
    return tr.transform_point((rotated.x * scale, rotated.y * scale))
