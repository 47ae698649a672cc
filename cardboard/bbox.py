#
# PROJECT: cardboard
# MODULE: cardboard/bbox.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math
from dataclasses import dataclass

from .math_utils import Vec3


@dataclass(frozen=True)
class BBox:
    """
    Axis-aligned extents over every vertex of a plane list.

    Folding starts from +inf/-inf sentinels, so an empty plane list yields
    min = +inf and max = -inf on every axis and a NaN center.  That
    degenerate box is returned as is.
    """
    minx: float
    miny: float
    minz: float
    maxx: float
    maxy: float
    maxz: float

    @classmethod
    def from_planes(cls, planes) -> 'BBox':
        minx = miny = minz = math.inf
        maxx = maxy = maxz = -math.inf

        for plane in planes:
            for pt in plane.points:
                if pt.x < minx: minx = pt.x
                if pt.y < miny: miny = pt.y
                if pt.z < minz: minz = pt.z
                if pt.x > maxx: maxx = pt.x
                if pt.y > maxy: maxy = pt.y
                if pt.z > maxz: maxz = pt.z

        return cls(minx, miny, minz, maxx, maxy, maxz)

    def center(self) -> Vec3:
        return Vec3(
            self.minx + (self.maxx - self.minx) / 2.0,
            self.miny + (self.maxy - self.miny) / 2.0,
            self.minz + (self.maxz - self.minz) / 2.0,
        )

    def width(self) -> float:
        return self.maxx - self.minx

    def height(self) -> float:
        return self.maxz - self.minz

    def top_left_near(self) -> Vec3:
        """Default eye position: (minx, miny, maxz)."""
        return Vec3(self.minx, self.miny, self.maxz)
