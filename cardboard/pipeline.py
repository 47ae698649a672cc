#
# PROJECT: cardboard
# MODULE: cardboard/pipeline.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import List, Optional

from .camera import Camera
from .math_utils import Vec3, Mat3, Mat4, Point2D, angle2d, transform2d, vertical_axis
from .operation import Begin, Close, Line, Move, OpList, Paint

logger = logging.getLogger(__name__)

# Screen-space "up" once y grows downward.
SCREEN_UP = Point2D(0.0, -1.0)


@dataclass(frozen=True)
class FrameMatrices:
    """
    Everything one frame needs to project planes, derived from a camera.

    view             look-at from eye to target, world up = +Z
    view_projection  orthographic projection (extent = eye/target distance,
                     Y flipped to screen orientation) composed with `view`
    corrective       2-D rotation that puts the projected world up on SCREEN_UP
    scale            projection-space to pixel factor (half the width)
    translation      moves the projection origin to the surface center
    clip_z           view-space Z of the eye; vertices below it are in front
    """
    view: Mat4
    view_projection: Mat4
    corrective: Mat3
    translation: Mat3
    scale: float
    extent: float
    clip_z: float

    @classmethod
    def for_camera(cls, camera: Camera, width: float, height: Optional[float] = None) -> 'FrameMatrices':
        """Build frame matrices.  A camera with eye == target raises ZeroDivisionError."""
        eye, target = camera.eye, camera.target
        extent = eye.distance(target)

        view = Mat4.look_at_rh(eye, target, vertical_axis())
        projection = Mat4.orthographic(-extent, extent, extent, -extent, -extent, extent)
        view_projection = projection @ view

        # Roll correction from a reference point one unit above the target
        target_ref = Vec3(target.x, target.y, target.z + 1.0)
        projected = view_projection.transform_point(target_ref)
        ref_angle = angle2d(SCREEN_UP, (projected.x, projected.y))
        if projected.x < 0.0:
            corrective = Mat3.rotation(ref_angle)
        else:
            corrective = Mat3.rotation(-ref_angle)

        half_w = width / 2.0
        half_h = (height if height is not None else width) / 2.0

        return cls(view=view,
                   view_projection=view_projection,
                   corrective=corrective,
                   translation=Mat3.translation(half_w, half_h),
                   scale=half_w,
                   extent=extent,
                   clip_z=view.transform_point(eye).z)

    def to_screen(self, point: Vec3) -> Point2D:
        aligned = self.view_projection.transform_point(point)
        return transform2d(aligned, self.corrective, self.scale, self.translation)

    def is_in_front(self, plane) -> bool:
        """Near-clip test only: any vertex in front of the eye keeps the plane."""
        view = self.view
        clip_z = self.clip_z
        return any(view.transform_point(p).z < clip_z for p in plane.points)


def _map(executor, fn, items):
    # Executor.map yields results in input order regardless of completion order
    if executor is None:
        return map(fn, items)
    return executor.map(fn, items)


def max_distance_squared(eye: Vec3, plane) -> float:
    """Squared distance from eye to the plane's farthest vertex."""
    far = 0.0
    for p in plane.points:
        d = eye.distance_squared(p)
        if d > far:
            far = d
    return far


def sort_planes(eye: Vec3, planes, executor=None) -> List[int]:
    """
    Painter's order: plane indices sorted farthest first.

    Distance is to each plane's farthest vertex.  Equal distances fall back to
    layer index, then list position, so the order is reproducible.
    """
    distances = list(_map(executor, partial(max_distance_squared, eye), planes))
    return sorted(range(len(planes)),
                  key=lambda i: (-distances[i], planes[i].layer_index, i))


def draw_index(index: int, planes, frame: FrameMatrices) -> OpList:
    """Operations for one plane; empty when it fails the near-clip test."""
    plane = planes[index]
    if not frame.is_in_front(plane):
        return []

    ops = [Begin()]
    for i, point in enumerate(plane.points):
        x, y = frame.to_screen(point)
        if i == 0:
            ops.append(Move(x, y))
        else:
            ops.append(Line(x, y))
    ops.append(Close())
    ops.append(Paint(plane.layer_index, index))
    return ops


def draw_planes(planes, camera: Camera, width: float, height: Optional[float] = None,
                executor=None) -> OpList:
    """
    Project, depth-sort and emit the operations of one frame.

    With an executor, per-plane distances and per-plane operations are
    computed on its workers; the result is flattened in sorted order.
    """
    frame = FrameMatrices.for_camera(camera, width, height)
    indices = sort_planes(camera.eye, planes, executor)
    per_plane = _map(executor, partial(draw_index, planes=planes, frame=frame), indices)

    ops = []
    for plane_ops in per_plane:
        ops.extend(plane_ops)
    return ops


class DrawPipeline:
    """
    Draw pipeline with a fixed worker pool shared across frames.

    workers <= 1 computes everything on the calling thread.
    """

    def __init__(self, workers: int = 4):
        self.workers = workers
        self._executor = None
        if workers > 1:
            self._executor = ThreadPoolExecutor(max_workers=workers,
                                                thread_name_prefix="cardboard-frame")

    def frame(self, planes, camera: Camera, width: float, height: Optional[float] = None) -> OpList:
        start = time.perf_counter()
        ops = draw_planes(planes, camera, width, height, executor=self._executor)
        logger.debug("Frame: %d planes -> %d ops in %.1fms",
                     len(planes), len(ops), (time.perf_counter() - start) * 1000)
        return ops

    def close(self):
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
