#
# PROJECT: cardboard
# MODULE: cardboard/operation.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

"""
Backend-agnostic drawing operations.

A frame is a flat list of operations.  Every visible plane contributes one
bracket: Begin, Move, Line*, Close, Paint.  Paint asks the backend to resolve
the plane's style and fill/stroke the current path.
"""

from dataclasses import dataclass
from typing import List, Union


@dataclass(frozen=True)
class Begin:
    pass


@dataclass(frozen=True)
class Move:
    x: float
    y: float


@dataclass(frozen=True)
class Line:
    x: float
    y: float


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class Paint:
    layer_index: int
    plane_index: int


Operation = Union[Begin, Move, Line, Close, Paint]
OpList = List[Operation]


class Painter:
    """
    Base class for drawing backends.

    Tracks the current path as a list of sub-paths; subclasses implement
    `fill` and `stroke` against their surface.
    """

    def __init__(self):
        self.subpaths = []
        self.closed = []

    def new_path(self):
        self.subpaths = []
        self.closed = []

    def move_to(self, x, y):
        self.subpaths.append([(x, y)])
        self.closed.append(False)

    def line_to(self, x, y):
        if not self.subpaths:
            self.move_to(x, y)
        else:
            self.subpaths[-1].append((x, y))

    def close_path(self):
        if self.closed:
            self.closed[-1] = True

    def fill(self, color):
        raise NotImplementedError

    def stroke(self, color, width):
        raise NotImplementedError

    def paint(self, style):
        """Fill then stroke the current path; either step is skipped without a color."""
        if style.fill_color is not None:
            self.fill(style.fill_color)
        if style.stroke_color is not None:
            self.stroke(style.stroke_color, style.stroke_width)
        self.new_path()


def resolve_style(styles, planes, op: Paint):
    """Style of the plane a Paint refers to, or None."""
    if not 0 <= op.plane_index < len(planes):
        return None
    return styles.get_for(op.layer_index, planes[op.plane_index].style_index)


def paint_ops(ops, styles, planes, painter: Painter):
    """Replay an operation list onto a painter."""
    for op in ops:
        if isinstance(op, Begin):
            painter.new_path()
        elif isinstance(op, Move):
            painter.move_to(op.x, op.y)
        elif isinstance(op, Line):
            painter.line_to(op.x, op.y)
        elif isinstance(op, Close):
            painter.close_path()
        elif isinstance(op, Paint):
            style = resolve_style(styles, planes, op)
            if style is not None:
                painter.paint(style)
