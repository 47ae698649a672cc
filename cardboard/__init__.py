#
# PROJECT: cardboard
# MODULE: cardboard/__init__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

__version__ = "0.1.0"

from .math_utils import Vec3, Mat3, Mat4, Point2D
from .bbox import BBox
from .camera import Camera
from .config import RenderConfig
from .style import Color, Rule, Style, StyleList, StyleCollection, StyleConfigError
from .layers import Plane, PlaneList, LayerData
from .operation import Begin, Move, Line, Close, Paint
from .pipeline import DrawPipeline, draw_planes, sort_planes
