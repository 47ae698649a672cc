#
# PROJECT: cardboard
# MODULE: cardboard/raster.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

"""Pillow surface: paints an operation list into an RGBA image, saved as PNG or PDF."""

import logging

from PIL import Image, ImageDraw

from .color import parse_color
from .operation import Painter, paint_ops

logger = logging.getLogger(__name__)


class ImagePainter(Painter):
    """Fills and strokes paths on a Pillow image with alpha blending."""

    def __init__(self, image: Image.Image):
        super().__init__()
        self.image = image
        self.draw = ImageDraw.Draw(image, "RGBA")

    def fill(self, color):
        rgba = color.to_rgba8()
        for subpath in self.subpaths:
            if len(subpath) >= 3:
                self.draw.polygon(subpath, fill=rgba)

    def stroke(self, color, width):
        rgba = color.to_rgba8()
        line_width = max(1, int(round(width)))
        for subpath, closed in zip(self.subpaths, self.closed):
            points = list(subpath)
            if closed and len(points) > 1:
                points.append(points[0])
            if len(points) >= 2:
                self.draw.line(points, fill=rgba, width=line_width, joint="curve")


def render_image(ops, styles, planes, width: int, height: int, background="#646464") -> Image.Image:
    """Paint `ops` onto a new width x height image filled with `background`."""
    bg = parse_color(background) or (255, 255, 255, 255)
    image = Image.new("RGBA", (int(width), int(height)), bg)
    paint_ops(ops, styles, planes, ImagePainter(image))
    return image


def save_image(image: Image.Image, path):
    """Save as PDF (one point per pixel) when `path` ends in .pdf, else by extension."""
    if str(path).lower().endswith(".pdf"):
        image.convert("RGB").save(path, "PDF", resolution=72.0)
    else:
        image.save(path)
    logger.info("Saved %s (%dx%d)", path, image.width, image.height)
