#
# PROJECT: cardboard
# MODULE: cardboard/rasterizer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math

from .canvas import Canvas

def fill_polygon(canvas: Canvas, points):
    """
    Scanline-fills a closed polygon (even-odd rule) by CLEARING dots, so a
    filled plane hides whatever was drawn under it.
    points are (x, y) tuples in canvas pixel space.
    """
    n = len(points)
    if n < 3:
        return

    ys = [p[1] for p in points]
    y_start = max(0, int(math.floor(min(ys))))
    y_end = min(canvas.h - 1, int(math.ceil(max(ys))))

    for y in range(y_start, y_end + 1):
        # Sample at the pixel center
        sy = y + 0.5
        xs = []
        for i in range(n):
            x1, y1 = points[i][0], points[i][1]
            x2, y2 = points[(i + 1) % n][0], points[(i + 1) % n][1]
            if (y1 <= sy < y2) or (y2 <= sy < y1):
                xs.append(x1 + (sy - y1) * (x2 - x1) / (y2 - y1))
        xs.sort()

        for j in range(0, len(xs) - 1, 2):
            start_x = max(0, int(math.ceil(xs[j] - 0.5)))
            end_x = min(canvas.w - 1, int(math.floor(xs[j + 1] - 0.5)))
            for x in range(start_x, end_x + 1):
                canvas.clear_pixel(x, y)


def draw_line_dda(canvas: Canvas, p1, p2, color_idx=0):
    """
    Draws a line using the DDA algorithm.
    p1, p2 are (x, y) tuples in canvas pixel space.
    """
    x1, y1 = int(p1[0]), int(p1[1])
    x2, y2 = int(p2[0]), int(p2[1])

    dx = x2 - x1
    dy = y2 - y1
    if dx == 0 and dy == 0:
        canvas.set_pixel(x1, y1, color_idx)
        return

    step = abs(dx) if abs(dx) > abs(dy) else abs(dy)

    x_inc = dx / step
    y_inc = dy / step

    cx, cy = float(x1), float(y1)
    for _ in range(int(step) + 1):
        canvas.set_pixel(int(round(cx)), int(round(cy)), color_idx)
        cx += x_inc; cy += y_inc
