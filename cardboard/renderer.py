#
# PROJECT: cardboard
# MODULE: cardboard/renderer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses

from .canvas import Canvas, render_cell_ascii, render_cell_braille
from .color import init_colors, parse_color, stroke_palette
from .config import RenderConfig
from .operation import Painter, paint_ops
from .rasterizer import draw_line_dda, fill_polygon


class CanvasPainter(Painter):
    """Paints operations onto a dot Canvas: fill clears, stroke sets dots."""

    def __init__(self, canvas: Canvas, palette_index=None):
        super().__init__()
        self.canvas = canvas
        # (r, g, b) -> palette index
        self.palette_index = palette_index or {}

    def fill(self, color):
        for subpath in self.subpaths:
            fill_polygon(self.canvas, subpath)

    def stroke(self, color, width):
        color_idx = self.palette_index.get(color.to_rgb8(), 0)
        for subpath, closed in zip(self.subpaths, self.closed):
            n = len(subpath)
            last = n if closed else n - 1
            for i in range(last):
                draw_line_dda(self.canvas, subpath[i], subpath[(i + 1) % n], color_idx)


class TerminalRenderer:
    """
    Renders an operation list to the curses screen.

    Each terminal cell is a 2x4 dot block, so the drawing surface is
    (cols - 1) * 2 by (rows - 2) * 4 dots; row 0 is left for the HUD.
    """

    def __init__(self):
        self.valid_pairs = None
        self.bg_pair = 0
        self.palette_index = {}

    def init_colors(self, config: RenderConfig, styles):
        """Initialize one curses color pair per stroke color.  Call once after curses init."""
        palette = stroke_palette(styles)
        self.palette_index = {rgb: i for i, rgb in enumerate(palette)}
        bg = parse_color(config.background)
        bg_rgb = bg[:3] if bg else None
        self.valid_pairs, self.bg_pair = init_colors(config, palette, bg_rgb)

    @staticmethod
    def surface_size(stdscr):
        th, tw = stdscr.getmaxyx()
        return (tw - 1) * 2, (th - 2) * 4

    def rasterize(self, ops, styles, planes, w, h) -> Canvas:
        canv = Canvas(w, h)
        paint_ops(ops, styles, planes, CanvasPainter(canv, self.palette_index))
        return canv

    def render(self, stdscr, ops, styles, planes, config: RenderConfig):
        """
        Rasterize `ops` (computed for surface_size()) and output to curses.

        Does NOT call stdscr.refresh(); the caller does that after the HUD.
        """
        th, tw = stdscr.getmaxyx()
        W, H = self.surface_size(stdscr)
        if W <= 0 or H <= 0:
            return

        canv = self.rasterize(ops, styles, planes, W, H)

        stdscr.erase()

        if config.use_color and self.bg_pair:
            try:
                stdscr.bkgd(' ', curses.color_pair(self.bg_pair))
            except curses.error:
                pass

        valid_pairs = self.valid_pairs or []
        grid = canv.grid
        c_grid = canv.c_grid
        use_color = config.use_color
        use_braille = config.use_braille

        for y in range(min(th - 2, len(grid))):
            row_grid = grid[y]
            row_color = c_grid[y]
            for x in range(min(tw - 1, len(row_grid))):
                mask = row_grid[x]
                if not mask:
                    continue
                if use_braille:
                    char = render_cell_braille(mask)
                else:
                    char = render_cell_ascii(mask)

                attr = curses.color_pair(0)
                if use_color and valid_pairs:
                    c_idx = row_color[x]
                    if c_idx < len(valid_pairs):
                        attr = curses.color_pair(valid_pairs[c_idx])
                try:
                    stdscr.addstr(y + 1, x, char, attr)
                except curses.error:
                    pass
