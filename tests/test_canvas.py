from cardboard.canvas import Canvas, render_cell_ascii, render_cell_braille
from cardboard.operation import Begin, Close, Line, Move, Paint
from cardboard.rasterizer import draw_line_dda, fill_polygon
from cardboard.renderer import TerminalRenderer
from cardboard.layers import Plane
from cardboard.math_utils import Vec3
from cardboard.style import Color, Style, StyleCollection, StyleList


class TestCanvas:
    def test_set_and_clear(self):
        canvas = Canvas(8, 8)
        canvas.set_pixel(3, 5, 2)
        assert canvas.is_set(3, 5)
        assert canvas.c_grid[1][1] == 2
        canvas.clear_pixel(3, 5)
        assert not canvas.is_set(3, 5)

    def test_out_of_bounds_ignored(self):
        canvas = Canvas(4, 4)
        canvas.set_pixel(-1, 0, 1)
        canvas.set_pixel(4, 0, 1)
        assert not any(any(row) for row in canvas.grid)
        assert not canvas.is_set(10, 10)

    def test_cell_rendering(self):
        assert render_cell_ascii(0) == ' '
        assert render_cell_ascii(0xFF) == '%'
        assert render_cell_ascii(0x01) == '.'
        assert render_cell_braille(0) == ' '
        assert render_cell_braille(0xFF) == '⣿'
        assert render_cell_braille(0x01) == '⠁'


class TestRasterizer:
    def test_horizontal_line(self):
        canvas = Canvas(10, 4)
        draw_line_dda(canvas, (1, 2), (6, 2))
        assert [x for x in range(10) if canvas.is_set(x, 2)] == [1, 2, 3, 4, 5, 6]

    def test_zero_length_line(self):
        canvas = Canvas(4, 4)
        draw_line_dda(canvas, (2, 2), (2, 2))
        assert canvas.is_set(2, 2)

    def test_fill_clears_inside_only(self):
        canvas = Canvas(12, 12)
        for y in range(12):
            for x in range(12):
                canvas.set_pixel(x, y, 0)
        fill_polygon(canvas, [(2, 2), (10, 2), (10, 10), (2, 10)])
        assert not canvas.is_set(5, 5)
        assert canvas.is_set(0, 0)
        assert canvas.is_set(11, 11)


class TestCanvasPainter:
    def test_later_planes_hide_earlier_ones(self):
        renderer = TerminalRenderer()
        styles = StyleCollection([StyleList.with_default()])
        planes = [Plane((Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 1, 0)))] * 2
        far = [Begin(), Move(2, 2), Line(14, 2), Line(14, 14), Line(2, 14), Close(), Paint(0, 0)]
        near = [Begin(), Move(4, 4), Line(12, 4), Line(12, 12), Line(4, 12), Close(), Paint(0, 1)]

        canvas = renderer.rasterize(far, styles, planes, 16, 16)
        assert canvas.is_set(8, 8) is False
        assert canvas.is_set(2, 8)

        canvas = renderer.rasterize(far + near, styles, planes, 16, 16)
        assert canvas.is_set(4, 8)
        assert canvas.is_set(2, 8)

    def test_stroke_uses_palette_index(self):
        renderer = TerminalRenderer()
        red = Color(1.0, 0.0, 0.0)
        renderer.palette_index = {(0, 0, 0): 0, (255, 0, 0): 1}
        styles = StyleCollection([StyleList.with_default([Style(stroke_color=red)])])
        planes = [Plane((Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 1, 0)))]
        ops = [Begin(), Move(0, 0), Line(7, 0), Line(7, 7), Close(), Paint(0, 0)]
        canvas = renderer.rasterize(ops, styles, planes, 8, 8)
        assert canvas.is_set(4, 0)
        assert canvas.c_grid[0][2] == 1
