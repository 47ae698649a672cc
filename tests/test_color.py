import curses

import pytest

from cardboard import color
from cardboard.config import RenderConfig
from cardboard.style import Color, Style, StyleCollection, StyleList


class TestParseColor:
    @pytest.mark.parametrize("text,expected", [
        ("red", (255, 0, 0, 255)),
        ("#0f0", (0, 255, 0, 255)),
        (" #112233 ", (17, 34, 51, 255)),
        ("#11223344", (17, 34, 51, 68)),
        ("rgb(1, 2, 3)", (1, 2, 3, 255)),
    ])
    def test_valid(self, text, expected):
        assert color.parse_color(text) == expected

    @pytest.mark.parametrize("text", [None, "", "#12", "blurple"])
    def test_invalid(self, text):
        assert color.parse_color(text) is None


def test_nearest_terminal_colors():
    assert color._rgb_to_nearest_xterm(255, 0, 0) == 196
    assert color._rgb_to_nearest_xterm(100, 100, 100) == 241
    assert color._rgb_to_nearest_ansi8(255, 0, 0) == 1


def test_stroke_palette():
    styles = StyleCollection([
        StyleList.with_default([Style(stroke_color=Color(1.0, 0.0, 0.0)),
                                Style(stroke_color=None)]),
        StyleList.with_default(),
    ])
    assert color.stroke_palette(styles) == [(255, 0, 0), (0, 0, 0)]
    assert color.stroke_palette(StyleCollection()) == [(0, 0, 0)]


class TestInitColors:
    def test_color_disabled(self):
        assert color.init_colors(RenderConfig(use_color=False), [(0, 0, 0)] * 3) == ([0, 0, 0], 0)

    def test_no_color_terminal(self, monkeypatch):
        monkeypatch.setattr(curses, "has_colors", lambda: False)
        assert color.init_colors(RenderConfig(), [(0, 0, 0)]) == ([0], 0)

    def test_xterm_256(self, monkeypatch):
        pairs = []
        monkeypatch.setattr(curses, "has_colors", lambda: True)
        monkeypatch.setattr(curses, "start_color", lambda: None)
        monkeypatch.setattr(curses, "use_default_colors", lambda: None)
        monkeypatch.setattr(curses, "can_change_color", lambda: False)
        monkeypatch.setattr(curses, "COLORS", 256, raising=False)
        monkeypatch.setattr(curses, "init_pair", lambda *args: pairs.append(args))

        valid, bg_pair = color.init_colors(RenderConfig(), [(0, 0, 0), (255, 0, 0)], (100, 100, 100))
        assert valid == [1, 2]
        assert bg_pair == 3
        assert pairs == [(1, 16, 241), (2, 196, 241), (3, 7, 241)]
