import curses

import pytest

from cardboard import viewer
from cardboard.camera import Camera
from cardboard.config import RenderConfig
from cardboard.layers import LayerData
from cardboard.math_utils import Vec3
from cardboard.pipeline import DrawPipeline


class FakeScreen:
    """Just enough of a curses window for the viewer loop."""

    def __init__(self, keys, rows=12, cols=30):
        self.keys = list(keys)
        self.rows = rows
        self.cols = cols
        self.written = []
        self.refreshes = 0

    def getch(self):
        return self.keys.pop(0) if self.keys else -1

    def getmaxyx(self):
        return self.rows, self.cols

    def addstr(self, y, x, text, attr=0):
        self.written.append((y, x, text))

    def refresh(self):
        self.refreshes += 1

    def nodelay(self, flag):
        pass

    def keypad(self, flag):
        pass

    def erase(self):
        self.written = []

    def bkgd(self, ch, attr):
        pass


@pytest.fixture()
def no_terminal(monkeypatch):
    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
    monkeypatch.setattr(curses, "mousemask", lambda mask: (mask, 0))
    monkeypatch.setattr(curses, "napms", lambda ms: None)
    monkeypatch.setattr(curses, "color_pair", lambda n: 0)


@pytest.fixture()
def layers(map_files):
    return LayerData.from_manifest(str(map_files))


def make_app(keys, layers, tmp_path):
    config = RenderConfig(use_color=False, capture_path=str(tmp_path / "capture.cardboard"))
    return viewer.ViewerApp(FakeScreen(keys), layers, config, DrawPipeline(workers=1))


def test_keys_move_camera_and_capture(no_terminal, layers, tmp_path):
    keys = [curses.KEY_LEFT, ord('c'), curses.KEY_DOWN, ord('K'), ord('c'), ord('s'), ord('q')]
    app = make_app(keys, layers, tmp_path)
    start = app.camera
    app.run()

    assert not app.running
    assert app.camera != start
    assert len(app.capture) == 2
    assert (tmp_path / "capture.cardboard").read_text().count("\n") == 2
    assert app.stdscr.refreshes >= 1
    assert any(y == 0 and "PLANES:3" in text for y, _, text in app.stdscr.written)


def test_reset_restores_initial_camera(no_terminal, layers, tmp_path):
    app = make_app([curses.KEY_RIGHT, ord('+'), ord('r'), ord('q')], layers, tmp_path)
    app.run()
    assert app.camera == app.initial_camera


def test_degenerate_camera_keeps_previous(no_terminal, layers, tmp_path):
    app = make_app([], layers, tmp_path)
    app.draw()
    good = app.camera
    app.camera = Camera(Vec3(1, 1, 1), Vec3(1, 1, 1))
    app.draw()
    assert app.camera == good


def test_print_camera_sets_status(no_terminal, layers, tmp_path):
    app = make_app([ord('p'), ord('q')], layers, tmp_path)
    app.run()
    assert app.status == str(app.camera)
