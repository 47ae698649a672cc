#
# PROJECT: cardboard
# MODULE: cardboard/viewer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses
import logging
import time

from .bbox import BBox
from .camera import Camera
from .capture import Capture
from .config import RenderConfig
from .controls import (Key, PreAction, apply_command, command_for_key,
                       motion_command, pre_action_for_key, wheel_command)
from .layers import LayerData
from .pipeline import DrawPipeline
from .renderer import TerminalRenderer

logger = logging.getLogger(__name__)

# curses key code -> (key, modifier held).  Shift-arrows and H/J/K/L
# stand in for the modifier, which curses cannot report on its own.
CURSES_KEYS = {
    curses.KEY_LEFT: (Key.LEFT, False),
    curses.KEY_RIGHT: (Key.RIGHT, False),
    curses.KEY_UP: (Key.UP, False),
    curses.KEY_DOWN: (Key.DOWN, False),
    curses.KEY_SLEFT: (Key.LEFT, True),
    curses.KEY_SRIGHT: (Key.RIGHT, True),
    curses.KEY_SR: (Key.UP, True),
    curses.KEY_SF: (Key.DOWN, True),
    ord('H'): (Key.LEFT, True),
    ord('L'): (Key.RIGHT, True),
    ord('K'): (Key.UP, True),
    ord('J'): (Key.DOWN, True),
}

WHEEL_KEYS = {ord('+'): 1, ord('='): 1, ord('-'): -1}


class ViewerApp:
    """
    Interactive terminal viewer.

    Single-threaded event loop: one input event at a time; a frame is
    recomputed only when the camera changed.
    """

    def __init__(self, stdscr, layers: LayerData, config: RenderConfig,
                 pipeline: DrawPipeline, camera: Camera = None):
        self.stdscr = stdscr
        self.layers = layers
        self.config = config
        self.pipeline = pipeline
        self.running = True

        # ── Curses setup ────────────────────────────────────────────────
        curses.curs_set(0)
        stdscr.nodelay(True)
        stdscr.keypad(True)
        curses.mousemask(curses.ALL_MOUSE_EVENTS | curses.REPORT_MOUSE_POSITION)

        renderer = TerminalRenderer()
        renderer.init_colors(config, layers.styles)
        self.renderer = renderer

        # ── Camera ──────────────────────────────────────────────────────
        self.initial_camera = camera or Camera.from_bbox(BBox.from_planes(layers.planes))
        self.camera = self.initial_camera
        self.good_camera = self.camera

        self.capture = Capture()
        self.follow_mode = False
        self.last_mouse = None
        self.dirty = True
        self.status = ""
        self.frame_ms = 0.0
        self.op_count = 0
        self.start_time = time.monotonic()

    def timestamp(self) -> int:
        """Milliseconds since the viewer started."""
        return int((time.monotonic() - self.start_time) * 1000)

    def set_camera(self, camera: Camera):
        self.camera = camera
        self.capture.record(self.timestamp(), camera)
        self.dirty = True

    def run_command(self, command):
        if command is not None:
            self.set_camera(apply_command(command, self.camera))

    # ────────────────────────────────────────────────────────────────────
    # Input
    # ────────────────────────────────────────────────────────────────────
    def handle_input(self) -> bool:
        """Process one pending key/mouse event.  Returns False when idle."""
        key = self.stdscr.getch()
        if key == -1:
            return False

        if key == curses.KEY_MOUSE:
            self.handle_mouse()
        elif key == curses.KEY_RESIZE:
            self.dirty = True
        elif key in CURSES_KEYS:
            self.run_command(command_for_key(*CURSES_KEYS[key]))
        elif key in WHEEL_KEYS:
            self.run_command(wheel_command(WHEEL_KEYS[key]))
        elif 0 <= key < 256:
            action = pre_action_for_key(chr(key))
            if action is not None:
                self.handle_pre_action(action)
        return True

    def handle_mouse(self):
        try:
            _id, x, y, _z, bstate = curses.getmouse()
        except curses.error:
            return

        if bstate & curses.BUTTON4_PRESSED:
            self.run_command(wheel_command(1))
        elif bstate & getattr(curses, 'BUTTON5_PRESSED', 0):
            self.run_command(wheel_command(-1))
        elif self.follow_mode:
            if self.last_mouse is not None:
                lx, ly = self.last_mouse
                self.run_command(motion_command(x - lx, y - ly))
            self.last_mouse = (x, y)

    def handle_pre_action(self, action: PreAction):
        if action is PreAction.QUIT:
            self.running = False
        elif action is PreAction.RESET:
            self.set_camera(self.initial_camera)
        elif action is PreAction.FOLLOW:
            self.follow_mode = not self.follow_mode
            self.last_mouse = None
            self.status = "follow" if self.follow_mode else ""
        elif action is PreAction.CAPTURE:
            self.capture.toggle()
            self.status = "capturing" if self.capture.on else f"captured {len(self.capture)}"
        elif action is PreAction.SAVE:
            try:
                count = self.capture.save(self.config.capture_path)
                self.status = f"saved {count} to {self.config.capture_path}"
            except OSError as e:
                logger.error("Could not save capture: %s", e)
                self.status = "save failed"
        elif action is PreAction.PRINT_CAM:
            logger.info("%s", self.camera)
            self.status = str(self.camera)

    # ────────────────────────────────────────────────────────────────────
    # Drawing
    # ────────────────────────────────────────────────────────────────────
    def draw(self):
        W, H = self.renderer.surface_size(self.stdscr)
        if W <= 0 or H <= 0:
            return

        start = time.perf_counter()
        try:
            ops = self.pipeline.frame(self.layers.planes, self.camera, W, H)
        except ZeroDivisionError:
            logger.warning("Degenerate camera %s, keeping %s", self.camera, self.good_camera)
            self.camera = self.good_camera
            ops = self.pipeline.frame(self.layers.planes, self.camera, W, H)
        self.good_camera = self.camera

        self.renderer.render(self.stdscr, ops, self.layers.styles,
                             self.layers.planes, self.config)
        self.frame_ms = (time.perf_counter() - start) * 1000
        self.op_count = len(ops)
        self.draw_hud()
        self.stdscr.refresh()

    def draw_hud(self):
        th, tw = self.stdscr.getmaxyx()
        hdr = (f" PLANES:{len(self.layers.planes)}"
               f" | OPS:{self.op_count}"
               f" | {self.frame_ms:.1f}ms"
               f" | {'CAP' if self.capture.on else '---'}"
               f" {'FOL' if self.follow_mode else '---'}"
               f" | {self.status} ")
        try:
            self.stdscr.addstr(0, 0, hdr[:tw - 1].center(tw - 1, '='),
                               curses.color_pair(0) | curses.A_BOLD)
        except curses.error:
            pass

    # ────────────────────────────────────────────────────────────────────
    # Main loop
    # ────────────────────────────────────────────────────────────────────
    def run(self):
        while self.running:
            busy = self.handle_input()
            if self.dirty:
                self.dirty = False
                self.draw()
            elif not busy:
                curses.napms(10)


def main(stdscr, layers, config, pipeline, camera=None):
    """Entry point called from curses.wrapper."""
    app = ViewerApp(stdscr, layers, config, pipeline, camera)
    app.run()
