#
# PROJECT: cardboard
# MODULE: cardboard/cli.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import argparse
import curses
import logging
import os
import sys

from .bbox import BBox
from .camera import Camera
from .capture import Capture
from .config import RenderConfig
from .layers import LayerData
from .logging_config import setup_logging
from .math_utils import Vec3
from .pipeline import DrawPipeline
from .raster import render_image, save_image
from .style import StyleConfigError
from . import viewer

logger = logging.getLogger(__name__)

# Errors that abort loading a manifest
LOAD_ERRORS = (StyleConfigError, OSError, ValueError)


def build_parser():
    epilog = """\
manifest format, one layer per line (relative to the manifest):
  styles/roads.json:data/roads.geojson
  data/buildings.geojson            default black on white style

examples:
  %(prog)s view city.manifest
  %(prog)s print city.manifest city.pdf --eye 0 -300 200
  %(prog)s replay city.manifest capture.cardboard frames/
"""
    parser = argparse.ArgumentParser(
        prog="cardboard",
        description="Layered polygon map renderer",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging")
    parser.add_argument("--log-file",
                        help="Also write the log to this file")
    parser.add_argument("--workers", type=int, default=4,
                        help="Draw pipeline worker threads, 1 disables the pool (default: 4)")

    sub = parser.add_subparsers(dest="command", required=True)

    view = sub.add_parser("view", help="Interactive terminal viewer")
    view.add_argument("manifest", help="Layer manifest")
    view.add_argument("--no-color", action="store_true",
                      help="Disable color output")
    view.add_argument("--ascii", action="store_true",
                      help="Use ASCII characters instead of Braille")
    view.add_argument("--capture-path", default="capture.cardboard",
                      help="Where 's' saves the capture (default: capture.cardboard)")

    prt = sub.add_parser("print", help="Render one frame to PNG or PDF")
    prt.add_argument("manifest", help="Layer manifest")
    prt.add_argument("output", help="Output file, .pdf or an image extension")
    _add_size_args(prt)
    prt.add_argument("--eye", type=float, nargs=3, metavar=("X", "Y", "Z"),
                     help="Camera eye (default: above the data)")
    prt.add_argument("--target", type=float, nargs=3, metavar=("X", "Y", "Z"),
                     help="Camera target (default: data center)")
    prt.add_argument("--background", default="#646464",
                     help="Background color (default: #646464)")

    rep = sub.add_parser("replay", help="Render every frame of a capture to PNG")
    rep.add_argument("manifest", help="Layer manifest")
    rep.add_argument("capture", help="Capture file")
    rep.add_argument("output_dir", help="Directory for frame_NNNNN.png files")
    _add_size_args(rep)

    cam = sub.add_parser("camera", help="Print the default camera for a manifest")
    cam.add_argument("manifest", help="Layer manifest")

    return parser


def _add_size_args(parser):
    parser.add_argument("--width", type=int, default=RenderConfig.page_width,
                        help=f"Surface width in pixels (default: {RenderConfig.page_width})")
    parser.add_argument("--height", type=int, default=RenderConfig.page_height,
                        help=f"Surface height in pixels (default: {RenderConfig.page_height})")


def default_camera(layers: LayerData, eye=None, target=None) -> Camera:
    camera = Camera.from_bbox(BBox.from_planes(layers.planes))
    return Camera(Vec3(*eye) if eye else camera.eye,
                  Vec3(*target) if target else camera.target)


# ── Commands ────────────────────────────────────────────────────────────

def cmd_view(args, layers):
    config = RenderConfig.detect_terminal(workers=args.workers,
                                          capture_path=args.capture_path)
    if args.no_color:
        config.use_color = False
    if args.ascii:
        config.use_braille = False

    with DrawPipeline(config.workers) as pipeline:
        try:
            curses.wrapper(lambda s: viewer.main(s, layers, config, pipeline))
        except KeyboardInterrupt:
            pass
    return 0


def cmd_print(args, layers):
    camera = default_camera(layers, args.eye, args.target)
    logger.info("%s", camera)
    with DrawPipeline(args.workers) as pipeline:
        ops = pipeline.frame(layers.planes, camera, args.width, args.height)
    image = render_image(ops, layers.styles, layers.planes,
                         args.width, args.height, args.background)
    save_image(image, args.output)
    return 0


def cmd_replay(args, layers):
    capture = Capture.from_records(args.capture)
    if not len(capture):
        logger.error("No frames in %s", args.capture)
        return 1

    os.makedirs(args.output_dir, exist_ok=True)
    written = 0
    with DrawPipeline(args.workers) as pipeline:
        for i, frame in enumerate(capture.replay()):
            try:
                ops = pipeline.frame(layers.planes, frame.camera, args.width, args.height)
            except ZeroDivisionError:
                logger.warning("Skipping frame %d: degenerate camera %s", i, frame.camera)
                continue
            image = render_image(ops, layers.styles, layers.planes,
                                 args.width, args.height, RenderConfig.background)
            save_image(image, os.path.join(args.output_dir, f"frame_{i:05d}.png"))
            written += 1
    logger.info("Replayed %d of %d frames", written, len(capture))
    return 0


def cmd_camera(args, layers):
    print(default_camera(layers))
    return 0


COMMANDS = {
    "view": cmd_view,
    "print": cmd_print,
    "replay": cmd_replay,
    "camera": cmd_camera,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # curses owns the terminal while viewing
    setup_logging(logging.DEBUG if args.verbose else logging.INFO,
                  log_file=args.log_file,
                  console=args.command != "view")

    try:
        layers = LayerData.from_manifest(args.manifest)
    except LOAD_ERRORS as e:
        logger.error("Could not load %s: %s", args.manifest, e)
        return 1

    try:
        return COMMANDS[args.command](args, layers)
    except OSError as e:
        logger.error("%s", e)
        return 1


def run():
    sys.exit(main())
