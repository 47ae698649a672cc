#
# PROJECT: cardboard
# MODULE: cardboard/color.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import curses

from PIL import ImageColor

# init_color/init_pair raise ValueError for out-of-range slots on some builds
_CURSES_ERRORS = (curses.error, ValueError)


def parse_color(color_str):
    """
    Parse a CSS color string to an (r, g, b, a) tuple of 0-255 ints.
    Accepts names ('red'), '#rgb', '#rrggbb', '#rrggbbaa', 'rgb()', 'hsl()'.
    Returns None on failure.
    """
    if color_str is None:
        return None
    try:
        rgb = ImageColor.getrgb(str(color_str).strip())
    except ValueError:
        return None
    if len(rgb) == 3:
        return (rgb[0], rgb[1], rgb[2], 255)
    return tuple(rgb)


# ── Terminal palette matching ───────────────────────────────────────────

# xterm-256: 6x6x6 cube at 16-231, 24-step grey ramp at 232-255
XTERM_CUBE = (0, 95, 135, 175, 215, 255)
XTERM_GREY_BASE = 232

# Approximate RGB of the eight basic ANSI colors, by index
ANSI8_RGB = (
    (0, 0, 0), (128, 0, 0), (0, 128, 0), (128, 128, 0),
    (0, 0, 128), (128, 0, 128), (0, 128, 128), (192, 192, 192),
)


def _dist2(a, b):
    return sum((x - y) ** 2 for x, y in zip(a, b))


def _rgb_to_nearest_xterm(r, g, b):
    """Nearest xterm-256 index, the closer of the cube entry and the grey ramp entry."""
    levels = [min(range(6), key=lambda i: abs(v - XTERM_CUBE[i])) for v in (r, g, b)]
    cube_rgb = tuple(XTERM_CUBE[i] for i in levels)
    cube_idx = 16 + levels[0] * 36 + levels[1] * 6 + levels[2]

    step = max(0, min(23, ((r + g + b) // 3 - 3) // 10))
    grey = 8 + step * 10
    if _dist2((r, g, b), (grey, grey, grey)) < _dist2((r, g, b), cube_rgb):
        return XTERM_GREY_BASE + step
    return cube_idx


def _rgb_to_nearest_ansi8(r, g, b):
    return min(range(8), key=lambda i: _dist2((r, g, b), ANSI8_RGB[i]))


def stroke_palette(styles):
    """
    Distinct stroke colors of a StyleCollection as (r, g, b), in first-seen
    order.  Never empty: black stands in when no style strokes.
    """
    palette = []
    for style_list in styles:
        for style in style_list:
            if style.stroke_color is None:
                continue
            rgb = style.stroke_color.to_rgb8()
            if rgb not in palette:
                palette.append(rgb)
    return palette or [(0, 0, 0)]


def _palette_slots(palette, bg_rgb, num_colors, can_redefine, default_bg):
    """Curses color numbers for each palette entry and for the background."""
    if can_redefine and num_colors >= 256:
        # Redefine slots 16.. with the exact colors; bg takes the slot after them
        slots = []
        for i, rgb in enumerate(palette + [bg_rgb]):
            slot = 16 + i
            try:
                curses.init_color(slot, *(v * 1000 // 255 for v in rgb))
            except _CURSES_ERRORS:
                slot = _rgb_to_nearest_xterm(*rgb)
            slots.append(slot)
        fg, bg = slots[:-1], slots[-1]
    elif num_colors >= 256:
        fg = [_rgb_to_nearest_xterm(*rgb) for rgb in palette]
        bg = _rgb_to_nearest_xterm(*bg_rgb)
    else:
        fg = [_rgb_to_nearest_ansi8(*rgb) for rgb in palette]
        bg = _rgb_to_nearest_ansi8(*bg_rgb)
    if default_bg:
        bg = -1
    return fg, bg


def init_colors(config, palette, bg_rgb=None):
    """
    Create one curses color pair per palette entry plus a background pair.

    Cascade: redefined true colors, then nearest xterm-256, then nearest
    ANSI-8, then monochrome.  Returns (pair ids parallel to `palette`,
    background pair id); 0 means the terminal default.
    """
    mono = ([0] * len(palette), 0)
    if not config.use_color:
        return mono

    try:
        if not curses.has_colors():
            return mono
        curses.start_color()

        transparent = False
        try:
            curses.use_default_colors()
            transparent = True
        except _CURSES_ERRORS:
            pass

        num_colors = getattr(curses, 'COLORS', 8)
        if num_colors < 8:
            return mono
        try:
            can_redefine = curses.can_change_color()
        except _CURSES_ERRORS:
            can_redefine = False

        bg_rgb = tuple(bg_rgb) if bg_rgb is not None else (0, 0, 0)
        # A black background on a terminal with default colors stays transparent
        fg_slots, bg_slot = _palette_slots(list(palette), bg_rgb, num_colors, can_redefine,
                                           transparent and bg_rgb == (0, 0, 0))

        pairs = []
        for pair_id, slot in enumerate(fg_slots, 1):
            try:
                curses.init_pair(pair_id, slot, bg_slot)
                pairs.append(pair_id)
            except _CURSES_ERRORS:
                pairs.append(0)

        bg_pair = len(palette) + 1
        try:
            curses.init_pair(bg_pair, 0 if bg_slot == 7 else 7, bg_slot)
        except _CURSES_ERRORS:
            bg_pair = 0
        return pairs, bg_pair

    except _CURSES_ERRORS:
        return mono
