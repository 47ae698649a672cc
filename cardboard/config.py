#
# PROJECT: cardboard
# MODULE: cardboard/config.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import os
from dataclasses import dataclass


@dataclass
class RenderConfig:
    """Settings shared by the terminal viewer, the print surface and the draw pipeline."""
    use_color: bool = True
    use_braille: bool = True
    workers: int = 4
    # Print surface defaults to A4 in points
    page_width: int = 595
    page_height: int = 841
    background: str = "#646464"
    capture_path: str = "capture.cardboard"

    @classmethod
    def detect_terminal(cls, environ=None, **overrides) -> 'RenderConfig':
        """
        Guess terminal output modes from TERM and LANG before curses starts.

        Dumb terminals get no color; braille needs a UTF-8 locale and is off
        on the Linux console, whose font usually lacks it.
        """
        env = os.environ if environ is None else environ
        term = env.get('TERM', '').lower()
        lang = env.get('LANG', '').lower()
        utf8 = 'utf-8' in lang or 'utf8' in lang

        settings = dict(use_color=term not in ('dumb', 'unknown'),
                        use_braille=utf8 and term != 'linux')
        settings.update(overrides)
        return cls(**settings)
