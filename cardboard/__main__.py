#
# PROJECT: cardboard
# MODULE: cardboard/__main__.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

from .cli import run

if __name__ == "__main__":
    run()
