#
# PROJECT: cardboard
# MODULE: cardboard/capture.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

"""
Camera capture and replay.

One record per line, ASCII, space separated:
    <timestamp> <eye_x> <eye_y> <eye_z> <target_x> <target_y> <target_z>
"""

import logging
from typing import List, NamedTuple

from .camera import Camera
from .math_utils import Vec3

logger = logging.getLogger(__name__)


class Frame(NamedTuple):
    timestamp: int
    camera: Camera

    def to_record(self) -> str:
        eye, target = self.camera.eye, self.camera.target
        return (f"{self.timestamp} {eye.x!r} {eye.y!r} {eye.z!r} "
                f"{target.x!r} {target.y!r} {target.z!r}\n")

    @classmethod
    def from_record(cls, record: str) -> 'Frame':
        """Parse one record; raises ValueError when a field is missing or malformed."""
        fields = record.split()
        if len(fields) < 7:
            raise ValueError(f"expected 7 fields, got {len(fields)}")
        timestamp = int(fields[0])
        if timestamp < 0:
            raise ValueError(f"negative timestamp {timestamp}")
        ex, ey, ez, tx, ty, tz = (float(f) for f in fields[1:7])
        return cls(timestamp, Camera(Vec3(ex, ey, ez), Vec3(tx, ty, tz)))


class Capture:
    """Records camera changes while switched on."""

    def __init__(self, frames=None):
        self.on = False
        self.frames: List[Frame] = list(frames or [])

    def __len__(self):
        return len(self.frames)

    def toggle(self):
        """Switch recording; switching on starts a fresh recording."""
        if self.on:
            self.on = False
        else:
            self.on = True
            self.frames = []

    def record(self, timestamp: int, camera: Camera):
        if self.on:
            self.frames.append(Frame(timestamp, camera))

    def save(self, file_path) -> int:
        with open(file_path, 'w', encoding='ascii', newline='\n') as f:
            for frame in self.frames:
                f.write(frame.to_record())
        logger.info("Saved %s with %d frames", file_path, len(self.frames))
        return len(self.frames)

    @classmethod
    def from_records(cls, file_path) -> 'Capture':
        """Load a capture file, dropping malformed records."""
        frames = []
        with open(file_path, 'r', encoding='ascii', errors='replace') as f:
            for line_no, line in enumerate(f, 1):
                try:
                    frames.append(Frame.from_record(line))
                except ValueError as e:
                    logger.debug("Dropping record %d of %s: %s", line_no, file_path, e)
        return cls(frames)

    def replay(self):
        """Iterate recorded (timestamp, camera) frames in order."""
        return iter(self.frames)
