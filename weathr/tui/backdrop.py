"""
TUI Backdrop Effects - Drifting clouds and the animated sun.

Clouds are a particle system like rain; the sun is a fixed cycle of
pre-rendered frames advanced on its own, slower timer.
"""

import math
from dataclasses import dataclass
from typing import List

from .animation import AnimationSystem
from .colors import Colors


@dataclass
class Cloud:
    """A multi-cell cloud; (x, y) is its top-left corner."""
    x: float
    y: int
    speed: float
    shape: int


class CloudSystem(AnimationSystem):
    """
    Clouds drifting right through the top third of the sky.

    A cloud that leaves the right edge comes back fully hidden past the
    left edge on a new row, so it slides in rather than popping up.
    Spaces inside a shape are transparent.
    """

    CELLS_PER_PARTICLE = 400

    SHAPES = [
        [
            "  .--.  ",
            " (    ) ",
            "(______)",
        ],
        [
            "    .--.     ",
            " .-(    )-.  ",
            "(__________)",
        ],
        [
            "   .-~~~-.      ",
            " .(       )-.   ",
            "(_____________) ",
        ],
    ]

    @classmethod
    def population_size(cls, width: int, height: int) -> int:
        area = max(0, width) * max(0, height)
        if area == 0:
            return 0
        return max(1, area // cls.CELLS_PER_PARTICLE)

    @classmethod
    def shape_width(cls, shape: int) -> int:
        return max(len(row) for row in cls.SHAPES[shape])

    def _sky_band(self) -> int:
        return max(1, self.terminal_height // 3)

    def _spawn(self, index: int) -> Cloud:
        return Cloud(
            x=float((index * 31) % self.terminal_width),
            y=2 + (index * 4) % self._sky_band(),
            speed=0.05 + (index % 4) * 0.05,
            shape=index % len(self.SHAPES),
        )

    def _step(self):
        band = self._sky_band()
        for cloud in self.particles:
            cloud.x += cloud.speed
            if math.floor(cloud.x) >= self.terminal_width:
                cloud.x = -float(self.shape_width(cloud.shape))
                cloud.y = 2 + ((cloud.y - 2) * 7 + 3) % band

    def render(self, surface):
        for cloud in self.particles:
            left = math.floor(cloud.x)
            for dy, row in enumerate(self.SHAPES[cloud.shape]):
                y = cloud.y + dy
                for dx, char in enumerate(row):
                    if char != ' ' and self.in_bounds(left + dx, y):
                        surface.write_glyph(left + dx, y, char, Colors.CLOUD)


class SunnyAnimation:
    """
    Sun drawn from an ordered list of frames.

    Not a particle system: update/render do not move anything. The frame
    only changes through next_frame(), which the scene calls on a timer
    slower than the tick rate.
    """

    FRAMES: List[List[str]] = [
        [
            r"     \   |   /     ",
            r"       .---.       ",
            r"  -- (       ) --  ",
            r"       `---'       ",
            r"     /   |   \     ",
        ],
        [
            r"         |         ",
            r"   \   .---.   /   ",
            r" --  (       )  -- ",
            r"   /   `---'   \   ",
            r"         |         ",
        ],
        [
            r"    \    |    /    ",
            r"       .---.       ",
            r" --- (       ) --- ",
            r"       `---'       ",
            r"    /    |    \    ",
        ],
        [
            r"         .         ",
            r"   .   .---.   .   ",
            r"  -  (       )  -  ",
            r"   '   `---'   '   ",
            r"         '         ",
        ],
    ]

    def __init__(self):
        self.current_frame = 0

    @property
    def frame_count(self) -> int:
        return len(self.FRAMES)

    def next_frame(self):
        """Advance to the next frame, wrapping after the last."""
        self.current_frame = (self.current_frame + 1) % self.frame_count

    def render(self, surface, start_row: int):
        """Draw the current frame centered, with its top row at start_row."""
        surface.write_centered(self.FRAMES[self.current_frame], start_row, Colors.SUN)
