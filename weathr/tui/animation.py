"""
TUI Animation Base - Shared lifecycle for particle animation systems.

Every system exposes exactly update(width, height) and render(surface).
A viewport change discards the whole particle population and rebuilds it
from the new dimensions; there is no partial migration.

Initial particle state is derived from the particle index with small
modulo formulas instead of a random generator, so a given viewport size
always produces the same scene.
"""

from abc import ABC, abstractmethod
from typing import List


class AnimationSystem(ABC):
    """Base class for the particle systems drawn by the scene."""

    # One particle per this many cells
    CELLS_PER_PARTICLE = 40

    def __init__(self, width: int, height: int):
        self.terminal_width = width
        self.terminal_height = height
        self.particles: List = []
        self._populate()

    @classmethod
    def population_size(cls, width: int, height: int) -> int:
        """Particle count for a viewport."""
        return (max(0, width) * max(0, height)) // cls.CELLS_PER_PARTICLE

    def update(self, width: int, height: int):
        """Advance one tick, or rebuild if the viewport changed."""
        if width != self.terminal_width or height != self.terminal_height:
            self.terminal_width = width
            self.terminal_height = height
            self._populate()
            return
        self._step()

    @abstractmethod
    def render(self, surface):
        """Draw every in-bounds particle onto the surface."""
        pass

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.terminal_width and 0 <= y < self.terminal_height

    def _populate(self):
        count = self.population_size(self.terminal_width, self.terminal_height)
        self.particles = [self._spawn(i) for i in range(count)]

    @abstractmethod
    def _spawn(self, index: int):
        """Create particle ``index`` for the current viewport."""
        pass

    @abstractmethod
    def _step(self):
        """Move every particle by one tick."""
        pass
