"""
TUI Creatures - Birds drifting across the sky on dry days.
"""

from dataclasses import dataclass

from .animation import AnimationSystem
from .colors import Colors


@dataclass
class Bird:
    """One bird gliding left to right."""
    x: float
    y: int
    speed: float
    phase: int


class BirdSystem(AnimationSystem):
    """
    Sparse flock crossing the upper third of the screen.

    Wings alternate between two frames every FLAP_TICKS ticks; each bird
    starts at a different phase so the flock does not flap in unison.
    """

    CELLS_PER_PARTICLE = 600
    WING_FRAMES = ['v', '^']
    FLAP_TICKS = 4

    def _sky_band(self) -> int:
        # Rows 2 .. height/3; row 1 belongs to the header
        return max(1, self.terminal_height // 3 - 2)

    def _spawn(self, index: int) -> Bird:
        return Bird(
            x=float((index * 23) % self.terminal_width),
            y=2 + (index * 5) % self._sky_band(),
            speed=0.2 + (index % 3) * 0.1,
            phase=index % (self.FLAP_TICKS * len(self.WING_FRAMES)),
        )

    def _step(self):
        band = self._sky_band()
        for bird in self.particles:
            bird.x += bird.speed
            bird.phase = (bird.phase + 1) % (self.FLAP_TICKS * len(self.WING_FRAMES))
            if int(bird.x) >= self.terminal_width:
                bird.x = 0.0
                bird.y = 2 + ((bird.y - 2) * 5 + 2) % band

    def render(self, surface):
        for bird in self.particles:
            x = int(bird.x)
            if self.in_bounds(x, bird.y):
                glyph = self.WING_FRAMES[bird.phase // self.FLAP_TICKS]
                surface.write_glyph(x, bird.y, glyph, Colors.BIRD)
