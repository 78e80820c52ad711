"""
TUI Weather Effects - Rain and thunderstorm particle systems.

Both systems keep a sub-cell vertical position per drop and an integral
column. A drop that falls past the bottom edge re-enters at the top in a
new column picked by a linear-congruential remap of its old column.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .animation import AnimationSystem
from .colors import Colors


@dataclass
class Raindrop:
    """A single falling drop."""
    x: int
    y: float
    speed: float
    character: str


class RaindropSystem(AnimationSystem):
    """Steady rain: drizzle, rain, showers and freezing rain."""

    CELLS_PER_PARTICLE = 40
    CHARACTERS = ['|', "'", '.', '`']
    COLOR = Colors.RAIN

    def _spawn(self, index: int) -> Raindrop:
        return Raindrop(
            x=(index * 7) % self.terminal_width,
            y=(index * 3.7) % self.terminal_height,
            speed=0.3 + (index % 5) * 0.1,
            character=self.CHARACTERS[index % len(self.CHARACTERS)],
        )

    def _respawn_column(self, x: int) -> int:
        return (x * 13 + 7) % self.terminal_width

    def _step(self):
        for drop in self.particles:
            drop.y += drop.speed
            if int(drop.y) >= self.terminal_height:
                drop.y = 0.0
                drop.x = self._respawn_column(drop.x)

    def render(self, surface):
        self._render_drops(surface, self.COLOR)

    def _render_drops(self, surface, color: int):
        for drop in self.particles:
            y = int(drop.y)
            if self.in_bounds(drop.x, y):
                surface.write_glyph(drop.x, y, drop.character, color)


class ThunderstormSystem(RaindropSystem):
    """
    Heavy slanted rain with periodic lightning.

    Lightning is a low-frequency sub-state driven by a tick counter: the
    last FLASH_DURATION ticks of every FLASH_INTERVAL ticks show a bolt and
    light up the rain.
    """

    CELLS_PER_PARTICLE = 25
    CHARACTERS = ['|', '/', '|', "'"]
    COLOR = Colors.STORM_RAIN

    FLASH_INTERVAL = 60
    FLASH_DURATION = 4

    def _populate(self):
        super()._populate()
        self._tick = 0
        self._strikes = 0
        self._bolt: List[Tuple[int, int, str]] = []

    def _spawn(self, index: int) -> Raindrop:
        return Raindrop(
            x=(index * 11) % self.terminal_width,
            y=(index * 2.3) % self.terminal_height,
            speed=0.6 + (index % 4) * 0.15,
            character=self.CHARACTERS[index % len(self.CHARACTERS)],
        )

    def _respawn_column(self, x: int) -> int:
        return (x * 17 + 11) % self.terminal_width

    def _flash_active(self) -> bool:
        phase = self._tick % self.FLASH_INTERVAL
        return self._tick > 0 and phase >= self.FLASH_INTERVAL - self.FLASH_DURATION

    def _step(self):
        super()._step()
        was_flashing = self._flash_active()
        self._tick += 1
        if self._flash_active() and not was_flashing:
            self._strikes += 1
            self._bolt = self._build_bolt()
        elif not self._flash_active():
            self._bolt = []

    def _build_bolt(self) -> List[Tuple[int, int, str]]:
        """Jagged path from the top edge down through two thirds of the sky."""
        width, height = self.terminal_width, self.terminal_height
        if width <= 0 or height <= 0:
            return []

        x = (self._strikes * 37 + width // 3) % width
        path = []
        for y in range(max(1, height * 2 // 3)):
            step = (y * 7 + self._strikes * 3) % 3 - 1
            next_x = min(width - 1, max(0, x + step))
            if next_x < x:
                glyph = '/'
            elif next_x > x:
                glyph = '\\'
            else:
                glyph = '|'
            path.append((next_x, y, glyph))
            x = next_x
        return path

    def render(self, surface):
        flashing = self._flash_active()
        self._render_drops(surface, Colors.FLASH_RAIN if flashing else self.COLOR)
        if not flashing:
            return
        for x, y, glyph in self._bolt:
            if self.in_bounds(x, y):
                surface.write_glyph(x, y, glyph, Colors.LIGHTNING, bold=True)
