"""
TUI Renderer - The terminal surface every layer draws onto.

Writes are queued into the curses virtual screen and only reach the
terminal on flush(), which pushes the whole frame in one update. clear()
erases the virtual screen only; it never forces a full repaint.

Callers are responsible for dropping coordinates outside the viewport;
the renderer does not clip single-cell writes.
"""

import logging
from typing import Optional, Sequence, Tuple

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from ..utils.error_handling import RenderError
from .colors import Colors

logger = logging.getLogger(__name__)


class TerminalRenderer:
    """
    Owns the curses screen: raw mode, hidden cursor, alternate screen.

    Use as a context manager so the terminal is restored on every exit
    path, including exceptions:

        with TerminalRenderer() as renderer:
            renderer.write_line(2, 1, "hello", Colors.HEADER)
            renderer.flush()
    """

    def __init__(self, screen=None):
        # An existing window (e.g. from curses.wrapper) may be passed in
        self.screen = screen
        self.width = 0
        self.height = 0
        self._active = False
        self._colors_enabled = False

    def __enter__(self) -> "TerminalRenderer":
        self.init()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.cleanup()
        return False

    def init(self):
        """Enter raw mode on the alternate screen with the cursor hidden."""
        if not CURSES_AVAILABLE or curses is None:
            raise RenderError("curses library not available "
                              "(on Windows: pip install windows-curses)")
        try:
            if self.screen is None:
                self.screen = curses.initscr()
            self._active = True
            curses.noecho()
            curses.raw()
            self.screen.keypad(True)
            try:
                curses.curs_set(0)
            except curses.error:
                # Some terminals cannot hide the cursor
                logger.debug("Terminal does not support cursor visibility changes")
            self._colors_enabled = Colors.init_colors()
        except curses.error as e:
            self.cleanup()
            raise RenderError(f"cannot initialize terminal: {e}")
        self.update_size()
        logger.debug(f"Terminal initialized at {self.width}x{self.height}, "
                     f"colors={'on' if self._colors_enabled else 'off'}")

    def cleanup(self):
        """
        Restore the original terminal state.

        Safe to call more than once; every restore step is attempted even
        if an earlier one fails.
        """
        if not self._active:
            return
        self._active = False

        steps = (
            lambda: self.screen.keypad(False),
            curses.noraw,
            curses.echo,
            lambda: curses.curs_set(1),
        )
        for step in steps:
            try:
                step()
            except curses.error as e:
                logger.debug(f"Terminal restore step failed: {e}")
        try:
            curses.endwin()
        except curses.error as e:
            logger.debug(f"endwin failed: {e}")

    @property
    def is_active(self) -> bool:
        return self._active

    def update_size(self):
        """Re-read the terminal dimensions."""
        self.height, self.width = self.screen.getmaxyx()

    def get_size(self) -> Tuple[int, int]:
        """Return cached (width, height)."""
        return self.width, self.height

    def clear(self):
        """Erase the whole surface (takes effect on flush)."""
        self.screen.erase()

    def write_glyph(self, x: int, y: int, char: str, color: int = Colors.NORMAL,
                    bold: bool = False):
        """Queue a single cell write."""
        self._addstr(x, y, char, color, bold)

    def write_line(self, x: int, y: int, text: str, color: int = Colors.NORMAL,
                   bold: bool = False):
        """Queue a run of text starting at (x, y)."""
        self._addstr(x, y, text, color, bold)

    def write_centered(self, lines: Sequence[str], start_row: int,
                       color: Optional[int] = None):
        """
        Queue a block of lines horizontally centered on the surface.

        The margin is computed from the longest line; content wider than
        the surface starts at column 0. Rows below the surface are skipped
        and lines are cut at the right edge.
        """
        max_width = max((len(line) for line in lines), default=0)
        start_col = (self.width - max_width) // 2 if self.width > max_width else 0
        room = self.width - start_col

        for idx, line in enumerate(lines):
            row = start_row + idx
            if row < 0:
                continue
            if row >= self.height:
                break
            text = line[:room]
            if text:
                self._addstr(start_col, row, text, Colors.NORMAL if color is None else color)

    def flush(self):
        """Commit every queued write to the terminal as one update."""
        self.screen.noutrefresh()
        curses.doupdate()

    def poll_key(self, timeout_ms: int) -> Optional[int]:
        """Wait up to timeout_ms for a key press; None on timeout."""
        self.screen.timeout(timeout_ms)
        key = self.screen.getch()
        return None if key == -1 else key

    def _attr(self, color: int, bold: bool) -> int:
        attr = curses.A_NORMAL
        if self._colors_enabled and color != Colors.NORMAL:
            attr = curses.color_pair(color)
        if bold:
            attr |= curses.A_BOLD
        return attr

    def _addstr(self, x: int, y: int, text: str, color: int, bold: bool = False):
        try:
            self.screen.addstr(y, x, text, self._attr(color, bold))
        except curses.error as e:
            # curses reports an error after writing the bottom-right cell
            # because the cursor cannot advance; the write itself succeeded
            if y == self.height - 1 and x + len(text) >= self.width:
                return
            raise RenderError(f"write of {len(text)} cell(s) at ({x}, {y}) failed: {e}")
