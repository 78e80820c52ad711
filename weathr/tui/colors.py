"""
TUI Color Definitions - Curses color pair management.

A single fixed palette; every pair uses the terminal's default background.
"""

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False


class Colors:
    """Color pairs for curses."""
    NORMAL = 0
    HEADER = 1           # Cyan status line
    ERROR = 2            # Red error text
    RAIN = 3             # Cyan raindrops
    STORM_RAIN = 4       # Blue storm rain
    LIGHTNING = 5        # Bright yellow bolt
    FLASH_RAIN = 6       # White rain lit by a flash
    CLOUD = 7            # White cloud puffs
    BIRD = 8             # Birds crossing the sky
    SUN = 9              # Yellow sun
    HOUSE = 10           # House outline

    # (pair, foreground); background is the terminal default where supported
    PALETTE = (
        (HEADER, 'COLOR_CYAN'),
        (ERROR, 'COLOR_RED'),
        (RAIN, 'COLOR_CYAN'),
        (STORM_RAIN, 'COLOR_BLUE'),
        (LIGHTNING, 'COLOR_YELLOW'),
        (FLASH_RAIN, 'COLOR_WHITE'),
        (CLOUD, 'COLOR_WHITE'),
        (BIRD, 'COLOR_WHITE'),
        (SUN, 'COLOR_YELLOW'),
        (HOUSE, 'COLOR_WHITE'),
    )

    @staticmethod
    def init_colors() -> bool:
        """
        Initialize curses color pairs.

        Returns False when the terminal has no color support; callers then
        draw everything with the default attribute.
        """
        if not CURSES_AVAILABLE or curses is None:
            return False
        if not curses.has_colors():
            return False
        curses.start_color()
        background = -1
        try:
            curses.use_default_colors()
        except curses.error:
            background = curses.COLOR_BLACK
        for pair, name in Colors.PALETTE:
            curses.init_pair(pair, getattr(curses, name), background)
        return True
