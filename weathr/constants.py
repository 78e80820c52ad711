"""
Centralized timing, layout and default values for weathr.

Grouped into small namespaces so call sites read as ``Timeouts.WEATHER_REFRESH``.
"""


class Timeouts:
    """Intervals and timeouts, in seconds unless the name says otherwise."""
    # Weather snapshot refresh / client cache lifetime
    WEATHER_REFRESH = 300.0
    WEATHER_CACHE = 300.0
    # Sun frame advance, independent of the tick rate
    SUN_FRAME_DELAY = 0.5
    # Keyboard poll per tick; bounds the frame rate (~30 fps)
    INPUT_POLL_MS = 33
    # Open-Meteo request
    HTTP_REQUEST = 10.0


class Layout:
    """Row positions of the static layers."""
    HEADER_ROW = 1
    HEADER_COL = 2
    # Viewports taller than this get the roomier layout
    TALL_THRESHOLD = 20
    HOUSE_ROW_TALL = 10
    HOUSE_ROW_SHORT = 9
    SUN_ROW_TALL = 3
    SUN_ROW_SHORT = 2


class Defaults:
    """Fallback location (Berlin) used when no config file is readable."""
    LATITUDE = 52.52
    LONGITUDE = 13.41
    LOCATION_NAME = "Berlin"
