"""
weathr TUI - Terminal rendering and animation layers.
"""

from .colors import Colors
from .renderer import TerminalRenderer
from .animation import AnimationSystem
from .weather import Raindrop, RaindropSystem, ThunderstormSystem
from .backdrop import Cloud, CloudSystem, SunnyAnimation
from .creatures import Bird, BirdSystem
from .scene import WeatherScene, active_layers, house_row, sun_row

__all__ = [
    'Colors',
    'TerminalRenderer',
    'AnimationSystem',
    'Raindrop',
    'RaindropSystem',
    'ThunderstormSystem',
    'Cloud',
    'CloudSystem',
    'SunnyAnimation',
    'Bird',
    'BirdSystem',
    'WeatherScene',
    'active_layers',
    'house_row',
    'sun_row',
]
