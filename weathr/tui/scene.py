"""
TUI Weather Scene - The house and the layer stack around it.

Layers are drawn back to front:

    clouds -> birds -> sun -> house -> storm | rain

Only active layers are updated, so a system that is switched off keeps
its particles frozen until it is shown again (and rebuilds then if the
viewport changed in the meantime).
"""

from typing import List

from ..constants import Layout
from ..models import SceneFlags
from .backdrop import CloudSystem, SunnyAnimation
from .colors import Colors
from .creatures import BirdSystem
from .weather import RaindropSystem, ThunderstormSystem

HOUSE = [
    "                 (   )",
    "                  ( )",
    "          ________[_]_________",
    "         /                    \\",
    "        /                      \\",
    "       /________________________\\",
    "        |   ____        ____   |",
    "        |  |_|__|      |_|__|  |",
    "        |  |__|_|      |__|_|  |",
    "        |          __          |",
    "        |   .-.   |  |   .-.   |",
    "        |   '-'   | o|   '-'   |",
    "   _____|_________|__|_________|_____",
]

# Layer names in draw order
LAYER_CLOUDS = "clouds"
LAYER_BIRDS = "birds"
LAYER_SUN = "sun"
LAYER_HOUSE = "house"
LAYER_STORM = "storm"
LAYER_RAIN = "rain"


def house_row(height: int) -> int:
    """Top row of the house for a viewport height."""
    return Layout.HOUSE_ROW_TALL if height > Layout.TALL_THRESHOLD else Layout.HOUSE_ROW_SHORT


def sun_row(height: int) -> int:
    """Top row of the sun for a viewport height."""
    return Layout.SUN_ROW_TALL if height > Layout.TALL_THRESHOLD else Layout.SUN_ROW_SHORT


def active_layers(flags: SceneFlags) -> List[str]:
    """Layers to draw for the given flags, back to front."""
    layers = []
    if flags.is_cloudy:
        layers.append(LAYER_CLOUDS)
    if not flags.is_raining and not flags.is_thunderstorm:
        layers.append(LAYER_BIRDS)
    if flags.show_sun and not flags.is_raining and not flags.is_thunderstorm:
        layers.append(LAYER_SUN)
    layers.append(LAYER_HOUSE)
    # Storm overrides plain rain
    if flags.is_thunderstorm:
        layers.append(LAYER_STORM)
    elif flags.is_raining:
        layers.append(LAYER_RAIN)
    return layers


class WeatherScene:
    """
    Owns every animation system and composites them onto a surface.

    The scene holds no weather state of its own; the active layer set is
    derived from the SceneFlags passed to draw().
    """

    def __init__(self, width: int, height: int):
        self.rain = RaindropSystem(width, height)
        self.storm = ThunderstormSystem(width, height)
        self.clouds = CloudSystem(width, height)
        self.birds = BirdSystem(width, height)
        self.sun = SunnyAnimation()

    def draw(self, surface, flags: SceneFlags) -> List[str]:
        """Update and render all active layers; returns the layers drawn."""
        width, height = surface.get_size()
        layers = active_layers(flags)
        for layer in layers:
            if layer == LAYER_CLOUDS:
                self.clouds.update(width, height)
                self.clouds.render(surface)
            elif layer == LAYER_BIRDS:
                self.birds.update(width, height)
                self.birds.render(surface)
            elif layer == LAYER_SUN:
                self.sun.render(surface, sun_row(height))
            elif layer == LAYER_HOUSE:
                surface.write_centered(HOUSE, house_row(height), Colors.HOUSE)
            elif layer == LAYER_STORM:
                self.storm.update(width, height)
                self.storm.render(surface)
            elif layer == LAYER_RAIN:
                self.rain.update(width, height)
                self.rain.render(surface)
        return layers
