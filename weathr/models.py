"""
Weather Data Models - Conditions, snapshots and derived scene flags.

Snapshots are immutable; a refresh replaces the whole snapshot.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class WeatherCondition(Enum):
    """Weather conditions the scene knows how to show."""
    CLEAR = "clear"
    PARTLY_CLOUDY = "partly_cloudy"
    CLOUDY = "cloudy"
    OVERCAST = "overcast"
    FOG = "fog"
    DRIZZLE = "drizzle"
    RAIN = "rain"
    FREEZING_RAIN = "freezing_rain"
    SNOW = "snow"
    SNOW_GRAINS = "snow_grains"
    RAIN_SHOWERS = "rain_showers"
    SNOW_SHOWERS = "snow_showers"
    THUNDERSTORM = "thunderstorm"
    THUNDERSTORM_HAIL = "thunderstorm_hail"

    @property
    def display_name(self) -> str:
        """Get display name for the header line."""
        return {
            WeatherCondition.PARTLY_CLOUDY: "Partly Cloudy",
            WeatherCondition.FREEZING_RAIN: "Freezing Rain",
            WeatherCondition.SNOW_GRAINS: "Snow Grains",
            WeatherCondition.RAIN_SHOWERS: "Rain Showers",
            WeatherCondition.SNOW_SHOWERS: "Snow Showers",
            WeatherCondition.THUNDERSTORM_HAIL: "Thunderstorm with Hail",
        }.get(self, self.value.title())


# Case-insensitive aliases accepted by --simulate
CONDITION_ALIASES = {
    "clear": WeatherCondition.CLEAR,
    "sunny": WeatherCondition.CLEAR,
    "partly-cloudy": WeatherCondition.PARTLY_CLOUDY,
    "partly_cloudy": WeatherCondition.PARTLY_CLOUDY,
    "partlycloudy": WeatherCondition.PARTLY_CLOUDY,
    "cloudy": WeatherCondition.CLOUDY,
    "overcast": WeatherCondition.OVERCAST,
    "fog": WeatherCondition.FOG,
    "foggy": WeatherCondition.FOG,
    "drizzle": WeatherCondition.DRIZZLE,
    "rain": WeatherCondition.RAIN,
    "rainy": WeatherCondition.RAIN,
    "freezing-rain": WeatherCondition.FREEZING_RAIN,
    "freezing_rain": WeatherCondition.FREEZING_RAIN,
    "freezingrain": WeatherCondition.FREEZING_RAIN,
    "snow": WeatherCondition.SNOW,
    "snowy": WeatherCondition.SNOW,
    "snow-grains": WeatherCondition.SNOW_GRAINS,
    "snow_grains": WeatherCondition.SNOW_GRAINS,
    "snowgrains": WeatherCondition.SNOW_GRAINS,
    "rain-showers": WeatherCondition.RAIN_SHOWERS,
    "rain_showers": WeatherCondition.RAIN_SHOWERS,
    "rainshowers": WeatherCondition.RAIN_SHOWERS,
    "showers": WeatherCondition.RAIN_SHOWERS,
    "snow-showers": WeatherCondition.SNOW_SHOWERS,
    "snow_showers": WeatherCondition.SNOW_SHOWERS,
    "snowshowers": WeatherCondition.SNOW_SHOWERS,
    "thunderstorm": WeatherCondition.THUNDERSTORM,
    "thunder": WeatherCondition.THUNDERSTORM,
    "thunderstorm-hail": WeatherCondition.THUNDERSTORM_HAIL,
    "thunderstorm_hail": WeatherCondition.THUNDERSTORM_HAIL,
    "hail": WeatherCondition.THUNDERSTORM_HAIL,
}


def parse_weather_condition(text: str) -> WeatherCondition:
    """
    Resolve a user supplied condition name.

    Unknown names are logged and fall back to CLEAR.
    """
    condition = CONDITION_ALIASES.get(text.strip().lower())
    if condition is None:
        logger.warning(f"Unknown weather condition '{text}', defaulting to Clear")
        return WeatherCondition.CLEAR
    return condition


_STORM_CONDITIONS = frozenset({
    WeatherCondition.THUNDERSTORM,
    WeatherCondition.THUNDERSTORM_HAIL,
})

_RAIN_CONDITIONS = frozenset({
    WeatherCondition.DRIZZLE,
    WeatherCondition.RAIN,
    WeatherCondition.RAIN_SHOWERS,
    WeatherCondition.FREEZING_RAIN,
})

_CLOUD_CONDITIONS = frozenset({
    WeatherCondition.PARTLY_CLOUDY,
    WeatherCondition.CLOUDY,
    WeatherCondition.OVERCAST,
})

_SUN_CONDITIONS = frozenset({
    WeatherCondition.CLEAR,
    WeatherCondition.PARTLY_CLOUDY,
})


@dataclass(frozen=True)
class SceneFlags:
    """Which animation layers are active for the current snapshot."""
    is_raining: bool = False
    is_thunderstorm: bool = False
    is_cloudy: bool = False
    show_sun: bool = False

    @classmethod
    def from_condition(cls, condition: WeatherCondition) -> "SceneFlags":
        """
        Derive flags from a condition. First match wins:
        storm, then rain, then clouds. Clear, fog and the snow family
        all fall through to the sunny/default background.
        """
        is_thunderstorm = condition in _STORM_CONDITIONS
        is_raining = not is_thunderstorm and condition in _RAIN_CONDITIONS
        is_cloudy = not is_thunderstorm and not is_raining and condition in _CLOUD_CONDITIONS
        show_sun = condition in _SUN_CONDITIONS and not is_raining and not is_thunderstorm
        return cls(
            is_raining=is_raining,
            is_thunderstorm=is_thunderstorm,
            is_cloudy=is_cloudy,
            show_sun=show_sun,
        )

    @classmethod
    def default(cls) -> "SceneFlags":
        """Flags before any snapshot has arrived."""
        return cls(show_sun=True)

    @property
    def has_precipitation(self) -> bool:
        return self.is_raining or self.is_thunderstorm


@dataclass(frozen=True)
class WeatherLocation:
    """Geographic point to fetch weather for."""
    latitude: float
    longitude: float
    elevation: Optional[float] = None


class TemperatureUnit(Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def symbol(self) -> str:
        return "°F" if self is TemperatureUnit.FAHRENHEIT else "°C"


class WindSpeedUnit(Enum):
    KMH = "kmh"
    MS = "ms"
    MPH = "mph"
    KNOTS = "kn"


class PrecipitationUnit(Enum):
    MM = "mm"
    INCH = "inch"


@dataclass(frozen=True)
class WeatherUnits:
    """Units requested from the weather provider."""
    temperature: TemperatureUnit = TemperatureUnit.CELSIUS
    wind_speed: WindSpeedUnit = WindSpeedUnit.KMH
    precipitation: PrecipitationUnit = PrecipitationUnit.MM


@dataclass(frozen=True)
class WeatherSnapshot:
    """One immutable fetched-or-simulated weather reading."""
    condition: WeatherCondition
    temperature: float
    apparent_temperature: float
    humidity: float
    precipitation: float
    wind_speed: float
    wind_direction: float
    cloud_cover: float
    pressure: float
    visibility: Optional[float]
    is_day: bool
    timestamp: str

    @classmethod
    def simulated(cls, condition: WeatherCondition) -> "WeatherSnapshot":
        """Build a plausible reading for --simulate runs."""
        wet = condition in (
            WeatherCondition.RAIN,
            WeatherCondition.DRIZZLE,
            WeatherCondition.RAIN_SHOWERS,
        )
        return cls(
            condition=condition,
            temperature=20.0,
            apparent_temperature=19.0,
            humidity=65.0,
            precipitation=2.5 if wet else 0.0,
            wind_speed=10.0,
            wind_direction=180.0,
            cloud_cover=50.0,
            pressure=1013.0,
            visibility=10000.0,
            is_day=True,
            timestamp="simulated",
        )

    @property
    def scene_flags(self) -> SceneFlags:
        return SceneFlags.from_condition(self.condition)
