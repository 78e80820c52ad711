"""
weathr - Animated ASCII weather in the terminal

A small house under a live sky: rain, thunderstorms, drifting clouds,
birds and an animated sun, driven by current conditions from Open-Meteo.

Basic Usage:
    from weathr import run_dashboard
    run_dashboard()

Simulated Weather:
    run_dashboard(simulate="thunderstorm")

With a Custom Provider:
    from weathr import Dashboard, WeatherClient, WeatherProvider, WeatherSession

    class MyProvider(WeatherProvider):
        def get_current_weather(self, location, units):
            ...

    session = WeatherSession(location=...)
    Dashboard(session, client=WeatherClient(MyProvider())).run()
"""

__version__ = "1.0.0"

# Data models
from .models import (
    WeatherCondition,
    WeatherLocation,
    WeatherSnapshot,
    WeatherUnits,
    SceneFlags,
    TemperatureUnit,
    WindSpeedUnit,
    PrecipitationUnit,
    parse_weather_condition,
)

# Weather data
from .protocol import WeatherProvider
from .client import OpenMeteoProvider, WeatherClient, condition_from_wmo
from .config import Config, LocationConfig

# Errors
from .utils.error_handling import WeathrError, WeatherError, ConfigError, RenderError

# Core classes
from .tui.session import WeatherSession, SessionState
from .tui.dashboard import Dashboard, run_dashboard, main

__all__ = [
    '__version__',
    # Models
    'WeatherCondition',
    'WeatherLocation',
    'WeatherSnapshot',
    'WeatherUnits',
    'SceneFlags',
    'TemperatureUnit',
    'WindSpeedUnit',
    'PrecipitationUnit',
    'parse_weather_condition',
    # Weather data
    'WeatherProvider',
    'OpenMeteoProvider',
    'WeatherClient',
    'condition_from_wmo',
    'Config',
    'LocationConfig',
    # Errors
    'WeathrError',
    'WeatherError',
    'ConfigError',
    'RenderError',
    # Core
    'WeatherSession',
    'SessionState',
    'Dashboard',
    'run_dashboard',
    'main',
]
