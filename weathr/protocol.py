"""
Weather Provider Interface

Defines the abstract interface that any weather backend must follow
to feed the scene.

Usage:
    from weathr.protocol import WeatherProvider

    class MyProvider(WeatherProvider):
        def get_current_weather(self, location, units):
            return WeatherSnapshot(...)
"""

from abc import ABC, abstractmethod

from .models import WeatherLocation, WeatherSnapshot, WeatherUnits


class WeatherProvider(ABC):
    """
    Abstract interface for weather data sources.

    Implementations should use bounded network timeouts; the main loop
    waits for the call to return before drawing the next frame.
    """

    @abstractmethod
    def get_current_weather(self, location: WeatherLocation,
                            units: WeatherUnits) -> WeatherSnapshot:
        """
        Get the current conditions at a location.

        Args:
            location: Point to query
            units: Units for temperature, wind speed and precipitation

        Returns:
            WeatherSnapshot for the current moment

        Raises:
            WeatherError: if the data could not be fetched or decoded
        """
        pass

    @property
    def name(self) -> str:
        """Human readable provider name for logs."""
        return type(self).__name__
