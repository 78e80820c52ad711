"""
Weather Client - Open-Meteo provider and a caching front end.

The scene only ever talks to WeatherClient; the client decides whether
a cached snapshot is still fresh or the provider has to be asked again.
"""

import http.client
import json
import logging
import socket
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Callable, Dict, Optional, Tuple

from .constants import Timeouts
from .models import WeatherCondition, WeatherLocation, WeatherSnapshot, WeatherUnits
from .protocol import WeatherProvider
from .utils.error_handling import WeatherError

logger = logging.getLogger(__name__)

# WMO weather interpretation codes -> scene condition
WMO_CODES: Dict[int, WeatherCondition] = {
    0: WeatherCondition.CLEAR,
    1: WeatherCondition.PARTLY_CLOUDY,
    2: WeatherCondition.CLOUDY,
    3: WeatherCondition.OVERCAST,
    45: WeatherCondition.FOG,
    48: WeatherCondition.FOG,
    51: WeatherCondition.DRIZZLE,
    53: WeatherCondition.DRIZZLE,
    55: WeatherCondition.DRIZZLE,
    56: WeatherCondition.FREEZING_RAIN,
    57: WeatherCondition.FREEZING_RAIN,
    61: WeatherCondition.RAIN,
    63: WeatherCondition.RAIN,
    65: WeatherCondition.RAIN,
    66: WeatherCondition.FREEZING_RAIN,
    67: WeatherCondition.FREEZING_RAIN,
    71: WeatherCondition.SNOW,
    73: WeatherCondition.SNOW,
    75: WeatherCondition.SNOW,
    77: WeatherCondition.SNOW_GRAINS,
    80: WeatherCondition.RAIN_SHOWERS,
    81: WeatherCondition.RAIN_SHOWERS,
    82: WeatherCondition.RAIN_SHOWERS,
    85: WeatherCondition.SNOW_SHOWERS,
    86: WeatherCondition.SNOW_SHOWERS,
    95: WeatherCondition.THUNDERSTORM,
    96: WeatherCondition.THUNDERSTORM_HAIL,
    99: WeatherCondition.THUNDERSTORM_HAIL,
}


def condition_from_wmo(code: int) -> WeatherCondition:
    """Map a WMO code to a condition, falling back to CLEAR."""
    condition = WMO_CODES.get(code)
    if condition is None:
        logger.warning(f"Unknown WMO weather code {code}, treating as Clear")
        return WeatherCondition.CLEAR
    return condition


class OpenMeteoProvider(WeatherProvider):
    """
    Fetch current conditions from the Open-Meteo forecast API.

    No API key is required.
    """

    BASE_URL = "https://api.open-meteo.com/v1/forecast"

    CURRENT_FIELDS = (
        "temperature_2m",
        "apparent_temperature",
        "relative_humidity_2m",
        "precipitation",
        "weather_code",
        "wind_speed_10m",
        "wind_direction_10m",
        "cloud_cover",
        "pressure_msl",
        "visibility",
        "is_day",
    )

    def __init__(self, base_url: Optional[str] = None, timeout: float = Timeouts.HTTP_REQUEST):
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout

    def build_url(self, location: WeatherLocation, units: WeatherUnits) -> str:
        """Build the request URL for a location and unit set."""
        params = {
            "latitude": f"{location.latitude:.4f}",
            "longitude": f"{location.longitude:.4f}",
            "current": ",".join(self.CURRENT_FIELDS),
            "temperature_unit": units.temperature.value,
            "wind_speed_unit": units.wind_speed.value,
            "precipitation_unit": units.precipitation.value,
            "timezone": "auto",
        }
        if location.elevation is not None:
            params["elevation"] = f"{location.elevation:.1f}"
        return f"{self.base_url}?{urllib.parse.urlencode(params)}"

    def get_current_weather(self, location: WeatherLocation,
                            units: WeatherUnits) -> WeatherSnapshot:
        url = self.build_url(location, units)
        request = urllib.request.Request(
            url,
            headers={'Accept': 'application/json', 'User-Agent': 'weathr'},
            method='GET',
        )

        logger.debug(f"Requesting {url}")
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                body = response.read()
        except urllib.error.HTTPError as e:
            raise WeatherError(f"HTTP {e.code} from weather service")
        except urllib.error.URLError as e:
            raise WeatherError(f"weather service unreachable: {e.reason}")
        except (socket.timeout, TimeoutError):
            raise WeatherError(f"weather service timed out after {self.timeout:.0f}s")
        except (OSError, http.client.HTTPException) as e:
            # Raised by getresponse() or read(), which urllib does not wrap
            raise WeatherError(f"weather service unreachable: {e}")

        try:
            payload = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise WeatherError(f"invalid JSON from weather service: {e}")

        return self.parse_response(payload)

    @staticmethod
    def parse_response(payload: Dict[str, Any]) -> WeatherSnapshot:
        """Turn an Open-Meteo JSON body into a snapshot."""
        if not isinstance(payload, dict):
            raise WeatherError("unexpected response from weather service")
        if payload.get("error"):
            raise WeatherError(f"weather service error: {payload.get('reason', 'unknown')}")

        current = payload.get("current")
        if not isinstance(current, dict):
            raise WeatherError("weather response has no 'current' block")

        try:
            visibility = current.get("visibility")
            return WeatherSnapshot(
                condition=condition_from_wmo(int(current["weather_code"])),
                temperature=float(current["temperature_2m"]),
                apparent_temperature=float(current["apparent_temperature"]),
                humidity=float(current["relative_humidity_2m"]),
                precipitation=float(current["precipitation"]),
                wind_speed=float(current["wind_speed_10m"]),
                wind_direction=float(current["wind_direction_10m"]),
                cloud_cover=float(current["cloud_cover"]),
                pressure=float(current["pressure_msl"]),
                visibility=float(visibility) if visibility is not None else None,
                is_day=bool(current["is_day"]),
                timestamp=str(current.get("time", "")),
            )
        except KeyError as e:
            raise WeatherError(f"weather response missing field {e.args[0]}")
        except (TypeError, ValueError) as e:
            raise WeatherError(f"malformed weather response: {e}")


class WeatherClient:
    """
    Caching front end for a WeatherProvider.

    A snapshot is reused for the same location and units until it is
    older than ``cache_duration`` seconds. Failures are never cached.
    """

    def __init__(self, provider: WeatherProvider,
                 cache_duration: float = Timeouts.WEATHER_CACHE,
                 clock: Callable[[], float] = time.monotonic):
        self.provider = provider
        self.cache_duration = cache_duration
        self._clock = clock
        self._cache_key: Optional[Tuple[WeatherLocation, WeatherUnits]] = None
        self._cached: Optional[WeatherSnapshot] = None
        self._cached_at = 0.0

    def get_current_weather(self, location: WeatherLocation,
                            units: WeatherUnits) -> WeatherSnapshot:
        """Return a fresh-enough snapshot, fetching if needed."""
        key = (location, units)
        now = self._clock()
        if (self._cached is not None and self._cache_key == key
                and now - self._cached_at < self.cache_duration):
            return self._cached

        logger.info(f"Fetching weather from {self.provider.name} "
                    f"for {location.latitude:.2f}, {location.longitude:.2f}")
        snapshot = self.provider.get_current_weather(location, units)
        self._cache_key = key
        self._cached = snapshot
        self._cached_at = now
        logger.info(f"Weather updated: {snapshot.condition.display_name}, "
                    f"{snapshot.temperature:.1f}{units.temperature.symbol}")
        return snapshot
