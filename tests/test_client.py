"""
Tests for the Open-Meteo provider and the caching client.
"""

import http.client
import json
import socket
import urllib.error
import urllib.parse
from unittest.mock import MagicMock, patch

import pytest

from weathr.client import OpenMeteoProvider, WeatherClient, condition_from_wmo
from weathr.models import (
    TemperatureUnit,
    WeatherCondition,
    WeatherLocation,
    WeatherUnits,
    WindSpeedUnit,
)
from weathr.utils.error_handling import ErrorCategory, WeatherError

from fakes import FakeProvider, make_snapshot

CURRENT = {
    "time": "2024-06-01T12:00",
    "temperature_2m": 21.3,
    "apparent_temperature": 20.1,
    "relative_humidity_2m": 55,
    "precipitation": 0.4,
    "weather_code": 63,
    "wind_speed_10m": 14.2,
    "wind_direction_10m": 230,
    "cloud_cover": 90,
    "pressure_msl": 1008.2,
    "visibility": 12000,
    "is_day": 1,
}


def mock_response(body: bytes):
    response = MagicMock()
    response.read.return_value = body
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


class TestConditionFromWmo:
    """Tests for WMO code mapping."""

    @pytest.mark.parametrize("code,expected", [
        (0, WeatherCondition.CLEAR),
        (2, WeatherCondition.CLOUDY),
        (45, WeatherCondition.FOG),
        (55, WeatherCondition.DRIZZLE),
        (66, WeatherCondition.FREEZING_RAIN),
        (77, WeatherCondition.SNOW_GRAINS),
        (81, WeatherCondition.RAIN_SHOWERS),
        (95, WeatherCondition.THUNDERSTORM),
        (99, WeatherCondition.THUNDERSTORM_HAIL),
    ])
    def test_known_codes(self, code, expected):
        assert condition_from_wmo(code) == expected

    def test_unknown_code_is_clear(self):
        assert condition_from_wmo(42) == WeatherCondition.CLEAR


class TestOpenMeteoProvider:
    """Tests for the HTTP provider."""

    def test_build_url(self, berlin):
        provider = OpenMeteoProvider()
        units = WeatherUnits(temperature=TemperatureUnit.FAHRENHEIT, wind_speed=WindSpeedUnit.MPH)

        url = provider.build_url(berlin, units)
        query = urllib.parse.parse_qs(urllib.parse.urlparse(url).query)

        assert url.startswith(OpenMeteoProvider.BASE_URL)
        assert query["latitude"] == ["52.5200"]
        assert query["temperature_unit"] == ["fahrenheit"]
        assert query["wind_speed_unit"] == ["mph"]
        assert "weather_code" in query["current"][0].split(",")
        assert "elevation" not in query

    def test_build_url_with_elevation(self):
        provider = OpenMeteoProvider(base_url="http://localhost/forecast")
        url = provider.build_url(WeatherLocation(1.0, 2.0, elevation=34.0), WeatherUnits())
        assert url.startswith("http://localhost/forecast?")
        assert "elevation=34.0" in url

    def test_get_current_weather(self, berlin):
        body = json.dumps({"current": CURRENT}).encode()
        with patch("weathr.client.urllib.request.urlopen", return_value=mock_response(body)) as urlopen:
            snapshot = OpenMeteoProvider(timeout=3.0).get_current_weather(berlin, WeatherUnits())

        assert urlopen.call_args.kwargs["timeout"] == 3.0
        assert snapshot.condition == WeatherCondition.RAIN
        assert snapshot.temperature == 21.3
        assert snapshot.is_day is True
        assert snapshot.visibility == 12000.0

    def test_http_error(self, berlin):
        error = urllib.error.HTTPError("http://x", 503, "Unavailable", {}, None)
        with patch("weathr.client.urllib.request.urlopen", side_effect=error):
            with pytest.raises(WeatherError, match="HTTP 503") as exc_info:
                OpenMeteoProvider().get_current_weather(berlin, WeatherUnits())
        assert exc_info.value.category == ErrorCategory.NETWORK

    def test_unreachable(self, berlin):
        error = urllib.error.URLError("Name or service not known")
        with patch("weathr.client.urllib.request.urlopen", side_effect=error):
            with pytest.raises(WeatherError, match="unreachable"):
                OpenMeteoProvider().get_current_weather(berlin, WeatherUnits())

    def test_timeout(self, berlin):
        with patch("weathr.client.urllib.request.urlopen", side_effect=socket.timeout()):
            with pytest.raises(WeatherError, match="timed out"):
                OpenMeteoProvider().get_current_weather(berlin, WeatherUnits())

    def test_connection_reset(self, berlin):
        error = ConnectionResetError(104, "Connection reset by peer")
        with patch("weathr.client.urllib.request.urlopen", side_effect=error):
            with pytest.raises(WeatherError, match="unreachable.*reset by peer"):
                OpenMeteoProvider().get_current_weather(berlin, WeatherUnits())

    def test_remote_disconnected(self, berlin):
        error = http.client.RemoteDisconnected("Remote end closed connection without response")
        with patch("weathr.client.urllib.request.urlopen", side_effect=error):
            with pytest.raises(WeatherError, match="unreachable"):
                OpenMeteoProvider().get_current_weather(berlin, WeatherUnits())

    def test_incomplete_read(self, berlin):
        response = mock_response(b"")
        response.read.side_effect = http.client.IncompleteRead(b"{", 100)
        with patch("weathr.client.urllib.request.urlopen", return_value=response):
            with pytest.raises(WeatherError, match="unreachable") as exc_info:
                OpenMeteoProvider().get_current_weather(berlin, WeatherUnits())
        assert exc_info.value.category == ErrorCategory.NETWORK

    def test_invalid_json(self, berlin):
        with patch("weathr.client.urllib.request.urlopen", return_value=mock_response(b"<html>")):
            with pytest.raises(WeatherError, match="invalid JSON"):
                OpenMeteoProvider().get_current_weather(berlin, WeatherUnits())


class TestParseResponse:
    """Tests for payload decoding."""

    def test_missing_visibility(self):
        current = dict(CURRENT)
        del current["visibility"]
        snapshot = OpenMeteoProvider.parse_response({"current": current})
        assert snapshot.visibility is None

    def test_missing_field(self):
        current = dict(CURRENT)
        del current["temperature_2m"]
        with pytest.raises(WeatherError, match="temperature_2m"):
            OpenMeteoProvider.parse_response({"current": current})

    def test_service_error(self):
        with pytest.raises(WeatherError, match="bad latitude"):
            OpenMeteoProvider.parse_response({"error": True, "reason": "bad latitude"})

    def test_missing_current_block(self):
        with pytest.raises(WeatherError):
            OpenMeteoProvider.parse_response({"hourly": {}})

    def test_non_numeric_value(self):
        current = dict(CURRENT, temperature_2m="warm")
        with pytest.raises(WeatherError, match="malformed"):
            OpenMeteoProvider.parse_response({"current": current})


class TestWeatherClient:
    """Tests for the caching layer."""

    def test_caches_within_duration(self, berlin, clock):
        provider = FakeProvider([make_snapshot(temperature=1.0), make_snapshot(temperature=2.0)])
        client = WeatherClient(provider, cache_duration=300, clock=clock)

        first = client.get_current_weather(berlin, WeatherUnits())
        clock.advance(299)
        second = client.get_current_weather(berlin, WeatherUnits())

        assert first is second
        assert provider.calls == 1

    def test_refetches_after_expiry(self, berlin, clock):
        provider = FakeProvider([make_snapshot(temperature=1.0), make_snapshot(temperature=2.0)])
        client = WeatherClient(provider, cache_duration=300, clock=clock)

        client.get_current_weather(berlin, WeatherUnits())
        clock.advance(300)
        snapshot = client.get_current_weather(berlin, WeatherUnits())

        assert snapshot.temperature == 2.0
        assert provider.calls == 2

    def test_different_location_misses_cache(self, berlin, clock):
        provider = FakeProvider()
        client = WeatherClient(provider, clock=clock)

        client.get_current_weather(berlin, WeatherUnits())
        client.get_current_weather(WeatherLocation(48.85, 2.35), WeatherUnits())

        assert provider.calls == 2

    def test_failures_are_not_cached(self, berlin, clock):
        provider = FakeProvider([WeatherError("down"), make_snapshot()])
        client = WeatherClient(provider, clock=clock)

        with pytest.raises(WeatherError):
            client.get_current_weather(berlin, WeatherUnits())
        assert client.get_current_weather(berlin, WeatherUnits()) is not None
        assert provider.calls == 2
