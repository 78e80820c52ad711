"""
Shared fixtures for weathr tests.
"""

import pytest

from weathr.models import WeatherLocation
from weathr.utils.error_handling import WeatherError, get_error_tracker

from fakes import FakeClock, FakeProvider, FakeSurface


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def berlin():
    return WeatherLocation(latitude=52.52, longitude=13.41)


@pytest.fixture
def unreachable_provider():
    return FakeProvider([WeatherError("weather service unreachable: timed out")] * 10)


@pytest.fixture(autouse=True)
def clear_error_tracker():
    """Keep dedup state from leaking between tests."""
    get_error_tracker().clear()
    yield
    get_error_tracker().clear()
