"""
Configuration loading.

The config file is TOML:

    [location]
    latitude = 52.52
    longitude = 13.41
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import Defaults
from .models import WeatherLocation
from .utils.error_handling import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "weathr"
CONFIG_FILE_NAME = "config.toml"


def config_search_paths() -> List[Path]:
    """Candidate config file locations, most specific first."""
    paths = []
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        paths.append(Path(xdg) / CONFIG_DIR_NAME / CONFIG_FILE_NAME)
    paths.append(Path.home() / ".config" / CONFIG_DIR_NAME / CONFIG_FILE_NAME)
    return paths


def usage_hint() -> str:
    """Multi-line hint printed when no usable config was found."""
    return "\n".join([
        f"Continuing with default location "
        f"({Defaults.LOCATION_NAME}: {Defaults.LATITUDE:.2f}°N, {Defaults.LONGITUDE:.2f}°E)",
        "",
        "To customize, create a config file at:",
        f"  $XDG_CONFIG_HOME/{CONFIG_DIR_NAME}/{CONFIG_FILE_NAME}",
        f"  or ~/.config/{CONFIG_DIR_NAME}/{CONFIG_FILE_NAME}",
        "",
        "Example config.toml:",
        "  [location]",
        f"  latitude = {Defaults.LATITUDE}",
        f"  longitude = {Defaults.LONGITUDE}",
        "",
    ])


@dataclass
class LocationConfig:
    """Location section of the config file."""
    latitude: float = Defaults.LATITUDE
    longitude: float = Defaults.LONGITUDE

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ConfigError(f"latitude must be between -90 and 90, got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ConfigError(f"longitude must be between -180 and 180, got {self.longitude}")

    def to_location(self) -> WeatherLocation:
        return WeatherLocation(latitude=self.latitude, longitude=self.longitude)


@dataclass
class Config:
    """Application configuration."""
    location: LocationConfig = field(default_factory=LocationConfig)

    @classmethod
    def default(cls) -> "Config":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Build a Config from parsed TOML, validating types and ranges."""
        section = data.get("location")
        if not isinstance(section, dict):
            raise ConfigError("missing [location] section")

        values = {}
        for key in ("latitude", "longitude"):
            if key not in section:
                raise ConfigError(f"missing location.{key}")
            value = section[key]
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"location.{key} must be a number, got {value!r}")
            values[key] = float(value)

        return cls(location=LocationConfig(**values))

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """
        Load configuration from ``path`` or the first existing search path.

        Raises:
            ConfigError: if no file exists or the file is unreadable/invalid
        """
        if path is None:
            path = next((p for p in config_search_paths() if p.is_file()), None)
            if path is None:
                raise ConfigError("no config file found")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError:
            raise ConfigError(f"config file not found: {path}")
        except OSError as e:
            raise ConfigError(f"cannot read {path}: {e}")
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"invalid TOML in {path}: {e}")

        config = cls.from_dict(data)
        logger.info(f"Loaded config from {path}")
        return config
