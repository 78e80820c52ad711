"""
TUI Session State - Everything the main loop mutates between ticks.

Owned by the Dashboard; the scene itself only ever sees the SceneFlags.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..models import (
    SceneFlags,
    WeatherCondition,
    WeatherLocation,
    WeatherSnapshot,
    WeatherUnits,
)


class SessionState(Enum):
    """Lifecycle of one run."""
    AWAITING_FIRST_SNAPSHOT = "awaiting_first_snapshot"
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass
class WeatherSession:
    """Mutable state for one run of the scene."""
    location: WeatherLocation
    units: WeatherUnits = field(default_factory=WeatherUnits)
    simulated_condition: Optional[WeatherCondition] = None
    snapshot: Optional[WeatherSnapshot] = None
    error: Optional[str] = None
    flags: SceneFlags = field(default_factory=SceneFlags.default)
    state: SessionState = SessionState.AWAITING_FIRST_SNAPSHOT
    # Monotonic time of the last fetch attempt, successful or not
    last_update: Optional[float] = None
    last_frame_time: float = 0.0

    @classmethod
    def simulated(cls, location: WeatherLocation, condition: WeatherCondition,
                  units: Optional[WeatherUnits] = None) -> "WeatherSession":
        """A session pinned to one condition; it never fetches."""
        session = cls(location=location, units=units or WeatherUnits(),
                      simulated_condition=condition)
        session.apply_snapshot(WeatherSnapshot.simulated(condition), now=None)
        return session

    @property
    def is_simulated(self) -> bool:
        return self.simulated_condition is not None

    @property
    def is_running(self) -> bool:
        return self.state != SessionState.TERMINATED

    def needs_refresh(self, now: float, interval: float) -> bool:
        """
        True if a fetch is due: never attempted yet, or the interval has
        passed since the last attempt. Simulated sessions never fetch.
        """
        if self.is_simulated or self.state == SessionState.TERMINATED:
            return False
        if self.last_update is None:
            return True
        return now - self.last_update >= interval

    def apply_snapshot(self, snapshot: WeatherSnapshot, now: Optional[float]):
        """Replace the snapshot wholesale and re-derive the scene flags."""
        self.snapshot = snapshot
        self.flags = snapshot.scene_flags
        self.error = None
        self.last_update = now
        self.state = SessionState.RUNNING

    def apply_error(self, message: str, now: float):
        """Keep the previous snapshot and surface the error in the header."""
        self.error = message
        self.last_update = now
        self.state = SessionState.RUNNING

    def terminate(self):
        self.state = SessionState.TERMINATED

    def location_text(self) -> str:
        lat = self.location.latitude
        lon = self.location.longitude
        return (f"{abs(lat):.2f}°{'N' if lat >= 0 else 'S'}, "
                f"{abs(lon):.2f}°{'E' if lon >= 0 else 'W'}")

    def status_line(self) -> str:
        """Header text for the current state."""
        location = f"Location: {self.location_text()}"
        if self.error:
            return f"{self.error} | {location} | Press 'q' to quit"
        if self.snapshot is not None:
            return (f"Weather: {self.snapshot.condition.display_name} | "
                    f"Temp: {self.snapshot.temperature:.1f}{self.units.temperature.symbol} | "
                    f"{location} | Press 'q' to quit")
        return f"Weather: Loading... | {location} | Press 'q' to quit"
