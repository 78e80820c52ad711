"""
Error Handling Utilities for weathr

Every failure in weathr falls into one of two buckets:

- recoverable: the weather service is down or returns garbage, or the
  config file is missing. The scene keeps running (or starts with the
  default location) and the message ends up in the header line.
- fatal: the terminal cannot be set up or written to. The error propagates
  out of the main loop, the terminal is restored and weathr exits with 1.

handle_error() logs both kinds in one consistent format. A weather service
that stays down fails again on every refresh; repeats of the same failure
inside a quiet window are counted by the ErrorTracker and logged as a single
short line instead of a full report.

USAGE:
    from weathr.utils.error_handling import handle_error, WeatherError

    try:
        snapshot = client.get_current_weather(location, units)
    except WeatherError as e:
        handle_error(e, "refresh_weather")
"""

import logging
import threading
import time
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Where an error came from."""
    NETWORK = "network"          # Weather service request / response
    CONFIG = "configuration"     # Config file lookup and validation
    TERMINAL = "terminal"        # curses setup and drawing
    PARSE = "parse"              # Malformed payloads
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """How bad an error is for the running scene."""
    INFO = "info"
    WARNING = "warning"          # Degraded, e.g. default location in use
    ERROR = "error"              # A refresh failed; the scene keeps going
    FATAL = "fatal"              # weathr has to exit

    @property
    def log_level(self) -> int:
        return {
            ErrorSeverity.INFO: logging.INFO,
            ErrorSeverity.WARNING: logging.WARNING,
            ErrorSeverity.ERROR: logging.ERROR,
            ErrorSeverity.FATAL: logging.CRITICAL,
        }[self]


class WeathrError(Exception):
    """Base class for all application errors."""

    category = ErrorCategory.UNKNOWN

    def __init__(self, message: str, category: Optional[ErrorCategory] = None):
        super().__init__(message)
        if category is not None:
            self.category = category


class WeatherError(WeathrError):
    """Weather data could not be fetched or decoded. Recoverable."""
    category = ErrorCategory.NETWORK


class ConfigError(WeathrError):
    """Configuration file is missing or invalid. Recoverable at startup."""
    category = ErrorCategory.CONFIG


class RenderError(WeathrError):
    """Terminal could not be set up or written to. Fatal."""
    category = ErrorCategory.TERMINAL


@dataclass
class ErrorContext:
    """One handled error and what weathr was doing when it happened."""
    error: Exception
    operation: str
    category: ErrorCategory
    severity: ErrorSeverity
    details: Dict[str, Any] = field(default_factory=dict)
    occurred_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(timespec="seconds"))

    @property
    def key(self) -> str:
        """Identity used to recognise repeats of the same failure."""
        return f"{self.category.value}:{type(self.error).__name__}:{self.operation}"

    def summary(self) -> str:
        return f"{self.operation} failed ({self.category.value}): {type(self.error).__name__}: {self.error}"

    def report(self) -> str:
        """Multi-line report for the first occurrence of a failure."""
        lines = [
            f"[{self.severity.value.upper()}] {self.summary()}",
            f"  at {self.occurred_at}",
        ]
        for name, value in self.details.items():
            lines.append(f"  {name} = {value}")

        # Tracebacks only help for errors weathr did not raise itself
        if self.error.__traceback__ is not None and not isinstance(self.error, WeathrError):
            trace = ''.join(traceback.format_exception(
                type(self.error), self.error, self.error.__traceback__))
            lines.extend(f"  {line}" for line in trace.rstrip().splitlines())

        return '\n'.join(lines)


@dataclass
class _Occurrences:
    count: int
    window_start: float


class ErrorTracker:
    """
    Counts failures by ErrorContext.key.

    The first occurrence of a key opens a quiet window; further occurrences
    inside it are only counted. The next occurrence after the window closes
    is reported in full again and opens a new window.
    """

    def __init__(self, quiet_seconds: float = 600.0, clock=time.monotonic):
        self.quiet_seconds = quiet_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._seen: Dict[str, _Occurrences] = {}

    def record(self, context: ErrorContext) -> bool:
        """Count an occurrence; True if it should get a full report."""
        now = self._clock()
        with self._lock:
            seen = self._seen.get(context.key)
            if seen is not None and now - seen.window_start < self.quiet_seconds:
                seen.count += 1
                return False
            self._seen[context.key] = _Occurrences(count=1, window_start=now)
            return True

    def count(self, key: str) -> int:
        """Occurrences of key in its current window."""
        with self._lock:
            seen = self._seen.get(key)
            return seen.count if seen else 0

    def summary(self) -> Dict[str, int]:
        with self._lock:
            return {key: seen.count for key, seen in self._seen.items()}

    def clear(self):
        with self._lock:
            self._seen.clear()


_tracker = ErrorTracker()


def get_error_tracker() -> ErrorTracker:
    """Process-wide tracker used by handle_error()."""
    return _tracker


def determine_severity(error: Exception, category: ErrorCategory) -> ErrorSeverity:
    """Severity from the category, with timeouts treated as transient."""
    if category == ErrorCategory.TERMINAL:
        return ErrorSeverity.FATAL
    if category == ErrorCategory.CONFIG:
        return ErrorSeverity.WARNING
    if isinstance(error, TimeoutError) or 'timed out' in str(error).lower():
        return ErrorSeverity.WARNING
    return ErrorSeverity.ERROR


def handle_error(
    error: Exception,
    operation: str,
    category: Optional[ErrorCategory] = None,
    severity: Optional[ErrorSeverity] = None,
    details: Optional[Dict[str, Any]] = None,
) -> ErrorContext:
    """
    Log an error and track it for repeat suppression.

    Args:
        error: The exception that occurred
        operation: What weathr was doing, e.g. "refresh_weather"
        category: Defaults to the WeathrError's own category
        severity: Defaults to determine_severity()
        details: Extra name/value pairs for the report

    Returns:
        The ErrorContext that was logged
    """
    if category is None:
        category = getattr(error, 'category', ErrorCategory.UNKNOWN)
    if severity is None:
        severity = determine_severity(error, category)

    context = ErrorContext(
        error=error,
        operation=operation,
        category=category,
        severity=severity,
        details=details or {},
    )

    if _tracker.record(context):
        logger.log(severity.log_level, context.report())
    else:
        logger.log(severity.log_level,
                   f"{context.summary()} (repeated {_tracker.count(context.key)}x)")

    return context
