"""Shared helpers for weathr."""

from .error_handling import (
    ErrorCategory,
    ErrorSeverity,
    WeathrError,
    WeatherError,
    ConfigError,
    RenderError,
    handle_error,
)

__all__ = [
    'ErrorCategory',
    'ErrorSeverity',
    'WeathrError',
    'WeatherError',
    'ConfigError',
    'RenderError',
    'handle_error',
]
