"""Public exception types for loggable."""

from __future__ import annotations


class LoggableError(Exception):
    """Base class for all loggable exceptions."""


class LoggableConfigError(LoggableError, ValueError):
    """Raised when instrumentation is declared with an invalid target or setting."""
