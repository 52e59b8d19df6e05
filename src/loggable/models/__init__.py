"""Data models for call instrumentation."""

from .config import NO_DECIMALS, TRACE, TRIM_DISABLED, InvocationConfig, Level, TimeUnit
from .invocation import CallSite, Invocation, StackOrigin

__all__ = [
    "NO_DECIMALS",
    "TRACE",
    "TRIM_DISABLED",
    "CallSite",
    "Invocation",
    "InvocationConfig",
    "Level",
    "StackOrigin",
    "TimeUnit",
]
