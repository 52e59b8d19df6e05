"""Per-call-site logging configuration."""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

TRIM_DISABLED = -1
NO_DECIMALS = -1
TRACE = 5

logging.addLevelName(TRACE, "TRACE")


class Level(StrEnum):
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def numeric(self) -> int:
        """Numeric level understood by the stdlib ``logging`` module."""
        return _NUMERIC_LEVELS[self]


_NUMERIC_LEVELS = {
    Level.TRACE: TRACE,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
}


class TimeUnit(StrEnum):
    NANOSECONDS = "nanoseconds"
    MICROSECONDS = "microseconds"
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"

    @property
    def nanos(self) -> int:
        return _UNIT_NANOS[self]

    def to_nanos(self, amount: float) -> int:
        return int(amount * self.nanos)


_UNIT_NANOS = {
    TimeUnit.NANOSECONDS: 1,
    TimeUnit.MICROSECONDS: 1_000,
    TimeUnit.MILLISECONDS: 1_000_000,
    TimeUnit.SECONDS: 1_000_000_000,
    TimeUnit.MINUTES: 60 * 1_000_000_000,
    TimeUnit.HOURS: 3_600 * 1_000_000_000,
    TimeUnit.DAYS: 86_400 * 1_000_000_000,
}


class InvocationConfig(BaseModel):
    """Immutable settings for one instrumented call site.

    ``ignore`` holds exception classes, or capability classes (ABCs) that
    error classes are registered with. ``limit`` is only a severity
    threshold: a call slower than the budget is logged at WARN with a
    ``(too slow!)`` marker, it is never interrupted.
    A negative ``trim`` disables trimming and a negative ``precision``
    renders durations without decimals.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Level = Level.INFO
    limit: float = Field(default=10_000, ge=0)
    unit: TimeUnit = TimeUnit.MILLISECONDS
    trim: int = 100
    prepend: bool = False
    ignore: tuple[type, ...] = ()
    skip_result: bool = False
    skip_args: bool = False
    log_this: bool = False
    precision: int = 2
    name: str = ""

    @field_validator("trim")
    @classmethod
    def _normalize_trim(cls, value: int) -> int:
        return TRIM_DISABLED if value < 0 else value

    @field_validator("precision")
    @classmethod
    def _normalize_precision(cls, value: int) -> int:
        return NO_DECIMALS if value < 0 else value

    @computed_field(return_type=int)
    @property
    def budget_ns(self) -> int:
        return self.unit.to_nanos(self.limit)
