from __future__ import annotations

import pytest

import loggable


class StepClock:
    """Monotonic fake clock advancing by ``step`` nanoseconds per reading."""

    def __init__(self, step: int) -> None:
        self.step = step
        self.now = 0

    def __call__(self) -> int:
        self.now += self.step
        return self.now


def reset_loggable_config() -> None:
    """Reset the default instrumentor between tests."""
    loggable._reset_default_instrumentor()


@pytest.fixture(autouse=True)
def _reset_config() -> None:
    reset_loggable_config()
