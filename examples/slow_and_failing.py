"""Slow calls escalate to WARN; errors are logged unless ignored, then re-raised."""

from __future__ import annotations

import time

from loggable import InvocationConfig, Level, TimeUnit, loggable, wrap
from loggable.console import configure_console_logging


class NotFound(LookupError):
    pass


@loggable(Level.DEBUG, limit=50, unit=TimeUnit.MILLISECONDS)
def fetch_report(name: str) -> str:
    time.sleep(0.1)
    return f"report for {name}"


@loggable(ignore=[LookupError])
def find_user(user_id: int) -> dict[str, object]:
    raise NotFound(f"user {user_id}")


def parse_amount(text: str) -> float:
    return float(text)


def main() -> None:
    configure_console_logging(Level.INFO)
    fetch_report("q3")

    try:
        find_user(7)
    except NotFound:
        pass

    safe_parse = wrap(InvocationConfig(trim=20, precision=-1), parse_amount)
    try:
        safe_parse("not a number, clearly")
    except ValueError:
        pass


if __name__ == "__main__":
    main()
