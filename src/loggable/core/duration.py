"""Human readable rendering of elapsed nanoseconds."""

from __future__ import annotations

_UNITS = (
    (1_000, 1, "ns"),
    (1_000_000, 1_000, "µs"),
    (1_000_000_000, 1_000_000, "ms"),
)


def render_duration(nanos: float, precision: int = 2) -> str:
    """Render ``nanos`` in the largest unit below its magnitude, e.g. ``2.50ms``.

    A negative ``precision`` renders the value without decimals.
    """
    number, unit = nanos / 1_000_000_000, "s"
    for bound, divisor, title in _UNITS:
        if nanos < bound:
            number, unit = nanos / divisor, title
            break
    digits = precision if precision >= 0 else 0
    return f"{number:.{digits}f}{unit}"
