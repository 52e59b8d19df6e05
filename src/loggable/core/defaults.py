"""Process-wide default instrumentor."""

from __future__ import annotations

from .instrumentor import Instrumentor

_default_instrumentor: Instrumentor | None = None


def get_instrumentor() -> Instrumentor:
    global _default_instrumentor
    if _default_instrumentor is None:
        _default_instrumentor = Instrumentor()
    return _default_instrumentor


def set_instrumentor(instrumentor: Instrumentor | None) -> None:
    global _default_instrumentor
    _default_instrumentor = instrumentor
