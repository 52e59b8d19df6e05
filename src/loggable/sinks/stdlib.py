"""Stdlib ``logging`` sink."""

from __future__ import annotations

import logging

from ..models import Level


class StdlibSink:
    """Emits through ``logging.getLogger(source)``, one logger per source."""

    def is_enabled(self, level: Level, source: str) -> bool:
        return logging.getLogger(source).isEnabledFor(level.numeric)

    def log(self, level: Level, source: str, message: str) -> None:
        logging.getLogger(source).log(level.numeric, message)
