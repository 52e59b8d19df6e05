"""Basic usage example using the convenience API."""

from __future__ import annotations

from loggable import Level, loggable
from loggable.console import configure_console_logging


@loggable(Level.DEBUG, prepend=True)
class Inventory:
    def __init__(self) -> None:
        self._items: dict[str, int] = {}

    def __str__(self) -> str:
        return f"Inventory({len(self._items)} items)"

    def add(self, sku: str, quantity: int = 1) -> None:
        self._items[sku] = self._items.get(sku, 0) + quantity

    @loggable(Level.INFO, log_this=True)
    def count(self, sku: str) -> int:
        return self._items.get(sku, 0)


def main() -> None:
    configure_console_logging(Level.DEBUG)
    inventory = Inventory()
    inventory.add("apple", quantity=3)
    inventory.count("apple")


if __name__ == "__main__":
    main()
