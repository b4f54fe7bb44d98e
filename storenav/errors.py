from __future__ import annotations

from storenav.types import Position


class StoreConfigError(ValueError):
    """Store layout configuration is malformed or inconsistent."""


class ZoneOverlapError(StoreConfigError):
    def __init__(self, first: str, second: str, cell: Position):
        self.first = first
        self.second = second
        self.cell = cell
        super().__init__(f"zones {first!r} and {second!r} overlap at ({cell.x}, {cell.y})")
