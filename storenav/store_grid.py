# storenav/store_grid.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from storenav.errors import StoreConfigError, ZoneOverlapError
from storenav.math.grid_geometry import clip_rect
from storenav.types import GridCell, Position, StoreLayout, Zone

logger = logging.getLogger(__name__)

FREE = 0
BLOCKED = 1
NO_ZONE = -1


@dataclass(frozen=True, eq=False)
class StoreGrid:
    layout: StoreLayout
    occupancy: np.ndarray     # (H, W) uint8, 0 free, 1 blocked; indexed [y, x]
    zone_index: np.ndarray    # (H, W) int16, index into layout.zones or -1

    @property
    def width(self) -> int:
        return self.layout.width

    @property
    def height(self) -> int:
        return self.layout.height

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def is_walkable(self, pos: Position) -> bool:
        return self.in_bounds(pos) and self.occupancy[pos.y, pos.x] == FREE

    def zone_at(self, pos: Position) -> Optional[str]:
        """Id of the zone physically occupying pos (no margin), else None."""
        if not self.in_bounds(pos):
            return None
        idx = int(self.zone_index[pos.y, pos.x])
        return None if idx == NO_ZONE else self.layout.zones[idx].id

    def cell(self, pos: Position) -> GridCell:
        if not self.in_bounds(pos):
            raise IndexError(f"{pos} is outside the {self.width}x{self.height} grid")
        aisle_id = self.zone_at(pos)
        return GridCell(
            x=pos.x,
            y=pos.y,
            is_walkable=self.is_walkable(pos),
            is_aisle=aisle_id is not None,
            aisle_id=aisle_id,
            is_entrance=pos == self.layout.entrance,
            is_checkout=pos == self.layout.checkout,
        )

    def rows(self) -> List[List[GridCell]]:
        return [[self.cell(Position(x, y)) for x in range(self.width)] for y in range(self.height)]


def find_zone_overlaps(zones: Sequence[Zone], width: int, height: int) -> List[Tuple[str, str, Position]]:
    """Every in-bounds cell claimed by two zones, as (earlier_id, later_id, cell)."""
    owner = np.full((height, width), NO_ZONE, dtype=np.int16)
    out: List[Tuple[str, str, Position]] = []
    for i, z in enumerate(zones):
        rect = clip_rect(z.origin.x, z.origin.y, z.width, z.height, width=width, height=height)
        if rect is None:
            continue
        x_lo, x_hi, y_lo, y_hi = rect
        for y in range(y_lo, y_hi):
            for x in range(x_lo, x_hi):
                prev = int(owner[y, x])
                if prev != NO_ZONE:
                    out.append((zones[prev].id, z.id, Position(x, y)))
                owner[y, x] = i
    return out


def build_grid(layout: StoreLayout, *, strict: bool = False) -> StoreGrid:
    """
    Rasterize a store layout into an occupancy grid.

    - every cell starts walkable
    - cells under a zone rectangle become blocked and tagged with the zone
      (rectangles are clipped to the grid; later zones win on overlap)
    - entrance/checkout are flags only and must lie on free floor

    strict=True raises ZoneOverlapError instead of letting the later zone win.
    """
    W, H = layout.width, layout.height
    if W <= 0 or H <= 0:
        raise StoreConfigError(f"grid size must be positive, got {W}x{H}")

    for label, pos in (("entrance", layout.entrance), ("checkout", layout.checkout)):
        if not (0 <= pos.x < W and 0 <= pos.y < H):
            raise StoreConfigError(f"{label} {pos} is outside the {W}x{H} grid")
        for z in layout.zones:
            if z.contains(pos):
                raise StoreConfigError(f"{label} {pos} lies inside zone {z.id!r}")

    overlaps = find_zone_overlaps(layout.zones, W, H)
    if overlaps:
        first, second, cell = overlaps[0]
        if strict:
            raise ZoneOverlapError(first, second, cell)
        logger.warning(
            "%d overlapping zone cell(s), later zone wins; first: %r/%r at (%d, %d)",
            len(overlaps), first, second, cell.x, cell.y,
        )

    occupancy = np.zeros((H, W), dtype=np.uint8)
    zone_index = np.full((H, W), NO_ZONE, dtype=np.int16)

    for i, z in enumerate(layout.zones):
        rect = clip_rect(z.origin.x, z.origin.y, z.width, z.height, width=W, height=H)
        if rect is None:
            continue
        x_lo, x_hi, y_lo, y_hi = rect
        occupancy[y_lo:y_hi, x_lo:x_hi] = BLOCKED
        zone_index[y_lo:y_hi, x_lo:x_hi] = i

    # snapshot: planners treat the grid as read-only
    occupancy.setflags(write=False)
    zone_index.setflags(write=False)
    return StoreGrid(layout=layout, occupancy=occupancy, zone_index=zone_index)


def build_grid_from(
    zones: Iterable[Zone],
    entrance: Position,
    checkout: Position,
    width: int,
    height: int,
    *,
    strict: bool = False,
) -> StoreGrid:
    layout = StoreLayout(
        zones=tuple(zones), entrance=entrance, checkout=checkout, width=width, height=height
    )
    return build_grid(layout, strict=strict)
