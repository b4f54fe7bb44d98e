from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from storenav.guidance.instructions import GuidanceConfig, annotate
from storenav.math.grid_geometry import square_ring
from storenav.planners.astar import find_path
from storenav.store_grid import StoreGrid
from storenav.types import PathStep, Position, Route, SkippedZone, Zone

logger = logging.getLogger(__name__)

UNKNOWN_ZONE = "unknown-zone"
NO_WALKABLE_TARGET = "no-walkable-target"
UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class RoutePolicy:
    max_radius: int = 5   # ring search bound around a zone center


def resolve_zone_target(grid: StoreGrid, zone: Zone, max_radius: int = 5) -> Optional[Position]:
    """
    Nearest walkable cell to the zone center.

    Checks the center, then square rings of radius 1..max_radius; within a
    ring the scan order is fixed (see square_ring). None if nothing is found.
    """
    center = zone.center
    for radius in range(0, max_radius + 1):
        for pos in square_ring(center, radius):
            if grid.is_walkable(pos):
                return pos
    return None


def _append_leg(path: List[PathStep], leg: List[PathStep]) -> None:
    # joint cell already ends the previous leg
    path.extend(leg[1:] if path else leg)


def compose_route(
    zone_ids: Sequence[str],
    grid: StoreGrid,
    *,
    policy: RoutePolicy = RoutePolicy(),
) -> Route:
    """
    Stitch entrance -> zone targets (in the given order) -> checkout.

    Each leg is an independent A* call. Zones that are unknown, have no
    walkable cell near their center, or cannot be reached from the current
    position are skipped and listed in Route.skipped; the route carries on
    from the last position reached. Steps carry no instructions.
    """
    layout = grid.layout
    path: List[PathStep] = []
    targets: Dict[str, Position] = {}
    skipped: List[SkippedZone] = []
    current = layout.entrance

    for zone_id in zone_ids:
        zone = layout.zone(zone_id)
        if zone is None:
            logger.warning("skipping unknown zone %r", zone_id)
            skipped.append(SkippedZone(zone_id, UNKNOWN_ZONE))
            continue

        target = resolve_zone_target(grid, zone, policy.max_radius)
        if target is None:
            logger.warning(
                "skipping zone %r: no walkable cell within %d of %s",
                zone_id, policy.max_radius, zone.center,
            )
            skipped.append(SkippedZone(zone_id, NO_WALKABLE_TARGET))
            continue

        leg = find_path(grid, current, target)
        if not leg:
            logger.warning("skipping zone %r: no path from %s to %s", zone_id, current, target)
            skipped.append(SkippedZone(zone_id, UNREACHABLE))
            continue

        _append_leg(path, leg)
        targets[zone_id] = target
        current = target

    final_leg = find_path(grid, current, layout.checkout)
    reachable = bool(final_leg)
    if reachable:
        _append_leg(path, final_leg)
    else:
        logger.warning("checkout %s is unreachable from %s", layout.checkout, current)

    return Route(steps=tuple(path), targets=targets, skipped=tuple(skipped), reachable=reachable)


def plan_route(
    zone_ids: Sequence[str],
    grid: StoreGrid,
    *,
    policy: RoutePolicy = RoutePolicy(),
    guidance: GuidanceConfig = GuidanceConfig(),
) -> Route:
    """compose_route followed by annotate; the host calls this per request."""
    raw = compose_route(zone_ids, grid, policy=policy)
    steps = annotate(raw.steps, grid.layout, guidance)
    return Route(steps=tuple(steps), targets=raw.targets, skipped=raw.skipped, reachable=raw.reachable)
