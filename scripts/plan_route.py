# scripts/plan_route.py
from __future__ import annotations
import argparse
import logging
import sys

from storenav.config import load_layout, make_demo_layout, zones_for_products
from storenav.io.csv_logger import RouteCsvLogger
from storenav.planners.route import RoutePolicy, plan_route
from storenav.store_grid import build_grid


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Plan an in-store route: entrance -> requested aisles -> checkout, with spoken-style directions",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    p.add_argument("--layout", type=str, default=None,
                   help="Store layout JSON. Defaults to the built-in demo store.")
    p.add_argument("--zones", nargs="*", default=[],
                   help="Zone ids to visit, in order (e.g. dairy produce).")
    p.add_argument("--products", nargs="*", default=[],
                   help="Product names; mapped to zones and appended after --zones.")
    p.add_argument("--strict", action="store_true",
                   help="Fail on overlapping zones instead of letting the later zone win.")
    p.add_argument("--max_radius", type=int, default=RoutePolicy().max_radius,
                   help="Ring search bound when snapping a zone center to walkable floor.")
    p.add_argument("--log_csv", type=str, default=None,
                   help="If set, write the route steps to this CSV path (e.g., logs/route.csv).")
    p.add_argument("--png", type=str, default=None,
                   help="If set, save a map of the route to this image path.")
    p.add_argument("--all_steps", action="store_true",
                   help="Print every cell of the route, not just the narrated steps.")
    p.add_argument("--log_level", type=str, default="WARNING", help=argparse.SUPPRESS)

    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    layout = load_layout(args.layout) if args.layout else make_demo_layout()
    grid = build_grid(layout, strict=args.strict)

    zone_ids = list(args.zones)
    for zid in zones_for_products(layout, args.products):
        if zid not in zone_ids:
            zone_ids.append(zid)

    route = plan_route(zone_ids, grid, policy=RoutePolicy(max_radius=args.max_radius))

    shown = route.steps if args.all_steps else route.instruction_steps()
    for n, step in enumerate(shown, start=1):
        p = step.position
        text = step.instruction or step.direction or ""
        print(f"{n:3d}. ({p.x:2d},{p.y:2d}) {text}")

    print(f"Distance: {route.total_distance} cells, about {route.estimated_minutes} min")
    for s in route.skipped:
        print(f"Skipped {s.zone_id}: {s.reason}")
    if not route.reachable:
        print("Checkout is unreachable from the last visited aisle.")

    if args.log_csv:
        with RouteCsvLogger(args.log_csv) as log:
            log.log_route(route, layout)

    if args.png:
        # deferred: matplotlib is only needed for the image
        from storenav.viz.draw import render_route_png
        render_route_png(grid, route.steps, args.png, highlighted=route.targets.keys(), title="Store route")

    return 0 if route.reachable else 1


if __name__ == "__main__":
    sys.exit(main())
