# scripts/view_store_map.py
import argparse

import matplotlib.pyplot as plt

from storenav.config import load_layout, make_demo_layout
from storenav.planners.route import plan_route
from storenav.store_grid import build_grid
from storenav.viz.draw import draw_route, draw_store


def main():
    p = argparse.ArgumentParser(description="Show the store grid and an optional route")
    p.add_argument("--layout", type=str, default=None)
    p.add_argument("zones", nargs="*")
    args = p.parse_args()

    layout = load_layout(args.layout) if args.layout else make_demo_layout()
    grid = build_grid(layout)

    fig, ax = plt.subplots()
    draw_store(ax, grid, highlighted=args.zones)
    if args.zones:
        route = plan_route(args.zones, grid)
        draw_route(ax, route.steps)
        for n, step in enumerate(route.instruction_steps(), start=1):
            print(f"{n}. {step.instruction}")
    plt.title("Store Map")
    plt.show()


if __name__ == "__main__":
    main()
