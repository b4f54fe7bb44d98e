import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from storenav.config import make_demo_layout
from storenav.planners.route import plan_route
from storenav.store_grid import build_grid
from storenav.viz.draw import draw_route, draw_store, render_route_png


def test_draw_store_and_route_smoke():
    grid = build_grid(make_demo_layout())
    route = plan_route(["dairy", "bakery"], grid)
    fig, ax = plt.subplots()
    try:
        draw_store(ax, grid, highlighted=["dairy", "bakery"])
        draw_route(ax, route.steps)
        assert len(ax.patches) == len(grid.layout.zones)
    finally:
        plt.close(fig)


def test_render_route_png(tmp_path):
    grid = build_grid(make_demo_layout())
    route = plan_route(["produce"], grid)
    out = tmp_path / "route.png"
    render_route_png(grid, route.steps, str(out), highlighted=route.targets, title="t")
    assert out.exists() and out.stat().st_size > 0
