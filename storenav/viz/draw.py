# storenav/viz/draw.py
import matplotlib.pyplot as plt
import numpy as np
from typing import Iterable, Optional, Sequence, Tuple
from matplotlib.colors import ListedColormap, BoundaryNorm
from matplotlib.patches import Rectangle

from storenav.store_grid import StoreGrid
from storenav.types import PathStep


def _grid_extent(grid: np.ndarray) -> Tuple[float, float, float, float]:
    H, W = grid.shape
    # cell (x, y) is centered on integer coords; row 0 (store front) at the top
    return (-0.5, W - 0.5, H - 0.5, -0.5)


def draw_store(
    ax: plt.Axes,
    grid: StoreGrid,
    *,
    highlighted: Iterable[str] = (),
    show_labels: bool = True,
    show_gridlines: bool = True,
) -> None:
    """
    Draw the occupancy grid in cell coordinates.
    Free floor white, aisles gray; highlighted aisles use their configured color.
    """
    extent = _grid_extent(grid.occupancy)

    cmap = ListedColormap(["white", "#e5e7eb"])
    norm = BoundaryNorm([-0.5, 0.5, 1.5], cmap.N)

    ax.imshow(
        grid.occupancy,
        origin="upper",
        extent=extent,
        cmap=cmap,
        norm=norm,
        interpolation="nearest",
    )

    highlighted = set(highlighted)
    for z in grid.layout.zones:
        hot = z.id in highlighted
        ax.add_patch(Rectangle(
            (z.origin.x - 0.5, z.origin.y - 0.5), z.width, z.height,
            facecolor=(z.color or "#9ca3af") if hot else "none",
            edgecolor="#374151" if hot else "#9ca3af",
            linewidth=1.0,
        ))
        if show_labels:
            ax.text(
                z.origin.x - 0.5 + z.width / 2, z.origin.y - 0.5 + z.height / 2, z.name,
                ha="center", va="center", fontsize=6,
            )

    ent, chk = grid.layout.entrance, grid.layout.checkout
    ax.plot(ent.x, ent.y, marker="o", color="green", label="Entrance")
    ax.plot(chk.x, chk.y, marker="s", color="red", label="Checkout")

    ax.set_aspect("equal")
    ax.set_facecolor("white")

    if show_gridlines:
        xmin, xmax, ymax, ymin = extent
        for x in np.arange(xmin, xmax + 1e-9, 1.0):
            ax.axvline(x, linewidth=0.25, alpha=0.1)
        for y in np.arange(ymin, ymax + 1e-9, 1.0):
            ax.axhline(y, linewidth=0.25, alpha=0.1)


def draw_route(ax: plt.Axes, steps: Sequence[PathStep], *, mark_instructions: bool = True) -> None:
    if not steps:
        return
    xs = [s.position.x for s in steps]
    ys = [s.position.y for s in steps]
    ax.plot(xs, ys, color="blue", linewidth=2.0)

    if mark_instructions:
        for n, s in enumerate(s for s in steps if s.instruction):
            ax.annotate(str(n + 1), (s.position.x, s.position.y), fontsize=7, color="blue")


def render_route_png(
    grid: StoreGrid,
    steps: Sequence[PathStep],
    out_path: str,
    *,
    highlighted: Iterable[str] = (),
    title: Optional[str] = None,
) -> None:
    fig, ax = plt.subplots()
    try:
        draw_store(ax, grid, highlighted=highlighted)
        draw_route(ax, steps)
        if title:
            ax.set_title(title)
        fig.savefig(out_path)
    finally:
        plt.close(fig)
