from __future__ import annotations

from typing import Iterator, Optional, Tuple

from storenav.types import Direction, Position

# (dx, dy, name) in neighbor expansion order
ORTHOGONAL_STEPS: Tuple[Tuple[int, int, Direction], ...] = (
    (0, -1, "up"),
    (0, 1, "down"),
    (-1, 0, "left"),
    (1, 0, "right"),
)


def manhattan(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def chebyshev(a: Position, b: Position) -> int:
    return max(abs(a.x - b.x), abs(a.y - b.y))


def step_direction(prev: Position, cur: Position) -> Direction:
    """
    Direction of a single orthogonal move prev -> cur.

    Convention:
      - "up" decreases y (toward the store front)
      - "left" decreases x
    Raises ValueError if the two cells are not orthogonally adjacent.
    """
    dx = cur.x - prev.x
    dy = cur.y - prev.y
    for sx, sy, name in ORTHOGONAL_STEPS:
        if (dx, dy) == (sx, sy):
            return name
    raise ValueError(f"cells {prev} -> {cur} are not orthogonally adjacent")


def is_unit_step(a: Position, b: Position) -> bool:
    return manhattan(a, b) == 1


def square_ring(center: Position, radius: int) -> Iterator[Position]:
    """
    Cells at chebyshev distance exactly `radius` from center.

    Order: dx from -radius..radius (outer), dy from -radius..radius (inner).
    radius 0 yields only the center.
    """
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if max(abs(dx), abs(dy)) == radius:
                yield center.offset(dx, dy)


def relative_label(
    pos: Position,
    *,
    left_max_x: int = 6,
    right_min_x: int = 14,
    front_max_y: int = 4,
    back_min_y: int = 10,
) -> str:
    """Coarse 3x3 store-region label, e.g. 'front-center' or 'back-right'."""
    if pos.y <= front_max_y:
        row = "front"
    elif pos.y >= back_min_y:
        row = "back"
    else:
        row = "middle"

    if pos.x <= left_max_x:
        col = "left"
    elif pos.x >= right_min_x:
        col = "right"
    else:
        col = "center"
    return f"{row}-{col}"


def clip_rect(
    x0: int, y0: int, w: int, h: int, *, width: int, height: int
) -> Optional[Tuple[int, int, int, int]]:
    """
    Clip rectangle [x0, x0+w) x [y0, y0+h) to grid bounds.
    Returns (x_lo, x_hi, y_lo, y_hi) as half-open ranges, or None if empty.
    """
    x_lo, x_hi = max(0, x0), min(width, x0 + w)
    y_lo, y_hi = max(0, y0), min(height, y0 + h)
    if x_lo >= x_hi or y_lo >= y_hi:
        return None
    return (x_lo, x_hi, y_lo, y_hi)
