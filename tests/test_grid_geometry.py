import pytest

from storenav.math.grid_geometry import (
    chebyshev,
    clip_rect,
    manhattan,
    relative_label,
    square_ring,
    step_direction,
)
from storenav.types import Position


def test_manhattan_and_chebyshev():
    a, b = Position(1, 2), Position(4, -2)
    assert manhattan(a, b) == 7
    assert chebyshev(a, b) == 4


def test_step_direction_each_axis():
    o = Position(5, 5)
    assert step_direction(o, Position(5, 4)) == "up"
    assert step_direction(o, Position(5, 6)) == "down"
    assert step_direction(o, Position(4, 5)) == "left"
    assert step_direction(o, Position(6, 5)) == "right"


def test_step_direction_rejects_diagonal_and_jump():
    with pytest.raises(ValueError):
        step_direction(Position(0, 0), Position(1, 1))
    with pytest.raises(ValueError):
        step_direction(Position(0, 0), Position(0, 2))


def test_square_ring_sizes_and_order():
    c = Position(10, 10)
    assert list(square_ring(c, 0)) == [c]
    for r in (1, 2, 5):
        ring = list(square_ring(c, r))
        assert len(ring) == 8 * r
        assert all(chebyshev(c, p) == r for p in ring)
    # dx outer, dy inner
    assert list(square_ring(c, 1))[:3] == [Position(9, 9), Position(9, 10), Position(9, 11)]


def test_relative_label_thresholds():
    assert relative_label(Position(3, 3)) == "front-left"
    assert relative_label(Position(10, 0)) == "front-center"
    assert relative_label(Position(17, 13)) == "back-right"
    assert relative_label(Position(6, 4)) == "front-left"      # boundaries are inclusive
    assert relative_label(Position(7, 5)) == "middle-center"
    assert relative_label(Position(14, 10)) == "back-right"


def test_clip_rect():
    assert clip_rect(18, 13, 5, 5, width=20, height=15) == (18, 20, 13, 15)
    assert clip_rect(-2, -1, 4, 3, width=20, height=15) == (0, 2, 0, 2)
    assert clip_rect(25, 0, 2, 2, width=20, height=15) is None
