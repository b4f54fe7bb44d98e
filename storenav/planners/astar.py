from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set, Tuple

from storenav.math.grid_geometry import ORTHOGONAL_STEPS, manhattan, step_direction
from storenav.store_grid import StoreGrid
from storenav.types import PathStep, Position


@dataclass(frozen=True)
class Node:
    position: Position
    g_cost: int                 # steps from start
    h_cost: int                 # manhattan estimate to goal
    parent: Optional["Node"] = None

    @property
    def f_cost(self) -> int:
        return self.g_cost + self.h_cost


def _neighbors(grid: StoreGrid, pos: Position) -> Iterator[Position]:
    """4-connected neighbors that are in bounds and walkable."""
    for dx, dy, _name in ORTHOGONAL_STEPS:
        nxt = pos.offset(dx, dy)
        if grid.is_walkable(nxt):
            yield nxt


def _reconstruct(end: Node) -> List[PathStep]:
    cells: List[Position] = []
    node: Optional[Node] = end
    while node is not None:
        cells.append(node.position)
        node = node.parent
    cells.reverse()

    steps = [PathStep(position=cells[0])]
    for prev, cur in zip(cells, cells[1:]):
        steps.append(PathStep(position=cur, direction=step_direction(prev, cur)))
    return steps


def find_path(grid: StoreGrid, start: Position, goal: Position) -> List[PathStep]:
    """
    A* over the store grid (uniform cost, 4-connected, Manhattan heuristic).

    Returns the cell-by-cell path from start to goal inclusive. The first
    step has no direction; every later step carries the move that reached it.
    An unreachable goal (or an unwalkable start/goal) gives [].

    Open-set ordering is (f, h, insertion order), so equal-cost routes
    resolve the same way on every call.
    """
    if not grid.is_walkable(start) or not grid.is_walkable(goal):
        return []

    counter = itertools.count()
    start_node = Node(position=start, g_cost=0, h_cost=manhattan(start, goal))
    open_heap: List[Tuple[int, int, int, Node]] = [
        (start_node.f_cost, start_node.h_cost, next(counter), start_node)
    ]
    best_g: Dict[Position, int] = {start: 0}
    closed: Set[Position] = set()

    while open_heap:
        _, _, _, current = heapq.heappop(open_heap)
        if current.position in closed:
            continue  # stale heap entry
        if current.position == goal:
            return _reconstruct(current)
        closed.add(current.position)

        for nxt in _neighbors(grid, current.position):
            if nxt in closed:
                continue
            tentative_g = current.g_cost + 1
            if tentative_g < best_g.get(nxt, float("inf")):
                best_g[nxt] = tentative_g
                node = Node(position=nxt, g_cost=tentative_g, h_cost=manhattan(nxt, goal), parent=current)
                heapq.heappush(open_heap, (node.f_cost, node.h_cost, next(counter), node))

    return []
