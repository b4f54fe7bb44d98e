from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from storenav.math.grid_geometry import chebyshev, relative_label
from storenav.types import PathStep, Position, StoreLayout

ENTRANCE = "entrance"
CHECKOUT = "checkout"

ENTRANCE_NAME = "Store Entrance"
CHECKOUT_NAME = "Checkout Counter"


@dataclass(frozen=True)
class GuidanceConfig:
    """
    Narration thresholds.

    zone_margin: cells around an aisle rectangle that still count as "at" it
    *_x / *_y: column/row cut-offs for the 3x3 relative label
    min_instructions / long_path_steps: a path longer than long_path_steps
      that ends up with fewer than min_instructions gets one extra
      "continue past" line at its midpoint
    """
    zone_margin: int = 2
    landmark_radius: int = 1
    left_max_x: int = 6
    right_min_x: int = 14
    front_max_y: int = 4
    back_min_y: int = 10
    min_instructions: int = 3
    long_path_steps: int = 10


def _label(pos: Position, cfg: GuidanceConfig) -> str:
    return relative_label(
        pos,
        left_max_x=cfg.left_max_x,
        right_min_x=cfg.right_min_x,
        front_max_y=cfg.front_max_y,
        back_min_y=cfg.back_min_y,
    )


def zone_for_position(pos: Position, layout: StoreLayout, cfg: GuidanceConfig = GuidanceConfig()) -> Optional[str]:
    """
    Narration zone of a cell: entrance, checkout, then the first aisle
    (configuration order) whose rectangle grown by cfg.zone_margin holds it.
    """
    if chebyshev(pos, layout.entrance) <= cfg.landmark_radius:
        return ENTRANCE
    if chebyshev(pos, layout.checkout) <= cfg.landmark_radius:
        return CHECKOUT
    for z in layout.zones:
        if z.contains(pos, margin=cfg.zone_margin):
            return z.id
    return None


def zone_display_name(zone_id: str, layout: StoreLayout) -> str:
    if zone_id == ENTRANCE:
        return ENTRANCE_NAME
    if zone_id == CHECKOUT:
        return CHECKOUT_NAME
    z = layout.zone(zone_id)
    return z.name if z is not None else "Unknown Area"


def zone_label(zone_id: str, layout: StoreLayout, cfg: GuidanceConfig = GuidanceConfig()) -> str:
    if zone_id == ENTRANCE:
        return _label(layout.entrance, cfg)
    if zone_id == CHECKOUT:
        return _label(layout.checkout, cfg)
    z = layout.zone(zone_id)
    return _label(z.center, cfg) if z is not None else ""


def start_instruction(layout: StoreLayout, cfg: GuidanceConfig = GuidanceConfig()) -> str:
    return f"Start at the {ENTRANCE_NAME} near the {_label(layout.entrance, cfg)} of the store"


def finish_instruction(layout: StoreLayout, cfg: GuidanceConfig = GuidanceConfig()) -> str:
    return f"Finally, head to the {CHECKOUT_NAME} near the {_label(layout.checkout, cfg)} corner"


def transition_instruction(zone_id: str, layout: StoreLayout, cfg: GuidanceConfig = GuidanceConfig()) -> str:
    name = zone_display_name(zone_id, layout)
    label = zone_label(zone_id, layout, cfg)
    if zone_id == CHECKOUT:
        return f"Proceed to the {name} located in the {label} area"
    return f"Walk towards the {name} section, located in the {label} area of the store"


def annotate(
    path: Sequence[PathStep],
    layout: StoreLayout,
    cfg: GuidanceConfig = GuidanceConfig(),
) -> List[PathStep]:
    """
    Attach zone-based narration to a route.

    Returns every step of `path` in order; instructions are set on the first
    step (start), the last step (finish) and on each interior step where the
    shopper enters a zone different from the last one announced. Positions
    and directions are untouched.
    """
    steps = list(path)
    if not steps:
        return steps

    start_text = start_instruction(layout, cfg)
    finish_text = finish_instruction(layout, cfg)
    if len(steps) == 1:
        steps[0] = steps[0].with_instruction(f"{start_text}. {finish_text}")
        return steps

    # the start line names the entrance whatever zone the first cell is in,
    # so only transition lines count as announcing a zone
    current = zone_for_position(steps[0].position, layout, cfg)
    announced: Set[str] = set()
    steps[0] = steps[0].with_instruction(start_text)

    for i in range(1, len(steps) - 1):
        zone = zone_for_position(steps[i].position, layout, cfg)
        if zone is None or zone == current or zone == ENTRANCE:
            continue
        steps[i] = steps[i].with_instruction(transition_instruction(zone, layout, cfg))
        current = zone
        announced.add(zone)

    steps[-1] = steps[-1].with_instruction(finish_text)

    count = sum(1 for s in steps if s.instruction)
    if count < cfg.min_instructions and len(steps) > cfg.long_path_steps:
        mid = len(steps) // 2
        mid_zone = zone_for_position(steps[mid].position, layout, cfg)
        if (
            mid_zone is not None
            and mid_zone != ENTRANCE
            and mid_zone not in announced
            and steps[mid].instruction is None
        ):
            name = zone_display_name(mid_zone, layout)
            steps[mid] = steps[mid].with_instruction(f"Continue past the {name} area")

    return steps
