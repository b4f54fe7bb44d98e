# storenav/config.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping

from storenav.errors import StoreConfigError
from storenav.types import Position, StoreLayout, Zone

logger = logging.getLogger(__name__)

GRID_WIDTH = 20
GRID_HEIGHT = 15


def make_demo_layout() -> StoreLayout:
    """Eight-aisle 20x15 demo store; entrance at the front, checkout back-right."""
    zones = (
        Zone("dairy", "Dairy", Position(2, 2), 3, 2,
             ("milk", "cheese", "yogurt", "butter"), "#04cf84"),
        Zone("frozen", "Frozen Foods", Position(7, 2), 2, 3,
             ("frozen pizza", "ice cream", "frozen vegetables"), "#51c995"),
        Zone("snacks", "Snacks", Position(12, 2), 4, 2,
             ("chips", "crackers", "cookies", "candy"), "#04b7cf"),
        Zone("beverages", "Beverages", Position(2, 6), 2, 4,
             ("soda", "juice", "water", "coffee"), "#04cf84"),
        Zone("personal-care", "Personal Care", Position(6, 7), 3, 2,
             ("shampoo", "soap", "toothpaste", "deodorant"), "#51c995"),
        Zone("produce", "Produce", Position(12, 6), 4, 3,
             ("apples", "bananas", "lettuce", "tomatoes"), "#04b7cf"),
        Zone("meat", "Meat & Deli", Position(2, 12), 5, 2,
             ("chicken", "beef", "ham", "turkey"), "#04cf84"),
        Zone("bakery", "Bakery", Position(10, 12), 3, 2,
             ("bread", "muffins", "cake", "donuts"), "#51c995"),
    )
    return StoreLayout(
        zones=zones,
        entrance=Position(10, 0),
        checkout=Position(17, 13),
        width=GRID_WIDTH,
        height=GRID_HEIGHT,
    )


def _require(data: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise StoreConfigError(f"{where}: missing key {key!r}")
    return data[key]


def _int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise StoreConfigError(f"{where}: expected an integer, got {value!r}")
    return value


def _position(value: Any, where: str) -> Position:
    """Accepts {"x": .., "y": ..} or [x, y]."""
    if isinstance(value, Mapping):
        return Position(_int(_require(value, "x", where), f"{where}.x"),
                        _int(_require(value, "y", where), f"{where}.y"))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Position(_int(value[0], f"{where}[0]"), _int(value[1], f"{where}[1]"))
    raise StoreConfigError(f"{where}: expected a position, got {value!r}")


def _zone(data: Mapping[str, Any], i: int) -> Zone:
    where = f"zones[{i}]"
    if not isinstance(data, Mapping):
        raise StoreConfigError(f"{where}: expected an object, got {data!r}")
    products = data.get("products", [])
    if not isinstance(products, (list, tuple)):
        raise StoreConfigError(f"{where}.products: expected a list, got {products!r}")
    width = _int(_require(data, "width", where), f"{where}.width")
    height = _int(_require(data, "height", where), f"{where}.height")
    if width <= 0 or height <= 0:
        raise StoreConfigError(f"{where}: size must be positive, got {width}x{height}")
    zone_id = str(_require(data, "id", where))
    return Zone(
        id=zone_id,
        name=str(data.get("name", zone_id)),
        origin=_position(_require(data, "position", where), f"{where}.position"),
        width=width,
        height=height,
        products=tuple(str(p) for p in products),
        color=data.get("color"),
    )


def layout_from_dict(data: Mapping[str, Any]) -> StoreLayout:
    where = "layout"
    raw_zones = data.get("zones", [])
    if not isinstance(raw_zones, list):
        raise StoreConfigError(f"{where}.zones: expected a list")
    zones = tuple(_zone(z, i) for i, z in enumerate(raw_zones))

    ids = [z.id for z in zones]
    dupes = sorted({zid for zid in ids if ids.count(zid) > 1})
    if dupes:
        raise StoreConfigError(f"{where}.zones: duplicate zone ids {dupes}")

    return StoreLayout(
        zones=zones,
        entrance=_position(_require(data, "entrance", where), f"{where}.entrance"),
        checkout=_position(_require(data, "checkout", where), f"{where}.checkout"),
        width=_int(data.get("width", GRID_WIDTH), f"{where}.width"),
        height=_int(data.get("height", GRID_HEIGHT), f"{where}.height"),
    )


def layout_to_dict(layout: StoreLayout) -> Dict[str, Any]:
    return {
        "width": layout.width,
        "height": layout.height,
        "entrance": {"x": layout.entrance.x, "y": layout.entrance.y},
        "checkout": {"x": layout.checkout.x, "y": layout.checkout.y},
        "zones": [
            {
                "id": z.id,
                "name": z.name,
                "position": {"x": z.origin.x, "y": z.origin.y},
                "width": z.width,
                "height": z.height,
                "products": list(z.products),
                "color": z.color,
            }
            for z in layout.zones
        ],
    }


def load_layout(path: str) -> StoreLayout:
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreConfigError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, Mapping):
        raise StoreConfigError(f"{path}: top level must be an object")
    return layout_from_dict(data)


def zones_for_products(layout: StoreLayout, product_names: Iterable[str]) -> List[str]:
    """
    Map product names to zone ids (case-insensitive), first-seen order, no repeats.
    Unknown names are logged and dropped.
    """
    index: Dict[str, str] = {}
    for z in layout.zones:
        for p in z.products:
            index.setdefault(p.strip().lower(), z.id)

    out: List[str] = []
    for name in product_names:
        zone_id = index.get(name.strip().lower())
        if zone_id is None:
            logger.info("no zone stocks %r", name)
            continue
        if zone_id not in out:
            out.append(zone_id)
    return out
