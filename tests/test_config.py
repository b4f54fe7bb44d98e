import json

import pytest

from storenav.config import (
    layout_from_dict,
    layout_to_dict,
    load_layout,
    make_demo_layout,
    zones_for_products,
)
from storenav.errors import StoreConfigError
from storenav.types import Position


def test_demo_layout_matches_store_plan():
    layout = make_demo_layout()
    assert (layout.width, layout.height) == (20, 15)
    assert layout.entrance == Position(10, 0)
    assert layout.checkout == Position(17, 13)
    assert [z.id for z in layout.zones] == [
        "dairy", "frozen", "snacks", "beverages", "personal-care", "produce", "meat", "bakery",
    ]
    assert layout.zone("dairy").origin == Position(2, 2)
    assert layout.zone("missing") is None


def test_layout_dict_round_trip():
    layout = make_demo_layout()
    assert layout_from_dict(layout_to_dict(layout)) == layout


def test_load_layout_from_json(tmp_path):
    data = {
        "width": 8,
        "height": 6,
        "entrance": [0, 0],
        "checkout": {"x": 7, "y": 5},
        "zones": [{"id": "tea", "position": {"x": 3, "y": 2}, "width": 2, "height": 1, "products": ["Green Tea"]}],
    }
    p = tmp_path / "store.json"
    p.write_text(json.dumps(data))
    layout = load_layout(str(p))
    assert layout.width == 8 and layout.height == 6
    assert layout.zone("tea").name == "tea"
    assert layout.zone("tea").products == ("Green Tea",)
    assert layout.checkout == Position(7, 5)


@pytest.mark.parametrize(
    "data, fragment",
    [
        ({"checkout": [1, 1]}, "entrance"),
        ({"entrance": [0, 0], "checkout": [1, 1], "zones": [{"id": "a", "position": [1, 1], "width": 0, "height": 1}]},
         "size must be positive"),
        ({"entrance": [0, "x"], "checkout": [1, 1]}, "expected an integer"),
        ({"entrance": [0, 0], "checkout": [1, 1], "zones": [
            {"id": "a", "position": [1, 1], "width": 1, "height": 1},
            {"id": "a", "position": [3, 3], "width": 1, "height": 1},
        ]}, "duplicate"),
    ],
)
def test_layout_errors_name_the_problem(data, fragment):
    with pytest.raises(StoreConfigError) as info:
        layout_from_dict(data)
    assert fragment in str(info.value)


def test_invalid_json_is_a_config_error(tmp_path):
    p = tmp_path / "broken.json"
    p.write_text("{not json")
    with pytest.raises(StoreConfigError):
        load_layout(str(p))


def test_zones_for_products_case_insensitive_and_deduplicated():
    layout = make_demo_layout()
    zones = zones_for_products(layout, ["Bread", "MILK", "cheese", "unicorn", " apples "])
    assert zones == ["bakery", "dairy", "produce"]


def test_zone_entry_must_be_an_object():
    data = {"entrance": [0, 0], "checkout": [1, 1], "zones": [["a", 1, 1]]}
    with pytest.raises(StoreConfigError) as info:
        layout_from_dict(data)
    assert "zones[0]" in str(info.value)


def test_zone_products_must_be_a_list():
    data = {"entrance": [0, 0], "checkout": [5, 5], "zones": [
        {"id": "tea", "position": [2, 2], "width": 1, "height": 1, "products": "green tea"},
    ]}
    with pytest.raises(StoreConfigError) as info:
        layout_from_dict(data)
    assert "products" in str(info.value)
