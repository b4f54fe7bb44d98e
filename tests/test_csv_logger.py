import csv

import pytest

from storenav.config import make_demo_layout
from storenav.io.csv_logger import FIELDNAMES, RouteCsvLogger
from storenav.planners.route import plan_route
from storenav.store_grid import build_grid
from storenav.types import PathStep, Position, Route


def _read(path):
    with open(path, newline="") as f:
        return list(csv.DictReader(f))


def test_route_rows_written(tmp_path):
    layout = make_demo_layout()
    route = plan_route(["dairy"], build_grid(layout))
    out = tmp_path / "logs" / "route.csv"

    with RouteCsvLogger(str(out), flush_every=7) as log:
        log.log_route(route, layout)

    rows = _read(out)
    assert len(rows) == len(route.steps)
    assert list(rows[0].keys()) == list(FIELDNAMES)
    assert rows[0]["step"] == "0"
    assert (rows[0]["x"], rows[0]["y"]) == ("10", "0")
    assert rows[0]["zone"] == "entrance"
    assert rows[0]["direction"] == ""
    assert rows[-1]["instruction"].startswith("Finally")


def test_empty_route_writes_header_only(tmp_path):
    out = tmp_path / "empty.csv"
    log = RouteCsvLogger(str(out))
    log.log_route(Route(steps=()))
    log.close()
    log.close()
    assert out.read_text().strip() == ",".join(FIELDNAMES)


def test_log_step_after_close_raises(tmp_path):
    log = RouteCsvLogger(str(tmp_path / "closed.csv"))
    log.close()
    with pytest.raises(ValueError):
        log.log_step(PathStep(Position(1, 1)))
    assert log._buffer == []
