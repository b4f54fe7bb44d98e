# storenav/io/csv_logger.py
from __future__ import annotations

import csv
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from storenav.guidance.instructions import zone_for_position
from storenav.types import PathStep, Route, StoreLayout

FIELDNAMES = ("step", "x", "y", "direction", "zone", "instruction")


@dataclass
class RouteCsvLogger:
    """
    Buffered CSV export of route steps.

    - One row per PathStep, columns fixed by FIELDNAMES.
    - Rows are buffered and written every `flush_every` rows and on close().
    - The file is truncated on first flush; one logger writes one route file.
    """
    path: str
    flush_every: int = 200

    _buffer: List[Dict[str, Any]] = field(default_factory=list, init=False)
    _writer: Optional[csv.DictWriter] = field(default=None, init=False)
    _file: Any = field(default=None, init=False)
    _rows: int = field(default=0, init=False)
    _closed: bool = field(default=False, init=False)

    def log_step(self, step: PathStep, *, zone: Optional[str] = None) -> None:
        if self._closed:
            raise ValueError(f"RouteCsvLogger for {self.path} is closed")
        self._buffer.append({
            "step": self._rows,
            "x": step.position.x,
            "y": step.position.y,
            "direction": step.direction or "",
            "zone": zone or "",
            "instruction": step.instruction or "",
        })
        self._rows += 1
        if len(self._buffer) >= self.flush_every:
            self.flush()

    def log_route(self, route: Route, layout: Optional[StoreLayout] = None) -> None:
        for step in route.steps:
            zone = zone_for_position(step.position, layout) if layout is not None else None
            self.log_step(step, zone=zone)

    def flush(self) -> None:
        if self._closed:
            raise ValueError(f"RouteCsvLogger for {self.path} is closed")
        if self._writer is None:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self._file = open(self.path, "w", newline="")
            self._writer = csv.DictWriter(self._file, fieldnames=list(FIELDNAMES))
            self._writer.writeheader()

        if self._buffer:
            self._writer.writerows(self._buffer)
            self._buffer.clear()
        self._file.flush()

    def close(self) -> None:
        if self._closed:
            return
        # header is written even for an empty route
        self.flush()
        if self._file is not None:
            self._file.close()
        self._file = None
        self._writer = None
        self._closed = True

    def __enter__(self) -> "RouteCsvLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
