from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple
import math

Direction = str  # "up" | "down" | "left" | "right"


@dataclass(frozen=True, order=True)
class Position:
	x: int  # column, grows to the right
	y: int  # row, grows toward the back of the store

	def offset(self, dx: int, dy: int) -> "Position":
		return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class GridCell:
	x: int
	y: int
	is_walkable: bool = True
	is_aisle: bool = False
	aisle_id: Optional[str] = None
	is_entrance: bool = False
	is_checkout: bool = False


@dataclass(frozen=True)
class Zone:
	"""
	Named rectangular region of the store (an aisle).

	origin is the top-left cell; the zone covers
	[origin.x, origin.x + width) x [origin.y, origin.y + height).
	color is display-only and never read by the planners.
	"""
	id: str
	name: str
	origin: Position
	width: int
	height: int
	products: Tuple[str, ...] = ()
	color: Optional[str] = None

	@property
	def center(self) -> Position:
		return Position(self.origin.x + self.width // 2, self.origin.y + self.height // 2)

	def contains(self, pos: Position, margin: int = 0) -> bool:
		return (
			self.origin.x - margin <= pos.x <= self.origin.x + self.width - 1 + margin
			and self.origin.y - margin <= pos.y <= self.origin.y + self.height - 1 + margin
		)


@dataclass(frozen=True)
class StoreLayout:
	zones: Tuple[Zone, ...]
	entrance: Position
	checkout: Position
	width: int = 20
	height: int = 15

	def zone(self, zone_id: str) -> Optional[Zone]:
		for z in self.zones:
			if z.id == zone_id:
				return z
		return None


@dataclass(frozen=True)
class PathStep:
	position: Position
	direction: Optional[Direction] = None
	instruction: Optional[str] = None

	def with_instruction(self, instruction: str) -> "PathStep":
		return replace(self, instruction=instruction)


@dataclass(frozen=True)
class SkippedZone:
	zone_id: str
	reason: str  # "unknown-zone" | "no-walkable-target" | "unreachable"


@dataclass(frozen=True)
class Route:
	"""Result of composing (and optionally annotating) a multi-zone route."""
	steps: Tuple[PathStep, ...]
	targets: Dict[str, Position] = field(default_factory=dict)
	skipped: Tuple[SkippedZone, ...] = ()
	reachable: bool = True

	def instruction_steps(self) -> Tuple[PathStep, ...]:
		# what a narrator reads, in path order
		return tuple(s for s in self.steps if s.instruction)

	@property
	def total_distance(self) -> int:
		return len(self.steps)

	@property
	def estimated_minutes(self) -> int:
		return int(math.ceil(len(self.steps) * 0.5))
