"""Tile-space geometry: positions, inclusive rectangular areas and their edges.

Coordinates are unsigned 16 bit values. Areas are inclusive on both ends, so
a 3x3 area starting at (0,0) ends at (2,2). Position enumeration is
column-major (x outer, y inner); generation relies on that order for
seeded reproducibility.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple

COORD_MIN = 0
COORD_MAX = 0xFFFF


def _clamp(value: int) -> int:
    return max(COORD_MIN, min(COORD_MAX, value))


class Position(NamedTuple):
    x: int
    y: int

    def neighbors(self) -> List["Position"]:
        """Axis-adjacent positions in left, right, top, bottom order, clipped at the coordinate bounds."""
        out = []
        if self.x > COORD_MIN:
            out.append(Position(self.x - 1, self.y))
        if self.x < COORD_MAX:
            out.append(Position(self.x + 1, self.y))
        if self.y > COORD_MIN:
            out.append(Position(self.x, self.y - 1))
        if self.y < COORD_MAX:
            out.append(Position(self.x, self.y + 1))
        return out

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(_clamp(self.x + dx), _clamp(self.y + dy))


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


ALL_SIDES = (Side.LEFT, Side.RIGHT, Side.TOP, Side.BOTTOM)


@dataclass(frozen=True)
class Area:
    start: Position
    end: Position
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.start.x <= x <= self.end.x and self.start.y <= y <= self.end.y

    def contains_position(self, position: Position) -> bool:
        return self.contains(position.x, position.y)

    def get_position(self, dx: int, dy: int) -> Position:
        return Position(self.start.x + dx, self.start.y + dy)

    def get_total_area(self) -> int:
        return self.width * self.height

    def get_positions(self) -> List[Position]:
        if self.width == 0 or self.height == 0:
            return []
        return [
            Position(x, y)
            for x in range(self.start.x, self.end.x + 1)
            for y in range(self.start.y, self.end.y + 1)
        ]

    def get_sides(self) -> List["AreaSide"]:
        return [
            AreaSide(build_rectangular_area(self.start, 1, self.height), Side.LEFT),
            AreaSide(build_rectangular_area(Position(self.end.x, self.start.y), 1, self.height), Side.RIGHT),
            AreaSide(build_rectangular_area(self.start, self.width, 1), Side.TOP),
            AreaSide(build_rectangular_area(Position(self.start.x, self.end.y), self.width, 1), Side.BOTTOM),
        ]

    def intersects(self, other: "Area") -> bool:
        x_overlap = self.start.x <= other.end.x and other.start.x <= self.end.x
        y_overlap = self.start.y <= other.end.y and other.start.y <= self.end.y
        return x_overlap and y_overlap

    def intersects_or_touches(self, other: "Area") -> bool:
        # Grow by one tile on every side that is not pinned at a numeric bound
        start = Position(
            self.start.x - 1 if self.start.x > COORD_MIN else self.start.x,
            self.start.y - 1 if self.start.y > COORD_MIN else self.start.y,
        )
        end = Position(
            self.end.x + 1 if self.end.x < COORD_MAX else self.end.x,
            self.end.y + 1 if self.end.y < COORD_MAX else self.end.y,
        )
        grown = Area(start, end, end.x - start.x + 1, end.y - start.y + 1)
        return grown.intersects(other)

    def can_fit(self, position: Position, size: int) -> bool:
        if size == 0:
            return False
        if not self.contains_position(position):
            return False
        if size > self.width or size > self.height:
            return False
        return position.x + size - 1 <= self.end.x and position.y + size - 1 <= self.end.y

    def get_description(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class AreaSide:
    area: Area
    side: Side

    def get_mid_point(self) -> Position:
        a = self.area
        if self.side is Side.LEFT:
            return Position(a.start.x, a.start.y + (a.height - 1) // 2)
        if self.side is Side.RIGHT:
            return Position(a.end.x, a.start.y + (a.height - 1) // 2)
        if self.side is Side.TOP:
            return Position(a.start.x + (a.width - 1) // 2, a.start.y)
        return Position(a.start.x + (a.width - 1) // 2, a.end.y)


def build_rectangular_area(start: Position, width: int, height: int) -> Area:
    # A zero dimension collapses that end coordinate onto the start
    end_x = start.x + width - 1 if width > 0 else start.x
    end_y = start.y + height - 1 if height > 0 else start.y
    return Area(Position(start.x, start.y), Position(end_x, end_y), width, height)


def build_square_area(start: Position, size: int) -> Area:
    return build_rectangular_area(start, size, size)


__all__ = [
    "COORD_MIN",
    "COORD_MAX",
    "Position",
    "Side",
    "ALL_SIDES",
    "Area",
    "AreaSide",
    "build_rectangular_area",
    "build_square_area",
]
