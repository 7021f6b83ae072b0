"""Generated map value: tile grid, rooms and container index.

The grid is stored row-major (``tiles[y][x]``) relative to the map area's
start, so ``get_tile`` takes absolute positions and returns ``None`` outside
the area.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from .geometry import Area, Position
from .rooms import Room
from .tiles import ENTRY, EXIT, NO_TILE, ROOM, WALL, Tile, TileDetails

if TYPE_CHECKING:
    from .containers import Container

Grid = List[List[TileDetails]]


def build_empty_tiles(area: Area) -> Grid:
    return [[NO_TILE for _ in range(area.width)] for _ in range(area.height)]


@dataclass
class Map:
    area: Area
    tiles: Grid = field(default_factory=list)
    rooms: List[Room] = field(default_factory=list)
    containers: Dict[Position, "Container"] = field(default_factory=dict)

    def _index(self, position: Position):
        if not self.area.contains_position(position):
            return None
        return position.y - self.area.start.y, position.x - self.area.start.x

    def get_tile(self, position: Position) -> Optional[TileDetails]:
        idx = self._index(position)
        if idx is None:
            return None
        row, col = idx
        if row >= len(self.tiles) or col >= len(self.tiles[row]):
            return None
        return self.tiles[row][col]

    def set_tile(self, position: Position, tile: TileDetails) -> bool:
        idx = self._index(position)
        if idx is None:
            return False
        row, col = idx
        self.tiles[row][col] = tile
        return True

    def is_traversable(self, position: Position) -> bool:
        tile = self.get_tile(position)
        return tile is not None and tile.traversable

    def is_paveable(self, position: Position) -> bool:
        """Traversable tiles plus unrendered space, which corridors may be carved through."""
        tile = self.get_tile(position)
        if tile is None:
            return False
        return tile.traversable or tile.tile_type is Tile.NO_TILE

    def find_entry_room(self) -> Optional[Room]:
        return next((r for r in self.rooms if r.entry is not None), None)

    def find_exit_room(self) -> Optional[Room]:
        return next((r for r in self.rooms if r.exit is not None), None)

    def render_room(self, room: Room) -> None:
        """Paint interior, wall ring, doors, then entry/exit, later layers winning."""
        for position in room.get_inside_area().get_positions():
            self.set_tile(position, ROOM)
        for side in room.get_sides():
            for position in side.area.get_positions():
                self.set_tile(position, WALL)
        for door in room.doors:
            self.set_tile(door.position, door.tile_details)
        if room.entry is not None:
            self.set_tile(room.entry, ENTRY)
        if room.exit is not None:
            self.set_tile(room.exit, EXIT)

    def render_rooms(self) -> None:
        for room in self.rooms:
            self.render_room(room)

    def symbol_rows(self) -> List[str]:
        return ["".join(t.symbol for t in row) for row in self.tiles]


__all__ = ["Grid", "Map", "build_empty_tiles"]
