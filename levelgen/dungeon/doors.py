"""Door placement on room edges.

Each room asks for between one and ``max_door_count`` doors. A door sits at
the midpoint of a distinct room side; sides whose midpoint falls on the map's
outer edge are skipped, as is a midpoint already holding a door, so a room can
end up with fewer doors than it asked for.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Tuple

from .geometry import ALL_SIDES, Area, Position
from .tiles import DOOR, TileDetails


@dataclass
class Door:
    position: Position
    tile_details: TileDetails = field(default=DOOR)


def build_door(position: Position) -> Door:
    return Door(position, DOOR)


def on_map_edge(map_area: Area, position: Position) -> bool:
    return any(side.area.contains_position(position) for side in map_area.get_sides())


def place_doors(room_area: Area, map_area: Area, max_door_count: int, rng: random.Random) -> Tuple[List[Door], int]:
    """Return the placed doors and the door count that was requested."""
    requested = rng.randint(1, max_door_count)
    unused = list(ALL_SIDES)
    room_sides = {s.side: s for s in room_area.get_sides()}
    doors: List[Door] = []
    while len(doors) < requested and unused:
        side = unused.pop(rng.randrange(len(unused)))
        midpoint = room_sides[side].get_mid_point()
        if on_map_edge(map_area, midpoint):
            continue
        # 1-wide rooms share midpoints between sides
        if any(d.position == midpoint for d in doors):
            continue
        doors.append(build_door(midpoint))
    return doors, requested


__all__ = ["Door", "build_door", "on_map_edge", "place_doors"]
