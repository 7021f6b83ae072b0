from typing import Iterable, NamedTuple

from levelgen.logging_utils import get_logger

from .geometry import Position
from .map import Map
from .pathfinding import find_path
from .tiles import CORRIDOR, Tile

log = get_logger("levelgen.dungeon.tunnels")


class TunnelStats(NamedTuple):
    links: int
    carved: int
    failed: int
    skipped: int


def carve_corridor(game_map: Map, path: Iterable[Position]) -> int:
    """Turn the unrendered tiles along ``path`` into corridor; rooms, walls and doors stay put."""
    carved = 0
    for position in path:
        tile = game_map.get_tile(position)
        if tile is not None and tile.tile_type is Tile.NO_TILE:
            game_map.set_tile(position, CORRIDOR)
            carved += 1
    return carved


def connect_rooms(game_map: Map) -> TunnelStats:
    """Chain consecutive rooms together, first door to first door."""
    rooms = game_map.rooms
    links = carved = failed = skipped = 0
    for a, b in zip(rooms, rooms[1:]):
        if not a.doors or not b.doors:
            skipped += 1
            continue
        start, end = a.doors[0].position, b.doors[0].position
        path = find_path(game_map, start, end)
        if not path:
            failed += 1
            log.warn(event="corridor_unreachable", start=f"{start.x},{start.y}", end=f"{end.x},{end.y}")
            continue
        links += 1
        carved += carve_corridor(game_map, path)
    return TunnelStats(links, carved, failed, skipped)


__all__ = ["TunnelStats", "carve_corridor", "connect_rooms"]
