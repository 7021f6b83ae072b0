import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional

from levelgen.logging_utils import get_logger

from .config import GeneratorConfig
from .doors import Door, place_doors
from .geometry import COORD_MAX, COORD_MIN, Area, AreaSide, Position, build_rectangular_area, build_square_area

log = get_logger("levelgen.dungeon.rooms")


@dataclass
class Room:
    area: Area
    doors: List[Door] = field(default_factory=list)
    entry: Optional[Position] = None
    exit: Optional[Position] = None

    def get_sides(self) -> List[AreaSide]:
        return self.area.get_sides()

    def get_inside_area(self) -> Area:
        start = Position(self.area.start.x + 1, self.area.start.y + 1)
        return build_rectangular_area(start, max(0, self.area.width - 2), max(0, self.area.height - 2))


class Placement(NamedTuple):
    rooms: List[Room]
    attempts: int
    size_rejections: int
    area_usage_pct: int
    doors_requested: int


def candidate_positions(map_area: Area) -> List[Position]:
    """Interior positions a room may start on (the outer 1-tile ring is excluded)."""
    return [
        Position(x, y)
        for x in range(map_area.start.x + 1, map_area.end.x)
        for y in range(map_area.start.y + 1, map_area.end.y)
    ]


def build_room(position: Position, size: int, map_area: Area, config: GeneratorConfig, rng: random.Random):
    area = build_square_area(position, size)
    doors, requested = place_doors(area, map_area, config.max_door_count, rng)
    return Room(area, doors), requested


class CandidatePool:
    """Room start positions still in play.

    Draws index into a flat list; removal swaps the last entry into the
    hole, so both stay O(1). The resulting order depends only on the draw
    sequence, which keeps seeded runs reproducible.
    """

    def __init__(self, positions: List[Position]):
        self._items = list(positions)
        self._index: Dict[Position, int] = {p: i for i, p in enumerate(self._items)}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, position: Position) -> bool:
        return position in self._index

    def draw(self, rng: random.Random) -> Position:
        return self._items[rng.randrange(len(self._items))]

    def discard(self, position: Position) -> None:
        idx = self._index.pop(position, None)
        if idx is None:
            return
        last = self._items.pop()
        if idx < len(self._items):
            self._items[idx] = last
            self._index[last] = idx


def _halo_positions(area: Area) -> Iterator[Position]:
    # The area grown by one tile, clamped at the coordinate bounds
    x0, y0 = max(COORD_MIN, area.start.x - 1), max(COORD_MIN, area.start.y - 1)
    x1, y1 = min(COORD_MAX, area.end.x + 1), min(COORD_MAX, area.end.y + 1)
    for x in range(x0, x1 + 1):
        for y in range(y0, y1 + 1):
            yield Position(x, y)


def _blocker(area: Area, claimed: Dict[Position, Room]) -> Optional[Room]:
    """The placed room whose one-tile halo ``area`` would overlap, if any."""
    for position in area.get_positions():
        room = claimed.get(position)
        if room is not None:
            return room
    return None


def place_rooms(map_area: Area, config: GeneratorConfig, rng: random.Random) -> Placement:
    """Scatter square rooms until the area quota is reached or no start positions remain.

    Rooms never overlap or share a wall with an earlier room. A drawn position
    gets ``room_size_attempts`` random sizes; a successful room removes all of
    its tiles from the candidate pool, a position that fits no size is removed
    on its own. Falling short of the quota is accepted.
    """
    total_area = map_area.get_total_area()
    pool = CandidatePool(candidate_positions(map_area))
    # Every tile within one step of a placed room, mapped to that room
    claimed: Dict[Position, Room] = {}
    rooms: List[Room] = []
    room_area_total = 0
    usage_pct = 0
    attempts = 0
    rejections = 0
    doors_requested = 0
    while usage_pct < config.room_area_quota_percentage and pool:
        attempts += 1
        position = pool.draw(rng)
        placed = None
        for _ in range(config.room_size_attempts):
            size = rng.randint(config.min_room_size, config.max_room_size)
            candidate = build_square_area(position, size)
            blocker = _blocker(candidate, claimed)
            if blocker is not None or not map_area.can_fit(position, size):
                rejections += 1
                if blocker is not None:
                    log.debug(
                        event="room_rejected",
                        start=f"{candidate.start.x},{candidate.start.y}",
                        end=f"{candidate.end.x},{candidate.end.y}",
                        blocker=f"{blocker.area.start.x},{blocker.area.start.y}",
                    )
                continue
            placed, requested = build_room(position, size, map_area, config, rng)
            doors_requested += requested
            break
        if placed is None:
            pool.discard(position)
            continue
        rooms.append(placed)
        room_area_total += placed.area.get_total_area()
        usage_pct = room_area_total * 100 // total_area if total_area else 100
        for p in placed.area.get_positions():
            pool.discard(p)
        for p in _halo_positions(placed.area):
            claimed[p] = placed
        log.debug(event="room_placed", area=placed.area.get_description(), usage_pct=usage_pct)
    log.info(event="rooms_placed", rooms=len(rooms), usage_pct=usage_pct, quota=config.room_area_quota_percentage)
    return Placement(rooms, attempts, rejections, usage_pct, doors_requested)


__all__ = ["Room", "Placement", "CandidatePool", "candidate_positions", "build_room", "place_rooms"]
