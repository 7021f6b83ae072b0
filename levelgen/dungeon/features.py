"""Entry and exit selection.

A random room is drawn and its interior scanned in position order; the last
free tile found wins. Rooms are redrawn until a candidate turns up, bounded
by ``max_entry_exit_attempts`` draws per feature.
"""
from __future__ import annotations

import random
from typing import Callable, NamedTuple, Optional

from levelgen.logging_utils import get_logger

from .containers import has_non_floor_container
from .errors import EntryExitSelectionError
from .geometry import Position
from .map import Map
from .rooms import Room

log = get_logger("levelgen.dungeon.features")


class EntryExit(NamedTuple):
    entry_room: Room
    exit_room: Room
    attempts: int


def _scan_room(game_map: Map, room: Room, excluded: Optional[Position]) -> Optional[Position]:
    found = None
    for position in room.get_inside_area().get_positions():
        if position == excluded:
            continue
        if has_non_floor_container(game_map, position):
            continue
        found = position
    return found


def _draw(
    game_map: Map, rng: random.Random, max_attempts: int, excluded_of: Callable[[Room], Optional[Position]]
):
    rooms = game_map.rooms
    for attempt in range(1, max_attempts + 1):
        room = rooms[rng.randrange(len(rooms))]
        position = _scan_room(game_map, room, excluded_of(room))
        if position is not None:
            return room, position, attempt
    raise EntryExitSelectionError(max_attempts, len(rooms))


def select_entry_and_exit(game_map: Map, rng: random.Random, max_attempts: int) -> EntryExit:
    """Mark one room's entry and one room's exit in place.

    Raises ``EntryExitSelectionError`` when no candidate is found within the
    draw budget (including the no-rooms case).
    """
    if not game_map.rooms:
        raise EntryExitSelectionError(0, 0)
    entry_room, entry, entry_attempts = _draw(game_map, rng, max_attempts, lambda r: r.exit)
    entry_room.entry = entry
    exit_room, exit_pos, exit_attempts = _draw(game_map, rng, max_attempts, lambda r: r.entry)
    exit_room.exit = exit_pos
    log.info(
        event="entry_exit_selected",
        entry=f"{entry.x},{entry.y}",
        exit=f"{exit_pos.x},{exit_pos.y}",
        attempts=entry_attempts + exit_attempts,
    )
    return EntryExit(entry_room, exit_room, entry_attempts + exit_attempts)


__all__ = ["EntryExit", "select_entry_and_exit"]
