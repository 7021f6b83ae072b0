from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Tile(Enum):
    NO_TILE = 0
    CORRIDOR = 1
    ROOM = 2
    WALL = 3
    WINDOW = 4
    DOOR = 5
    ENTRY = 6
    EXIT = 7
    DEADLY = 8


class Colour(Enum):
    NONE = "none"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    CYAN = "cyan"
    BROWN = "brown"
    WHITE = "white"


@dataclass(frozen=True)
class TileDetails:
    id: int
    tile_type: Tile
    traversable: bool
    symbol: str
    colour: Colour
    name: str


_LIBRARY = (
    TileDetails(0, Tile.NO_TILE, False, " ", Colour.NONE, "Empty"),
    TileDetails(1, Tile.CORRIDOR, True, "-", Colour.BLUE, "Corridor"),
    TileDetails(2, Tile.ROOM, True, "-", Colour.BLUE, "Room"),
    TileDetails(3, Tile.WALL, False, "#", Colour.BROWN, "Wall"),
    TileDetails(4, Tile.WINDOW, False, "%", Colour.CYAN, "Window"),
    TileDetails(5, Tile.DOOR, True, "=", Colour.WHITE, "Door"),
    TileDetails(6, Tile.ENTRY, True, "^", Colour.GREEN, "Entry"),
    TileDetails(7, Tile.EXIT, True, "^", Colour.RED, "Exit"),
    TileDetails(8, Tile.DEADLY, False, "!", Colour.RED, "Deadly"),
)


def build_library() -> Dict[Tile, TileDetails]:
    return {details.tile_type: details for details in _LIBRARY}


TILE_LIBRARY = build_library()

NO_TILE = TILE_LIBRARY[Tile.NO_TILE]
CORRIDOR = TILE_LIBRARY[Tile.CORRIDOR]
ROOM = TILE_LIBRARY[Tile.ROOM]
WALL = TILE_LIBRARY[Tile.WALL]
DOOR = TILE_LIBRARY[Tile.DOOR]
ENTRY = TILE_LIBRARY[Tile.ENTRY]
EXIT = TILE_LIBRARY[Tile.EXIT]

__all__ = [
    "Tile",
    "Colour",
    "TileDetails",
    "build_library",
    "TILE_LIBRARY",
    "NO_TILE",
    "CORRIDOR",
    "ROOM",
    "WALL",
    "DOOR",
    "ENTRY",
    "EXIT",
]
