"""Public dungeon package interface."""

from .config import GeneratorConfig
from .containers import Container, ContainerFactory, ContainerType, Item
from .doors import Door
from .errors import ConfigError, EntryExitSelectionError, GenerationError
from .geometry import Area, AreaSide, Position, Side, build_rectangular_area, build_square_area
from .map import Map
from .pathfinding import Pathfinding, find_path, manhattan_path_cost
from .pipeline import STEPS, MapGenerator, generate_map
from .progress import StepProgress
from .rooms import Room
from .tiles import Tile, TileDetails  # noqa: F401

__all__ = [
    "GeneratorConfig",
    "Container",
    "ContainerFactory",
    "ContainerType",
    "Item",
    "Door",
    "ConfigError",
    "EntryExitSelectionError",
    "GenerationError",
    "Area",
    "AreaSide",
    "Position",
    "Side",
    "build_rectangular_area",
    "build_square_area",
    "Map",
    "Pathfinding",
    "find_path",
    "manhattan_path_cost",
    "STEPS",
    "MapGenerator",
    "generate_map",
    "StepProgress",
    "Room",
    "Tile",
    "TileDetails",
]
