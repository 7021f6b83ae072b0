"""Storage containers and their placement on a rendered map.

Containers form value trees: every node owns its children, there are no
parent links. This module only builds and places them; moving items around
afterwards is gameplay's job.

Population runs in two passes:
    * every rendered (non-empty) tile gets a floor container,
    * each room rolls a few chests on interior tiles, nested into the floor
      container already sitting on that tile.
"""
from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple

from levelgen.logging_utils import get_logger

from .geometry import Position
from .map import Map
from .tiles import Colour, Tile

log = get_logger("levelgen.dungeon.containers")

UNLIMITED_WEIGHT = 2**31 - 1
FLOOR_NAME = "Floor"


class ItemType(Enum):
    ITEM = "item"
    CONTAINER = "container"


class ContainerType(Enum):
    ITEM = "item"  # wrapped single item, no storage
    OBJECT = "object"  # movable storage, e.g. bags
    AREA = "area"  # fixed storage, e.g. floors and chests


@dataclass
class Item:
    id: uuid.UUID
    name: str
    symbol: str
    weight: int
    value: int
    item_type: ItemType = ItemType.ITEM
    colour: Colour = Colour.WHITE


@dataclass
class Container:
    item: Item
    container_type: ContainerType
    weight_limit: int
    contents: List["Container"] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.item.name

    def add(self, container: "Container") -> None:
        self.contents.append(container)

    def add_item(self, item: Item) -> None:
        self.contents.append(Container(item, ContainerType.ITEM, 0))

    def get_item_count(self) -> int:
        if self.container_type is ContainerType.ITEM:
            return 1
        return sum(c.get_item_count() for c in self.contents)

    def get_contents_weight_total(self) -> int:
        return sum(c.get_weight_total() for c in self.contents)

    def get_weight_total(self) -> int:
        return self.item.weight + self.get_contents_weight_total()

    def can_fit_container_item(self, other: "Container") -> bool:
        return other.get_weight_total() <= self.weight_limit - self.get_contents_weight_total()

    def is_floor(self) -> bool:
        return self.container_type is ContainerType.AREA and self.item.name == FLOOR_NAME

    def nested_containers(self) -> List["Container"]:
        return [c for c in self.contents if c.container_type is not ContainerType.ITEM]


def random_id(rng: random.Random) -> uuid.UUID:
    return uuid.UUID(int=rng.getrandbits(128), version=4)


def build_item(rng: random.Random, name: str, symbol: str, weight: int, value: int) -> Item:
    return Item(random_id(rng), name, symbol, weight, value)


def build_container(
    rng: random.Random, name: str, symbol: str, weight: int, value: int, container_type: ContainerType, weight_limit: int
) -> Container:
    item = Item(random_id(rng), name, symbol, weight, value, ItemType.CONTAINER)
    return Container(item, container_type, weight_limit)


class ContainerFactory:
    """Builds the containers dropped onto a map.

    Gameplay code can subclass this to stock chests differently; the
    generator only relies on ``floor`` and ``chest``.
    """

    loose_items = 5

    def floor(self, position: Position, rng: random.Random) -> Container:
        return build_container(rng, FLOOR_NAME, " ", 0, 0, ContainerType.AREA, UNLIMITED_WEIGHT)

    def chest(self, rng: random.Random) -> Container:
        chest = build_container(rng, "Chest", "$", 1, 1, ContainerType.AREA, 100)
        bag = build_container(rng, "Bag", "$", 5, 50, ContainerType.OBJECT, 50)
        bag.add(build_container(rng, "Carton", "$", 1, 50, ContainerType.OBJECT, 5))
        bag.add_item(build_item(rng, "Bronze Bar", "X", 1, 50))
        for i in range(1, self.loose_items + 1):
            chest.add_item(build_item(rng, f"Trinket {i}", "$", 1, 10))
        chest.add(bag)
        return chest


class PopulationStats(NamedTuple):
    floors: int
    chests: int
    nested: int


def has_non_floor_container(game_map: Map, position: Position) -> bool:
    container = game_map.containers.get(position)
    if container is None:
        return False
    if not container.is_floor():
        return True
    return bool(container.nested_containers())


def populate_containers(
    game_map: Map, factory: ContainerFactory, max_chests_per_room: int, rng: random.Random
) -> PopulationStats:
    floors = 0
    for row_idx, row in enumerate(game_map.tiles):
        for col_idx, tile in enumerate(row):
            if tile.tile_type is Tile.NO_TILE:
                continue
            position = game_map.area.get_position(col_idx, row_idx)
            game_map.containers[position] = factory.floor(position, rng)
            floors += 1

    chests = 0
    nested = 0
    for room in game_map.rooms:
        inside = room.get_inside_area()
        if inside.get_total_area() <= 1:
            continue
        for _ in range(rng.randint(0, max_chests_per_room)):
            position = inside.get_position(rng.randrange(inside.width), rng.randrange(inside.height))
            chest = factory.chest(rng)
            chests += 1
            tile = game_map.get_tile(position)
            floor = game_map.containers.get(position)
            if tile is not None and tile.tile_type is Tile.ROOM and floor is not None:
                floor.add(chest)
                nested += 1
    log.info(event="containers_populated", floors=floors, chests=chests, nested=nested)
    return PopulationStats(floors, chests, nested)


__all__ = [
    "UNLIMITED_WEIGHT",
    "FLOOR_NAME",
    "ItemType",
    "ContainerType",
    "Item",
    "Container",
    "ContainerFactory",
    "PopulationStats",
    "random_id",
    "build_item",
    "build_container",
    "has_non_floor_container",
    "populate_containers",
]
