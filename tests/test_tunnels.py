from levelgen.dungeon.doors import build_door
from levelgen.dungeon.geometry import Position, build_rectangular_area, build_square_area
from levelgen.dungeon.map import Map, build_empty_tiles
from levelgen.dungeon.rooms import Room
from levelgen.dungeon.tiles import Tile
from levelgen.dungeon.tunnels import carve_corridor, connect_rooms

from tests.dungeon_test_utils import blank_map, build_test_map, tile_type


def two_room_map():
    area = build_rectangular_area(Position(0, 0), 14, 7)
    left = Room(build_square_area(Position(1, 1), 5), [build_door(Position(5, 3))])
    right = Room(build_square_area(Position(8, 1), 5), [build_door(Position(8, 3))])
    game_map = Map(area, build_empty_tiles(area), [left, right], {})
    game_map.render_rooms()
    return game_map


def test_carve_only_touches_empty_tiles():
    game_map = build_test_map()
    path = [Position(0, 1), Position(0, 2), Position(1, 2), Position(2, 2), Position(1, 1)]
    carved = carve_corridor(game_map, path)
    assert carved == 2
    assert tile_type(game_map, 0, 1) is Tile.CORRIDOR
    assert tile_type(game_map, 0, 2) is Tile.CORRIDOR
    assert tile_type(game_map, 1, 2) is Tile.DOOR
    assert tile_type(game_map, 2, 2) is Tile.ROOM
    assert tile_type(game_map, 1, 1) is Tile.WALL


def test_carving_twice_is_a_no_op():
    game_map = blank_map(6, 2)
    path = [Position(x, 0) for x in range(6)]
    assert carve_corridor(game_map, path) == 6
    snapshot = game_map.symbol_rows()
    assert carve_corridor(game_map, path) == 0
    assert game_map.symbol_rows() == snapshot


def test_carve_ignores_positions_outside_map():
    game_map = blank_map(2, 2)
    assert carve_corridor(game_map, [Position(5, 5), Position(1, 1)]) == 1


def test_connect_rooms_links_facing_doors():
    game_map = two_room_map()
    stats = connect_rooms(game_map)
    assert stats.links == 1
    assert stats.failed == 0
    assert stats.carved == 2
    assert tile_type(game_map, 6, 3) is Tile.CORRIDOR
    assert tile_type(game_map, 7, 3) is Tile.CORRIDOR
    assert tile_type(game_map, 5, 3) is Tile.DOOR
    assert tile_type(game_map, 8, 3) is Tile.DOOR


def test_connect_rooms_skips_doorless_room():
    game_map = two_room_map()
    game_map.rooms[1].doors = []
    stats = connect_rooms(game_map)
    assert stats.skipped == 1
    assert stats.links == 0
    assert Tile.CORRIDOR not in {t.tile_type for row in game_map.tiles for t in row}


def test_connect_rooms_counts_unreachable_links():
    game_map = two_room_map()
    # Seal the gap between the rooms and the map border around it
    for x in range(6, 8):
        for y in range(0, 7):
            game_map.set_tile(Position(x, y), game_map.get_tile(Position(1, 1)))
    stats = connect_rooms(game_map)
    assert stats.failed == 1
    assert stats.carved == 0


def test_single_room_has_nothing_to_connect():
    game_map = two_room_map()
    game_map.rooms = game_map.rooms[:1]
    assert connect_rooms(game_map) == (0, 0, 0, 0)
