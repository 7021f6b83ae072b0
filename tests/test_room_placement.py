"""Room model and quota-driven room placement."""

import random

import pytest

from levelgen.dungeon.config import GeneratorConfig
from levelgen.dungeon.geometry import Position, build_square_area
from levelgen.dungeon.rooms import CandidatePool, Room, build_room, candidate_positions, place_rooms


def test_inside_area_shrinks_by_one():
    room = Room(build_square_area(Position(0, 0), 4))
    inside = room.get_inside_area()
    assert inside.start == Position(1, 1)
    assert inside.end == Position(2, 2)


def test_smallest_room_has_single_interior_tile():
    room = Room(build_square_area(Position(3, 3), 3))
    assert room.get_inside_area().get_positions() == [Position(4, 4)]


def test_build_room_has_doors(map_area_12, config, rng):
    room, requested = build_room(Position(1, 1), 3, map_area_12, config, rng)
    assert room.area == build_square_area(Position(1, 1), 3)
    assert room.doors
    assert 1 <= len(room.doors) <= requested <= config.max_door_count
    assert room.entry is None and room.exit is None


def test_candidate_positions_skip_outer_ring(map_area_12):
    positions = candidate_positions(map_area_12)
    xs = {p.x for p in positions}
    ys = {p.y for p in positions}
    assert min(xs) == 1 and max(xs) == 10
    assert min(ys) == 1 and max(ys) == 10


@pytest.mark.parametrize("seed", [1, 7, 42, 99, 2024])
def test_rooms_never_touch(map_area_12, config, seed):
    placement = place_rooms(map_area_12, config, random.Random(seed))
    rooms = placement.rooms
    assert rooms
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            assert not a.area.intersects_or_touches(b.area), f"{a.area} touches {b.area}"
            assert not b.area.intersects_or_touches(a.area)


@pytest.mark.parametrize("seed", [3, 11, 500])
def test_rooms_fit_inside_map(seed):
    area = build_square_area(Position(0, 0), 30)
    cfg = GeneratorConfig()
    for room in place_rooms(area, cfg, random.Random(seed)).rooms:
        assert cfg.min_room_size <= room.area.width <= cfg.max_room_size
        assert room.area.width == room.area.height
        assert room.area.start.x >= 1 and room.area.start.y >= 1
        assert room.area.end.x <= 29 and room.area.end.y <= 29


def test_usage_tracks_quota(map_area_12, config):
    placement = place_rooms(map_area_12, config, random.Random(42))
    total = sum(r.area.get_total_area() for r in placement.rooms)
    assert placement.area_usage_pct == total * 100 // map_area_12.get_total_area()


def test_zero_quota_places_nothing(map_area_12, rng):
    placement = place_rooms(map_area_12, GeneratorConfig(room_area_quota_percentage=0), rng)
    assert placement.rooms == []
    assert placement.attempts == 0


def test_exhausted_candidates_end_early(rng):
    # A 3x3 map only offers (1,1), and no room of size >= 3 fits there
    area = build_square_area(Position(0, 0), 3)
    placement = place_rooms(area, GeneratorConfig(), rng)
    assert placement.rooms == []
    assert placement.attempts == 1
    assert placement.size_rejections == GeneratorConfig().room_size_attempts


def test_unreachable_quota_is_accepted(map_area_12, rng):
    placement = place_rooms(map_area_12, GeneratorConfig(room_area_quota_percentage=100), rng)
    assert placement.rooms
    assert placement.area_usage_pct < 100


def test_placement_is_seed_deterministic(map_area_12, config):
    first = place_rooms(map_area_12, config, random.Random(77))
    second = place_rooms(map_area_12, config, random.Random(77))
    assert [r.area for r in first.rooms] == [r.area for r in second.rooms]
    assert [[d.position for d in r.doors] for r in first.rooms] == [[d.position for d in r.doors] for r in second.rooms]


def test_candidate_pool_discard_keeps_remaining_positions():
    positions = [Position(x, 1) for x in range(6)]
    pool = CandidatePool(positions)
    pool.discard(Position(0, 1))
    pool.discard(Position(5, 1))
    pool.discard(Position(3, 1))
    pool.discard(Position(3, 1))  # already gone
    assert len(pool) == 3
    assert Position(3, 1) not in pool
    rng = random.Random(5)
    drawn = {pool.draw(rng) for _ in range(200)}
    assert drawn == {Position(1, 1), Position(2, 1), Position(4, 1)}


def test_candidate_pool_empties():
    pool = CandidatePool([Position(1, 1), Position(2, 2)])
    pool.discard(Position(2, 2))
    pool.discard(Position(1, 1))
    assert not pool


def test_rooms_never_touch_at_full_quota():
    area = build_square_area(Position(0, 0), 40)
    placement = place_rooms(area, GeneratorConfig(room_area_quota_percentage=100), random.Random(8))
    rooms = placement.rooms
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            assert not a.area.intersects_or_touches(b.area), f"{a.area} touches {b.area}"
