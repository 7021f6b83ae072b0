"""A* search over the implicit 4-neighbour tile graph.

The open set is a binary heap keyed on f-score; equal scores pop in
insertion order. Only paveable tiles (traversable or still unrendered) are
expanded, though any tile may be the target. The map is read, never written.
"""
from __future__ import annotations

import heapq
import itertools
from typing import Dict, List, Set, Tuple

from levelgen.logging_utils import get_logger

from .geometry import Position
from .map import Map

log = get_logger("levelgen.dungeon.pathfinding")

# Score assumed for positions with no recorded g/f value
UNSCORED = 32767
# Every move on the 4-neighbour grid costs one tile
STEP_COST = 1


def manhattan_path_cost(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


class Pathfinding:
    def __init__(self, start: Position):
        self.start = start
        self._counter = itertools.count()
        self.unvisited: List[Tuple[int, int, Position]] = []
        self._queued: Set[Position] = set()
        self.came_from: Dict[Position, Position] = {}
        self.g_scores: Dict[Position, int] = {start: 0}
        self.f_scores: Dict[Position, int] = {}
        self._push(start, 0)

    def _push(self, position: Position, score: int) -> None:
        heapq.heappush(self.unvisited, (score, next(self._counter), position))
        self._queued.add(position)

    def _pop(self) -> Position:
        _score, _seq, position = heapq.heappop(self.unvisited)
        self._queued.discard(position)
        return position

    def get_g_score(self, position: Position) -> int:
        return self.g_scores.get(position, UNSCORED)

    def get_f_score(self, position: Position) -> int:
        return self.f_scores.get(position, UNSCORED)

    def build_path(self, end: Position) -> List[Position]:
        path = [end]
        current = end
        while current in self.came_from:
            current = self.came_from[current]
            path.append(current)
        path.reverse()
        return path

    def a_star_search(self, game_map: Map, end: Position) -> List[Position]:
        """Shortest path from the start to ``end`` inclusive, or ``[]`` when unreachable."""
        self.f_scores[self.start] = manhattan_path_cost(self.start, end)
        expanded = 0
        while self.unvisited:
            current = self._pop()
            if current == end:
                log.debug(event="path_found", end=f"{end.x},{end.y}", expanded=expanded)
                return self.build_path(end)
            if not game_map.is_paveable(current):
                continue
            expanded += 1
            tentative = self.get_g_score(current) + STEP_COST
            for neighbor in current.neighbors():
                if tentative >= self.get_g_score(neighbor):
                    continue
                self.came_from[neighbor] = current
                self.g_scores[neighbor] = tentative
                f_score = tentative + manhattan_path_cost(neighbor, end)
                self.f_scores[neighbor] = f_score
                if neighbor not in self._queued:
                    self._push(neighbor, f_score)
        log.debug(event="path_exhausted", start=f"{self.start.x},{self.start.y}", end=f"{end.x},{end.y}")
        return []


def find_path(game_map: Map, start: Position, end: Position) -> List[Position]:
    return Pathfinding(start).a_star_search(game_map, end)


__all__ = ["UNSCORED", "STEP_COST", "manhattan_path_cost", "Pathfinding", "find_path"]
