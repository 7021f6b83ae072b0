"""Pipeline orchestration for map generation.

Six fixed stages, each announced on the progress channel before it runs:

    1. build_map            place rooms and lay an empty grid
    2. select_entry_exit    mark the entry and exit tiles
    3. render_rooms         paint room interiors, walls, doors, entry and exit
    4. populate_containers  floor containers everywhere, chests in rooms
    5. connect_rooms        A* between consecutive rooms, carve corridors
    6. complete             finalize metrics and hand the map over

``MapGenerator`` is a stage-index state machine. Callers either step it with
``advance()`` / ``iter_steps()`` and render progress in between, or run it
straight through with ``generate()``. The random handle is created once and
threaded through every stage so a seed reproduces the same map.
"""
from __future__ import annotations

import random
import time
from dataclasses import replace
from typing import Any, Callable, Dict, Iterator, List, Optional

from levelgen.logging_utils import get_logger

from .config import GeneratorConfig
from .containers import ContainerFactory, populate_containers
from .errors import EntryExitSelectionError, GenerationError
from .features import select_entry_and_exit
from .geometry import Area
from .map import Map, build_empty_tiles
from .metrics import init_metrics
from .progress import MultiStepProgress, Step, StepProgress, send_progress
from .rooms import place_rooms
from .tunnels import connect_rooms

log = get_logger("levelgen.dungeon.pipeline")

STEPS: List[Step] = [
    Step("build_map", "Generating rooms"),
    Step("select_entry_exit", "Choosing entry and exit"),
    Step("render_rooms", "Applying rooms"),
    Step("populate_containers", "Adding containers"),
    Step("connect_rooms", "Pathfinding"),
    Step("complete", "Map generated"),
]


class MapGenerator:
    def __init__(
        self,
        map_area: Area,
        config: GeneratorConfig | None = None,
        *,
        rng: random.Random | None = None,
        container_factory: ContainerFactory | None = None,
        channel: Any = None,
    ):
        self.map_area = map_area
        # Private copy; the caller's config may be reused for further runs
        self.config = replace(config) if config is not None else GeneratorConfig.from_env()
        self.config.validate()
        self.seed = self.config.seed
        if rng is None:
            if self.seed is None:
                self.seed = random.randint(0, 2**31 - 1)
            rng = random.Random(self.seed)
        self.rng = rng
        self.log = log.bind(seed=self.seed)
        self.container_factory = container_factory or ContainerFactory()
        self.channel = channel
        self.progress = MultiStepProgress(STEPS)
        self.metrics: Dict[str, Any] = init_metrics() if self.config.enable_metrics else {}
        self.map: Optional[Map] = None
        self._finished = False
        self._started_at: Optional[float] = None
        self._stages: List[Callable[[], None]] = [
            self._build_map,
            self._select_entry_exit,
            self._render_rooms,
            self._populate_containers,
            self._connect_rooms,
            self._complete,
        ]

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def is_done(self) -> bool:
        return self._finished

    def poll(self) -> Optional[Map]:
        """The finished map once the last stage has run, otherwise ``None``."""
        return self.map if self._finished else None

    def get_progress(self) -> StepProgress:
        return self.progress.snapshot()

    def _announce(self) -> StepProgress:
        if self._started_at is None:
            self._started_at = time.perf_counter()
        self.progress.next_step()
        snapshot = self.progress.snapshot()
        self.log.info(event="stage_start", step=snapshot.step_name, current=snapshot.current_step, total=snapshot.step_count)
        send_progress(self.channel, snapshot)
        return snapshot

    def _run_current(self) -> None:
        idx = self.progress.current_step_index
        step = STEPS[idx]
        started = time.perf_counter()
        self._stages[idx]()
        if self.config.enable_metrics:
            self.metrics['phase_ms'][step.id] = int((time.perf_counter() - started) * 1000)

    def advance(self) -> Optional[StepProgress]:
        """Announce and run the next stage. Returns its progress record, or ``None`` when already done."""
        if self._finished:
            return None
        snapshot = self._announce()
        self._run_current()
        return snapshot

    def iter_steps(self) -> Iterator[StepProgress]:
        """Yield each stage's progress record before running it; resuming runs the stage."""
        while not self._finished:
            snapshot = self._announce()
            yield snapshot
            self._run_current()

    def generate(self) -> Map:
        while not self._finished:
            self.advance()
        return self.map

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------
    def _build_map(self) -> None:
        placement = place_rooms(self.map_area, self.config, self.rng)
        self.map = Map(self.map_area, build_empty_tiles(self.map_area), placement.rooms, {})
        if self.config.enable_metrics:
            doors = sum(len(r.doors) for r in placement.rooms)
            self.metrics['rooms'] = len(placement.rooms)
            self.metrics['doors'] = doors
            self.metrics['door_shortfall'] = placement.doors_requested - doors
            self.metrics['placement_attempts'] += placement.attempts
            self.metrics['size_rejections'] += placement.size_rejections
            self.metrics['area_usage_pct'] = placement.area_usage_pct

    def _select_entry_exit(self) -> None:
        regenerations = 0
        while True:
            try:
                chosen = select_entry_and_exit(self.map, self.rng, self.config.max_entry_exit_attempts)
                break
            except EntryExitSelectionError as exc:
                if regenerations >= self.config.max_regenerations:
                    self.log.error(event="entry_exit_failed", regenerations=regenerations, rooms=exc.room_count)
                    raise GenerationError(
                        f"could not place entry and exit after {regenerations} regenerations"
                    ) from exc
                regenerations += 1
                self.log.warn(event="regenerating_rooms", attempt=regenerations, rooms=exc.room_count)
                self._build_map()
        if self.config.enable_metrics:
            self.metrics['regenerations'] = regenerations
            self.metrics['entry_exit_attempts'] = chosen.attempts

    def _render_rooms(self) -> None:
        self.map.render_rooms()

    def _populate_containers(self) -> None:
        stats = populate_containers(self.map, self.container_factory, self.config.max_chests_per_room, self.rng)
        if self.config.enable_metrics:
            self.metrics['containers_floor'] = stats.floors
            self.metrics['containers_chests'] = stats.chests
            self.metrics['chests_nested'] = stats.nested

    def _connect_rooms(self) -> None:
        stats = connect_rooms(self.map)
        if self.config.enable_metrics:
            self.metrics['corridor_links'] = stats.links
            self.metrics['corridors_carved'] = stats.carved
            self.metrics['paths_failed'] = stats.failed
            self.metrics['links_skipped'] = stats.skipped

    def _complete(self) -> None:
        self._finished = True
        if self.config.enable_metrics:
            self.metrics['runtime_ms'] = int((time.perf_counter() - self._started_at) * 1000)
        self.log.info(event="map_generated", rooms=len(self.map.rooms), area=self.map_area.get_description())


def generate_map(
    map_area: Area,
    seed: int | None = None,
    config: GeneratorConfig | None = None,
    channel: Any = None,
    container_factory: ContainerFactory | None = None,
) -> Map:
    if config is None:
        config = GeneratorConfig.from_env(seed=seed)
    elif seed is not None:
        config = replace(config, seed=seed)
    return MapGenerator(map_area, config, channel=channel, container_factory=container_factory).generate()


__all__ = ["STEPS", "MapGenerator", "generate_map"]
