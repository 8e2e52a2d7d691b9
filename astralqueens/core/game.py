"""Wires the altar core together and drives it from a Qt timer."""

from __future__ import annotations

import logging
import random
from typing import Dict, Mapping, Optional

from PySide6.QtCore import QTimer

from astralqueens.core.activation import ActivationController, ActivationResult
from astralqueens.core.altars import AltarConfig, AltarRegistry, Position
from astralqueens.core.completion import CompletionMonitor
from astralqueens.core.config import GameSettings
from astralqueens.core.events import AltarEvents
from astralqueens.core.grid import Environment, PlacementHooks, PuzzleGrid
from astralqueens.core.levels import LevelPool
from astralqueens.core.progress import ProgressStore
from astralqueens.core.session import PuzzleSession

logger = logging.getLogger(__name__)


class AltarGame:
    def __init__(
        self,
        grid: PuzzleGrid,
        settings: Optional[GameSettings] = None,
        environment: Optional[Environment] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._settings = settings or GameSettings()
        self._grid = grid
        self.events = AltarEvents()
        self.progress = ProgressStore(self._settings.progress_path)
        self.pool = LevelPool(self._settings.catalog_path, rng=rng)
        self.registry = AltarRegistry()
        self.controller = ActivationController(
            self.registry,
            self.pool,
            self.progress,
            grid,
            events=self.events,
            environment=environment,
        )
        self.monitor = CompletionMonitor(self.controller, grid)
        self.session = PuzzleSession(total_altars=0)
        self._completed = False
        self._timer: Optional[QTimer] = None

        self.events.altar_activated.connect(self._on_altar_activated)
        self.events.puzzle_solved.connect(self._on_puzzle_solved)
        self.events.focus_returned.connect(self._on_focus_returned)
        self._attach_placement_hooks(grid)

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def is_completed(self) -> bool:
        return self._completed

    @property
    def is_running(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def setup_altars(self, count: Optional[int] = None, ambience: Optional[Mapping[str, str]] = None) -> None:
        """Register altar_1..altar_N, each drawing its grid on IslandPlatform_N."""
        count = self._settings.altar_count if count is None else count
        ambience = ambience or {}
        configs: Dict[str, AltarConfig] = {}
        for i in range(1, count + 1):
            altar_id = f"altar_{i}"
            configs[altar_id] = AltarConfig(
                target_surface_id=f"IslandPlatform_{i}",
                ambience=ambience.get(altar_id),
            )
        self.setup_altars_from(configs)

    def setup_altars_from(self, configs: Mapping[str, AltarConfig]) -> None:
        for altar_id, config in configs.items():
            self.registry.register(altar_id, config)
        self.session = PuzzleSession(
            total_altars=len(self.registry),
            solved_altars=self.registry.solved_count(),
        )
        logger.info("Registered %d altars", len(self.registry))

    def activate(self, altar_id: str) -> ActivationResult:
        result = self.controller.activate(altar_id)
        self._check_exhausted(result)
        return result

    def deactivate(self) -> None:
        self.controller.deactivate()

    def interact(self, position: Position) -> Optional[ActivationResult]:
        """Activate the altar nearest to ``position``, if one is within reach."""
        altar_id = self.registry.nearest(position, self._settings.interaction_distance)
        if altar_id is None:
            return None
        return self.activate(altar_id)

    def tick(self) -> bool:
        """One frame: retry a deferred activation, then check for a solve."""
        retried = self.controller.retry_pending()
        if retried is not None:
            self._check_exhausted(retried)
        return self.monitor.tick()

    def start(self) -> None:
        self.pool.load_catalog_async()
        if self._timer is None:
            self._timer = QTimer()
            self._timer.timeout.connect(self.tick)
        self._timer.start(self._settings.tick_interval_ms)

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.stop()

    def reset_progress(self) -> None:
        self.progress.reset()

    def _attach_placement_hooks(self, grid: PuzzleGrid) -> None:
        if isinstance(grid, PlacementHooks):
            grid.set_on_queen_placed(self._on_queen_placed)
            grid.set_on_invalid_placement(self.events.invalid_placement.emit)

    def _on_queen_placed(self) -> None:
        self.events.move_recorded.emit(self.session.record_move())

    def _on_altar_activated(self, altar_id: str) -> None:
        binding = self.controller.active
        if binding is not None and binding.altar_id == altar_id:
            self.session.begin_puzzle(altar_id, binding.level_id)

    def _on_puzzle_solved(self, altar_id: str, level_id: str) -> None:
        result = self.session.complete_puzzle()
        if result is not None:
            logger.info(
                "Level %s on altar %s solved in %d moves (%.0fs)",
                result.level_id,
                result.altar_id,
                result.moves,
                result.seconds,
            )
        if self.session.is_complete():
            self._complete_game()

    def _on_focus_returned(self, altar_id: str) -> None:
        if self.session.current_altar_id == altar_id:
            self.session.abandon_puzzle()

    def _check_exhausted(self, result: ActivationResult) -> None:
        if result is ActivationResult.POOL_EXHAUSTED:
            self._complete_game()

    def _complete_game(self) -> None:
        if self._completed:
            return
        self._completed = True
        logger.info("Game completed! %d moves in total", self.session.total_moves)
        self.events.game_completed.emit(self.session.total_moves)
