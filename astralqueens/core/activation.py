"""Altar activation state machine.

At most one altar is active at a time. Activating an altar binds it to a
random unsolved level and asks the grid collaborator to build that level's
puzzle; deactivating tears the puzzle down again without consuming the level.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple, Optional

from astralqueens.core.altars import AltarRegistry
from astralqueens.core.events import AltarEvents
from astralqueens.core.grid import Environment, PuzzleGrid
from astralqueens.core.levels import LevelPool
from astralqueens.core.progress import ProgressStore

logger = logging.getLogger(__name__)


class ActivationResult(str, Enum):
    """Outcome of ``ActivationController.activate``. Truthy only on success."""

    ACTIVATED = "activated"
    UNKNOWN_ALTAR = "unknown_altar"
    ALREADY_SOLVED = "already_solved"
    NOT_LOADED = "not_loaded"
    POOL_EXHAUSTED = "pool_exhausted"
    NO_LEVELS = "no_levels"

    def __bool__(self) -> bool:
        return self is ActivationResult.ACTIVATED

    @property
    def is_retryable(self) -> bool:
        return self is ActivationResult.NOT_LOADED


class ActiveBinding(NamedTuple):
    altar_id: str
    level_id: str


class ActivationController:
    def __init__(
        self,
        registry: AltarRegistry,
        pool: LevelPool,
        progress: ProgressStore,
        grid: PuzzleGrid,
        events: Optional[AltarEvents] = None,
        environment: Optional[Environment] = None,
    ) -> None:
        self._registry = registry
        self._pool = pool
        self._progress = progress
        self._grid = grid
        self._events = events if events is not None else AltarEvents()
        self._environment = environment
        self._active: Optional[ActiveBinding] = None
        self._pending_altar_id: Optional[str] = None

    @property
    def events(self) -> AltarEvents:
        return self._events

    @property
    def active(self) -> Optional[ActiveBinding]:
        """The current (altar_id, level_id) binding, or None when idle."""
        return self._active

    @property
    def is_active(self) -> bool:
        return self._active is not None

    @property
    def active_altar_id(self) -> Optional[str]:
        return self._active.altar_id if self._active else None

    @property
    def pending_altar_id(self) -> Optional[str]:
        """Altar whose activation is waiting for the level catalog to load."""
        return self._pending_altar_id

    def activate(self, altar_id: str) -> ActivationResult:
        self._pending_altar_id = None

        if not self._registry.exists(altar_id):
            logger.error("Altar %s does not exist", altar_id)
            return ActivationResult.UNKNOWN_ALTAR
        if self._registry.is_solved(altar_id):
            logger.info("Altar %s is already solved", altar_id)
            return ActivationResult.ALREADY_SOLVED

        if self._active is not None:
            self.deactivate()

        level = self._pool.pick_unsolved(self._progress.load())
        if level is None:
            if not self._pool.is_loaded:
                logger.info("Levels not loaded yet, altar %s will retry", altar_id)
                self._pending_altar_id = altar_id
                return ActivationResult.NOT_LOADED
            if self._pool.size == 0:
                logger.warning("Level catalog is empty, altar %s cannot be activated", altar_id)
                return ActivationResult.NO_LEVELS
            logger.info("No more levels available")
            return ActivationResult.POOL_EXHAUSTED

        altar = self._registry.get(altar_id)
        self._registry.bind(altar_id, level.id)
        self._active = ActiveBinding(altar_id, level.id)
        logger.info("Selected level %s for altar %s", level.id, altar_id)

        if altar.config.ambience and self._environment is not None:
            self._environment.apply_ambience(altar_id, altar.config.ambience)
        self._grid.construct(
            altar.config.grid_position,
            level.grid_size,
            level.regions,
            altar.config.target_surface_id,
        )
        self._grid.show()
        self._events.altar_activated.emit(altar_id)
        return ActivationResult.ACTIVATED

    def retry_pending(self) -> Optional[ActivationResult]:
        """Re-attempt an activation deferred by NOT_LOADED once the pool is ready.

        Returns None when there is nothing to retry yet.
        """
        if self._pending_altar_id is None or not self._pool.is_loaded:
            return None
        altar_id = self._pending_altar_id
        logger.info("Retrying activation of altar %s", altar_id)
        return self.activate(altar_id)

    def deactivate(self) -> None:
        """Hide the current puzzle and return to idle. Never marks anything solved."""
        self._pending_altar_id = None
        if self._active is None:
            return
        altar_id = self._active.altar_id
        altar = self._registry.get(altar_id)

        self._grid.reset()
        self._grid.hide()
        if altar.config.ambience and self._environment is not None:
            self._environment.restore_ambience(altar_id, altar.config.ambience)
        self._registry.unbind(altar_id)
        self._active = None
        logger.info("Altar %s deactivated", altar_id)
        self._events.focus_returned.emit(altar_id)

    def report_solved(self) -> bool:
        """Record the active puzzle as solved, then deactivate.

        Only meaningful while active; an idle call means the caller polled out
        of order and is logged and ignored.
        """
        if self._active is None:
            logger.error("report_solved called with no active altar")
            return False
        binding = self._active
        altar_id, level_id = binding
        self._progress.mark_solved(level_id)
        self._registry.mark_solved(altar_id)
        logger.info("Altar %s solved with level %s", altar_id, level_id)
        self._events.puzzle_solved.emit(altar_id, level_id)
        # a listener may already have moved on to another altar
        if self._active == binding:
            self.deactivate()
        return True
