from __future__ import annotations

import logging
from typing import Optional

from astralqueens.core.activation import ActivationController, ActiveBinding
from astralqueens.core.grid import PuzzleGrid

logger = logging.getLogger(__name__)


class CompletionMonitor:
    """Polls the grid once per tick and reports a solve exactly once per activation."""

    def __init__(self, controller: ActivationController, grid: PuzzleGrid) -> None:
        self._controller = controller
        self._grid = grid
        self._reported: Optional[ActiveBinding] = None

    def tick(self) -> bool:
        """Return True if this tick detected a solve. The grid is not queried while idle."""
        binding = self._controller.active
        if binding is None:
            self._reported = None
            return False
        if binding == self._reported:
            return False
        if not self._grid.is_solved():
            return False
        self._reported = binding
        logger.info("Puzzle on altar %s solved", binding.altar_id)
        self._controller.report_solved()
        return True
