from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional


@dataclass
class PuzzleResult:
    """Result of a single solved altar puzzle."""

    altar_id: str
    level_id: str
    moves: int
    seconds: float


class PuzzleSession:
    """Tracks play across the altars of one session.

    Counts queen placements for the puzzle in progress and for the whole
    session, and knows when every altar has been solved. Abandoning a puzzle
    keeps its moves in the session total but starts the next puzzle at zero.
    """

    def __init__(self, total_altars: int, solved_altars: int = 0) -> None:
        """Initialize a session over ``total_altars``, some of which may already be solved."""
        self._total_altars = total_altars
        self._solved_altars = solved_altars
        self._start_time = time.time()
        self._puzzle_start: Optional[float] = None
        self._current_altar_id: Optional[str] = None
        self._current_level_id: Optional[str] = None
        self._current_moves = 0
        self._total_moves = 0

    @property
    def start_time(self) -> float:
        """Unix timestamp when the session started."""
        return self._start_time

    @property
    def total_altars(self) -> int:
        return self._total_altars

    @property
    def solved_altars(self) -> int:
        """Number of altars solved so far, including ones solved before the session."""
        return self._solved_altars

    @property
    def current_altar_id(self) -> Optional[str]:
        """Altar whose puzzle is in progress, or None."""
        return self._current_altar_id

    @property
    def current_moves(self) -> int:
        return self._current_moves

    @property
    def total_moves(self) -> int:
        return self._total_moves

    def begin_puzzle(self, altar_id: str, level_id: str) -> None:
        self._current_altar_id = altar_id
        self._current_level_id = level_id
        self._current_moves = 0
        self._puzzle_start = time.time()

    def record_move(self) -> int:
        """Count one queen placement; returns the session total."""
        self._current_moves += 1
        self._total_moves += 1
        return self._total_moves

    def abandon_puzzle(self) -> None:
        self._current_altar_id = None
        self._current_level_id = None
        self._current_moves = 0
        self._puzzle_start = None

    def complete_puzzle(self) -> Optional[PuzzleResult]:
        """Close the puzzle in progress as solved. Returns None if none was in progress."""
        if self._current_altar_id is None or self._current_level_id is None:
            return None
        started = self._puzzle_start if self._puzzle_start is not None else time.time()
        result = PuzzleResult(
            altar_id=self._current_altar_id,
            level_id=self._current_level_id,
            moves=self._current_moves,
            seconds=max(0.0, time.time() - started),
        )
        self._solved_altars = min(self._solved_altars + 1, self._total_altars)
        self.abandon_puzzle()
        return result

    def is_complete(self) -> bool:
        """Return True once every altar has been solved."""
        return self._total_altars > 0 and self._solved_altars >= self._total_altars

    def elapsed_seconds(self) -> float:
        return max(0.0, time.time() - self._start_time)
