"""Tests for astralqueens.core.session – move counting and game progression."""

from __future__ import annotations

import time

from astralqueens.core.session import PuzzleResult, PuzzleSession


# ---------------------------------------------------------------------------
# PuzzleResult dataclass
# ---------------------------------------------------------------------------

class TestPuzzleResult:
    def test_equality(self):
        a = PuzzleResult(altar_id="altar_1", level_id="L1", moves=5, seconds=10.0)
        b = PuzzleResult(altar_id="altar_1", level_id="L1", moves=5, seconds=10.0)
        assert a == b


# ---------------------------------------------------------------------------
# PuzzleSession – properties
# ---------------------------------------------------------------------------

class TestSessionProperties:
    def test_defaults(self):
        s = PuzzleSession(total_altars=5)
        assert s.total_altars == 5
        assert s.solved_altars == 0
        assert s.current_altar_id is None
        assert s.current_moves == 0
        assert s.total_moves == 0

    def test_start_time_is_recent(self):
        before = time.time()
        s = PuzzleSession(3)
        after = time.time()
        assert before <= s.start_time <= after

    def test_elapsed_non_negative(self):
        assert PuzzleSession(1).elapsed_seconds() >= 0.0


# ---------------------------------------------------------------------------
# PuzzleSession – moves
# ---------------------------------------------------------------------------

class TestMoves:
    def test_record_move(self):
        s = PuzzleSession(2)
        s.begin_puzzle("altar_1", "L1")
        assert s.record_move() == 1
        assert s.record_move() == 2
        assert s.current_moves == 2

    def test_begin_resets_current_only(self):
        s = PuzzleSession(2)
        s.begin_puzzle("altar_1", "L1")
        s.record_move()
        s.begin_puzzle("altar_2", "L2")
        assert s.current_moves == 0
        assert s.total_moves == 1

    def test_abandon_keeps_total(self):
        s = PuzzleSession(2)
        s.begin_puzzle("altar_1", "L1")
        s.record_move()
        s.abandon_puzzle()
        assert s.current_altar_id is None
        assert s.current_moves == 0
        assert s.total_moves == 1
        assert s.solved_altars == 0


# ---------------------------------------------------------------------------
# PuzzleSession – completion
# ---------------------------------------------------------------------------

class TestCompletion:
    def test_complete_puzzle(self):
        s = PuzzleSession(2)
        s.begin_puzzle("altar_1", "L1")
        s.record_move()
        s.record_move()
        result = s.complete_puzzle()
        assert result.altar_id == "altar_1"
        assert result.level_id == "L1"
        assert result.moves == 2
        assert result.seconds >= 0.0
        assert s.solved_altars == 1
        assert s.current_altar_id is None

    def test_complete_without_puzzle(self):
        s = PuzzleSession(2)
        assert s.complete_puzzle() is None
        assert s.solved_altars == 0

    def test_is_complete(self):
        s = PuzzleSession(2)
        for altar_id in ("altar_1", "altar_2"):
            assert not s.is_complete()
            s.begin_puzzle(altar_id, f"L-{altar_id}")
            s.complete_puzzle()
        assert s.is_complete()

    def test_presolved_altars_count(self):
        s = PuzzleSession(2, solved_altars=1)
        s.begin_puzzle("altar_2", "L2")
        s.complete_puzzle()
        assert s.is_complete()

    def test_empty_session_never_complete(self):
        assert not PuzzleSession(0).is_complete()

    def test_solved_never_exceeds_total(self):
        s = PuzzleSession(1)
        for _ in range(3):
            s.begin_puzzle("altar_1", "L1")
            s.complete_puzzle()
        assert s.solved_altars == 1
