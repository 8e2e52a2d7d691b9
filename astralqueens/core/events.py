"""Qt signals emitted by the altar core for camera, UI and audio listeners."""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal


class AltarEvents(QObject):
    """Notification sinks. Any number of slots may be connected to each signal."""

    altar_activated = Signal(str)
    puzzle_solved = Signal(str, str)
    focus_returned = Signal(str)
    move_recorded = Signal(int)
    invalid_placement = Signal()
    game_completed = Signal(int)
