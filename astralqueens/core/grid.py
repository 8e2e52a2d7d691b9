"""Contracts for the external collaborators driven by the altar core.

The puzzle grid (rendering plus the queen-placement rules) and the scene
environment live outside this package. The core only talks to them through
the protocols below.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from astralqueens.core.altars import Position


class PuzzleGrid(Protocol):
    def construct(self, position: Position, grid_size: Any, regions: Any, target_surface_id: str) -> None:
        ...

    def show(self) -> None:
        ...

    def hide(self) -> None:
        ...

    def reset(self) -> None:
        ...

    def is_solved(self) -> bool:
        ...


@runtime_checkable
class PlacementHooks(Protocol):
    """Optional hooks a grid may offer for placement feedback."""

    def set_on_queen_placed(self, callback: Callable[[], None]) -> None:
        ...

    def set_on_invalid_placement(self, callback: Callable[[], None]) -> None:
        ...


class Environment(Protocol):
    """Applies and restores altar-specific scene effects (lighting and the like)."""

    def apply_ambience(self, altar_id: str, ambience: str) -> None:
        ...

    def restore_ambience(self, altar_id: str, ambience: str) -> None:
        ...
