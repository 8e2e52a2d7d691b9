"""Shared fixtures: a Qt core application and fake collaborators."""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pytest
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session", autouse=True)
def qapp() -> QCoreApplication:
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


class FakeGrid:
    """Records every call the core makes on the puzzle grid."""

    def __init__(self) -> None:
        self.calls: List[Tuple] = []
        self.visible = False
        self.solved = False
        self.solved_queries = 0
        self.on_queen_placed: Optional[Callable[[], None]] = None
        self.on_invalid_placement: Optional[Callable[[], None]] = None

    def construct(self, position, grid_size, regions, target_surface_id) -> None:
        self.calls.append(("construct", position, grid_size, regions, target_surface_id))

    def show(self) -> None:
        self.calls.append(("show",))
        self.visible = True

    def hide(self) -> None:
        self.calls.append(("hide",))
        self.visible = False

    def reset(self) -> None:
        self.calls.append(("reset",))
        self.solved = False

    def is_solved(self) -> bool:
        self.solved_queries += 1
        return self.solved

    def set_on_queen_placed(self, callback: Callable[[], None]) -> None:
        self.on_queen_placed = callback

    def set_on_invalid_placement(self, callback: Callable[[], None]) -> None:
        self.on_invalid_placement = callback

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]


class FakeEnvironment:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, str, str]] = []

    def apply_ambience(self, altar_id: str, ambience: str) -> None:
        self.calls.append(("apply", altar_id, ambience))

    def restore_ambience(self, altar_id: str, ambience: str) -> None:
        self.calls.append(("restore", altar_id, ambience))


def write_catalog(path: Path, level_ids: List[str], grid_size: int = 5) -> Path:
    regions = [[row] * grid_size for row in range(grid_size)]
    payload = [{"id": level_id, "gridSize": grid_size, "regions": regions} for level_id in level_ids]
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture()
def grid() -> FakeGrid:
    return FakeGrid()


@pytest.fixture()
def environment() -> FakeEnvironment:
    return FakeEnvironment()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def catalog_path(tmp_path: Path) -> Path:
    return write_catalog(tmp_path / "levels.json", ["L1", "L2", "L3"])


@pytest.fixture()
def progress_path(tmp_path: Path) -> Path:
    return tmp_path / "progress" / "progress.json"
