from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml
from PySide6.QtCore import QThreadPool

from astralqueens.core.errors import CatalogLoadFailure

logger = logging.getLogger(__name__)


def default_catalog_path() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "levels" / "levels.json"


@dataclass(frozen=True)
class Level:
    id: str
    grid_size: int
    regions: List[List[int]]


class LevelPool:
    """Catalog of puzzle levels, loaded once, that hands out unsolved ones at random."""

    def __init__(self, catalog_path: Optional[Path] = None, rng: Optional[random.Random] = None) -> None:
        self._catalog_path = Path(catalog_path) if catalog_path is not None else default_catalog_path()
        self._rng = rng or random.Random()
        self._levels: Dict[str, Level] = {}
        self._loaded = False
        self._loading = False

    @property
    def catalog_path(self) -> Path:
        return self._catalog_path

    @property
    def is_loaded(self) -> bool:
        """False until a load attempt has finished, successful or not."""
        return self._loaded

    @property
    def size(self) -> int:
        return len(self._levels)

    def all(self) -> List[Level]:
        return list(self._levels.values())

    def get(self, level_id: str) -> Level:
        return self._levels[level_id]

    def load_catalog(self) -> List[Level]:
        """Read the catalog. Any failure leaves the pool loaded but empty."""
        try:
            levels = _parse_catalog(self._catalog_path)
        except CatalogLoadFailure as e:
            logger.warning("Failed to load levels: %s", e)
            levels = {}
        self._levels = levels
        self._loaded = True
        self._loading = False
        logger.info("Loaded %d levels from %s", len(levels), self._catalog_path)
        return list(levels.values())

    def load_catalog_async(self) -> None:
        """Start loading on the global Qt thread pool and return immediately."""
        if self._loaded or self._loading:
            return
        self._loading = True
        QThreadPool.globalInstance().start(self.load_catalog)

    def wait_for_load(self, msecs: int = -1) -> bool:
        if self._loaded:
            return True
        QThreadPool.globalInstance().waitForDone(msecs)
        return self._loaded

    def unsolved(self, solved_ids: Iterable[str]) -> List[Level]:
        solved = set(solved_ids)
        return [level for level in self._levels.values() if level.id not in solved]

    def unsolved_count(self, solved_ids: Iterable[str]) -> int:
        return len(self.unsolved(solved_ids))

    def pick_unsolved(self, solved_ids: Iterable[str]) -> Optional[Level]:
        """Pick a random level whose id is not in ``solved_ids``.

        Returns None when the catalog has not finished loading or when every
        level is solved; check ``is_loaded`` to tell the two apart.
        """
        if not self._loaded:
            logger.debug("pick_unsolved called before the catalog finished loading")
            return None
        candidates = self.unsolved(solved_ids)
        logger.debug("Unsolved levels: %d of %d", len(candidates), len(self._levels))
        if not candidates:
            return None
        level = self._rng.choice(candidates)
        logger.debug("Selected random level: %s", level.id)
        return level


def _parse_catalog(path: Path) -> Dict[str, Level]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogLoadFailure(f"cannot read {path}: {e}") from e

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            raw = yaml.safe_load(text)
        else:
            raw = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogLoadFailure(f"{path.name}: {e}") from e

    if isinstance(raw, dict):
        raw = raw.get("levels")
    if not isinstance(raw, list):
        raise CatalogLoadFailure(f"{path.name}: expected a list of levels")

    levels: Dict[str, Level] = {}
    for index, record in enumerate(raw):
        level = _parse_level(record, f"{path.name}[{index}]")
        if level.id in levels:
            raise CatalogLoadFailure(f"{path.name}: duplicate level id '{level.id}'")
        levels[level.id] = level
    return levels


def _parse_level(record: Any, where: str) -> Level:
    if not isinstance(record, dict):
        raise CatalogLoadFailure(f"{where}: expected a mapping")
    level_id = record.get("id")
    if not level_id or not isinstance(level_id, str):
        raise CatalogLoadFailure(f"{where}: missing or invalid 'id'")
    grid_size = record.get("gridSize")
    # bool is an int subclass
    if isinstance(grid_size, bool) or not isinstance(grid_size, int) or grid_size <= 0:
        raise CatalogLoadFailure(f"{where}: missing or invalid 'gridSize'")
    regions = record.get("regions")
    if not isinstance(regions, list) or not all(isinstance(row, list) for row in regions):
        raise CatalogLoadFailure(f"{where}: missing or invalid 'regions'")
    return Level(id=level_id, grid_size=grid_size, regions=regions)
