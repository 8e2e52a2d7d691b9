from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Set

from astralqueens.core.errors import PersistenceFailure

logger = logging.getLogger(__name__)

SOLVED_KEY = "solvedLevelIds"


def default_progress_path() -> Path:
    return Path.home() / ".astralqueens" / "progress.json"


class ProgressStore:
    """Stores the set of solved level ids. Persists to disk across sessions.
    File: ~/.astralqueens/progress.json, holding {"solvedLevelIds": [...]}.
    Cleared only by an explicit reset."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = Path(file_path) if file_path is not None else default_progress_path()
        self._solved: Set[str] = self._read()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def solved_count(self) -> int:
        return len(self._solved)

    def load(self) -> Set[str]:
        """Return every solved level id: what is on disk plus what this session solved.

        The in-memory half keeps progress alive when a write failed earlier.
        """
        self._solved |= self._read()
        return set(self._solved)

    def is_solved(self, level_id: str) -> bool:
        return level_id in self._solved

    def mark_solved(self, level_id: str) -> bool:
        """Record a first-time solve. Returns False (and writes nothing) for repeats."""
        if level_id in self._solved:
            return False
        self._solved.add(level_id)
        self._save()
        logger.info("Level %s marked as solved (%d total)", level_id, len(self._solved))
        return True

    def reset(self) -> None:
        """Clear all progress. Debug and test use only."""
        self._solved = set()
        try:
            self._file_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove progress file %s: %s", self._file_path, e)
            try:
                self._write([])
            except PersistenceFailure as write_error:
                logger.warning("%s; progress on disk was not cleared", write_error)
                return
        logger.info("Progress cleared")

    def _read(self) -> Set[str]:
        if not self._file_path.exists():
            return set()
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Could not load progress from %s: %s", self._file_path, e)
            return set()

        if not isinstance(payload, dict):
            logger.warning("Ignoring progress in %s: expected a JSON object", self._file_path)
            return set()
        ids = payload.get(SOLVED_KEY, [])
        if not isinstance(ids, list):
            logger.warning("Ignoring progress in %s: '%s' is not a list", self._file_path, SOLVED_KEY)
            return set()
        return {str(level_id) for level_id in ids if isinstance(level_id, str) and level_id}

    def _save(self) -> None:
        try:
            self._write(sorted(self._solved))
        except PersistenceFailure as e:
            logger.warning("%s; progress kept in memory for this session", e)

    def _write(self, ids: List[str]) -> None:
        payload = json.dumps({SOLVED_KEY: ids}, indent=2)
        tmp_name = None
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=self._file_path.name, suffix=".tmp", dir=str(self._file_path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._file_path)
        except OSError as e:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
            raise PersistenceFailure(f"Could not save progress to {self._file_path}: {e}") from e
