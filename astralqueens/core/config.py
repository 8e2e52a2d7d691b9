from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from astralqueens.core.progress import default_progress_path

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ASTRALQUEENS_CONFIG"


def default_config_path() -> Path:
    return Path.home() / ".astralqueens" / "config.yaml"


@dataclass
class GameSettings:
    progress_path: Path = field(default_factory=default_progress_path)
    # None means the catalog bundled with the package
    catalog_path: Optional[Path] = None
    altar_count: int = 5
    tick_interval_ms: int = 16
    interaction_distance: float = 3.0


_CONVERTERS = {
    "progress_path": lambda v: Path(v).expanduser(),
    "catalog_path": lambda v: Path(v).expanduser() if v is not None else None,
    "altar_count": int,
    "tick_interval_ms": int,
    "interaction_distance": float,
}


def load_settings(path: Optional[Path] = None) -> GameSettings:
    """Read settings from YAML. Missing or broken files fall back to defaults."""
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        path = Path(env_path) if env_path else default_config_path()
    settings = GameSettings()
    if not path.exists():
        return settings
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
        logger.warning("Could not load settings from %s: %s", path, e)
        return settings
    if raw is None:
        return settings
    if not isinstance(raw, dict):
        logger.warning("Ignoring settings in %s: expected a mapping", path)
        return settings
    return _apply(settings, raw, path)


def _apply(settings: GameSettings, raw: Dict[str, Any], path: Path) -> GameSettings:
    known = {f.name for f in fields(GameSettings)}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Unknown setting '%s' in %s", key, path)
            continue
        try:
            setattr(settings, key, _CONVERTERS[key](value))
        except (TypeError, ValueError) as e:
            logger.warning("Invalid value for '%s' in %s: %s", key, path, e)
    if settings.altar_count < 0:
        logger.warning("altar_count must not be negative, using 0")
        settings.altar_count = 0
    if settings.tick_interval_ms <= 0:
        logger.warning("tick_interval_ms must be positive, using 16")
        settings.tick_interval_ms = 16
    return settings
