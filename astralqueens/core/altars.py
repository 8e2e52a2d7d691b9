from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from astralqueens.core.errors import DuplicateAltarError, NotFoundError

Position = Tuple[float, float, float]


@dataclass(frozen=True)
class AltarConfig:
    """Setup-time description of an altar."""

    position: Position = (0.0, 0.0, 0.0)
    grid_position: Position = (0.0, 0.0, 0.0)
    target_surface_id: str = ""
    ambience: Optional[str] = None
    solved: bool = False


@dataclass
class Altar:
    id: str
    config: AltarConfig = field(default_factory=AltarConfig)
    solved: bool = False
    bound_level_id: Optional[str] = None

    @property
    def is_bound(self) -> bool:
        return self.bound_level_id is not None


class AltarRegistry:
    """The fixed set of altars for a session, keyed by id."""

    def __init__(self) -> None:
        self._altars: Dict[str, Altar] = {}

    def __len__(self) -> int:
        return len(self._altars)

    def __contains__(self, altar_id: object) -> bool:
        return altar_id in self._altars

    def __iter__(self) -> Iterator[Altar]:
        return iter(self._altars.values())

    def register(self, altar_id: str, config: Optional[AltarConfig] = None) -> Altar:
        if altar_id in self._altars:
            raise DuplicateAltarError(altar_id)
        config = config or AltarConfig()
        altar = Altar(id=altar_id, config=config, solved=config.solved)
        self._altars[altar_id] = altar
        return altar

    def exists(self, altar_id: str) -> bool:
        return altar_id in self._altars

    def get(self, altar_id: str) -> Altar:
        try:
            return self._altars[altar_id]
        except KeyError:
            raise NotFoundError(altar_id) from None

    def all(self) -> List[Altar]:
        return list(self._altars.values())

    def ids(self) -> List[str]:
        return list(self._altars)

    def is_solved(self, altar_id: str) -> bool:
        return self.get(altar_id).solved

    def bind(self, altar_id: str, level_id: str) -> None:
        self.get(altar_id).bound_level_id = level_id

    def unbind(self, altar_id: str) -> None:
        self.get(altar_id).bound_level_id = None

    def mark_solved(self, altar_id: str) -> None:
        # solved only ever goes false -> true
        self.get(altar_id).solved = True

    def solved_count(self) -> int:
        return sum(1 for altar in self._altars.values() if altar.solved)

    def bound_altars(self) -> List[Altar]:
        return [altar for altar in self._altars.values() if altar.is_bound]

    def nearest(self, position: Position, max_distance: float) -> Optional[str]:
        """Id of the closest altar strictly within ``max_distance`` of ``position``."""
        closest_id: Optional[str] = None
        closest_distance = max_distance
        for altar in self._altars.values():
            distance = math.dist(altar.config.position, position)
            if distance < closest_distance:
                closest_distance = distance
                closest_id = altar.id
        return closest_id
