"""Error types raised by the altar core."""

from __future__ import annotations


class AltarError(Exception):
    """Base class for altar core errors."""


class DuplicateAltarError(AltarError):
    """An altar id was registered twice."""

    def __init__(self, altar_id: str) -> None:
        super().__init__(f"Altar already registered: {altar_id}")
        self.altar_id = altar_id


class NotFoundError(AltarError, KeyError):
    """Lookup on an altar id that was never registered."""

    def __init__(self, altar_id: str) -> None:
        super().__init__(f"Unknown altar: {altar_id}")
        self.altar_id = altar_id

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class CatalogLoadFailure(AltarError):
    """The level catalog could not be read or did not match the schema."""


class PersistenceFailure(AltarError):
    """Progress could not be written to disk."""
