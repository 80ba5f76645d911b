"""Typed failures raised by board setup and combat."""

from __future__ import annotations

from enum import StrEnum

from battleship.game.core.models import Coord


class PlacementFailure(StrEnum):
    OVERLAP = "OVERLAP"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"


class ShotRejection(StrEnum):
    ALREADY_SHOT = "ALREADY_SHOT"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"


class SetupFailure(StrEnum):
    PLACEMENT_EXHAUSTED = "PLACEMENT_EXHAUSTED"


class PlacementError(ValueError):
    """A ship cannot be committed to a board."""

    def __init__(self, reason: PlacementFailure, cell: Coord) -> None:
        super().__init__(f"Invalid placement ({reason.value}) at ({cell.row}, {cell.col}).")
        self.reason = reason
        self.cell = cell


class ShotError(ValueError):
    """Caller supplied a shot the engine rejects. State is left untouched."""

    def __init__(self, reason: ShotRejection, cell: Coord | None = None) -> None:
        where = f" at ({cell.row}, {cell.col})" if cell is not None else ""
        super().__init__(f"Shot rejected ({reason.value}){where}.")
        self.reason = reason
        self.cell = cell


class SetupError(RuntimeError):
    """Fatal failure while building a game; no partial game exists."""

    def __init__(self, reason: SetupFailure, detail: str) -> None:
        super().__init__(f"Game setup failed ({reason.value}): {detail}")
        self.reason = reason
