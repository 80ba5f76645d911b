"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from battleship.game.core.ships import ShipKind

BOARD_SIZE = 10


class CellState(IntEnum):
    """Per-cell board status, stored as numpy int8 codes."""

    EMPTY = 0
    OCCUPIED = 1
    MISS = 2
    HIT = 3
    SUNK = 4

    @property
    def symbol(self) -> str:
        return CELL_SYMBOLS[self]

    @property
    def was_shot(self) -> bool:
        return self in (CellState.MISS, CellState.HIT, CellState.SUNK)


CELL_SYMBOLS: dict[CellState, str] = {
    CellState.EMPTY: ".",
    CellState.OCCUPIED: "*",
    CellState.MISS: "-",
    CellState.HIT: "X",
    CellState.SUNK: "K",
}


class ShotResult(StrEnum):
    """Result of a single accepted shot."""

    MISS = "MISS"
    HIT = "HIT"
    SUNK = "SUNK"


class Side(StrEnum):
    """Game participant."""

    HUMAN = "HUMAN"
    COMPUTER = "COMPUTER"

    @property
    def opponent(self) -> Side:
        return Side.COMPUTER if self is Side.HUMAN else Side.HUMAN

    @classmethod
    def parse(cls, raw: str | Side) -> Side:
        return _parse_choice(cls, raw, aliases={"PLAYER": "HUMAN", "AI": "COMPUTER", "BOT": "COMPUTER"})


class RuleVariant(StrEnum):
    """Salvo-count rule selected at game start."""

    DEFAULT = "DEFAULT"
    FURY = "FURY"
    CHARGE = "CHARGE"

    @classmethod
    def parse(cls, raw: str | RuleVariant) -> RuleVariant:
        return _parse_choice(cls, raw, aliases={"SUPERCHARGE": "FURY", "DESPERATION": "CHARGE"})


class Difficulty(StrEnum):
    """Computer opponent tier."""

    EASY = "EASY"
    HARD = "HARD"

    @classmethod
    def parse(cls, raw: str | Difficulty) -> Difficulty:
        return _parse_choice(cls, raw, aliases={})


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.row < size and 0 <= self.col < size

    def neighbors(self) -> tuple[Coord, Coord, Coord, Coord]:
        """Orthogonal neighbours, unchecked against any board size."""
        return (
            Coord(self.row - 1, self.col),
            Coord(self.row + 1, self.col),
            Coord(self.row, self.col - 1),
            Coord(self.row, self.col + 1),
        )

    @classmethod
    def of(cls, value: Coord | tuple[int, int]) -> Coord:
        if isinstance(value, Coord):
            return value
        row, col = value
        return cls(int(row), int(col))


@dataclass(frozen=True, slots=True)
class ShotOutcome:
    """Accepted shot and what it revealed."""

    cell: Coord
    result: ShotResult
    ship_id: int | None = None
    ship_kind: ShipKind | None = None
    sunk_cells: tuple[Coord, ...] = ()

    @property
    def is_hit(self) -> bool:
        return self.result is not ShotResult.MISS


@dataclass(frozen=True, slots=True)
class SalvoContext:
    """Read-only counts handed to a salvo rule at the start of a turn."""

    ships_alive: int
    ships_sunk: int


E = TypeVar("E", bound=StrEnum)


def _parse_choice(enum_type: type[E], raw: str | E, *, aliases: dict[str, str]) -> E:
    if isinstance(raw, enum_type):
        return raw
    key = str(raw).strip().upper()
    key = aliases.get(key, key)
    try:
        return enum_type(key)
    except ValueError:
        choices = ", ".join(member.value.lower() for member in enum_type)
        raise ValueError(f"Unknown {enum_type.__name__} '{raw}'. Expected one of: {choices}.") from None
