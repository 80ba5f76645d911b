from __future__ import annotations

import random
from collections.abc import Iterable

import numpy as np
import pytest

from battleship.game.ai.strategy import Targeter, unshot_cells
from battleship.game.app.game import Game
from battleship.game.core.board import Board
from battleship.game.core.models import Coord, Difficulty, ShotOutcome, Side
from battleship.game.core.salvo import SalvoRule
from battleship.game.core.ships import TEMPLATES, PlacedShip, Rotation, ShipKind

# Fighter (id 1), destroyer (2), carrier (3), scout (4). Rows 7-9 stay empty.
FIXED_FLEET: tuple[tuple[ShipKind, Coord, Rotation], ...] = (
    (ShipKind.FIGHTER, Coord(0, 0), Rotation.R0),
    (ShipKind.DESTROYER, Coord(0, 4), Rotation.R0),
    (ShipKind.CARRIER, Coord(4, 0), Rotation.R0),
    (ShipKind.SCOUT, Coord(4, 4), Rotation.R0),
)

FIGHTER_CELLS = (Coord(0, 0), Coord(0, 2), Coord(1, 1), Coord(2, 0), Coord(2, 2))
SCOUT_CELLS = (Coord(4, 5), Coord(5, 5), Coord(6, 5))


def make_board(
    fleet: Iterable[tuple[ShipKind, Coord, Rotation]] = FIXED_FLEET, size: int = 10
) -> Board:
    board = Board(size)
    for kind, anchor, rotation in fleet:
        board.place(PlacedShip.from_template(board.next_ship_id(), TEMPLATES[kind], anchor, rotation))
    return board


def all_ship_cells(board: Board) -> list[Coord]:
    return [cell for ship in board.ships for cell in ship.cells]


class ScriptedTargeter(Targeter):
    """Fires a fixed list first, then unshot cells from the bottom-right corner backwards."""

    difficulty = Difficulty.EASY

    def __init__(self, script: Iterable[Coord] = ()) -> None:
        self._script = list(script)
        self.notified: list[ShotOutcome] = []

    def choose_shot(self, view: np.ndarray) -> Coord:
        while self._script:
            cell = self._script.pop(0)
            if view[cell.row, cell.col] == 0:
                return cell
        return unshot_cells(view)[-1]

    def notify_result(self, outcome: ShotOutcome) -> None:
        self.notified.append(outcome)


def make_game(
    rule: SalvoRule,
    *,
    first: Side = Side.HUMAN,
    script: Iterable[Coord] = (),
    human_board: Board | None = None,
    computer_board: Board | None = None,
) -> Game:
    return Game(
        human_board=human_board if human_board is not None else make_board(),
        computer_board=computer_board if computer_board is not None else make_board(),
        rule=rule,
        targeter=ScriptedTargeter(script),
        first=first,
        rng=random.Random(0),
    )


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def fixed_board() -> Board:
    return make_board()
