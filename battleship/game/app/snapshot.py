"""Read-only projections of a game for rendering layers."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from battleship.game.app.game import Game
from battleship.game.core.models import Coord, Difficulty, RuleVariant, Side
from battleship.game.core.ships import PlacedShip, ShipKind
from battleship.game.core.turns import TurnState


@dataclass(frozen=True, slots=True)
class ShipReport:
    """Per-ship status. ``cells`` is empty for enemy ships still afloat."""

    ship_id: int
    kind: ShipKind
    size: int
    hits: int
    sunk: bool
    cells: tuple[Coord, ...] = ()


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Everything a renderer may show, and nothing the human may not see."""

    human_board: np.ndarray
    computer_board: np.ndarray
    turn: TurnState
    rule: RuleVariant
    difficulty: Difficulty
    shots_fired: dict[Side, int]
    ships_afloat: dict[Side, int]
    fleets: dict[Side, tuple[ShipReport, ...]]
    next_salvo: int = 0

    @property
    def shots_remaining(self) -> int:
        """Shots left in the open salvo; 0 between rounds (see ``next_salvo``)."""
        return self.turn.shots_remaining

    @property
    def winner(self) -> Side | None:
        return self.turn.winner


def _report(ship: PlacedShip, *, reveal: bool) -> ShipReport:
    return ShipReport(
        ship_id=ship.ship_id,
        kind=ship.kind,
        size=ship.size,
        hits=ship.hits,
        sunk=ship.sunk,
        cells=ship.cells if reveal or ship.sunk else (),
    )


def take_snapshot(game: Game) -> GameSnapshot:
    """Project ``game`` into a read-only snapshot."""
    human = game.board(Side.HUMAN)
    computer = game.board(Side.COMPUTER)
    return GameSnapshot(
        human_board=human.grid(),
        computer_board=computer.observed_grid(),
        turn=game.turn,
        rule=game.rule.variant,
        difficulty=game.targeter.difficulty,
        # Shots are counted on the board they landed on.
        shots_fired={Side.HUMAN: computer.shots_fired(), Side.COMPUTER: human.shots_fired()},
        ships_afloat={Side.HUMAN: human.ships_afloat(), Side.COMPUTER: computer.ships_afloat()},
        fleets={
            Side.HUMAN: tuple(_report(ship, reveal=True) for ship in human.ships),
            Side.COMPUTER: tuple(_report(ship, reveal=game.turn.is_over) for ship in computer.ships),
        },
        next_salvo=game.next_salvo,
    )
