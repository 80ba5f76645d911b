"""Public engine surface for the terminal front end."""

from __future__ import annotations

from battleship.game.app.game import Game
from battleship.game.app.snapshot import GameSnapshot, take_snapshot
from battleship.game.core.models import BOARD_SIZE, Coord, Difficulty, RuleVariant, ShotOutcome, Side


def new_game(
    board_size: int = BOARD_SIZE,
    salvo_rule_variant: RuleVariant | str = RuleVariant.DEFAULT,
    difficulty: Difficulty | str = Difficulty.EASY,
    who_first: Side | str = Side.HUMAN,
    seed: int | None = None,
) -> Game:
    """Create a game with both fleets placed.

    Raises ``SetupError`` when the fleets cannot be placed, ``ValueError`` for
    unknown rule, difficulty or side names.
    """
    return Game.start(
        salvo_rule_variant,
        difficulty,
        who_first,
        size=board_size,
        seed=seed,
    )


def human_shot(game: Game, cell: Coord | tuple[int, int]) -> ShotOutcome:
    """Fire one human shot. Raises ``ShotError`` without changing the game."""
    return game.human_shot(cell)


def computer_take_turn(game: Game) -> tuple[ShotOutcome, ...]:
    """Fire the computer's whole salvo and return its shots in order."""
    return game.computer_take_turn()


def snapshot(game: Game) -> GameSnapshot:
    return take_snapshot(game)
