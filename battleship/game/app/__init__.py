"""Public engine API for front ends."""

from battleship.game.app.api import computer_take_turn, human_shot, new_game, snapshot
from battleship.game.app.game import Game, ShotRecord
from battleship.game.app.snapshot import GameSnapshot, ShipReport

__all__ = [
    "Game",
    "GameSnapshot",
    "ShipReport",
    "ShotRecord",
    "computer_take_turn",
    "human_shot",
    "new_game",
    "snapshot",
]
