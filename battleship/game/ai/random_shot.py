"""Easy targeter: uniform random fire."""

from __future__ import annotations

import random

import numpy as np

from battleship.game.ai.strategy import Targeter, pick, unshot_cells
from battleship.game.core.models import Coord, Difficulty


class RandomShotAI(Targeter):
    """Memoryless uniform choice among cells not yet shot."""

    difficulty = Difficulty.EASY

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def choose_shot(self, view: np.ndarray) -> Coord:
        return pick(self._rng, unshot_cells(view))
