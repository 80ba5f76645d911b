"""Targeting strategy interface and selection utilities."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

import numpy as np

from battleship.game.core.models import CellState, Coord, Difficulty, ShotOutcome


class Targeter(ABC):
    """Computer targeting contract.

    ``view`` is the opponent board as the computer observes it (see
    ``Board.observed_grid``): EMPTY means not yet shot, never "no ship".
    """

    difficulty: Difficulty

    @abstractmethod
    def choose_shot(self, view: np.ndarray) -> Coord:
        """Return next coordinate to fire."""

    def notify_result(self, outcome: ShotOutcome) -> None:
        """Update strategy state with shot result."""


def unshot_cells(view: np.ndarray, *, parity_only: bool = False) -> list[Coord]:
    """Row-major list of cells not yet fired at."""
    mask = view == CellState.EMPTY
    if parity_only:
        rows, cols = np.indices(view.shape)
        mask &= (rows + cols) % 2 == 0
    return [Coord(int(row), int(col)) for row, col in np.argwhere(mask)]


def pick(rng: random.Random, cells: list[Coord]) -> Coord:
    if not cells:
        raise ValueError("No unshot cells left to target.")
    return rng.choice(cells)


def build_targeter(difficulty: Difficulty | str, rng: random.Random) -> Targeter:
    """Construct targeting strategy from selected difficulty."""
    from battleship.game.ai.hunt_target import HuntTargetAI
    from battleship.game.ai.random_shot import RandomShotAI

    selected = Difficulty.parse(difficulty)
    if selected is Difficulty.HARD:
        return HuntTargetAI(rng)
    return RandomShotAI(rng)
