import logging
import random

import numpy as np
import pytest

from battleship.game.core.board import Board
from battleship.game.core.errors import SetupError, SetupFailure
from battleship.game.core.models import CellState
from battleship.game.core.placement import build_board, place_ship, random_board
from battleship.game.core.ships import DEFAULT_FLEET, TEMPLATES, ShipKind


@pytest.mark.parametrize("seed", range(25))
def test_random_board_places_disjoint_in_bounds_fleet(seed: int) -> None:
    board = random_board(random.Random(seed))
    assert [ship.kind for ship in board.ships] == list(DEFAULT_FLEET)
    cells = [cell for ship in board.ships for cell in ship.cells]
    assert len(cells) == len(set(cells)) == 20
    assert all(board.in_bounds(cell) for cell in cells)
    assert int(np.count_nonzero(board.grid() == CellState.OCCUPIED)) == 20


def test_random_board_is_reproducible_from_seed() -> None:
    first = random_board(random.Random(42))
    second = random_board(random.Random(42))
    assert first.as_rows() == second.as_rows()


def test_place_ship_gives_up_after_bounded_attempts() -> None:
    board = Board(2)
    with pytest.raises(SetupError) as excinfo:
        place_ship(board, TEMPLATES[ShipKind.SCOUT], random.Random(1), max_attempts=50)
    assert excinfo.value.reason is SetupFailure.PLACEMENT_EXHAUSTED
    assert board.ships == ()


def test_five_by_five_cannot_hold_fighter_and_carrier() -> None:
    with pytest.raises(SetupError) as excinfo:
        random_board(random.Random(3), 5)
    assert excinfo.value.reason is SetupFailure.PLACEMENT_EXHAUSTED


def test_build_board_retries_then_raises(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="battleship.game.core.placement"):
        with pytest.raises(SetupError):
            build_board(random.Random(0), 5, retries=3, max_attempts=100)
    retries = [record for record in caplog.records if "board_setup_retry" in record.getMessage()]
    assert len(retries) == 3


def test_build_board_returns_first_success(seeded_rng: random.Random) -> None:
    board = build_board(seeded_rng)
    assert board.ships_afloat() == 4
