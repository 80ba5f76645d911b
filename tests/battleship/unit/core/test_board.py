import random

import numpy as np
import pytest

from battleship.game.core.board import Board
from battleship.game.core.errors import PlacementError, PlacementFailure, ShotError, ShotRejection
from battleship.game.core.models import CellState, Coord, ShotResult
from battleship.game.core.placement import random_board
from battleship.game.core.ships import TEMPLATES, PlacedShip, Rotation, ShipKind
from tests.battleship.conftest import FIGHTER_CELLS, SCOUT_CELLS, make_board


def _ship(ship_id: int, kind: ShipKind, anchor: Coord, rotation: Rotation = Rotation.R0) -> PlacedShip:
    return PlacedShip.from_template(ship_id, TEMPLATES[kind], anchor, rotation)


def test_new_board_is_empty() -> None:
    board = Board(10)
    assert np.all(board.grid() == CellState.EMPTY)
    assert board.ships == ()
    assert not board.all_sunk()


def test_board_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        Board(0)


def test_place_rejects_out_of_bounds_without_changes() -> None:
    board = Board(10)
    with pytest.raises(PlacementError) as excinfo:
        board.place(_ship(1, ShipKind.CARRIER, Coord(8, 8)))
    assert excinfo.value.reason is PlacementFailure.OUT_OF_BOUNDS
    assert np.all(board.grid() == CellState.EMPTY)
    assert board.ships == ()


def test_place_rejects_overlap_without_changes() -> None:
    board = Board(10)
    board.place(_ship(1, ShipKind.FIGHTER, Coord(0, 0)))
    before = board.grid()
    with pytest.raises(PlacementError) as excinfo:
        board.place(_ship(2, ShipKind.SCOUT, Coord(0, 0), Rotation.R90))
    assert excinfo.value.reason is PlacementFailure.OVERLAP
    assert excinfo.value.cell == Coord(1, 1)
    assert np.array_equal(board.grid(), before)
    assert len(board.ships) == 1


def test_place_rejects_reused_ship_id() -> None:
    board = Board(10)
    board.place(_ship(1, ShipKind.SCOUT, Coord(0, 0)))
    with pytest.raises(ValueError):
        board.place(_ship(1, ShipKind.SCOUT, Coord(5, 5)))


def test_pattern_boxes_may_overlap_when_cells_do_not() -> None:
    board = Board(10)
    board.place(_ship(1, ShipKind.SCOUT, Coord(0, 0)))
    board.place(_ship(2, ShipKind.FIGHTER, Coord(0, 2)))
    assert board.ships_afloat() == 2
    assert board.ship_at(Coord(1, 1)) is board.ship(1)
    assert board.ship_at(Coord(1, 3)) is board.ship(2)
    assert board.ship_at(Coord(1, 2)) is None


def test_record_shot_miss_hit_sunk(fixed_board: Board) -> None:
    miss = fixed_board.record_shot(Coord(9, 9))
    assert miss.result is ShotResult.MISS
    assert fixed_board.state_at(Coord(9, 9)) is CellState.MISS

    first, second = SCOUT_CELLS[:2]
    assert fixed_board.record_shot(first).result is ShotResult.HIT
    hit = fixed_board.record_shot(second)
    assert hit.result is ShotResult.HIT
    assert hit.ship_id == 4
    assert fixed_board.state_at(second) is CellState.HIT

    sunk = fixed_board.record_shot(SCOUT_CELLS[2])
    assert sunk.result is ShotResult.SUNK
    assert sunk.ship_id == 4
    assert sunk.ship_kind is ShipKind.SCOUT
    assert sunk.sunk_cells == SCOUT_CELLS
    assert all(fixed_board.state_at(cell) is CellState.SUNK for cell in SCOUT_CELLS)
    assert fixed_board.ships_sunk() == 1
    assert fixed_board.ships_afloat() == 3


def test_record_shot_rejects_repeat_and_out_of_bounds(fixed_board: Board) -> None:
    fixed_board.record_shot(FIGHTER_CELLS[0])
    before = fixed_board.grid()
    with pytest.raises(ShotError) as excinfo:
        fixed_board.record_shot(FIGHTER_CELLS[0])
    assert excinfo.value.reason is ShotRejection.ALREADY_SHOT
    assert fixed_board.ship(1).hits == 1
    assert np.array_equal(fixed_board.grid(), before)

    with pytest.raises(ShotError) as excinfo:
        fixed_board.record_shot(Coord(-1, 3))
    assert excinfo.value.reason is ShotRejection.OUT_OF_BOUNDS


def test_sunk_cells_cannot_be_shot_again(fixed_board: Board) -> None:
    for cell in SCOUT_CELLS:
        fixed_board.record_shot(cell)
    with pytest.raises(ShotError):
        fixed_board.record_shot(SCOUT_CELLS[0])


def test_all_sunk_tracks_every_ship_over_random_fire() -> None:
    rng = random.Random(5)
    board = random_board(rng)
    cells = [Coord(r, c) for r in range(10) for c in range(10)]
    rng.shuffle(cells)
    for cell in cells:
        board.record_shot(cell)
        expected = all(ship.hits == ship.size for ship in board.ships)
        assert board.all_sunk() is expected
    assert board.all_sunk()


def test_observed_grid_hides_unshot_ships(fixed_board: Board) -> None:
    fixed_board.record_shot(FIGHTER_CELLS[0])
    fixed_board.record_shot(Coord(9, 9))
    observed = fixed_board.observed_grid()
    assert not observed.flags.writeable
    assert not np.any(observed == CellState.OCCUPIED)
    assert observed[0, 0] == CellState.HIT
    assert observed[9, 9] == CellState.MISS
    assert fixed_board.shots_fired() == 2


def test_as_rows_renders_symbols() -> None:
    board = make_board([(ShipKind.SCOUT, Coord(0, 0), Rotation.R90)], size=3)
    board.record_shot(Coord(1, 0))
    board.record_shot(Coord(0, 0))
    assert board.as_rows() == ["-..", "X**", "..."]
    assert board.as_rows(reveal=False) == ["-..", "X..", "..."]
    assert str(board) == "-..\nX**\n..."
