"""Board state representation and mutation helpers."""

from __future__ import annotations

import numpy as np

from battleship.game.core.errors import (
    PlacementError,
    PlacementFailure,
    ShotError,
    ShotRejection,
)
from battleship.game.core.models import BOARD_SIZE, CellState, Coord, ShotOutcome, ShotResult
from battleship.game.core.ships import PlacedShip


class Board:
    """Numpy-backed board for one player: cell states, ship owners, and ships."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}.")
        self.size = size
        self._cells = np.full((size, size), CellState.EMPTY, dtype=np.int8)
        self._owners = np.zeros((size, size), dtype=np.int16)
        self._ships: dict[int, PlacedShip] = {}

    @property
    def ships(self) -> tuple[PlacedShip, ...]:
        return tuple(self._ships.values())

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return coord.in_bounds(self.size)

    def state_at(self, coord: Coord) -> CellState:
        return CellState(int(self._cells[coord.row, coord.col]))

    def ship(self, ship_id: int) -> PlacedShip:
        return self._ships[ship_id]

    def ship_at(self, coord: Coord) -> PlacedShip | None:
        ship_id = int(self._owners[coord.row, coord.col])
        return self._ships.get(ship_id)

    def next_ship_id(self) -> int:
        return len(self._ships) + 1

    def check_placement(self, cells: tuple[Coord, ...]) -> PlacementFailure | None:
        """Return why ``cells`` cannot hold a ship, or ``None`` if they can."""
        for cell in cells:
            if not self.in_bounds(cell):
                return PlacementFailure.OUT_OF_BOUNDS
        for cell in cells:
            if self._cells[cell.row, cell.col] != CellState.EMPTY:
                return PlacementFailure.OVERLAP
        return None

    def can_place(self, ship: PlacedShip) -> bool:
        return self.check_placement(ship.cells) is None

    def place(self, ship: PlacedShip) -> None:
        """Commit a ship. Raises ``PlacementError`` and changes nothing on failure."""
        if ship.ship_id in self._ships or ship.ship_id <= 0:
            raise ValueError(f"Ship id {ship.ship_id} is not free on this board.")
        failure = self.check_placement(ship.cells)
        if failure is not None:
            raise PlacementError(failure, self._first_bad_cell(ship.cells, failure))
        for cell in ship.cells:
            self._cells[cell.row, cell.col] = CellState.OCCUPIED
            self._owners[cell.row, cell.col] = ship.ship_id
        self._ships[ship.ship_id] = ship

    def was_shot(self, coord: Coord) -> bool:
        """Return whether this cell was previously targeted."""
        return self.state_at(coord).was_shot

    def record_shot(self, coord: Coord) -> ShotOutcome:
        """Apply a shot and report what it revealed."""
        if not self.in_bounds(coord):
            raise ShotError(ShotRejection.OUT_OF_BOUNDS, coord)
        state = self.state_at(coord)
        if state.was_shot:
            raise ShotError(ShotRejection.ALREADY_SHOT, coord)

        if state is CellState.EMPTY:
            self._cells[coord.row, coord.col] = CellState.MISS
            return ShotOutcome(cell=coord, result=ShotResult.MISS)

        ship = self._ships[int(self._owners[coord.row, coord.col])]
        self._cells[coord.row, coord.col] = CellState.HIT
        ship.hits += 1
        if not ship.sunk:
            return ShotOutcome(cell=coord, result=ShotResult.HIT, ship_id=ship.ship_id)

        for cell in ship.cells:
            self._cells[cell.row, cell.col] = CellState.SUNK
        return ShotOutcome(
            cell=coord,
            result=ShotResult.SUNK,
            ship_id=ship.ship_id,
            ship_kind=ship.kind,
            sunk_cells=ship.cells,
        )

    def all_sunk(self) -> bool:
        """Return whether every ship has been sunk. An empty board has nothing to sink."""
        return bool(self._ships) and all(ship.sunk for ship in self._ships.values())

    def ships_afloat(self) -> int:
        return sum(1 for ship in self._ships.values() if not ship.sunk)

    def ships_sunk(self) -> int:
        return sum(1 for ship in self._ships.values() if ship.sunk)

    def shots_fired(self) -> int:
        return int(np.count_nonzero(self._cells >= CellState.MISS))

    def grid(self) -> np.ndarray:
        """Read-only copy of the full board."""
        view = self._cells.copy()
        view.setflags(write=False)
        return view

    def observed_grid(self) -> np.ndarray:
        """Read-only copy as the opponent sees it: unshot cells read as EMPTY."""
        view = np.where(self._cells == CellState.OCCUPIED, CellState.EMPTY, self._cells).astype(np.int8)
        view.setflags(write=False)
        return view

    def as_rows(self, *, reveal: bool = True) -> list[str]:
        """Text rows using cell symbols."""
        source = self._cells if reveal else self.observed_grid()
        return ["".join(CellState(int(code)).symbol for code in row) for row in source]

    def __str__(self) -> str:
        return "\n".join(self.as_rows())

    def _first_bad_cell(self, cells: tuple[Coord, ...], failure: PlacementFailure) -> Coord:
        for cell in cells:
            if failure is PlacementFailure.OUT_OF_BOUNDS and not self.in_bounds(cell):
                return cell
            if failure is PlacementFailure.OVERLAP and self.state_at(cell) is not CellState.EMPTY:
                return cell
        return cells[0]
