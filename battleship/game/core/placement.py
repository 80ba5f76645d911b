"""Random fleet placement with bounded retries."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable

from battleship.game.core.board import Board
from battleship.game.core.errors import SetupError, SetupFailure
from battleship.game.core.models import BOARD_SIZE, Coord
from battleship.game.core.ships import DEFAULT_FLEET, TEMPLATES, PlacedShip, ShipKind, ShipTemplate

logger = logging.getLogger(__name__)

MAX_PLACEMENT_ATTEMPTS = 1000
SETUP_RETRIES = 5


def place_ship(
    board: Board,
    template: ShipTemplate,
    rng: random.Random,
    *,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> PlacedShip:
    """Sample anchors and rotations until one fits, then commit it to ``board``."""
    ship_id = board.next_ship_id()
    for _ in range(max_attempts):
        anchor = Coord(rng.randrange(board.size), rng.randrange(board.size))
        rotation = rng.choice(template.rotations)
        candidate = PlacedShip.from_template(ship_id, template, anchor, rotation)
        if board.check_placement(candidate.cells) is not None:
            continue
        board.place(candidate)
        return candidate
    raise SetupError(
        SetupFailure.PLACEMENT_EXHAUSTED,
        f"no room for {template.kind.name} on a {board.size}x{board.size} board "
        f"after {max_attempts} attempts",
    )


def random_board(
    rng: random.Random,
    size: int = BOARD_SIZE,
    *,
    fleet: Iterable[ShipKind] = DEFAULT_FLEET,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> Board:
    """Build a board holding every ship of ``fleet`` in order."""
    board = Board(size)
    for kind in fleet:
        place_ship(board, TEMPLATES[kind], rng, max_attempts=max_attempts)
    return board


def build_board(
    rng: random.Random,
    size: int = BOARD_SIZE,
    *,
    retries: int = SETUP_RETRIES,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> Board:
    """Build a random board, starting over from an empty board on exhaustion."""
    last_error: SetupError | None = None
    for attempt in range(1, retries + 1):
        try:
            return random_board(rng, size, max_attempts=max_attempts)
        except SetupError as exc:
            last_error = exc
            logger.warning("board_setup_retry attempt=%d/%d reason=%s", attempt, retries, exc)
    if last_error is None:
        raise ValueError(f"retries must be positive, got {retries}.")
    raise last_error
