"""Hunt/Target targeter with parity search."""

from __future__ import annotations

import random
from collections import deque

import numpy as np

from battleship.game.ai.strategy import Targeter, pick, unshot_cells
from battleship.game.core.models import BOARD_SIZE, CellState, Coord, Difficulty, ShotOutcome, ShotResult


class HuntTargetAI(Targeter):
    """Probe around unresolved hits, otherwise search the even checkerboard.

    Every queued probe remembers which hits spawned it. Sinking a ship resolves
    its hits; probes left without a live source are dropped, so probes around
    a second, still-floating ship survive.
    """

    difficulty = Difficulty.HARD

    def __init__(self, rng: random.Random, size: int = BOARD_SIZE) -> None:
        self._rng = rng
        self._size = size
        self._fired: set[Coord] = set()
        self._target_queue: deque[Coord] = deque()
        self._sources: dict[Coord, set[Coord]] = {}

    @property
    def pending_probes(self) -> tuple[Coord, ...]:
        return tuple(self._target_queue)

    @property
    def hunting(self) -> bool:
        return not self._target_queue

    def choose_shot(self, view: np.ndarray) -> Coord:
        self._size = int(view.shape[0])
        while self._target_queue:
            probe = self._target_queue.popleft()
            self._sources.pop(probe, None)
            if view[probe.row, probe.col] == CellState.EMPTY:
                return probe

        parity = unshot_cells(view, parity_only=True)
        if parity:
            return self._rng.choice(parity)
        # Odd-parity ships (an X anchored on an odd cell) can outlive the even sweep.
        return pick(self._rng, unshot_cells(view))

    def notify_result(self, outcome: ShotOutcome) -> None:
        self._fired.add(outcome.cell)

        if outcome.result is ShotResult.HIT:
            self._enqueue_target_neighbors(outcome.cell)
        elif outcome.result is ShotResult.SUNK:
            self._resolve_sunk(frozenset(outcome.sunk_cells))

    def _enqueue_target_neighbors(self, hit: Coord) -> None:
        for cell in hit.neighbors():
            if not cell.in_bounds(self._size) or cell in self._fired:
                continue
            if cell in self._sources:
                self._sources[cell].add(hit)
                continue
            self._sources[cell] = {hit}
            self._target_queue.append(cell)

    def _resolve_sunk(self, sunk_cells: frozenset[Coord]) -> None:
        for probe in list(self._sources):
            remaining = self._sources[probe] - sunk_cells
            if remaining:
                self._sources[probe] = remaining
            else:
                del self._sources[probe]
        self._target_queue = deque(probe for probe in self._target_queue if probe in self._sources)
