"""Game orchestration: two boards, the salvo rule, the targeter, and turn flow."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from battleship.game.ai.strategy import Targeter, build_targeter
from battleship.game.core.board import Board
from battleship.game.core.errors import ShotError, ShotRejection
from battleship.game.core.models import (
    BOARD_SIZE,
    Coord,
    Difficulty,
    RuleVariant,
    SalvoContext,
    ShotOutcome,
    ShotResult,
    Side,
)
from battleship.game.core.placement import SETUP_RETRIES, build_board
from battleship.game.core.salvo import SalvoRule, SalvoState, build_salvo_rule
from battleship.game.core.turns import (
    FLEET_DESTROYED,
    OPEN_ROUND,
    SALVO_SPENT,
    TurnPhase,
    TurnState,
    advance,
    awaiting_phase,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ShotRecord:
    """One applied shot in game history."""

    round_number: int
    side: Side
    outcome: ShotOutcome


class Game:
    """Single human-vs-computer match.

    All randomness comes from the one ``random.Random`` the game owns, so a
    seeded game replays identically. Every public call either applies fully or
    raises before touching state.
    """

    def __init__(
        self,
        *,
        human_board: Board,
        computer_board: Board,
        rule: SalvoRule,
        targeter: Targeter,
        first: Side = Side.HUMAN,
        rng: random.Random | None = None,
    ) -> None:
        if human_board.size != computer_board.size:
            raise ValueError("Both boards must share one size.")
        self._boards: dict[Side, Board] = {Side.HUMAN: human_board, Side.COMPUTER: computer_board}
        self.rule = rule
        self.targeter = targeter
        self.first = first
        self.rng = rng if rng is not None else random.Random()
        self._salvo: dict[Side, SalvoState] = {side: SalvoState() for side in Side}
        self._sinks: dict[Side, int] = {side: 0 for side in Side}
        self.history: list[ShotRecord] = []
        self._turn = TurnState(phase=awaiting_phase(first), shots_remaining=self._shots_for(first))
        logger.info(
            "salvo_open side=%s shots=%d round=%d",
            first.value,
            self._turn.shots_remaining,
            self._turn.round_number,
        )

    @classmethod
    def start(
        cls,
        rule: RuleVariant | str = RuleVariant.DEFAULT,
        difficulty: Difficulty | str = Difficulty.EASY,
        who_first: Side | str = Side.HUMAN,
        *,
        size: int = BOARD_SIZE,
        seed: int | None = None,
        rng: random.Random | None = None,
        setup_retries: int = SETUP_RETRIES,
    ) -> Game:
        """Place both fleets and open round one. Raises ``SetupError`` if a fleet will not fit."""
        rng = rng if rng is not None else random.Random(seed)
        salvo_rule = build_salvo_rule(rule)
        targeter = build_targeter(difficulty, rng)
        first = Side.parse(who_first)
        human_board = build_board(rng, size, retries=setup_retries)
        computer_board = build_board(rng, size, retries=setup_retries)
        logger.info(
            "game_started rule=%s difficulty=%s first=%s size=%d seed=%s",
            salvo_rule.variant.value,
            targeter.difficulty.value,
            first.value,
            size,
            seed,
        )
        return cls(
            human_board=human_board,
            computer_board=computer_board,
            rule=salvo_rule,
            targeter=targeter,
            first=first,
            rng=rng,
        )

    @property
    def turn(self) -> TurnState:
        return self._turn

    @property
    def size(self) -> int:
        return self._boards[Side.HUMAN].size

    @property
    def winner(self) -> Side | None:
        return self._turn.winner

    @property
    def next_salvo(self) -> int:
        """Shots the next acting side gets. In ``ROUND_RESOLVED`` this previews the coming round."""
        if self._turn.is_over:
            return 0
        if self._turn.phase is TurnPhase.ROUND_RESOLVED:
            return self._shots_for(self.first)
        return self._turn.shots_remaining

    def board(self, side: Side) -> Board:
        return self._boards[side]

    def ships_sunk_by(self, side: Side) -> int:
        return self._sinks[side]

    def salvo_state(self, side: Side) -> SalvoState:
        return self._salvo[side]

    def human_shot(self, cell: Coord | tuple[int, int]) -> ShotOutcome:
        """Fire one human shot at the computer board."""
        coord = Coord.of(cell)
        turn = self._turn_for(Side.HUMAN)
        outcome = self._boards[Side.COMPUTER].record_shot(coord)
        self._enter(turn)
        self._resolve_shot(Side.HUMAN, outcome)
        return outcome

    def computer_take_turn(self) -> tuple[ShotOutcome, ...]:
        """Let the targeter fire the computer's whole salvo."""
        self._enter(self._turn_for(Side.COMPUTER))
        board = self._boards[Side.HUMAN]
        fired: list[ShotOutcome] = []
        while self._turn.phase is TurnPhase.AWAITING_COMPUTER:
            cell = self.targeter.choose_shot(board.observed_grid())
            outcome = board.record_shot(cell)
            self.targeter.notify_result(outcome)
            fired.append(outcome)
            self._resolve_shot(Side.COMPUTER, outcome)
        return tuple(fired)

    def _shots_for(self, side: Side) -> int:
        ctx = SalvoContext(
            ships_alive=self._boards[side].ships_afloat(),
            ships_sunk=self._sinks[side],
        )
        return self.rule.shots_for_turn(ctx, self._salvo[side])

    def _turn_for(self, side: Side) -> TurnState:
        """Turn value ``side`` would act in, opening a new round if it is theirs to open."""
        turn = self._turn
        if turn.phase is TurnPhase.ROUND_RESOLVED and side is self.first:
            turn = TurnState(
                phase=advance(turn, OPEN_ROUND, first=self.first),
                shots_remaining=self._shots_for(side),
                round_number=turn.round_number + 1,
            )
        if turn.active_side is not side:
            raise ShotError(ShotRejection.NOT_YOUR_TURN)
        return turn

    def _enter(self, turn: TurnState) -> None:
        if turn.phase is not self._turn.phase and turn.active_side is not None:
            logger.info(
                "salvo_open side=%s shots=%d round=%d",
                turn.active_side.value,
                turn.shots_remaining,
                turn.round_number,
            )
        self._turn = turn

    def _resolve_shot(self, side: Side, outcome: ShotOutcome) -> None:
        turn = self._turn
        self.history.append(ShotRecord(turn.round_number, side, outcome))
        logger.debug(
            "shot side=%s row=%d col=%d result=%s",
            side.value,
            outcome.cell.row,
            outcome.cell.col,
            outcome.result.value,
        )

        if outcome.result is ShotResult.SUNK:
            self._sinks[side] += 1
            self.rule.record_sink(self._salvo[side])
            logger.info(
                "ship_sunk side=%s ship=%s ship_id=%s",
                side.value,
                outcome.ship_kind.name if outcome.ship_kind else "?",
                outcome.ship_id,
            )

        if self._boards[side.opponent].all_sunk():
            self._turn = TurnState(
                phase=advance(turn, FLEET_DESTROYED, first=self.first),
                round_number=turn.round_number,
                winner=side,
            )
            logger.info("game_over winner=%s round=%d shots=%d", side.value, turn.round_number, len(self.history))
            return

        turn = turn.spend_shot()
        if turn.shots_remaining > 0:
            self._turn = turn
            return

        phase = advance(turn, SALVO_SPENT, first=self.first)
        if phase is TurnPhase.ROUND_RESOLVED:
            self._turn = TurnState(phase=phase, round_number=turn.round_number)
            logger.debug("round_resolved round=%d", turn.round_number)
            return
        self._enter(
            TurnState(
                phase=phase,
                shots_remaining=self._shots_for(side.opponent),
                round_number=turn.round_number,
            )
        )
