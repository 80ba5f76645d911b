"""Turn phases and the transition table that drives them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

from battleship.game.core.models import Side
from battleship.runtime.flow import FlowContext, FlowProgram, FlowTransition


class TurnPhase(Enum):
    """Combat state machine phases."""

    AWAITING_HUMAN = auto()
    AWAITING_COMPUTER = auto()
    ROUND_RESOLVED = auto()
    GAME_OVER = auto()


# Triggers.
SALVO_SPENT = "salvo_spent"
OPEN_ROUND = "open_round"
FLEET_DESTROYED = "fleet_destroyed"


def awaiting_phase(side: Side) -> TurnPhase:
    return TurnPhase.AWAITING_HUMAN if side is Side.HUMAN else TurnPhase.AWAITING_COMPUTER


def _closes_round(context: FlowContext[TurnPhase]) -> bool:
    # Payload is the side that moves first each round.
    first = context.payload
    if not isinstance(first, Side):
        raise TypeError("turn transitions need the first-moving Side as payload")
    return context.source is awaiting_phase(first.opponent)


def _human_opens(context: FlowContext[TurnPhase]) -> bool:
    return context.payload is Side.HUMAN


TURN_PROGRAM: FlowProgram[TurnPhase] = FlowProgram(
    (
        FlowTransition(trigger=FLEET_DESTROYED, source=TurnPhase.AWAITING_HUMAN, target=TurnPhase.GAME_OVER),
        FlowTransition(trigger=FLEET_DESTROYED, source=TurnPhase.AWAITING_COMPUTER, target=TurnPhase.GAME_OVER),
        FlowTransition(
            trigger=SALVO_SPENT,
            source=TurnPhase.AWAITING_HUMAN,
            target=TurnPhase.ROUND_RESOLVED,
            guard=_closes_round,
        ),
        FlowTransition(trigger=SALVO_SPENT, source=TurnPhase.AWAITING_HUMAN, target=TurnPhase.AWAITING_COMPUTER),
        FlowTransition(
            trigger=SALVO_SPENT,
            source=TurnPhase.AWAITING_COMPUTER,
            target=TurnPhase.ROUND_RESOLVED,
            guard=_closes_round,
        ),
        FlowTransition(trigger=SALVO_SPENT, source=TurnPhase.AWAITING_COMPUTER, target=TurnPhase.AWAITING_HUMAN),
        FlowTransition(
            trigger=OPEN_ROUND,
            source=TurnPhase.ROUND_RESOLVED,
            target=TurnPhase.AWAITING_HUMAN,
            guard=_human_opens,
        ),
        FlowTransition(trigger=OPEN_ROUND, source=TurnPhase.ROUND_RESOLVED, target=TurnPhase.AWAITING_COMPUTER),
    )
)


@dataclass(frozen=True, slots=True)
class TurnState:
    """Explicit turn value handed back to callers after every action."""

    phase: TurnPhase
    shots_remaining: int = 0
    round_number: int = 1
    winner: Side | None = None

    @property
    def active_side(self) -> Side | None:
        if self.phase is TurnPhase.AWAITING_HUMAN:
            return Side.HUMAN
        if self.phase is TurnPhase.AWAITING_COMPUTER:
            return Side.COMPUTER
        return None

    @property
    def is_over(self) -> bool:
        return self.phase is TurnPhase.GAME_OVER

    def spend_shot(self) -> TurnState:
        return replace(self, shots_remaining=self.shots_remaining - 1)


def advance(state: TurnState, trigger: str, *, first: Side) -> TurnPhase:
    """Resolve the next phase or raise when the table has no matching row."""
    target = TURN_PROGRAM.resolve(state.phase, trigger, payload=first)
    if target is None:
        raise RuntimeError(f"No turn transition for '{trigger}' from {state.phase.name}.")
    return target
