"""Generic transition-table program for explicit state machines."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

TState = TypeVar("TState")


@dataclass(frozen=True, slots=True)
class FlowContext(Generic[TState]):
    """Transition execution context."""

    trigger: str
    source: TState
    target: TState
    payload: object | None = None


TransitionGuard: TypeAlias = "Callable[[FlowContext[TState]], bool]"


@dataclass(frozen=True, slots=True)
class FlowTransition(Generic[TState]):
    """One table row. A ``None`` source matches every state."""

    trigger: str
    source: TState | None
    target: TState
    guard: TransitionGuard[TState] | None = None


class FlowProgram(Generic[TState]):
    """Reusable transition table for resolving next state from trigger.

    The program holds no current state; callers pass it in and keep the result.
    First matching row wins, so guarded rows go before their fallbacks.
    """

    def __init__(self, transitions: tuple[FlowTransition[TState], ...]) -> None:
        self._transitions = transitions

    @property
    def transitions(self) -> tuple[FlowTransition[TState], ...]:
        return self._transitions

    def resolve(
        self, current_state: TState, trigger: str, *, payload: object | None = None
    ) -> TState | None:
        """Return the next state, or ``None`` when no row accepts the trigger."""
        for transition in self._transitions:
            if transition.trigger != trigger:
                continue
            if transition.source is not None and transition.source != current_state:
                continue
            context = FlowContext(
                trigger=trigger,
                source=current_state,
                target=transition.target,
                payload=payload,
            )
            if transition.guard is not None and not transition.guard(context):
                continue
            return transition.target
        return None
