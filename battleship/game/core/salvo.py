"""Salvo-count rules: how many shots a player fires per turn."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from battleship.game.core.models import RuleVariant, SalvoContext


@dataclass(slots=True)
class SalvoState:
    """Per-player mutable rule state, owned by the game."""

    charge: int = 1


class SalvoRule(ABC):
    """Salvo rule contract."""

    variant: RuleVariant

    @abstractmethod
    def shots_for_turn(self, ctx: SalvoContext, state: SalvoState) -> int:
        """Return the shot count for the turn about to start."""

    def record_sink(self, state: SalvoState) -> None:
        """Update ``state`` after its owner sank an opponent ship."""


class DefaultRule(SalvoRule):
    variant = RuleVariant.DEFAULT

    def shots_for_turn(self, ctx: SalvoContext, state: SalvoState) -> int:
        return 1


class FuryRule(SalvoRule):
    """One shot per own ship still afloat."""

    variant = RuleVariant.FURY

    def shots_for_turn(self, ctx: SalvoContext, state: SalvoState) -> int:
        return ctx.ships_alive


class ChargeRule(SalvoRule):
    """Starts at one shot and gains one for every enemy ship sunk. Never resets."""

    variant = RuleVariant.CHARGE

    def shots_for_turn(self, ctx: SalvoContext, state: SalvoState) -> int:
        return state.charge

    def record_sink(self, state: SalvoState) -> None:
        state.charge += 1


_RULES: dict[RuleVariant, type[SalvoRule]] = {
    RuleVariant.DEFAULT: DefaultRule,
    RuleVariant.FURY: FuryRule,
    RuleVariant.CHARGE: ChargeRule,
}


def build_salvo_rule(variant: RuleVariant | str) -> SalvoRule:
    """Construct the rule for a variant name."""
    return _RULES[RuleVariant.parse(variant)]()
