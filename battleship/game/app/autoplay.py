"""Headless self-play through the public API, for smoke runs and balance checks."""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field

from battleship.game.ai.strategy import Targeter, build_targeter
from battleship.game.app.api import computer_take_turn, human_shot, new_game
from battleship.game.app.game import Game
from battleship.game.core.models import BOARD_SIZE, Difficulty, RuleVariant, Side


@dataclass(slots=True)
class AutoplayStats:
    games: int = 0
    wins: Counter[Side] = field(default_factory=Counter)
    rounds: list[int] = field(default_factory=list)
    shots: list[int] = field(default_factory=list)

    @property
    def mean_rounds(self) -> float:
        return sum(self.rounds) / len(self.rounds) if self.rounds else 0.0

    @property
    def mean_shots(self) -> float:
        return sum(self.shots) / len(self.shots) if self.shots else 0.0


def play_out(game: Game, stand_in: Targeter, *, max_actions: int = 10_000) -> Side:
    """Finish ``game`` with ``stand_in`` aiming for the human side; return the winner."""
    computer_board = game.board(Side.COMPUTER)
    for _ in range(max_actions):
        if game.winner is not None:
            return game.winner
        active = game.turn.active_side
        if active is None:
            active = game.first
        if active is Side.COMPUTER:
            computer_take_turn(game)
            continue
        outcome = human_shot(game, stand_in.choose_shot(computer_board.observed_grid()))
        stand_in.notify_result(outcome)
    raise RuntimeError(f"Game did not finish within {max_actions} actions.")


def run_autoplay(
    *,
    games: int,
    rule: RuleVariant | str = RuleVariant.DEFAULT,
    difficulty: Difficulty | str = Difficulty.EASY,
    stand_in: Difficulty | str = Difficulty.EASY,
    first: Side | str | None = None,
    board_size: int = BOARD_SIZE,
    seed: int | None = None,
) -> AutoplayStats:
    """Play ``games`` full games. With no ``first``, the opening side alternates."""
    fixed_first = Side.parse(first) if first is not None else None
    seeds = random.Random(seed)
    stats = AutoplayStats()
    for index in range(games):
        game_seed = seeds.randrange(2**32)
        if fixed_first is not None:
            opener = fixed_first
        else:
            opener = Side.HUMAN if index % 2 == 0 else Side.COMPUTER
        game = new_game(
            board_size=board_size,
            salvo_rule_variant=rule,
            difficulty=difficulty,
            who_first=opener,
            seed=game_seed,
        )
        winner = play_out(game, build_targeter(stand_in, random.Random(game_seed + 1)))
        stats.games += 1
        stats.wins[winner] += 1
        stats.rounds.append(game.turn.round_number)
        stats.shots.append(len(game.history))
    return stats
