from __future__ import annotations

import argparse

from battleship.game.app.autoplay import run_autoplay
from battleship.game.core.models import Difficulty, RuleVariant, Side
from battleship.game.infra.config import GameSettings, load_default_env_files
from battleship.game.infra.logging import setup_logging
from battleship.runtime.logging import shutdown_logging


def build_parser(settings: GameSettings) -> argparse.ArgumentParser:
    """CLI whose defaults come from ``settings`` (the ``BATTLESHIP_*`` env)."""
    parser = argparse.ArgumentParser(description="Play computer-vs-computer games through the engine API.")
    parser.add_argument("--rule", type=RuleVariant.parse, default=settings.rule, choices=list(RuleVariant))
    parser.add_argument(
        "--difficulty",
        type=Difficulty.parse,
        default=settings.difficulty,
        choices=list(Difficulty),
        help="computer targeter",
    )
    parser.add_argument(
        "--stand-in",
        type=Difficulty.parse,
        default=Difficulty.EASY,
        choices=list(Difficulty),
        help="targeter playing the human side",
    )
    parser.add_argument("--first", type=Side.parse, default=settings.first, choices=list(Side))
    parser.add_argument("--alternate", action="store_true", help="alternate the opening side between games")
    parser.add_argument("--size", type=int, default=settings.board_size)
    parser.add_argument("--games", type=int, default=100)
    parser.add_argument("--seed", type=int, default=settings.seed)
    parser.add_argument("--log-file", action="store_true", help="also write a JSONL run log")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_default_env_files(override_existing=False)
    args = build_parser(GameSettings.from_env()).parse_args(argv)

    setup_logging(to_file=args.log_file)
    try:
        stats = run_autoplay(
            games=args.games,
            rule=args.rule,
            difficulty=args.difficulty,
            stand_in=args.stand_in,
            first=None if args.alternate else args.first,
            board_size=args.size,
            seed=args.seed,
        )
    finally:
        shutdown_logging()

    print(f"games={stats.games}")
    print(f"computer_wins={stats.wins[Side.COMPUTER]}")
    print(f"stand_in_wins={stats.wins[Side.HUMAN]}")
    print(f"mean_rounds={stats.mean_rounds:.2f}")
    print(f"mean_shots={stats.mean_shots:.2f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
