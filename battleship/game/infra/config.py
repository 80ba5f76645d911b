"""Game configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from battleship.game.core.models import BOARD_SIZE, Difficulty, RuleVariant, Side


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files in order; later files win when ``override_existing`` is set."""
    to_load = tuple(paths) if paths is not None else (".env.battleship", ".env.battleship.local")
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, then project root."""
    candidate = Path(path)
    if candidate.exists() or candidate.is_absolute():
        return candidate
    project_root = Path(__file__).resolve().parents[3]
    return project_root / path


def _int(env: Mapping[str, str], name: str, default: int | None) -> int | None:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Constructor arguments for a new game, as chosen by the launcher."""

    rule: RuleVariant = RuleVariant.DEFAULT
    difficulty: Difficulty = Difficulty.EASY
    first: Side = Side.HUMAN
    board_size: int = BOARD_SIZE
    seed: int | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> GameSettings:
        """Read ``BATTLESHIP_*`` variables. Unknown names raise ``ValueError``."""
        source = os.environ if env is None else env
        board_size = _int(source, "BATTLESHIP_BOARD_SIZE", BOARD_SIZE)
        return cls(
            rule=RuleVariant.parse(source.get("BATTLESHIP_RULE", RuleVariant.DEFAULT)),
            difficulty=Difficulty.parse(source.get("BATTLESHIP_DIFFICULTY", Difficulty.EASY)),
            first=Side.parse(source.get("BATTLESHIP_FIRST", Side.HUMAN)),
            board_size=board_size if board_size is not None and board_size > 0 else BOARD_SIZE,
            seed=_int(source, "BATTLESHIP_SEED", None),
        )
