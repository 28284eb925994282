"""
Rules configuration.

The default values describe the standard game: a 6x8 board, each side starting with six pieces on its two back columns.
Everything can be overridden through IRONCLAD_* environment variables (the CLI flags override those in turn).
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Self

from src.core.exceptions import ConfigError
from src.core.shared_types import NoMovesPolicy

BOARD_ROWS = 6
BOARD_COLS = 8
# columns are named by a single letter
MAX_COLS = 26

# Layout notation (see src/ironclad/notation.py): rows top to bottom, 'a' pieces belong to FIRST, 'b' pieces to SECOND
STARTING_LAYOUT = "8/b2,6,a2/b3,b1,4,a1,a3/b3,b1,4,a1,a3/b2,6,a2/8"

STARTING_RESERVE = 32
PLACED_STRENGTH = 1

# number of columns at each side of the board where a player may always place a piece
HOME_ZONE_WIDTH = 2

ENV_PREFIX = "IRONCLAD_"
TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class RulesConfig:
    rows: int = BOARD_ROWS
    cols: int = BOARD_COLS
    layout: str = STARTING_LAYOUT
    starting_reserve: int = STARTING_RESERVE
    placed_strength: int = PLACED_STRENGTH
    home_zone_width: int = HOME_ZONE_WIDTH
    goal_win: bool = True
    no_moves_policy: NoMovesPolicy = NoMovesPolicy.FORFEIT
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ConfigError(f"Board must have at least one cell. Got {self.rows}x{self.cols}.")
        if self.cols > MAX_COLS:
            raise ConfigError(f"Columns are named by a single letter: at most {MAX_COLS} columns. Got {self.cols}.")
        if self.starting_reserve < 0:
            raise ConfigError(f"Reserve cannot be negative. Got {self.starting_reserve}.")
        if self.placed_strength < 1:
            raise ConfigError(f"Pieces need a strength of at least 1. Got {self.placed_strength}.")
        if self.home_zone_width < 0:
            raise ConfigError(f"Home zone width cannot be negative. Got {self.home_zone_width}.")
        if self.log_level not in logging.getLevelNamesMapping():
            raise ConfigError(f"Unknown log level {self.log_level!r}.")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Self:
        """Build the config from IRONCLAD_* variables. Missing variables keep their default."""
        env = os.environ if env is None else env
        overrides: dict[str, object] = {}

        for name in ("rows", "cols", "starting_reserve", "placed_strength", "home_zone_width"):
            value = _lookup(env, name)
            if value is not None:
                overrides[name] = _parse_int(name, value)

        layout = _lookup(env, "layout")
        if layout is not None:
            overrides["layout"] = layout.strip()

        goal_win = _lookup(env, "goal_win")
        if goal_win is not None:
            overrides["goal_win"] = _parse_bool("goal_win", goal_win)

        policy = _lookup(env, "no_moves_policy")
        if policy is not None:
            overrides["no_moves_policy"] = _parse_policy(policy)

        log_level = _lookup(env, "log_level")
        if log_level is not None:
            overrides["log_level"] = log_level.strip().upper()

        return cls(**overrides)  # type: ignore[arg-type]

    def with_overrides(self, **changes: object) -> "RulesConfig":
        """Return a copy with the given (non-None) fields replaced"""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_config(env: Mapping[str, str] | None = None) -> RulesConfig:
    return RulesConfig.from_env(env)


def _lookup(env: Mapping[str, str], name: str) -> str | None:
    return env.get(f"{ENV_PREFIX}{name.upper()}")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as err:
        raise ConfigError(f"{ENV_PREFIX}{name.upper()} must be an integer, got {value!r}.") from err


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigError(f"{ENV_PREFIX}{name.upper()} must be a boolean, got {value!r}.")


def _parse_policy(value: str) -> NoMovesPolicy:
    try:
        return NoMovesPolicy(value.strip().lower())
    except ValueError as err:
        raise ConfigError(
            f"{ENV_PREFIX}NO_MOVES_POLICY must be one of {','.join(p.value for p in NoMovesPolicy)}, got {value!r}."
        ) from err
