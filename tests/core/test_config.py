"""Unit tests for src/core/config.py"""

import pytest

from src.core.config import STARTING_LAYOUT, RulesConfig, load_config
from src.core.exceptions import ConfigError
from src.core.shared_types import NoMovesPolicy


def test_defaults() -> None:
    rules = load_config({})
    assert rules == RulesConfig()
    assert (rules.rows, rules.cols) == (6, 8)
    assert rules.layout == STARTING_LAYOUT
    assert rules.starting_reserve == 32
    assert rules.placed_strength == 1
    assert rules.home_zone_width == 2
    assert rules.goal_win
    assert rules.no_moves_policy == NoMovesPolicy.FORFEIT
    assert rules.log_level == "WARNING"


def test_from_env() -> None:
    env = {
        "IRONCLAD_ROWS": "3",
        "IRONCLAD_COLS": "4",
        "IRONCLAD_LAYOUT": " 4/4/4 ",
        "IRONCLAD_STARTING_RESERVE": "5",
        "IRONCLAD_PLACED_STRENGTH": "2",
        "IRONCLAD_HOME_ZONE_WIDTH": "1",
        "IRONCLAD_GOAL_WIN": "off",
        "IRONCLAD_NO_MOVES_POLICY": "Pass",
        "IRONCLAD_LOG_LEVEL": "debug",
        "UNRELATED": "ignored",
    }
    rules = RulesConfig.from_env(env)
    assert rules == RulesConfig(
        rows=3,
        cols=4,
        layout="4/4/4",
        starting_reserve=5,
        placed_strength=2,
        home_zone_width=1,
        goal_win=False,
        no_moves_policy=NoMovesPolicy.PASS,
        log_level="DEBUG",
    )


@pytest.mark.parametrize(
    "env",
    [
        {"IRONCLAD_ROWS": "six"},
        {"IRONCLAD_ROWS": "0"},
        {"IRONCLAD_COLS": "27"},
        {"IRONCLAD_STARTING_RESERVE": "-1"},
        {"IRONCLAD_PLACED_STRENGTH": "0"},
        {"IRONCLAD_HOME_ZONE_WIDTH": "-2"},
        {"IRONCLAD_GOAL_WIN": "maybe"},
        {"IRONCLAD_NO_MOVES_POLICY": "resign"},
        {"IRONCLAD_LOG_LEVEL": "loud"},
    ],
)
def test_invalid_env(env: dict[str, str]) -> None:
    with pytest.raises(ConfigError):
        _ = load_config(env)


def test_with_overrides_skips_none() -> None:
    rules = RulesConfig().with_overrides(starting_reserve=3, layout=None, goal_win=False)
    assert rules.starting_reserve == 3
    assert rules.layout == STARTING_LAYOUT
    assert not rules.goal_win


def test_with_overrides_is_validated() -> None:
    with pytest.raises(ConfigError):
        _ = RulesConfig().with_overrides(rows=0)


def test_columns_are_limited_to_letters() -> None:
    assert RulesConfig(cols=26, layout="").cols == 26
    with pytest.raises(ConfigError):
        _ = RulesConfig(cols=27, layout="")
