"""Unit tests for /src/ironclad/game.py"""

import pytest

from src.core.config import STARTING_LAYOUT, RulesConfig
from src.core.exceptions import ConfigError, GameStateError
from src.core.shared_types import NoMovesPolicy, Player, RejectionReason, Status
from src.ironclad.game import Applied, GameOver, Rejected, TurnController
from src.ironclad.state import Phase

FIRST = Player.FIRST
SECOND = Player.SECOND

STARTING_NOTATION = f"{STARTING_LAYOUT} a 32 32 1"

# a short game from the standard position, with a few rejected intents in between
GAME_INTENTS = [
    "move a3 a2",  # not FIRST's stack
    "move g3 f3",
    "move b3 c3",
    "place z1",  # out of bounds
    "move f3 e3",
    "move c3 d3",
    "attack e3 d3",  # 1 against 1: both go
    "place a2",  # occupied
    "place c2",  # outside SECOND's home zone, no own stack next to it
]


@pytest.fixture
def controller(rules: RulesConfig) -> TurnController:
    return TurnController.new_game(rules)


# --- STARTING A GAME ---
def test_new_game(controller: TurnController) -> None:
    assert controller.active_player == FIRST
    assert controller.state.turn == 1
    assert controller.state.phase == Phase.AWAITING_INTENT
    assert controller.state.status == Status.IN_PROGRESS
    assert controller.snapshot() == STARTING_NOTATION


def test_new_game_on_empty_board() -> None:
    controller = TurnController.new_game(RulesConfig(rows=3, cols=4, layout="", starting_reserve=5))
    assert controller.snapshot() == "4/4/4 a 5 5 1"


def test_new_game_layout_must_fit_board() -> None:
    with pytest.raises(ConfigError):
        _ = TurnController.new_game(RulesConfig(rows=5))


# --- PLAYING TURNS ---
def test_applied_intent_hands_turn_over(controller: TurnController) -> None:
    response = controller.submit_intent("move g3 f3")

    assert isinstance(response, Applied)
    assert response.next_player == SECOND
    assert [str(coord) for coord in response.delta.cells_touched] == ["g3", "f3"]
    assert controller.active_player == SECOND
    assert controller.state.turn == 2
    assert controller.state.phase == Phase.AWAITING_INTENT


def test_rejected_intent_changes_nothing(controller: TurnController) -> None:
    response = controller.submit_intent("move a3 a2")

    assert isinstance(response, Rejected)
    assert response.rejection.reason == RejectionReason.NOT_OWNER
    assert controller.active_player == FIRST
    assert controller.snapshot() == STARTING_NOTATION


def test_placement_uses_reserve(controller: TurnController) -> None:
    response = controller.submit_intent("place h1")
    assert isinstance(response, Applied)
    assert controller.state.board.reserve(FIRST) == 31
    assert controller.snapshot().endswith(" b 31 32 2")


def test_legal_moves_are_for_active_player(controller: TurnController) -> None:
    moves = controller.legal_moves()
    assert moves
    assert all(move.player == FIRST for move in moves)
    assert "move g3 f3" in [move.to_intent() for move in moves]


def test_every_legal_move_is_accepted(controller: TurnController, rules: RulesConfig) -> None:
    for move in controller.legal_moves():
        fresh = TurnController.new_game(rules)
        assert isinstance(fresh.submit_intent(move.to_intent()), Applied)


# --- WINNING ---
def test_win_by_elimination() -> None:
    controller = TurnController.from_notation("a4,b2/2 a 0 0 1", RulesConfig(goal_win=False))
    response = controller.submit_intent("attack a1 b1")

    assert isinstance(response, GameOver)
    assert response.winner == FIRST
    assert response.status == Status.ELIMINATION
    assert controller.state.board.remaining(SECOND) == 0
    assert controller.state.phase == Phase.GAME_OVER


@pytest.mark.parametrize("policy", list(NoMovesPolicy))
def test_capturing_last_controlled_stack_eliminates(policy: NoMovesPolicy) -> None:
    """SECOND still has a piece on the board, but it is buried under FIRST's capturing piece"""
    controller = TurnController.from_notation("a4,b1b2/2 a 0 0 1", RulesConfig(goal_win=False, no_moves_policy=policy))
    response = controller.submit_intent("attack a1 b1")

    assert isinstance(response, GameOver)
    assert response.winner == FIRST
    assert response.status == Status.ELIMINATION
    assert controller.snapshot() == "1,b1a4/2 a 0 0 1"
    assert controller.state.board.pieces_on_board(SECOND) == 1


def test_buried_player_cannot_keep_the_game_going() -> None:
    """Under the pass policy, a player without any controlled stack would otherwise pass forever"""
    rules = RulesConfig(goal_win=False, no_moves_policy=NoMovesPolicy.PASS)
    controller = TurnController.from_notation("a4,b1b2,1/3 a 0 0 1", rules)
    response = controller.submit_intent("attack a1 b1")

    assert isinstance(response, GameOver)
    assert response.status == Status.ELIMINATION
    with pytest.raises(GameStateError):
        controller.submit_intent("")


def test_reserve_keeps_player_in_the_game() -> None:
    controller = TurnController.from_notation("a4,b2/2 a 0 1 1", RulesConfig(goal_win=False))
    response = controller.submit_intent("attack a1 b1")
    assert isinstance(response, Applied)


def test_trading_last_piece_loses() -> None:
    """An equal-strength attack with your last piece leaves the opponent with the only pieces"""
    controller = TurnController.from_notation("a2,b2/1,b1 a 0 0 1", RulesConfig(goal_win=False))
    response = controller.submit_intent("attack a1 b1")

    assert isinstance(response, GameOver)
    assert response.winner == SECOND
    assert response.status == Status.ELIMINATION


def test_mutual_elimination_goes_to_the_attacker() -> None:
    controller = TurnController.from_notation("a2,b2 a 0 0 1", RulesConfig(goal_win=False))
    response = controller.submit_intent("attack a1 b1")

    assert isinstance(response, GameOver)
    assert response.winner == FIRST


def test_win_by_reaching_goal_column() -> None:
    controller = TurnController.from_notation("1,a1,1/2,b1 a 0 0 1", RulesConfig())
    response = controller.submit_intent("move b1 a1")

    assert isinstance(response, GameOver)
    assert response.winner == FIRST
    assert response.status == Status.GOAL


def test_goal_column_can_be_switched_off() -> None:
    controller = TurnController.from_notation("1,a1,1/2,b1 a 0 0 1", RulesConfig(goal_win=False))
    assert isinstance(controller.submit_intent("move b1 a1"), Applied)


def test_game_over_refuses_intents() -> None:
    controller = TurnController.from_notation("a4,b2/2 a 0 0 1", RulesConfig(goal_win=False))
    controller.submit_intent("attack a1 b1")

    with pytest.raises(GameStateError):
        controller.submit_intent("move b1 b2")
    with pytest.raises(GameStateError):
        controller.abandon()
    assert controller.legal_moves() == []


def test_abandon(controller: TurnController) -> None:
    response = controller.abandon()

    assert response.winner is None
    assert response.status == Status.ABANDONED
    assert response.delta.is_empty
    with pytest.raises(GameStateError):
        controller.submit_intent("move g3 f3")


# --- NO LEGAL MOVES ---
def test_no_legal_moves_forfeits() -> None:
    controller = TurnController.from_notation("a1,b3 a 0 0 1", RulesConfig())
    response = controller.submit_intent("anything")

    assert isinstance(response, GameOver)
    assert response.winner == SECOND
    assert response.status == Status.FORFEIT


def test_no_legal_moves_passes() -> None:
    rules = RulesConfig(no_moves_policy=NoMovesPolicy.PASS, goal_win=False)
    controller = TurnController.from_notation("a1,b3,1 a 0 0 1", rules)
    response = controller.submit_intent("anything")

    assert isinstance(response, Applied)
    assert response.delta.is_empty
    assert response.next_player == SECOND
    assert controller.state.turn == 2
    assert controller.state.consecutive_passes == 1

    assert isinstance(controller.submit_intent("move b1 c1"), Applied)
    assert controller.state.consecutive_passes == 0


def test_two_passes_in_a_row_is_a_stalemate() -> None:
    rules = RulesConfig(no_moves_policy=NoMovesPolicy.PASS, home_zone_width=0)
    controller = TurnController.from_notation("a1 a 0 0 1", rules)

    assert isinstance(controller.submit_intent(""), Applied)
    response = controller.submit_intent("")

    assert isinstance(response, GameOver)
    assert response.winner is None
    assert response.status == Status.STALEMATE


# --- WHOLE GAMES ---
def _play(rules: RulesConfig) -> tuple[TurnController, list]:
    controller = TurnController.new_game(rules)
    responses = [controller.submit_intent(intent) for intent in GAME_INTENTS]
    return controller, responses


def test_replaying_a_game_is_deterministic(rules: RulesConfig) -> None:
    first_run, first_responses = _play(rules)
    second_run, second_responses = _play(rules)

    assert first_responses == second_responses
    assert first_run.state == second_run.state
    assert first_run.snapshot() == second_run.snapshot()


def test_short_game(rules: RulesConfig) -> None:
    controller, responses = _play(rules)
    kinds = [type(response) for response in responses]
    assert kinds == [Rejected, Applied, Applied, Rejected, Applied, Applied, Applied, Rejected, Rejected]
    assert controller.state.board.pieces_on_board() == 10
    assert controller.active_player == SECOND


def test_pieces_are_never_created(rules: RulesConfig) -> None:
    """Pieces on the board plus reserves never grow, and no empty stack is ever left on the board"""
    controller = TurnController.new_game(rules)
    board = controller.state.board
    total = board.remaining(FIRST) + board.remaining(SECOND)

    for intent in GAME_INTENTS:
        controller.submit_intent(intent)
        board = controller.state.board
        new_total = board.remaining(FIRST) + board.remaining(SECOND)
        assert new_total <= total
        assert all(not stack.is_empty for stack in board.position.values())
        total = new_total
