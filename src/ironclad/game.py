"""
The TurnController is the entrypoint into the domain layer for the service layer (and the shell).
It is responsible for orchestrating all the business logic required to play a turn of Ironclad:
validate the intent --> resolve it --> apply it to the board --> check for a winner --> hand the turn over.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.core.config import RulesConfig
from src.core.exceptions import ConfigError, GameStateError
from src.core.shared_types import NoMovesPolicy, Player, RejectionReason, Status
from src.ironclad.delta import ResolutionDelta
from src.ironclad.moves import Move, Rejection, goal_column, legal_moves
from src.ironclad.notation import empty_layout, starting_notation
from src.ironclad.resolver import resolve
from src.ironclad.state import GameState, Phase
from src.ironclad.validator import validate

logger = logging.getLogger(__name__)


# --- ENGINE RESPONSES ---
@dataclass(frozen=True)
class Rejected:
    """Nothing happened. Same player is asked again."""

    rejection: Rejection


@dataclass(frozen=True)
class Applied:
    delta: ResolutionDelta
    next_player: Player


@dataclass(frozen=True)
class GameOver:
    """winner is None for a draw"""

    winner: Optional[Player]
    status: Status
    delta: ResolutionDelta


EngineResponse = Rejected | Applied | GameOver


class TurnController:
    # --- DOMAIN LAYER API CALLED BY SERVICE / SHELL ---

    def __init__(self, state: GameState, rules: RulesConfig) -> None:
        self.state = state
        self.rules = rules

    @classmethod
    def new_game(cls, rules: RulesConfig) -> Self:
        """Start from the configured layout (an empty board if there is none) with full reserves. FIRST moves first."""
        layout = rules.layout or empty_layout(rules.rows, rules.cols)
        controller = cls.from_notation(starting_notation(layout, rules.starting_reserve), rules)
        board = controller.state.board
        if (board.rows, board.cols) != (rules.rows, rules.cols):
            raise ConfigError(
                f"Starting layout is {board.rows}x{board.cols}, but the board is configured as {rules.rows}x{rules.cols}."
            )
        return controller

    @classmethod
    def from_notation(cls, notation: str, rules: RulesConfig) -> Self:
        """Pick up a game from any position (mostly useful for testing and puzzles)"""
        return cls(GameState.from_notation(notation), rules)

    @property
    def active_player(self) -> Player:
        return self.state.active

    def snapshot(self) -> str:
        return self.state.to_notation()

    def legal_moves(self) -> list[Move]:
        """Can be used to display hints to the player whose turn it is."""
        if self.state.is_over:
            return []
        return legal_moves(self.state.active, self.state.board, self.rules)

    def submit_intent(self, raw_text: str) -> EngineResponse:
        """
        Attempt to play a turn
        -----

        1. validate the intent against the current state (no mutation)
        2. rejected? --> report the reason. No legal moves at all? --> apply the configured policy
        3. resolve the move into a delta and apply it to the board
        4. check for a winner
        5. hand the turn over to the opponent
        """
        if self.state.is_over:
            raise GameStateError(f"Game is over. status: {self.state.status}")

        result = validate(raw_text, self.state, self.rules)
        if isinstance(result, Rejection):
            if result.reason == RejectionReason.NO_LEGAL_MOVES:
                return self._handle_no_legal_moves()
            return Rejected(result)

        self._change_phase(Phase.RESOLVING)
        delta = resolve(result, self.state.board, self.rules)
        self.state.board.apply(delta)
        self.state.consecutive_passes = 0
        logger.info("Turn %d: %s played %s", self.state.turn, self.state.active, result.to_intent())

        self._change_phase(Phase.CHECKING_WIN)
        status = self._check_win()
        if status is not None:
            return self._end_game(self.state.winner, status, delta)

        self._next_turn()
        return Applied(delta, self.state.active)

    def abandon(self) -> GameOver:
        """Players walked away. Nobody wins."""
        if self.state.is_over:
            raise GameStateError(f"Game is over. status: {self.state.status}")
        return self._end_game(None, Status.ABANDONED, ResolutionDelta.empty())

    # -- PRIVATE HELPERS ---
    def _change_phase(self, phase: Phase) -> None:
        self.state.phase = phase

    def _next_turn(self) -> None:
        self.state.active = self.state.active.opponent()
        self.state.turn += 1
        self._change_phase(Phase.AWAITING_INTENT)

    def _check_win(self) -> Optional[Status]:
        """
        Performs checks to see if the game has ended and sets the winner accordingly.

        NOTE the active player is still the player who just moved.
        """
        board = self.state.board
        mover = self.state.active
        opponent = mover.opponent()

        if board.remaining(opponent) == 0:
            self.state.winner = mover
            return Status.ELIMINATION

        # an equal-strength attack with your last piece takes yourself out of the game too
        if board.remaining(mover) == 0:
            self.state.winner = opponent
            return Status.ELIMINATION

        if self.rules.goal_win and self._reached_goal(mover):
            self.state.winner = mover
            return Status.GOAL
        return None

    def _reached_goal(self, player: Player) -> bool:
        goal = goal_column(player, self.state.board.cols)
        return any(coord.col == goal for coord in self.state.board.stacks_of(player))

    def _handle_no_legal_moves(self) -> GameOver | Applied:
        """
        Forfeit: the opponent wins.
        Pass: the turn goes to the opponent. If they cannot move either, the game is a draw.
        """
        player = self.state.active
        match self.rules.no_moves_policy:
            case NoMovesPolicy.FORFEIT:
                logger.info("Turn %d: %s has no legal move and forfeits", self.state.turn, player)
                self.state.winner = player.opponent()
                return self._end_game(self.state.winner, Status.FORFEIT, ResolutionDelta.empty())
            case NoMovesPolicy.PASS:
                self.state.consecutive_passes += 1
                logger.info("Turn %d: %s has no legal move and passes", self.state.turn, player)
                if self.state.consecutive_passes >= 2:
                    return self._end_game(None, Status.STALEMATE, ResolutionDelta.empty())
                self._next_turn()
                return Applied(ResolutionDelta.empty(), self.state.active)
        raise ValueError(f"Unknown policy {self.rules.no_moves_policy!r}")

    def _end_game(self, winner: Optional[Player], status: Status, delta: ResolutionDelta) -> GameOver:
        self.state.winner = winner
        self.state.status = status
        self._change_phase(Phase.GAME_OVER)
        logger.info("Game over after %d turn(s): %s, winner: %s", self.state.turn, status, winner or "none")
        return GameOver(winner, status, delta)
