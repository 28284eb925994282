"""
Movement, placement and attacking rules

Key idea: Use strategy pattern to define the legality check for each action.
The same checks are used to validate a single intent and to generate the complete set of legal moves,
so the two can never disagree.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.core.config import RulesConfig
from src.core.shared_types import Action, Player, RejectionReason
from src.ironclad.coord import Coord
from src.ironclad.pieces import Stack


class Board(Protocol):
    """Just the parts the rules need"""

    rows: int
    cols: int

    def stack_at(self, coord: Coord) -> Optional[Stack]: ...
    def is_within_bounds(self, coord: Coord) -> bool: ...
    def neighbours(self, coord: Coord) -> list[Coord]: ...
    def reserve(self, player: Player) -> int: ...
    def stacks_of(self, player: Player) -> list[Coord]: ...
    def empty_cells(self) -> list[Coord]: ...


@dataclass(frozen=True)
class Move:
    """
    A validated intent.

    `source` is only None for placements (the piece comes from the player's reserve).
    """

    action: Action
    player: Player
    target: Coord
    source: Optional[Coord] = None

    def to_intent(self) -> str:
        """Convert back into the text a player would type"""
        if self.source is None:
            return f"{self.action} {self.target.to_algebraic()}"
        return f"{self.action} {self.source.to_algebraic()} {self.target.to_algebraic()}"


@dataclass(frozen=True)
class Rejection:
    reason: RejectionReason
    detail: str = ""

    def __str__(self) -> str:
        return f"{self.reason}: {self.detail}" if self.detail else str(self.reason)


# --- ZONES ---
def is_home_cell(coord: Coord, player: Player, cols: int, width: int) -> bool:
    """FIRST starts on the right-hand side of the board, SECOND on the left"""
    if player == Player.FIRST:
        return coord.col >= cols - width
    return coord.col < width


def goal_column(player: Player, cols: int) -> int:
    """The opponent's back column"""
    return 0 if player == Player.FIRST else cols - 1


# --- LEGALITY CHECKS ---
def check_place(move: Move, board: Board, rules: RulesConfig) -> Optional[Rejection]:
    """
    Placing a piece from your reserve
    ---

    * the target cell must be empty
    * you must have a piece left in reserve
    * the target is inside your home zone, or next to one of your own stacks
    """
    if board.stack_at(move.target) is not None:
        return Rejection(RejectionReason.ILLEGAL_ACTION, f"{move.target} is occupied.")

    if board.reserve(move.player) <= 0:
        return Rejection(RejectionReason.ILLEGAL_ACTION, "No pieces left in reserve.")

    if is_home_cell(move.target, move.player, board.cols, rules.home_zone_width):
        return None

    for neighbour in board.neighbours(move.target):
        stack = board.stack_at(neighbour)
        if stack is not None and stack.owner == move.player:
            return None
    return Rejection(
        RejectionReason.ILLEGAL_ACTION,
        f"{move.target} is neither in your home zone nor next to one of your stacks.",
    )


def check_move(move: Move, board: Board, rules: RulesConfig) -> Optional[Rejection]:
    """A stack steps onto an empty, orthogonally adjacent cell"""
    assert move.source is not None
    rejection = _check_source(move, board)
    if rejection:
        return rejection

    if not move.source.is_adjacent(move.target):
        return Rejection(RejectionReason.ILLEGAL_ACTION, f"{move.target} is not next to {move.source}.")

    if board.stack_at(move.target) is not None:
        return Rejection(RejectionReason.ILLEGAL_ACTION, f"{move.target} is occupied.")
    return None


def check_attack(move: Move, board: Board, rules: RulesConfig) -> Optional[Rejection]:
    """
    Attack an adjacent enemy stack
    ---

    Only the top pieces fight. The attacker must be at least as strong as the defender:
    stronger captures, equal strength destroys both top pieces.
    """
    assert move.source is not None
    rejection = _check_source(move, board)
    if rejection:
        return rejection

    if not move.source.is_adjacent(move.target):
        return Rejection(RejectionReason.ILLEGAL_ACTION, f"{move.target} is not next to {move.source}.")

    defender = board.stack_at(move.target)
    if defender is None:
        return Rejection(RejectionReason.ILLEGAL_ACTION, f"Nothing to attack on {move.target}.")
    if defender.owner == move.player:
        return Rejection(RejectionReason.ILLEGAL_ACTION, f"Cannot attack your own stack on {move.target}.")

    attacker = board.stack_at(move.source)
    assert attacker is not None
    if attacker.strength < defender.strength:
        return Rejection(
            RejectionReason.ILLEGAL_ACTION,
            f"Strength {attacker.strength} on {move.source} cannot attack strength {defender.strength} on {move.target}.",
        )
    return None


def _check_source(move: Move, board: Board) -> Optional[Rejection]:
    """Moving and attacking both start from one of your own stacks"""
    assert move.source is not None
    stack = board.stack_at(move.source)
    if stack is None:
        return Rejection(RejectionReason.NOT_OWNER, f"There is no stack on {move.source}.")
    if stack.owner != move.player:
        return Rejection(RejectionReason.NOT_OWNER, f"The stack on {move.source} belongs to {stack.owner}.")
    return None


# -- STRATEGY PATTERN: LEGALITY CHECKS ---
CheckFn = Callable[[Move, Board, RulesConfig], Optional[Rejection]]
ACTION_CHECKS: dict[Action, CheckFn] = {
    Action.PLACE: check_place,
    Action.MOVE: check_move,
    Action.ATTACK: check_attack,
}


# --- CANDIDATE MOVES ---
def candidate_placements(player: Player, board: Board) -> list[Move]:
    """Any empty cell (the check narrows it down)"""
    return [Move(Action.PLACE, player, target) for target in board.empty_cells()]


def candidate_steps(action: Action, player: Player, board: Board) -> list[Move]:
    """From every own stack to every neighbouring cell, sources and targets both row by row"""
    return [
        Move(action, player, target, source)
        for source in board.stacks_of(player)
        for target in sorted(board.neighbours(source))
    ]


def legal_moves(player: Player, board: Board, rules: RulesConfig) -> list[Move]:
    """
    The complete set of legal moves for `player`
    ----

    Deterministic order: placements, moves, attacks. Within each group the sources are visited row by row, and the targets of each source too.
    """
    candidates: list[Move] = candidate_placements(player, board)
    candidates.extend(candidate_steps(Action.MOVE, player, board))
    candidates.extend(candidate_steps(Action.ATTACK, player, board))
    return [move for move in candidates if ACTION_CHECKS[move.action](move, board, rules) is None]


def has_legal_move(player: Player, board: Board, rules: RulesConfig) -> bool:
    """Like legal_moves(), but stops checking at the first legal move found"""
    candidates = (
        candidate_placements(player, board)
        + candidate_steps(Action.MOVE, player, board)
        + candidate_steps(Action.ATTACK, player, board)
    )
    return any(ACTION_CHECKS[move.action](move, board, rules) is None for move in candidates)
