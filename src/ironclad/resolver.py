"""
Resolver: computes what a validated move does to the board.

Nothing is mutated here. The returned delta is handed to Board.apply().
"""

from src.core.config import RulesConfig
from src.core.shared_types import Action
from src.ironclad.delta import CellChange, ResolutionDelta
from src.ironclad.moves import Board, Move
from src.ironclad.pieces import Piece, Stack


def resolve(move: Move, board: Board, rules: RulesConfig) -> ResolutionDelta:
    match move.action:
        case Action.PLACE:
            return resolve_place(move, board, rules)
        case Action.MOVE:
            return resolve_move(move, board)
        case Action.ATTACK:
            return resolve_attack(move, board)
    raise ValueError(f"No resolution rule for action {move.action!r}")


def resolve_place(move: Move, board: Board, rules: RulesConfig) -> ResolutionDelta:
    """A fresh piece from the reserve on an empty cell"""
    placed = Stack.of(Piece(rules.placed_strength, move.player))
    return ResolutionDelta(
        move=move,
        changes=(CellChange(move.target, before=None, after=placed),),
        drawn_from_reserve=move.player,
    )


def resolve_move(move: Move, board: Board) -> ResolutionDelta:
    """The whole stack relocates, contents and owner unchanged"""
    assert move.source is not None
    stack = board.stack_at(move.source)
    return ResolutionDelta(
        move=move,
        changes=(
            CellChange(move.source, before=stack, after=None),
            CellChange(move.target, before=None, after=stack),
        ),
    )


def resolve_attack(move: Move, board: Board) -> ResolutionDelta:
    """
    Only the top pieces fight
    ---

    * stronger attacker: the defender's top piece is removed and the attacking piece climbs on top of what remains.
      The attacker now owns the target stack.
    * equal strength: both top pieces are removed. Whatever is left underneath stays put, owned by its (new) top piece.

    A weaker attacker never gets here: the validator rejects it.
    """
    assert move.source is not None
    attacker = board.stack_at(move.source)
    defender = board.stack_at(move.target)
    assert attacker is not None and defender is not None

    attacking_piece, attacker_rest = attacker.pop()
    defending_piece, defender_rest = defender.pop()

    if attacking_piece.strength > defending_piece.strength:
        new_target = defender_rest.push(attacking_piece)
        removed: tuple[Piece, ...] = (defending_piece,)
    else:
        new_target = defender_rest
        removed = (defending_piece, attacking_piece)

    return ResolutionDelta(
        move=move,
        changes=(
            CellChange(move.source, before=attacker, after=_or_none(attacker_rest)),
            CellChange(move.target, before=defender, after=_or_none(new_target)),
        ),
        removed=removed,
    )


def _or_none(stack: Stack) -> Stack | None:
    """an emptied cell becomes unoccupied"""
    return None if stack.is_empty else stack
