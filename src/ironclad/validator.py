"""
Intent parser / validator

Turns the text a player typed into a Move, or explains why it cannot be played.
Never raises for bad input and never touches the board: a pure function of (intent, state).
"""

import logging

from src.core.config import RulesConfig
from src.core.shared_types import Action, RejectionReason
from src.ironclad.coord import Coord
from src.ironclad.moves import ACTION_CHECKS, Move, Rejection, has_legal_move
from src.ironclad.state import GameState

logger = logging.getLogger(__name__)

# how many cells each action names
ACTION_ARITY: dict[Action, int] = {
    Action.PLACE: 1,
    Action.MOVE: 2,
    Action.ATTACK: 2,
}

ParsedIntent = tuple[Action, list[Coord]]


def parse_intent(raw_text: str) -> ParsedIntent | Rejection:
    """
    Syntax only:
    ---

    * `place <cell>`
    * `move <from> <to>`
    * `attack <from> <to>`

    Case-insensitive. Cells are written as column letter + row number (ex. 'c4').
    Bounds are NOT checked here: 'z9' parses fine.
    """
    words = raw_text.strip().lower().split()
    if not words:
        return Rejection(RejectionReason.MALFORMED_INTENT, "Empty intent.")

    keyword, *cells = words
    if keyword not in [action.value for action in Action]:
        options = ", ".join(action.value for action in Action)
        return Rejection(RejectionReason.MALFORMED_INTENT, f"Unknown action {keyword!r}. Pick one of: {options}.")

    action = Action(keyword)
    if len(cells) != ACTION_ARITY[action]:
        return Rejection(
            RejectionReason.MALFORMED_INTENT,
            f"{action} needs {ACTION_ARITY[action]} cell(s), got {len(cells)}.",
        )

    coords: list[Coord] = []
    for cell in cells:
        try:
            coords.append(Coord.from_algebraic(cell))
        except ValueError as err:
            return Rejection(RejectionReason.MALFORMED_INTENT, str(err))
    return action, coords


def validate(raw_text: str, state: GameState, rules: RulesConfig) -> Move | Rejection:
    """
    Validate an intent for the active player.
    ---

    1. Does the player have any legal move at all? No? --> NO_LEGAL_MOVES, whatever they typed.
    2. Parse the text
    3. Bounds check all named cells
    4. Apply the rule for the chosen action
    """
    board = state.board
    player = state.active

    if not has_legal_move(player, board, rules):
        return Rejection(RejectionReason.NO_LEGAL_MOVES, f"{player} has no legal move.")

    parsed = parse_intent(raw_text)
    if isinstance(parsed, Rejection):
        logger.debug("Rejected %r: %s", raw_text, parsed)
        return parsed
    action, coords = parsed

    for coord in coords:
        if not board.is_within_bounds(coord):
            rejection = Rejection(
                RejectionReason.OUT_OF_BOUNDS,
                f"{coord} lies outside the {board.rows}x{board.cols} board.",
            )
            logger.debug("Rejected %r: %s", raw_text, rejection)
            return rejection

    match action:
        case Action.PLACE:
            move = Move(action, player, target=coords[0])
        case Action.MOVE | Action.ATTACK:
            move = Move(action, player, target=coords[1], source=coords[0])

    rejection = ACTION_CHECKS[action](move, board, rules)
    if rejection is not None:
        logger.debug("Rejected %r: %s", raw_text, rejection)
        return rejection
    return move
