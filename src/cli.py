"""
Interactive shell: reads intents from the terminal, prints the board after every turn.

All game logic lives in the service / domain layers. This module only does text in, text out.
"""

import argparse
import logging
import sys
from typing import Callable, Optional, TextIO

from src.api.models import AbandonGameRequest, GetGameRequest, IntentRequest, NewGameRequest
from src.core.config import RulesConfig, load_config
from src.core.exceptions import ConfigError, InvalidLayoutError
from src.core.shared_types import NoMovesPolicy, Player
from src.db.database import SessionLocal
from src.db.sql_repository import SQLGameRecordRepository
from src.ironclad.board import Board
from src.ironclad.coord import Coord
from src.ironclad.notation import LayoutState
from src.services.ironclad_service import IroncladService

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]

QUIT_COMMANDS = ("quit", "exit")
HINT_COMMANDS = ("hint", "moves")
PLAYER_LABELS: dict[Player, str] = {Player.FIRST: "A", Player.SECOND: "B"}
CELL_WIDTH = 6


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ironclad", description="Play Ironclad on the terminal (two players, one keyboard)")
    parser.add_argument("--rows", type=int, default=None, help="Board rows (defaults to the layout's rows, must match them)")
    parser.add_argument("--cols", type=int, default=None, help="Board columns (defaults to the layout's columns, must match them)")
    parser.add_argument(
        "--layout",
        default=None,
        help="Starting board in layout notation (overrides IRONCLAD_LAYOUT). Use --layout \"\" for an empty board of --rows x --cols",
    )
    parser.add_argument("--reserve", type=int, default=None, help="Pieces each player can place")
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in NoMovesPolicy],
        default=None,
        help="What happens to a player without a legal move",
    )
    parser.add_argument("--no-goal-win", action="store_true", help="Only win by eliminating the opponent")
    parser.add_argument("--games", type=int, default=1, help="Number of games to play (0: keep playing until 'quit')")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def configure(args: argparse.Namespace) -> RulesConfig:
    """Environment first, command line flags on top. An empty layout starts from an empty board."""
    rules = load_config().with_overrides(
        rows=args.rows,
        cols=args.cols,
        layout=args.layout,
        starting_reserve=args.reserve,
        no_moves_policy=NoMovesPolicy(args.policy) if args.policy else None,
        goal_win=False if args.no_goal_win else None,
        log_level=args.log_level.upper() if args.log_level else None,
    )
    if not rules.layout:
        return rules

    # the board size follows from the layout (--layout or IRONCLAD_LAYOUT), unless given explicitly
    board = Board.from_layout(rules.layout)
    rules = rules.with_overrides(rows=args.rows or board.rows, cols=args.cols or board.cols)
    if (board.rows, board.cols) != (rules.rows, rules.cols):
        raise ConfigError(
            f"Starting layout is {board.rows}x{board.cols}, but the board is configured as {rules.rows}x{rules.cols}."
        )
    return rules


def render_board(board: Board) -> str:
    """
    Text rendering of the board. Row 1 at the top, column a on the left.

    A stack shows its owner (A = first, B = second) and top strength. Taller stacks show their height after a slash.
    ex) 'A3/2': FIRST owns a two piece stack with a strength 3 piece on top.
    """
    header = "   " + "".join(chr(ord("a") + col).center(CELL_WIDTH) for col in range(board.cols))
    lines = [header]
    for row in range(board.rows):
        cells: list[str] = []
        for col in range(board.cols):
            stack = board.stack_at(Coord(row, col))
            if stack is None:
                cells.append(".".center(CELL_WIDTH))
                continue
            label = f"{PLAYER_LABELS[stack.owner]}{stack.strength}"
            if stack.height > 1:
                label += f"/{stack.height}"
            cells.append(label.center(CELL_WIDTH))
        lines.append(f"{row + 1:>2} " + "".join(cells))
    reserves = ", ".join(f"{PLAYER_LABELS[p]} reserve: {board.reserve(p)}" for p in Player)
    lines.append(reserves)
    return "\n".join(lines)


def play_game(service: IroncladService, read: InputFn, out: TextIO) -> bool:
    """
    One game, from the first prompt until it ends.

    Returns False if the players quit (or input ran out) instead of finishing the game.
    """
    game = service.start_game(NewGameRequest())
    game_id = game.game_id
    notation = game.notation
    active = game.active_player

    while True:
        print(render_board(LayoutState.from_notation(notation).to_board()), file=out)
        try:
            text = read(f"{PLAYER_LABELS[active]} ({active}) > ")
        except EOFError:
            text = QUIT_COMMANDS[0]

        command = text.strip().lower()
        if command in QUIT_COMMANDS:
            service.abandon_game(AbandonGameRequest(game_id=game_id))
            print("Game abandoned.", file=out)
            return False
        if command in HINT_COMMANDS:
            hints = service.legal_intents(GetGameRequest(game_id=game_id))
            print("Legal moves: " + (", ".join(hints) if hints else "none"), file=out)
            continue

        response = service.submit_intent(IntentRequest(game_id=game_id, intent=text))
        notation = response.notation
        match response.outcome:
            case "rejected":
                print(f"Rejected ({response.rejection_reason}): {response.detail}", file=out)
            case "applied":
                active = response.next_player or active
            case "game_over":
                print(render_board(LayoutState.from_notation(notation).to_board()), file=out)
                winner = f"{PLAYER_LABELS[response.winner]} ({response.winner}) wins" if response.winner else "Draw"
                print(f"Game over: {winner} by {response.status}.", file=out)
                return True


def main(argv: Optional[list[str]] = None, read: InputFn = input, out: TextIO = sys.stdout) -> int:
    args = build_parser().parse_args(argv)
    try:
        rules = configure(args)
    except (ConfigError, InvalidLayoutError) as err:
        print(f"error: {err}", file=sys.stderr)
        return 2

    logging.basicConfig(level=rules.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    session = SessionLocal()
    try:
        service = IroncladService(SQLGameRecordRepository(session), rules)
        played = 0
        while args.games == 0 or played < args.games:
            logger.info("Starting game %d", played + 1)
            finished = play_game(service, read, out)
            played += 1
            if not finished:
                break

        scoreboard = service.scoreboard()
        wins = ", ".join(f"{PLAYER_LABELS[p]}: {scoreboard.wins[p]}" for p in Player)
        print(f"Games: {scoreboard.games_played} ({wins}, draws: {scoreboard.draws})", file=out)
    finally:
        session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
