"""
Full game snapshot in a single line of text.
"""

from dataclasses import dataclass
from typing import Self

from src.core.exceptions import InvalidLayoutError
from src.core.shared_types import Player
from src.ironclad.board import Board
from src.ironclad.pieces import NOTATION_TO_PLAYER, PLAYER_TO_NOTATION


@dataclass
class LayoutState:
    """
    Data that can be constructed from a layout string.
    ----

    <board layout><active player><FIRST reserve><SECOND reserve><turn number>

    * The board layout is described in the Board class
    * The active player is either "a" (FIRST) or "b" (SECOND)
    * The reserves are the number of pieces each player can still place
    * The turn number starts at 1 and increments after every turn (passing included)

    ex) The standard starting position is
    8/b2,6,a2/b3,b1,4,a1,a3/b3,b1,4,a1,a3/b2,6,a2/8 a 32 32 1
    """

    layout: str
    active: Player
    reserves: dict[Player, int]
    turn: int

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Parse the notation into data"""
        parts = notation.split()
        if len(parts) != 5:
            raise InvalidLayoutError(f"Layout notation must contain 5 space-separated parts, got {len(parts)}: {notation!r}")
        layout, active_char, first_reserve, second_reserve, turn = parts

        if active_char not in NOTATION_TO_PLAYER:
            raise InvalidLayoutError(f"Active player must be 'a' or 'b', got {active_char!r}.")

        try:
            reserves = {Player.FIRST: int(first_reserve), Player.SECOND: int(second_reserve)}
            turn_number = int(turn)
        except ValueError as err:
            raise InvalidLayoutError(f"Reserves and turn must be integers: {notation!r}") from err

        if turn_number < 1:
            raise InvalidLayoutError(f"Turns are counted from 1, got {turn_number}.")
        return cls(layout, NOTATION_TO_PLAYER[active_char], reserves, turn_number)

    @classmethod
    def from_board(cls, board: Board, active: Player, turn: int) -> Self:
        return cls(board.to_layout(), active, dict(board.reserves), turn)

    def to_notation(self) -> str:
        """reverse operation: write the notation from the given data"""
        return (
            f"{self.layout} {PLAYER_TO_NOTATION[self.active]} "
            f"{self.reserves[Player.FIRST]} {self.reserves[Player.SECOND]} {self.turn}"
        )

    def to_board(self) -> Board:
        return Board.from_layout(self.layout, self.reserves)


def starting_notation(layout: str, reserve: int) -> str:
    """A fresh game: FIRST to move, full reserves, first turn"""
    return LayoutState(layout, Player.FIRST, {player: reserve for player in Player}, 1).to_notation()


def empty_layout(rows: int, cols: int) -> str:
    return "/".join([str(cols)] * rows)
