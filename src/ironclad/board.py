"""The Game board holds the grid of stacks and the pieces each player still has in reserve"""

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.config import MAX_COLS
from src.core.exceptions import InvalidDeltaError, InvalidLayoutError, OutOfBoundsError
from src.core.shared_types import Player
from src.ironclad.coord import ORTHOGONAL, Coord
from src.ironclad.delta import ResolutionDelta
from src.ironclad.pieces import Stack

logger = logging.getLogger(__name__)


@dataclass
class Board:
    rows: int
    cols: int
    # only occupied cells are stored
    position: dict[Coord, Stack] = field(default_factory=dict)
    reserves: dict[Player, int] = field(default_factory=lambda: {player: 0 for player in Player})

    def __post_init__(self) -> None:
        if self.cols > MAX_COLS:
            raise InvalidLayoutError(f"Columns are named by a single letter: at most {MAX_COLS} columns. Got {self.cols}.")
        for coord, stack in self.position.items():
            if not self.is_within_bounds(coord):
                raise OutOfBoundsError(f"{coord!r} lies outside the {self.rows}x{self.cols} board.")
            if stack.is_empty:
                raise InvalidLayoutError(f"Empty stack stored on {coord}.")
        for player in Player:
            self.reserves.setdefault(player, 0)
            if self.reserves[player] < 0:
                raise InvalidLayoutError(f"Negative reserve for {player}: {self.reserves[player]}.")

    @classmethod
    def from_layout(cls, layout: str, reserves: Optional[dict[Player, int]] = None) -> Self:
        """Construct a board from the board part of the layout notation.

        Rows are separated by slashes, read from the top row (row 1) down.
        Within a row, cells are separated by commas:
        * a number denotes that many empty cells after each other
        * anything else is a stack, written bottom piece first. Every piece is an owner letter ('a' for FIRST, 'b' for SECOND)
          followed by its strength.

        ex) the standard starting position:
        8/b2,6,a2/b3,b1,4,a1,a3/b3,b1,4,a1,a3/b2,6,a2/8
        means:
        * the first and last rows are empty
        * SECOND has its pieces on the a- and b-files, FIRST on the g- and h-files
        """
        position: dict[Coord, Stack] = {}
        layout_rows = layout.strip().split("/")
        widths: set[int] = set()
        for row, layout_row in enumerate(layout_rows):
            col = 0
            for token in layout_row.split(","):
                token = token.strip()
                if token.isdigit():
                    # A number denotes the amount of empty cells after each other
                    col += int(token)
                    continue
                try:
                    position[Coord(row, col)] = Stack.from_notation(token)
                except ValueError as err:
                    raise InvalidLayoutError(f"Row {row + 1}: {err}") from err
                col += 1
            widths.add(col)

        if len(widths) != 1:
            raise InvalidLayoutError(f"All rows must have the same number of cells. Found widths {sorted(widths)}.")
        cols = widths.pop()
        if cols == 0:
            raise InvalidLayoutError("A board needs at least one column.")
        return cls(len(layout_rows), cols, position, dict(reserves or {}))

    def to_layout(self) -> str:
        return "/".join(self._row_to_layout(row) for row in range(self.rows))

    def _row_to_layout(self, row: int) -> str:
        """layout string of a single row"""
        tokens: list[str] = []
        empty_count = 0
        for col in range(self.cols):
            stack = self.position.get(Coord(row, col))
            if stack is None:
                empty_count += 1
                continue
            if empty_count > 0:
                tokens.append(str(empty_count))
                empty_count = 0
            tokens.append(stack.to_notation())

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            tokens.append(str(empty_count))
        return ",".join(tokens)

    # --- LOOKUPS ---
    def is_within_bounds(self, coord: Coord) -> bool:
        return (0 <= coord.row < self.rows) and (0 <= coord.col < self.cols)

    def stack_at(self, coord: Coord) -> Optional[Stack]:
        if not self.is_within_bounds(coord):
            raise OutOfBoundsError(f"{coord.to_algebraic()} lies outside the {self.rows}x{self.cols} board.")
        return self.position.get(coord)

    def neighbours(self, coord: Coord) -> list[Coord]:
        """Orthogonal neighbours that lie on the board"""
        return [coord.step(delta) for delta in ORTHOGONAL if self.is_within_bounds(coord.step(delta))]

    def stacks_of(self, player: Player) -> list[Coord]:
        """cells holding a stack controlled by the player (sorted row by row)"""
        return sorted(coord for coord, stack in self.position.items() if stack.owner == player)

    def empty_cells(self) -> list[Coord]:
        return [
            Coord(row, col)
            for row in range(self.rows)
            for col in range(self.cols)
            if Coord(row, col) not in self.position
        ]

    def reserve(self, player: Player) -> int:
        return self.reserves[player]

    def pieces_on_board(self, player: Optional[Player] = None) -> int:
        """Count pieces on the board, buried ones included. Counts both players if none is given."""
        if player is None:
            return sum(stack.height for stack in self.position.values())
        return sum(stack.count(player) for stack in self.position.values())

    def remaining(self, player: Player) -> int:
        """
        Pieces the player still controls: every piece of the stacks they own (buried ones of either player included)
        plus their reserve. A player whose own pieces are all buried under enemy stacks has none left.
        """
        controlled = sum(stack.height for stack in self.position.values() if stack.owner == player)
        return controlled + self.reserves[player]

    def copy(self) -> "Board":
        return deepcopy(self)

    # --- MUTATION ---
    def apply(self, delta: ResolutionDelta) -> None:
        """
        Apply a resolution delta: either all of it, or nothing.
        ---

        All changes are made on a copy of the grid first. Only after every check passed, the copy replaces the current state.
        Raises InvalidDeltaError if the delta does not fit this board.
        """
        position = dict(self.position)
        reserves = dict(self.reserves)

        for change in delta.changes:
            if not self.is_within_bounds(change.coord):
                raise InvalidDeltaError(f"{change.coord!r} lies outside the board.")
            if position.get(change.coord) != change.before:
                raise InvalidDeltaError(
                    f"Delta expected {change.before} on {change.coord}, found {position.get(change.coord)}."
                )
            if change.after is None:
                position.pop(change.coord, None)
            elif change.after.is_empty:
                raise InvalidDeltaError(f"Delta leaves an empty stack on {change.coord}.")
            else:
                position[change.coord] = change.after

        if delta.drawn_from_reserve is not None:
            reserves[delta.drawn_from_reserve] -= 1
            if reserves[delta.drawn_from_reserve] < 0:
                raise InvalidDeltaError(f"{delta.drawn_from_reserve} has no pieces left in reserve.")

        # pieces are conserved: only a draw from the reserve adds to the board, only the removed pieces leave it
        expected = self.pieces_on_board() - len(delta.removed) + (1 if delta.drawn_from_reserve else 0)
        found = sum(stack.height for stack in position.values())
        if found != expected:
            raise InvalidDeltaError(f"Delta does not conserve pieces: expected {expected} on the board, found {found}.")

        self.position = position
        self.reserves = reserves
        logger.debug("Applied delta touching %s", [str(coord) for coord in delta.cells_touched])
