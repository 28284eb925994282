"""
A cell on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# one column letter followed by the (1-based) row number. ex) 'a1', 'h6', 'c12'
ALGEBRAIC_PATTERN = re.compile(r"^([a-z])(\d+)$")

Vector = tuple[int, int]

# Orthogonal steps only: pieces never interact diagonally
ORTHOGONAL: tuple[Vector, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True, order=True)
class Coord:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, text: str) -> Coord:
        """Algebraic notation: 'a1' gets converted to (0, 0), 'c4' to (3, 2). Raises ValueError on anything else."""
        match = ALGEBRAIC_PATTERN.match(text.strip().lower())
        if match is None:
            raise ValueError(f"Cannot interpret {text!r} as a cell name.")
        col = ord(match.group(1)) - ord("a")
        row = int(match.group(2)) - 1
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{self.row + 1}"

    def step(self, delta: Vector) -> Coord:
        dr, dc = delta
        return Coord(self.row + dr, self.col + dc)

    def is_adjacent(self, other: Coord) -> bool:
        """Orthogonally adjacent: exactly one step along a row or a column"""
        return abs(self.row - other.row) + abs(self.col - other.col) == 1

    def __str__(self) -> str:
        return self.to_algebraic()
