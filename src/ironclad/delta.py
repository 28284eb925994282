"""
Resolution delta: exactly what changed on the board by resolving one move.

The Board applies it atomically, and the shell can render the update without re-deriving it.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.core.shared_types import Player
from src.ironclad.coord import Coord
from src.ironclad.moves import Move
from src.ironclad.pieces import Piece, Stack


@dataclass(frozen=True)
class CellChange:
    """Content of a single cell before and after. None means the cell is unoccupied."""

    coord: Coord
    before: Optional[Stack]
    after: Optional[Stack]


@dataclass(frozen=True)
class ResolutionDelta:
    move: Optional[Move]
    changes: tuple[CellChange, ...] = field(default_factory=tuple)
    removed: tuple[Piece, ...] = field(default_factory=tuple)
    drawn_from_reserve: Optional[Player] = None

    @classmethod
    def empty(cls) -> "ResolutionDelta":
        """A turn that changes nothing (a player passing)"""
        return cls(move=None)

    @property
    def cells_touched(self) -> list[Coord]:
        return [change.coord for change in self.changes]

    @property
    def is_empty(self) -> bool:
        return not self.changes and self.drawn_from_reserve is None
