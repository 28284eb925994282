"""Defines the pieces and the stacks they form on the board"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Self

from src.core.shared_types import Player

NOTATION_TO_PLAYER: dict[str, Player] = {
    "a": Player.FIRST,
    "b": Player.SECOND,
}

PLAYER_TO_NOTATION: dict[Player, str] = {value: key for key, value in NOTATION_TO_PLAYER.items()}

# a piece in layout notation: owner letter + strength. ex) 'a3', 'b1'
PIECE_PATTERN = re.compile(r"([ab])(\d+)")


@dataclass(frozen=True)
class Piece:
    strength: int
    owner: Player

    def __post_init__(self) -> None:
        if self.strength < 1:
            raise ValueError(f"A piece must have a strength of at least 1. Got {self.strength}.")

    @classmethod
    def from_notation(cls, token: str) -> Self:
        match = PIECE_PATTERN.fullmatch(token)
        if match is None:
            raise ValueError(f"Cannot interpret {token!r} as a piece.")
        return cls(int(match.group(2)), NOTATION_TO_PLAYER[match.group(1)])

    def to_notation(self) -> str:
        return f"{PLAYER_TO_NOTATION[self.owner]}{self.strength}"


@dataclass(frozen=True)
class Stack:
    """
    Ordered pile of pieces on a single cell. The first piece is at the bottom, the last one on top.

    Stacks are values: every operation returns a new stack. The stack belongs to whoever owns the top piece.
    NOTE: an empty stack never stays on the board, the Board removes the cell instead.
    """

    pieces: tuple[Piece, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, *pieces: Piece) -> Self:
        return cls(tuple(pieces))

    @classmethod
    def from_notation(cls, token: str) -> Self:
        """ex) 'b2a3': a strength-2 piece of SECOND with a strength-3 piece of FIRST on top"""
        if not token or PIECE_PATTERN.sub("", token):
            raise ValueError(f"Cannot interpret {token!r} as a stack.")
        return cls(tuple(Piece.from_notation(m.group(0)) for m in PIECE_PATTERN.finditer(token)))

    def to_notation(self) -> str:
        return "".join(piece.to_notation() for piece in self.pieces)

    @property
    def is_empty(self) -> bool:
        return not self.pieces

    @property
    def height(self) -> int:
        return len(self.pieces)

    @property
    def top(self) -> Piece:
        if self.is_empty:
            raise ValueError("An empty stack has no top piece.")
        return self.pieces[-1]

    @property
    def owner(self) -> Player:
        return self.top.owner

    @property
    def strength(self) -> int:
        """Only the top piece fights"""
        return self.top.strength

    def push(self, piece: Piece) -> Stack:
        return Stack(self.pieces + (piece,))

    def pop(self) -> tuple[Piece, Stack]:
        """Take the top piece off. Returns the piece and what remains of the stack."""
        return self.top, Stack(self.pieces[:-1])

    def count(self, player: Player) -> int:
        return sum(1 for piece in self.pieces if piece.owner == player)
