"""The aggregate the Turn Controller owns: board, whose turn it is, and where in the turn cycle we are"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.core.shared_types import Player, Status
from src.ironclad.board import Board
from src.ironclad.notation import LayoutState


class Phase(Enum):
    AWAITING_INTENT = auto()
    RESOLVING = auto()
    CHECKING_WIN = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    board: Board
    active: Player = Player.FIRST
    turn: int = 1
    phase: Phase = Phase.AWAITING_INTENT
    status: Status = Status.IN_PROGRESS
    winner: Optional[Player] = None
    consecutive_passes: int = 0

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        layout_state = LayoutState.from_notation(notation)
        return cls(board=layout_state.to_board(), active=layout_state.active, turn=layout_state.turn)

    def to_notation(self) -> str:
        return LayoutState.from_board(self.board, self.active, self.turn).to_notation()

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.GAME_OVER
