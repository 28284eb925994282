"""Requests and Response models"""

from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Player, RejectionReason, Status

Outcome = Literal["rejected", "applied", "game_over"]


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    starting_notation: Optional[str] = None

    @field_validator("starting_notation")
    @classmethod
    def validate_starting_notation(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        parts = value.strip().split()
        if len(parts) != 5:
            raise InvalidRequestError("Layout notation must contain 5 space-separated parts.")
        return " ".join(parts)


class IntentRequest(BaseModel):
    game_id: UUID
    intent: str

    @field_validator("intent")
    @classmethod
    def normalize_intent(cls, value: str) -> str:
        """Collapse whitespace. Whether the intent makes sense is up to the game."""
        return " ".join(value.split())


class GetGameRequest(BaseModel):
    game_id: UUID


class AbandonGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    notation: str
    starting_notation: str
    active_player: Player
    turn: int
    status: Status
    winner: Optional[Player] = None
    intent_history: list[str]


class IntentResponse(BaseModel):
    game_id: UUID
    outcome: Outcome
    notation: str
    status: Status
    rejection_reason: Optional[RejectionReason] = None
    detail: str = ""
    cells_touched: list[str] = []
    removed: list[str] = []
    next_player: Optional[Player] = None
    winner: Optional[Player] = None


class ScoreboardResponse(BaseModel):
    games_played: int
    wins: dict[Player, int]
    draws: int
