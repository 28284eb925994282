"""Protocol repository (the session match log; implemented with SQLAlchemy, but a plain dict would do for tests)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRecordRepository(Protocol):
    """Persistence layer orchestration"""

    def get_record(self, record_id: UUID) -> GameModel | None:
        """Get record by ID, if it exists."""
        ...

    def create_record(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a finished game and return the stored data + newly created record ID."""
        ...

    def list_records(self) -> list[GameModel]:
        """All recorded games, oldest first."""
        ...
