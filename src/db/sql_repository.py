"""Implementation of GameRecordRepository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGameRecord


class SQLGameRecordRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_record(self, record_id: UUID) -> GameModel | None:
        """Get record by ID, if it exists."""
        record_db = self._fetch_record(record_id)
        if record_db:
            return self._to_model(record_db)
        return None

    def create_record(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a finished game and return the stored data + newly created record ID."""

        new_id = uuid4()
        game_number = self.db.scalar(select(func.count()).select_from(DBGameRecord)) or 0
        record_db = DBGameRecord(
            id=new_id,
            game_number=game_number + 1,
            starting_layout=game.starting_layout,
            current_layout=game.current_layout,
            intents=list(game.intents),
            status=game.status,
            winner=game.winner,
        )
        self.db.add(record_db)
        self.db.commit()
        self.db.refresh(record_db)
        return self._to_model(record_db), new_id

    def list_records(self) -> list[GameModel]:
        """All recorded games, oldest first."""
        query = select(DBGameRecord).order_by(DBGameRecord.game_number)
        return [self._to_model(record_db) for record_db in self.db.scalars(query)]

    def _fetch_record(self, record_id: UUID) -> DBGameRecord | None:
        query = select(DBGameRecord).where(DBGameRecord.id == record_id)
        return self.db.scalar(query)

    def _to_model(self, record_db: DBGameRecord) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            starting_layout=record_db.starting_layout,
            current_layout=record_db.current_layout,
            intents=list(record_db.intents),
            status=record_db.status,
            winner=record_db.winner,
        )
