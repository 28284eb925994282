"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGameRecord(Base):
    """One finished (or abandoned) game of the session"""

    __tablename__ = "game_records"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    # order in which the games of the session finished
    game_number: Mapped[int] = mapped_column(unique=True)
    starting_layout: Mapped[str]
    current_layout: Mapped[str]
    intents: Mapped[list[str]] = mapped_column(JSON, default=list)
    status: Mapped[str]
    winner: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
