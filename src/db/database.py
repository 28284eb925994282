"""Generate database session

The match log only lives as long as the process: the database is an in-memory SQLite database.
StaticPool makes every session share the single connection (a new connection would see a new, empty database).
"""

from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import sessionmaker

from src.db.schema import Base

DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
SessionLocal = sessionmaker(bind=engine)

# Ensure all tables are created
Base.metadata.create_all(bind=engine)
