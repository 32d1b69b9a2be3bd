"""Generate database sessions"""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.schema import Base
from src.db.sql_repository import SQLKeyValueStore


def create_session_factory(settings: Settings) -> sessionmaker[Session]:
    """Engine for the configured database. Ensures all tables are created"""
    engine = create_engine(settings.database_url, echo=settings.db_echo)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def open_store(settings: Settings) -> SQLKeyValueStore:
    """Key-value store backed by a session that lives as long as the store."""
    return SQLKeyValueStore(create_session_factory(settings)())
