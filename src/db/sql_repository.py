"""Implementation of KeyValueStore using SQLAlchemy"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.db.schema import DBEntry


class SQLKeyValueStore:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get(self, key: str) -> Optional[str]:
        """Get the stored value, if a record exists."""
        try:
            entry = self._fetch_entry(key)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Could not read {key=}.") from exc
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        """Store the value, replacing an existing record."""
        try:
            entry = self._fetch_entry(key)
            if entry is None:
                self.db.add(DBEntry(key=key, value=value))
            else:
                entry.value = value
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise RepositoryError(f"Could not write {key=}.") from exc

    def _fetch_entry(self, key: str) -> Optional[DBEntry]:
        query = select(DBEntry).where(DBEntry.key == key)
        return self.db.scalar(query)
