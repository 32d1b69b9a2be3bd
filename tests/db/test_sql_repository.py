"""Unit tests for src/db/sql_repository.py"""

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.db.schema import Base, DBEntry
from src.db.sql_repository import SQLKeyValueStore


def test_get_unknown_key(db_session_repo: Session) -> None:
    """Should return None if the key does not match anything in the database."""
    store = SQLKeyValueStore(db_session_repo)
    assert store.get("missing") is None

    store.set("present", "value")
    assert store.get("missing") is None


def test_set_then_get(db_session_repo: Session) -> None:
    store = SQLKeyValueStore(db_session_repo)
    store.set("progress", '{"wins": 1}')
    assert store.get("progress") == '{"wins": 1}'


def test_set_records_timestamps(db_session_repo: Session) -> None:
    store = SQLKeyValueStore(db_session_repo)
    store.set("progress", "{}")
    entry = db_session_repo.scalar(select(DBEntry).where(DBEntry.key == "progress"))
    assert entry is not None
    assert entry.created_at is not None
    assert entry.updated_at is not None


def test_set_replaces_existing_value(db_session_repo: Session) -> None:
    """Consecutive writes to the same key keep a single record holding the last value."""
    store = SQLKeyValueStore(db_session_repo)
    for value in ("first", "second", "third"):
        store.set("progress", value)

    assert store.get("progress") == "third"
    entries = db_session_repo.scalars(select(DBEntry)).all()
    assert len(entries) == 1


def test_keys_are_independent(db_session_repo: Session) -> None:
    store = SQLKeyValueStore(db_session_repo)
    store.set("a", "1")
    store.set("b", "2")
    assert (store.get("a"), store.get("b")) == ("1", "2")


def test_missing_table_raises_repository_error(db_session_repo: Session) -> None:
    """The store reports backend failures as RepositoryError, never as SQLAlchemy errors."""
    store = SQLKeyValueStore(db_session_repo)
    Base.metadata.drop_all(bind=db_session_repo.get_bind())

    with pytest.raises(RepositoryError):
        store.get("progress")
    with pytest.raises(RepositoryError):
        store.set("progress", "{}")
