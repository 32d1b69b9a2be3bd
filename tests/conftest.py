"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator, Optional

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.exceptions import RepositoryError
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of the store independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


# --- MOCK DEPENDENCIES ----
class MockStore:
    """Mock the KeyValueStore using a dictionary."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        """Clear the store (useful in between tests)"""
        self._entries.clear()


class FailingStore:
    """A store whose backend is gone: every call fails."""

    def get(self, key: str) -> Optional[str]:
        raise RepositoryError(f"Could not read {key=}.")

    def set(self, key: str, value: str) -> None:
        raise RepositoryError(f"Could not write {key=}.")


@pytest.fixture
def mock_store() -> Generator[MockStore, None, None]:
    """Ensures to clear the store between tests"""
    store = MockStore()
    try:
        yield store
    finally:
        store.clear()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()
