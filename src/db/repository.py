"""Protocol for the key-value store (implemented using SQL Alchemy, could be a file / browser storage etc.)"""

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Persistence layer orchestration"""

    def get(self, key: str) -> Optional[str]:
        """Get the stored value, if a record exists."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store the value, replacing an existing record."""
        ...
