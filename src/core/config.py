"""
Application settings, read from environment variables.

* CHESS_DATABASE_URL: where the progress record is stored (SQLAlchemy URL)
* CHESS_PROGRESS_KEY: key of the progress record in that store
* CHESS_DB_ECHO: log all SQL statements ("1"/"true"/"yes")
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Self

DEFAULT_DATABASE_URL = "sqlite:///./chess_progress.db"
DEFAULT_PROGRESS_KEY = "chess_clash_elemental_save"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    progress_key: str = DEFAULT_PROGRESS_KEY
    db_echo: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        env = os.environ if environ is None else environ
        return cls(
            database_url=env.get("CHESS_DATABASE_URL", DEFAULT_DATABASE_URL),
            progress_key=env.get("CHESS_PROGRESS_KEY", DEFAULT_PROGRESS_KEY),
            db_echo=env.get("CHESS_DB_ECHO", "").lower() in ("1", "true", "yes"),
        )
