"""Database factory functions for creating database instances."""

import logging
from pathlib import Path
from typing import Optional

from bizledger.database.sqlalchemy_db import SQLAlchemyDatabase
from bizledger.settings import Settings

logger = logging.getLogger(__name__)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, the configured
            path is used (BIZLEDGER_DB_PATH, then ~/.bizledger/bizledger.db)

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = str(Settings.from_env().database_path)

    Path(database_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
    logger.debug("Opening SQLite database at %s", database_path)
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
