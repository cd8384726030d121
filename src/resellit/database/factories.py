"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from resellit.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV = "RESELLIT_DB_PATH"


def default_data_dir() -> Path:
    """Return ~/.resellit, creating it if needed."""
    data_dir = Path.home() / ".resellit"
    data_dir.mkdir(exist_ok=True)
    return data_dir


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks RESELLIT_DB_PATH
            environment variable, then defaults to ~/.resellit/resellit.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = str(default_data_dir() / "resellit.db")

    logger.debug("Opening SQLite database at %s", database_path)
    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
