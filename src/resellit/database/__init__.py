"""Database layer for resellit application."""

from resellit.database.base import Database
from resellit.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
