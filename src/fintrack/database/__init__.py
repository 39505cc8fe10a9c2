"""Database layer for fintrack application."""

from fintrack.database.base import Database
from fintrack.database.factories import create_sqlite_database
from fintrack.database.local_store import LocalStore, create_local_store

__all__ = ["Database", "create_sqlite_database", "LocalStore", "create_local_store"]
