"""Database infrastructure for SQLite persistence."""

from src.infrastructure.database.connection import (
    Database,
    get_database,
    init_database,
)
from src.infrastructure.database.exceptions import PersistenceError

__all__ = [
    "Database",
    "PersistenceError",
    "get_database",
    "init_database",
]
