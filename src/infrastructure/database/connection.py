"""SQLite connection holding the account table.

The users table carries the one-account-per-email rule as a UNIQUE
constraint; the repository maps violations to AccountAlreadyExistsError.
"""

import sqlite3
from pathlib import Path

import aiosqlite
import structlog

logger = structlog.get_logger()

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT UNIQUE NOT NULL,
    hashed_password TEXT NOT NULL,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL DEFAULT '',
    profile_picture TEXT,
    description TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_users_created ON users(created_at);
"""


class Database:
    """Single aiosqlite connection shared by the account repository.

    Every statement is committed as soon as it runs.
    """

    def __init__(self, db_path: str | Path) -> None:
        """Remember the file location; nothing is opened until connect().

        Args:
            db_path: Location of the account database file.
        """
        self._db_path = Path(db_path)
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the file, creating it and the users table on first run."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

        self._connection = await aiosqlite.connect(self._db_path)
        self._connection.row_factory = aiosqlite.Row

        await self._connection.executescript(_SCHEMA)
        await self._connection.commit()

        logger.info("database_connected", path=str(self._db_path))

    async def disconnect(self) -> None:
        """Close the connection if open. Safe to call twice."""
        if self._connection:
            await self._connection.close()
            self._connection = None
            logger.info("database_disconnected", path=str(self._db_path))

    async def execute(
        self,
        sql: str,
        parameters: tuple[object, ...] | dict[str, object] | None = None,
    ) -> aiosqlite.Cursor:
        """Run and commit one statement.

        sqlite3 errors such as IntegrityError propagate unchanged.

        Raises:
            RuntimeError: If called before connect().
        """
        if not self._connection:
            raise RuntimeError("Database not connected")

        if parameters:
            cursor = await self._connection.execute(sql, parameters)
        else:
            cursor = await self._connection.execute(sql)

        await self._connection.commit()
        return cursor

    async def fetch_one(
        self,
        sql: str,
        parameters: tuple[object, ...] | dict[str, object] | None = None,
    ) -> sqlite3.Row | None:
        """Return the first matching row, or None."""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetch_all(
        self,
        sql: str,
        parameters: tuple[object, ...] | dict[str, object] | None = None,
    ) -> list[sqlite3.Row]:
        """Return every matching row."""
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())


# Set by init_database during application startup
_database: Database | None = None


def get_database() -> Database:
    """Return the connection opened at startup.

    Raises:
        RuntimeError: Outside the application lifespan.
    """
    if _database is None:
        raise RuntimeError("Account database not initialized. Call init_database first.")
    return _database


async def init_database(db_path: str | Path) -> Database:
    """Open the account database and make it the process-wide connection."""
    global _database
    _database = Database(db_path)
    await _database.connect()
    return _database
