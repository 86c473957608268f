"""
SQLite Session Storage - Persisted key/value pairs for the web client.

Plays the role the browser's localStorage plays for a JavaScript client:
the session token, the serialized user and one-shot notices.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional

import aiosqlite

from crms.application.interfaces import SessionStoragePort, StorageError
from .migrations import run_migrations


logger = logging.getLogger(__name__)


class SQLiteSessionStorage(SessionStoragePort):
    """aiosqlite-backed implementation of SessionStoragePort."""

    def __init__(self, db_path: Path) -> None:
        """
        Initialize the storage.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def initialize(self) -> None:
        """Create the file if needed, run migrations and connect."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        run_migrations(self.db_path)

        self._connection = await aiosqlite.connect(str(self.db_path))
        self._connection.row_factory = aiosqlite.Row
        logger.debug(f"Local storage opened at {self.db_path}")

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    @property
    def conn(self) -> aiosqlite.Connection:
        """Get the active connection or raise error."""
        if not self._connection:
            raise RuntimeError("Storage not initialized. Call initialize() first.")
        return self._connection

    async def get_item(self, key: str) -> Optional[str]:
        cursor = await self.conn.execute(
            "SELECT value FROM local_storage WHERE key = ?",
            (key,)
        )
        row = await cursor.fetchone()
        return row["value"] if row else None

    async def set_item(self, key: str, value: str) -> None:
        await self.set_items({key: value})

    async def set_items(self, items: dict[str, str]) -> None:
        """Write all pairs in one transaction, so readers see all or none."""
        try:
            await self.conn.executemany(
                "INSERT OR REPLACE INTO local_storage (key, value, updated_at) "
                "VALUES (?, ?, CURRENT_TIMESTAMP)",
                list(items.items())
            )
            await self.conn.commit()
        except sqlite3.Error as e:
            await self.conn.rollback()
            raise StorageError(f"Could not write {', '.join(items)}: {e}") from e

    async def remove_items(self, *keys: str) -> None:
        if not keys:
            return
        try:
            await self.conn.executemany(
                "DELETE FROM local_storage WHERE key = ?",
                [(key,) for key in keys]
            )
            await self.conn.commit()
        except sqlite3.Error as e:
            await self.conn.rollback()
            raise StorageError(f"Could not remove {', '.join(keys)}: {e}") from e
