"""SQLite history store backend.

Provides persistent history storage using a SQLite database file.
Uses aiosqlite for async access.
"""

from pathlib import Path

import aiosqlite

from ..exceptions import StoreNotConnectedError
from .base import HistoryStore

DEFAULT_HISTORY_PATH = Path.home() / ".streamchat" / "history.db"


class SQLiteHistoryStore(HistoryStore):
    """SQLite-backed history store.

    Keeps the slots in a single key-value table so the data survives
    restarts, like browser local storage survives a page reload.
    """

    def __init__(self, path: str | Path = DEFAULT_HISTORY_PATH):
        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    @property
    def path(self) -> Path:
        return self._db_path

    async def connect(self) -> None:
        """Open the database and create the schema."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS local_storage (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _conn(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise StoreNotConnectedError(self.backend_type)
        return self._connection

    async def get_item(self, key: str) -> str | None:
        async with self._conn().execute(
            "SELECT value FROM local_storage WHERE key = ?",
            (key,)
        ) as cursor:
            row = await cursor.fetchone()
        return row[0] if row else None

    async def set_item(self, key: str, value: str) -> None:
        conn = self._conn()
        await conn.execute("""
            INSERT INTO local_storage (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
        """, (key, value))
        await conn.commit()

    async def remove_item(self, key: str) -> None:
        conn = self._conn()
        await conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))
        await conn.commit()

    @property
    def backend_type(self) -> str:
        return "sqlite"
