"""
Repository for named numeric settings (the persisted high score lives here).
"""

from typing import Optional

from .base import BaseRepository


class SettingsRepository(BaseRepository):
    """Read and write single numeric values by key."""

    def get_value(self, key: str) -> Optional[float]:
        """
        Fetch a stored value.

        Returns:
            The value, or None if the key has never been written
        """
        with self.connection(auto_commit=False) as (conn, cursor):
            cursor.execute("SELECT value FROM settings WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None

    def set_value(self, key: str, value: float) -> None:
        with self.connection() as (conn, cursor):
            cursor.execute(
                """
                INSERT INTO settings (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
