"""
Key/value persistence collaborators.

The progress store and preferences talk to storage only through get/set on
string keys, so the backend can be swapped:
- MemoryStore: in-process dict (tests, degraded mode)
- SqliteStore: ~/.adaptlearn/storage.db, one table of key/value rows
"""

import sqlite3
from pathlib import Path
from typing import Optional, Protocol


DEFAULT_STORAGE_DIR = Path.home() / ".adaptlearn"
DEFAULT_STORAGE_DB = DEFAULT_STORAGE_DIR / "storage.db"

# Keys shared by the app
LEARNING_STYLE_KEY = "learningStyle"
LEVEL_PROGRESS_KEY = "levelProgress"
DIFFICULTY_KEY = "difficulty"


class StorageError(Exception):
    """Raised when the persistence backend cannot read or write."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Dict-backed store. Contents vanish with the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteStore:
    """
    Key/value store in a local SQLite database.

    Each call opens its own connection, so the store can be shared
    across Streamlit reruns.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize store.

        Args:
            db_path: Path to storage.db (default: ~/.adaptlearn/storage.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_STORAGE_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open storage at {self.db_path}: {e}") from e
        try:
            conn.execute(
                """CREATE TABLE IF NOT EXISTS kv (
                       key TEXT PRIMARY KEY,
                       value TEXT NOT NULL
                   )"""
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot initialise storage at {self.db_path}: {e}") from e
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        try:
            return sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open storage at {self.db_path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        conn = self._get_connection()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read {key!r}: {e}") from e
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO kv (key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (key, value),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to write {key!r}: {e}") from e
        finally:
            conn.close()
