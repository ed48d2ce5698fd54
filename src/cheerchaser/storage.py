"""PreferenceStore — persists planner preferences to SQLite.

Only small string values live here (runner pace, race start time), so the
schema is a single key/value table.  Courses and selections are rebuilt from
the GPX upload and are never stored.
"""

from __future__ import annotations

import sqlite3

RUNNER_PACE = "runner_pace"
RACE_START_TIME = "race_start_time"

_DDL = """
CREATE TABLE IF NOT EXISTS preferences (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL
               DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
)
"""

_UPSERT = """
INSERT INTO preferences (key, value) VALUES (?, ?)
ON CONFLICT (key) DO UPDATE SET
    value      = excluded.value,
    updated_at = strftime('%Y-%m-%dT%H:%M:%SZ', 'now')
"""

_SELECT = "SELECT value FROM preferences WHERE key = ?"
_SELECT_ALL = "SELECT key, value FROM preferences ORDER BY key"


class PreferenceStore:
    """Stores planner preferences in a SQLite database.

    Parameters
    ----------
    db_path:
        Path to the SQLite file.  Pass ``":memory:"`` for in-process testing.
    """

    def __init__(self, db_path: str = "cheerchaser.db") -> None:
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute(_DDL)
        self._conn.commit()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, key: str, default: str = "") -> str:
        row = self._conn.execute(_SELECT, (key,)).fetchone()
        return row["value"] if row is not None else default

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite *key*."""
        self._conn.execute(_UPSERT, (key, value))
        self._conn.commit()

    def all(self) -> dict[str, str]:
        return {row["key"]: row["value"] for row in self._conn.execute(_SELECT_ALL)}

    def close(self) -> None:
        self._conn.close()
