"""Database initialization and snapshot persistence."""
import logging
import os
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = os.environ.get(
    "INTERVIEW_TRACKER_DB", str(Path.home() / ".interview_tracker" / "tracker.db")
)
STATE_KEY = "interviewPrepState"

SCHEMA = """
CREATE TABLE IF NOT EXISTS app_state (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    saved_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating the state table if it doesn't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


def save_snapshot(db_path: str, value: str, key: str = STATE_KEY) -> None:
    """Overwrite the stored snapshot unconditionally."""
    conn = get_connection(db_path)
    conn.execute(
        """INSERT INTO app_state (key, value, saved_at) VALUES (?, ?, CURRENT_TIMESTAMP)
        ON CONFLICT(key) DO UPDATE SET value=excluded.value, saved_at=excluded.saved_at""",
        (key, value),
    )
    conn.commit()
    conn.close()
    logger.debug("Saved %d bytes under %s", len(value), key)


def load_snapshot(db_path: str, key: str = STATE_KEY) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM app_state WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else None


def clear_snapshot(db_path: str, key: str = STATE_KEY) -> None:
    conn = get_connection(db_path)
    conn.execute("DELETE FROM app_state WHERE key = ?", (key,))
    conn.commit()
    conn.close()
