"""Database initialization and connection management."""
import sqlite3
from pathlib import Path

from roadmap_tutor.config import DEFAULT_DB_PATH

SCHEMA = """
CREATE TABLE IF NOT EXISTS lessons (
    day INTEGER PRIMARY KEY,
    level TEXT NOT NULL,
    title TEXT,
    flashcards TEXT NOT NULL DEFAULT '[]',
    updated_at TEXT
);

CREATE TABLE IF NOT EXISTS user_progress (
    user_id TEXT PRIMARY KEY,
    current_day INTEGER NOT NULL DEFAULT 1,
    current_level TEXT NOT NULL DEFAULT 'A1',
    started_at TEXT,
    updated_at TEXT
);

CREATE TABLE IF NOT EXISTS day_completions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    day INTEGER NOT NULL,
    completed_at TEXT,
    UNIQUE(user_id, day)
);

CREATE TABLE IF NOT EXISTS review_sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    day INTEGER NOT NULL,
    session_data TEXT NOT NULL,
    updated_at TEXT,
    UNIQUE(user_id, day)
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory and foreign keys enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating all tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()
