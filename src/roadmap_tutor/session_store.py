"""Durable storage for in-progress review sessions, keyed by (user, day)."""
import json
from datetime import datetime
from typing import Optional

from roadmap_tutor.db import get_connection
from roadmap_tutor.exceptions import CorruptSessionError
from roadmap_tutor.models import SessionState


class SessionStore:
    """SQLite-backed session cache. Writes are last-write-wins per key."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def load(self, user_id: str, day: int) -> Optional[SessionState]:
        conn = get_connection(self.db_path)
        row = conn.execute(
            "SELECT session_data FROM review_sessions WHERE user_id = ? AND day = ?",
            (user_id, day),
        ).fetchone()
        conn.close()
        if row is None:
            return None
        try:
            return SessionState.from_dict(json.loads(row["session_data"]))
        except (json.JSONDecodeError, RecursionError, KeyError, TypeError, ValueError) as e:
            raise CorruptSessionError(f"Session for {user_id}/day {day} is unreadable: {e}") from e

    def save(self, user_id: str, day: int, state: SessionState) -> None:
        state.last_updated = datetime.now().isoformat()
        conn = get_connection(self.db_path)
        conn.execute(
            """INSERT INTO review_sessions (user_id, day, session_data, updated_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(user_id, day) DO UPDATE SET
                session_data = excluded.session_data,
                updated_at = excluded.updated_at""",
            (user_id, day, json.dumps(state.to_dict(), ensure_ascii=False), state.last_updated),
        )
        conn.commit()
        conn.close()

    def clear(self, user_id: str, day: int) -> None:
        conn = get_connection(self.db_path)
        conn.execute("DELETE FROM review_sessions WHERE user_id = ? AND day = ?", (user_id, day))
        conn.commit()
        conn.close()
