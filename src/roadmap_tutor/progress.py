"""User progress through the course and day completion."""
import logging
from datetime import datetime

from roadmap_tutor.db import get_connection
from roadmap_tutor.levels import TOTAL_DAYS, level_for_day
from roadmap_tutor.models import UserProgress

logger = logging.getLogger(__name__)


def _row_to_progress(row) -> UserProgress:
    return UserProgress(
        user_id=row["user_id"],
        current_day=row["current_day"],
        current_level=row["current_level"],
        started_at=row["started_at"],
        updated_at=row["updated_at"],
    )


def get_user_progress(db_path: str, user_id: str) -> UserProgress:
    """Return the user's progress, starting them at day 1 on first access."""
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM user_progress WHERE user_id = ?", (user_id,)).fetchone()
    if row is None:
        now = datetime.now().isoformat()
        conn.execute(
            "INSERT INTO user_progress (user_id, current_day, current_level, started_at, updated_at) VALUES (?, 1, 'A1', ?, ?)",
            (user_id, now, now),
        )
        conn.commit()
        row = conn.execute("SELECT * FROM user_progress WHERE user_id = ?", (user_id,)).fetchone()
    conn.close()
    return _row_to_progress(row)


def complete_day(db_path: str, user_id: str, day: int) -> UserProgress:
    """Mark ``day`` done and unlock the next one.

    Only the user's current day can be completed; anything else is ignored.
    """
    progress = get_user_progress(db_path, user_id)
    if day != progress.current_day:
        logger.info("Ignoring completion of day %s for %s (current day %s)", day, user_id, progress.current_day)
        return progress
    now = datetime.now().isoformat()
    next_day = min(day + 1, TOTAL_DAYS)
    conn = get_connection(db_path)
    conn.execute(
        "INSERT OR IGNORE INTO day_completions (user_id, day, completed_at) VALUES (?, ?, ?)",
        (user_id, day, now),
    )
    conn.execute(
        "UPDATE user_progress SET current_day = ?, current_level = ?, updated_at = ? WHERE user_id = ?",
        (next_day, level_for_day(next_day).id, now, user_id),
    )
    conn.commit()
    conn.close()
    logger.info("User %s completed day %s", user_id, day)
    return get_user_progress(db_path, user_id)


def get_completed_days(db_path: str, user_id: str) -> set[int]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT day FROM day_completions WHERE user_id = ?", (user_id,)).fetchall()
    conn.close()
    return {row["day"] for row in rows}


def reset_progress(db_path: str, user_id: str) -> None:
    now = datetime.now().isoformat()
    conn = get_connection(db_path)
    conn.execute("DELETE FROM day_completions WHERE user_id = ?", (user_id,))
    conn.execute(
        "UPDATE user_progress SET current_day = 1, current_level = 'A1', updated_at = ? WHERE user_id = ?",
        (now, user_id),
    )
    conn.commit()
    conn.close()
