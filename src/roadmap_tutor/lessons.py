"""Lesson content lookup and availability."""
import json
from datetime import datetime
from typing import Optional

from roadmap_tutor.db import get_connection
from roadmap_tutor.levels import TOTAL_DAYS, level_for_day


def get_lesson(db_path: str, day: int) -> Optional[dict]:
    """Return the lesson published for ``day``, or None if there is none."""
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM lessons WHERE day = ?", (day,)).fetchone()
    conn.close()
    if row is None:
        return None
    return {
        "day": row["day"],
        "level": row["level"],
        "title": row["title"],
        "flashcards": json.loads(row["flashcards"] or "[]"),
    }


def get_available_days(db_path: str) -> set[int]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT day FROM lessons").fetchall()
    conn.close()
    return {row["day"] for row in rows}


def get_lesson_titles(db_path: str) -> dict[int, str]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT day, title FROM lessons WHERE title IS NOT NULL").fetchall()
    conn.close()
    return {row["day"]: row["title"] for row in rows}


def save_lesson(
    db_path: str,
    day: int,
    title: Optional[str],
    flashcards: list[dict],
    level: Optional[str] = None,
) -> None:
    """Insert or replace the lesson for ``day``."""
    if not 1 <= day <= TOTAL_DAYS:
        raise ValueError(f"Day {day} is outside the course (1-{TOTAL_DAYS})")
    level = level or level_for_day(day).id
    conn = get_connection(db_path)
    conn.execute(
        """INSERT INTO lessons (day, level, title, flashcards, updated_at) VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(day) DO UPDATE SET
            level=excluded.level, title=excluded.title,
            flashcards=excluded.flashcards, updated_at=excluded.updated_at""",
        (day, level, title, json.dumps(flashcards or [], ensure_ascii=False), datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()
