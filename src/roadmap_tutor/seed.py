"""Seed the database with the bundled sample lessons."""
from pathlib import Path

from roadmap_tutor.db import get_connection
from roadmap_tutor.importer import import_lessons

CONTENT_DIR = Path(__file__).parent / "content"


def is_seeded(db_path: str) -> bool:
    """Check whether any lesson has been published yet."""
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM lessons").fetchone()[0]
    conn.close()
    return count > 0


def seed_lessons(db_path: str) -> None:
    """Load lessons.json once; later runs leave existing content alone."""
    if is_seeded(db_path):
        return
    import_lessons(db_path, str(CONTENT_DIR / "lessons.json"))
