from roadmap_tutor.db import init_db, get_connection
from roadmap_tutor.lessons import get_available_days, get_lesson
from roadmap_tutor.seed import is_seeded, seed_lessons


def test_is_seeded(tmp_db):
    init_db(tmp_db)
    assert not is_seeded(tmp_db)
    seed_lessons(tmp_db)
    assert is_seeded(tmp_db)


def test_seed_lessons(tmp_db):
    init_db(tmp_db)
    seed_lessons(tmp_db)
    assert get_available_days(tmp_db) == {1, 2, 3, 4}
    day1 = get_lesson(tmp_db, 1)
    assert day1["level"] == "A1"
    assert len(day1["flashcards"]) == 5
    # Day 3 is published without vocabulary
    assert get_lesson(tmp_db, 3)["flashcards"] == []


def test_seed_lessons_idempotent(tmp_db):
    init_db(tmp_db)
    seed_lessons(tmp_db)
    seed_lessons(tmp_db)  # second call should be no-op
    conn = get_connection(tmp_db)
    assert conn.execute("SELECT COUNT(*) FROM lessons").fetchone()[0] == 4
    conn.close()
