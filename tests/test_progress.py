# tests/test_progress.py
from roadmap_tutor.db import get_connection
from roadmap_tutor.progress import (
    complete_day, get_completed_days, get_user_progress, reset_progress,
)


def _set_day(db_path, user_id, day, level):
    conn = get_connection(db_path)
    conn.execute(
        "UPDATE user_progress SET current_day = ?, current_level = ? WHERE user_id = ?",
        (day, level, user_id),
    )
    conn.commit()
    conn.close()


def test_new_user_starts_at_day_one(ready_db):
    progress = get_user_progress(ready_db, "u1")
    assert progress.current_day == 1
    assert progress.current_level == "A1"
    assert progress.started_at is not None


def test_get_user_progress_is_idempotent(ready_db):
    get_user_progress(ready_db, "u1")
    get_user_progress(ready_db, "u1")
    conn = get_connection(ready_db)
    assert conn.execute("SELECT COUNT(*) FROM user_progress").fetchone()[0] == 1
    conn.close()


def test_complete_current_day_unlocks_next(ready_db):
    progress = complete_day(ready_db, "u1", 1)
    assert progress.current_day == 2
    assert get_completed_days(ready_db, "u1") == {1}


def test_complete_other_day_is_ignored(ready_db):
    complete_day(ready_db, "u1", 1)
    progress = complete_day(ready_db, "u1", 5)
    assert progress.current_day == 2
    progress = complete_day(ready_db, "u1", 1)  # already done
    assert progress.current_day == 2
    assert get_completed_days(ready_db, "u1") == {1}


def test_completing_last_day_of_level_moves_level(ready_db):
    get_user_progress(ready_db, "u1")
    _set_day(ready_db, "u1", 30, "A1")
    progress = complete_day(ready_db, "u1", 30)
    assert progress.current_day == 31
    assert progress.current_level == "A2"


def test_completing_final_day_stays_in_course(ready_db):
    get_user_progress(ready_db, "u1")
    _set_day(ready_db, "u1", 120, "B2")
    progress = complete_day(ready_db, "u1", 120)
    assert progress.current_day == 120
    assert progress.current_level == "B2"
    assert 120 in get_completed_days(ready_db, "u1")


def test_users_progress_independently(ready_db):
    complete_day(ready_db, "alice", 1)
    assert get_user_progress(ready_db, "alice").current_day == 2
    assert get_user_progress(ready_db, "bob").current_day == 1


def test_reset_progress(ready_db):
    complete_day(ready_db, "u1", 1)
    complete_day(ready_db, "u1", 2)
    reset_progress(ready_db, "u1")
    progress = get_user_progress(ready_db, "u1")
    assert progress.current_day == 1
    assert progress.current_level == "A1"
    assert get_completed_days(ready_db, "u1") == set()
