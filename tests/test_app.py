import random
from unittest.mock import patch

import pytest

from roadmap_tutor.app import (
    SessionExitRequested, cmd_complete, cmd_lesson, cmd_roadmap, run_flashcard_session,
    session_prompt,
)
from roadmap_tutor.flashcards import NO_CARDS, ReviewSession, choose_card_source
from roadmap_tutor.models import SessionStatus
from roadmap_tutor.progress import get_user_progress
from roadmap_tutor.seed import seed_lessons
from roadmap_tutor.session_store import SessionStore


def _session(db_path, lesson):
    source = choose_card_source(1, lesson)
    return ReviewSession(SessionStore(db_path), "u1", source, rng=random.Random(0)).start()


def test_session_exit_requested_is_exception():
    with pytest.raises(SessionExitRequested):
        raise SessionExitRequested()


def test_session_prompt_raises_on_q():
    with patch("roadmap_tutor.app.Prompt.ask", return_value="q"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_raises_on_menu():
    with patch("roadmap_tutor.app.Prompt.ask", return_value="menu"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_returns_normal_input():
    with patch("roadmap_tutor.app.Prompt.ask", return_value="hello"):
        assert session_prompt("test prompt") == "hello"


def test_run_flashcard_session_until_mastered(ready_db, make_lesson):
    """One card answered correctly three times finishes the drill."""
    session = _session(ready_db, make_lesson(1))
    with patch("roadmap_tutor.app.Prompt.ask", side_effect=["", "y", "", "y", "", "y"]):
        run_flashcard_session(session)
    assert session.status is SessionStatus.COMPLETED
    assert session.stats.correct == 3


def test_run_flashcard_session_exits_on_q(ready_db, make_lesson):
    """Answers given before q are kept in the saved session."""
    session = _session(ready_db, make_lesson(3))
    with patch("roadmap_tutor.app.Prompt.ask", side_effect=["", "n", "q"]):
        with pytest.raises(SessionExitRequested):
            run_flashcard_session(session)
    saved = SessionStore(ready_db).load("u1", 1)
    assert saved.stats.incorrect == 1
    assert len(saved.queue) == 3


def test_run_flashcard_session_no_cards(ready_db):
    session = ReviewSession(SessionStore(ready_db), "u1", NO_CARDS).start()
    with patch("roadmap_tutor.app.Prompt.ask") as ask:
        run_flashcard_session(session)
    ask.assert_not_called()


def test_cmd_complete_advances_day(ready_db):
    seed_lessons(ready_db)
    cmd_complete(ready_db, "u1")
    assert get_user_progress(ready_db, "u1").current_day == 2


def test_cmd_complete_refuses_unpublished_day(ready_db):
    seed_lessons(ready_db)
    for _ in range(4):
        cmd_complete(ready_db, "u1")
    assert get_user_progress(ready_db, "u1").current_day == 5
    cmd_complete(ready_db, "u1")  # day 5 has no lesson yet
    assert get_user_progress(ready_db, "u1").current_day == 5


def test_cmd_lesson_locked_day_does_not_raise(ready_db):
    seed_lessons(ready_db)
    with patch("roadmap_tutor.app.IntPrompt.ask", return_value=4):
        cmd_lesson(ready_db, "u1")


def test_cmd_lesson_opens_current_day(ready_db):
    seed_lessons(ready_db)
    with patch("roadmap_tutor.app.IntPrompt.ask", return_value=1):
        cmd_lesson(ready_db, "u1")


def test_cmd_roadmap_renders(ready_db):
    seed_lessons(ready_db)
    cmd_roadmap(ready_db, "u1")
