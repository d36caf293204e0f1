import random

import pytest

from roadmap_tutor.db import init_db


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tutor.db")
    return db_path


@pytest.fixture
def ready_db(tmp_db):
    """A temporary database with the schema created."""
    init_db(tmp_db)
    return tmp_db


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_lesson():
    """Build a lesson payload with `count` cards."""
    def _make(count: int, day: int = 1, level: str = "A1", with_ids: bool = True) -> dict:
        cards = []
        for i in range(1, count + 1):
            card = {"front": f"word{i}", "back": f"translation{i}", "example": f"Example {i}."}
            if with_ids:
                card["id"] = f"d{day}_c{i}"
            cards.append(card)
        return {"day": day, "level": level, "title": f"Lesson {day}", "flashcards": cards}
    return _make
