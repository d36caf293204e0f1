"""Import lesson content from JSON or YAML files."""
import json
import logging
from pathlib import Path

from roadmap_tutor.lessons import save_lesson
from roadmap_tutor.levels import TOTAL_DAYS

logger = logging.getLogger(__name__)


def read_file_content(file_path: str):
    """Parse a lesson file; the format is picked from the suffix."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in (".yaml", ".yml"):
        import yaml
        return yaml.safe_load(text)
    return json.loads(text)


def parse_lessons(data) -> list[dict]:
    """Validate lesson entries: ``{"lessons": [...]}`` or a bare list."""
    entries = data.get("lessons") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ValueError("Lesson file must contain a list of lessons")
    lessons = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"Lesson entry must be an object, got {entry!r}")
        day = entry.get("day")
        if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= TOTAL_DAYS:
            raise ValueError(f"Lesson day must be an integer from 1 to {TOTAL_DAYS}, got {day!r}")
        flashcards = entry.get("flashcards") or []
        if not isinstance(flashcards, list) or not all(isinstance(c, dict) for c in flashcards):
            raise ValueError(f"Flashcards for day {day} must be a list of objects")
        lessons.append({
            "day": day,
            "title": entry.get("title"),
            "level": entry.get("level"),
            "flashcards": flashcards,
        })
    return lessons


def import_lessons(db_path: str, file_path: str) -> dict:
    """Import every lesson in a file. Existing days are replaced."""
    lessons = parse_lessons(read_file_content(file_path))
    for lesson in lessons:
        save_lesson(db_path, lesson["day"], lesson["title"], lesson["flashcards"], lesson["level"])
    result = {
        "filename": Path(file_path).name,
        "days": sorted(lesson["day"] for lesson in lessons),
        "cards": sum(len(lesson["flashcards"]) for lesson in lessons),
    }
    logger.info("Imported %d lessons (%d cards) from %s", len(lessons), result["cards"], result["filename"])
    return result
