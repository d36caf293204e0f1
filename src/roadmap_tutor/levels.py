"""Course levels and the day ranges they own."""
from roadmap_tutor.models import Level

TOTAL_DAYS = 120
DAYS_PER_LEVEL = 30

LEVELS = {
    "A1": Level("A1", "A1 Beginner", 1, 30, "Everyday words, greetings and simple sentences", "green"),
    "A2": Level("A2", "A2 Elementary", 31, 60, "Routine topics and short conversations", "cyan"),
    "B1": Level("B1", "B1 Intermediate", 61, 90, "Opinions, stories and longer texts", "yellow"),
    "B2": Level("B2", "B2 Upper Intermediate", 91, 120, "Fluent discussion of abstract topics", "magenta"),
}


def validate_levels(levels: dict[str, Level] = LEVELS, total_days: int = TOTAL_DAYS) -> None:
    """Check that the level ranges cover 1..total_days exactly once, in order."""
    expected_first = 1
    for level in levels.values():
        if level.first_day != expected_first:
            raise ValueError(
                f"Level {level.id} starts at day {level.first_day}, expected {expected_first}"
            )
        if level.last_day < level.first_day:
            raise ValueError(f"Level {level.id} has an empty day range")
        expected_first = level.last_day + 1
    if expected_first != total_days + 1:
        raise ValueError(f"Levels end at day {expected_first - 1}, expected {total_days}")


def level_for_day(day: int, levels: dict[str, Level] = LEVELS) -> Level:
    for level in levels.values():
        if day in level:
            return level
    raise ValueError(f"Day {day} is outside the course")
