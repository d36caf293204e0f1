"""Day unlock rules and roadmap aggregates.

Everything here is a pure function of the user's current day and the set of
days that have published content. Nothing is cached; callers recompute on
every render.
"""
import logging
from typing import Iterable, Optional

from roadmap_tutor.exceptions import DayLockedError
from roadmap_tutor.levels import LEVELS, TOTAL_DAYS, level_for_day
from roadmap_tutor.models import DayStatus, Level

logger = logging.getLogger(__name__)

FIRST_WEEK_DAYS = 7
UPCOMING_PREVIEW_DAYS = 4


def clamp_day(day) -> int:
    """Force a progress value into 1..TOTAL_DAYS instead of failing on bad data."""
    try:
        value = int(day)
    except (TypeError, ValueError):
        logger.warning("Invalid current day %r, falling back to day 1", day)
        return 1
    clamped = min(max(value, 1), TOTAL_DAYS)
    if clamped != value:
        logger.warning("Current day %s out of range, clamped to %s", value, clamped)
    return clamped


def get_day_status(day: int, current_day: int, available_days: Iterable[int]) -> DayStatus:
    current_day = clamp_day(current_day)
    if day not in set(available_days):
        return DayStatus.COMING_SOON
    if day < current_day:
        return DayStatus.COMPLETED
    if day == current_day:
        return DayStatus.CURRENT
    return DayStatus.LOCKED


def is_navigable(day: int, current_day: int, available_days: Iterable[int]) -> bool:
    """A day can be opened only when it is reached and has content."""
    if not 1 <= day <= TOTAL_DAYS:
        return False
    return day <= clamp_day(current_day) and day in set(available_days)


def is_locked(day: int, current_day: int, available_days: Iterable[int]) -> bool:
    """Locked means beyond the current day or without content yet."""
    return not is_navigable(day, current_day, available_days)


def open_day(day: int, current_day: int, available_days: Iterable[int]) -> int:
    if not is_navigable(day, current_day, available_days):
        raise DayLockedError(day)
    return day


def get_day_statuses(current_day: int, available_days: Iterable[int]) -> dict[int, DayStatus]:
    """Status of every day of the course."""
    available = set(available_days)
    return {
        day: get_day_status(day, current_day, available)
        for day in range(1, TOTAL_DAYS + 1)
    }


def get_level_stats(level: Level, current_day: int, available_days: Iterable[int]) -> dict:
    current_day = clamp_day(current_day)
    available = set(available_days)
    total = len(level.days)
    completed = sum(1 for d in level.days if d < current_day)
    return {
        "level_id": level.id,
        "total": total,
        "available": sum(1 for d in level.days if d in available),
        "completed": completed,
        "progress": (completed / total) * 100 if total > 0 else 0.0,
    }


def get_course_stats(current_day: int, available_days: Iterable[int]) -> dict:
    current_day = clamp_day(current_day)
    available = {d for d in available_days if 1 <= d <= TOTAL_DAYS}
    completed = sum(1 for d in available if d < current_day)
    return {
        "total": TOTAL_DAYS,
        "available": len(available),
        "completed": completed,
        "coming_soon": TOTAL_DAYS - len(available),
        "progress": (completed / TOTAL_DAYS) * 100,
    }


def get_display_days(available_days: Iterable[int]) -> dict[str, list[int]]:
    """Pick the days rendered in detail: the first week plus a short preview."""
    first_week = list(range(1, FIRST_WEEK_DAYS + 1))
    max_available = max(available_days, default=0)
    upcoming = [
        day for day in range(max_available + 1, max_available + 1 + UPCOMING_PREVIEW_DAYS)
        if FIRST_WEEK_DAYS < day <= TOTAL_DAYS
    ]
    return {"first_week": first_week, "upcoming": upcoming}


def build_day_node(
    day: int,
    current_day: int,
    available_days: Iterable[int],
    titles: Optional[dict[int, str]] = None,
) -> dict:
    available = set(available_days)
    has_content = day in available
    level = level_for_day(day)
    title = (titles or {}).get(day) or (f"Day {day} lesson" if has_content else "Coming soon")
    return {
        "day": day,
        "title": title,
        "level": level.id,
        "level_name": level.name,
        "status": get_day_status(day, current_day, available),
        "navigable": is_navigable(day, current_day, available),
        "locked": is_locked(day, current_day, available),
    }


def build_roadmap(
    current_day: int,
    available_days: Iterable[int],
    titles: Optional[dict[int, str]] = None,
) -> dict:
    current_day = clamp_day(current_day)
    available = set(available_days)
    window = get_display_days(available)
    return {
        "current_day": current_day,
        "course": get_course_stats(current_day, available),
        "statuses": get_day_statuses(current_day, available),
        "first_week": [build_day_node(d, current_day, available, titles) for d in window["first_week"]],
        "upcoming": [build_day_node(d, current_day, available, titles) for d in window["upcoming"]],
        "levels": [
            {"level": level, **get_level_stats(level, current_day, available)}
            for level in LEVELS.values()
        ],
    }
