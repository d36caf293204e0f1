import pytest

from roadmap_tutor.levels import LEVELS, TOTAL_DAYS, level_for_day, validate_levels
from roadmap_tutor.models import Level


def test_levels_partition_the_course():
    """Every day 1..120 belongs to exactly one level."""
    covered = []
    for level in LEVELS.values():
        covered.extend(level.days)
    assert sorted(covered) == list(range(1, TOTAL_DAYS + 1))
    assert len(covered) == len(set(covered))


def test_levels_are_thirty_days_each():
    assert [len(level.days) for level in LEVELS.values()] == [30, 30, 30, 30]
    assert list(LEVELS) == ["A1", "A2", "B1", "B2"]


def test_validate_levels_accepts_defaults():
    validate_levels()


def test_validate_levels_rejects_gap():
    levels = {
        "A1": Level("A1", "A1", 1, 30),
        "A2": Level("A2", "A2", 32, 120),
    }
    with pytest.raises(ValueError):
        validate_levels(levels)


def test_validate_levels_rejects_overlap():
    levels = {
        "A1": Level("A1", "A1", 1, 30),
        "A2": Level("A2", "A2", 30, 120),
    }
    with pytest.raises(ValueError):
        validate_levels(levels)


def test_validate_levels_rejects_short_course():
    with pytest.raises(ValueError):
        validate_levels({"A1": Level("A1", "A1", 1, 100)})


@pytest.mark.parametrize("day,expected", [(1, "A1"), (30, "A1"), (31, "A2"), (60, "A2"), (61, "B1"), (91, "B2"), (120, "B2")])
def test_level_for_day(day, expected):
    assert level_for_day(day).id == expected


def test_level_for_day_outside_course():
    with pytest.raises(ValueError):
        level_for_day(0)
    with pytest.raises(ValueError):
        level_for_day(121)
