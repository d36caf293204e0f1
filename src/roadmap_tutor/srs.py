"""Positional spaced repetition for an in-session review queue."""
import math
from typing import Optional, TypeVar

from roadmap_tutor.models import MASTERY_THRESHOLD

T = TypeVar("T")

INCORRECT_MAX_OFFSET = 3
INCORRECT_FRACTION = 1 / 3
CORRECT_FRACTION = 0.7


def reinsert_position(remaining: int, is_correct: bool, correct_count: int) -> Optional[int]:
    """Index at which an answered card goes back into the queue.

    Args:
        remaining: Length of the queue after the answered card was removed.
        is_correct: Whether the card was just answered correctly.
        correct_count: The card's correct answers including this one.

    Returns:
        The insertion index, or None when the card is mastered and retires.
    """
    if not is_correct:
        # Wrong answers come back within the next few cards
        return min(INCORRECT_MAX_OFFSET, math.floor(remaining * INCORRECT_FRACTION))
    if correct_count < MASTERY_THRESHOLD:
        # Right but not mastered: the last ~30% of the queue
        return min(remaining, math.floor(remaining * CORRECT_FRACTION))
    return None


def requeue(queue: list[T], is_correct: bool, correct_count: int) -> list[T]:
    """Pop the head of ``queue`` and reinsert it per ``reinsert_position``.

    Returns a new list; ``queue`` is left untouched.
    """
    if not queue:
        return []
    card, remaining = queue[0], list(queue[1:])
    position = reinsert_position(len(remaining), is_correct, correct_count)
    if position is not None:
        remaining.insert(position, card)
    return remaining
