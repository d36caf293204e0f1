"""Flashcard review sessions: card selection, queue sequencing and resumable state.

A session is keyed by ``(user_id, day)`` where ``day`` is the lesson the
cards actually came from. When the target day has no flashcards, the
previous day's cards are reviewed instead.

Lifecycle::

    loading -> no_cards                (no cards for the day or the day before)
    loading -> active                  (resumed or freshly shuffled)
    active  -> active                  (each answer)
    active  -> completed               (queue exhausted)
    active | completed -> active       (reset)
"""
import logging
import random
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from roadmap_tutor.exceptions import CorruptSessionError
from roadmap_tutor.lessons import get_lesson
from roadmap_tutor.models import (
    CardProgress, CardState, Flashcard, SessionState, SessionStats, SessionStatus,
)
from roadmap_tutor.session_store import SessionStore
from roadmap_tutor.srs import requeue

logger = logging.getLogger(__name__)


class _Pending:
    def __repr__(self):
        return "PENDING"


# Marks a lesson lookup that has not resolved yet
PENDING = _Pending()


@dataclass(frozen=True)
class CardSource:
    day: Optional[int]
    cards: tuple = ()
    level: str = "A1"


NO_CARDS = CardSource(day=None)


def _lesson_cards(lesson) -> list:
    return (lesson or {}).get("flashcards") or []


def choose_card_source(target_day: int, current=PENDING, previous=PENDING) -> Optional[CardSource]:
    """Decide where the cards for ``target_day`` come from.

    ``current`` and ``previous`` are the lessons for ``target_day`` and the day
    before, each either a resolved lesson (dict or None) or ``PENDING``.
    Returns None while the answer still depends on a pending lookup, so a
    caller never settles on NO_CARDS before both lookups are in.
    """
    if current is PENDING:
        return None
    cards = _lesson_cards(current)
    if cards:
        return CardSource(target_day, tuple(cards), current.get("level") or "A1")
    if target_day <= 1:
        return NO_CARDS
    if previous is PENDING:
        return None
    cards = _lesson_cards(previous)
    if cards:
        logger.info("No flashcards for day %s, using day %s", target_day, target_day - 1)
        return CardSource(target_day - 1, tuple(cards), previous.get("level") or "A1")
    return NO_CARDS


def load_card_source(db_path: str, target_day: int) -> CardSource:
    current = get_lesson(db_path, target_day)
    previous = None
    if target_day > 1 and not _lesson_cards(current):
        previous = get_lesson(db_path, target_day - 1)
    return choose_card_source(target_day, current, previous)


def normalize_cards(raw_cards, source_day: Optional[int], level: str = "A1") -> list[Flashcard]:
    """Turn lesson payload cards into Flashcards, in payload order.

    Cards without an id get ``card_<n>`` from their position in the payload.
    """
    cards = []
    for index, raw in enumerate(raw_cards):
        cards.append(Flashcard(
            id=str(raw.get("id") or f"card_{index + 1}"),
            word=str(raw.get("front") or raw.get("word") or ""),
            translation=str(raw.get("back") or raw.get("translation") or ""),
            example=str(raw.get("example") or ""),
            source_day=source_day,
            level=level,
        ))
    return cards


@dataclass
class PendingAdvance:
    """Queue change waiting for the pacing delay to elapse."""
    queue: list = field(default_factory=list)
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ReviewSession:
    def __init__(self, store: SessionStore, user_id: str, source: CardSource, rng=None):
        self.store = store
        self.user_id = user_id
        self.day = source.day
        self.cards = normalize_cards(source.cards, source.day, source.level)
        self.state = SessionState()
        self.status = SessionStatus.LOADING
        self.revealed = False
        self._rng = rng or random
        self._pending: Optional[PendingAdvance] = None

    @property
    def current_card(self) -> Optional[Flashcard]:
        return self.state.current_card

    @property
    def queue(self) -> list[Flashcard]:
        return self.state.queue

    @property
    def stats(self) -> SessionStats:
        return self.state.stats

    @property
    def advance_pending(self) -> bool:
        return self._pending is not None

    def start(self) -> "ReviewSession":
        """Resume the saved session if it still has cards queued, else start fresh."""
        if not self.cards:
            self.status = SessionStatus.NO_CARDS
            return self
        saved = self._load_saved()
        if saved is not None and saved.queue:
            self._resume(saved)
        else:
            self._start_fresh()
        return self

    def _load_saved(self) -> Optional[SessionState]:
        try:
            return self.store.load(self.user_id, self.day)
        except CorruptSessionError as e:
            logger.warning("Discarding saved review session: %s", e)
            self.store.clear(self.user_id, self.day)
            return None

    def _resume(self, saved: SessionState) -> None:
        head = saved.queue[0]
        if saved.current_card is None or saved.current_card.id != head.id:
            saved.current_card = head
        self.state = saved
        self.revealed = False
        self.status = SessionStatus.ACTIVE
        logger.info("Resumed review for %s day %s with %d cards queued", self.user_id, self.day, len(saved.queue))

    def _start_fresh(self) -> None:
        queue = list(self.cards)
        self._rng.shuffle(queue)
        self.state = SessionState(
            card_progress={card.id: CardProgress() for card in self.cards},
            queue=queue,
            current_card=queue[0],
        )
        self.revealed = False
        self.status = SessionStatus.ACTIVE
        logger.info("Started review for %s day %s with %d cards", self.user_id, self.day, len(queue))

    def flip(self) -> bool:
        if self.status is SessionStatus.ACTIVE and self.current_card is not None and self._pending is None:
            self.revealed = not self.revealed
        return self.revealed

    def answer(self, is_correct: bool) -> Optional[PendingAdvance]:
        """Record an answer for the revealed current card.

        Stats, card progress and the reordered queue are persisted right away.
        The in-memory queue moves on when the returned advance is applied.
        Returns None (and changes nothing) when no answer is accepted.
        """
        card = self.current_card
        if self.status is not SessionStatus.ACTIVE or card is None:
            return None
        if not self.revealed or self._pending is not None:
            return None

        # Work on copies; self.state only changes once the save succeeds
        stats = replace(self.state.stats)
        if is_correct:
            stats.correct += 1
        else:
            stats.incorrect += 1
        progress = replace(self.state.card_progress.get(card.id) or CardProgress())
        progress.record(is_correct, datetime.now().isoformat())
        card_progress = {**self.state.card_progress, card.id: progress}

        new_queue = requeue(self.state.queue, is_correct, progress.correct_count)
        self.store.save(self.user_id, self.day, SessionState(
            stats=stats,
            card_progress=card_progress,
            queue=new_queue,
            current_card=new_queue[0] if new_queue else None,
        ))
        self.state.stats = stats
        self.state.card_progress = card_progress
        self._pending = PendingAdvance(queue=new_queue)
        return self._pending

    def advance(self, pending: Optional[PendingAdvance] = None) -> bool:
        """Apply a pending advance; stale or cancelled ones are dropped."""
        pending = pending or self._pending
        if pending is None or pending.cancelled or pending is not self._pending:
            return False
        self._pending = None
        self.state.queue = pending.queue
        self.state.current_card = pending.queue[0] if pending.queue else None
        self.revealed = False
        if not pending.queue:
            self.status = SessionStatus.COMPLETED
            logger.info(
                "Review for %s day %s completed: %d correct, %d incorrect",
                self.user_id, self.day, self.stats.correct, self.stats.incorrect,
            )
        return True

    def answer_and_advance(self, is_correct: bool) -> bool:
        pending = self.answer(is_correct)
        return pending is not None and self.advance(pending)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def reset(self) -> None:
        """Reshuffle every card and zero the session, dropping saved state."""
        if self.status not in (SessionStatus.ACTIVE, SessionStatus.COMPLETED):
            return
        self._cancel_pending()
        self.store.clear(self.user_id, self.day)
        self._start_fresh()

    def close(self) -> None:
        self._cancel_pending()

    def summary(self) -> dict:
        states = [p.state for p in self.state.card_progress.values()]
        total = len(self.cards)
        answered = self.stats.answered
        return {
            "total": total,
            "new": states.count(CardState.NEW),
            "learning": states.count(CardState.LEARNING),
            "mastered": states.count(CardState.MASTERED),
            "answered": answered,
            "correct": self.stats.correct,
            "incorrect": self.stats.incorrect,
            "progress": round(answered / total * 100) if total else 0,
        }


def open_review(db_path: str, user_id: str, target_day: int, rng=None) -> ReviewSession:
    """Load cards for ``target_day`` (or the day before) and start a session."""
    source = load_card_source(db_path, target_day)
    return ReviewSession(SessionStore(db_path), user_id, source, rng=rng).start()
