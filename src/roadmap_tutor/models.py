"""Data classes for the course and review domain model."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

MASTERY_THRESHOLD = 3


class DayStatus(str, Enum):
    LOCKED = "locked"
    AVAILABLE = "available"
    CURRENT = "current"
    COMPLETED = "completed"
    COMING_SOON = "coming_soon"


class CardState(str, Enum):
    NEW = "new"
    LEARNING = "learning"
    MASTERED = "mastered"


class SessionStatus(str, Enum):
    LOADING = "loading"
    NO_CARDS = "no_cards"
    ACTIVE = "active"
    COMPLETED = "completed"


def _as_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative")
    return value


@dataclass(frozen=True)
class Level:
    id: str
    name: str
    first_day: int
    last_day: int
    description: str = ""
    color: str = "white"

    @property
    def days(self) -> range:
        return range(self.first_day, self.last_day + 1)

    def __contains__(self, day: int) -> bool:
        return self.first_day <= day <= self.last_day


@dataclass
class UserProgress:
    user_id: str
    current_day: int = 1
    current_level: str = "A1"
    started_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Flashcard:
    id: str
    word: str
    translation: str
    example: str = ""
    source_day: Optional[int] = None
    level: str = "A1"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "word": self.word,
            "translation": self.translation,
            "example": self.example,
            "day": self.source_day,
            "level": self.level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Flashcard":
        if not isinstance(data, dict):
            raise TypeError(f"flashcard must be an object, got {type(data).__name__}")
        source_day = data.get("day")
        if source_day is not None:
            source_day = _as_int(source_day, "day")
        return cls(
            id=str(data["id"]),
            word=str(data["word"]),
            translation=str(data["translation"]),
            example=str(data.get("example") or ""),
            source_day=source_day,
            level=str(data.get("level") or "A1"),
        )


@dataclass
class CardProgress:
    correct_count: int = 0
    incorrect_count: int = 0
    review_count: int = 0
    last_seen_at: Optional[str] = None

    @property
    def state(self) -> CardState:
        if self.correct_count >= MASTERY_THRESHOLD:
            return CardState.MASTERED
        if self.review_count > 0:
            return CardState.LEARNING
        return CardState.NEW

    @property
    def is_mastered(self) -> bool:
        return self.state is CardState.MASTERED

    def record(self, is_correct: bool, seen_at: str) -> None:
        if is_correct:
            self.correct_count += 1
        else:
            self.incorrect_count += 1
        self.review_count += 1
        self.last_seen_at = seen_at

    def to_dict(self) -> dict:
        return {
            "correctCount": self.correct_count,
            "incorrectCount": self.incorrect_count,
            "reviewCount": self.review_count,
            "lastSeen": self.last_seen_at,
            "state": self.state.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CardProgress":
        # "state" is derived and ignored on read
        if not isinstance(data, dict):
            raise TypeError("card progress must be an object")
        return cls(
            correct_count=_as_int(data.get("correctCount", 0), "correctCount"),
            incorrect_count=_as_int(data.get("incorrectCount", 0), "incorrectCount"),
            review_count=_as_int(data.get("reviewCount", 0), "reviewCount"),
            last_seen_at=data.get("lastSeen"),
        )


@dataclass
class SessionStats:
    correct: int = 0
    incorrect: int = 0

    @property
    def answered(self) -> int:
        return self.correct + self.incorrect


@dataclass
class SessionState:
    stats: SessionStats = field(default_factory=SessionStats)
    card_progress: dict[str, CardProgress] = field(default_factory=dict)
    queue: list[Flashcard] = field(default_factory=list)
    current_card: Optional[Flashcard] = None
    last_updated: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "stats": {"correct": self.stats.correct, "incorrect": self.stats.incorrect},
            "cardProgress": {card_id: p.to_dict() for card_id, p in self.card_progress.items()},
            "queue": [card.to_dict() for card in self.queue],
            "currentCard": self.current_card.to_dict() if self.current_card else None,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SessionState":
        """Rebuild a session from its persisted form.

        Raises KeyError, TypeError or ValueError when the payload does not
        have the expected shape.
        """
        if not isinstance(data, dict):
            raise TypeError("session must be an object")
        stats = data.get("stats") or {}
        if not isinstance(stats, dict):
            raise TypeError("stats must be an object")
        progress = data.get("cardProgress") or {}
        if not isinstance(progress, dict):
            raise TypeError("cardProgress must be an object")
        queue = data.get("queue") or []
        if not isinstance(queue, list):
            raise TypeError("queue must be a list")
        current = data.get("currentCard")
        return cls(
            stats=SessionStats(
                correct=_as_int(stats.get("correct", 0), "correct"),
                incorrect=_as_int(stats.get("incorrect", 0), "incorrect"),
            ),
            card_progress={str(k): CardProgress.from_dict(v) for k, v in progress.items()},
            queue=[Flashcard.from_dict(c) for c in queue],
            current_card=Flashcard.from_dict(current) if current else None,
            last_updated=data.get("lastUpdated"),
        )
