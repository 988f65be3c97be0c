"""
Domain models for study analytics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from studyflow.domain.review.models import Rating


class EventKind(str, Enum):
    """Kinds of study activity that count toward daily buckets and streaks."""

    REVIEW = "review"
    QUIZ = "quiz"
    RECORDING = "recording"


@dataclass(frozen=True)
class StudyEvent:
    """
    A single timestamped study event.

    Attributes:
        timestamp: Epoch ms when the activity happened.
        kind: What kind of activity it was.
        user_id: Owner of the event.
        deck_id: Deck of the reviewed card or of the quiz.
        card_id: Reviewed card (reviews only).
        rating: Rating given (reviews only).
        score: Correct answers (quizzes only).
        total_questions: Questions asked (quizzes only).
    """

    timestamp: int
    kind: EventKind = EventKind.REVIEW
    user_id: str | None = None
    deck_id: str | None = None
    card_id: str | None = None
    rating: Rating | None = None
    score: int | None = None
    total_questions: int | None = None


@dataclass(frozen=True)
class CardSnapshot:
    """
    A flashcard as read from storage for analytics.

    Scheduling fields are optional because cards created before their first
    review may not carry them yet.
    """

    card_id: str
    deck_id: str
    front: str = ""
    ease_factor: float | None = None
    interval: int | None = None
    repetitions: int | None = None
    next_review_at: int | None = None


@dataclass(frozen=True)
class DailyActivity:
    date: int  # Local day bucket (epoch ms)
    count: int


@dataclass(frozen=True)
class QuizPerformance:
    date: int  # Quiz completion time (epoch ms)
    score_percent: int


BurnoutLevel = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class BurnoutStats:
    streak_days: int
    level: BurnoutLevel


@dataclass(frozen=True)
class ReadinessForecast:
    predicted_ready_date: int | None  # None when there is no review pace yet
    cards_remaining: int
    exam_date: int | None = None


@dataclass(frozen=True)
class WeakTopic:
    card_id: str
    topic: str
    ease_factor: float


@dataclass
class DeckStats:
    """Aggregate scheduling picture of a deck."""

    total_cards: int
    new_cards: int  # Never reviewed
    learning_cards: int  # 0 < repetitions < 3
    review_cards: int  # repetitions >= 3
    due_now: int
    due_today: int  # Due later today (local)
    average_ease_factor: float
    mastered_cards: int  # interval > 21 days
