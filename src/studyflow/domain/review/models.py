"""
Domain models for review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

import math
from dataclasses import dataclass
from enum import Enum

from studyflow.domain.constants import DEFAULT_EASE_FACTOR


class Rating(str, Enum):
    """Coarse recall rating chosen by the user after flipping a card."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# SM-2 quality (q) for each rating. Fixed, not configurable.
QUALITY_BY_RATING: dict[Rating, int] = {
    Rating.EASY: 5,
    Rating.MEDIUM: 3,
    Rating.HARD: 1,
}


@dataclass(frozen=True)
class CardScheduleState:
    """
    Scheduling state of a single flashcard.

    Owned by the caller; the scheduler only ever builds new instances.

    Attributes:
        ease_factor: Interval growth multiplier (>= 1.3 after any review).
        interval: Whole days until the next review.
        repetitions: Reviews received since creation. Never decreases.
        next_review_at: Epoch ms of the next review, derived from interval.
        last_rating: Most recent rating, informational only.
    """

    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0
    repetitions: int = 0
    next_review_at: int | None = None
    last_rating: Rating | None = None

    def __post_init__(self):
        if not math.isfinite(self.ease_factor) or self.ease_factor <= 0:
            raise ValueError(f"ease_factor must be a positive number, got {self.ease_factor}")
        if not math.isfinite(self.interval) or self.interval < 0:
            raise ValueError(f"interval must be >= 0, got {self.interval}")
        if self.repetitions < 0:
            raise ValueError(f"repetitions must be >= 0, got {self.repetitions}")

    @classmethod
    def new(cls) -> "CardScheduleState":
        """State for a freshly created card."""
        return cls()


@dataclass(frozen=True)
class ScheduleResult:
    """Outcome of scheduling one review."""

    rating: Rating
    quality: int
    ease_factor: float
    interval: int
    repetitions: int
    next_review_at: int
    reviewed_at: int

    def to_state(self) -> CardScheduleState:
        """The state the caller should persist for the card."""
        return CardScheduleState(
            ease_factor=self.ease_factor,
            interval=self.interval,
            repetitions=self.repetitions,
            next_review_at=self.next_review_at,
            last_rating=self.rating,
        )
