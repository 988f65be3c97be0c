"""
SM-2 review scheduler.

Pure computation: given a rating and a card's current state, produce the next
state. No I/O; "now" is a parameter.

Quality by rating: easy=5, medium=3, hard=1. Unlike canonical SM-2 there is no
failing grade, so repetitions only ever grow and a bad review shows up solely
as a lower ease factor.
"""

import math

from studyflow.domain import clock
from studyflow.domain.constants import (
    DAY_IN_MS,
    FIRST_INTERVAL_DAYS,
    MIN_EASE_FACTOR,
    SECOND_INTERVAL_DAYS,
)
from studyflow.domain.review.models import (
    QUALITY_BY_RATING,
    CardScheduleState,
    Rating,
    ScheduleResult,
)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return math.floor(value + 0.5)


def next_ease_factor(ease_factor: float, quality: int) -> float:
    """
    SM-2 ease update, floored at MIN_EASE_FACTOR.

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    """
    penalty = 5 - quality
    updated = ease_factor + (0.1 - penalty * (0.08 + penalty * 0.02))
    return max(updated, MIN_EASE_FACTOR)


def next_interval(state: CardScheduleState) -> int:
    """
    Interval in days after the review, keyed on how many reviews came before.

    The 1-day and 6-day bootstrap steps ignore the rating. After that the
    interval grows by the ease factor the card carried into this review.
    """
    if state.repetitions == 0:
        return FIRST_INTERVAL_DAYS
    if state.repetitions == 1:
        return SECOND_INTERVAL_DAYS
    return round_half_up(state.interval * state.ease_factor)


def schedule_next_review_from_rating(
    rating: Rating | str,
    state: CardScheduleState,
    now: int | None = None,
) -> ScheduleResult:
    """
    Compute the card's state after one review.

    Args:
        rating: "easy", "medium" or "hard" (or the Rating member).
        state: Current scheduling state of the card.
        now: Review time as epoch ms. Defaults to the wall clock.

    Returns:
        ScheduleResult with the new ease factor, interval, repetition count
        and next due timestamp.

    Raises:
        ValueError: If the rating is not one of the three known values.
    """
    rating = Rating(rating)
    if now is None:
        now = clock.now_ms()

    quality = QUALITY_BY_RATING[rating]
    interval = next_interval(state)
    ease_factor = next_ease_factor(state.ease_factor, quality)

    return ScheduleResult(
        rating=rating,
        quality=quality,
        ease_factor=ease_factor,
        interval=interval,
        repetitions=state.repetitions + 1,
        next_review_at=now + interval * DAY_IN_MS,
        reviewed_at=now,
    )
