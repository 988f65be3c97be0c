"""
Deck-level helpers built on top of card scheduling state.

Pure functions; "now" is always a parameter defaulting to the wall clock.
"""

from studyflow.application.stats.analytics import get_local_day_start
from studyflow.domain import clock
from studyflow.domain.constants import (
    DAY_IN_MS,
    DEFAULT_EASE_FACTOR,
    LEARNING_REPETITIONS,
    MASTERED_INTERVAL_DAYS,
    MINUTE_IN_MS,
)
from studyflow.domain.stats.models import CardSnapshot, DeckStats


def _is_due(card: CardSnapshot, now: int) -> bool:
    return not card.next_review_at or card.next_review_at <= now


def calculate_deck_stats(
    cards: list[CardSnapshot],
    now: int | None = None,
    tz_offset_minutes: int = 0,
) -> DeckStats:
    """
    Summarize where every card of a deck stands.

    Args:
        cards: Cards of the deck.
        now: Reference time as epoch ms.
        tz_offset_minutes: Caller's offset east of UTC, used for "due today".
    """
    if now is None:
        now = clock.now_ms()
    end_of_day = get_local_day_start(now, tz_offset_minutes) + DAY_IN_MS - 1

    new_cards = learning_cards = review_cards = 0
    due_now = due_today = mastered_cards = 0
    ease_total = 0.0
    ease_count = 0

    for card in cards:
        repetitions = card.repetitions or 0
        if repetitions == 0:
            new_cards += 1
        elif repetitions < LEARNING_REPETITIONS:
            learning_cards += 1
        else:
            review_cards += 1

        if (card.interval or 0) > MASTERED_INTERVAL_DAYS:
            mastered_cards += 1

        if _is_due(card, now):
            due_now += 1
        elif card.next_review_at <= end_of_day:
            due_today += 1

        if card.ease_factor:
            ease_total += card.ease_factor
            ease_count += 1

    return DeckStats(
        total_cards=len(cards),
        new_cards=new_cards,
        learning_cards=learning_cards,
        review_cards=review_cards,
        due_now=due_now,
        due_today=due_today,
        average_ease_factor=ease_total / ease_count if ease_count else DEFAULT_EASE_FACTOR,
        mastered_cards=mastered_cards,
    )


def sort_cards_for_study(
    cards: list[CardSnapshot], now: int | None = None
) -> list[CardSnapshot]:
    """
    Order cards for a study session.

    1. Due cards, already-reviewed before new, most overdue first
    2. Future cards, soonest first
    """
    if now is None:
        now = clock.now_ms()

    def key(card: CardSnapshot) -> tuple[int, int, int]:
        due = _is_due(card, now)
        is_new = not card.repetitions
        return (0 if due else 1, 1 if (due and is_new) else 0, card.next_review_at or 0)

    return sorted(cards, key=key)


def _plural(count: int, unit: str) -> str:
    return f"Due in {count} {unit}{'' if count == 1 else 's'}"


def describe_next_review(next_review_at: int, now: int | None = None) -> str:
    """Human-readable text for when a card is due next."""
    if now is None:
        now = clock.now_ms()
    diff = next_review_at - now
    if diff <= 0:
        return "Due now"

    minutes = diff // MINUTE_IN_MS
    hours = diff // (60 * MINUTE_IN_MS)
    days = diff // DAY_IN_MS

    if minutes < 60:
        return _plural(minutes, "minute")
    if hours < 24:
        return _plural(hours, "hour")
    if days == 1:
        return "Due tomorrow"
    if days < 7:
        return f"Due in {days} days"
    if days < 30:
        return _plural(days // 7, "week")
    return _plural(days // 30, "month")
