# Application Review Package
from .deck import calculate_deck_stats, describe_next_review, sort_cards_for_study
from .scheduler import schedule_next_review_from_rating

__all__ = [
    "schedule_next_review_from_rating",
    "calculate_deck_stats",
    "sort_cards_for_study",
    "describe_next_review",
]
