# Domain Stats Package
from .models import (
    BurnoutStats,
    CardSnapshot,
    DailyActivity,
    DeckStats,
    EventKind,
    QuizPerformance,
    ReadinessForecast,
    StudyEvent,
    WeakTopic,
)
from .ports import StudyRepository

__all__ = [
    "StudyEvent",
    "EventKind",
    "CardSnapshot",
    "DailyActivity",
    "BurnoutStats",
    "ReadinessForecast",
    "WeakTopic",
    "QuizPerformance",
    "DeckStats",
    "StudyRepository",
]
