"""
File Study Repository: Infrastructure adapter for snapshot files.

Implements StudyRepository over a YAML (or JSON) document of the form:

    cards:
      - id: c1
        deck_id: bio
        front: "What is ATP?"
        ease_factor: 2.5
        interval: 6
        repetitions: 2
        next_review_at: 1770076800000
    events:
      - kind: review
        timestamp: 1770076800000
        user_id: u1
        deck_id: bio
        card_id: c1
        rating: hard
      - kind: quiz
        timestamp: 1770163200000
        user_id: u1
        deck_id: bio
        score: 8
        total_questions: 10

The file is read once, on first access.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from studyflow.domain.review.models import Rating
from studyflow.domain.stats.models import CardSnapshot, EventKind, StudyEvent
from studyflow.domain.stats.ports import StudyRepository

logger = logging.getLogger(__name__)


class FileStudyRepository(StudyRepository):
    """
    Serves cards and study events from a snapshot file held in memory.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._cards: list[CardSnapshot] | None = None
        self._events: list[StudyEvent] | None = None

    def _load(self) -> None:
        if self._cards is not None:
            return

        if not self.path.exists():
            raise FileNotFoundError(f"Study data file not found: {self.path}")

        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Could not parse {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping at the top of {self.path}")

        self._cards = [
            c for c in (self._parse_card(raw) for raw in data.get("cards") or []) if c
        ]
        events = [
            e for e in (self._parse_event(raw) for raw in data.get("events") or []) if e
        ]
        self._events = sorted(events, key=lambda e: e.timestamp)
        logger.info(
            f"Loaded {len(self._cards)} cards and {len(self._events)} events from {self.path}"
        )

    def _parse_card(self, raw: Any) -> CardSnapshot | None:
        try:
            return CardSnapshot(
                card_id=str(raw["id"]),
                deck_id=str(raw["deck_id"]),
                front=str(raw.get("front") or ""),
                ease_factor=_opt(float, raw.get("ease_factor")),
                interval=_opt(_whole, raw.get("interval")),
                repetitions=_opt(_whole, raw.get("repetitions")),
                next_review_at=_opt(_whole, raw.get("next_review_at")),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping malformed card entry {raw!r}: {e}")
            return None

    def _parse_event(self, raw: Any) -> StudyEvent | None:
        try:
            rating = raw.get("rating")
            return StudyEvent(
                timestamp=_whole(raw["timestamp"]),
                kind=EventKind(raw.get("kind", EventKind.REVIEW.value)),
                user_id=_opt(str, raw.get("user_id")),
                deck_id=_opt(str, raw.get("deck_id")),
                card_id=_opt(str, raw.get("card_id")),
                rating=Rating(rating) if rating else None,
                score=_opt(_whole, raw.get("score")),
                total_questions=_opt(_whole, raw.get("total_questions")),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Skipping malformed event entry {raw!r}: {e}")
            return None

    async def get_study_events(self, user_id: str, start: int, end: int) -> list[StudyEvent]:
        self._load()
        return [
            e for e in self._events if e.user_id == user_id and start <= e.timestamp <= end
        ]

    async def get_deck_cards(self, deck_id: str) -> list[CardSnapshot]:
        self._load()
        return [c for c in self._cards if c.deck_id == deck_id]

    async def get_review_events(self, deck_id: str, start: int, end: int) -> list[StudyEvent]:
        self._load()
        return [
            e
            for e in self._events
            if e.kind == EventKind.REVIEW
            and e.deck_id == deck_id
            and start <= e.timestamp <= end
        ]

    async def get_quiz_results(self, deck_id: str) -> list[StudyEvent]:
        self._load()
        return [e for e in self._events if e.kind == EventKind.QUIZ and e.deck_id == deck_id]


def _opt(cast, value):
    return None if value is None else cast(value)


def _whole(value) -> int:
    """Integer field value; booleans and fractional numbers are malformed."""
    if isinstance(value, bool):
        raise ValueError(f"expected a whole number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected a whole number, got {value!r}")
    return int(value)
