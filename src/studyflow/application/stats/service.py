"""
Study Analytics Service: Application layer orchestrator.

Coordinates fetching cards and study events from the repository and feeding
them through the pure analytics and deck helpers.
"""

import logging
from collections.abc import Callable

from studyflow.application.config import AppConfig
from studyflow.application.review.deck import calculate_deck_stats
from studyflow.application.review.scheduler import round_half_up
from studyflow.domain import clock as default_clock
from studyflow.domain.constants import (
    DAY_IN_MS,
    DEFAULT_EASE_FACTOR,
    LEARNING_REPETITIONS,
    WEAK_TOPIC_FRONT_LEN,
)
from studyflow.domain.review.models import Rating
from studyflow.domain.stats.models import (
    BurnoutLevel,
    BurnoutStats,
    DailyActivity,
    DeckStats,
    QuizPerformance,
    ReadinessForecast,
    WeakTopic,
)
from studyflow.domain.stats.ports import StudyRepository

from .analytics import (
    calculate_streak_days,
    compute_predicted_ready_date,
    count_by_local_day,
    get_local_day_start,
)

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Application service for study progress analytics.

    Follows Dependency Inversion: depends on the StudyRepository abstraction,
    not concrete adapter implementations.
    """

    def __init__(
        self,
        repo: StudyRepository,
        config: AppConfig | None = None,
        clock: Callable[[], int] | None = None,
    ):
        """
        Args:
            repo: The repository (port) for fetching cards and events.
            config: Thresholds and windows; defaults if not provided.
            clock: Returns "now" as epoch ms; wall clock if not provided.
        """
        self._repo = repo
        self._config = config or AppConfig()
        self._clock = clock or default_clock.now_ms

    async def get_daily_activity(
        self, user_id: str, start: int, end: int, tz_offset_minutes: int
    ) -> list[DailyActivity]:
        """
        Count study events per local day between start and end (inclusive).

        Returns:
            One DailyActivity per day with activity, sorted by date.
        """
        events = await self._repo.get_study_events(user_id, start, end)
        counts = count_by_local_day((e.timestamp for e in events), tz_offset_minutes)
        return [DailyActivity(date=day, count=n) for day, n in sorted(counts.items())]

    async def get_burnout_stats(self, user_id: str, tz_offset_minutes: int) -> BurnoutStats:
        """
        Current study streak and how intense it has become.

        Looks back burnout_window_days; a longer streak is capped at that window.
        """
        now = self._clock()
        start = now - self._config.burnout_window_days * DAY_IN_MS
        events = await self._repo.get_study_events(user_id, start, now)

        days = {get_local_day_start(e.timestamp, tz_offset_minutes) for e in events}
        streak = calculate_streak_days(days, get_local_day_start(now, tz_offset_minutes))
        logger.debug(f"Streak for user={user_id}: {streak} days from {len(events)} events")

        return BurnoutStats(streak_days=streak, level=self._burnout_level(streak))

    def _burnout_level(self, streak_days: int) -> BurnoutLevel:
        if streak_days >= self._config.burnout_high_streak:
            return "high"
        if streak_days >= self._config.burnout_medium_streak:
            return "medium"
        return "low"

    async def get_readiness_forecast(
        self, deck_id: str, exam_date: int | None = None
    ) -> ReadinessForecast:
        """
        Predict when a deck will be fully learned at the recent review pace.

        A card still counts as remaining while it is learning, has no due
        date, or is due.
        """
        now = self._clock()
        cards = await self._repo.get_deck_cards(deck_id)
        cards_remaining = sum(
            1
            for c in cards
            if (c.repetitions or 0) < LEARNING_REPETITIONS
            or not c.next_review_at
            or c.next_review_at <= now
        )

        window = self._config.forecast_window_days
        recent = await self._repo.get_review_events(deck_id, now - window * DAY_IN_MS, now)
        pace = len(recent) / window

        predicted = compute_predicted_ready_date(cards_remaining, pace, now)
        if predicted is None:
            logger.debug(f"No reviews in the last {window} days for deck={deck_id}")

        return ReadinessForecast(
            predicted_ready_date=predicted,
            cards_remaining=cards_remaining,
            exam_date=exam_date,
        )

    async def get_weak_topics(self, deck_id: str) -> list[WeakTopic]:
        """
        Cards the user struggles with most.

        Score = 1 / ease_factor + share of recent reviews rated hard.
        """
        now = self._clock()
        cards = await self._repo.get_deck_cards(deck_id)
        start = now - self._config.weak_topic_window_days * DAY_IN_MS
        events = await self._repo.get_review_events(deck_id, start, now)

        hard_counts: dict[str, int] = {}
        total_counts: dict[str, int] = {}
        for event in events:
            if event.card_id is None:
                continue
            total_counts[event.card_id] = total_counts.get(event.card_id, 0) + 1
            if event.rating == Rating.HARD:
                hard_counts[event.card_id] = hard_counts.get(event.card_id, 0) + 1

        scored = []
        for card in cards:
            ease_factor = card.ease_factor or DEFAULT_EASE_FACTOR
            total = total_counts.get(card.card_id, 0)
            hard_rate = hard_counts.get(card.card_id, 0) / total if total else 0.0
            scored.append((1 / ease_factor + hard_rate, card, ease_factor))

        scored.sort(key=lambda item: item[0], reverse=True)
        return [
            WeakTopic(
                card_id=card.card_id,
                topic=card.front[:WEAK_TOPIC_FRONT_LEN],
                ease_factor=ease_factor,
            )
            for _, card, ease_factor in scored[: self._config.weak_topic_limit]
        ]

    async def get_deck_performance(self, deck_id: str) -> list[QuizPerformance]:
        """
        Quiz scores on a deck over time, oldest first.

        Quizzes without a positive question count are skipped.
        """
        results = await self._repo.get_quiz_results(deck_id)
        points = [
            QuizPerformance(
                date=r.timestamp,
                score_percent=round_half_up((r.score or 0) / r.total_questions * 100),
            )
            for r in results
            if (r.total_questions or 0) > 0
        ]
        return sorted(points, key=lambda p: p.date)

    async def get_deck_stats(self, deck_id: str, tz_offset_minutes: int) -> DeckStats:
        """Deck statistics as of now."""
        cards = await self._repo.get_deck_cards(deck_id)
        return calculate_deck_stats(cards, now=self._clock(), tz_offset_minutes=tz_offset_minutes)
