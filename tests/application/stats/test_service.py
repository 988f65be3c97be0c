from unittest.mock import AsyncMock

import pytest

from studyflow.application.config import AppConfig
from studyflow.application.stats.service import AnalyticsService
from studyflow.domain.constants import DAY_IN_MS
from studyflow.domain.review.models import Rating
from studyflow.domain.stats.models import (
    CardSnapshot,
    DailyActivity,
    EventKind,
    QuizPerformance,
    StudyEvent,
)

HOUR = 60 * 60 * 1000
TODAY = 20_000 * DAY_IN_MS
NOW = TODAY + 15 * HOUR


@pytest.fixture
def mock_repo():
    return AsyncMock()


@pytest.fixture
def service(mock_repo, mock_home):
    return AnalyticsService(repo=mock_repo, config=AppConfig(), clock=lambda: NOW)


def events_on_days(*days_ago):
    return [StudyEvent(timestamp=TODAY - d * DAY_IN_MS + 9 * HOUR) for d in days_ago]


@pytest.mark.asyncio
async def test_daily_activity_sorted_by_day(service, mock_repo):
    mock_repo.get_study_events.return_value = [
        StudyEvent(timestamp=TODAY + 9 * HOUR, kind=EventKind.QUIZ),
        StudyEvent(timestamp=TODAY - DAY_IN_MS + 10 * HOUR),
        StudyEvent(timestamp=TODAY - DAY_IN_MS + 20 * HOUR, kind=EventKind.RECORDING),
    ]

    activity = await service.get_daily_activity("u1", 0, NOW, 0)

    assert activity == [
        DailyActivity(date=TODAY - DAY_IN_MS, count=2),
        DailyActivity(date=TODAY, count=1),
    ]
    mock_repo.get_study_events.assert_called_once_with("u1", 0, NOW)


@pytest.mark.asyncio
async def test_daily_activity_empty(service, mock_repo):
    mock_repo.get_study_events.return_value = []
    assert await service.get_daily_activity("u1", 0, NOW, 0) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "days_ago,streak,level",
    [
        (range(0, 3), 3, "low"),
        (range(0, 7), 7, "medium"),
        (range(0, 12), 12, "high"),
        ([1, 2, 3], 0, "low"),
        ([0, 1, 3, 4, 5, 6, 7, 8, 9], 2, "low"),
    ],
)
async def test_burnout_levels(service, mock_repo, days_ago, streak, level):
    mock_repo.get_study_events.return_value = events_on_days(*days_ago)

    stats = await service.get_burnout_stats("u1", 0)

    assert stats.streak_days == streak
    assert stats.level == level


@pytest.mark.asyncio
async def test_burnout_queries_window(service, mock_repo):
    mock_repo.get_study_events.return_value = []
    await service.get_burnout_stats("u1", 0)
    mock_repo.get_study_events.assert_called_once_with("u1", NOW - 60 * DAY_IN_MS, NOW)


@pytest.mark.asyncio
async def test_burnout_respects_time_zone(service, mock_repo):
    # At UTC+10 "now" is already tomorrow while a 13:00 UTC event is still today
    mock_repo.get_study_events.return_value = [StudyEvent(timestamp=TODAY + 13 * HOUR)]

    assert (await service.get_burnout_stats("u1", 0)).streak_days == 1
    assert (await service.get_burnout_stats("u1", 600)).streak_days == 0


@pytest.fixture
def deck_cards():
    return [
        CardSnapshot("a", "bio", repetitions=0),
        CardSnapshot("b", "bio", repetitions=5, next_review_at=NOW + 3 * DAY_IN_MS),
        CardSnapshot("c", "bio", repetitions=5, next_review_at=NOW - HOUR),
        CardSnapshot("d", "bio", repetitions=4),
    ]


@pytest.mark.asyncio
async def test_readiness_forecast(service, mock_repo, deck_cards):
    mock_repo.get_deck_cards.return_value = deck_cards
    mock_repo.get_review_events.return_value = [StudyEvent(timestamp=NOW - HOUR)] * 14

    forecast = await service.get_readiness_forecast("bio", exam_date=NOW + 30 * DAY_IN_MS)

    # 3 remaining at 2 cards/day -> 2 days
    assert forecast.cards_remaining == 3
    assert forecast.predicted_ready_date == NOW + 2 * DAY_IN_MS
    assert forecast.exam_date == NOW + 30 * DAY_IN_MS
    mock_repo.get_review_events.assert_called_once_with("bio", NOW - 7 * DAY_IN_MS, NOW)


@pytest.mark.asyncio
async def test_readiness_forecast_without_reviews(service, mock_repo, deck_cards):
    mock_repo.get_deck_cards.return_value = deck_cards
    mock_repo.get_review_events.return_value = []

    forecast = await service.get_readiness_forecast("bio")

    assert forecast.predicted_ready_date is None
    assert forecast.cards_remaining == 3


def review(card_id, rating):
    return StudyEvent(timestamp=NOW - HOUR, card_id=card_id, deck_id="bio", rating=rating)


@pytest.mark.asyncio
async def test_weak_topics_ranked(service, mock_repo):
    mock_repo.get_deck_cards.return_value = [
        CardSnapshot("c1", "bio", front="low ease", ease_factor=1.3),
        CardSnapshot("c2", "bio", front="often hard", ease_factor=2.5),
        CardSnapshot("c3", "bio", front="never reviewed"),
        CardSnapshot("c4", "bio", front="strong", ease_factor=2.8),
    ]
    mock_repo.get_review_events.return_value = [
        review("c2", Rating.HARD),
        review("c2", Rating.EASY),
        review("c4", Rating.EASY),
    ]

    topics = await service.get_weak_topics("bio")

    assert [t.card_id for t in topics] == ["c2", "c1", "c3", "c4"]
    assert topics[2].ease_factor == 2.5
    mock_repo.get_review_events.assert_called_once_with("bio", NOW - 30 * DAY_IN_MS, NOW)


@pytest.mark.asyncio
async def test_weak_topics_limit_and_truncation(mock_repo, mock_home):
    service = AnalyticsService(
        repo=mock_repo, config=AppConfig(weak_topic_limit=2), clock=lambda: NOW
    )
    mock_repo.get_deck_cards.return_value = [
        CardSnapshot(f"c{i}", "bio", front="x" * 100, ease_factor=1.3 + i / 10) for i in range(6)
    ]
    mock_repo.get_review_events.return_value = []

    topics = await service.get_weak_topics("bio")

    assert [t.card_id for t in topics] == ["c0", "c1"]
    assert len(topics[0].topic) == 80


@pytest.mark.asyncio
async def test_deck_stats(service, mock_repo, deck_cards):
    mock_repo.get_deck_cards.return_value = deck_cards

    stats = await service.get_deck_stats("bio", 0)

    assert stats.total_cards == 4
    assert stats.new_cards == 1
    assert stats.review_cards == 3
    assert stats.due_now == 3
    mock_repo.get_deck_cards.assert_called_once_with("bio")


def quiz(timestamp, score, total):
    return StudyEvent(
        timestamp=timestamp, kind=EventKind.QUIZ, deck_id="bio",
        score=score, total_questions=total,
    )


@pytest.mark.asyncio
async def test_deck_performance_oldest_first(service, mock_repo):
    mock_repo.get_quiz_results.return_value = [
        quiz(NOW, 7, 8),
        quiz(NOW - 2 * DAY_IN_MS, 1, 3),
        quiz(NOW - DAY_IN_MS, 5, 10),
    ]

    points = await service.get_deck_performance("bio")

    # 1/3 -> 33, 5/10 -> 50, 7/8 = 87.5 -> 88 (half-up)
    assert points == [
        QuizPerformance(date=NOW - 2 * DAY_IN_MS, score_percent=33),
        QuizPerformance(date=NOW - DAY_IN_MS, score_percent=50),
        QuizPerformance(date=NOW, score_percent=88),
    ]
    mock_repo.get_quiz_results.assert_called_once_with("bio")


@pytest.mark.asyncio
async def test_deck_performance_skips_quizzes_without_questions(service, mock_repo):
    mock_repo.get_quiz_results.return_value = [
        quiz(NOW - HOUR, 0, 0),
        quiz(NOW - 2 * HOUR, 3, None),
        quiz(NOW, None, 4),
    ]

    points = await service.get_deck_performance("bio")

    assert points == [QuizPerformance(date=NOW, score_percent=0)]
