from datetime import datetime, timezone

import pytest
import yaml

from studyflow.domain.constants import DAY_IN_MS

HOUR_IN_MS = 60 * 60 * 1000


def utc_ms(*args) -> int:
    """Epoch ms for a UTC datetime."""
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


# 2026-02-03 15:00 UTC
NOW = utc_ms(2026, 2, 3, 15)
TODAY = utc_ms(2026, 2, 3)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config
    monkeypatch.setenv("HOME", str(home))
    for var in ("STUDYFLOW_DATA_FILE", "STUDYFLOW_TZ_OFFSET_MINUTES", "STUDYFLOW_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def study_data():
    """A small deck with a four-day streak for user u1."""
    return {
        "cards": [
            {"id": "c1", "deck_id": "bio", "front": "What is ATP?", "repetitions": 0},
            {
                "id": "c2",
                "deck_id": "bio",
                "front": "Krebs cycle location",
                "ease_factor": 1.5,
                "interval": 6,
                "repetitions": 2,
                "next_review_at": NOW + 2 * DAY_IN_MS,
            },
            {
                "id": "c3",
                "deck_id": "bio",
                "front": "Define osmosis",
                "ease_factor": 2.7,
                "interval": 30,
                "repetitions": 5,
                "next_review_at": NOW + 20 * DAY_IN_MS,
            },
            {"id": "h1", "deck_id": "history", "front": "1066", "repetitions": 1},
        ],
        "events": [
            {"kind": "review", "timestamp": NOW - HOUR_IN_MS, "user_id": "u1",
             "deck_id": "bio", "card_id": "c2", "rating": "hard"},
            {"kind": "quiz", "timestamp": NOW - DAY_IN_MS, "user_id": "u1"},
            {"kind": "review", "timestamp": NOW - 2 * DAY_IN_MS, "user_id": "u1",
             "deck_id": "bio", "card_id": "c2", "rating": "easy"},
            {"kind": "recording", "timestamp": NOW - 3 * DAY_IN_MS, "user_id": "u1"},
            {"kind": "review", "timestamp": NOW - 3 * DAY_IN_MS + HOUR_IN_MS, "user_id": "u1",
             "deck_id": "bio", "card_id": "c3", "rating": "medium"},
            {"kind": "review", "timestamp": NOW - HOUR_IN_MS, "user_id": "u2",
             "deck_id": "history", "card_id": "h1", "rating": "easy"},
            {"kind": "quiz", "timestamp": NOW - 2 * DAY_IN_MS, "user_id": "u3",
             "deck_id": "bio", "score": 9, "total_questions": 12},
            {"kind": "quiz", "timestamp": NOW - 5 * DAY_IN_MS, "user_id": "u3",
             "deck_id": "bio", "score": 3, "total_questions": 8},
        ],
    }


@pytest.fixture
def study_file(tmp_path, study_data):
    path = tmp_path / "study.yaml"
    path.write_text(yaml.safe_dump(study_data), encoding="utf-8")
    return path


@pytest.fixture
def now():
    """Frozen "now" matching the study_data fixture (2026-02-03 15:00 UTC)."""
    return NOW


@pytest.fixture
def frozen_clock(monkeypatch, now):
    """Freeze the engine's wall clock at the study_data "now"."""
    monkeypatch.setattr("studyflow.domain.clock.now_ms", lambda: now)
    return now
