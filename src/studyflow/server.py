import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from studyflow.application.review.scheduler import schedule_next_review_from_rating
from studyflow.application.stats.analytics import (
    calculate_streak_days,
    compute_predicted_ready_date,
    count_by_local_day,
)
from studyflow.consts import VERSION
from studyflow.domain.constants import DEFAULT_EASE_FACTOR
from studyflow.domain.review.models import CardScheduleState, Rating

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("studyflow.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"studyflow server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("studyflow server shutting down...")


app = FastAPI(
    title="studyflow",
    description="Review scheduling and study analytics API.",
    version=VERSION,
    lifespan=lifespan,
)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


# ---------------------------------------------------------------------------
# Pure engine endpoints
# ---------------------------------------------------------------------------


class ScheduleState(BaseModel):
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0
    repetitions: int = 0


class ScheduleRequest(BaseModel):
    rating: Rating
    state: ScheduleState = Field(default_factory=ScheduleState)
    now: int | None = None


class ScheduleResponse(BaseModel):
    quality: int
    ease_factor: float
    interval: int
    repetitions: int
    next_review_at: int


@app.post("/review/schedule", response_model=ScheduleResponse)
async def schedule_review(req: ScheduleRequest):
    """Compute a card's next scheduling state from a rating."""
    try:
        state = CardScheduleState(
            ease_factor=req.state.ease_factor,
            interval=req.state.interval,
            repetitions=req.state.repetitions,
        )
        result = schedule_next_review_from_rating(req.rating, state, now=req.now)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return ScheduleResponse(
        quality=result.quality,
        ease_factor=result.ease_factor,
        interval=result.interval,
        repetitions=result.repetitions,
        next_review_at=result.next_review_at,
    )


class DayCountsRequest(BaseModel):
    timestamps: list[int]
    tz_offset_minutes: int = 0


@app.post("/analytics/day-counts")
async def day_counts(req: DayCountsRequest):
    """Bucket timestamps by local day."""
    counts = count_by_local_day(req.timestamps, req.tz_offset_minutes)
    return [{"date": day, "count": n} for day, n in sorted(counts.items())]


class StreakRequest(BaseModel):
    days: list[int]
    today: int


@app.post("/analytics/streak")
async def streak(req: StreakRequest):
    return {"streak_days": calculate_streak_days(set(req.days), req.today)}


class ForecastRequest(BaseModel):
    cards_remaining: int = Field(ge=0)
    pace: float
    now: int | None = None


@app.post("/analytics/forecast")
async def forecast(req: ForecastRequest):
    """Linear ready-date forecast; null when there is no pace."""
    return {
        "predicted_ready_date": compute_predicted_ready_date(
            req.cards_remaining, req.pace, req.now
        )
    }


# ---------------------------------------------------------------------------
# Data-backed endpoints
# ---------------------------------------------------------------------------


def _get_service(data_file: str | None = None):
    """
    Analytics service over the configured data file.

    data_file lets any client that can reach the server read any YAML/JSON file
    the server process can open. Bind to localhost (the default) only.
    """
    from studyflow.application.config import resolve_config
    from studyflow.application.factory import get_study_repository
    from studyflow.application.stats.service import AnalyticsService

    config = resolve_config({"data_file": data_file})
    return AnalyticsService(get_study_repository(config), config), config


@app.get("/users/{user_id}/activity")
async def user_activity(
    user_id: str,
    start: int,
    end: int,
    tz_offset_minutes: int | None = None,
    data_file: str | None = None,
):
    """Daily study activity between start and end."""
    try:
        service, config = _get_service(data_file)
        tz = config.tz_offset_minutes if tz_offset_minutes is None else tz_offset_minutes
        return await service.get_daily_activity(user_id, start, end, tz)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Activity fetch failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/users/{user_id}/burnout")
async def user_burnout(
    user_id: str, tz_offset_minutes: int | None = None, data_file: str | None = None
):
    """Current streak and burnout level."""
    try:
        service, config = _get_service(data_file)
        tz = config.tz_offset_minutes if tz_offset_minutes is None else tz_offset_minutes
        return await service.get_burnout_stats(user_id, tz)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Burnout stats failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/decks/{deck_id}/forecast")
async def deck_forecast(
    deck_id: str, exam_date: int | None = None, data_file: str | None = None
):
    """Predicted date the deck is fully learned."""
    try:
        service, _ = _get_service(data_file)
        return await service.get_readiness_forecast(deck_id, exam_date)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Forecast failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/decks/{deck_id}/weak-topics")
async def deck_weak_topics(deck_id: str, data_file: str | None = None):
    try:
        service, _ = _get_service(data_file)
        return await service.get_weak_topics(deck_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Weak topics failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/decks/{deck_id}/stats")
async def deck_stats(
    deck_id: str, tz_offset_minutes: int | None = None, data_file: str | None = None
):
    try:
        service, config = _get_service(data_file)
        tz = config.tz_offset_minutes if tz_offset_minutes is None else tz_offset_minutes
        return await service.get_deck_stats(deck_id, tz)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Deck stats failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.get("/decks/{deck_id}/performance")
async def deck_performance(deck_id: str, data_file: str | None = None):
    """Quiz score percentages for a deck, oldest first."""
    try:
        service, _ = _get_service(data_file)
        return await service.get_deck_performance(deck_id)
    except FileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Deck performance failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
