"""
Analytics aggregator for study events.

This is a pure computation module with no I/O. Timestamps are integer epoch
milliseconds; time-zone offsets are minutes east of UTC (UTC+2 -> 120).
"""

import math
from collections.abc import Iterable

from studyflow.domain import clock
from studyflow.domain.constants import DAY_IN_MS, MINUTE_IN_MS

__all__ = [
    "DAY_IN_MS",
    "get_local_day_start",
    "count_by_local_day",
    "calculate_streak_days",
    "compute_predicted_ready_date",
]


def get_local_day_start(timestamp_ms: int, tz_offset_minutes: int) -> int:
    """
    Epoch ms of local midnight for the day containing timestamp_ms.

    Two timestamps on the same local calendar day map to the same key, and
    applying this to its own output returns the output unchanged.
    """
    offset_ms = tz_offset_minutes * MINUTE_IN_MS
    local = timestamp_ms + offset_ms
    # Floor modulo keeps pre-epoch timestamps on the right day
    return local - local % DAY_IN_MS - offset_ms


def count_by_local_day(timestamps: Iterable[int], tz_offset_minutes: int) -> dict[int, int]:
    """
    Tally timestamps per local day bucket.

    Returns:
        Mapping of day start (epoch ms) -> number of timestamps on that day.
    """
    counts: dict[int, int] = {}
    for ts in timestamps:
        day_start = get_local_day_start(ts, tz_offset_minutes)
        counts[day_start] = counts.get(day_start, 0) + 1
    return counts


def calculate_streak_days(days: set[int] | frozenset[int], today: int) -> int:
    """
    Count consecutive days, ending at today, that are present in days.

    Args:
        days: Day bucket keys with at least one event.
        today: Bucket key of the current local day.

    Returns:
        0 if today itself is missing, otherwise the length of the unbroken run.
    """
    streak = 0
    cursor = today
    while cursor in days:
        streak += 1
        cursor -= DAY_IN_MS
    return streak


def compute_predicted_ready_date(
    cards_remaining: int,
    pace: float,
    now: int | None = None,
) -> int | None:
    """
    Linear forecast of when a backlog is cleared at a constant pace.

    Partial days round up to a whole day.

    Args:
        cards_remaining: Cards still to work through.
        pace: Cards cleared per day.
        now: Reference time as epoch ms.

    Returns:
        Epoch ms of the predicted ready date, or None when pace is not
        positive (zero, negative or NaN).
    """
    if not pace > 0:
        return None
    if now is None:
        now = clock.now_ms()
    days_needed = math.ceil(cards_remaining / pace)
    return now + days_needed * DAY_IN_MS
