# Application Stats Package
from .analytics import (
    DAY_IN_MS,
    calculate_streak_days,
    compute_predicted_ready_date,
    count_by_local_day,
    get_local_day_start,
)

__all__ = [
    "DAY_IN_MS",
    "get_local_day_start",
    "count_by_local_day",
    "calculate_streak_days",
    "compute_predicted_ready_date",
]
