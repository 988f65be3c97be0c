# Domain Review Package
from .models import QUALITY_BY_RATING, CardScheduleState, Rating, ScheduleResult

__all__ = ["Rating", "QUALITY_BY_RATING", "CardScheduleState", "ScheduleResult"]
