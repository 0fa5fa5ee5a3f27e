"""Weight, workout and nutrition tracking metrics.

Key components:
- Data models for profiles and the three log types
- Time-window filtering at calendar-day granularity
- Grouping by day, weekday, workout type and meal type
- Derived metrics: consistency, streaks, macro shares, goal progress
"""

from __future__ import annotations

from fitmetrics.tracking.models import (
    DailyNutritionTotals,
    MealType,
    NutritionEntry,
    Profile,
    TimeRange,
    WeightSample,
    WorkoutSession,
)
from fitmetrics.tracking.window import filter_by_time_range, filter_by_window

__all__ = [
    "DailyNutritionTotals",
    "MealType",
    "NutritionEntry",
    "Profile",
    "TimeRange",
    "WeightSample",
    "WorkoutSession",
    "filter_by_time_range",
    "filter_by_window",
]
