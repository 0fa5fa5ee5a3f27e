"""Grouping and summing of workout and nutrition logs.

Buckets are only created for keys that appear in the data, except the
day-of-week histogram which always has all seven days.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from fitmetrics.tracking.models import (
    DailyNutritionTotals,
    DateLike,
    MealType,
    NutritionEntry,
    WorkoutSession,
    as_date,
)

logger = logging.getLogger(__name__)

DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

DEFAULT_WORKOUT_TYPE = "other"


def day_of_week_index(day: date) -> int:
    """Sunday-based weekday index (Sunday=0 ... Saturday=6)."""
    # date.weekday() is Monday=0 ... Sunday=6
    return (day.weekday() + 1) % 7


def totals_by_day(entries: Iterable[NutritionEntry]) -> dict[date, DailyNutritionTotals]:
    """Sum calories and macros per calendar day.

    Keys appear in order of first occurrence.
    """
    by_day: dict[date, DailyNutritionTotals] = {}
    for entry in entries:
        by_day.setdefault(entry.date, DailyNutritionTotals()).add(entry)
    return by_day


def daily_totals(entries: Iterable[NutritionEntry], day: DateLike) -> DailyNutritionTotals:
    """Sum the entries logged on a single day."""
    target = as_date(day)
    totals = DailyNutritionTotals()
    for entry in entries:
        if entry.date == target:
            totals.add(entry)
    return totals


def workouts_by_day_of_week(workouts: Iterable[WorkoutSession]) -> list[int]:
    """Count workouts into seven buckets, Sunday first."""
    counts = [0] * 7
    for workout in workouts:
        counts[day_of_week_index(workout.date)] += 1
    return counts


def workouts_by_type(workouts: Iterable[WorkoutSession]) -> dict[str, int]:
    """Count workouts per workout-type tag, untagged ones under "other"."""
    counts: dict[str, int] = {}
    for workout in workouts:
        key = workout.workout_type or DEFAULT_WORKOUT_TYPE
        counts[key] = counts.get(key, 0) + 1
    logger.debug("Workout types: %s", counts)
    return counts


def entries_by_meal_type(
    entries: Iterable[NutritionEntry],
) -> dict[MealType, list[NutritionEntry]]:
    """Group entries by meal, keeping their input order within each meal."""
    grouped: dict[MealType, list[NutritionEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.meal_type, []).append(entry)
    return grouped


def nutrition_by_meal_type(
    entries: Iterable[NutritionEntry],
) -> dict[MealType, DailyNutritionTotals]:
    """Sum calories and macros per meal type."""
    totals: dict[MealType, DailyNutritionTotals] = {}
    for entry in entries:
        totals.setdefault(entry.meal_type, DailyNutritionTotals()).add(entry)
    return totals


def workout_type_label(key: str) -> str:
    """Display label for a workout-type key ("upper_body" -> "upper body")."""
    return key.replace("_", " ")
