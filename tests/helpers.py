"""Record builders shared by the test modules."""

from __future__ import annotations

from datetime import date, timedelta

from fitmetrics.tracking.models import NutritionEntry, WorkoutSession

# A Wednesday; its Sunday-Saturday week is 2024-05-12 .. 2024-05-18
TODAY = date(2024, 5, 15)


def days_ago(n: int) -> date:
    """Date ``n`` days before TODAY."""
    return TODAY - timedelta(days=n)


def workout(day: date, duration=45, workout_type=None, name="Session") -> WorkoutSession:
    return WorkoutSession(
        date=day,
        name=name,
        duration_minutes=duration,
        muscle_groups=["chest"],
        workout_type=workout_type,
    )


def meal(
    day: date,
    calories=500.0,
    protein=30.0,
    carbs=50.0,
    fat=15.0,
    meal_type="lunch",
    food_name="Chicken and rice",
) -> NutritionEntry:
    return NutritionEntry(
        date=day,
        meal_type=meal_type,
        food_name=food_name,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
    )
