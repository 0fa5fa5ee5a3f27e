"""Derived progress metrics: consistency, streaks, averages and goal progress.

Every function here is total: empty inputs produce the documented
default (usually 0) and divisions by zero are guarded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence, Union

from fitmetrics.numeric import clamp_percent, round_half_up
from fitmetrics.profiles.body_calc import FitnessGoal, parse_enum
from fitmetrics.tracking.aggregate import day_of_week_index
from fitmetrics.tracking.models import (
    DailyNutritionTotals,
    Profile,
    WeightSample,
    WorkoutSession,
    as_date,
)

logger = logging.getLogger(__name__)

# Muscle gain progress assumes 4 workouts/week, ~16 per month
MONTHLY_WORKOUT_TARGET = 16

# Fat loss progress assumes a target of losing 10% of the starting weight
FAT_LOSS_TARGET_FRACTION = 0.10

# Maintenance progress is full at 0% change and empty at +/-2%
MAINTENANCE_TOLERANCE_PERCENT = 2.0

DEFAULT_MACRO_SPLIT = (33, 34, 33)
DEFAULT_GOAL_PROGRESS = 50.0


@dataclass
class MacroShare:
    """Percent of total macro grams from protein, carbs and fat."""

    protein: int
    carbs: int
    fat: int

    def as_list(self) -> list[int]:
        return [self.protein, self.carbs, self.fat]


@dataclass
class GoalProgress:
    """Progress toward the profile's fitness goal."""

    percent: float  # 0-100
    label: str


@dataclass
class WeightChange:
    """Change between the earliest and latest weight in a series."""

    start_weight: float
    current_weight: float
    change: float
    percent_change: Optional[float]  # None when start weight is 0


@dataclass
class DailyGoalProgress:
    """Percent of each daily goal reached, capped at 100."""

    calories: float
    protein: float
    carbs: float
    fat: float

    def to_dict(self) -> dict:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


def _week_bounds(today: date) -> tuple[date, date]:
    """Sunday-Saturday week containing ``today``."""
    start = today - timedelta(days=day_of_week_index(today))
    return start, start + timedelta(days=6)


def _weighed(weights: Iterable[WeightSample]) -> list[WeightSample]:
    """Samples with a weight, oldest first."""
    return sorted((w for w in weights if w.weight is not None), key=lambda w: w.date)


def weekly_consistency(
    workouts: Sequence[WorkoutSession],
    today: Optional[date] = None,
) -> int:
    """Percent of days in the current calendar week with at least one workout.

    The week always runs Sunday through Saturday around ``today``,
    regardless of the window the workouts were filtered with.

    Returns:
        Rounded percentage, 0 when there are no workouts
    """
    if not workouts:
        return 0
    if today is None:
        today = date.today()

    week_start, week_end = _week_bounds(as_date(today))
    days_worked_out = {w.date for w in workouts if week_start <= w.date <= week_end}
    return round_half_up(len(days_worked_out) / 7 * 100)


def average_workout_duration(workouts: Sequence[WorkoutSession]) -> int:
    """Mean session length in minutes; missing durations count as 0."""
    if not workouts:
        return 0
    total = sum(w.duration_minutes or 0 for w in workouts)
    return round_half_up(total / len(workouts))


def total_workout_minutes(workouts: Iterable[WorkoutSession]) -> float:
    """Sum of all session durations, missing ones counting as 0."""
    return sum(w.duration_minutes or 0 for w in workouts)


def average_daily_calories(daily_totals: dict[date, DailyNutritionTotals]) -> int:
    """Mean calories over the days that have at least one entry."""
    if not daily_totals:
        return 0
    total = sum(day.calories for day in daily_totals.values())
    return round_half_up(total / len(daily_totals))


def macro_distribution(daily_totals: dict[date, DailyNutritionTotals]) -> MacroShare:
    """Share of protein, carb and fat grams across all tracked days.

    Shares are by grams, not by calories. With no macro grams at all the
    default 33/34/33 split is returned.
    """
    protein = sum(day.protein for day in daily_totals.values())
    carbs = sum(day.carbs for day in daily_totals.values())
    fat = sum(day.fat for day in daily_totals.values())
    total = protein + carbs + fat

    if total == 0:
        return MacroShare(*DEFAULT_MACRO_SPLIT)

    return MacroShare(
        protein=round_half_up(protein / total * 100),
        carbs=round_half_up(carbs / total * 100),
        fat=round_half_up(fat / total * 100),
    )


def workout_streak(
    workouts: Iterable[WorkoutSession],
    today: Optional[date] = None,
) -> int:
    """Number of consecutive workout days counting back from today.

    A streak may start yesterday (no workout yet today). Several
    workouts on one day count once; workouts dated after ``today`` are
    ignored.
    """
    if today is None:
        today = date.today()
    today = as_date(today)

    days = sorted({w.date for w in workouts if w.date <= today}, reverse=True)

    streak = 0
    last_day = today
    for day in days:
        if (last_day - day).days > 1:
            break
        streak += 1
        last_day = day
    return streak


def weight_change(weights: Iterable[WeightSample]) -> Optional[WeightChange]:
    """Change from the earliest to the latest recorded weight.

    Returns:
        WeightChange, or None when no sample has a weight
    """
    samples = _weighed(weights)
    if not samples:
        return None

    start = samples[0].weight
    current = samples[-1].weight
    change = current - start
    percent = change / start * 100 if start else None
    return WeightChange(
        start_weight=start,
        current_weight=current,
        change=change,
        percent_change=percent,
    )


def goal_progress(
    fitness_goal: Union[FitnessGoal, str],
    weights: Iterable[WeightSample],
    workouts: Sequence[WorkoutSession],
) -> GoalProgress:
    """Progress toward the fitness goal, as a percentage with a label.

    - fat_loss: share of a 10% loss from the earliest weight achieved.
    - muscle_gain: workouts logged against a target of 16.
    - maintenance: 100 at no change, falling to 0 at a 2% change.

    Fat loss and maintenance need a non-zero starting weight; without one
    the result is 50% "Consistency".
    """
    goal = parse_enum(FitnessGoal, fitness_goal, "fitness_goal")

    if goal == FitnessGoal.MUSCLE_GAIN:
        percent = len(workouts) / MONTHLY_WORKOUT_TARGET * 100
        return GoalProgress(clamp_percent(percent), "Workout Frequency")

    change = weight_change(weights)
    if change is None or not change.start_weight or not change.current_weight:
        logger.debug("No usable weight data for %s, using default progress", goal.value)
        return GoalProgress(DEFAULT_GOAL_PROGRESS, "Consistency")

    if goal == FitnessGoal.FAT_LOSS:
        start = change.start_weight
        target = start * (1 - FAT_LOSS_TARGET_FRACTION)
        lost = start - change.current_weight
        percent = lost / (start - target) * 100
        return GoalProgress(clamp_percent(percent), "Weight Loss")

    deviation = abs(change.percent_change)
    percent = (MAINTENANCE_TOLERANCE_PERCENT - deviation) / MAINTENANCE_TOLERANCE_PERCENT * 100
    return GoalProgress(clamp_percent(percent), "Weight Stability")


def _percent_of_goal(amount: float, goal: Optional[int]) -> float:
    if not goal or goal <= 0:
        return 0.0
    return min(100.0, amount / goal * 100)


def daily_goal_progress(totals: DailyNutritionTotals, profile: Profile) -> DailyGoalProgress:
    """Percent of each of the profile's daily goals met by ``totals``.

    Missing or non-positive goals give 0 rather than dividing by zero.
    """
    return DailyGoalProgress(
        calories=_percent_of_goal(totals.calories, profile.calories_goal),
        protein=_percent_of_goal(totals.protein, profile.protein_goal),
        carbs=_percent_of_goal(totals.carbs, profile.carbs_goal),
        fat=_percent_of_goal(totals.fat, profile.fat_goal),
    )
