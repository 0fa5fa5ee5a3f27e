"""Assemble analytics view models from raw tracking logs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Optional, Union

from fitmetrics.tracking.aggregate import (
    DAY_LABELS,
    daily_totals,
    nutrition_by_meal_type,
    totals_by_day,
    workout_type_label,
    workouts_by_day_of_week,
    workouts_by_type,
)
from fitmetrics.tracking.metrics import (
    DailyGoalProgress,
    GoalProgress,
    MacroShare,
    WeightChange,
    average_daily_calories,
    average_workout_duration,
    daily_goal_progress,
    goal_progress,
    macro_distribution,
    total_workout_minutes,
    weekly_consistency,
    weight_change,
    workout_streak,
)
from fitmetrics.tracking.models import (
    DailyNutritionTotals,
    NutritionEntry,
    Profile,
    TimeRange,
    WeightSample,
    WorkoutSession,
    as_date,
    merge_weight_samples,
)
from fitmetrics.tracking.window import filter_by_window, parse_time_range

logger = logging.getLogger(__name__)

# Padding applied around the weight series for chart axes
AXIS_LOWER_PADDING = 0.95
AXIS_UPPER_PADDING = 1.05


@dataclass
class OverviewSummary:
    """The four headline metrics."""

    weekly_consistency: int
    avg_workout_duration: int
    avg_daily_calories: int
    total_workouts: int
    window_days: int


@dataclass
class WeightPoint:
    date: date
    weight: float


@dataclass
class WeightTrend:
    """Chronological weight series with chart axis bounds."""

    points: list[WeightPoint] = field(default_factory=list)
    axis_min: Optional[float] = None
    axis_max: Optional[float] = None

    @property
    def has_chart(self) -> bool:
        """A trend line needs at least two points."""
        return len(self.points) >= 2


@dataclass
class DayCount:
    label: str
    count: int


@dataclass
class CategoryCount:
    key: str
    label: str
    count: int


@dataclass
class NutritionPoint:
    date: date
    totals: DailyNutritionTotals


@dataclass
class AnalyticsViewModel:
    """Everything the dashboard and analytics views render for a time range."""

    time_range: TimeRange
    today: date
    overview: OverviewSummary
    weight_trend: WeightTrend
    workout_frequency: list[DayCount]
    workout_types: list[CategoryCount]
    nutrition_series: list[NutritionPoint]
    macro_distribution: MacroShare
    streak: int
    goal_progress: GoalProgress
    weight_change: Optional[WeightChange]
    total_workout_minutes: float
    today_totals: DailyNutritionTotals
    today_progress: DailyGoalProgress
    meal_breakdown: dict[str, DailyNutritionTotals]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict."""
        change = None
        if self.weight_change is not None:
            change = {
                "start_weight": self.weight_change.start_weight,
                "current_weight": self.weight_change.current_weight,
                "change": round(self.weight_change.change, 2),
                "percent_change": (
                    round(self.weight_change.percent_change, 2)
                    if self.weight_change.percent_change is not None
                    else None
                ),
            }

        return {
            "time_range": self.time_range.value,
            "as_of": self.today.isoformat(),
            "overview": {
                "weekly_consistency": self.overview.weekly_consistency,
                "avg_workout_duration": self.overview.avg_workout_duration,
                "avg_daily_calories": self.overview.avg_daily_calories,
                "total_workouts": self.overview.total_workouts,
                "window_days": self.overview.window_days,
            },
            "weight_trend": {
                "points": [
                    {"date": p.date.isoformat(), "weight": p.weight}
                    for p in self.weight_trend.points
                ],
                "axis_min": self.weight_trend.axis_min,
                "axis_max": self.weight_trend.axis_max,
                "has_chart": self.weight_trend.has_chart,
            },
            "workout_frequency": [
                {"name": d.label, "count": d.count} for d in self.workout_frequency
            ],
            "workout_types": [
                {"key": c.key, "name": c.label, "value": c.count}
                for c in self.workout_types
            ],
            "nutrition_series": [
                {"date": p.date.isoformat(), **p.totals.to_dict()}
                for p in self.nutrition_series
            ],
            "macro_distribution": {
                "protein": self.macro_distribution.protein,
                "carbs": self.macro_distribution.carbs,
                "fat": self.macro_distribution.fat,
            },
            "streak": self.streak,
            "goal_progress": {
                "percent": round(self.goal_progress.percent, 1),
                "label": self.goal_progress.label,
            },
            "weight_change": change,
            "total_workout_minutes": self.total_workout_minutes,
            "today": {
                "date": self.today.isoformat(),
                "totals": self.today_totals.to_dict(),
                "progress": self.today_progress.to_dict(),
                "meals": {
                    meal: totals.to_dict() for meal, totals in self.meal_breakdown.items()
                },
            },
        }


def build_weight_trend(weights: Iterable[WeightSample]) -> WeightTrend:
    """Weight points with a value, oldest first, plus padded axis bounds."""
    points = [
        WeightPoint(w.date, w.weight)
        for w in sorted(weights, key=lambda w: w.date)
        if w.weight is not None
    ]
    if not points:
        return WeightTrend()

    values = [p.weight for p in points]
    return WeightTrend(
        points=points,
        axis_min=min(values) * AXIS_LOWER_PADDING,
        axis_max=max(values) * AXIS_UPPER_PADDING,
    )


def compute_analytics(
    weight_history: Iterable[WeightSample],
    workout_history: Iterable[WorkoutSession],
    nutrition_logs: Iterable[NutritionEntry],
    time_range: Union[TimeRange, str],
    profile: Profile,
    today: Optional[date] = None,
) -> AnalyticsViewModel:
    """Compute every analytics view for the selected time range.

    Args:
        weight_history: Weight samples, any order; a later sample for a
            day replaces an earlier one
        workout_history: Logged workouts
        nutrition_logs: Logged nutrition entries
        time_range: "7days", "30days" or "90days"
        profile: Profile supplying the fitness goal and daily goals
        today: Reference day, defaults to the current date

    Returns:
        AnalyticsViewModel for the window ending ``today``
    """
    selector = parse_time_range(time_range)
    today = as_date(today) if today is not None else date.today()

    workout_history = list(workout_history)
    nutrition_logs = list(nutrition_logs)
    # Same-day readings overwrite each other before windowing
    weights = filter_by_window(
        merge_weight_samples(weight_history), selector.days, today
    )
    workouts = filter_by_window(workout_history, selector.days, today)
    nutrition = filter_by_window(nutrition_logs, selector.days, today)

    by_day = totals_by_day(nutrition)

    overview = OverviewSummary(
        weekly_consistency=weekly_consistency(workouts, today),
        avg_workout_duration=average_workout_duration(workouts),
        avg_daily_calories=average_daily_calories(by_day),
        total_workouts=len(workouts),
        window_days=selector.days,
    )

    frequency = [
        DayCount(label, count)
        for label, count in zip(DAY_LABELS, workouts_by_day_of_week(workouts))
    ]
    types = [
        CategoryCount(key, workout_type_label(key), count)
        for key, count in workouts_by_type(workouts).items()
    ]
    series = [NutritionPoint(day, by_day[day]) for day in sorted(by_day)]

    todays_entries = [entry for entry in nutrition_logs if entry.date == today]
    today_totals = daily_totals(todays_entries, today)
    meals = {
        meal.value: totals
        for meal, totals in nutrition_by_meal_type(todays_entries).items()
    }

    logger.debug(
        "Analytics %s: %d weights, %d workouts, %d nutrition days",
        selector.value, len(weights), len(workouts), len(by_day),
    )

    return AnalyticsViewModel(
        time_range=selector,
        today=today,
        overview=overview,
        weight_trend=build_weight_trend(weights),
        workout_frequency=frequency,
        workout_types=types,
        nutrition_series=series,
        macro_distribution=macro_distribution(by_day),
        streak=workout_streak(workout_history, today),
        goal_progress=goal_progress(profile.fitness_goal, weights, workouts),
        weight_change=weight_change(weights),
        total_workout_minutes=total_workout_minutes(workouts),
        today_totals=today_totals,
        today_progress=daily_goal_progress(today_totals, profile),
        meal_breakdown=meals,
    )
