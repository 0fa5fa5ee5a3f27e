"""Tests for derived progress metrics."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from helpers import TODAY, days_ago, meal, workout
from fitmetrics.tracking.aggregate import totals_by_day
from fitmetrics.tracking.metrics import (
    DEFAULT_GOAL_PROGRESS,
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
from fitmetrics.tracking.models import DailyNutritionTotals, Profile, WeightSample


class TestWeeklyConsistency:
    """Tests for the Sunday-Saturday consistency percentage."""

    def test_every_day_of_week(self) -> None:
        sessions = [workout(date(2024, 5, 12) + timedelta(days=n)) for n in range(7)]
        assert weekly_consistency(sessions, TODAY) == 100

    def test_three_days(self) -> None:
        sessions = [
            workout(date(2024, 5, 12)),
            workout(date(2024, 5, 13)),
            workout(date(2024, 5, 15)),
        ]
        assert weekly_consistency(sessions, TODAY) == 43  # 3/7 = 42.86

    def test_two_sessions_same_day_count_once(self) -> None:
        sessions = [workout(TODAY), workout(TODAY)]
        assert weekly_consistency(sessions, TODAY) == 14

    def test_previous_week_ignored(self) -> None:
        assert weekly_consistency([workout(date(2024, 5, 11))], TODAY) == 0

    def test_empty(self) -> None:
        assert weekly_consistency([], TODAY) == 0


class TestAverages:
    def test_missing_duration_counts_as_zero(self) -> None:
        sessions = [workout(TODAY, 30), workout(TODAY, None), workout(TODAY, 45)]
        assert average_workout_duration(sessions) == 25

    def test_duration_rounds_half_up(self) -> None:
        assert average_workout_duration([workout(TODAY, 30), workout(TODAY, 45)]) == 38

    def test_duration_empty(self) -> None:
        assert average_workout_duration([]) == 0

    def test_total_minutes(self) -> None:
        sessions = [workout(TODAY, 30), workout(TODAY, None), workout(TODAY, 45)]
        assert total_workout_minutes(sessions) == 75

    def test_average_daily_calories_over_logged_days(self) -> None:
        entries = [
            meal(TODAY, calories=1200),
            meal(TODAY, calories=800),
            meal(days_ago(5), calories=1500),
        ]
        assert average_daily_calories(totals_by_day(entries)) == 1750

    def test_average_daily_calories_empty(self) -> None:
        assert average_daily_calories({}) == 0


class TestMacroDistribution:
    def test_shares_by_grams(self) -> None:
        totals = {TODAY: DailyNutritionTotals(2000, 150, 200, 60)}

        share = macro_distribution(totals)

        # 150 / 410, 200 / 410, 60 / 410
        assert share.as_list() == [37, 49, 15]

    def test_default_split_without_grams(self) -> None:
        assert macro_distribution({}).as_list() == [33, 34, 33]
        zero = {TODAY: DailyNutritionTotals(100, 0, 0, 0)}
        assert macro_distribution(zero).as_list() == [33, 34, 33]

    def test_rounded_shares_near_100(self) -> None:
        totals = {TODAY: DailyNutritionTotals(0, 1, 1, 1)}
        assert sum(macro_distribution(totals).as_list()) in (99, 100, 101)


class TestWorkoutStreak:
    """Tests for the consecutive-day streak."""

    def test_gap_ends_streak(self) -> None:
        sessions = [workout(TODAY), workout(days_ago(1)), workout(days_ago(3))]
        assert workout_streak(sessions, TODAY) == 2

    def test_streak_may_start_yesterday(self) -> None:
        sessions = [workout(days_ago(1)), workout(days_ago(2))]
        assert workout_streak(sessions, TODAY) == 2

    def test_stale_history_is_zero(self) -> None:
        assert workout_streak([workout(days_ago(2))], TODAY) == 0

    def test_same_day_counted_once(self) -> None:
        sessions = [workout(TODAY), workout(TODAY), workout(days_ago(1))]
        assert workout_streak(sessions, TODAY) == 2

    def test_future_workouts_ignored(self) -> None:
        sessions = [workout(TODAY + timedelta(days=1)), workout(TODAY)]
        assert workout_streak(sessions, TODAY) == 1

    def test_order_does_not_matter(self) -> None:
        sessions = [workout(days_ago(2)), workout(TODAY), workout(days_ago(1))]
        assert workout_streak(sessions, TODAY) == 3

    def test_empty(self) -> None:
        assert workout_streak([], TODAY) == 0


class TestWeightChange:
    def test_earliest_to_latest(self, weight_history) -> None:
        change = weight_change(weight_history)

        assert change.start_weight == 80.0
        assert change.current_weight == 79.0
        assert change.change == pytest.approx(-1.0)
        assert change.percent_change == pytest.approx(-1.25)

    def test_no_weights(self) -> None:
        assert weight_change([WeightSample(TODAY, None)]) is None


class TestGoalProgress:
    """Tests for per-goal progress percentages."""

    def test_fat_loss_halfway(self) -> None:
        weights = [WeightSample(TODAY, 95.0), WeightSample(days_ago(20), 100.0)]

        progress = goal_progress("fat_loss", weights, [])

        assert progress.percent == pytest.approx(50.0)
        assert progress.label == "Weight Loss"

    def test_fat_loss_weight_gain_clamps_to_zero(self) -> None:
        weights = [WeightSample(days_ago(20), 80.0), WeightSample(TODAY, 82.0)]
        assert goal_progress("fat_loss", weights, []).percent == 0.0

    def test_fat_loss_beyond_target_clamps_to_100(self) -> None:
        weights = [WeightSample(days_ago(20), 100.0), WeightSample(TODAY, 85.0)]
        assert goal_progress("fat_loss", weights, []).percent == 100.0

    def test_muscle_gain_counts_workouts(self) -> None:
        sessions = [workout(days_ago(n)) for n in range(8)]

        progress = goal_progress("muscle_gain", [], sessions)

        assert progress.percent == pytest.approx(50.0)
        assert progress.label == "Workout Frequency"

    def test_muscle_gain_caps_at_100(self) -> None:
        sessions = [workout(days_ago(n)) for n in range(20)]
        assert goal_progress("muscle_gain", [], sessions).percent == 100.0

    def test_maintenance_one_percent_drift(self) -> None:
        weights = [WeightSample(days_ago(20), 80.0), WeightSample(TODAY, 80.8)]

        progress = goal_progress("maintenance", weights, [])

        assert progress.percent == pytest.approx(50.0)
        assert progress.label == "Weight Stability"

    def test_maintenance_drift_beyond_tolerance(self) -> None:
        weights = [WeightSample(days_ago(20), 80.0), WeightSample(TODAY, 78.0)]
        assert goal_progress("maintenance", weights, []).percent == 0.0

    @pytest.mark.parametrize("goal", ["fat_loss", "maintenance"])
    def test_no_weight_data_falls_back(self, goal: str) -> None:
        progress = goal_progress(goal, [WeightSample(TODAY, None)], [])

        assert progress.percent == DEFAULT_GOAL_PROGRESS
        assert progress.label == "Consistency"

    def test_unknown_goal_raises(self) -> None:
        with pytest.raises(ValueError):
            goal_progress("bulk", [], [])


class TestDailyGoalProgress:
    def test_percent_of_each_goal(self, muscle_gain_profile: Profile) -> None:
        totals = DailyNutritionTotals(calories=1528, protein=140, carbs=500, fat=0)

        progress = daily_goal_progress(totals, muscle_gain_profile)

        assert progress.calories == pytest.approx(50.0)
        assert progress.protein == pytest.approx(100.0)
        assert progress.carbs == 100.0  # capped
        assert progress.fat == 0.0

    def test_missing_goals_give_zero(self) -> None:
        profile = Profile("male", 70, 175, "sedentary", "maintenance")

        progress = daily_goal_progress(DailyNutritionTotals(500, 20, 20, 20), profile)

        assert progress.to_dict() == {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0}
