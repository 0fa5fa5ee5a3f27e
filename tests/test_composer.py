"""Tests for the analytics view model."""

from __future__ import annotations

import json

import pytest

from helpers import TODAY, days_ago, meal, workout
from fitmetrics.analytics.composer import build_weight_trend, compute_analytics
from fitmetrics.tracking.models import Profile, TimeRange, WeightSample


@pytest.fixture
def workouts():
    """One workout a day for the last ten days, alternating types."""
    return [
        workout(days_ago(n), workout_type="upper_body" if n % 2 == 0 else None)
        for n in range(10)
    ]


@pytest.fixture
def nutrition():
    entries = [
        meal(days_ago(n), calories=2000, protein=150, carbs=200, fat=60)
        for n in range(3)
    ]
    # Outside every window
    entries.append(meal(days_ago(120), calories=9999))
    return entries


class TestEmptyHistory:
    def test_defaults(self, maintenance_profile: Profile) -> None:
        view = compute_analytics([], [], [], "30days", maintenance_profile, today=TODAY)

        assert view.time_range is TimeRange.LAST_30_DAYS
        assert view.overview.weekly_consistency == 0
        assert view.overview.avg_workout_duration == 0
        assert view.overview.avg_daily_calories == 0
        assert view.overview.total_workouts == 0
        assert view.overview.window_days == 30
        assert [d.count for d in view.workout_frequency] == [0] * 7
        assert view.workout_types == []
        assert view.nutrition_series == []
        assert view.macro_distribution.as_list() == [33, 34, 33]
        assert view.streak == 0
        assert view.goal_progress.percent == 50.0
        assert view.goal_progress.label == "Consistency"
        assert view.weight_change is None
        assert not view.weight_trend.has_chart
        assert view.meal_breakdown == {}
        assert view.today_progress.calories == 0.0

    def test_unknown_range_raises(self, maintenance_profile: Profile) -> None:
        with pytest.raises(ValueError, match="time_range"):
            compute_analytics([], [], [], "14days", maintenance_profile, today=TODAY)


class TestComputeAnalytics:
    """End-to-end view computation over a populated history."""

    @pytest.fixture
    def view(self, weight_history, workouts, nutrition, muscle_gain_profile):
        return compute_analytics(
            weight_history,
            workouts,
            nutrition,
            "7days",
            muscle_gain_profile,
            today=TODAY,
        )

    def test_overview(self, view) -> None:
        assert view.overview.total_workouts == 8
        assert view.overview.avg_workout_duration == 45
        assert view.overview.avg_daily_calories == 2000
        # Sun 12th through Wed 15th
        assert view.overview.weekly_consistency == 57

    def test_streak_uses_full_history(self, view) -> None:
        assert view.streak == 10

    def test_workout_frequency(self, view) -> None:
        counts = {d.label: d.count for d in view.workout_frequency}

        assert [d.label for d in view.workout_frequency] == [
            "Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat",
        ]
        assert counts["Wed"] == 2
        assert sum(counts.values()) == view.overview.total_workouts

    def test_workout_types(self, view) -> None:
        types = {(c.key, c.label): c.count for c in view.workout_types}
        assert types == {("upper_body", "upper body"): 4, ("other", "other"): 4}

    def test_nutrition(self, view) -> None:
        assert [p.date for p in view.nutrition_series] == [days_ago(2), days_ago(1), TODAY]
        assert view.macro_distribution.as_list() == [37, 49, 15]

    def test_weight_trend(self, view) -> None:
        trend = view.weight_trend

        assert [p.weight for p in trend.points] == [79.6, 79.0]
        assert trend.has_chart
        assert trend.axis_min == pytest.approx(79.0 * 0.95)
        assert trend.axis_max == pytest.approx(79.6 * 1.05)

    def test_goal_progress_from_window(self, view) -> None:
        assert view.goal_progress.label == "Workout Frequency"
        assert view.goal_progress.percent == pytest.approx(50.0)

    def test_weight_change(self, view) -> None:
        assert view.weight_change.start_weight == 79.6
        assert view.weight_change.change == pytest.approx(-0.6)

    def test_today_progress(self, view) -> None:
        assert view.today_totals.calories == 2000
        assert view.today_progress.calories == pytest.approx(2000 / 3056 * 100)
        assert view.today_progress.protein == 100.0

    def test_total_minutes(self, view) -> None:
        assert view.total_workout_minutes == 8 * 45

    def test_to_dict_is_json_serializable(self, view) -> None:
        data = json.loads(json.dumps(view.to_dict()))

        assert data["time_range"] == "7days"
        assert data["as_of"] == "2024-05-15"
        assert data["streak"] == 10
        assert data["workout_frequency"][0] == {"name": "Sun", "count": 1}
        assert {"key": "other", "name": "other", "value": 4} in data["workout_types"]
        assert data["today"]["totals"]["calories"] == 2000
        assert data["weight_trend"]["has_chart"] is True


class TestWindowSelection:
    def test_wider_range_includes_more(self, weight_history, workouts, muscle_gain_profile):
        view = compute_analytics(
            weight_history, workouts, [], "30days", muscle_gain_profile, today=TODAY
        )

        assert view.overview.total_workouts == 10
        assert len(view.weight_trend.points) == 3

    def test_same_day_weights_overwrite(self) -> None:
        profile = Profile("male", 100, 180, "sedentary", "fat_loss").with_goals()
        weights = [
            WeightSample(days_ago(3), 100.0),
            WeightSample(days_ago(3), 80.0),  # corrected reading
            WeightSample(TODAY, 80.0),
        ]

        view = compute_analytics(weights, [], [], "7days", profile, today=TODAY)

        assert [(p.date, p.weight) for p in view.weight_trend.points] == [
            (days_ago(3), 80.0),
            (TODAY, 80.0),
        ]
        assert view.weight_change.start_weight == 80.0
        assert view.goal_progress.label == "Weight Loss"
        assert view.goal_progress.percent == 0.0

    def test_meal_breakdown_for_today(self, maintenance_profile: Profile) -> None:
        entries = [
            meal(TODAY, calories=350, meal_type="breakfast"),
            meal(TODAY, calories=700, meal_type="dinner"),
            meal(days_ago(1), calories=900, meal_type="dinner"),
        ]

        view = compute_analytics([], [], entries, "7days", maintenance_profile, today=TODAY)

        assert set(view.meal_breakdown) == {"breakfast", "dinner"}
        assert view.meal_breakdown["dinner"].calories == 700
        assert view.today_totals.calories == 1050


class TestBuildWeightTrend:
    def test_single_point_has_no_chart(self) -> None:
        trend = build_weight_trend([WeightSample(TODAY, 80.0)])

        assert len(trend.points) == 1
        assert not trend.has_chart

    def test_skips_missing_weights_and_sorts(self) -> None:
        trend = build_weight_trend(
            [
                WeightSample(TODAY, 80.0),
                WeightSample(days_ago(2), None),
                WeightSample(days_ago(4), 81.0),
            ]
        )
        assert [p.date for p in trend.points] == [days_ago(4), TODAY]
