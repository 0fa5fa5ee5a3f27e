"""Tests for time-window filtering."""

from __future__ import annotations

from datetime import timedelta

import pytest

from helpers import TODAY, days_ago, meal, workout
from fitmetrics.tracking.models import TimeRange, WeightSample
from fitmetrics.tracking.window import (
    filter_by_interval,
    filter_by_time_range,
    filter_by_window,
    parse_time_range,
)


class TestFilterByWindow:
    """Tests for the inclusive day window."""

    def test_boundary_day_is_inside(self) -> None:
        records = [workout(days_ago(7)), workout(days_ago(8))]

        selected = filter_by_window(records, 7, TODAY)

        assert [r.date for r in selected] == [days_ago(7)]

    def test_today_is_inside(self) -> None:
        assert len(filter_by_window([workout(TODAY)], 7, TODAY)) == 1

    def test_future_records_excluded(self) -> None:
        records = [workout(TODAY + timedelta(days=1))]
        assert filter_by_window(records, 30, TODAY) == []

    def test_preserves_input_order(self) -> None:
        records = [meal(days_ago(1)), meal(days_ago(5)), meal(days_ago(3))]

        selected = filter_by_window(records, 7, TODAY)

        assert [r.date for r in selected] == [days_ago(1), days_ago(5), days_ago(3)]

    def test_empty_input(self) -> None:
        assert filter_by_window([], 7, TODAY) == []

    def test_zero_days_keeps_only_today(self) -> None:
        records = [workout(TODAY), workout(days_ago(1))]
        assert [r.date for r in filter_by_window(records, 0, TODAY)] == [TODAY]

    def test_accepts_generators(self) -> None:
        samples = (WeightSample(days_ago(n), 80.0) for n in range(10))
        assert len(filter_by_window(samples, 7, TODAY)) == 8


class TestFilterByInterval:
    def test_inclusive_on_both_ends(self) -> None:
        records = [workout(days_ago(n)) for n in range(6)]

        selected = filter_by_interval(records, days_ago(4), days_ago(2))

        assert [r.date for r in selected] == [days_ago(2), days_ago(3), days_ago(4)]

    def test_accepts_iso_strings(self) -> None:
        selected = filter_by_interval([workout(TODAY)], "2024-05-01", "2024-05-31")
        assert len(selected) == 1


class TestTimeRangeSelector:
    def test_parse(self) -> None:
        assert parse_time_range("30days") is TimeRange.LAST_30_DAYS
        assert parse_time_range(TimeRange.LAST_7_DAYS) is TimeRange.LAST_7_DAYS

    def test_unknown_selector_raises(self) -> None:
        with pytest.raises(ValueError, match="time_range"):
            parse_time_range("14days")

    @pytest.mark.parametrize(
        "selector, expected", [("7days", 8), ("30days", 31), ("90days", 40)]
    )
    def test_filter_by_time_range(self, selector: str, expected: int) -> None:
        records = [workout(days_ago(n)) for n in range(40)]
        assert len(filter_by_time_range(records, selector, TODAY)) == expected
