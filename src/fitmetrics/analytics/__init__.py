"""Analytics view models for dashboards."""

from fitmetrics.analytics.composer import AnalyticsViewModel, compute_analytics

__all__ = ["AnalyticsViewModel", "compute_analytics"]
