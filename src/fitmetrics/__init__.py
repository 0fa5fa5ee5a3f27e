"""Fitness metrics computation engine.

Converts a physical profile into daily energy and macro targets, and
turns weight, workout and nutrition logs into dashboard analytics.
"""

from __future__ import annotations

from fitmetrics.analytics.composer import AnalyticsViewModel, compute_analytics
from fitmetrics.profiles.body_calc import EnergyTargets, compute_energy_targets
from fitmetrics.tracking.models import (
    MealType,
    NutritionEntry,
    Profile,
    TimeRange,
    WeightSample,
    WorkoutSession,
)

__version__ = "0.1.0"

__all__ = [
    "AnalyticsViewModel",
    "EnergyTargets",
    "MealType",
    "NutritionEntry",
    "Profile",
    "TimeRange",
    "WeightSample",
    "WorkoutSession",
    "compute_analytics",
    "compute_energy_targets",
]
