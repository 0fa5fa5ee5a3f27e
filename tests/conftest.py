"""Pytest fixtures for fitmetrics tests."""

from __future__ import annotations

from datetime import date

import pytest

from fitmetrics.config.settings import Settings
from fitmetrics.tracking.models import Profile, WeightSample
from helpers import TODAY, days_ago


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Isolate tests from any ~/.fitmetrics/config.yaml on the machine."""
    settings = Settings()
    monkeypatch.setattr("fitmetrics.config.settings._settings", settings)
    return settings


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def muscle_gain_profile() -> Profile:
    """Male, 70 kg, 175 cm, moderately active, muscle gain, goals computed."""
    return Profile(
        gender="male",
        weight_kg=70,
        height_cm=175,
        activity_level="moderately_active",
        fitness_goal="muscle_gain",
    ).with_goals()


@pytest.fixture
def maintenance_profile() -> Profile:
    return Profile(
        gender="female",
        weight_kg=60,
        height_cm=165,
        activity_level="lightly_active",
        fitness_goal="maintenance",
        age=35,
    ).with_goals()


@pytest.fixture
def weight_history() -> list[WeightSample]:
    """Two weeks of weights, newest first, with one missing reading."""
    return [
        WeightSample(days_ago(0), 79.0),
        WeightSample(days_ago(3), None),
        WeightSample(days_ago(7), 79.6),
        WeightSample(days_ago(14), 80.0),
    ]
