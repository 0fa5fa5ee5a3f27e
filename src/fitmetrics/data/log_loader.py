"""Load exported tracking logs (CSV) and a profile (YAML) from a directory.

Expected layout::

    logs/
      profile.yaml    required
      weights.csv     date,weight
      workouts.csv    date,name,duration,muscle_groups,workout_type,notes
      nutrition.csv   date,meal_type,food_name,serving_size,serving_unit,
                      calories,protein,carbs,fat

``muscle_groups`` is a ``;``-separated list. Blank calorie or macro
cells count as 0. Missing CSV files are treated as empty logs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import yaml

from fitmetrics.tracking.models import (
    NutritionEntry,
    Profile,
    WeightSample,
    WorkoutSession,
    merge_weight_samples,
)

logger = logging.getLogger(__name__)

WEIGHT_COLUMNS = ["date", "weight"]
WORKOUT_COLUMNS = ["date", "name"]
NUTRITION_COLUMNS = ["date", "meal_type", "food_name", "calories", "protein", "carbs", "fat"]


@dataclass
class TrackingLogs:
    """Everything loaded from a log directory."""

    profile: Profile
    weights: list[WeightSample] = field(default_factory=list)
    workouts: list[WorkoutSession] = field(default_factory=list)
    nutrition: list[NutritionEntry] = field(default_factory=list)


def _optional(value: Any) -> Optional[Any]:
    """Map pandas missing values to None."""
    if value is None or pd.isna(value):
        return None
    return value


def _amount(value: Any) -> float:
    """Numeric nutrition cell; blank means nothing was logged."""
    value = _optional(value)
    return float(value) if value is not None else 0.0


def _require_columns(df: pd.DataFrame, required: list[str], filename: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"{filename} is missing required columns: {', '.join(missing)}")


class LogLoader:
    """Handles loading tracking logs from a directory."""

    REQUIRED_FILES = ["profile.yaml"]
    OPTIONAL_FILES = ["weights.csv", "workouts.csv", "nutrition.csv"]

    def __init__(self, log_dir: Path):
        """Initialize the loader.

        Args:
            log_dir: Directory containing profile.yaml and the CSV logs
        """
        self.log_dir = log_dir
        self._validate_path()

    def _validate_path(self) -> None:
        """Ensure required files exist."""
        for filename in self.REQUIRED_FILES:
            filepath = self.log_dir / filename
            if not filepath.exists():
                raise FileNotFoundError(
                    f"Required file '{filename}' not found in {self.log_dir}. "
                    f"Create it with gender, weight_kg, height_cm, activity_level "
                    f"and fitness_goal."
                )

    def load_all(self, use_actual_weight: bool = False) -> TrackingLogs:
        """Load the profile and all available logs."""
        logs = TrackingLogs(
            profile=self.load_profile(use_actual_weight),
            weights=self.load_weights(),
            workouts=self.load_workouts(),
            nutrition=self.load_nutrition(),
        )
        logger.debug(
            "Loaded %d weights, %d workouts, %d nutrition entries from %s",
            len(logs.weights), len(logs.workouts), len(logs.nutrition), self.log_dir,
        )
        return logs

    def load_profile(self, use_actual_weight: bool = False) -> Profile:
        """Load profile.yaml, computing goals if they are not stored.

        Returns:
            Profile with goals
        """
        with open(self.log_dir / "profile.yaml") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError("profile.yaml must contain a mapping")

        try:
            profile = Profile(**data)
        except TypeError as e:
            raise ValueError(f"Invalid profile.yaml: {e}") from e

        if not profile.has_goals:
            profile = profile.with_goals(use_actual_weight)
        return profile

    def load_weights(self) -> list[WeightSample]:
        """Load weights.csv, one sample per day (last row wins)."""
        df = self._read_csv("weights.csv", WEIGHT_COLUMNS)
        if df is None:
            return []

        samples = []
        for _, row in df.iterrows():
            weight = _optional(row["weight"])
            samples.append(
                WeightSample(
                    date=str(row["date"]),
                    weight=float(weight) if weight is not None else None,
                )
            )
        return merge_weight_samples(samples)

    def load_workouts(self) -> list[WorkoutSession]:
        """Load workouts.csv."""
        df = self._read_csv("workouts.csv", WORKOUT_COLUMNS)
        if df is None:
            return []

        workouts = []
        for _, row in df.iterrows():
            duration = _optional(row.get("duration"))
            groups = _optional(row.get("muscle_groups"))
            workouts.append(
                WorkoutSession(
                    date=str(row["date"]),
                    name=str(row["name"]),
                    duration_minutes=float(duration) if duration is not None else None,
                    muscle_groups=[
                        g.strip() for g in str(groups).split(";") if g.strip()
                    ] if groups is not None else [],
                    workout_type=_optional(row.get("workout_type")),
                    notes=_optional(row.get("notes")),
                )
            )
        return workouts

    def load_nutrition(self) -> list[NutritionEntry]:
        """Load nutrition.csv."""
        df = self._read_csv("nutrition.csv", NUTRITION_COLUMNS)
        if df is None:
            return []

        entries = []
        for index, row in df.iterrows():
            serving_size = _optional(row.get("serving_size"))
            serving_unit = _optional(row.get("serving_unit"))
            try:
                entries.append(
                    NutritionEntry(
                        date=str(row["date"]),
                        meal_type=str(row["meal_type"]),
                        food_name=str(row["food_name"]),
                        calories=_amount(row["calories"]),
                        protein=_amount(row["protein"]),
                        carbs=_amount(row["carbs"]),
                        fat=_amount(row["fat"]),
                        serving_size=float(serving_size) if serving_size is not None else 1.0,
                        serving_unit=str(serving_unit) if serving_unit is not None else "serving",
                    )
                )
            except ValueError as e:
                # +2 for the header line and 1-based numbering
                raise ValueError(f"nutrition.csv line {index + 2}: {e}") from e
        return entries

    def _read_csv(self, filename: str, required: list[str]) -> Optional[pd.DataFrame]:
        filepath = self.log_dir / filename
        if not filepath.exists():
            logger.debug("%s not found, treating as empty", filepath)
            return None

        df = pd.read_csv(filepath, dtype={"date": str})
        _require_columns(df, required, filename)
        return df


def load_logs(log_dir: Path, use_actual_weight: bool = False) -> TrackingLogs:
    """Convenience function to load a log directory.

    Args:
        log_dir: Directory with profile.yaml and CSV logs
        use_actual_weight: Base protein goals on the profile's weight

    Returns:
        TrackingLogs
    """
    loader = LogLoader(log_dir)
    return loader.load_all(use_actual_weight)
