"""Data models for weight, workout and nutrition tracking."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from fitmetrics.profiles.body_calc import (
    DEFAULT_AGE,
    ActivityLevel,
    EnergyTargets,
    FitnessGoal,
    Gender,
    compute_energy_targets,
    parse_enum,
)

DateLike = Union[date, datetime, str]

VALID_WEIGHT_UNITS = ("kg", "lbs")
VALID_VOLUME_UNITS = ("ml", "oz")

# Fields that feed the energy model; changing any of them invalidates goals.
GOAL_DETERMINING_FIELDS = (
    "gender",
    "weight_kg",
    "height_cm",
    "activity_level",
    "fitness_goal",
    "age",
)


def as_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO string to a calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # Accept full ISO timestamps too; only the day matters
    return date.fromisoformat(text[:10])


class MealType(Enum):
    """Meal slot a nutrition entry was logged under."""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class TimeRange(Enum):
    """Time-range selectors offered by the analytics views."""
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"
    LAST_90_DAYS = "90days"

    @property
    def days(self) -> int:
        """Window length in days."""
        return int(self.value.replace("days", ""))


@dataclass
class Profile:
    """User profile with its computed energy goals."""

    gender: str  # 'male' or 'female'
    weight_kg: float
    height_cm: float
    activity_level: str
    fitness_goal: str
    age: int = DEFAULT_AGE
    preferred_weight_unit: str = "kg"
    preferred_volume_unit: str = "ml"

    # Computed goals
    tdee: Optional[int] = None
    calories_goal: Optional[int] = None
    protein_goal: Optional[int] = None
    carbs_goal: Optional[int] = None
    fat_goal: Optional[int] = None

    def __post_init__(self) -> None:
        self.gender = parse_enum(Gender, self.gender, "gender").value
        self.activity_level = parse_enum(
            ActivityLevel, self.activity_level, "activity_level"
        ).value
        self.fitness_goal = parse_enum(
            FitnessGoal, self.fitness_goal, "fitness_goal"
        ).value
        if self.age is None:
            self.age = DEFAULT_AGE
        if self.preferred_weight_unit not in VALID_WEIGHT_UNITS:
            raise ValueError(
                f"preferred_weight_unit must be one of {VALID_WEIGHT_UNITS}, "
                f"got '{self.preferred_weight_unit}'"
            )
        if self.preferred_volume_unit not in VALID_VOLUME_UNITS:
            raise ValueError(
                f"preferred_volume_unit must be one of {VALID_VOLUME_UNITS}, "
                f"got '{self.preferred_volume_unit}'"
            )

    @property
    def goal(self) -> FitnessGoal:
        return FitnessGoal(self.fitness_goal)

    @property
    def has_goals(self) -> bool:
        """True when all computed goals are present."""
        return None not in (
            self.tdee,
            self.calories_goal,
            self.protein_goal,
            self.carbs_goal,
            self.fat_goal,
        )

    def energy_targets(self, use_actual_weight: bool = False) -> EnergyTargets:
        """Run the energy model on this profile's attributes."""
        return compute_energy_targets(
            self.gender,
            self.weight_kg,
            self.height_cm,
            self.activity_level,
            self.fitness_goal,
            age=self.age,
            use_actual_weight=use_actual_weight,
        )

    def with_goals(self, use_actual_weight: bool = False) -> "Profile":
        """Return a copy of this profile with freshly computed goals."""
        targets = self.energy_targets(use_actual_weight)
        return replace(
            self,
            tdee=targets.tdee,
            calories_goal=targets.calories,
            protein_goal=targets.protein,
            carbs_goal=targets.carbs,
            fat_goal=targets.fat,
        )


def update_profile(
    profile: Profile,
    use_actual_weight: bool = False,
    **changes,
) -> Profile:
    """Apply profile edits, recomputing goals if a determining field changed.

    Args:
        profile: Existing profile
        use_actual_weight: Passed through to the energy model
        **changes: Field values to update

    Returns:
        Updated copy of the profile
    """
    updated = replace(profile, **changes)
    needs_recompute = not profile.has_goals or any(
        getattr(updated, name) != getattr(profile, name)
        for name in GOAL_DETERMINING_FIELDS
        if name in changes
    )
    if needs_recompute:
        updated = updated.with_goals(use_actual_weight)
    return updated


@dataclass
class WeightSample:
    """A body weight reading for one calendar day."""

    date: date
    weight: Optional[float]

    def __post_init__(self) -> None:
        self.date = as_date(self.date)


@dataclass
class WorkoutSession:
    """A logged workout."""

    date: date
    name: str
    duration_minutes: Optional[float] = None
    muscle_groups: list[str] = field(default_factory=list)
    workout_type: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        self.date = as_date(self.date)
        if any(not group or not str(group).strip() for group in self.muscle_groups):
            raise ValueError("muscle_groups must contain non-empty strings")


@dataclass
class NutritionEntry:
    """A single food logged against a meal."""

    date: date
    meal_type: MealType
    food_name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    serving_size: float = 1.0
    serving_unit: str = "serving"

    def __post_init__(self) -> None:
        self.date = as_date(self.date)
        self.meal_type = parse_enum(MealType, self.meal_type, "meal_type")
        for name in ("calories", "protein", "carbs", "fat"):
            # Also rejects NaN, which fails every comparison
            if not getattr(self, name) >= 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")


@dataclass
class DailyNutritionTotals:
    """Summed calories and macros for a group of nutrition entries."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def add(self, entry: NutritionEntry) -> None:
        """Accumulate an entry into the totals."""
        self.calories += entry.calories
        self.protein += entry.protein
        self.carbs += entry.carbs
        self.fat += entry.fat

    def to_dict(self) -> dict:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


def merge_weight_samples(samples: list[WeightSample]) -> list[WeightSample]:
    """Collapse samples to one per day, later samples overwriting earlier ones.

    Returns:
        Samples sorted by date
    """
    by_date: dict[date, WeightSample] = {}
    for sample in samples:
        by_date[sample.date] = sample
    return [by_date[day] for day in sorted(by_date)]
