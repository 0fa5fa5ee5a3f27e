"""Energy model for calorie and macro targets.

Calculates BMR, TDEE and macronutrient targets from a user's physical
profile and fitness goal (fat loss, maintenance, muscle gain).

Uses the Mifflin-St Jeor equation for BMR, with the classic
Harris-Benedict activity factors for TDEE.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Type, TypeVar, Union

from fitmetrics.numeric import round_half_up

logger = logging.getLogger(__name__)


class Gender(Enum):
    """Biological sex for BMR calculation."""
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level multipliers for TDEE calculation."""
    SEDENTARY = "sedentary"                  # Little or no exercise
    LIGHTLY_ACTIVE = "lightly_active"        # Light exercise 1-3 days/week
    MODERATELY_ACTIVE = "moderately_active"  # Moderate exercise 3-5 days/week
    VERY_ACTIVE = "very_active"              # Hard exercise 6-7 days/week
    EXTREMELY_ACTIVE = "extremely_active"    # Very hard exercise, physical job


class FitnessGoal(Enum):
    """Body composition goal."""
    FAT_LOSS = "fat_loss"
    MUSCLE_GAIN = "muscle_gain"
    MAINTENANCE = "maintenance"


DEFAULT_AGE = 30

# Protein targets are computed against this body weight unless the caller
# asks for the user's actual weight. Goals already stored for existing
# profiles were computed this way.
REFERENCE_WEIGHT_KG = 70.0

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

LBS_PER_KG = 2.20462
CM_PER_INCH = 2.54

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}


@dataclass(frozen=True)
class GoalParameters:
    """Per-goal macro split parameters."""

    protein_per_kg: float
    fat_percentage: float
    calorie_adjustment: int


GOAL_PARAMETERS = {
    FitnessGoal.FAT_LOSS: GoalParameters(2.2, 0.25, -500),     # Deficit, high protein
    FitnessGoal.MUSCLE_GAIN: GoalParameters(2.0, 0.25, 500),   # Surplus
    FitnessGoal.MAINTENANCE: GoalParameters(1.8, 0.30, 0),
}


E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], value: Union[E, str], field_name: str) -> E:
    """Coerce a string (case-insensitive) or enum member into ``enum_cls``.

    Raises:
        ValueError: If the value is not one of the enum's values.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        valid = tuple(member.value for member in enum_cls)
        raise ValueError(
            f"{field_name} must be one of {valid}, got '{value}'"
        ) from None


@dataclass
class MacroTargets:
    """Daily calorie and macronutrient targets (grams, except calories)."""

    calories: int
    protein: int
    carbs: int
    fat: int


@dataclass
class EnergyTargets:
    """Complete energy targets persisted onto a profile."""

    tdee: int
    calories: int
    protein: int
    carbs: int
    fat: int

    # Reference values
    bmr: float
    goal: str
    protein_reference_kg: float

    def to_dict(self) -> dict:
        """Convert to dict for JSON output."""
        return {
            "tdee": self.tdee,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "reference": {
                "bmr": round(self.bmr, 2),
                "goal": self.goal,
                "protein_reference_kg": self.protein_reference_kg,
            },
        }

    def summary(self) -> str:
        """Human-readable summary of targets."""
        lines = [
            f"Goal: {self.goal}",
            f"BMR: {self.bmr:.0f} kcal/day",
            f"TDEE: {self.tdee} kcal/day",
            f"Target: {self.calories} kcal/day ({self.calories - self.tdee:+d} from TDEE)",
            f"Protein: {self.protein}g/day",
            f"Carbs: {self.carbs}g/day",
            f"Fat: {self.fat}g/day",
        ]
        return "\n".join(lines)


def calculate_bmr(
    gender: Union[Gender, str],
    weight_kg: float,
    height_cm: float,
    age: int = DEFAULT_AGE,
) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        gender: Biological sex
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters
        age: Age in years

    Returns:
        BMR in calories per day
    """
    gender_enum = parse_enum(Gender, gender, "gender")

    if gender_enum == Gender.MALE:
        bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age) + 5
    else:
        bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age) - 161

    return bmr


def calculate_tdee(
    gender: Union[Gender, str],
    weight_kg: float,
    height_cm: float,
    activity_level: Union[ActivityLevel, str],
    age: int = DEFAULT_AGE,
) -> int:
    """Calculate Total Daily Energy Expenditure.

    Args:
        gender: Biological sex
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters
        activity_level: Activity level
        age: Age in years

    Returns:
        TDEE in calories per day, rounded to the nearest integer
    """
    activity_enum = parse_enum(ActivityLevel, activity_level, "activity_level")
    bmr = calculate_bmr(gender, weight_kg, height_cm, age)
    return round_half_up(bmr * ACTIVITY_MULTIPLIERS[activity_enum])


def calculate_macros(
    tdee: int,
    fitness_goal: Union[FitnessGoal, str],
    reference_weight_kg: float = REFERENCE_WEIGHT_KG,
) -> MacroTargets:
    """Calculate calorie and macro targets from TDEE and goal.

    Carbs fill whatever calories remain after protein and fat, and are
    not clamped: a very low TDEE can produce a negative carb target.

    Args:
        tdee: Total Daily Energy Expenditure (kcal/day)
        fitness_goal: "fat_loss", "muscle_gain" or "maintenance"
        reference_weight_kg: Body weight used for the protein target

    Returns:
        MacroTargets with calories in kcal and macros in grams
    """
    params = GOAL_PARAMETERS[parse_enum(FitnessGoal, fitness_goal, "fitness_goal")]

    adjusted_calories = tdee + params.calorie_adjustment

    protein_grams = round_half_up(reference_weight_kg * params.protein_per_kg)
    fat_grams = round_half_up(adjusted_calories * params.fat_percentage / KCAL_PER_GRAM_FAT)

    remaining = (
        adjusted_calories
        - protein_grams * KCAL_PER_GRAM_PROTEIN
        - fat_grams * KCAL_PER_GRAM_FAT
    )
    carb_grams = round_half_up(remaining / KCAL_PER_GRAM_CARBS)

    if carb_grams < 0:
        logger.debug(
            "Negative carb target (%dg) for %s kcal", carb_grams, adjusted_calories
        )

    return MacroTargets(
        calories=round_half_up(adjusted_calories),
        protein=protein_grams,
        carbs=carb_grams,
        fat=fat_grams,
    )


def compute_energy_targets(
    gender: Union[Gender, str],
    weight_kg: float,
    height_cm: float,
    activity_level: Union[ActivityLevel, str],
    fitness_goal: Union[FitnessGoal, str],
    age: Optional[int] = None,
    use_actual_weight: bool = False,
) -> EnergyTargets:
    """Calculate TDEE and macro targets for a profile.

    Called when a profile is created or one of its determining fields
    changes; the caller persists the result onto the profile.

    Args:
        gender: "male" or "female"
        weight_kg: Current weight in kilograms
        height_cm: Height in centimeters
        activity_level: "sedentary", "lightly_active", "moderately_active",
            "very_active" or "extremely_active"
        fitness_goal: "fat_loss", "muscle_gain" or "maintenance"
        age: Age in years, 30 when unknown
        use_actual_weight: Base protein on ``weight_kg`` instead of the
            fixed 70 kg reference

    Returns:
        EnergyTargets with tdee, calories, protein, carbs and fat
    """
    if age is None:
        age = DEFAULT_AGE

    goal_enum = parse_enum(FitnessGoal, fitness_goal, "fitness_goal")
    bmr = calculate_bmr(gender, weight_kg, height_cm, age)
    tdee = calculate_tdee(gender, weight_kg, height_cm, activity_level, age)

    reference_kg = weight_kg if use_actual_weight else REFERENCE_WEIGHT_KG
    macros = calculate_macros(tdee, goal_enum, reference_kg)

    logger.debug(
        "Energy targets: bmr=%.2f tdee=%d goal=%s protein_ref=%.1fkg",
        bmr, tdee, goal_enum.value, reference_kg,
    )

    return EnergyTargets(
        tdee=tdee,
        calories=macros.calories,
        protein=macros.protein,
        carbs=macros.carbs,
        fat=macros.fat,
        bmr=bmr,
        goal=goal_enum.value,
        protein_reference_kg=reference_kg,
    )


def weight_to_kg(weight: float, unit: str = "kg") -> float:
    """Convert a weight in ``unit`` ("kg" or "lbs") to kilograms."""
    unit = unit.lower()
    if unit == "kg":
        return weight
    if unit in ("lb", "lbs"):
        return weight / LBS_PER_KG
    raise ValueError(f"Unknown weight unit: {unit}")


def height_to_cm(height: float, unit: str = "cm") -> float:
    """Convert a height in ``unit`` ("cm" or "in") to centimeters."""
    unit = unit.lower()
    if unit == "cm":
        return height
    if unit in ("in", "inches"):
        return height * CM_PER_INCH
    raise ValueError(f"Unknown height unit: {unit}")
