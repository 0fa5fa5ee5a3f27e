"""Energy model: BMR, TDEE and macro targets."""

from fitmetrics.profiles.body_calc import (
    ActivityLevel,
    EnergyTargets,
    FitnessGoal,
    Gender,
    MacroTargets,
    calculate_bmr,
    calculate_macros,
    calculate_tdee,
    compute_energy_targets,
)

__all__ = [
    "ActivityLevel",
    "EnergyTargets",
    "FitnessGoal",
    "Gender",
    "MacroTargets",
    "calculate_bmr",
    "calculate_macros",
    "calculate_tdee",
    "compute_energy_targets",
]
