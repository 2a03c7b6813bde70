"""Calorie and macronutrient target calculations.

Daily needs use the Mifflin-St Jeor equation without the age term (profiles
carry no age), multiplied by an activity factor chosen from the number of
workouts per week and adjusted by the user's surplus/deficit percentage.

All values are rounded half up (``floor(x + 0.5)``) so that score and badge
boundaries match what users see in the app.
"""

import math

from meal_planner.domain.errors import InvalidArgument, InvalidProfile
from meal_planner.domain.models import UserProfile
from meal_planner.domain.nutrition import MacroTargets, MealTargets

# (minimum workouts per week, multiplier), highest band first
_ACTIVITY_BANDS = (
    (7, 1.725),
    (4, 1.55),
    (1, 1.375),
    (0, 1.2),
)

PROTEIN_RATIO = 0.30
FAT_RATIO = 0.25
CARBS_RATIO = 0.45

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_FAT = 9
KCAL_PER_G_CARBS = 4


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    if not math.isfinite(value):
        raise InvalidArgument(f"cannot round non-finite value {value}")
    return math.floor(value + 0.5)


def activity_multiplier(workouts_per_week: int) -> float:
    """Return the activity factor for a weekly workout count."""
    if workouts_per_week < 0:
        raise InvalidProfile("workouts_per_week must be >= 0")
    for minimum, multiplier in _ACTIVITY_BANDS:
        if workouts_per_week >= minimum:
            return multiplier
    raise InvalidProfile("workouts_per_week must be >= 0")


def daily_calories(
    weight_kg: float,
    height_cm: float,
    workouts_per_week: int,
    threshold_percent: float = 0,
) -> int:
    """Return the daily calorie target for the given body parameters."""
    if not math.isfinite(weight_kg) or weight_kg <= 0:
        raise InvalidProfile("weight_kg must be a finite positive number")
    if not math.isfinite(height_cm) or height_cm <= 0:
        raise InvalidProfile("height_cm must be a finite positive number")
    if not math.isfinite(threshold_percent):
        raise InvalidArgument("threshold_percent must be finite")
    base = 10 * weight_kg + 6.25 * height_cm + 5
    maintenance = base * activity_multiplier(workouts_per_week)
    target = maintenance * (1 + threshold_percent / 100)
    if not math.isfinite(target):
        raise InvalidProfile("profile values produce a non-finite calorie target")
    return round_half_up(target)


def calories_per_meal(daily_calories: float, meals_per_day: int) -> int:
    """Split a daily target evenly across meals."""
    if meals_per_day <= 0:
        raise InvalidArgument("meals_per_day must be positive")
    if not math.isfinite(daily_calories):
        raise InvalidArgument("daily_calories must be finite")
    return round_half_up(daily_calories / meals_per_day)


def macros_for_calories(calories: float) -> MacroTargets:
    """Return protein/fat/carbs grams for a calorie value (30/25/45 split)."""
    if not math.isfinite(calories) or calories < 0:
        raise InvalidArgument("calories must be finite and >= 0")
    return MacroTargets(
        protein_g=round_half_up(calories * PROTEIN_RATIO / KCAL_PER_G_PROTEIN),
        fat_g=round_half_up(calories * FAT_RATIO / KCAL_PER_G_FAT),
        carbs_g=round_half_up(calories * CARBS_RATIO / KCAL_PER_G_CARBS),
    )


def targets_for_profile(profile: UserProfile) -> MealTargets:
    """Compute the full daily and per-meal target bundle for a profile."""
    daily = daily_calories(
        profile.weight_kg,
        profile.height_cm,
        profile.workouts_per_week,
        profile.calorie_threshold_percent,
    )
    return targets_for_daily_calories(daily, profile.meals_per_day)


def targets_for_daily_calories(daily: int, meals_per_day: int) -> MealTargets:
    """Build a target bundle from an already known daily calorie value."""
    per_meal = calories_per_meal(daily, meals_per_day)
    return MealTargets(
        daily_calories=daily,
        calories_per_meal=per_meal,
        daily_macros=macros_for_calories(daily),
        meal_macros=macros_for_calories(per_meal),
    )
