"""Domain models for the meal planner."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:
    """Physiological parameters used to compute calorie targets."""

    weight_kg: float
    height_cm: float
    workouts_per_week: int = 0
    calorie_threshold_percent: int = 0
    meals_per_day: int = 3
