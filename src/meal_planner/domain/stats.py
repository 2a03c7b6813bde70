"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class DailyTotals:
    """Daily total macros from completed meals."""

    day: date
    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    meal_count: int = 0


@dataclass(frozen=True)
class NutritionLogEntry:
    """Persisted daily snapshot of totals and the target in effect."""

    user_id: UUID
    day: date
    total_calories: float
    total_protein_g: float
    total_fat_g: float
    total_carbs_g: float
    target_calories: int
    meals_completed: int
