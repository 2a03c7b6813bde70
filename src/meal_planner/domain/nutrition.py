"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionFacts:
    """Calories and macronutrients for one portion or one meal."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float

    def scaled(self, factor: float) -> "NutritionFacts":
        """Return these facts multiplied by a portion factor."""
        return NutritionFacts(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            fat_g=self.fat_g * factor,
            carbs_g=self.carbs_g * factor,
        )

    def plus(self, other: "NutritionFacts") -> "NutritionFacts":
        return NutritionFacts(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            fat_g=self.fat_g + other.fat_g,
            carbs_g=self.carbs_g + other.carbs_g,
        )


EMPTY_NUTRITION = NutritionFacts(calories=0, protein_g=0, fat_g=0, carbs_g=0)


@dataclass(frozen=True)
class MacroTargets:
    """Target grams of each macronutrient for a calorie value."""

    protein_g: int
    fat_g: int
    carbs_g: int


@dataclass(frozen=True)
class MealTargets:
    """Daily and per-meal targets derived from a user profile."""

    daily_calories: int
    calories_per_meal: int
    daily_macros: MacroTargets
    meal_macros: MacroTargets
