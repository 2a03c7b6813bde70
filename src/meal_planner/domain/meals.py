"""Domain models for meals and their completions."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from meal_planner.domain.nutrition import NutritionFacts


@dataclass(frozen=True)
class MealIngredient:
    """Reference to a catalog food item with a quantity.

    One quantity unit is one 100 g-equivalent portion of the food item.
    """

    food_item_id: int
    quantity: float
    unit: str = "pieces"


@dataclass(frozen=True)
class MealRecord:
    """A meal with its nutrition totals and completion log.

    ``completed_at`` holds one timestamp per time the meal was eaten; an empty
    tuple means the meal was never completed.
    """

    id: UUID
    name: str
    nutrition: NutritionFacts
    ingredients: tuple[MealIngredient, ...] = ()
    completed_at: tuple[datetime, ...] = field(default=())

    @property
    def completed(self) -> bool:
        return len(self.completed_at) > 0
