"""Pydantic models for API request payloads."""

from datetime import date, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from meal_planner.domain.meals import MealIngredient, MealRecord
from meal_planner.domain.models import UserProfile
from meal_planner.domain.nutrition import NutritionFacts


class ProfilePayload(BaseModel):
    """User physiological parameters."""

    weight_kg: float
    height_cm: float
    workouts_per_week: int = 0
    calorie_threshold_percent: int = 0
    meals_per_day: int = 3

    def to_domain(self) -> UserProfile:
        return UserProfile(
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            workouts_per_week=self.workouts_per_week,
            calorie_threshold_percent=self.calorie_threshold_percent,
            meals_per_day=self.meals_per_day,
        )


class MacrosRequest(BaseModel):
    calories: float


class IngredientPayload(BaseModel):
    """Catalog food item reference; quantity counts 100 g-equivalent units."""

    food_item_id: int
    quantity: float = 1
    unit: str = "pieces"

    def to_domain(self) -> MealIngredient:
        return MealIngredient(
            food_item_id=self.food_item_id, quantity=self.quantity, unit=self.unit
        )


class MealPayload(BaseModel):
    """A meal with its per-completion nutrition and completion timestamps."""

    id: UUID = Field(default_factory=uuid4)
    name: str = ""
    calories: float
    protein_g: float = 0
    fat_g: float = 0
    carbs_g: float = 0
    ingredients: list[IngredientPayload] = Field(default_factory=list)
    completed_at: list[datetime] = Field(default_factory=list)

    def to_domain(self) -> MealRecord:
        return MealRecord(
            id=self.id,
            name=self.name,
            nutrition=NutritionFacts(
                calories=self.calories,
                protein_g=self.protein_g,
                fat_g=self.fat_g,
                carbs_g=self.carbs_g,
            ),
            ingredients=tuple(item.to_domain() for item in self.ingredients),
            completed_at=tuple(self.completed_at),
        )


class TotalsRequest(BaseModel):
    meals: list[MealPayload] = Field(default_factory=list)
    reference_date: date
    window_days: int = 7


class ScoreRequest(BaseModel):
    total_calories: float
    target_calories: float


class ReadinessRequest(BaseModel):
    accumulated_calories: float
    calories_per_meal_target: float


class MealDraftRequest(BaseModel):
    """Ingredients of a meal being assembled."""

    name: str = "Mon repas"
    ingredients: list[IngredientPayload]
    validated_at: datetime | None = None


class CompleteMealRequest(BaseModel):
    completed_at: datetime | None = None
