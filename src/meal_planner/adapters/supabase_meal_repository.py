"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from meal_planner.domain.meals import MealIngredient, MealRecord
from meal_planner.domain.nutrition import NutritionFacts
from meal_planner.services.meals import MealRepository

_COLUMNS = "id, name, calories, protein, fat, carbs, ingredients, completed_at"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals.

    Completions are stored as a JSON array of ISO timestamps in
    ``meals.completed_at``.
    """

    client: Client

    def list_meals(self, user_id: UUID) -> list[MealRecord]:
        """Return all meals of a user."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("id", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_meal(self, user_id: UUID, meal_id: UUID) -> MealRecord | None:
        """Return one of the user's meals by id."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        nutrition: NutritionFacts,
        ingredients: list[MealIngredient],
        completed_at: datetime | None,
    ) -> MealRecord:
        """Insert a meal row and return it."""
        completions = [completed_at.isoformat()] if completed_at else []
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "calories": nutrition.calories,
                    "protein": nutrition.protein_g,
                    "fat": nutrition.fat_g,
                    "carbs": nutrition.carbs_g,
                    "ingredients": [
                        {
                            "foodItemId": ingredient.food_item_id,
                            "quantity": ingredient.quantity,
                            "unit": ingredient.unit,
                        }
                        for ingredient in ingredients
                    ],
                    "completed": bool(completions),
                    "completed_at": completions,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_row(response.data[0])

    def add_completion(
        self, user_id: UUID, meal_id: UUID, completed_at: datetime
    ) -> MealRecord:
        """Append a completion timestamp to the meal."""
        meal = self.get_meal(user_id, meal_id)
        if meal is None:
            raise RuntimeError(f"Meal {meal_id} not found")
        completions = [moment.isoformat() for moment in meal.completed_at]
        completions.append(completed_at.isoformat())
        response = (
            self.client.table("meals")
            .update({"completed": True, "completed_at": completions})
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal completions")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> MealRecord:
    return MealRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        nutrition=NutritionFacts(
            calories=float(row.get("calories") or 0.0),
            protein_g=float(row.get("protein") or 0.0),
            fat_g=float(row.get("fat") or 0.0),
            carbs_g=float(row.get("carbs") or 0.0),
        ),
        ingredients=tuple(
            MealIngredient(
                food_item_id=int(item["foodItemId"]),
                quantity=float(item.get("quantity", 1)),
                unit=str(item.get("unit", "pieces")),
            )
            for item in row.get("ingredients") or []
        ),
        completed_at=_parse_completions(row.get("completed_at")),
    )


def _parse_completions(raw: object) -> tuple[datetime, ...]:
    """Parse completions stored either as a list or a single timestamp."""
    if not raw:
        return ()
    values = raw if isinstance(raw, list) else [raw]
    return tuple(datetime.fromisoformat(str(value)) for value in values if value)
