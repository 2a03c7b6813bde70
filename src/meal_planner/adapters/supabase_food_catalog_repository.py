"""Supabase repository for the food catalog."""

from dataclasses import dataclass

from supabase import Client

from meal_planner.domain.nutrition import NutritionFacts
from meal_planner.services.food_catalog import FoodCatalogRepository


@dataclass
class SupabaseFoodCatalogRepository(FoodCatalogRepository):
    """Supabase implementation for catalog lookups."""

    client: Client

    def get_food(self, food_item_id: int) -> NutritionFacts | None:
        """Return nutrition facts stored in ``food_items.nutrition``."""
        response = (
            self.client.table("food_items")
            .select("id, nutrition")
            .eq("id", food_item_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        nutrition = response.data[0].get("nutrition") or {}
        return NutritionFacts(
            calories=float(nutrition.get("calories") or 0.0),
            protein_g=float(nutrition.get("protein") or 0.0),
            fat_g=float(nutrition.get("fat") or 0.0),
            carbs_g=float(nutrition.get("carbs") or 0.0),
        )
