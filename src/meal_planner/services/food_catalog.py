"""Food catalog lookups with caching."""

from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.nutrition import NutritionFacts
from meal_planner.services.cache import Cache


class FoodCatalogRepository(Protocol):
    """Read-only access to catalog nutrition facts."""

    def get_food(self, food_item_id: int) -> NutritionFacts | None:
        """Return nutrition per 100 g-equivalent unit, if the item exists."""


@dataclass
class FoodCatalogService:
    """Catalog lookups cached in memory; the catalog does not change at runtime."""

    repository: FoodCatalogRepository
    cache: Cache
    food_ttl_seconds: int = 86400

    def get_food(self, food_item_id: int) -> NutritionFacts | None:
        cache_key = f"catalog:food:{food_item_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, NutritionFacts):
            return cached

        facts = self.repository.get_food(food_item_id)
        if facts is not None:
            self.cache.set(cache_key, facts, ttl_seconds=self.food_ttl_seconds)
        return facts
