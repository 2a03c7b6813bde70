"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from uuid import UUID, uuid4

import pytest

from meal_planner.config import Settings
from meal_planner.containers import AppContainer
from meal_planner.domain.meals import MealIngredient, MealRecord
from meal_planner.domain.models import UserProfile
from meal_planner.domain.nutrition import NutritionFacts
from meal_planner.domain.stats import NutritionLogEntry
from meal_planner.services.cache import InMemoryCache
from meal_planner.services.food_catalog import (
    FoodCatalogRepository,
    FoodCatalogService,
)
from meal_planner.services.meals import MealRepository, MealService
from meal_planner.services.nutrition_log import NutritionLogService, NutritionLogStore
from meal_planner.services.profiles import ProfileRepository, ProfileService
from meal_planner.services.stats import StatsService

RICE_ID = 1
CHICKEN_ID = 2
BROCCOLI_ID = 3
SALMON_ID = 4


def make_meal(
    calories: float,
    completed_at: tuple[datetime, ...] = (),
    protein_g: float = 0,
    fat_g: float = 0,
    carbs_g: float = 0,
    name: str = "meal",
) -> MealRecord:
    return MealRecord(
        id=uuid4(),
        name=name,
        nutrition=NutritionFacts(
            calories=calories, protein_g=protein_g, fat_g=fat_g, carbs_g=carbs_g
        ),
        completed_at=completed_at,
    )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, user_id: UUID, profile: UserProfile) -> None:
        self.profiles[user_id] = profile


@dataclass
class InMemoryNutritionLogStore(NutritionLogStore):
    """In-memory nutrition log store for tests."""

    entries: dict[tuple[UUID, date], NutritionLogEntry] = field(default_factory=dict)

    def get_entry(self, user_id: UUID, day: date) -> NutritionLogEntry | None:
        return self.entries.get((user_id, day))

    def list_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[NutritionLogEntry]:
        return sorted(
            (
                entry
                for (owner, day), entry in self.entries.items()
                if owner == user_id and start <= day <= end
            ),
            key=lambda entry: entry.day,
        )

    def upsert_today(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        totals: NutritionFacts,
        target_calories: int,
        meals_completed_delta: int,
    ) -> NutritionLogEntry:
        current = self.entries.get((user_id, day)) or NutritionLogEntry(
            user_id=user_id,
            day=day,
            total_calories=0,
            total_protein_g=0,
            total_fat_g=0,
            total_carbs_g=0,
            target_calories=target_calories,
            meals_completed=0,
        )
        entry = replace(
            current,
            total_calories=current.total_calories + totals.calories,
            total_protein_g=current.total_protein_g + totals.protein_g,
            total_fat_g=current.total_fat_g + totals.fat_g,
            total_carbs_g=current.total_carbs_g + totals.carbs_g,
            target_calories=target_calories,
            meals_completed=current.meals_completed + meals_completed_delta,
        )
        self.entries[(user_id, day)] = entry
        return entry


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealRecord] = field(default_factory=dict)
    owners: dict[UUID, UUID] = field(default_factory=dict)

    def list_meals(self, user_id: UUID) -> list[MealRecord]:
        return [
            meal
            for meal_id, meal in self.meals.items()
            if self.owners[meal_id] == user_id
        ]

    def get_meal(self, user_id: UUID, meal_id: UUID) -> MealRecord | None:
        if self.owners.get(meal_id) != user_id:
            return None
        return self.meals.get(meal_id)

    def create_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        nutrition: NutritionFacts,
        ingredients: list[MealIngredient],
        completed_at: datetime | None,
    ) -> MealRecord:
        meal = MealRecord(
            id=uuid4(),
            name=name,
            nutrition=nutrition,
            ingredients=tuple(ingredients),
            completed_at=(completed_at,) if completed_at else (),
        )
        self.add(user_id, meal)
        return meal

    def add_completion(
        self, user_id: UUID, meal_id: UUID, completed_at: datetime
    ) -> MealRecord:
        if self.owners.get(meal_id) != user_id:
            raise RuntimeError(f"Meal {meal_id} not found")
        meal = self.meals[meal_id]
        updated = replace(meal, completed_at=(*meal.completed_at, completed_at))
        self.meals[meal_id] = updated
        return updated

    def add(self, user_id: UUID, meal: MealRecord) -> None:
        self.meals[meal.id] = meal
        self.owners[meal.id] = user_id


@dataclass
class InMemoryFoodCatalog(FoodCatalogRepository):
    """In-memory catalog with a few foods per 100 g."""

    foods: dict[int, NutritionFacts] = field(
        default_factory=lambda: {
            RICE_ID: NutritionFacts(calories=130, protein_g=2.7, fat_g=0.3, carbs_g=28),
            CHICKEN_ID: NutritionFacts(
                calories=165, protein_g=31, fat_g=3.6, carbs_g=0
            ),
            BROCCOLI_ID: NutritionFacts(
                calories=34, protein_g=2.8, fat_g=0.4, carbs_g=7
            ),
            SALMON_ID: NutritionFacts(calories=208, protein_g=20, fat_g=13, carbs_g=0),
        }
    )
    lookups: int = 0

    def get_food(self, food_item_id: int) -> NutritionFacts | None:
        self.lookups += 1
        return self.foods.get(food_item_id)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    meal_repository = InMemoryMealRepository()
    nutrition_log_service = NutritionLogService(InMemoryNutritionLogStore())
    profile_service = ProfileService(
        repository=InMemoryProfileRepository(),
        nutrition_log_service=nutrition_log_service,
        default_daily_calories=settings.default_daily_calories,
        default_meals_per_day=settings.default_meals_per_day,
    )
    food_catalog_service = FoodCatalogService(
        repository=InMemoryFoodCatalog(), cache=InMemoryCache()
    )
    meal_service = MealService(
        repository=meal_repository,
        food_catalog=food_catalog_service,
        profile_service=profile_service,
        nutrition_log_service=nutrition_log_service,
    )
    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        nutrition_log_service=nutrition_log_service,
        food_catalog_service=food_catalog_service,
        meal_service=meal_service,
        stats_service=StatsService(
            meal_feed=meal_repository, profile_service=profile_service
        ),
    )
