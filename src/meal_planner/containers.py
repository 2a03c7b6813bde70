"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from meal_planner.adapters.supabase_food_catalog_repository import (
    SupabaseFoodCatalogRepository,
)
from meal_planner.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_planner.adapters.supabase_nutrition_log_repository import (
    SupabaseNutritionLogRepository,
)
from meal_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from meal_planner.config import Settings
from meal_planner.services.cache import InMemoryCache
from meal_planner.services.food_catalog import FoodCatalogService
from meal_planner.services.meals import MealService
from meal_planner.services.nutrition_log import NutritionLogService
from meal_planner.services.profiles import ProfileService
from meal_planner.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    nutrition_log_service: NutritionLogService
    food_catalog_service: FoodCatalogService
    meal_service: MealService
    stats_service: StatsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    nutrition_log_service = NutritionLogService(
        SupabaseNutritionLogRepository(supabase_client)
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        nutrition_log_service=nutrition_log_service,
        default_daily_calories=resolved_settings.default_daily_calories,
        default_meals_per_day=resolved_settings.default_meals_per_day,
    )
    food_catalog_service = FoodCatalogService(
        repository=SupabaseFoodCatalogRepository(supabase_client),
        cache=InMemoryCache(),
        food_ttl_seconds=resolved_settings.food_cache_ttl_seconds,
    )
    meal_service = MealService(
        repository=meal_repository,
        food_catalog=food_catalog_service,
        profile_service=profile_service,
        nutrition_log_service=nutrition_log_service,
    )
    stats_service = StatsService(
        meal_feed=meal_repository, profile_service=profile_service
    )
    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        nutrition_log_service=nutrition_log_service,
        food_catalog_service=food_catalog_service,
        meal_service=meal_service,
        stats_service=stats_service,
    )
