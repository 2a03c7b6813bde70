"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from meal_planner.services.profiles import DEFAULT_DAILY_CALORIES, DEFAULT_MEALS_PER_DAY

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    default_daily_calories: int = DEFAULT_DAILY_CALORIES
    default_meals_per_day: int = DEFAULT_MEALS_PER_DAY
    summary_window_days: int = 7
    max_window_days: int = 366
    food_cache_ttl_seconds: int = 86400

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
