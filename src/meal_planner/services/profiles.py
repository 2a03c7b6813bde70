"""User profile service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from meal_planner.domain.errors import ProfileNotFound
from meal_planner.domain.models import UserProfile
from meal_planner.domain.nutrition import MealTargets
from meal_planner.services.nutrition_log import NutritionLogService
from meal_planner.services.targets import (
    targets_for_daily_calories,
    targets_for_profile,
)

DEFAULT_DAILY_CALORIES = 2200
DEFAULT_MEALS_PER_DAY = 3

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile if set."""

    def save_profile(self, user_id: UUID, profile: UserProfile) -> None:
        """Create or replace the user's profile."""


@dataclass
class ProfileService:
    """Service for user profiles and the targets derived from them."""

    repository: ProfileRepository
    nutrition_log_service: NutritionLogService
    default_daily_calories: int = DEFAULT_DAILY_CALORIES
    default_meals_per_day: int = DEFAULT_MEALS_PER_DAY

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return the user's profile or raise when it is missing."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFound(user_id)
        return profile

    def get_targets(self, user_id: UUID) -> MealTargets:
        """Return targets from the profile, or the default targets if unset."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            _logger.info("No profile for user_id=%s, using default targets", user_id)
            return targets_for_daily_calories(
                self.default_daily_calories, self.default_meals_per_day
            )
        return targets_for_profile(profile)

    def update_profile(
        self, user_id: UUID, profile: UserProfile, today: date | None = None
    ) -> MealTargets:
        """Persist a profile and refresh today's log target.

        Targets are computed before saving so an invalid profile is never
        stored.
        """
        targets = targets_for_profile(profile)
        self.repository.save_profile(user_id, profile)
        day = today or datetime.now(tz=UTC).date()
        self.nutrition_log_service.refresh_target(
            user_id, day, targets.daily_calories
        )
        return targets
